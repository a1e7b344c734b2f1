"""Accumulation of theme.json settings schemas across versions."""

from __future__ import annotations

import copy
import logging
from typing import Any, Iterable, Mapping

from themelayers.versioning.manifest import global_settings
from themelayers.versioning.models import UpdateFolder

logger = logging.getLogger(__name__)


def _setting_id(entry: Any) -> str | None:
    # Only string ids take part in replacement; anything else is appended.
    if isinstance(entry, dict) and isinstance(entry.get("id"), str):
        return entry["id"]
    return None


def _fold_group(group: list[Any], definitions: list[Any]) -> None:
    positions = {
        _setting_id(entry): index
        for index, entry in enumerate(group)
        if _setting_id(entry) is not None
    }
    for definition in definitions:
        definition = copy.deepcopy(definition)
        setting_id = _setting_id(definition)
        if setting_id is not None and setting_id in positions:
            group[positions[setting_id]] = definition
            continue
        if setting_id is not None:
            positions[setting_id] = len(group)
        group.append(definition)


def merge_settings(
    base_settings: Mapping[str, Any] | None,
    update_settings_list: Iterable[Mapping[str, Any] | None],
) -> dict[str, list[Any]]:
    """Fold each update's ``settings.global`` groups over the base groups.

    A definition whose ``id`` is already in its group replaces that entry in
    place; other definitions are appended. Groups first seen in an update are
    created in that update's order. Inputs are left untouched.
    """
    merged: dict[str, list[Any]] = {}
    for name, group in (base_settings or {}).items():
        if isinstance(group, list):
            merged[name] = []
            _fold_group(merged[name], group)
        else:
            merged[name] = copy.deepcopy(group)

    for update_settings in update_settings_list:
        if not update_settings:
            continue
        for name, definitions in update_settings.items():
            if not isinstance(definitions, list):
                logger.warning("ignoring settings group %r: expected a list", name)
                continue
            group = merged.get(name)
            if not isinstance(group, list):
                group = []
                merged[name] = group
            _fold_group(group, definitions)
    return merged


def accumulate_manifest(
    base_manifest: Mapping[str, Any],
    updates: Iterable[UpdateFolder],
) -> dict[str, Any]:
    """Build the manifest for ``latest/theme.json``.

    Top-level fields of later manifests win, ``settings.global`` is the
    accumulated schema and ``version`` is the last version applied.
    """
    updates = list(updates)
    manifest = copy.deepcopy(dict(base_manifest))
    settings = manifest.get("settings")
    settings = copy.deepcopy(settings) if isinstance(settings, dict) else {}

    for update in updates:
        for key, value in update.manifest.items():
            if key == "settings":
                if isinstance(value, dict):
                    for settings_key, settings_value in value.items():
                        if settings_key != "global":
                            settings[settings_key] = copy.deepcopy(settings_value)
                continue
            manifest[key] = copy.deepcopy(value)

    settings["global"] = merge_settings(
        global_settings(base_manifest),
        (global_settings(update.manifest) for update in updates),
    )
    manifest["settings"] = settings
    if updates:
        manifest["version"] = updates[-1].version
    return manifest
