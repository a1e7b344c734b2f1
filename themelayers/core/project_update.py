"""Apply a newer theme version to a project that was created from it."""

from __future__ import annotations

import copy
import logging
import shutil
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Mapping

from themelayers.core.store import ThemeStore
from themelayers.errors import ThemeLayerError
from themelayers.versioning.constants import MANIFEST_FILENAME
from themelayers.versioning.manifest import read_manifest, write_manifest
from themelayers.versioning.semver import is_newer_version

logger = logging.getLogger(__name__)

# Replaced wholesale on update; everything else in a project is user-owned.
UPDATABLE_PATHS: tuple[str, ...] = (
    "layout.liquid",
    "assets",
    "widgets",
    "snippets",
    "screenshot.png",
)


@dataclass(frozen=True, slots=True)
class UpdateStatus:
    has_update: bool
    current_version: str
    latest_version: str


@dataclass
class ProjectUpdateResult:
    """Outcome of applying a theme update to a project directory."""

    success: bool
    previous_version: str | None
    new_version: str | None
    message: str = ""
    updated_paths: list[str] = field(default_factory=list)
    added_menus: list[str] = field(default_factory=list)
    added_pages: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def check_for_updates(store: ThemeStore, theme_id: str, current_version: str | None) -> UpdateStatus:
    """Compare a project's theme version with the theme's built source version."""
    try:
        source_version = store.source_version(theme_id)
    except (OSError, ThemeLayerError) as exc:
        logger.warning("could not read source version for %s: %s", theme_id, exc)
        source_version = None

    if not current_version or not source_version:
        return UpdateStatus(
            has_update=False,
            current_version=current_version or "unknown",
            latest_version=source_version or "unknown",
        )
    return UpdateStatus(
        has_update=is_newer_version(current_version, source_version),
        current_version=current_version,
        latest_version=source_version,
    )


def _merge_settings_list(user_items: Any, new_items: list[Any]) -> list[Any]:
    if not isinstance(user_items, list):
        return copy.deepcopy(new_items)
    user_by_id = {
        item["id"]: item
        for item in user_items
        if isinstance(item, dict) and isinstance(item.get("id"), str)
    }
    merged: list[Any] = []
    for new_item in new_items:
        new_item = copy.deepcopy(new_item)
        if isinstance(new_item, dict) and isinstance(new_item.get("id"), str):
            user_item = user_by_id.get(new_item["id"])
            if user_item is not None and "value" in user_item:
                new_item["value"] = copy.deepcopy(user_item["value"])
        merged.append(new_item)
    return merged


def _merge_settings_object(user_settings: Any, new_settings: Mapping[str, Any]) -> dict[str, Any]:
    if not isinstance(user_settings, Mapping):
        return copy.deepcopy(dict(new_settings))
    merged = copy.deepcopy(dict(new_settings))
    for key, new_value in new_settings.items():
        if key not in user_settings:
            continue
        user_value = user_settings[key]
        if isinstance(new_value, list):
            merged[key] = _merge_settings_list(user_value, new_value)
        elif isinstance(new_value, Mapping):
            merged[key] = _merge_settings_object(user_value, new_value)
        else:
            merged[key] = copy.deepcopy(user_value)
    return merged


def merge_theme_settings(user_manifest: Mapping[str, Any], new_manifest: Mapping[str, Any]) -> dict[str, Any]:
    """Take the new manifest's structure and keep the user's setting values.

    Settings the theme author removed are dropped and new settings keep their
    defaults.
    """
    merged = copy.deepcopy(dict(new_manifest))
    user_settings = user_manifest.get("settings")
    new_settings = new_manifest.get("settings")
    if isinstance(user_settings, Mapping) and isinstance(new_settings, Mapping):
        merged["settings"] = _merge_settings_object(user_settings, new_settings)
    return merged


def _replace_updatable_paths(source_dir: Path, project_dir: Path, result: ProjectUpdateResult) -> None:
    for item in UPDATABLE_PATHS:
        source = source_dir / item
        target = project_dir / item
        if not source.exists():
            logger.info("skipping %s - not in theme", item)
            continue
        try:
            if target.is_dir() and not target.is_symlink():
                shutil.rmtree(target)
            elif target.exists() or target.is_symlink():
                target.unlink()
            if source.is_dir():
                shutil.copytree(source, target)
            else:
                shutil.copy2(source, target)
            result.updated_paths.append(item)
        except OSError as exc:
            logger.warning("failed to update %s: %s", item, exc)
            result.errors.append(f"{item}: {exc}")


def _add_new_menus(source_dir: Path, project_dir: Path, result: ProjectUpdateResult) -> None:
    theme_menus = source_dir / "menus"
    if not theme_menus.is_dir():
        return
    project_menus = project_dir / "menus"
    project_menus.mkdir(parents=True, exist_ok=True)
    for menu_file in sorted(theme_menus.glob("*.json")):
        target = project_menus / menu_file.name
        if target.exists():
            continue
        try:
            menu = read_manifest(menu_file)
            now = _now_iso()
            menu.update(
                id=menu_file.stem,
                uuid=menu.get("uuid") or str(uuid.uuid4()),
                created=now,
                updated=now,
            )
            write_manifest(target, menu)
            result.added_menus.append(menu_file.name)
        except (OSError, ThemeLayerError) as exc:
            logger.warning("failed to add menu %s: %s", menu_file.name, exc)
            result.errors.append(f"menus/{menu_file.name}: {exc}")


def process_templates(
    templates_dir: Path,
    pages_dir: Path,
    processor: Callable[[dict[str, Any], str, Path], None],
) -> None:
    """Walk theme templates and hand each one, its slug and its page path to ``processor``."""
    if not templates_dir.is_dir():
        return
    pages_dir.mkdir(parents=True, exist_ok=True)
    for entry in sorted(templates_dir.iterdir()):
        if entry.is_dir():
            process_templates(entry, pages_dir / entry.name, processor)
        elif entry.is_file() and entry.suffix == ".json":
            template = read_manifest(entry)
            slug = template.get("slug") or entry.stem
            processor(template, slug, pages_dir / f"{slug}.json")


def _add_new_pages(source_dir: Path, project_dir: Path, result: ProjectUpdateResult) -> None:
    def add_page(template: dict[str, Any], slug: str, target: Path) -> None:
        if target.exists():
            return
        now = _now_iso()
        page = dict(template, id=slug, slug=slug, created=now, updated=now)
        write_manifest(target, page)
        result.added_pages.append(slug)

    try:
        process_templates(source_dir / "templates", project_dir / "pages", add_page)
    except (OSError, ThemeLayerError) as exc:
        logger.warning("failed to add new templates: %s", exc)
        result.errors.append(f"templates: {exc}")


def _merge_project_manifest(source_dir: Path, project_dir: Path, result: ProjectUpdateResult) -> None:
    project_manifest = project_dir / MANIFEST_FILENAME
    try:
        merged = merge_theme_settings(
            read_manifest(project_manifest),
            read_manifest(source_dir / MANIFEST_FILENAME),
        )
        write_manifest(project_manifest, merged)
    except (OSError, ThemeLayerError) as exc:
        logger.warning("failed to merge theme.json: %s", exc)
        result.errors.append(f"{MANIFEST_FILENAME}: {exc}")


def apply_theme_update(
    store: ThemeStore,
    theme_id: str,
    project_dir: Path,
    current_version: str | None,
) -> ProjectUpdateResult:
    """Bring a project's theme files up to the theme's built source version.

    Updatable paths are replaced, new menus and template pages are added
    without touching existing ones, and theme.json is merged keeping user
    values. A failing step is logged and recorded; later steps still run.
    Persisting the new version in project metadata is up to the caller.
    """
    project_dir = Path(project_dir)
    status = check_for_updates(store, theme_id, current_version)
    if not status.has_update:
        return ProjectUpdateResult(
            success=False,
            previous_version=current_version,
            new_version=current_version,
            message="No update available",
        )

    source_dir = store.source_dir(theme_id)
    logger.info(
        "updating project %s from %s to %s",
        project_dir.name,
        status.current_version,
        status.latest_version,
    )
    result = ProjectUpdateResult(
        success=True,
        previous_version=current_version,
        new_version=status.latest_version,
    )
    _replace_updatable_paths(source_dir, project_dir, result)
    _add_new_menus(source_dir, project_dir, result)
    _add_new_pages(source_dir, project_dir, result)
    _merge_project_manifest(source_dir, project_dir, result)
    result.message = f"Updated theme {theme_id} to version {status.latest_version}"
    logger.info("project %s now at theme version %s", project_dir.name, status.latest_version)
    return result
