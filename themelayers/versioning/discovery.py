"""Discovery of a theme's base and update versions."""

from __future__ import annotations

import logging
from pathlib import Path

from themelayers.errors import ThemeLayerError
from themelayers.versioning.constants import UPDATES_DIRNAME
from themelayers.versioning.manifest import manifest_path, manifest_version, read_manifest
from themelayers.versioning.semver import is_valid_version, sort_versions

logger = logging.getLogger(__name__)


def read_base_version(theme_dir: Path) -> str | None:
    """Return the valid version declared by the theme's root theme.json, if any."""
    try:
        data = read_manifest(manifest_path(theme_dir))
    except (OSError, ThemeLayerError) as exc:
        logger.warning("could not read base theme.json for %s: %s", theme_dir.name, exc)
        return None
    version = manifest_version(data)
    if version is None or not is_valid_version(version):
        logger.warning("base theme.json for %s has no valid version: %r", theme_dir.name, version)
        return None
    return version


def list_update_versions(theme_dir: Path, base_version: str | None = None) -> list[str]:
    """List semver-named folders under ``updates/`` in ascending order.

    Entries that are not directories or not valid versions are ignored, as is
    a folder named after the base version itself.
    """
    updates_dir = theme_dir / UPDATES_DIRNAME
    try:
        entries = list(updates_dir.iterdir())
    except FileNotFoundError:
        return []
    except OSError as exc:
        logger.warning("could not read updates directory for %s: %s", theme_dir.name, exc)
        return []

    versions: list[str] = []
    for entry in entries:
        if not entry.is_dir() or not is_valid_version(entry.name):
            continue
        if entry.is_symlink():
            logger.warning("skipping symlinked update folder: %s", entry)
            continue
        if entry.name == base_version:
            continue
        versions.append(entry.name)
    return sort_versions(versions)


def get_theme_versions(theme_dir: Path) -> list[str]:
    """Return the base version plus every update version, ascending."""
    base_version = read_base_version(theme_dir)
    versions = list_update_versions(theme_dir, base_version)
    if base_version is not None:
        versions.append(base_version)
    return sort_versions(versions)
