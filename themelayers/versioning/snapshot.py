"""Build a theme's ``latest/`` snapshot by layering update folders over the base."""

from __future__ import annotations

import logging
from pathlib import Path

from themelayers.versioning.constants import (
    DELETED_DIRNAME,
    LATEST_DIRNAME,
    UPDATE_CONTROL_ENTRIES,
    VERSIONING_DIRNAMES,
)
from themelayers.versioning.discovery import list_update_versions, read_base_version
from themelayers.versioning.manifest import manifest_path, read_manifest, write_manifest
from themelayers.versioning.merger import apply_deletions, copy_tree, merge_into
from themelayers.versioning.models import SnapshotResult
from themelayers.versioning.settings_merge import accumulate_manifest
from themelayers.versioning.validator import validate_update_folders

logger = logging.getLogger(__name__)


def build_latest_snapshot(theme_dir: Path) -> SnapshotResult | None:
    """Rebuild ``<theme_dir>/latest`` from the base theme plus every update.

    Returns None without touching the filesystem when the theme has no
    update folders. Raises MissingManifestError or VersionMismatchError
    before any mutation when an update folder is inconsistent, leaving an
    existing ``latest/`` as it was. The final manifest is also computed
    before ``latest/`` is touched. I/O errors propagate.
    """
    theme_id = theme_dir.name
    base_version = read_base_version(theme_dir)
    versions = list_update_versions(theme_dir, base_version)
    if not versions:
        logger.info("no updates for %s, skipping latest/ build", theme_id)
        return None

    updates = validate_update_folders(theme_dir, versions)
    base_manifest = read_manifest(manifest_path(theme_dir))
    final_manifest = accumulate_manifest(base_manifest, updates)

    latest_dir = theme_dir / LATEST_DIRNAME
    logger.info(
        "building latest/ for %s with versions: %s",
        theme_id,
        ", ".join([base_version or "?"] + versions),
    )

    copy_tree(theme_dir, latest_dir, exclude=VERSIONING_DIRNAMES)

    result = SnapshotResult(theme_dir=theme_dir, latest_dir=latest_dir, base_version=base_version)
    for update in updates:
        copied = merge_into(update.path, latest_dir, exclude=UPDATE_CONTROL_ENTRIES + VERSIONING_DIRNAMES)
        deleted = apply_deletions(update.path / DELETED_DIRNAME, latest_dir)
        result.applied_versions.append(update.version)
        result.deleted_paths.extend(deleted)
        logger.info(
            "applied version %s to latest/ (%d files copied, %d paths deleted)",
            update.version,
            copied,
            len(deleted),
        )

    write_manifest(manifest_path(latest_dir), final_manifest)
    logger.info("successfully built latest/ for %s at version %s", theme_id, result.version)
    return result
