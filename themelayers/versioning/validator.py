"""Consistency checks for update folders, run before any snapshot mutation."""

from __future__ import annotations

import logging
from pathlib import Path

from themelayers.errors import MissingManifestError, ThemeLayerError, VersionMismatchError
from themelayers.versioning.constants import UPDATES_DIRNAME
from themelayers.versioning.manifest import manifest_path, read_manifest
from themelayers.versioning.models import UpdateFolder

logger = logging.getLogger(__name__)


def validate_update_folders(theme_dir: Path, versions: list[str]) -> list[UpdateFolder]:
    """Check every update folder and return them with their parsed manifests.

    All folders are inspected before failing so the error names every
    offender. Missing or unreadable manifests are reported ahead of version
    mismatches.
    """
    theme_id = theme_dir.name
    updates_dir = theme_dir / UPDATES_DIRNAME
    folders: list[UpdateFolder] = []
    missing: list[str] = []
    mismatches: list[tuple[str, object]] = []

    for version in versions:
        version_dir = updates_dir / version
        try:
            data = read_manifest(manifest_path(version_dir))
        except FileNotFoundError:
            missing.append(version)
            continue
        except ThemeLayerError:
            missing.append(f"{version} (invalid JSON)")
            continue

        declared = data.get("version")
        if declared != version:
            mismatches.append((version, declared))
            continue
        folders.append(UpdateFolder(version=version, path=version_dir, manifest=data))

    if missing:
        message = (
            f"Theme '{theme_id}' has version folder(s) missing theme.json: "
            f"{', '.join(missing)}. Each version folder must include a theme.json file."
        )
        logger.error(message)
        raise MissingManifestError(
            message=message,
            path=updates_dir,
            details={"folders": ", ".join(missing)},
        )

    if mismatches:
        mismatch_details = "; ".join(
            f"folder '{folder}' has theme.json version '{declared}'" for folder, declared in mismatches
        )
        message = (
            f"Theme '{theme_id}' has version mismatch: {mismatch_details}. "
            "Folder name must match theme.json version."
        )
        logger.error(message)
        raise VersionMismatchError(
            message=message,
            path=updates_dir,
            details={"folders": ", ".join(folder for folder, _ in mismatches)},
        )

    return folders
