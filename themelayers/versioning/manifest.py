"""theme.json reading and writing."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from themelayers.errors import ErrorCode, ThemeLayerError
from themelayers.versioning.constants import MANIFEST_FILENAME

_MAX_JSON_BYTES = 1_048_576


def manifest_path(directory: Path) -> Path:
    return directory / MANIFEST_FILENAME


def read_manifest(path: Path, *, max_bytes: int = _MAX_JSON_BYTES) -> dict[str, Any]:
    """Load a JSON object file (theme.json, menus, templates) as a dict.

    OS errors (including a missing file) propagate unchanged; a file larger
    than ``max_bytes`` or content that is not a JSON object raises a
    MANIFEST_INVALID ThemeLayerError.
    """
    size = path.stat().st_size
    if size > max_bytes:
        raise ThemeLayerError(
            ErrorCode.MANIFEST_INVALID,
            message=f"{path}: file exceeds max size ({max_bytes} bytes)",
            path=path,
        )
    content = path.read_text(encoding="utf-8")
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ThemeLayerError(
            ErrorCode.MANIFEST_INVALID,
            message=f"Invalid JSON in {path}: {exc}",
            path=path,
        ) from exc
    if not isinstance(data, dict):
        raise ThemeLayerError(
            ErrorCode.MANIFEST_INVALID,
            message=f"Expected JSON object in {path}",
            path=path,
        )
    return data


def write_manifest(path: Path, data: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


def manifest_version(data: dict[str, Any]) -> str | None:
    """Return the declared version string, or None if absent or not a string."""
    version = data.get("version")
    if isinstance(version, str):
        return version
    return None


def global_settings(data: dict[str, Any]) -> dict[str, Any] | None:
    """Return ``settings.global`` when the manifest declares it as an object."""
    settings = data.get("settings")
    if not isinstance(settings, dict):
        return None
    groups = settings.get("global")
    if not isinstance(groups, dict):
        return None
    return groups
