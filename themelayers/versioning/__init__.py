"""Theme version layering exports."""

from themelayers.errors import MissingManifestError, VersionMismatchError
from themelayers.versioning.discovery import get_theme_versions, list_update_versions
from themelayers.versioning.merger import apply_deletions, merge_into
from themelayers.versioning.models import SnapshotResult, UpdateFolder
from themelayers.versioning.settings_merge import accumulate_manifest, merge_settings
from themelayers.versioning.snapshot import build_latest_snapshot

__all__ = [
    "MissingManifestError",
    "VersionMismatchError",
    "SnapshotResult",
    "UpdateFolder",
    "accumulate_manifest",
    "apply_deletions",
    "build_latest_snapshot",
    "get_theme_versions",
    "list_update_versions",
    "merge_into",
    "merge_settings",
]
