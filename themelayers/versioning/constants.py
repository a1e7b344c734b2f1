"""Theme versioning constants."""

from __future__ import annotations

MANIFEST_FILENAME = "theme.json"
UPDATES_DIRNAME = "updates"
LATEST_DIRNAME = "latest"
DELETED_DIRNAME = "deleted"

# Never copied from a theme root into a snapshot or a project.
VERSIONING_DIRNAMES: tuple[str, ...] = (
    UPDATES_DIRNAME,
    LATEST_DIRNAME,
)

# Handled separately from the file overlay of an update folder.
UPDATE_CONTROL_ENTRIES: tuple[str, ...] = (
    DELETED_DIRNAME,
    MANIFEST_FILENAME,
)
