"""File-tree overlay and deletion primitives used to layer theme versions."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Iterable

logger = logging.getLogger(__name__)


def _remove_path(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


def _sorted_children(directory: Path) -> list[Path]:
    # Stable traversal keeps repeated builds identical.
    return sorted(directory.iterdir(), key=lambda child: child.name)


def merge_into(source_dir: Path, dest_dir: Path, exclude: Iterable[str] = ()) -> int:
    """Overlay ``source_dir`` onto ``dest_dir`` and return the number of files copied.

    Same-named files are overwritten, new files and folders are created, and
    destination files without a source counterpart are left alone. ``exclude``
    lists top-level names of ``source_dir`` to skip.
    """
    skipped = set(exclude)
    dest_dir.mkdir(parents=True, exist_ok=True)
    copied = 0
    for source in _sorted_children(source_dir):
        if source.name in skipped:
            continue
        target = dest_dir / source.name
        if source.is_dir():
            if target.exists() and not target.is_dir():
                _remove_path(target)
            copied += merge_into(source, target)
        else:
            if target.is_dir() and not target.is_symlink():
                shutil.rmtree(target)
            shutil.copy2(source, target)
            copied += 1
    return copied


def copy_tree(source_dir: Path, dest_dir: Path, exclude: Iterable[str] = ()) -> int:
    """Copy ``source_dir`` into a fresh ``dest_dir``, skipping top-level ``exclude`` names."""
    if dest_dir.exists():
        shutil.rmtree(dest_dir)
    return merge_into(source_dir, dest_dir, exclude=exclude)


def apply_deletions(deleted_marker_dir: Path, dest_dir: Path) -> list[str]:
    """Remove the paths marked under an update's ``deleted/`` tree from ``dest_dir``.

    A marker file removes the matching path; an empty marker folder removes
    the matching folder with all its contents. Non-empty marker folders only
    nest deeper markers, so parents of deleted items always survive. Missing
    targets are ignored. Returns the removed paths relative to ``dest_dir``.
    """
    if not deleted_marker_dir.is_dir():
        return []
    return _apply_deletions(deleted_marker_dir, dest_dir, "")


def _apply_deletions(deleted_marker_dir: Path, dest_dir: Path, prefix: str) -> list[str]:
    removed: list[str] = []
    for marker in _sorted_children(deleted_marker_dir):
        relative = f"{prefix}{marker.name}"
        target = dest_dir / marker.name
        if marker.is_dir() and any(marker.iterdir()):
            if target.is_dir() and not target.is_symlink():
                removed.extend(_apply_deletions(marker, target, f"{relative}/"))
            continue
        if not target.exists() and not target.is_symlink():
            logger.debug("nothing to delete at %s", relative)
            continue
        _remove_path(target)
        removed.append(relative)
    return removed
