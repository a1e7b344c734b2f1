"""Theme-id keyed access to an installed themes directory."""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from themelayers.errors import InvalidThemeIdError, NoPendingUpdatesError, ThemeLayerError, ThemeNotFoundError
from themelayers.versioning.constants import (
    LATEST_DIRNAME,
    MANIFEST_FILENAME,
    UPDATES_DIRNAME,
    VERSIONING_DIRNAMES,
)
from themelayers.versioning.discovery import get_theme_versions
from themelayers.versioning.manifest import manifest_version, read_manifest
from themelayers.versioning.merger import merge_into
from themelayers.versioning.models import SnapshotResult
from themelayers.versioning.semver import get_latest_version, is_newer_version
from themelayers.versioning.snapshot import build_latest_snapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ThemeUpdateResult:
    """Result of rebuilding a theme to its newest version."""

    theme_id: str
    version: str | None
    message: str


class ThemeStore:
    """Resolves theme folders under a themes root and runs version operations on them."""

    def __init__(self, themes_root: Path) -> None:
        self._themes_root = Path(themes_root)

    @property
    def themes_root(self) -> Path:
        return self._themes_root

    # -- paths --

    def theme_dir(self, theme_id: str) -> Path:
        if (
            not theme_id
            or theme_id in {".", ".."}
            or "/" in theme_id
            or "\\" in theme_id
            or "\x00" in theme_id
        ):
            raise InvalidThemeIdError(
                message=f"Invalid theme id: {theme_id!r}",
                details={"theme_id": theme_id},
            )
        return self._themes_root / theme_id

    def manifest_path(self, theme_id: str) -> Path:
        return self.theme_dir(theme_id) / MANIFEST_FILENAME

    def updates_dir(self, theme_id: str) -> Path:
        return self.theme_dir(theme_id) / UPDATES_DIRNAME

    def latest_dir(self, theme_id: str) -> Path:
        return self.theme_dir(theme_id) / LATEST_DIRNAME

    def version_dir(self, theme_id: str, version: str) -> Path:
        return self.updates_dir(theme_id) / version

    def exists(self, theme_id: str) -> bool:
        return self.theme_dir(theme_id).is_dir()

    def list_themes(self) -> list[str]:
        """Return ids of every folder under the root that holds a theme.json."""
        if not self._themes_root.is_dir():
            return []
        return sorted(
            path.name
            for path in self._themes_root.iterdir()
            if path.is_dir() and (path / MANIFEST_FILENAME).is_file()
        )

    # -- versions --

    def get_theme_versions(self, theme_id: str) -> list[str]:
        return get_theme_versions(self.theme_dir(theme_id))

    def build_latest_snapshot(self, theme_id: str) -> SnapshotResult | None:
        return build_latest_snapshot(self.theme_dir(theme_id))

    def source_dir(self, theme_id: str) -> Path:
        """``latest/`` when it has been built, otherwise the theme root."""
        latest = self.latest_dir(theme_id)
        if latest.is_dir():
            return latest
        return self.theme_dir(theme_id)

    def source_version(self, theme_id: str) -> str | None:
        data = read_manifest(self.source_dir(theme_id) / MANIFEST_FILENAME)
        return manifest_version(data)

    def latest_version(self, theme_id: str) -> str | None:
        return get_latest_version(self.get_theme_versions(theme_id))

    def has_updates(self, theme_id: str) -> bool:
        return len(self.get_theme_versions(theme_id)) > 1

    def has_pending_updates(self, theme_id: str) -> bool:
        """True when a known version is newer than what the source directory holds."""
        try:
            versions = self.get_theme_versions(theme_id)
            if len(versions) <= 1:
                return False
            current = self.source_version(theme_id)
        except (OSError, ThemeLayerError) as exc:
            logger.warning("could not check pending updates for %s: %s", theme_id, exc)
            return False
        if current is None:
            return False
        return is_newer_version(current, versions[-1])

    def pending_update_count(self) -> int:
        return sum(1 for theme_id in self.list_themes() if self.has_pending_updates(theme_id))

    def update_theme(self, theme_id: str) -> ThemeUpdateResult:
        """Build ``latest/`` for a theme that has unbuilt update versions."""
        theme_dir = self.theme_dir(theme_id)
        if not theme_dir.is_dir():
            raise ThemeNotFoundError(message=f"Theme '{theme_id}' not found", path=theme_dir)
        if not self.has_pending_updates(theme_id):
            raise NoPendingUpdatesError(
                message=f"Theme '{theme_id}' has no pending updates",
                path=theme_dir,
            )

        self.build_latest_snapshot(theme_id)
        version = self.source_version(theme_id)
        return ThemeUpdateResult(
            theme_id=theme_id,
            version=version,
            message=f"Theme '{theme_id}' updated to version {version}",
        )

    # -- copying --

    def copy_theme_to_project(
        self,
        theme_id: str,
        project_dir: Path,
        exclude: Iterable[str] = (),
    ) -> str | None:
        """Copy the theme's current source into ``project_dir`` and return its version.

        Versioning folders and any extra ``exclude`` names are left out.
        """
        source = self.source_dir(theme_id)
        if not source.is_dir():
            raise ThemeNotFoundError(message=f"Theme '{theme_id}' not found", path=source)
        excluded = tuple(exclude) + VERSIONING_DIRNAMES
        merge_into(source, Path(project_dir), exclude=excluded)
        version = self.source_version(theme_id)
        logger.info("copied theme %s (%s) into %s", theme_id, version, project_dir)
        return version

    def provision_seed_themes(self, seed_root: Path) -> list[str]:
        """Install bundled themes whose ids are not present yet."""
        seed_root = Path(seed_root)
        if not seed_root.is_dir():
            return []
        self._themes_root.mkdir(parents=True, exist_ok=True)
        provisioned: list[str] = []
        for seed in sorted(seed_root.iterdir()):
            if not seed.is_dir() or not (seed / MANIFEST_FILENAME).is_file():
                continue
            target = self._themes_root / seed.name
            if target.exists():
                continue
            shutil.copytree(seed, target)
            provisioned.append(seed.name)
        if provisioned:
            logger.info("provisioned seed themes: %s", ", ".join(provisioned))
        return provisioned
