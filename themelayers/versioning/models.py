"""Theme versioning models."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(frozen=True, slots=True)
class UpdateFolder:
    """A validated ``updates/<version>/`` folder."""

    version: str
    path: Path
    manifest: dict[str, Any]


@dataclass(slots=True)
class SnapshotResult:
    """Outcome of a successful ``latest/`` build."""

    theme_dir: Path
    latest_dir: Path
    base_version: str | None
    applied_versions: list[str] = field(default_factory=list)
    deleted_paths: list[str] = field(default_factory=list)

    @property
    def version(self) -> str | None:
        if self.applied_versions:
            return self.applied_versions[-1]
        return self.base_version
