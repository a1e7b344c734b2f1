"""Application settings via QSettings."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from PySide6.QtCore import QSettings

from themelayers.runtime_paths import seed_themes_root

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR"}


class AppSettings:
    """Wraps QSettings for persistent app configuration."""

    def __init__(self, qsettings: QSettings | None = None) -> None:
        self._qs = qsettings if qsettings is not None else QSettings("ThemeLayers", "ThemeLayers")

    # -- directories --

    @property
    def themes_dir(self) -> Path:
        raw = self._qs.value("dirs/themes", "", type=str)
        value = (raw or "").strip()
        path = Path(value) if value else self.app_data_dir / "themes"
        path.mkdir(parents=True, exist_ok=True)
        return path

    @themes_dir.setter
    def themes_dir(self, value: str | Path) -> None:
        self._qs.setValue("dirs/themes", str(value))

    @property
    def seed_themes_dir(self) -> Path:
        raw = self._qs.value("dirs/seed_themes", "", type=str)
        value = (raw or "").strip()
        return Path(value) if value else seed_themes_root()

    @seed_themes_dir.setter
    def seed_themes_dir(self, value: str | Path) -> None:
        self._qs.setValue("dirs/seed_themes", str(value))

    # -- builds --

    @property
    def rebuild_on_startup(self) -> bool:
        return self._qs.value("build/rebuild_on_startup", True, type=bool)

    @rebuild_on_startup.setter
    def rebuild_on_startup(self, value: bool) -> None:
        self._qs.setValue("build/rebuild_on_startup", bool(value))

    # -- logging --

    @property
    def log_level(self) -> int:
        raw = self._qs.value("logging/level", "INFO", type=str)
        name = (raw or "").strip().upper()
        if name not in _LOG_LEVELS:
            name = "INFO"
        return getattr(logging, name)

    @log_level.setter
    def log_level(self, value: str) -> None:
        name = (value or "").strip().upper()
        if name not in _LOG_LEVELS:
            name = "INFO"
        self._qs.setValue("logging/level", name)

    # -- helpers --

    @property
    def app_data_dir(self) -> Path:
        path = self._app_data_dir()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def log_dir(self) -> Path:
        path = self.app_data_dir / "logs"
        path.mkdir(parents=True, exist_ok=True)
        return path

    @staticmethod
    def _app_data_dir() -> Path:
        base = Path(os.environ.get("APPDATA", Path.home() / ".config"))
        return base / "themelayers"
