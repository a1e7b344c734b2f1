"""Headless bootstrap: provision seed themes and rebuild pending snapshots."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
import sys

from PySide6.QtCore import QCoreApplication

from themelayers.config.settings import AppSettings
from themelayers.core.store import ThemeStore
from themelayers.errors import ThemeLayerError, format_error_for_user
from themelayers.runtime_paths import is_frozen, package_root


def _configure_logger(settings: AppSettings) -> logging.Logger:
    logger = logging.getLogger("themelayers")
    if logger.handlers:
        return logger

    logger.setLevel(settings.log_level)
    handler = RotatingFileHandler(
        settings.log_dir / "themelayers.log",
        maxBytes=512_000,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def rebuild_pending_themes(store: ThemeStore, logger: logging.Logger) -> tuple[list[str], list[str]]:
    """Rebuild every theme with unbuilt updates; return (updated ids, failed ids)."""
    updated: list[str] = []
    failed: list[str] = []
    for theme_id in store.list_themes():
        if not store.has_pending_updates(theme_id):
            continue
        try:
            result = store.update_theme(theme_id)
        except ThemeLayerError as exc:
            logger.error("theme %s not updated: %s", theme_id, format_error_for_user(exc))
            failed.append(theme_id)
            continue
        logger.info(result.message)
        updated.append(theme_id)
    return updated, failed


def run_app(argv: list[str] | None = None) -> int:
    """Initialize settings and logging, then bring installed themes up to date."""
    app = QCoreApplication.instance() or QCoreApplication(argv if argv is not None else sys.argv)
    app.setApplicationName("ThemeLayers")
    app.setOrganizationName("ThemeLayers")
    settings = AppSettings()
    logger = _configure_logger(settings)
    logger.info("startup mode frozen=%s package_root=%s", is_frozen(), package_root())

    store = ThemeStore(settings.themes_dir)
    seed_root = settings.seed_themes_dir
    if seed_root.is_dir():
        store.provision_seed_themes(seed_root)
    else:
        logger.warning("seed theme root missing at %s", seed_root)

    if not settings.rebuild_on_startup:
        return 0

    updated, failed = rebuild_pending_themes(store, logger)
    logger.info(
        "theme rebuild finished: %d updated, %d failed, %d pending",
        len(updated),
        len(failed),
        store.pending_update_count(),
    )
    return 1 if failed else 0
