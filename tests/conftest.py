"""Shared theme fixtures: a base theme with two layered updates."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

THEME_ID = "test-theme"


def write_json(path: Path, data: object) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


def write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def read_json(path: Path) -> dict:
    return json.loads(path.read_text(encoding="utf-8"))


def snapshot_tree(root: Path) -> dict[str, bytes]:
    """Map every file under ``root`` to its bytes, keyed by relative posix path."""
    return {
        path.relative_to(root).as_posix(): path.read_bytes()
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }


def create_base_theme(theme_dir: Path) -> None:
    write_json(
        theme_dir / "theme.json",
        {
            "name": "Test Theme",
            "version": "1.0.0",
            "author": "Test Author",
            "description": "A test theme",
            "settings": {
                "global": {
                    "colors": [
                        {"id": "primary", "label": "Primary Color", "default": "#000000"},
                        {"id": "secondary", "label": "Secondary Color", "default": "#ffffff"},
                    ],
                    "layout": [{"id": "max_width", "label": "Max Width", "default": "1200px"}],
                },
            },
        },
    )
    write_text(theme_dir / "layout.liquid", "<!-- Base layout v1.0.0 -->")
    write_text(theme_dir / "screenshot.png", "PNG_PLACEHOLDER_V1")
    write_text(theme_dir / "assets" / "base.css", "/* Base CSS v1.0.0 */")
    write_text(theme_dir / "assets" / "utils.js", "// Utils v1.0.0")
    write_text(theme_dir / "assets" / "deprecated.css", "/* deleted in v1.2.0 */")
    write_json(theme_dir / "widgets" / "hero" / "schema.json", {"name": "Hero", "version": "1.0.0"})
    write_text(theme_dir / "widgets" / "hero" / "widget.liquid", "<!-- Hero widget v1.0.0 -->")
    write_json(theme_dir / "widgets" / "deprecated-widget" / "schema.json", {"name": "Deprecated"})
    write_text(theme_dir / "widgets" / "deprecated-widget" / "widget.liquid", "<!-- Will be deleted -->")
    write_json(theme_dir / "widgets" / "accordion" / "schema.json", {"name": "Accordion", "version": "1.0.0"})
    write_text(theme_dir / "widgets" / "accordion" / "widget.liquid", "<!-- Accordion v1.0.0 -->")
    write_text(theme_dir / "snippets" / "header.liquid", "<!-- Header snippet v1.0.0 -->")
    write_json(theme_dir / "templates" / "home.json", {"title": "Home", "slug": "home"})
    write_json(theme_dir / "templates" / "about.json", {"title": "About", "slug": "about"})
    write_json(theme_dir / "menus" / "main.json", {"id": "main", "items": []})


def create_update_110(theme_dir: Path) -> None:
    update_dir = theme_dir / "updates" / "1.1.0"
    write_json(
        update_dir / "theme.json",
        {
            "name": "Test Theme",
            "version": "1.1.0",
            "author": "Test Author",
            "description": "A test theme",
            "settings": {
                "global": {
                    "colors": [
                        {"id": "primary", "label": "Primary Color", "default": "#0000ff"},
                        {"id": "secondary", "label": "Secondary Color", "default": "#ffffff"},
                        {"id": "accent", "label": "Accent Color", "default": "#ff0000"},
                    ],
                    "layout": [{"id": "max_width", "label": "Max Width", "default": "1400px"}],
                },
            },
        },
    )
    write_text(update_dir / "layout.liquid", "<!-- Updated layout v1.1.0 -->")
    write_text(update_dir / "assets" / "new-feature.js", "// New feature added in v1.1.0")
    write_text(update_dir / "assets" / "base.css", "/* Base CSS v1.1.0 - Updated */")
    write_json(update_dir / "widgets" / "testimonials" / "schema.json", {"name": "Testimonials", "version": "1.1.0"})
    write_text(update_dir / "widgets" / "testimonials" / "widget.liquid", "<!-- Testimonials v1.1.0 -->")
    write_text(update_dir / "widgets" / "hero" / "widget.liquid", "<!-- Hero widget v1.1.0 - Enhanced -->")
    write_text(update_dir / "snippets" / "footer.liquid", "<!-- Footer snippet v1.1.0 -->")
    write_json(update_dir / "templates" / "contact.json", {"title": "Contact", "slug": "contact"})
    write_json(update_dir / "menus" / "footer.json", {"id": "footer", "items": []})


def create_update_120(theme_dir: Path) -> None:
    update_dir = theme_dir / "updates" / "1.2.0"
    write_json(
        update_dir / "theme.json",
        {
            "name": "Test Theme",
            "version": "1.2.0",
            "author": "Test Author",
            "description": "A test theme",
            "settings": {
                "global": {
                    "colors": [
                        {"id": "background", "label": "Background Color", "default": "#f5f5f5"},
                    ],
                    "layout": [
                        {"id": "container_padding", "label": "Container Padding", "default": "20px"},
                    ],
                },
            },
        },
    )
    write_text(update_dir / "deleted" / "assets" / "deprecated.css", "")
    (update_dir / "deleted" / "widgets" / "deprecated-widget").mkdir(parents=True)
    write_text(update_dir / "widgets" / "accordion" / "widget.liquid", "<!-- Accordion v1.2.0 - Rewritten -->")
    write_json(
        update_dir / "widgets" / "accordion" / "schema.json",
        {"name": "Accordion", "version": "1.2.0", "enhanced": True},
    )


@pytest.fixture
def themes_root(tmp_path: Path) -> Path:
    root = tmp_path / "themes"
    root.mkdir()
    return root


@pytest.fixture
def base_theme(themes_root: Path) -> Path:
    theme_dir = themes_root / THEME_ID
    create_base_theme(theme_dir)
    return theme_dir


@pytest.fixture
def layered_theme(base_theme: Path) -> Path:
    create_update_110(base_theme)
    create_update_120(base_theme)
    return base_theme
