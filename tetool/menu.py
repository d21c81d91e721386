"""Discover pattern and tabular files and write a configuration's menu.yaml."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Any, Dict, List

import yaml

from .errors import BootstrapError
from .logging import get_logger
from .models import ConfigEntry, DiscoveredFileSet, MenuDocument, MenuEntry, SourceLayout
from .templates import TemplateLibrary

PATTERN_SUFFIX = ".yaml"
XSV_SUFFIXES = (".csv", ".tsv")
CONFIG_TEMPLATE = "config.yaml"

logger = get_logger("menu")


def _entries(directory: Path) -> List[Path]:
    try:
        return sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        raise BootstrapError(f"Unable to list directory ({exc.strerror or exc})", directory) from exc


def list_pattern_files(directory: Path) -> List[str]:
    """Return the ``.yaml`` entries of ``directory`` in name order."""
    found: List[str] = []
    for entry in _entries(directory):
        if entry.suffix == PATTERN_SUFFIX:
            found.append(entry.name)
        else:
            logger.warning("Skipping non-pattern entry: %s", entry)
    return found


def list_xsv_files(directory: Path) -> List[str]:
    """Return tabular files of ``directory`` as paths relative to it.

    An extension-less entry ``name`` stands for ``name/name.csv`` or
    ``name/name.tsv``, whichever exists first.
    """
    found: List[str] = []
    for entry in _entries(directory):
        if entry.suffix in XSV_SUFFIXES:
            found.append(entry.name)
        elif not entry.suffix:
            nested = _nested_xsv(entry)
            if nested is None:
                logger.warning("Skipping %s: no %s/%s.csv or .tsv", entry, entry.name, entry.name)
            else:
                found.append(nested)
        else:
            logger.warning("Skipping non-tabular entry: %s", entry)
    return found


def _nested_xsv(entry: Path) -> str | None:
    for suffix in XSV_SUFFIXES:
        if (entry / f"{entry.name}{suffix}").is_file():
            return f"{entry.name}/{entry.name}{suffix}"
    return None


def xsv_title(relative_path: str) -> str:
    """Menu title of a tabular file.

    Special case kept for one source layout: files found through the
    ``name/name.ext`` convention are titled by the file name alone.
    """
    if "/" in relative_path:
        return relative_path.split("/")[1]
    return relative_path


def discover_files(layout: SourceLayout) -> DiscoveredFileSet:
    return DiscoveredFileSet(
        patterns=list_pattern_files(layout.root / layout.patterns_dir),
        xsvs=list_xsv_files(layout.root / layout.xsv_dir),
    )


def build_menu(layout: SourceLayout, files: DiscoveredFileSet) -> MenuDocument:
    return MenuDocument(
        default_patterns=[
            MenuEntry(url=f"{layout.raw_prefix}{layout.patterns_dir}/{name}", title=name)
            for name in files.patterns
        ],
        default_xsvs=[
            MenuEntry(url=f"{layout.raw_prefix}{layout.xsv_dir}/{path}", title=xsv_title(path))
            for path in files.xsvs
        ],
    )


def menu_to_dict(menu: MenuDocument) -> Dict[str, Any]:
    return {
        "defaultPatterns": [{"url": e.url, "title": e.title} for e in menu.default_patterns],
        "defaultXSVs": [{"url": e.url, "title": e.title} for e in menu.default_xsvs],
    }


class MenuGenerator:
    """Materialises config.yaml and menu.yaml for one configuration."""

    def __init__(self, templates: TemplateLibrary | None = None) -> None:
        self.templates = templates or TemplateLibrary()

    @staticmethod
    def render(menu: MenuDocument) -> str:
        return yaml.safe_dump(
            menu_to_dict(menu),
            sort_keys=False,
            default_flow_style=False,
            allow_unicode=True,
        )

    def ensure_config_dir(self, entry: ConfigEntry) -> bool:
        """Create the configuration directory and config.yaml; True when created."""
        created = False
        if not entry.config_dir.is_dir():
            logger.info("Creating configuration directory: %s", entry.config_dir)
            try:
                entry.config_dir.mkdir()
            except OSError as exc:
                raise BootstrapError("Error creating configuration directory", entry.config_dir) from exc
            if not entry.config_dir.is_dir():
                raise BootstrapError("Error creating configuration directory", entry.config_dir)
            created = True

        if entry.config_file.exists():
            logger.debug("config.yaml exists: %s", entry.config_file)
            return created
        try:
            shutil.copyfile(self.templates.path(CONFIG_TEMPLATE), entry.config_file)
        except OSError as exc:
            raise BootstrapError("Error copying config.yaml", entry.config_file) from exc
        if not entry.config_file.is_file():
            raise BootstrapError("config.yaml not copied", entry.config_file)
        logger.info("config.yaml created: %s", entry.config_file)
        return True

    def write_menu(self, entry: ConfigEntry, layout: SourceLayout) -> MenuDocument | None:
        """Write menu.yaml unless it already exists; return the menu written."""
        if entry.menu_file.exists():
            logger.debug("menu.yaml exists, leaving it untouched: %s", entry.menu_file)
            return None

        menu = build_menu(layout, discover_files(layout))
        try:
            entry.menu_file.write_text(self.render(menu), encoding="utf-8")
        except OSError as exc:
            raise BootstrapError("Error writing menu.yaml", entry.menu_file) from exc
        if not entry.menu_file.is_file():
            raise BootstrapError("Error writing menu.yaml", entry.menu_file)
        logger.info(
            "menu.yaml created with %d patterns and %d tabular files: %s",
            len(menu.default_patterns),
            len(menu.default_xsvs),
            entry.menu_file,
        )
        return menu


__all__ = [
    "MenuGenerator",
    "build_menu",
    "menu_to_dict",
    "discover_files",
    "list_pattern_files",
    "list_xsv_files",
    "xsv_title",
]
