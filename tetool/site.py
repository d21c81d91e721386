"""Site initialisation: docs/ layout, index.json, logo and index.html."""

from __future__ import annotations

import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from .config import ServingMode
from .errors import BootstrapError
from .index import INDEX_FILENAME, load_index, write_index
from .logging import get_logger
from .models import SiteIndex
from .templates import TemplateLibrary

DOCS_DIRNAME = "docs"
CONFIGURATIONS_DIRNAME = "configurations"
DEFAULT_LOGO_FILENAME = "INCA.png"
INDEX_HTML_FILENAME = "index.html"


@dataclass
class SiteLayout:
    """Paths of an initialised site together with its loaded index."""

    root: Path
    docs_dir: Path
    configurations_dir: Path
    index_file: Path
    index: SiteIndex
    created: List[Path] = field(default_factory=list)
    existing: List[Path] = field(default_factory=list)


class SiteInitializer:
    """Ensures the docs/ skeleton of a table-editor site exists."""

    def __init__(self, templates: TemplateLibrary | None = None, *, logo_image: str = DEFAULT_LOGO_FILENAME) -> None:
        self.templates = templates or TemplateLibrary()
        self.logo_image = logo_image
        self.logger = get_logger("site")

    def initialize(self, site_root: Path, mode: ServingMode, *, title: str | None = None) -> SiteLayout:
        root = Path(site_root).expanduser().resolve()
        if not root.is_dir():
            raise BootstrapError("Site root directory does not exist", site_root)

        docs_dir = root / DOCS_DIRNAME
        configurations_dir = docs_dir / CONFIGURATIONS_DIRNAME
        layout = SiteLayout(
            root=root,
            docs_dir=docs_dir,
            configurations_dir=configurations_dir,
            index_file=configurations_dir / INDEX_FILENAME,
            index=SiteIndex(title="", base_url="/", logo_image=self.logo_image),
        )

        self._ensure_dir(docs_dir, layout)
        self._ensure_dir(configurations_dir, layout)
        layout.index = self._ensure_index(layout, mode, title)
        self._ensure_logo(layout)
        self._ensure_index_html(layout, mode)
        if mode.is_local:
            self._ensure_symlink(layout)
        return layout

    def _ensure_dir(self, path: Path, layout: SiteLayout) -> None:
        if path.is_dir():
            self.logger.debug("Directory exists: %s", path)
            layout.existing.append(path)
            return
        self.logger.info("Creating directory: %s", path)
        try:
            path.mkdir()
        except OSError as exc:
            raise BootstrapError("Error creating directory", path) from exc
        if not path.is_dir():
            raise BootstrapError("Error creating directory", path)
        layout.created.append(path)

    def _ensure_index(self, layout: SiteLayout, mode: ServingMode, title: str | None) -> SiteIndex:
        if layout.index_file.exists():
            self.logger.debug("index.json exists: %s", layout.index_file)
            layout.existing.append(layout.index_file)
            index = load_index(layout.index_file)
            if title and title != index.title:
                self.logger.warning(
                    "Keeping existing site title %r; --title %r is only used for new sites",
                    index.title,
                    title,
                )
            return index

        site_name = layout.root.name
        index = SiteIndex(
            title=title or site_name,
            base_url=mode.site_base_url(site_name),
            logo_image=self.logo_image,
        )
        self.logger.info("Creating index.json: %s", layout.index_file)
        write_index(layout.index_file, index)
        layout.created.append(layout.index_file)
        return index

    def _ensure_logo(self, layout: SiteLayout) -> None:
        # The default logo is copied even when index.json names a different one.
        logo_file = layout.docs_dir / DEFAULT_LOGO_FILENAME
        if logo_file.exists():
            self.logger.debug("Default logo exists: %s", logo_file)
            layout.existing.append(logo_file)
            return
        self.logger.info("Copying default logo: %s", logo_file)
        try:
            shutil.copyfile(self.templates.path(DEFAULT_LOGO_FILENAME), logo_file)
        except OSError as exc:
            raise BootstrapError("Error copying default logo file", logo_file) from exc
        if not logo_file.is_file():
            raise BootstrapError("Default logo file not copied", logo_file)
        layout.created.append(logo_file)

    def _ensure_index_html(self, layout: SiteLayout, mode: ServingMode) -> None:
        html_file = layout.docs_dir / INDEX_HTML_FILENAME
        if html_file.exists():
            self.logger.debug("index.html exists: %s", html_file)
            layout.existing.append(html_file)
            return
        self.logger.info("Generating index.html: %s", html_file)
        content = self.templates.substitute(
            INDEX_HTML_FILENAME,
            {
                "title": layout.index.title,
                "baseURL": mode.site_base_url(layout.root.name),
                "tableEditorJSInclude": mode.table_editor_include,
            },
        )
        try:
            html_file.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise BootstrapError("Error writing index.html file", html_file) from exc
        if not html_file.is_file():
            raise BootstrapError("Error writing index.html file", html_file)
        layout.created.append(html_file)

    def _ensure_symlink(self, layout: SiteLayout) -> None:
        link = layout.docs_dir / layout.root.name
        if os.path.lexists(link):
            self.logger.debug("Symlink exists: %s", link)
            layout.existing.append(link)
            return
        self.logger.info("Linking %s -> .", link)
        try:
            os.symlink(".", link)
        except OSError as exc:
            raise BootstrapError("Error creating symlink", link) from exc
        layout.created.append(link)


__all__ = ["SiteInitializer", "SiteLayout"]
