"""Access to the bundled site templates."""

from __future__ import annotations

from pathlib import Path
from typing import List, Mapping

from .errors import BootstrapError

BUNDLED_TEMPLATES_DIR = Path(__file__).with_name("templates")


class TemplateLibrary:
    """Looks up template files, preferring a user directory over the bundled set."""

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.directories = self._ordered_directories(templates_dir)

    def path(self, name: str) -> Path:
        """Return the first existing template file called ``name``."""
        for directory in self.directories:
            candidate = directory / name
            if candidate.is_file():
                return candidate
        raise BootstrapError("Template not found", name)

    def read_text(self, name: str) -> str:
        return self.path(name).read_text(encoding="utf-8")

    def substitute(self, name: str, values: Mapping[str, str]) -> str:
        """Replace each ``${key}`` token in the template with its value."""
        text = self.read_text(name)
        for key, value in values.items():
            text = text.replace("${" + key + "}", value)
        return text

    @staticmethod
    def _ordered_directories(templates_dir: Path | None) -> List[Path]:
        if templates_dir is None or templates_dir == BUNDLED_TEMPLATES_DIR:
            return [BUNDLED_TEMPLATES_DIR]
        return [templates_dir, BUNDLED_TEMPLATES_DIR]


__all__ = ["BUNDLED_TEMPLATES_DIR", "TemplateLibrary"]
