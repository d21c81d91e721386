"""Core data models shared across tetool components."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List


@dataclass
class SiteIndex:
    """Contents of ``docs/configurations/index.json``."""

    title: str
    base_url: str
    logo_image: str
    config_names: List[str] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)

    def add_config(self, name: str) -> bool:
        """Append ``name`` unless already registered; return True when added."""
        if name in self.config_names:
            return False
        self.config_names.append(name)
        return True

    def to_json(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "configNames": list(self.config_names),
            "logoImage": self.logo_image,
            "baseURL": self.base_url,
            "title": self.title,
        }
        for key, value in self.extra.items():
            payload.setdefault(key, value)
        return payload


@dataclass(frozen=True)
class SourceSpec:
    """A ``path[@branch]`` token from the command line."""

    path: Path
    branch: str

    @property
    def config_name(self) -> str:
        return self.path.name


@dataclass(frozen=True)
class SourceLayout:
    """Resolved content directories inside a source repository."""

    root: Path
    raw_prefix: str
    patterns_dir: str
    xsv_dir: str


@dataclass
class DiscoveredFileSet:
    """Relative file paths found under the patterns and tabular directories."""

    patterns: List[str] = field(default_factory=list)
    xsvs: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ConfigEntry:
    """Filesystem locations for one configuration under ``docs/configurations``."""

    config_name: str
    config_dir: Path
    config_file: Path
    menu_file: Path

    @classmethod
    def for_source(cls, configurations_dir: Path, config_name: str) -> "ConfigEntry":
        config_dir = configurations_dir / config_name
        return cls(
            config_name=config_name,
            config_dir=config_dir,
            config_file=config_dir / "config.yaml",
            menu_file=config_dir / "menu.yaml",
        )


@dataclass(frozen=True)
class MenuEntry:
    url: str
    title: str


@dataclass
class MenuDocument:
    """Menu of pattern and tabular files offered by a configuration."""

    default_patterns: List[MenuEntry] = field(default_factory=list)
    default_xsvs: List[MenuEntry] = field(default_factory=list)


@dataclass
class RunOutcome:
    """Summary of one bootstrap invocation."""

    site_dir: Path
    index_file: Path
    configurations: List[ConfigEntry] = field(default_factory=list)
    created: List[Path] = field(default_factory=list)
    existing: List[Path] = field(default_factory=list)
