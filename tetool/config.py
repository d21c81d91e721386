"""Configuration loading for tetool (.tetool.yml)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

CONFIG_FILENAME = ".tetool.yml"
DEFAULT_BRANCH = "master"
DEFAULT_LOGO = "INCA.png"
BRANCH_ENV_VAR = "TETOOL_DEFAULT_BRANCH"

HOSTED_TABLE_EDITOR_INCLUDE = (
    '<script type="text/javascript" '
    'src="https://incatools.github.io/table-editor/app.bundle.js"></script>'
)
LOCAL_TABLE_EDITOR_INCLUDE = (
    '<script type="text/javascript" src="http://localhost:8085/app.bundle.js"></script>'
)
LOCAL_RAW_PREFIX = "http://localhost:8000/"

DEFAULT_RAW_HOSTS: Dict[str, str] = {
    "github.com": "raw.githubusercontent.com",
}


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ServingConfig:
    """Settings for one way of serving the generated site."""

    table_editor_include: str
    raw_prefix: Optional[str] = None


@dataclass
class ToolConfig:
    """Represents the settings defined in .tetool.yml."""

    root: Path
    default_branch: str = DEFAULT_BRANCH
    logo_image: str = DEFAULT_LOGO
    templates_dir: Optional[Path] = None
    raw_hosts: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_RAW_HOSTS))
    hosted: ServingConfig = field(
        default_factory=lambda: ServingConfig(table_editor_include=HOSTED_TABLE_EDITOR_INCLUDE)
    )
    local: ServingConfig = field(
        default_factory=lambda: ServingConfig(
            table_editor_include=LOCAL_TABLE_EDITOR_INCLUDE,
            raw_prefix=LOCAL_RAW_PREFIX,
        )
    )


@dataclass(frozen=True)
class ServingMode:
    """Hosted or local serving, selected once per run.

    ``base_url`` of None means the base URL is derived from the site name.
    ``raw_prefix`` of None means raw-content URLs come from each source's git remote.
    """

    name: str
    base_url: Optional[str]
    raw_prefix: Optional[str]
    table_editor_include: str

    @property
    def is_local(self) -> bool:
        return self.name == "local"

    def site_base_url(self, site_name: str) -> str:
        if self.base_url is not None:
            return self.base_url
        return f"/{site_name}/"


def resolve_serving_mode(config: ToolConfig, *, local: bool) -> ServingMode:
    """Return the serving mode for this run."""
    if local:
        return ServingMode(
            name="local",
            base_url="/",
            raw_prefix=config.local.raw_prefix or LOCAL_RAW_PREFIX,
            table_editor_include=config.local.table_editor_include,
        )
    return ServingMode(
        name="hosted",
        base_url=None,
        raw_prefix=None,
        table_editor_include=config.hosted.table_editor_include,
    )


def resolve_default_branch(config: ToolConfig, override: str | None = None) -> str:
    """Pick the branch used for sources given without ``@branch``."""
    if override:
        return override
    from_env = os.environ.get(BRANCH_ENV_VAR, "").strip()
    if from_env:
        return from_env
    return config.default_branch


def load_config(config_path: Path) -> ToolConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ToolConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = ToolConfig(root=root)

    branch = _as_str(data.get("default_branch"))
    if branch:
        config.default_branch = branch

    logo = _as_str(data.get("logo_image"))
    if logo:
        config.logo_image = logo

    templates_dir = _as_str(data.get("templates_dir"))
    if templates_dir:
        config.templates_dir = (root / templates_dir).resolve()

    raw_hosts = _as_dict(data.get("raw_hosts"))
    for host, raw_host in raw_hosts.items():
        value = _as_str(raw_host)
        if value:
            config.raw_hosts[str(host)] = value

    hosted = _as_dict(data.get("hosted"))
    include = _as_str(hosted.get("table_editor_include"))
    if include:
        config.hosted.table_editor_include = include

    local = _as_dict(data.get("local"))
    include = _as_str(local.get("table_editor_include"))
    if include:
        config.local.table_editor_include = include
    raw_prefix = _as_str(local.get("raw_prefix"))
    if raw_prefix:
        config.local.raw_prefix = raw_prefix if raw_prefix.endswith("/") else raw_prefix + "/"

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None
