"""Reading and writing the site's configuration index (index.json)."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List

from .config import DEFAULT_LOGO
from .errors import BootstrapError
from .logging import get_logger
from .models import SiteIndex

INDEX_FILENAME = "index.json"

_KNOWN_KEYS = ("configNames", "logoImage", "baseURL", "title")

logger = get_logger("index")


def dump_index(index: SiteIndex) -> str:
    """Serialise ``index`` the same way on every run so rewrites are stable."""
    return json.dumps(index.to_json(), indent=2, ensure_ascii=False) + "\n"


def write_index(path: Path, index: SiteIndex) -> None:
    try:
        path.write_text(dump_index(index), encoding="utf-8")
    except OSError as exc:
        raise BootstrapError("Error writing index file", path) from exc
    if not path.is_file():
        raise BootstrapError("Error creating index file", path)


def load_index(path: Path) -> SiteIndex:
    """Load an existing index.json; its values are authoritative."""
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise BootstrapError(f"Unreadable index file ({exc})", path) from exc

    if not isinstance(payload, dict):
        raise BootstrapError("Index file must contain a JSON object", path)

    names = payload.get("configNames", [])
    if not isinstance(names, list) or not all(isinstance(name, str) for name in names):
        raise BootstrapError("Index file configNames must be a list of strings", path)

    extra: Dict[str, Any] = {key: value for key, value in payload.items() if key not in _KNOWN_KEYS}
    return SiteIndex(
        title=_as_str(payload.get("title"), ""),
        base_url=_as_str(payload.get("baseURL"), "/"),
        logo_image=_as_str(payload.get("logoImage"), DEFAULT_LOGO),
        config_names=_unique(names),
        extra=extra,
    )


def update_index(path: Path, index: SiteIndex, config_names: Iterable[str]) -> List[str]:
    """Register ``config_names`` and persist the index; return the newly added names."""
    added = [name for name in config_names if index.add_config(name)]
    for name in added:
        logger.info("Registered configuration %s", name)
    write_index(path, index)
    logger.debug("index.json written: %s", path)
    return added


def _as_str(value: Any, default: str) -> str:
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        return default
    return str(value)


def _unique(names: Iterable[str]) -> List[str]:
    seen: set[str] = set()
    ordered: List[str] = []
    for name in names:
        if name not in seen:
            ordered.append(name)
            seen.add(name)
    return ordered


__all__ = ["INDEX_FILENAME", "dump_index", "load_index", "update_index", "write_index"]
