from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from tests._fixtures.source_builder import SourceBuilder


@pytest.fixture
def source_builder(tmp_path: Path) -> SourceBuilder:
    """Provide a reusable source repository builder rooted at the pytest tmp_path."""
    return SourceBuilder(tmp_path)


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """Provide an empty site root directory named like a real project."""
    root = tmp_path / "my-site"
    root.mkdir()
    return root


@pytest.fixture(autouse=True)
def _clear_branch_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("TETOOL_DEFAULT_BRANCH", raising=False)


@pytest.fixture(autouse=True)
def _reset_tetool_logger() -> Iterator[None]:
    yield
    logger = logging.getLogger("tetool")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
