"""Locate the pattern and tabular directories of an ontology source repository."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from .config import DEFAULT_BRANCH, ServingMode
from .errors import BootstrapError
from .git.remote import RemoteResolver
from .logging import get_logger
from .models import SourceLayout, SourceSpec


@dataclass(frozen=True)
class CandidateDir:
    """A conventional location for content inside a source repository."""

    relative: str

    def matches(self, root: Path) -> bool:
        return (root / self.relative).is_dir()


# Ordered by priority; ontology repositories have used each of these layouts.
PATTERN_DIR_CANDIDATES: Sequence[CandidateDir] = (
    CandidateDir("src/patterns"),
    CandidateDir("patterns"),
    CandidateDir("src/ontology/patterns"),
)

XSV_DIR_CANDIDATES: Sequence[CandidateDir] = (
    CandidateDir("src/ontology/modules"),
    CandidateDir("patterns"),
)

VCS_DIRNAME = ".git"


def parse_source_spec(token: str, default_branch: str = DEFAULT_BRANCH) -> SourceSpec:
    """Parse ``path[@branch]``; the split happens on the last ``@``."""
    path_part, sep, branch = token.rpartition("@")
    if not sep:
        path_part, branch = token, ""
    if not path_part:
        raise BootstrapError("Empty source path", token)
    path = Path(path_part).expanduser().resolve()
    if not path.name:
        raise BootstrapError("Source path has no directory name to use as a configuration name", token)
    return SourceSpec(path=path, branch=branch or default_branch)


def first_match(root: Path, candidates: Sequence[CandidateDir]) -> CandidateDir | None:
    for candidate in candidates:
        if candidate.matches(root):
            return candidate
    return None


class SourceScanner:
    """Validates a source checkout and resolves its content directories."""

    def __init__(self, resolver: RemoteResolver | None = None) -> None:
        self.resolver = resolver or RemoteResolver()
        self.logger = get_logger("source")

    def scan(self, source: SourceSpec, mode: ServingMode) -> SourceLayout:
        root = source.path
        if not root.is_dir():
            raise BootstrapError("Source directory does not exist", root)
        if not (root / VCS_DIRNAME).is_dir():
            raise BootstrapError("Source directory is not a git repository", root)

        if mode.raw_prefix is not None:
            raw_prefix = mode.raw_prefix
        else:
            raw_prefix = self.resolver.raw_prefix(root, source.branch)
        self.logger.debug("Raw prefix for %s: %s", root.name, raw_prefix)

        patterns = first_match(root, PATTERN_DIR_CANDIDATES)
        if patterns is None:
            raise BootstrapError(
                "No patterns directory (tried "
                + ", ".join(c.relative for c in PATTERN_DIR_CANDIDATES)
                + ")",
                root,
            )
        xsvs = first_match(root, XSV_DIR_CANDIDATES)
        if xsvs is None:
            raise BootstrapError(
                "No tabular data directory (tried "
                + ", ".join(c.relative for c in XSV_DIR_CANDIDATES)
                + ")",
                root,
            )

        self.logger.info(
            "Source %s: patterns in %s, tabular files in %s", root.name, patterns.relative, xsvs.relative
        )
        return SourceLayout(
            root=root,
            raw_prefix=raw_prefix,
            patterns_dir=patterns.relative,
            xsv_dir=xsvs.relative,
        )


__all__ = [
    "PATTERN_DIR_CANDIDATES",
    "XSV_DIR_CANDIDATES",
    "CandidateDir",
    "SourceScanner",
    "first_match",
    "parse_source_spec",
]
