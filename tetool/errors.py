"""Error types raised while bootstrapping a site."""

from __future__ import annotations

from pathlib import Path


class BootstrapError(RuntimeError):
    """Raised when a required precondition fails and the run must stop."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        self.path = Path(path) if path is not None else None
        if path is not None:
            message = f"{message}: {path}"
        super().__init__(message)


__all__ = ["BootstrapError"]
