"""Derive raw-content URL prefixes from a repository's git remote."""

from __future__ import annotations

import re
import subprocess
from pathlib import Path
from typing import Callable, Iterable, Mapping

from ..config import DEFAULT_RAW_HOSTS
from ..errors import BootstrapError
from ..logging import get_logger

# Each pattern captures the hosting provider and the ``org/repo`` path.
_REMOTE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^(?:[\w.-]+@)?(?P<host>[\w.-]+):(?!//)(?P<path>[^\s]+?)(?:\.git)?/?$"),
    re.compile(
        r"^(?:https?|ssh|git)://(?:[^@/\s]+@)?(?P<host>[\w.-]+)(?::\d+)?/(?P<path>[^\s]+?)(?:\.git)?/?$"
    ),
)


def raw_prefix_for_remote(
    remote_url: str,
    branch: str,
    raw_hosts: Mapping[str, str] | None = None,
) -> str:
    """Rewrite an SSH or HTTPS remote into ``https://<raw host>/<org>/<repo>/<branch>/``.

    This is a string rewrite tuned for GitHub-style hosting, not a URL parser.
    Hosts missing from ``raw_hosts`` are mapped to ``raw.<host>``.
    """
    hosts = DEFAULT_RAW_HOSTS if raw_hosts is None else raw_hosts
    remote = remote_url.strip()
    for pattern in _REMOTE_PATTERNS:
        match = pattern.match(remote)
        if match is None:
            continue
        host = match.group("host")
        path = match.group("path").strip("/")
        raw_host = hosts.get(host)
        if raw_host is None:
            raw_host = f"raw.{host}"
            get_logger("git").warning(
                "No raw-content host known for %s; assuming %s", host, raw_host
            )
        return f"https://{raw_host}/{path}/{branch}/"
    raise BootstrapError("Unrecognised git remote URL", remote or "<empty>")


class RemoteResolver:
    """Reads the configured remote of a source checkout via ``git``."""

    def __init__(
        self,
        runner: Callable[..., str] | None = None,
        *,
        raw_hosts: Mapping[str, str] | None = None,
    ) -> None:
        self._runner = runner or self._default_runner
        self.raw_hosts = dict(raw_hosts) if raw_hosts is not None else dict(DEFAULT_RAW_HOSTS)
        self.logger = get_logger("git")

    def remote_url(self, repo_path: Path) -> str:
        try:
            output = self._runner(["git", "ls-remote", "--get-url"], cwd=repo_path)
        except (OSError, subprocess.CalledProcessError) as exc:
            raise BootstrapError(f"Unable to read git remote ({exc})", repo_path) from exc
        remote = output.strip()
        if not remote:
            raise BootstrapError("No git remote configured", repo_path)
        self.logger.debug("Remote for %s: %s", repo_path, remote)
        return remote

    def raw_prefix(self, repo_path: Path, branch: str) -> str:
        return raw_prefix_for_remote(self.remote_url(repo_path), branch, self.raw_hosts)

    @staticmethod
    def _default_runner(args: Iterable[str], *, cwd: Path) -> str:
        completed = subprocess.run(
            list(args),
            cwd=str(cwd),
            check=True,
            text=True,
            capture_output=True,
        )
        return completed.stdout


__all__ = ["RemoteResolver", "raw_prefix_for_remote"]
