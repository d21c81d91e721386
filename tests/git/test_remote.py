"""Tests for the git remote resolver."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from tetool.errors import BootstrapError
from tetool.git.remote import RemoteResolver, raw_prefix_for_remote


@pytest.mark.parametrize(
    "remote",
    [
        "git@github.com:org/repo.git",
        "git@github.com:org/repo",
        "https://github.com/org/repo",
        "https://github.com/org/repo.git",
        "https://github.com/org/repo/",
        "ssh://git@github.com/org/repo.git",
    ],
)
def test_raw_prefix_for_github_remotes(remote: str) -> None:
    assert raw_prefix_for_remote(remote, "dev") == "https://raw.githubusercontent.com/org/repo/dev/"


def test_raw_prefix_uses_configured_host_map() -> None:
    prefix = raw_prefix_for_remote(
        "https://git.example.org/team/onto.git",
        "main",
        {"git.example.org": "files.example.org"},
    )
    assert prefix == "https://files.example.org/team/onto/main/"


def test_raw_prefix_falls_back_to_raw_subdomain() -> None:
    prefix = raw_prefix_for_remote("git@code.example.org:team/onto.git", "main")
    assert prefix == "https://raw.code.example.org/team/onto/main/"


def test_raw_prefix_rejects_unrecognised_remote() -> None:
    with pytest.raises(BootstrapError, match="Unrecognised git remote URL"):
        raw_prefix_for_remote("/srv/git/onto", "main")


def test_resolver_runs_ls_remote_in_source_dir(tmp_path: Path) -> None:
    calls = []

    def runner(args, cwd):  # type: ignore[no-untyped-def]
        calls.append((list(args), Path(cwd)))
        return "git@github.com:obophenotype/uberon.git\n"

    resolver = RemoteResolver(runner=runner)
    prefix = resolver.raw_prefix(tmp_path, "master")

    assert calls == [(["git", "ls-remote", "--get-url"], tmp_path)]
    assert prefix == "https://raw.githubusercontent.com/obophenotype/uberon/master/"


def test_resolver_wraps_git_failures(tmp_path: Path) -> None:
    def runner(args, cwd):  # type: ignore[no-untyped-def]
        raise subprocess.CalledProcessError(128, list(args))

    with pytest.raises(BootstrapError, match="Unable to read git remote"):
        RemoteResolver(runner=runner).remote_url(tmp_path)


def test_resolver_rejects_empty_remote(tmp_path: Path) -> None:
    resolver = RemoteResolver(runner=lambda args, cwd: "\n")

    with pytest.raises(BootstrapError, match="No git remote configured"):
        resolver.remote_url(tmp_path)
