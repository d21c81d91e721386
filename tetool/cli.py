"""CLI entrypoint for tetool."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError
from .errors import BootstrapError
from .logging import configure_logging
from .models import RunOutcome
from .orchestrator import Orchestrator


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tetool",
        description="Bootstrap a table-editor documentation site from ontology repositories.",
    )
    parser.add_argument(
        "--site",
        help="Site root directory; docs/ is created inside it.",
    )
    parser.add_argument(
        "--title",
        help="Site title for a new site (defaults to the site directory name).",
    )
    parser.add_argument(
        "--source",
        dest="sources",
        action="append",
        default=[],
        metavar="SOURCE[@BRANCH]",
        help="Ontology repository to publish; may be repeated.",
    )
    parser.add_argument(
        "--local",
        action="store_true",
        help="Serve from local development servers instead of the hosted bundle and raw URLs.",
    )
    parser.add_argument(
        "--default-branch",
        help="Branch for sources given without @BRANCH (overrides .tetool.yml).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Also write log records to this file.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for tetool."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not args.site:
        parser.print_usage()
        parser.exit(0)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    orchestrator = Orchestrator()
    try:
        outcome = orchestrator.run(
            args.site,
            args.sources,
            title=args.title,
            local=bool(args.local),
            default_branch=args.default_branch,
        )
    except (BootstrapError, ConfigError) as exc:
        parser.exit(1, f"tetool: {exc}\n")
    _print_summary(outcome)


def _print_summary(outcome: RunOutcome) -> None:
    print(f"Site ready at {_relativize(outcome.site_dir)}")
    for entry in outcome.configurations:
        print(f"  configuration {entry.config_name}: {_relativize(entry.menu_file)}")
    if outcome.created:
        print(f"{len(outcome.created)} file(s) created, {len(outcome.existing)} already present")
    else:
        print("Nothing to create; site already up to date")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
