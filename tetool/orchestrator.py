"""Pipeline orchestration: site initialisation, source scanning, menus and index."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Sequence

from .config import (
    CONFIG_FILENAME,
    ServingMode,
    ToolConfig,
    load_config,
    resolve_default_branch,
    resolve_serving_mode,
)
from .errors import BootstrapError
from .git.remote import RemoteResolver
from .index import update_index
from .logging import get_logger
from .menu import MenuGenerator
from .models import ConfigEntry, RunOutcome, SourceSpec
from .site import SiteInitializer
from .source_scanner import SourceScanner, parse_source_spec
from .templates import TemplateLibrary


class Orchestrator:
    """Runs one bootstrap pass over a site root and its sources."""

    def __init__(
        self,
        site_initializer: SiteInitializer | None = None,
        scanner: SourceScanner | None = None,
        menu_generator: MenuGenerator | None = None,
        resolver: RemoteResolver | None = None,
    ) -> None:
        self._site_initializer = site_initializer
        self._scanner = scanner
        self._menu_generator = menu_generator
        self._resolver = resolver
        self.logger = get_logger("orchestrator")

    def run(
        self,
        site_root: str | Path,
        sources: Sequence[str] = (),
        *,
        title: str | None = None,
        local: bool = False,
        default_branch: str | None = None,
    ) -> RunOutcome:
        root = Path(site_root).expanduser().resolve()
        if not root.is_dir():
            raise BootstrapError("Site root directory does not exist", site_root)
        self.logger.info("Bootstrapping site at %s", root)

        config = load_config(root / CONFIG_FILENAME)
        mode = resolve_serving_mode(config, local=local)
        branch = resolve_default_branch(config, default_branch)
        self.logger.debug("Serving mode %s, default branch %s", mode.name, branch)

        templates = TemplateLibrary(config.templates_dir)
        initializer = self._site_initializer or SiteInitializer(templates, logo_image=config.logo_image)
        layout = initializer.initialize(root, mode, title=title)
        outcome = RunOutcome(
            site_dir=layout.docs_dir,
            index_file=layout.index_file,
            created=list(layout.created),
            existing=list(layout.existing),
        )

        scanner = self._scanner or SourceScanner(self._build_resolver(config))
        menu_generator = self._menu_generator or MenuGenerator(templates)
        for spec in self._parse_sources(sources, branch):
            entry = self._process_source(spec, scanner, menu_generator, layout.configurations_dir, mode, outcome)
            outcome.configurations.append(entry)

        update_index(layout.index_file, layout.index, self._config_names(outcome.configurations))
        return outcome

    def _process_source(
        self,
        spec: SourceSpec,
        scanner: SourceScanner,
        menu_generator: MenuGenerator,
        configurations_dir: Path,
        mode: ServingMode,
        outcome: RunOutcome,
    ) -> ConfigEntry:
        self.logger.info("Processing source %s@%s", spec.path, spec.branch)
        source_layout = scanner.scan(spec, mode)

        entry = ConfigEntry.for_source(configurations_dir, spec.config_name)
        if menu_generator.ensure_config_dir(entry):
            outcome.created.append(entry.config_file)
        else:
            outcome.existing.append(entry.config_file)

        if menu_generator.write_menu(entry, source_layout) is not None:
            outcome.created.append(entry.menu_file)
        else:
            outcome.existing.append(entry.menu_file)
        return entry

    def _build_resolver(self, config: ToolConfig) -> RemoteResolver:
        if self._resolver is not None:
            return self._resolver
        return RemoteResolver(raw_hosts=config.raw_hosts)

    @staticmethod
    def _parse_sources(tokens: Iterable[str], default_branch: str) -> List[SourceSpec]:
        return [parse_source_spec(token, default_branch) for token in tokens]

    @staticmethod
    def _config_names(entries: Iterable[ConfigEntry]) -> List[str]:
        return [entry.config_name for entry in entries]


__all__ = ["Orchestrator"]
