"""Tests for tetool.menu."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
import yaml

from tests._fixtures.source_builder import SourceBuilder
from tetool.errors import BootstrapError
from tetool.menu import (
    MenuGenerator,
    build_menu,
    discover_files,
    list_pattern_files,
    list_xsv_files,
    xsv_title,
)
from tetool.models import ConfigEntry, DiscoveredFileSet, SourceLayout

PREFIX = "https://raw.githubusercontent.com/org/onto/master/"


def _layout(root: Path, patterns_dir: str = "src/patterns", xsv_dir: str = "src/ontology/modules") -> SourceLayout:
    return SourceLayout(root=root, raw_prefix=PREFIX, patterns_dir=patterns_dir, xsv_dir=xsv_dir)


def test_pattern_files_keep_only_yaml(
    source_builder: SourceBuilder, caplog: pytest.LogCaptureFixture
) -> None:
    root = source_builder.create(
        "onto",
        {"src/patterns/a.yaml": "a: 1\n", "src/patterns/b.txt": "b\n", "src/patterns/c.yaml": "c: 1\n"},
    )

    with caplog.at_level(logging.WARNING, logger="tetool"):
        found = list_pattern_files(root / "src/patterns")

    assert found == ["a.yaml", "c.yaml"]
    assert any("b.txt" in record.getMessage() for record in caplog.records)


def test_pattern_files_require_exact_extension(source_builder: SourceBuilder) -> None:
    root = source_builder.create(
        "onto", {"src/patterns/a.yml": "", "src/patterns/b.YAML": "", "src/patterns/c.yaml": ""}
    )

    assert list_pattern_files(root / "src/patterns") == ["c.yaml"]


def test_xsv_files_follow_subdirectory_convention(source_builder: SourceBuilder) -> None:
    root = source_builder.create(
        "onto",
        {
            "modules/foo.csv": "id,label\n",
            "modules/bar/bar.tsv": "id\tlabel\n",
            "modules/qux/qux.csv": "id\n",
            "modules/qux/qux.tsv": "id\n",
            "modules/notes.md": "notes\n",
        },
        dirs=["modules/baz"],
    )

    found = list_xsv_files(root / "modules")

    assert found == ["bar/bar.tsv", "foo.csv", "qux/qux.csv"]


def test_xsv_title_special_cases_nested_files() -> None:
    assert xsv_title("foo.csv") == "foo.csv"
    assert xsv_title("bar/bar.tsv") == "bar.tsv"


def test_build_menu_composes_urls_and_titles(tmp_path: Path) -> None:
    files = DiscoveredFileSet(patterns=["a.yaml"], xsvs=["foo.csv", "bar/bar.tsv"])

    menu = build_menu(_layout(tmp_path), files)

    assert [(e.url, e.title) for e in menu.default_patterns] == [
        (PREFIX + "src/patterns/a.yaml", "a.yaml"),
    ]
    assert [(e.url, e.title) for e in menu.default_xsvs] == [
        (PREFIX + "src/ontology/modules/foo.csv", "foo.csv"),
        (PREFIX + "src/ontology/modules/bar/bar.tsv", "bar.tsv"),
    ]


def test_write_menu_renders_yaml_once(source_builder: SourceBuilder, tmp_path: Path) -> None:
    root = source_builder.create(
        "onto",
        {
            "src/patterns/a.yaml": "",
            "src/patterns/b.txt": "",
            "src/patterns/c.yaml": "",
            "src/ontology/modules/foo.csv": "",
            "src/ontology/modules/bar/bar.tsv": "",
        },
        dirs=["src/ontology/modules/baz"],
    )
    configurations = tmp_path / "configurations"
    configurations.mkdir()
    entry = ConfigEntry.for_source(configurations, "onto")
    generator = MenuGenerator()

    assert generator.ensure_config_dir(entry) is True
    menu = generator.write_menu(entry, _layout(root))

    assert menu is not None
    document = yaml.safe_load(entry.menu_file.read_text(encoding="utf-8"))
    assert document["defaultPatterns"] == [
        {"url": PREFIX + "src/patterns/a.yaml", "title": "a.yaml"},
        {"url": PREFIX + "src/patterns/c.yaml", "title": "c.yaml"},
    ]
    assert document["defaultXSVs"] == [
        {"url": PREFIX + "src/ontology/modules/bar/bar.tsv", "title": "bar.tsv"},
        {"url": PREFIX + "src/ontology/modules/foo.csv", "title": "foo.csv"},
    ]

    (root / "src/patterns/d.yaml").write_text("", encoding="utf-8")
    before = entry.menu_file.read_bytes()
    assert generator.write_menu(entry, _layout(root)) is None
    assert entry.menu_file.read_bytes() == before


def test_empty_directories_render_empty_lists(source_builder: SourceBuilder, tmp_path: Path) -> None:
    root = source_builder.create("onto", dirs=["src/patterns", "src/ontology/modules"])
    entry = ConfigEntry.for_source(tmp_path, "onto")
    generator = MenuGenerator()
    generator.ensure_config_dir(entry)

    generator.write_menu(entry, _layout(root))

    document = yaml.safe_load(entry.menu_file.read_text(encoding="utf-8"))
    assert document == {"defaultPatterns": [], "defaultXSVs": []}


def test_config_yaml_is_copied_once(tmp_path: Path) -> None:
    entry = ConfigEntry.for_source(tmp_path, "onto")
    generator = MenuGenerator()

    assert generator.ensure_config_dir(entry) is True
    entry.config_file.write_text("edited: true\n", encoding="utf-8")

    assert generator.ensure_config_dir(entry) is False
    assert entry.config_file.read_text(encoding="utf-8") == "edited: true\n"


def test_discover_files_reads_both_directories(source_builder: SourceBuilder) -> None:
    root = source_builder.create("onto", {"patterns/x.yaml": "", "patterns/y.tsv": ""})

    files = discover_files(_layout(root, patterns_dir="patterns", xsv_dir="patterns"))

    assert files.patterns == ["x.yaml"]
    assert files.xsvs == ["y.tsv"]


def test_menu_yaml_round_trips_unusual_file_names(source_builder: SourceBuilder, tmp_path: Path) -> None:
    names = ["a\x07b.yaml", "c\nd.yaml", "e: #f.yaml", "'quoted\".yaml", "ünïcode.yaml"]
    root = source_builder.create("onto", dirs=["src/patterns", "src/ontology/modules"])
    for name in names:
        (root / "src/patterns" / name).write_text("", encoding="utf-8")
    (root / "src/ontology/modules" / "key: value.csv").write_text("", encoding="utf-8")
    entry = ConfigEntry.for_source(tmp_path, "onto")
    generator = MenuGenerator()
    generator.ensure_config_dir(entry)

    generator.write_menu(entry, _layout(root))

    document = yaml.safe_load(entry.menu_file.read_text(encoding="utf-8"))
    assert [item["title"] for item in document["defaultPatterns"]] == sorted(names)
    assert [item["url"] for item in document["defaultPatterns"]] == [
        PREFIX + "src/patterns/" + name for name in sorted(names)
    ]
    assert document["defaultXSVs"] == [
        {"url": PREFIX + "src/ontology/modules/key: value.csv", "title": "key: value.csv"}
    ]


def test_menu_keys_keep_document_order(tmp_path: Path) -> None:
    text = MenuGenerator.render(build_menu(_layout(tmp_path), DiscoveredFileSet(patterns=["a.yaml"])))

    assert text.index("defaultPatterns:") < text.index("defaultXSVs:")
    assert text.index("url:") < text.index("title:")


def test_unlistable_directory_is_fatal(tmp_path: Path) -> None:
    not_a_dir = tmp_path / "patterns"
    not_a_dir.write_text("", encoding="utf-8")

    with pytest.raises(BootstrapError, match="Unable to list directory"):
        list_pattern_files(not_a_dir)


def test_permission_error_while_listing_is_fatal(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    def deny(self):  # type: ignore[no-untyped-def]
        raise PermissionError(13, "Permission denied", str(self))

    monkeypatch.setattr(Path, "iterdir", deny)

    with pytest.raises(BootstrapError) as excinfo:
        list_xsv_files(tmp_path)
    assert "Permission denied" in str(excinfo.value)
    assert excinfo.value.path == tmp_path
