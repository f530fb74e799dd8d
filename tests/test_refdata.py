"""Tests for the reference-data loaders, helpers, and fetcher."""

from __future__ import annotations

import json
import sys
from dataclasses import replace
from pathlib import Path
from types import MappingProxyType
from typing import Tuple

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.refdata.config import (
    COMPOSITE_SCRIPTS,
    DECLARATION_OVERRIDES,
    REDUNDANT_CODES,
    BuildConfig,
    RemoteSource,
)
from src.refdata.download import fetch_reference_data, fetch_source
from src.refdata.helpers import collect_values, ensure_mapping, first_paragraph, parse_author, to_int
from src.refdata.io import metadata_path, read_json, read_metadata, sha256sum, write_json
from src.refdata.loader import (
    discover_packages,
    load_corpus_index,
    load_package_descriptor,
    load_reference_data,
    load_registry,
    load_trigrams,
)


# ---------------------------------------------------------------------------
# Helper utility tests


def test_to_int_accepts_multiple_types() -> None:
    assert to_int(3) == 3
    assert to_int(True) == 1
    assert to_int("7") == 7
    with pytest.raises(ValueError):
        to_int(None)
    with pytest.raises(ValueError):
        to_int("many")


def test_ensure_mapping_rejects_invalid() -> None:
    assert ensure_mapping({"a": 1}) == {"a": 1}
    with pytest.raises(TypeError):
        ensure_mapping(42)


def test_collect_values_walks_nested_declaration() -> None:
    declaration = {
        "title": "Universal Declaration",
        "preamble": {"para": "First."},
        "article": [
            {"para": ["Second", " part."]},
            {"list": [{"para": "Third."}]},
        ],
    }
    assert collect_values(declaration, "para") == ["First.", "Second", " part.", "Third."]


def test_first_paragraph() -> None:
    assert first_paragraph({"para": "Hello"}) == "Hello"
    assert first_paragraph({"para": ""}) is None
    assert first_paragraph(None) is None


def test_parse_author() -> None:
    assert parse_author("Titus Wormer <tituswormer@gmail.com> (https://wooorm.com)") == {
        "name": "Titus Wormer",
        "email": "tituswormer@gmail.com",
        "url": "https://wooorm.com",
    }
    assert parse_author("Jane Doe") == {"name": "Jane Doe", "email": "", "url": ""}


def test_build_config_freezes_tables() -> None:
    config = BuildConfig(redundant_codes={"npi": "covered"}, excluded_codes={"pes"})  # type: ignore[arg-type]
    assert isinstance(config.redundant_codes, MappingProxyType)
    assert config.excluded_codes == frozenset({"pes"})
    with pytest.raises(TypeError):
        config.redundant_codes["yue"] = "nope"  # type: ignore[index]


def test_build_config_defaults_are_read_only_tables() -> None:
    config = BuildConfig()

    assert config.declaration_overrides == DECLARATION_OVERRIDES
    assert config.composite_scripts == COMPOSITE_SCRIPTS
    assert config.redundant_codes == REDUNDANT_CODES
    assert config.script_additions["ori"] == "Oriya"
    for name in (
        "declaration_overrides",
        "composite_speakers",
        "script_additions",
        "composite_labels",
        "composite_scripts",
        "redundant_codes",
        "custom_fixtures",
    ):
        assert isinstance(getattr(config, name), MappingProxyType)
    assert replace(config, fixture_length=10).redundant_codes == REDUNDANT_CODES


def test_build_config_validates_floor() -> None:
    with pytest.raises(ValueError):
        BuildConfig(usage_floor=1.5)


# ---------------------------------------------------------------------------
# Loader tests


def test_load_registry_maps_types(reference_tree: Tuple[Path, Path]) -> None:
    raw_root, _ = reference_tree
    registry = load_registry(raw_root / "iso-639-3.tab")
    by_code = {entry.code: entry for entry in registry}

    assert registry[0].code == "aaa"
    assert by_code["eng"].name == "English"
    assert by_code["eng"].type == "living"
    assert by_code["qaa"].type == "special"
    assert by_code["lat"].type == "other"


def test_load_registry_requires_columns(tmp_path: Path) -> None:
    path = tmp_path / "iso-639-3.tab"
    path.write_text("Id\tName\naaa\tAlpha\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Language_Type"):
        load_registry(path)


def test_load_registry_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_registry(tmp_path / "iso-639-3.tab")


def test_load_corpus_index_normalizes_blank_codes(tmp_path: Path) -> None:
    path = tmp_path / "index.json"
    path.write_text(json.dumps({"nnn": {"iso": "", "code": "nnn", "name": "Nameless"}}), encoding="utf-8")
    entry = load_corpus_index(path)["nnn"]
    assert entry.iso is None
    assert entry.code == "nnn"


def test_load_trigrams_keeps_order(tmp_path: Path) -> None:
    path = tmp_path / "trigrams.json"
    path.write_text(json.dumps({"eng": ["the", "he ", " th"]}), encoding="utf-8")
    assert load_trigrams(path) == {"eng": ("the", "he ", " th")}


def test_read_json_reports_malformed_file(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{", encoding="utf-8")
    with pytest.raises(ValueError, match="broken.json"):
        read_json(path)


def test_load_reference_data(reference_tree: Tuple[Path, Path]) -> None:
    raw_root, _ = reference_tree
    data = load_reference_data(raw_root)

    assert data.speakers["eng"] == 1000
    assert data.corpus_index["cmn_hans"].iso == "cmn"
    assert data.declarations["rus"]["preamble"]["para"] == "Принимая во внимание"
    assert data.trigrams["rus"] == (" пр", "при")


def test_load_package_descriptor(reference_tree: Tuple[Path, Path]) -> None:
    _, packages_root = reference_tree
    descriptor = load_package_descriptor(packages_root / "franc-curated" / "package.json")

    assert descriptor is not None
    assert descriptor.threshold == -1
    assert not descriptor.filters_by_speakers
    assert descriptor.included_languages == frozenset({"deu", "aaa", "ori"})
    assert descriptor.directory == packages_root / "franc-curated"


def test_load_package_descriptor_rejects_bad_threshold(tmp_path: Path) -> None:
    path = tmp_path / "package.json"
    path.write_text(json.dumps({"name": "broken", "threshold": -5}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_package_descriptor(path)


def test_load_package_descriptor_reads_structured_fields(tmp_path: Path) -> None:
    path = tmp_path / "package.json"
    path.write_text(
        json.dumps(
            {
                "name": "franc-all",
                "threshold": 1000000,
                "author": {"name": "Jane Doe", "url": "https://example.com"},
                "repository": {"type": "git", "url": "https://example.com/repo"},
            }
        ),
        encoding="utf-8",
    )
    descriptor = load_package_descriptor(path)
    assert descriptor is not None
    assert descriptor.author == "Jane Doe (https://example.com)"
    assert descriptor.repository == "https://example.com/repo"


def test_discover_packages_skips_unbuilt_and_hidden(reference_tree: Tuple[Path, Path]) -> None:
    _, packages_root = reference_tree
    (packages_root / ".cache").mkdir()
    (packages_root / "notes").mkdir()

    names = [descriptor.name for descriptor in discover_packages(packages_root)]
    assert names == ["franc", "franc-curated", "franc-min"]


# ---------------------------------------------------------------------------
# IO and fetch tests


def test_write_json_keeps_order_and_unicode(tmp_path: Path) -> None:
    path = tmp_path / "out" / "data.json"
    write_json(path, {"b": "при", "a": 1})
    assert path.read_text(encoding="utf-8") == '{\n  "b": "при",\n  "a": 1\n}\n'


def test_fetch_source_downloads_and_records_checksum(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    calls = []

    def fake_download(url: str, dest: Path) -> None:
        calls.append(url)
        dest.write_text("0041..005A    ; Latin\n", encoding="utf-8")

    monkeypatch.setattr("src.refdata.download.download_stream", fake_download)
    source: RemoteSource = {"url": "https://example.com/Scripts.txt", "file_name": "Scripts.txt"}

    target = fetch_source(tmp_path, source)
    meta = read_metadata(metadata_path(target))

    assert calls == ["https://example.com/Scripts.txt"]
    assert meta["sha256"] == sha256sum(target)
    assert meta["url"] == source["url"]

    fetch_source(tmp_path, source)
    assert len(calls) == 1

    fetch_source(tmp_path, source, force=True)
    assert len(calls) == 2


def test_fetch_source_wraps_network_errors(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    def failing_download(url: str, dest: Path) -> None:
        raise OSError("offline")

    monkeypatch.setattr("src.refdata.download.download_stream", failing_download)
    source: RemoteSource = {"url": "https://example.com/iso.tab", "file_name": "iso-639-3.tab"}
    with pytest.raises(RuntimeError, match="iso-639-3.tab"):
        fetch_source(tmp_path, source)


def test_fetch_reference_data_fetches_every_source(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    fetched = []
    monkeypatch.setattr(
        "src.refdata.download.fetch_source",
        lambda root, source, force: fetched.append((root, source["file_name"], force)) or root / source["file_name"],
    )

    paths = fetch_reference_data(tmp_path / "raw", force=True)

    assert [name for _, name, _ in fetched] == ["Scripts.txt", "iso-639-3.tab"]
    assert all(force for _, _, force in fetched)
    assert paths == [tmp_path / "raw" / "Scripts.txt", tmp_path / "raw" / "iso-639-3.tab"]
