"""Static configuration for reference-data paths and the curation tables used by the build."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import FrozenSet, Mapping, Tuple, TypedDict


class RemoteSource(TypedDict):
    url: str
    file_name: str


# Default directories used by the Typer CLI; callers may override these.
DEFAULT_RAW_ROOT = Path("data/raw")
DEFAULT_PACKAGES_ROOT = Path("packages")
DEFAULT_FIXTURES_PATH = Path("test/fixtures.json")

# ---------------------------------------------------------------------------
# Reference files inside the raw root.

SCRIPTS_FILE = "Scripts.txt"
REGISTRY_FILE = "iso-639-3.tab"
SPEAKERS_FILE = "speakers.json"
CORPUS_INDEX_FILE = "udhr/index.json"
DECLARATIONS_FILE = "udhr/declarations.json"
TRIGRAMS_FILE = "trigrams.json"
PACKAGE_MANIFEST = "package.json"

UNICODE_SCRIPTS: RemoteSource = {
    "url": "https://www.unicode.org/Public/UCD/latest/ucd/Scripts.txt",
    "file_name": SCRIPTS_FILE,
}

ISO_639_3: RemoteSource = {
    "url": "https://iso639-3.sil.org/sites/iso639-3/files/downloads/iso-639-3.tab",
    "file_name": REGISTRY_FILE,
}

REMOTE_SOURCES: Tuple[RemoteSource, ...] = (UNICODE_SCRIPTS, ISO_639_3)

# ---------------------------------------------------------------------------
# Curation tables.

# Codes too close to a sibling in the declaration corpus to be told apart.
# `pes` (Western Persian) and `prs` (Dari) are folded into `fas`.
EXCLUDED_CODES: FrozenSet[str] = frozenset({"pes", "prs"})

# ISO code -> declaration keys, consulted before searching the corpus index.
DECLARATION_OVERRIDES: Mapping[str, Tuple[str, ...]] = MappingProxyType(
    {
        "cmn": ("cmn_hans",),
    }
)

# Macrolanguages whose speaker count is the sum of their tracked members.
COMPOSITE_SPEAKERS: Mapping[str, Tuple[str, ...]] = MappingProxyType(
    {
        "fas": ("prs", "pes"),
    }
)

# Codes whose declaration text is missing or misread by the usage heuristic.
SCRIPT_ADDITIONS: Mapping[str, str] = MappingProxyType(
    {
        "tel": "Telugu",
        "ori": "Oriya",
        "sin": "Sinhala",
        "sat": "Ol_Chiki",
    }
)

JAPANESE_GROUP = "Hiragana, Katakana, and Han"

# Codes written across several scripts that act as one detection unit.
COMPOSITE_LABELS: Mapping[str, str] = MappingProxyType({"jpn": JAPANESE_GROUP})

COMPOSITE_SCRIPTS: Mapping[str, Tuple[str, ...]] = MappingProxyType(
    {JAPANESE_GROUP: ("Hiragana", "Katakana", "Han")}
)

# Codes dropped from their script group because a sibling already covers them.
REDUNDANT_CODES: Mapping[str, str] = MappingProxyType(
    {
        "npi": "Nepali (individual language) is covered by the `npe` macrolanguage.",
        "yue": "Shares Han with `cmn`; trigrams cannot separate Han text, so the larger language wins.",
    }
)

# Declaration key -> sample text used instead of the declaration preamble.
CUSTOM_FIXTURES: Mapping[str, str] = MappingProxyType({})

UMBRELLA_PACKAGE = "franc"
INSTALL_COMMAND = "pip install {name}"
REGISTRY_DOCS_URL = "https://iso639-3.sil.org/code/{code}"


@dataclass(frozen=True)
class BuildConfig:
    """Immutable bundle of curation tables and tunables passed to the builders."""

    excluded_codes: FrozenSet[str] = EXCLUDED_CODES
    declaration_overrides: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: DECLARATION_OVERRIDES)
    composite_speakers: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: COMPOSITE_SPEAKERS)
    script_additions: Mapping[str, str] = field(default_factory=lambda: SCRIPT_ADDITIONS)
    composite_labels: Mapping[str, str] = field(default_factory=lambda: COMPOSITE_LABELS)
    composite_scripts: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: COMPOSITE_SCRIPTS)
    redundant_codes: Mapping[str, str] = field(default_factory=lambda: REDUNDANT_CODES)
    custom_fixtures: Mapping[str, str] = field(default_factory=lambda: CUSTOM_FIXTURES)
    umbrella_package: str = UMBRELLA_PACKAGE
    ignored_scripts: Tuple[str, ...] = ("Common", "Inherited")
    japanese_key: str = "jpn"
    japanese_scripts: Tuple[str, ...] = ("Hiragana", "Katakana")
    usage_floor: float = 0.05
    manual_usage: float = 0.8
    warn_speakers: int = 1_000_000
    fixture_length: int = 1000
    install_command: str = INSTALL_COMMAND
    registry_docs_url: str = REGISTRY_DOCS_URL

    def __post_init__(self) -> None:
        # Freeze any plain dicts handed in by callers.
        for name in (
            "declaration_overrides",
            "composite_speakers",
            "script_additions",
            "composite_labels",
            "composite_scripts",
            "redundant_codes",
            "custom_fixtures",
        ):
            value = getattr(self, name)
            if not isinstance(value, MappingProxyType):
                object.__setattr__(self, name, MappingProxyType(dict(value)))
        if not isinstance(self.excluded_codes, frozenset):
            object.__setattr__(self, "excluded_codes", frozenset(self.excluded_codes))
        if not 0.0 <= self.usage_floor < 1.0:
            raise ValueError("usage_floor must fall within [0, 1).")
        if self.fixture_length < 0:
            raise ValueError("fixture_length must be non-negative.")


__all__ = [
    "BuildConfig",
    "COMPOSITE_LABELS",
    "COMPOSITE_SCRIPTS",
    "COMPOSITE_SPEAKERS",
    "CORPUS_INDEX_FILE",
    "CUSTOM_FIXTURES",
    "DECLARATIONS_FILE",
    "DECLARATION_OVERRIDES",
    "DEFAULT_FIXTURES_PATH",
    "DEFAULT_PACKAGES_ROOT",
    "DEFAULT_RAW_ROOT",
    "EXCLUDED_CODES",
    "ISO_639_3",
    "JAPANESE_GROUP",
    "PACKAGE_MANIFEST",
    "REDUNDANT_CODES",
    "REGISTRY_FILE",
    "REMOTE_SOURCES",
    "RemoteSource",
    "SCRIPTS_FILE",
    "SCRIPT_ADDITIONS",
    "SPEAKERS_FILE",
    "TRIGRAMS_FILE",
    "UMBRELLA_PACKAGE",
    "UNICODE_SCRIPTS",
]
