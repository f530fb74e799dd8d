"""Shared records for the reference data consumed by the build."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, FrozenSet, Literal, Mapping, Optional, Tuple

LanguageType = Literal["living", "special", "other"]


@dataclass(frozen=True)
class RegistryEntry:
    """Single ISO-639-3 registry row."""

    code: str
    name: str
    type: LanguageType


@dataclass(frozen=True)
class CorpusEntry:
    """Index metadata linking a declaration key to ISO codes."""

    key: str
    iso: Optional[str]
    code: Optional[str]
    name: str = ""


@dataclass(frozen=True)
class LanguageInfo:
    """A language candidate, one per (code, declaration variant)."""

    code: str
    name: str
    type: LanguageType
    speakers: Optional[int] = None
    udhr_key: Optional[str] = None
    script: Optional[str] = None


@dataclass(frozen=True)
class PackageDescriptor:
    """Build target read from a package manifest."""

    name: str
    threshold: int = -1
    included_languages: FrozenSet[str] = frozenset()
    description: str = ""
    author: str = ""
    repository: str = ""
    license: str = ""
    directory: Optional[Path] = field(default=None, compare=False)

    @property
    def filters_by_speakers(self) -> bool:
        return self.threshold != -1


@dataclass(frozen=True)
class ReferenceData:
    """Fully materialized inputs for one build run."""

    registry: Tuple[RegistryEntry, ...]
    speakers: Mapping[str, int]
    corpus_index: Mapping[str, CorpusEntry]
    declarations: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)
    trigrams: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)


__all__ = [
    "CorpusEntry",
    "LanguageInfo",
    "LanguageType",
    "PackageDescriptor",
    "ReferenceData",
    "RegistryEntry",
]
