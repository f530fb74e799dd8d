"""Script Disambiguation Engine.

For every script group of a package, decide how a detector tells its members
apart. A script used by one language identifies that language directly, so the
language gets the script's own pattern. A script shared by several languages is
registered once, and each member is told apart by its trigram profile.
"""

from __future__ import annotations

import re
import warnings
from dataclasses import dataclass
from typing import Dict, List, Literal, Mapping, Optional, Sequence, Tuple

from src.refdata.config import BuildConfig
from src.refdata.records import LanguageInfo
from src.unicode.table import ScriptTable

from .errors import CoverageWarning
from .ordering import language_sort_key

Mechanism = Literal["own-pattern", "script+trigram"]
ExpressionTable = Dict[str, "re.Pattern[str]"]
TrigramTable = Dict[str, Dict[str, str]]


@dataclass(frozen=True)
class SupportEntry:
    """A language selected for a package, with the mechanism that detects it."""

    language: LanguageInfo
    mechanism: Mechanism

    @property
    def code(self) -> str:
        return self.language.code

    @property
    def name(self) -> str:
        return self.language.name

    @property
    def script(self) -> Optional[str]:
        return self.language.script

    @property
    def speakers(self) -> Optional[int]:
        return self.language.speakers

    @property
    def udhr_key(self) -> Optional[str]:
        return self.language.udhr_key


@dataclass(frozen=True)
class Disambiguation:
    """Per-package detection tables and the languages they cover."""

    support: Tuple[SupportEntry, ...]
    expressions: ExpressionTable
    trigrams: TrigramTable

    def codes(self) -> List[str]:
        return [entry.code for entry in self.support]


def trigram_pattern(trigrams: Sequence[str]) -> str:
    """Join a most-frequent-first trigram list into a least-frequent-first alternation."""
    return "|".join(reversed(trigrams))


def drop_redundant(
    script: str,
    members: Sequence[LanguageInfo],
    redundant: Mapping[str, str],
) -> Tuple[LanguageInfo, ...]:
    kept: List[LanguageInfo] = []
    for info in members:
        if info.code in redundant:
            print(f"[build] Skipping `{info.code}` in {script}: {redundant[info.code]}")
            continue
        kept.append(info)
    return tuple(kept)


def disambiguate(
    groups: Mapping[str, Sequence[LanguageInfo]],
    scripts: ScriptTable,
    trigrams: Mapping[str, Sequence[str]],
    config: BuildConfig = BuildConfig(),
    *,
    package: str = "",
) -> Disambiguation:
    """Build the support list, expression table and trigram table for one package.

    ``package`` prefixes the coverage warnings emitted for dropped members.
    """
    prefix = f"[{package}] " if package else ""
    support: List[SupportEntry] = []
    expressions: ExpressionTable = {}
    shared: Dict[str, Tuple[LanguageInfo, ...]] = {}

    for script, members in groups.items():
        languages = drop_redundant(script, members, config.redundant_codes)
        if not languages:
            continue
        if len(languages) > 1:
            expressions.setdefault(script, scripts.compile(script))
            shared[script] = languages
        else:
            (only,) = languages
            support.append(SupportEntry(only, "own-pattern"))
            expressions[only.code] = scripts.compile(script)

    table: TrigramTable = {}
    for script, languages in shared.items():
        per_language: Dict[str, str] = {}
        table[script] = per_language
        for info in languages:
            profile = trigrams.get(info.udhr_key) if info.udhr_key else None
            if not profile:
                warnings.warn(
                    f"{prefix}Ignoring language without trigrams: {info.code} ({info.name})",
                    CoverageWarning,
                    stacklevel=2,
                )
                continue
            support.append(SupportEntry(info, "script+trigram"))
            per_language[info.code] = trigram_pattern(profile)

    # Kana needs no trigrams: any Hiragana or Katakana marks Japanese text.
    expressions[config.japanese_key] = scripts.union(config.japanese_scripts)

    support.sort(key=lambda entry: language_sort_key(entry.language))
    return Disambiguation(support=tuple(support), expressions=expressions, trigrams=table)


__all__ = [
    "Disambiguation",
    "ExpressionTable",
    "Mechanism",
    "SupportEntry",
    "TrigramTable",
    "disambiguate",
    "drop_redundant",
    "trigram_pattern",
]
