"""Language Universe Builder.

Resolves the canonical, script-tagged list of every language eligible for
detection: registry rows get speaker counts, unsafe and special codes are
dropped, each code is expanded into one candidate per declaration variant,
and each candidate is assigned the single script its declaration is written in.
"""

from __future__ import annotations

import warnings
from dataclasses import replace
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from src.refdata.config import BuildConfig
from src.refdata.helpers import collect_values
from src.refdata.records import CorpusEntry, LanguageInfo, ReferenceData, RegistryEntry
from src.unicode.table import ScriptTable
from src.unicode.usage import script_usage

from .errors import CoverageWarning, MultipleScriptsError
from .ordering import sort_languages


def composite_speakers(members: Sequence[str], speakers: Mapping[str, int]) -> Optional[int]:
    """Sum the members' speaker counts; unknown when any member is unknown."""
    counts = [speakers.get(member) for member in members]
    if any(count is None for count in counts):
        return None
    return sum(int(count) for count in counts if count is not None)


def attach_speakers(
    registry: Sequence[RegistryEntry],
    speakers: Mapping[str, int],
    composites: Mapping[str, Sequence[str]],
) -> List[LanguageInfo]:
    languages: List[LanguageInfo] = []
    for entry in registry:
        if entry.code in composites:
            count = composite_speakers(composites[entry.code], speakers)
        else:
            count = speakers.get(entry.code)
        languages.append(LanguageInfo(code=entry.code, name=entry.name, type=entry.type, speakers=count))
    return languages


def is_eligible(info: LanguageInfo, config: BuildConfig) -> bool:
    if info.code in config.excluded_codes:
        print(f"[universe] Ignoring unsafe language `{info.code}` ({info.name})")
        return False
    if info.type == "special":
        print(f"[universe] Ignoring special code `{info.code}` ({info.name})")
        return False
    return True


def resolve_declaration_keys(
    code: str,
    corpus_index: Mapping[str, CorpusEntry],
    overrides: Mapping[str, Sequence[str]],
) -> Tuple[str, ...]:
    """Return the declaration keys describing ``code``, in corpus order."""
    if code in overrides:
        return tuple(overrides[code])

    matches = [key for key, entry in corpus_index.items() if code in (entry.iso, entry.code)]
    if len(matches) <= 1:
        return tuple(matches)
    # A declaration keyed by the code itself is the main one.
    if code in matches:
        return (code,)
    return tuple(matches)


def expand_variants(info: LanguageInfo, keys: Sequence[str]) -> Tuple[LanguageInfo, ...]:
    """One candidate per declaration key; a code without keys stays a single keyless candidate."""
    if not keys:
        return (info,)
    return tuple(replace(info, udhr_key=key) for key in keys)


def declaration_text(declarations: Mapping[str, Mapping[str, object]], key: Optional[str]) -> str:
    if key is None or key not in declarations:
        return ""
    return "".join(collect_values(declarations[key], "para"))


def measure_scripts(
    info: LanguageInfo,
    declarations: Mapping[str, Mapping[str, object]],
    scripts: ScriptTable,
    config: BuildConfig,
) -> Dict[str, float]:
    """Script usage for a candidate, with manual additions and composite labels applied."""
    usage = script_usage(
        declaration_text(declarations, info.udhr_key),
        scripts,
        floor=config.usage_floor,
        ignored=config.ignored_scripts,
    )
    if info.code in config.script_additions:
        usage[config.script_additions[info.code]] = config.manual_usage
    if info.code in config.composite_labels:
        usage = {config.composite_labels[info.code]: config.manual_usage}
    return usage


def assign_script(
    info: LanguageInfo,
    usage: Mapping[str, float],
    has_trigrams: bool,
    config: BuildConfig,
) -> Optional[LanguageInfo]:
    """Tag ``info`` with its single script, or return None when it cannot be detected."""
    if len(usage) > 1:
        raise MultipleScriptsError(info.code, info.name, list(usage))

    if not usage:
        if has_trigrams:
            warnings.warn(
                f"Ignoring language with trigrams but no script: {info.code} ({info.name}, {info.udhr_key})",
                CoverageWarning,
                stacklevel=3,
            )
        elif info.speakers is not None and info.speakers > config.warn_speakers:
            warnings.warn(
                f"Ignoring language with neither trigrams nor scripts: {info.code} ({info.name}, {info.speakers})",
                CoverageWarning,
                stacklevel=3,
            )
        return None

    (script,) = usage
    return replace(info, script=script)


def build_universe(
    data: ReferenceData,
    scripts: ScriptTable,
    config: BuildConfig = BuildConfig(),
) -> Tuple[LanguageInfo, ...]:
    """Resolve the sorted, single-script language universe shared by every package."""
    languages = attach_speakers(data.registry, data.speakers, config.composite_speakers)
    eligible = [info for info in languages if is_eligible(info, config)]

    candidates: List[LanguageInfo] = []
    for info in eligible:
        keys = resolve_declaration_keys(info.code, data.corpus_index, config.declaration_overrides)
        candidates.extend(expand_variants(info, keys))

    resolved: List[LanguageInfo] = []
    for candidate in candidates:
        usage = measure_scripts(candidate, data.declarations, scripts, config)
        has_trigrams = bool(candidate.udhr_key and data.trigrams.get(candidate.udhr_key))
        assigned = assign_script(candidate, usage, has_trigrams, config)
        if assigned is not None:
            resolved.append(assigned)

    print(f"[universe] Resolved {len(resolved)} languages from {len(data.registry)} registry entries")
    return tuple(sort_languages(resolved))


__all__ = [
    "assign_script",
    "attach_speakers",
    "build_universe",
    "composite_speakers",
    "declaration_text",
    "expand_variants",
    "is_eligible",
    "measure_scripts",
    "resolve_declaration_keys",
]
