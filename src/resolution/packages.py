"""Package Resolver: per-package filtering of the universe and grouping by script."""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, List, Sequence, Tuple

from src.refdata.records import LanguageInfo, PackageDescriptor

ScriptGroups = Dict[str, Tuple[LanguageInfo, ...]]


def filter_languages(universe: Iterable[LanguageInfo], descriptor: PackageDescriptor) -> List[LanguageInfo]:
    """Apply the speaker threshold and the allow-list, keeping universe order."""
    selected = list(universe)
    if descriptor.filters_by_speakers:
        selected = [
            info for info in selected if info.speakers is not None and info.speakers >= descriptor.threshold
        ]
    if descriptor.included_languages:
        selected = [info for info in selected if info.code in descriptor.included_languages]
    return selected


def group_by_script(languages: Sequence[LanguageInfo]) -> ScriptGroups:
    """Group languages by script; groups appear in order of their first member."""
    buckets: Dict[str, List[LanguageInfo]] = defaultdict(list)
    for info in languages:
        if info.script is None:
            raise ValueError(f"Language `{info.code}` has no resolved script; build the universe first.")
        buckets[info.script].append(info)
    return {script: tuple(members) for script, members in buckets.items()}


def resolve_package(universe: Sequence[LanguageInfo], descriptor: PackageDescriptor) -> ScriptGroups:
    return group_by_script(filter_languages(universe, descriptor))


__all__ = ["ScriptGroups", "filter_languages", "group_by_script", "resolve_package"]
