"""Popularity ordering shared by the universe and every package's support list."""

from __future__ import annotations

from typing import Iterable, List, Tuple

from src.refdata.records import LanguageInfo


def language_sort_key(info: LanguageInfo) -> Tuple[bool, int, str, str, str]:
    """Most speakers first, ties by name; unknown speaker counts sort last.

    Code and declaration key only break ties between variants of one language.
    """
    unknown = info.speakers is None
    return (unknown, 0 if unknown else -int(info.speakers or 0), info.name, info.code, info.udhr_key or "")


def sort_languages(languages: Iterable[LanguageInfo]) -> List[LanguageInfo]:
    return sorted(languages, key=language_sort_key)


__all__ = ["language_sort_key", "sort_languages"]
