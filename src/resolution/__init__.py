from .disambiguation import Disambiguation, SupportEntry, disambiguate, trigram_pattern
from .errors import CoverageWarning, MultipleScriptsError
from .ordering import language_sort_key, sort_languages
from .packages import filter_languages, group_by_script, resolve_package
from .universe import build_universe

__all__ = [
    "CoverageWarning",
    "Disambiguation",
    "MultipleScriptsError",
    "SupportEntry",
    "build_universe",
    "disambiguate",
    "filter_languages",
    "group_by_script",
    "language_sort_key",
    "resolve_package",
    "sort_languages",
    "trigram_pattern",
]
