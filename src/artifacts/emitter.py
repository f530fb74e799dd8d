"""Artifact Emitter: serializable per-package outputs and umbrella-package fixtures."""

from __future__ import annotations

import warnings
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Tuple

from src.refdata.config import BuildConfig
from src.refdata.helpers import first_paragraph
from src.refdata.records import PackageDescriptor
from src.resolution.disambiguation import Disambiguation, ExpressionTable, SupportEntry, TrigramTable
from src.resolution.errors import CoverageWarning

from .readme import Node, build_readme_tree

FixtureSource = Callable[[str], Optional[str]]


@dataclass(frozen=True)
class Fixture:
    """Sample text for one supported language, keyed by declaration in the fixture table."""

    code: str
    text: str

    def to_record(self) -> Dict[str, str]:
        return {"code": self.code, "text": self.text}


@dataclass(frozen=True)
class PackageBuild:
    """Everything emitted for one package, ready for the writer."""

    descriptor: PackageDescriptor
    support: Tuple[SupportEntry, ...]
    expressions: Dict[str, str]
    data: Dict[str, Dict[str, str]]
    readme: Node
    fixtures: Optional[Dict[str, Fixture]] = None


def expressions_artifact(expressions: ExpressionTable) -> Dict[str, str]:
    """Key -> pattern source, in table order."""
    return {key: pattern.pattern for key, pattern in expressions.items()}


def data_artifact(trigrams: TrigramTable) -> Dict[str, Dict[str, str]]:
    return {script: dict(per_language) for script, per_language in trigrams.items()}


def fixture_sources(
    declarations: Mapping[str, Mapping[str, Any]],
    custom: Mapping[str, str],
) -> Tuple[FixtureSource, ...]:
    """Sample-text lookups in priority order: custom text, preamble, first note."""

    def custom_text(key: str) -> Optional[str]:
        return custom.get(key)

    def preamble(key: str) -> Optional[str]:
        return first_paragraph(declarations.get(key, {}).get("preamble"))

    def first_note(key: str) -> Optional[str]:
        notes = declarations.get(key, {}).get("note")
        if isinstance(notes, Sequence) and not isinstance(notes, str) and notes:
            return first_paragraph(notes[0])
        return None

    return (custom_text, preamble, first_note)


def pick_fixture_text(key: Optional[str], sources: Sequence[FixtureSource]) -> Optional[str]:
    """Return the first non-empty text any source provides for ``key``."""
    if key is None:
        return None
    for source in sources:
        found = source(key)
        if found:
            return found
    return None


def build_fixtures(
    support: Sequence[SupportEntry],
    declarations: Mapping[str, Mapping[str, Any]],
    config: BuildConfig = BuildConfig(),
    *,
    package: str = "",
) -> Dict[str, Fixture]:
    """Sample texts for every supported language, truncated to ``config.fixture_length``."""
    sources = fixture_sources(declarations, config.custom_fixtures)
    prefix = f"[{package}] " if package else ""
    fixtures: Dict[str, Fixture] = {}
    for entry in support:
        sample = pick_fixture_text(entry.udhr_key, sources)
        if sample is None:
            warnings.warn(
                f"{prefix}Could not access preamble or note for `{entry.code}` ({entry.udhr_key}). "
                "No fixture is generated.",
                CoverageWarning,
                stacklevel=2,
            )
            sample = ""
        fixtures[entry.udhr_key or entry.code] = Fixture(code=entry.code, text=sample[: config.fixture_length])
    return fixtures


def emit_package(
    descriptor: PackageDescriptor,
    result: Disambiguation,
    *,
    project: PackageDescriptor,
    declarations: Mapping[str, Mapping[str, Any]],
    config: BuildConfig = BuildConfig(),
) -> PackageBuild:
    """Assemble the artifacts for one package; fixtures only for the umbrella package."""
    fixtures = None
    if descriptor.name == config.umbrella_package:
        fixtures = build_fixtures(result.support, declarations, config, package=descriptor.name)

    return PackageBuild(
        descriptor=descriptor,
        support=result.support,
        expressions=expressions_artifact(result.expressions),
        data=data_artifact(result.trigrams),
        readme=build_readme_tree(descriptor, result.support, project, config),
        fixtures=fixtures,
    )


__all__ = [
    "Fixture",
    "PackageBuild",
    "build_fixtures",
    "data_artifact",
    "emit_package",
    "expressions_artifact",
    "fixture_sources",
    "pick_fixture_text",
]
