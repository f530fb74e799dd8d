"""High-level orchestration for compiling every package's detection artifacts."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

from tqdm import tqdm

from src.artifacts.emitter import PackageBuild, emit_package
from src.artifacts.writer import write_fixtures, write_package
from src.refdata.config import SCRIPTS_FILE, BuildConfig
from src.refdata.loader import discover_packages, load_reference_data
from src.refdata.records import LanguageInfo, PackageDescriptor, ReferenceData
from src.resolution.disambiguation import disambiguate
from src.resolution.packages import resolve_package
from src.resolution.universe import build_universe
from src.unicode.table import ScriptTable


def compile_package(
    descriptor: PackageDescriptor,
    universe: Sequence[LanguageInfo],
    scripts: ScriptTable,
    data: ReferenceData,
    *,
    project: PackageDescriptor,
    config: BuildConfig = BuildConfig(),
) -> PackageBuild:
    """Resolve, disambiguate and emit one package without touching the filesystem."""
    print(f"[build] {descriptor.name}, threshold: {descriptor.threshold}")

    groups = resolve_package(universe, descriptor)
    selected = sum(len(members) for members in groups.values())
    result = disambiguate(groups, scripts, data.trigrams, config, package=descriptor.name)
    build = emit_package(
        descriptor,
        result,
        project=project,
        declarations=data.declarations,
        config=config,
    )
    print(f"[build] ✓ {descriptor.name} w/ {selected} languages")
    return build


def find_project(descriptors: Sequence[PackageDescriptor], config: BuildConfig) -> Optional[PackageDescriptor]:
    """Return the umbrella package, which supplies repository and license details."""
    for descriptor in descriptors:
        if descriptor.name == config.umbrella_package:
            return descriptor
    return None


def select_packages(descriptors: Sequence[PackageDescriptor], only: Optional[Sequence[str]]) -> List[PackageDescriptor]:
    if not only:
        return list(descriptors)
    unknown = sorted(set(only) - {descriptor.name for descriptor in descriptors})
    if unknown:
        raise ValueError(f"Unknown package(s): {', '.join(unknown)}")
    return [descriptor for descriptor in descriptors if descriptor.name in only]


def compile_packages(
    descriptors: Sequence[PackageDescriptor],
    universe: Sequence[LanguageInfo],
    scripts: ScriptTable,
    data: ReferenceData,
    config: BuildConfig = BuildConfig(),
    project: Optional[PackageDescriptor] = None,
) -> List[PackageBuild]:
    """Compile every package; packages share only the read-only universe and script table."""
    project = project or find_project(descriptors, config)
    return [
        compile_package(descriptor, universe, scripts, data, project=project or descriptor, config=config)
        for descriptor in tqdm(descriptors, desc="Packages", leave=False)
    ]


def run_build(
    raw_root: Path,
    packages_root: Path,
    fixtures_path: Path,
    config: BuildConfig = BuildConfig(),
    only: Optional[Sequence[str]] = None,
) -> List[PackageBuild]:
    """
    Run the full build: load reference data, compile every package, then write artifacts.

    Nothing is written until every package compiled, so a fatal resolution
    error leaves the previous artifacts untouched.
    """
    descriptors = discover_packages(packages_root)
    project = find_project(descriptors, config)
    targets = select_packages(descriptors, only)

    data = load_reference_data(raw_root)
    scripts = ScriptTable.from_ucd(raw_root / SCRIPTS_FILE, config.composite_scripts)
    universe = build_universe(data, scripts, config)
    builds = compile_packages(targets, universe, scripts, data, config, project=project)

    for build in builds:
        write_package(build, build.descriptor.directory or packages_root / build.descriptor.name)
        if build.fixtures is not None:
            print("[build] Creating fixtures")
            write_fixtures(build.fixtures, fixtures_path)
            print(f"[build] ✓ fixtures → {fixtures_path}")
    return builds


__all__ = ["compile_package", "compile_packages", "find_project", "run_build", "select_packages"]
