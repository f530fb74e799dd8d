from __future__ import annotations

from pathlib import Path
from typing import List, Mapping

from src.refdata.io import write_json

from .emitter import Fixture, PackageBuild
from .markdown import render_markdown

EXPRESSIONS_FILE = "expressions.json"
DATA_FILE = "data.json"
README_FILE = "readme.md"


def write_package(build: PackageBuild, package_dir: Path) -> List[Path]:
    """Write the expression table, trigram data and readme into ``package_dir``."""
    package_dir.mkdir(parents=True, exist_ok=True)
    expressions_path = package_dir / EXPRESSIONS_FILE
    data_path = package_dir / DATA_FILE
    readme_path = package_dir / README_FILE

    write_json(expressions_path, build.expressions)
    write_json(data_path, build.data)
    readme_path.write_text(render_markdown(build.readme), encoding="utf-8")
    return [expressions_path, data_path, readme_path]


def write_fixtures(fixtures: Mapping[str, Fixture], path: Path) -> Path:
    write_json(path, {key: fixture.to_record() for key, fixture in fixtures.items()})
    return path


__all__ = ["DATA_FILE", "EXPRESSIONS_FILE", "README_FILE", "write_fixtures", "write_package"]
