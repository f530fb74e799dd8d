from .emitter import Fixture, PackageBuild, build_fixtures, emit_package
from .markdown import render_markdown
from .readme import build_readme_tree
from .writer import write_fixtures, write_package

__all__ = [
    "Fixture",
    "PackageBuild",
    "build_fixtures",
    "build_readme_tree",
    "emit_package",
    "render_markdown",
    "write_fixtures",
    "write_package",
]
