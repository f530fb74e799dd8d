"""Build orchestration: universe once, then resolve, disambiguate and emit per package."""

from .build import compile_package, compile_packages, run_build

__all__ = [
    "compile_package",
    "compile_packages",
    "run_build",
]
