"""Failure types raised or emitted while resolving languages."""

from __future__ import annotations

from typing import Sequence


class CoverageWarning(UserWarning):
    """A language or sample was dropped from an artifact; the build continues."""


class MultipleScriptsError(ValueError):
    """A language qualified for more than one script, which the detection model cannot order."""

    def __init__(self, code: str, name: str, scripts: Sequence[str]) -> None:
        self.code = code
        self.scripts = tuple(scripts)
        super().__init__(
            f"Language `{code}` ({name}) uses more than one script ({', '.join(self.scripts)}); "
            "every language must resolve to exactly one script. Aborting the build."
        )


__all__ = ["CoverageWarning", "MultipleScriptsError"]
