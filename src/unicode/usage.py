"""Script-usage distribution of a text, used to decide which script a language is written in."""

from __future__ import annotations

from typing import Dict, Sequence

import numpy as np

from .table import ScriptTable


def round_half_up(values: np.ndarray, decimals: int = 2) -> np.ndarray:
    """Round away from the banker's rule so 0.125 -> 0.13."""
    scale = 10.0**decimals
    return np.floor(values * scale + 0.5) / scale


def script_usage(
    text: str,
    scripts: ScriptTable,
    *,
    floor: float = 0.05,
    ignored: Sequence[str] = ("Common", "Inherited"),
) -> Dict[str, float]:
    """
    Return ``script -> fraction`` for scripts covering more than ``floor`` of ``text``.

    Fractions are the share of characters matched by each script class, rounded
    to two decimals before comparing against the floor. Empty text has no usage.
    """
    if not text:
        return {}

    names = [name for name in scripts.base_scripts if name not in ignored]
    if not names:
        return {}

    counts = np.asarray([len(scripts[name].findall(text)) for name in names], dtype=float)
    fractions = round_half_up(counts / len(text))
    return {name: float(value) for name, value in zip(names, fractions) if value > floor}


__all__ = ["round_half_up", "script_usage"]
