from __future__ import annotations

import numpy as np

from src.unicode.usage import round_half_up

_PREFIXES = ("", "k", "M", "G", "T", "P", "E", "Z", "Y")


def human_format(value: float, decimals: int = 2) -> str:
    """Format a count with an SI prefix and no separator, e.g. ``1500000 -> "1.5M"``.

    Halves round up, so ``2500000`` with no decimals is ``"3M"``.
    """
    scaled = float(value)
    magnitude = 0
    while abs(scaled) >= 1000 and magnitude < len(_PREFIXES) - 1:
        scaled /= 1000.0
        magnitude += 1
    rounded = float(round_half_up(np.asarray(scaled), decimals))
    text = f"{rounded:.{decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return f"{text}{_PREFIXES[magnitude]}"


__all__ = ["human_format"]
