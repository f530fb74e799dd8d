"""Script Matcher Table: Unicode script names compiled into character-class patterns.

Ranges come from the UCD ``Scripts.txt`` property file. Each script becomes a
single character class; composite groups (several scripts treated as one
detection unit) are the merged class of their members. The table is built once
and read-only afterwards.
"""

from __future__ import annotations

import re
from collections import defaultdict
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Sequence, Tuple

Range = Tuple[int, int]

_DATA_RE = re.compile(r"^([0-9A-Fa-f.]+)\s*;\s*([A-Za-z_]+)\b")


def parse_codepoint_range(field: str) -> Range:
    field = field.strip()
    if ".." in field:
        lo, hi = field.split("..", 1)
        return int(lo, 16), int(hi, 16)
    return int(field, 16), int(field, 16)


def merge_ranges(ranges: Iterable[Range]) -> List[Range]:
    ordered = sorted(ranges)
    if not ordered:
        return []
    out: List[Range] = []
    cur_lo, cur_hi = ordered[0]
    for lo, hi in ordered[1:]:
        if lo <= cur_hi + 1:
            cur_hi = max(cur_hi, hi)
            continue
        out.append((cur_lo, cur_hi))
        cur_lo, cur_hi = lo, hi
    out.append((cur_lo, cur_hi))
    return out


def parse_scripts_file(path: Path) -> Dict[str, List[Range]]:
    """Parse ``Scripts.txt`` into merged ranges per script name."""
    if not path.exists():
        raise FileNotFoundError(f"Missing Unicode script data {path}. Run `python main.py fetch` to download it.")

    rows: Dict[str, List[Range]] = defaultdict(list)
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        match = _DATA_RE.match(line)
        if not match:
            continue
        lo, hi = parse_codepoint_range(match.group(1))
        if lo < 0 or hi > 0x10FFFF or lo > hi:
            raise ValueError(f"invalid codepoint range {match.group(1)} in {path}")
        rows[match.group(2)].append((lo, hi))
    return {script: merge_ranges(ranges) for script, ranges in rows.items()}


def _escape(codepoint: int) -> str:
    if codepoint <= 0xFFFF:
        return f"\\u{codepoint:04X}"
    return f"\\U{codepoint:08X}"


def character_class(ranges: Sequence[Range]) -> str:
    """Render ranges as a regex character class using ``\\u``/``\\U`` escapes."""
    if not ranges:
        raise ValueError("Cannot build a character class without ranges.")
    parts = [_escape(lo) if lo == hi else f"{_escape(lo)}-{_escape(hi)}" for lo, hi in ranges]
    return "[" + "".join(parts) + "]"


class ScriptTable(Mapping[str, re.Pattern[str]]):
    """Immutable mapping from script name to a compiled character-class pattern."""

    def __init__(
        self,
        ranges: Mapping[str, Sequence[Range]],
        composites: Mapping[str, Sequence[str]] = MappingProxyType({}),
    ) -> None:
        merged: Dict[str, Tuple[Range, ...]] = {
            script: tuple(merge_ranges(spans)) for script, spans in ranges.items() if spans
        }
        for label, members in composites.items():
            unknown = [member for member in members if member not in merged]
            if unknown:
                raise ValueError(f"Composite script '{label}' references unknown scripts: {', '.join(unknown)}")
            merged[label] = tuple(merge_ranges(span for member in members for span in merged[member]))

        self._composites = frozenset(composites)
        self._ranges: Mapping[str, Tuple[Range, ...]] = MappingProxyType(merged)
        self._patterns: Mapping[str, re.Pattern[str]] = MappingProxyType(
            {script: re.compile(character_class(spans)) for script, spans in merged.items()}
        )

    @classmethod
    def from_ucd(cls, path: Path, composites: Mapping[str, Sequence[str]] = MappingProxyType({})) -> "ScriptTable":
        print(f"[unicode] Compiling script patterns from {path}")
        return cls(parse_scripts_file(path), composites)

    def __getitem__(self, script: str) -> re.Pattern[str]:
        return self._patterns[script]

    def __iter__(self) -> Iterator[str]:
        return iter(self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)

    @property
    def base_scripts(self) -> Tuple[str, ...]:
        """Script names read from the UCD, excluding composite groups."""
        return tuple(script for script in self._patterns if script not in self._composites)

    def compile(self, script: str) -> re.Pattern[str]:
        """Return the pattern registered for ``script``."""
        try:
            return self._patterns[script]
        except KeyError as exc:
            raise ValueError(f"Unknown script '{script}'. Available: {sorted(self._patterns)}") from exc

    def source(self, script: str) -> str:
        return self.compile(script).pattern

    def ranges(self, script: str) -> Tuple[Range, ...]:
        self.compile(script)
        return self._ranges[script]

    def union(self, scripts: Sequence[str]) -> re.Pattern[str]:
        """Compile one class matching any codepoint of the given scripts."""
        spans = merge_ranges(span for script in scripts for span in self.ranges(script))
        return re.compile(character_class(spans))


__all__ = [
    "Range",
    "ScriptTable",
    "character_class",
    "merge_ranges",
    "parse_codepoint_range",
    "parse_scripts_file",
]
