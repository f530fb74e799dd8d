from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping, Optional, Sequence

_AUTHOR_RE = re.compile(r"^\s*(?P<name>[^<(]*?)\s*(?:<(?P<email>[^>]*)>)?\s*(?:\((?P<url>[^)]*)\))?\s*$")


def ensure_mapping(row: Any) -> Mapping[str, Any]:
    """Guarantee JSON rows behave like mappings."""
    if isinstance(row, Mapping):
        return row
    raise TypeError(f"Unexpected row type: {type(row)}")


def to_int(value: Any) -> int:
    """Robustly convert JSON fields to ints."""
    if value is None:
        raise ValueError("Expected integer-like value, received None")
    if isinstance(value, bool):
        return int(value)
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Cannot convert {value!r} to int") from exc


def optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def safe_sequence(value: Any) -> Sequence[str]:
    """Return a sequence of strings even when the source is None or scalar."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    return [str(value)]


def collect_values(node: Any, key: str) -> List[str]:
    """Collect every string stored under ``key`` anywhere in a nested declaration, in document order."""
    results: List[str] = []
    if isinstance(node, Mapping):
        for prop, value in node.items():
            if prop == key:
                results.extend(_flatten_text(value))
            elif isinstance(value, (Mapping, list, tuple)):
                results.extend(collect_values(value, key))
    elif isinstance(node, (list, tuple)):
        for item in node:
            results.extend(collect_values(item, key))
    return results


def _flatten_text(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        flattened: List[str] = []
        for item in value:
            flattened.extend(_flatten_text(item))
        return flattened
    return [str(value)]


def first_paragraph(node: Any) -> Optional[str]:
    """Return the text of a ``{"para": ...}`` node, or None when it has none."""
    if not isinstance(node, Mapping):
        return None
    text = "".join(_flatten_text(node.get("para")))
    return text or None


def parse_author(value: str) -> Dict[str, str]:
    """Split a ``"Name <email> (url)"`` string into its parts."""
    match = _AUTHOR_RE.match(value or "")
    if not match:
        return {"name": value or "", "email": "", "url": ""}
    return {part: (match.group(part) or "").strip() for part in ("name", "email", "url")}


__all__ = [
    "collect_values",
    "ensure_mapping",
    "first_paragraph",
    "optional_str",
    "parse_author",
    "safe_sequence",
    "to_int",
]
