"""Minimal Markdown stringifier for the readme content tree."""

from __future__ import annotations

from typing import Callable, Dict, List, Sequence

from .readme import Node


def _inline(nodes: Sequence[Node]) -> str:
    return "".join(_render_inline(node) for node in nodes)


def _render_inline(node: Node) -> str:
    kind = node["type"]
    if kind == "text":
        return node.get("value", "")
    if kind == "inlineCode":
        return f"`{node.get('value', '')}`"
    if kind == "link":
        label = _inline(node.get("children", []))
        title = node.get("title")
        target = node.get("url", "")
        if title:
            target = f'{target} "{title}"'
        return f"[{label}]({target})"
    raise ValueError(f"Unsupported inline node '{kind}'")


def _cell(node: Node) -> str:
    return _inline(node.get("children", [])).replace("|", "\\|").replace("\n", " ")


def _table(node: Node) -> str:
    rows: List[List[str]] = [[_cell(cell) for cell in row.get("children", [])] for row in node.get("children", [])]
    if not rows:
        return ""
    columns = max(len(row) for row in rows)
    rows = [row + [""] * (columns - len(row)) for row in rows]
    widths = [max(3, *(len(row[idx]) for row in rows)) for idx in range(columns)]

    def line(cells: Sequence[str]) -> str:
        return "| " + " | ".join(cell.ljust(width) for cell, width in zip(cells, widths)) + " |"

    out = [line(rows[0]), line(["-" * width for width in widths])]
    out.extend(line(row) for row in rows[1:])
    return "\n".join(out)


def _blockquote(node: Node) -> str:
    body = "\n\n".join(render_block(child) for child in node.get("children", []))
    return "\n".join(f"> {line}" if line else ">" for line in body.split("\n"))


_BLOCKS: Dict[str, Callable[[Node], str]] = {
    "html": lambda node: node.get("value", ""),
    "heading": lambda node: "#" * int(node.get("depth", 1)) + " " + _inline(node.get("children", [])),
    "paragraph": lambda node: _inline(node.get("children", [])),
    "code": lambda node: f"```{node.get('lang') or ''}\n{node.get('value', '')}\n```",
    "table": _table,
    "blockquote": _blockquote,
}


def render_block(node: Node) -> str:
    try:
        renderer = _BLOCKS[node["type"]]
    except KeyError as exc:
        raise ValueError(f"Unsupported block node '{node.get('type')}'") from exc
    return renderer(node)


def render_markdown(tree: Node) -> str:
    """Render a ``root`` node to Markdown text ending with a newline."""
    if tree.get("type") != "root":
        raise ValueError("Expected a root node.")
    return "\n\n".join(render_block(child) for child in tree.get("children", [])) + "\n"


__all__ = ["render_block", "render_markdown"]
