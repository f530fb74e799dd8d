"""Documentation content tree for a package.

The tree uses mdast-style nodes (plain dicts with a ``type`` key, optional
``children``/``value`` and node properties) so any Markdown stringifier can
render it; :mod:`src.artifacts.markdown` is the one used by the CLI.
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Dict, List, Optional, Sequence

from src.refdata.config import BuildConfig
from src.refdata.helpers import parse_author
from src.refdata.records import PackageDescriptor
from src.resolution.disambiguation import SupportEntry

from .humanize import human_format

Node = Dict[str, Any]

GENERATED_NOTICE = "<!--This file is generated by `main.py build`-->"


def u(kind: str, children: Optional[Sequence[Node]] = None, *, value: Optional[str] = None, **props: Any) -> Node:
    """Build a content node."""
    node: Node = {"type": kind, **props}
    if children is not None:
        node["children"] = list(children)
    if value is not None:
        node["value"] = value
    return node


def text(value: str) -> Node:
    return u("text", value=value)


def totals_line(count: int, threshold: int) -> str:
    annotation = "" if threshold == -1 else f" ({human_format(threshold)} or more speakers)"
    return f"Built with support for {count} languages{annotation}."


def speakers_label(speakers: Optional[int]) -> str:
    return "unknown" if speakers is None else human_format(speakers, decimals=0)


def support_table(support: Sequence[SupportEntry], config: BuildConfig) -> Node:
    counts = Counter(entry.code for entry in support)

    def row(entry: SupportEntry) -> Node:
        name = entry.name if counts[entry.code] == 1 else f"{entry.name} ({entry.script})"
        return u(
            "tableRow",
            [
                u(
                    "tableCell",
                    [
                        u(
                            "link",
                            [u("inlineCode", value=entry.code)],
                            url=config.registry_docs_url.format(code=entry.code),
                            title=None,
                        )
                    ],
                ),
                u("tableCell", [text(name)]),
                u("tableCell", [text(speakers_label(entry.speakers))]),
            ],
        )

    header = u("tableRow", [u("tableCell", [text(label)]) for label in ("Code", "Name", "Speakers")])
    return u("table", [header] + [row(entry) for entry in support], align=[])


def build_readme_tree(
    descriptor: PackageDescriptor,
    support: Sequence[SupportEntry],
    project: PackageDescriptor,
    config: BuildConfig = BuildConfig(),
) -> Node:
    """Assemble the readme content for one package; ``project`` supplies repository and license."""
    licensee = parse_author(project.author)
    install = config.install_command.format(name=descriptor.name)
    tool = install.split(" ", 1)[0]

    children: List[Node] = [
        u("html", value=GENERATED_NOTICE),
        u("heading", [text(descriptor.name)], depth=1),
        u("blockquote", [u("paragraph", [text(f"{descriptor.description}.")])]),
        u("paragraph", [text(totals_line(len(support), descriptor.threshold))]),
        u(
            "paragraph",
            [
                text("View the "),
                u("link", [text("monorepo")], url=project.repository),
                text(" for more packages and\nusage information."),
            ],
        ),
        u("heading", [text("Install")], depth=2),
        u("paragraph", [text(f"{tool}:")]),
        u("code", value=install, lang="sh"),
        u("heading", [text("Support")], depth=2),
        u("paragraph", [text("This build supports the following languages:")]),
        support_table(support, config),
        u("heading", [text("License")], depth=2),
        u(
            "paragraph",
            [
                u("link", [text(project.license)], url=f"{project.repository}/blob/master/LICENSE"),
                text(" © "),
                u("link", [text(licensee["name"])], url=licensee["url"]),
            ],
        ),
    ]
    return u("root", children)


__all__ = ["GENERATED_NOTICE", "Node", "build_readme_tree", "speakers_label", "totals_line", "u"]
