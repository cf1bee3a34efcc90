"""Plain-text, markdown and JSON renderers for impact trees.

The markdown report is meant for CI logs and pull request comments:
  - Summary table (changed file, change type, affected count)
  - Nested list of affected files with reasons
"""

from __future__ import annotations

import os

from ripple.analysis.models import ImpactNode


def display_path(file: str, root: str | None = None) -> str:
    """Show `file` relative to `root` when it lives under it."""
    if root:
        rel = os.path.relpath(file, root)
        if not rel.startswith(".."):
            return rel
    return file


def render_text(node: ImpactNode, root: str | None = None) -> str:
    """Render the tree as indented text with box-drawing connectors."""
    lines: list[str] = []
    _text_lines(node, "", root, lines)
    return "\n".join(lines)


def _text_lines(node: ImpactNode, prefix: str, root: str | None, lines: list[str]) -> None:
    lines.append(f"{prefix}{display_path(node.file, root)}")
    lines.append(f"{prefix}├─ Change: {node.change_type.value}")
    if node.reason:
        lines.append(f"{prefix}├─ Reason: {node.reason}")
    if node.children:
        lines.append(f"{prefix}└─ Affected files:")
        for i, child in enumerate(node.children):
            connector = "└─ " if i == len(node.children) - 1 else "├─ "
            _text_lines(child, f"{prefix}    {connector}", root, lines)


def render_markdown(node: ImpactNode, root: str | None = None) -> str:
    """Render the tree as a GitHub-flavored markdown report."""
    affected = node.affected_files()
    sections: list[str] = []

    sections.append("## Ripple Impact Analysis")
    sections.append("")
    sections.append("| Changed File | Change | Files Affected |")
    sections.append("|:-------------|:------:|:--------------:|")
    sections.append(
        f"| `{display_path(node.file, root)}` | {node.change_type.value} | {len(affected)} |"
    )
    sections.append("")

    if not node.children:
        sections.append("> No other files are affected by this change.")
        return "\n".join(sections)

    sections.append("### Affected Files")
    sections.append("")
    for child in node.children:
        _markdown_items(child, 0, root, sections)
    return "\n".join(sections)


def _markdown_items(node: ImpactNode, depth: int, root: str | None, out: list[str]) -> None:
    indent = "  " * depth
    out.append(f"{indent}- `{display_path(node.file, root)}` ({node.reason})")
    for child in node.children:
        _markdown_items(child, depth + 1, root, out)


def render_json(node: ImpactNode) -> str:
    return node.model_dump_json(indent=2)
