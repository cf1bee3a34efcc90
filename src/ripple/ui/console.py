"""Rich-powered console output for Ripple."""

from __future__ import annotations

import logging

from rich.console import Console as RichConsole
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from ripple.analysis.models import ChangeType, ImpactNode
from ripple.graph.model import DependencyGraph
from ripple.render import display_path

_CHANGE_STYLES = {
    ChangeType.ADD: "green",
    ChangeType.MODIFY: "yellow",
    ChangeType.DELETE: "red",
    ChangeType.AFFECTED: "cyan",
}


def configure_logging(verbose: bool = False) -> None:
    """Send Ripple's log records to stderr through Rich."""
    handler = RichHandler(
        console=RichConsole(stderr=True),
        show_time=False,
        show_path=False,
    )
    logger = logging.getLogger("ripple")
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


class Console:
    """Terminal output for Ripple using Rich."""

    def __init__(self) -> None:
        self.console = RichConsole()

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    def error(self, message: str) -> None:
        self.console.print(f"[red]✗[/red] {message}")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]![/yellow] {message}")

    def info(self, message: str) -> None:
        self.console.print(f"[blue]i[/blue] {message}")

    def plain(self, text: str) -> None:
        """Print text without markup or highlighting."""
        self.console.print(text, markup=False, highlight=False)

    def show_impact(self, node: ImpactNode, root: str | None = None) -> None:
        """Display the impact tree."""
        tree = Tree(self._label(node, root))
        stack = [(node, tree)]
        while stack:
            current, branch = stack.pop()
            added = [(child, branch.add(self._label(child, root))) for child in current.children]
            stack.extend(reversed(added))
        self.console.print(tree)

        affected = len(node.affected_files())
        if affected:
            self.console.print(f"\n[bold]{affected}[/bold] file(s) affected")
        else:
            self.console.print("\n[dim]No other files are affected[/dim]")

    def _label(self, node: ImpactNode, root: str | None) -> str:
        style = _CHANGE_STYLES.get(node.change_type, "white")
        label = (
            f"[bold]{escape(display_path(node.file, root))}[/bold] "
            f"[{style}]({node.change_type.value})[/{style}]"
        )
        if node.reason:
            label += f" [dim]- {escape(node.reason)}[/dim]"
        return label

    def show_stats(self, stats: dict) -> None:
        """Display graph statistics in a table."""
        table = Table(title="Dependency Graph Statistics", border_style="cyan")
        table.add_column("Metric", style="bold")
        table.add_column("Count", justify="right", style="cyan")

        table.add_row("Files", str(stats.get("files", 0)))
        table.add_row("Parsed Files", str(stats.get("parsed_files", 0)))
        table.add_row("Imports", str(stats.get("imports", 0)))
        table.add_row("Exports", str(stats.get("exports", 0)))
        table.add_row("Cyclic Groups", str(stats.get("cyclic_groups", 0)))
        table.add_row("Parse Failures", str(stats.get("failures", 0)))

        self.console.print(table)

    def show_graph(self, graph: DependencyGraph, root: str | None = None) -> None:
        """Display every file with its imports and exports."""
        table = Table(title="Files", border_style="cyan")
        table.add_column("File", style="bold")
        table.add_column("Imports")
        table.add_column("Exports", style="green")

        for file in graph.files():
            if file in graph.failures:
                continue
            table.add_row(
                escape(display_path(file, root)),
                escape("\n".join(display_path(f, root) for f in graph.imports_of(file))),
                escape(", ".join(graph.exports_of(file))),
            )
        self.console.print(table)

        for file, message in graph.failures.items():
            self.warning(f"Could not parse {escape(display_path(file, root))}: {escape(message)}")
