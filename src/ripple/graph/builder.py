"""Build the project import graph by walking imports from an entry file."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

from ripple.config import ProjectConfig, ResolverConfig
from ripple.exceptions import InspectorError
from ripple.graph.model import DependencyGraph
from ripple.graph.resolver import normalize_path, resolve_import
from ripple.inspector import SourceFacts, inspect_file

logger = logging.getLogger("ripple.graph")

Inspector = Callable[[str], SourceFacts]


@dataclass
class BuildContext:
    """State owned by a single `GraphBuilder.build` call."""

    result: DependencyGraph
    visited: set[str] = field(default_factory=set)


class GraphBuilder:
    """Builds a DependencyGraph by depth-first traversal of import statements.

    Every file reachable from the entry file through resolvable imports is
    inspected exactly once. Files that fail to read or parse are logged and
    skipped; the rest of the graph is still built.
    """

    def __init__(
        self,
        config: ProjectConfig | None = None,
        inspector: Inspector | None = None,
    ) -> None:
        self.config = config or ProjectConfig()
        self.inspector = inspector or inspect_file

    @property
    def resolver_config(self) -> ResolverConfig:
        return self.config.resolver

    def build(self, entry_file: str | Path) -> DependencyGraph:
        """Build the dependency graph reachable from `entry_file`."""
        entry = normalize_path(entry_file)
        ctx = BuildContext(result=DependencyGraph(entry_file=entry))

        logger.debug("Building dependency graph from %s", entry)

        # Explicit stack of pending-import iterators; same order as recursive DFS
        stack: list[tuple[str, Iterator[str]]] = []
        self._enter(entry, ctx, stack)

        while stack:
            current, pending = stack[-1]
            specifier = next(pending, None)
            if specifier is None:
                stack.pop()
                logger.debug("Completed %s", current)
                continue

            target = resolve_import(
                current,
                specifier,
                aliases=self.resolver_config.aliases,
                extensions=self.resolver_config.extensions,
                root=self.config.root,
            )
            if target is None:
                continue

            ctx.result.add_import(current, target)
            if target not in ctx.visited:
                self._enter(target, ctx, stack)

        logger.debug(
            "Graph built: %d files, %d imports, %d failures",
            ctx.result.graph.number_of_nodes(),
            ctx.result.graph.number_of_edges(),
            len(ctx.result.failures),
        )
        return ctx.result

    def _enter(
        self,
        file: str,
        ctx: BuildContext,
        stack: list[tuple[str, Iterator[str]]],
    ) -> None:
        """Visit a file: inspect it, record its exports, queue its imports."""
        if file in ctx.visited:
            return
        ctx.visited.add(file)

        try:
            facts = self.inspector(file)
        except (InspectorError, OSError, UnicodeDecodeError) as e:
            logger.warning("Skipping %s: %s", file, e)
            ctx.result.failures[file] = str(e)
            return

        ctx.result.add_file(file, facts.exports)
        logger.debug(
            "Inspected %s: %d imports, exports %s", file, len(facts.imports), facts.exports
        )
        stack.append((file, iter(list(facts.imports))))
