"""Propagate a file change along reverse import edges."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

from ripple.analysis.models import ChangeType, ImpactNode
from ripple.analysis.reasons import impact_reason
from ripple.graph.model import DependencyGraph

logger = logging.getLogger("ripple.impact")


@dataclass
class AnalysisContext:
    """State owned by a single `ImpactAnalyzer.analyze` call."""

    modified_exports: list[str]
    visited: set[str]


@dataclass
class _Frame:
    file: str
    change_type: ChangeType
    reason: str | None
    pending: Iterator[str]
    children: list[ImpactNode] = field(default_factory=list)


class ImpactAnalyzer:
    """Computes the impact tree of a changed file over a built DependencyGraph.

    The graph is only read. Each file shows up at most once in the tree,
    under the first dependency chain that reaches it in build order.
    """

    def __init__(self, graph: DependencyGraph) -> None:
        self.graph = graph
        self._dependents = graph.dependents_index()

    def analyze(
        self,
        changed_file: str,
        change_type: ChangeType,
        modified_exports: Sequence[str] = (),
        visited: set[str] | None = None,
    ) -> ImpactNode:
        """Build the impact tree rooted at `changed_file`.

        Args:
            changed_file: FileIdentity of the changed file.
            change_type: The literal change kind, used for the root node.
            modified_exports: Export names changed by a modification.
            visited: Impact-time visited set; a fresh one is used when omitted.
        """
        ctx = AnalysisContext(
            modified_exports=list(modified_exports),
            visited=visited if visited is not None else set(),
        )
        logger.debug(
            "Analyzing impact of %s (%s, exports=%s)",
            changed_file, change_type.value, ctx.modified_exports,
        )

        # The root never reappears, even when a cycle leads back to it
        ctx.visited.add(changed_file)
        stack = [self._frame(changed_file, change_type, None)]
        root: ImpactNode | None = None

        while stack:
            frame = stack[-1]
            dependent = next(frame.pending, None)

            if dependent is None:
                stack.pop()
                node = ImpactNode(
                    file=frame.file,
                    change_type=frame.change_type,
                    reason=frame.reason,
                    children=tuple(frame.children),
                )
                if stack:
                    stack[-1].children.append(node)
                else:
                    root = node
                continue

            if dependent in ctx.visited:
                continue
            ctx.visited.add(dependent)

            reason = impact_reason(
                frame.change_type,
                ctx.modified_exports,
                self.graph.exports_of(frame.file),
            )
            logger.debug("%s depends on %s: %s", dependent, frame.file, reason)
            stack.append(self._frame(dependent, ChangeType.AFFECTED, reason))

        return root

    def _frame(self, file: str, change_type: ChangeType, reason: str | None) -> _Frame:
        return _Frame(
            file=file,
            change_type=change_type,
            reason=reason,
            pending=iter(self._dependents.get(file, [])),
        )
