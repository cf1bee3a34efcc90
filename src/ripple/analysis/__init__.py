"""Change impact analysis: build the graph, then propagate the change."""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from pathlib import Path

from ripple.analysis.impact import ImpactAnalyzer
from ripple.analysis.models import ChangeDescriptor, ChangeType, ImpactNode
from ripple.analysis.reasons import impact_reason
from ripple.config import ProjectConfig
from ripple.exceptions import AnalysisError
from ripple.graph import DependencyGraph, GraphBuilder, normalize_path
from ripple.graph.builder import Inspector

logger = logging.getLogger("ripple.analysis")

__all__ = [
    "ChangeDescriptor",
    "ChangeType",
    "ImpactAnalyzer",
    "ImpactNode",
    "analyze_file_change",
    "impact_reason",
    "run_analysis",
]


def run_analysis(
    entry_file: str | Path,
    change: ChangeDescriptor,
    config: ProjectConfig | None = None,
    inspector: Inspector | None = None,
) -> tuple[DependencyGraph, ImpactNode]:
    """Build the graph from `entry_file` and compute the impact of `change`.

    Raises:
        AnalysisError: the entry file does not exist.
    """
    entry = normalize_path(entry_file)
    if not os.path.isfile(entry):
        raise AnalysisError(f"Entry file does not exist: {entry_file}")

    target = normalize_path(change.target_file)
    logger.info(
        "Analyzing %s change to %s from entry %s", change.change_type.value, target, entry
    )

    graph = GraphBuilder(config, inspector).build(entry)
    if not graph.has_file(target):
        logger.info("%s is not reachable from %s", target, entry)

    tree = ImpactAnalyzer(graph).analyze(target, change.change_type, change.modified_exports)
    return graph, tree


def analyze_file_change(
    entry_file: str | Path,
    changed_file: str | Path,
    change_type: ChangeType | str,
    modified_exports: Sequence[str] | None = None,
    config: ProjectConfig | None = None,
) -> ImpactNode:
    """Impact tree for a single changed file, starting the graph at `entry_file`."""
    change = ChangeDescriptor(
        target_file=str(changed_file),
        change_type=change_type,
        modified_exports=list(modified_exports or []),
    )
    _, tree = run_analysis(entry_file, change, config)
    return tree
