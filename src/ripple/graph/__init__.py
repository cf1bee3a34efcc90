"""Import graph construction for a project."""

from ripple.graph.builder import GraphBuilder
from ripple.graph.model import DependencyGraph
from ripple.graph.resolver import normalize_path, resolve_import

__all__ = ["DependencyGraph", "GraphBuilder", "normalize_path", "resolve_import"]
