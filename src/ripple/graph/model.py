"""The project dependency graph produced by the builder."""

from __future__ import annotations

from dataclasses import dataclass, field

import networkx as nx


@dataclass
class DependencyGraph:
    """Forward import graph plus the export table of every parsed file.

    An edge ``X -> Y`` means "X imports Y". Node order is the order in which
    the builder first recorded each file, and the impact analyzer relies on
    it for deterministic output.
    """

    entry_file: str
    graph: nx.DiGraph = field(default_factory=nx.DiGraph)
    exports: dict[str, list[str]] = field(default_factory=dict)
    failures: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_edges(
        cls,
        entry_file: str,
        edges: dict[str, list[str]],
        exports: dict[str, list[str]] | None = None,
    ) -> DependencyGraph:
        """Build a graph from an ordered ``{file: [imports]}`` mapping."""
        result = cls(entry_file=entry_file)
        for file, targets in edges.items():
            result.add_file(file, (exports or {}).get(file, []))
            for target in targets:
                result.add_import(file, target)
        return result

    def add_file(self, file: str, exports: list[str]) -> None:
        """Record a successfully inspected file and its exports."""
        self.graph.add_node(file, parsed=True)
        self.exports[file] = list(dict.fromkeys(exports))

    def add_import(self, source: str, target: str) -> None:
        self.graph.add_edge(source, target)

    def files(self) -> list[str]:
        """All known files in build order."""
        return list(self.graph.nodes)

    def parsed_files(self) -> list[str]:
        return [n for n, d in self.graph.nodes(data=True) if d.get("parsed")]

    def has_file(self, file: str) -> bool:
        return self.graph.has_node(file)

    def imports_of(self, file: str) -> list[str]:
        if not self.graph.has_node(file):
            return []
        return list(self.graph.successors(file))

    def exports_of(self, file: str) -> list[str]:
        return self.exports.get(file, [])

    def dependents_of(self, file: str) -> list[str]:
        """Files importing `file`, in node-scan order."""
        if not self.graph.has_node(file):
            return []
        return [n for n in self.graph.nodes if self.graph.has_edge(n, file)]

    def dependents_index(self) -> dict[str, list[str]]:
        """Map every file to its direct dependents, each list in node-scan order."""
        index: dict[str, list[str]] = {}
        for node in self.graph.nodes:
            for target in self.graph.successors(node):
                index.setdefault(target, []).append(node)
        return index

    def stats(self) -> dict:
        """Summary numbers for display."""
        return {
            "files": self.graph.number_of_nodes(),
            "parsed_files": len(self.parsed_files()),
            "imports": self.graph.number_of_edges(),
            "exports": sum(len(names) for names in self.exports.values()),
            "failures": len(self.failures),
            "cyclic_groups": sum(
                1 for group in nx.strongly_connected_components(self.graph) if len(group) > 1
            ) + nx.number_of_selfloops(self.graph),
        }
