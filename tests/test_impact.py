"""Tests for change impact propagation."""

from __future__ import annotations

from collections import Counter
from pathlib import Path

import pytest
from pydantic import ValidationError

from ripple.analysis import (
    ChangeDescriptor,
    ChangeType,
    ImpactAnalyzer,
    ImpactNode,
    analyze_file_change,
    impact_reason,
)
from ripple.exceptions import AnalysisError
from ripple.graph import DependencyGraph, normalize_path


def _graph(edges: dict[str, list[str]], exports: dict[str, list[str]] | None = None):
    return DependencyGraph.from_edges(next(iter(edges)), edges, exports)


def _analyze(graph, changed, change_type, modified=()):
    return ImpactAnalyzer(graph).analyze(changed, change_type, modified)


class TestReasonPolicy:
    def test_delete(self):
        assert impact_reason(ChangeType.DELETE, ["foo"], ["foo"]) == "file was deleted"

    def test_add(self):
        assert impact_reason(ChangeType.ADD, [], []) == "new file was added"

    def test_modify_without_names(self):
        assert impact_reason(ChangeType.MODIFY, [], ["foo"]) == "file was modified"

    def test_modify_with_matching_names(self):
        reason = impact_reason(ChangeType.MODIFY, ["bar", "foo"], ["foo", "bar"])
        assert reason == "modified exports: bar, foo"

    def test_modify_lists_all_supplied_names(self):
        reason = impact_reason(ChangeType.MODIFY, ["gone", "foo"], ["foo"])
        assert reason == "modified exports: gone, foo"

    def test_modify_with_unknown_names(self):
        assert impact_reason(ChangeType.MODIFY, ["nope"], ["foo"]) == "file was modified"

    def test_affected(self):
        assert impact_reason(ChangeType.AFFECTED, ["foo"], ["foo"]) == "file was modified"


class TestImpactAnalyzer:
    def test_no_dependents(self):
        graph = _graph({"index": ["a"], "a": []})
        tree = _analyze(graph, "index", ChangeType.MODIFY)

        assert tree.file == "index"
        assert tree.change_type == ChangeType.MODIFY
        assert tree.reason is None
        assert tree.children == ()

    def test_delete_reason_for_direct_dependents(self):
        graph = _graph({"index": ["x", "y"], "x": ["lib"], "y": ["lib"], "lib": []})
        tree = _analyze(graph, "lib", ChangeType.DELETE)

        assert [c.file for c in tree.children] == ["x", "y"]
        assert all(c.reason == "file was deleted" for c in tree.children)
        assert all(c.change_type == ChangeType.AFFECTED for c in tree.children)

    def test_transitive_dependents_are_modified(self):
        graph = _graph({"index": ["page"], "page": ["lib"], "lib": []})
        tree = _analyze(graph, "lib", ChangeType.DELETE)

        page = tree.children[0]
        assert page.reason == "file was deleted"
        assert [(c.file, c.reason) for c in page.children] == [("index", "file was modified")]

    def test_modified_exports_only_at_first_level(self):
        graph = _graph(
            {"index": ["page"], "page": ["lib"], "lib": []},
            {"lib": ["foo"], "page": ["foo"]},
        )
        tree = _analyze(graph, "lib", ChangeType.MODIFY, ["foo"])

        page = tree.children[0]
        assert page.reason == "modified exports: foo"
        assert page.children[0].reason == "file was modified"

    def test_add_reason(self):
        graph = _graph({"index": ["new"], "new": []})
        tree = _analyze(graph, "new", ChangeType.ADD)
        assert tree.children[0].reason == "new file was added"

    def test_diamond_reports_each_file_once(self):
        graph = _graph({
            "index": ["left", "right"],
            "left": ["shared"],
            "right": ["shared"],
            "shared": [],
        })
        tree = _analyze(graph, "shared", ChangeType.MODIFY)

        counts = Counter(tree.files())
        assert all(n == 1 for n in counts.values())
        assert [c.file for c in tree.children] == ["left", "right"]
        # index is reached through left first
        assert [c.file for c in tree.children[0].children] == ["index"]
        assert tree.children[1].children == ()

    def test_mutual_imports_terminate(self):
        graph = _graph({"a": ["b"], "b": ["a"]})
        tree = _analyze(graph, "a", ChangeType.DELETE)

        assert tree.files() == ["a", "b"]
        assert tree.children[0].children == ()

    def test_self_import(self):
        graph = _graph({"a": ["a"], "b": ["a"]})
        tree = _analyze(graph, "a", ChangeType.MODIFY)
        assert tree.files() == ["a", "b"]

    def test_larger_cycle(self):
        graph = _graph({"a": ["b"], "b": ["c"], "c": ["a"], "d": ["c"]})
        tree = _analyze(graph, "c", ChangeType.MODIFY)

        counts = Counter(tree.files())
        assert set(counts) == {"a", "b", "c", "d"}
        assert all(n == 1 for n in counts.values())

    def test_shared_visited_set(self):
        graph = _graph({"index": ["x", "y"], "x": ["lib"], "y": ["lib"], "lib": []})
        visited = {"x"}
        tree = ImpactAnalyzer(graph).analyze("lib", ChangeType.DELETE, visited=visited)

        assert [c.file for c in tree.children] == ["y"]
        assert visited == {"x", "y", "lib", "index"}

    def test_file_not_in_graph(self):
        graph = _graph({"index": ["a"], "a": []})
        tree = _analyze(graph, "elsewhere", ChangeType.ADD)
        assert tree.file == "elsewhere"
        assert tree.children == ()

    def test_graph_is_not_mutated(self):
        graph = _graph({"index": ["a"], "a": []}, {"a": ["foo"]})
        edges_before = list(graph.graph.edges)
        exports_before = dict(graph.exports)

        _analyze(graph, "a", ChangeType.MODIFY, ["foo"])

        assert list(graph.graph.edges) == edges_before
        assert graph.exports == exports_before

    def test_deep_chain(self):
        depth = 3000
        edges = {f"m{i}": [f"m{i + 1}"] for i in range(depth)}
        edges[f"m{depth}"] = []
        tree = _analyze(_graph(edges), f"m{depth}", ChangeType.DELETE)
        assert len(tree.files()) == depth + 1


class TestModels:
    def test_descriptor_rejects_affected(self):
        with pytest.raises(ValidationError):
            ChangeDescriptor(target_file="a.ts", change_type="affected")

    def test_descriptor_strips_blank_names(self):
        change = ChangeDescriptor(
            target_file="a.ts", change_type="modify", modified_exports=[" foo", "", "bar "]
        )
        assert change.change_type == ChangeType.MODIFY
        assert change.modified_exports == ["foo", "bar"]

    def test_impact_node_is_frozen(self):
        node = ImpactNode(file="a.ts", change_type=ChangeType.DELETE)
        with pytest.raises(ValidationError):
            node.reason = "changed"

    def test_walk_is_preorder(self):
        leaf = ImpactNode(file="c", change_type=ChangeType.AFFECTED, reason="r")
        mid = ImpactNode(file="b", change_type=ChangeType.AFFECTED, reason="r", children=(leaf,))
        other = ImpactNode(file="d", change_type=ChangeType.AFFECTED, reason="r")
        root = ImpactNode(file="a", change_type=ChangeType.MODIFY, children=(mid, other))

        assert root.files() == ["a", "b", "c", "d"]
        assert root.affected_files() == ["b", "c", "d"]
        assert root.is_root
        assert not mid.is_root


class TestEndToEnd:
    def test_modified_export(self, make_project):
        root = make_project({
            "index.ts": 'import { foo } from "./a";\nimport { bar } from "./b";\n',
            "a.ts": "export const foo = 1;\n",
            "b.ts": "export const bar = 2;\n",
        })
        tree = analyze_file_change(root / "index.ts", root / "a.ts", "modify", ["foo"])

        assert tree.file == normalize_path(root / "a.ts")
        assert tree.change_type == ChangeType.MODIFY
        assert tree.reason is None
        assert len(tree.children) == 1
        child = tree.children[0]
        assert child.file == normalize_path(root / "index.ts")
        assert child.change_type == ChangeType.AFFECTED
        assert child.reason == "modified exports: foo"

    def test_delete_with_independent_dependents(self, make_project):
        root = make_project({
            "index.ts": 'import "./y";\nimport "./x";\n',
            "x.ts": 'import { z } from "./z";\nexport const x = z;\n',
            "y.ts": 'import { z } from "./z";\nexport const y = z;\n',
            "z.ts": "export const z = 0;\n",
        })
        tree = analyze_file_change(root / "index.ts", root / "z.ts", ChangeType.DELETE)

        assert [c.file for c in tree.children] == [
            normalize_path(root / "y.ts"),
            normalize_path(root / "x.ts"),
        ]
        assert all(c.reason == "file was deleted" for c in tree.children)

    def test_missing_entry(self, tmp_path: Path):
        with pytest.raises(AnalysisError):
            analyze_file_change(tmp_path / "nope.ts", tmp_path / "a.ts", "delete")

    def test_broken_file_does_not_stop_analysis(self, make_project):
        root = make_project({
            "index.ts": 'import "./broken";\nimport "./page";\n',
            "broken.ts": 'import { lib } from "./lib";\nexport const = ;\n',
            "page.ts": 'import { lib } from "./lib";\n',
            "lib.ts": "export const lib = 1;\n",
        })
        tree = analyze_file_change(root / "index.ts", root / "lib.ts", "modify", ["lib"])

        assert [c.file for c in tree.children] == [normalize_path(root / "page.ts")]
        assert tree.children[0].children[0].file == normalize_path(root / "index.ts")
