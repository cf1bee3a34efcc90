"""Shared test fixtures for Ripple."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from ripple.exceptions import InspectorError
from ripple.graph.resolver import normalize_path
from ripple.inspector.models import SourceFacts


def write_files(root: Path, files: dict[str, str]) -> Path:
    for rel_path, content in files.items():
        path = root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return root


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Write a {relative path: source} mapping under tmp_path."""

    def _make(files: dict[str, str]) -> Path:
        return write_files(tmp_path, files)

    return _make


@pytest.fixture
def ts_project(tmp_path: Path) -> Path:
    """A small TypeScript project with aliases, index files and an external import."""
    return write_files(tmp_path, {
        "src/index.ts": '''import { foo } from "./a";
import Button from "./components/Button";
import { formatDate } from "@/utils";
import React from "react";

export function main() {
    return foo + formatDate(new Date());
}
''',
        "src/a.ts": '''export const foo = 1;

export function helper() {
    return foo * 2;
}
''',
        "src/components/Button.tsx": '''import { helper } from "../a";

export default function Button() {
    return <button>{helper()}</button>;
}
''',
        "src/utils/index.ts": '''export function formatDate(d: Date): string {
    return d.toISOString();
}
''',
        "src/unused.ts": '''export const nobodyImportsMe = true;
''',
    })


class FakeInspector:
    """Stand-in for the tree-sitter inspector, keyed by path relative to root.

    Files must still exist on disk for the resolver to find them.
    """

    def __init__(self, root: Path, facts: dict[str, tuple[list[str], list[str]] | Exception]):
        self.root = root
        self.facts = facts
        self.calls: list[str] = []
        for rel_path in facts:
            path = root / rel_path
            path.parent.mkdir(parents=True, exist_ok=True)
            path.touch()

    def __call__(self, file_path: str) -> SourceFacts:
        self.calls.append(file_path)
        rel_path = Path(file_path).relative_to(self.root).as_posix()
        entry = self.facts.get(rel_path)
        if entry is None:
            raise InspectorError(file_path, "no facts")
        if isinstance(entry, Exception):
            raise entry
        imports, exports = entry
        return SourceFacts(
            file_path=file_path, language="typescript", imports=imports, exports=exports
        )

    def path(self, rel_path: str) -> str:
        return normalize_path(self.root / rel_path)


@pytest.fixture
def fake_inspector(tmp_path: Path) -> Callable[..., FakeInspector]:
    def _make(facts: dict[str, tuple[list[str], list[str]] | Exception]) -> FakeInspector:
        return FakeInspector(tmp_path, facts)

    return _make
