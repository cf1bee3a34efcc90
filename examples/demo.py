#!/usr/bin/env python3
"""Demo: Using Ripple as a Python library.

Writes a tiny TypeScript project to a temporary directory, then shows the
dependency graph and the impact of changing one of its files.
"""

import tempfile
from pathlib import Path

from ripple.analysis import ChangeType, ImpactAnalyzer
from ripple.config import ProjectConfig
from ripple.graph import GraphBuilder, normalize_path
from ripple.render import render_text

PROJECT = {
    "src/index.ts": 'import { total } from "./cart";\nimport { Header } from "@/ui/Header";\n',
    "src/cart.ts": 'import { price } from "./pricing";\nexport const total = () => price(1);\n',
    "src/pricing.ts": "export function price(n: number) { return n * 9.99; }\n",
    "src/ui/Header.tsx": 'import { price } from "../pricing";\nexport const Header = () => <h1>{price(1)}</h1>;\n',
}


def main():
    with tempfile.TemporaryDirectory() as tmp:
        root = Path(tmp)
        for rel_path, source in PROJECT.items():
            path = root / rel_path
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(source)

        # 1. Build the dependency graph
        print("Building dependency graph...")
        config = ProjectConfig(root_path=str(root))
        graph = GraphBuilder(config).build(root / "src" / "index.ts")

        stats = graph.stats()
        print(f"  Files: {stats['files']}")
        print(f"  Imports: {stats['imports']}")
        print(f"  Exports: {stats['exports']}")

        # 2. Impact of modifying an export
        print("\n--- Impact of modifying 'price' in pricing.ts ---")
        changed = normalize_path(root / "src" / "pricing.ts")
        tree = ImpactAnalyzer(graph).analyze(changed, ChangeType.MODIFY, ["price"])
        print(render_text(tree, str(root)))

        # 3. Impact of deleting a file
        print("\n--- Impact of deleting cart.ts ---")
        changed = normalize_path(root / "src" / "cart.ts")
        tree = ImpactAnalyzer(graph).analyze(changed, ChangeType.DELETE)
        for file in tree.affected_files():
            print(f"  - {Path(file).relative_to(root)}")


if __name__ == "__main__":
    main()
