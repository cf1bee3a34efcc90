"""Entry point for inspecting a single source file."""

from __future__ import annotations

from pathlib import Path

from ripple.exceptions import InspectorError
from ripple.inspector.models import SourceFacts, detect_language


def inspect_file(file_path: str, source: str | None = None) -> SourceFacts:
    """Read and parse a file, returning its import specifiers and export names.

    Raises:
        InspectorError: the file is unreadable, has an unsupported extension,
            or contains malformed syntax.
    """
    language = detect_language(file_path)
    if not language:
        raise InspectorError(file_path, "unsupported file type")

    if source is None:
        try:
            source = Path(file_path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise InspectorError(file_path, f"cannot read file: {e}") from e

    from ripple.inspector.tree_sitter_inspector import inspect_source

    return inspect_source(file_path, language, source)
