"""Data models for inspected source files."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

DEFAULT_EXPORT = "default"


class SourceFacts(BaseModel):
    """Raw import specifiers and export names found in a single file."""

    file_path: str
    language: str
    imports: list[str] = Field(default_factory=list)  # specifiers as written
    exports: list[str] = Field(default_factory=list)


# Language detection by file extension
EXTENSION_LANGUAGE_MAP: dict[str, str] = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
}


def detect_language(file_path: str) -> str | None:
    """Detect the source language from the file extension."""
    ext = Path(file_path).suffix.lower()
    return EXTENSION_LANGUAGE_MAP.get(ext)
