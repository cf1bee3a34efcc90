"""Resolve raw import specifiers to files on disk."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator, Mapping, Sequence
from pathlib import Path

from ripple.config import DEFAULT_EXTENSIONS

logger = logging.getLogger("ripple.resolver")

RELATIVE_MARKER = "."


def normalize_path(path: str | Path) -> str:
    """Canonical FileIdentity for a path: absolute and normalized, symlinks kept."""
    return os.path.normpath(os.path.abspath(path))


def resolve_import(
    current_file: str,
    specifier: str,
    aliases: Mapping[str, str] | None = None,
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
    root: str | Path | None = None,
) -> str | None:
    """Map an import specifier written in `current_file` to a file on disk.

    Alias prefixes are tried first (longest prefix wins), then relative
    specifiers. Bare module names are external and never resolve.

    Args:
        current_file: File containing the import.
        specifier: The import source exactly as written.
        aliases: Prefix -> directory rewrites. Relative directories are
            taken from `root`.
        extensions: Ordered extension list used when probing candidates.
        root: Project root for alias targets. Defaults to the working directory.

    Returns:
        The resolved FileIdentity, or None when nothing on disk matches.
    """
    base = _rewrite(current_file, specifier, aliases or {}, root)
    if base is None:
        logger.debug("Skipping external module %r in %s", specifier, current_file)
        return None

    for candidate in _candidates(base, extensions):
        if os.path.isfile(candidate):
            logger.debug("Resolved %r from %s to %s", specifier, current_file, candidate)
            return normalize_path(candidate)

    logger.debug("Could not resolve %r from %s", specifier, current_file)
    return None


def _rewrite(
    current_file: str,
    specifier: str,
    aliases: Mapping[str, str],
    root: str | Path | None,
) -> str | None:
    for prefix in sorted(aliases, key=len, reverse=True):
        if prefix and specifier.startswith(prefix):
            target_dir = Path(root or Path.cwd()) / aliases[prefix]
            rest = specifier[len(prefix):]
            return normalize_path(os.path.join(target_dir, rest) if rest else target_dir)

    if specifier.startswith(RELATIVE_MARKER):
        return normalize_path(os.path.join(os.path.dirname(current_file), specifier))

    return None


def _candidates(base: str, extensions: Sequence[str]) -> Iterator[str]:
    """Probe order: literal path, path + extension, directory index + extension."""
    yield base
    for ext in extensions:
        yield base + ext
    for ext in extensions:
        yield os.path.join(base, f"index{ext}")
