"""Why a dependent file is affected by a change."""

from __future__ import annotations

from collections.abc import Collection, Sequence

from ripple.analysis.models import ChangeType

DELETED = "file was deleted"
ADDED = "new file was added"
MODIFIED = "file was modified"
MODIFIED_EXPORTS = "modified exports: {names}"


def impact_reason(
    change_type: ChangeType,
    modified_exports: Sequence[str],
    changed_file_exports: Collection[str],
) -> str:
    """Reason attached to every direct dependent of a changed file.

    Modified export names are only reported when at least one of them is
    actually exported by the changed file. They are then listed in the
    order supplied, including any that the file does not export.
    """
    if change_type == ChangeType.DELETE:
        return DELETED
    if change_type == ChangeType.ADD:
        return ADDED
    if change_type == ChangeType.MODIFY and modified_exports:
        if any(name in changed_file_exports for name in modified_exports):
            return MODIFIED_EXPORTS.format(names=", ".join(modified_exports))
    return MODIFIED
