"""Data models for change descriptions and impact trees."""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ChangeType(str, Enum):
    """Kinds of change. AFFECTED marks files impacted by another file's change."""

    ADD = "add"
    MODIFY = "modify"
    DELETE = "delete"
    AFFECTED = "affected"


class ChangeDescriptor(BaseModel):
    """A single file change to analyze."""

    target_file: str
    change_type: ChangeType
    modified_exports: list[str] = Field(default_factory=list)

    @field_validator("change_type")
    @classmethod
    def _not_affected(cls, value: ChangeType) -> ChangeType:
        if value == ChangeType.AFFECTED:
            raise ValueError("'affected' is not a valid change type for a changed file")
        return value

    @field_validator("modified_exports")
    @classmethod
    def _strip_names(cls, value: list[str]) -> list[str]:
        return [name.strip() for name in value if name.strip()]


class ImpactNode(BaseModel):
    """A file in the impact tree.

    The root carries the literal change type and no reason. Every other
    node is AFFECTED and explains why it was included.
    """

    model_config = ConfigDict(frozen=True)

    file: str
    change_type: ChangeType
    reason: str | None = None
    children: tuple[ImpactNode, ...] = ()

    @property
    def is_root(self) -> bool:
        return self.change_type != ChangeType.AFFECTED

    def walk(self) -> Iterator[ImpactNode]:
        """Pre-order traversal of this node and all descendants."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def files(self) -> list[str]:
        return [node.file for node in self.walk()]

    def affected_files(self) -> list[str]:
        """Every file in the tree except this one."""
        return self.files()[1:]


ImpactNode.model_rebuild()
