"""Capability surface the simplification engine requires from a tree.

Any node representation can be simplified as long as it exposes the members
below. The engine never reaches past this protocol, so all domain knowledge
(what a "visible" or "clickable" node is) stays in rule predicates.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping


class NodeKind(str, Enum):
    """Tag of the node variant."""

    ELEMENT = "element"
    TEXT = "text"
    OTHER = "other"


@runtime_checkable
class TreeNode(Protocol):
    """Structural contract of a mutable tree node."""

    @property
    def kind(self) -> NodeKind: ...

    @property
    def parent(self) -> Optional[TreeNode]: ...

    @property
    def origin(self) -> Optional[TreeNode]: ...

    @property
    def attributes(self) -> Mapping[str, str]: ...

    def child_snapshot(self) -> tuple[TreeNode, ...]: ...

    def detach(self) -> None: ...

    def insert_before(self, child: TreeNode, reference: Optional[TreeNode]) -> None: ...

    def append_child(self, child: TreeNode) -> None: ...

    def index_in_parent(self) -> int: ...

    def get_attribute(self, name: str) -> Optional[str]: ...

    def set_attribute(self, name: str, value: str) -> None: ...

    def remove_attribute(self, name: str) -> None: ...

    def has_attribute(self, name: str) -> bool: ...
