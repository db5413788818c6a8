"""Attribute merging and the unfold (splice-and-promote) operation."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from dom.protocol import NodeKind
from simplify.errors import UnfoldRootError
from simplify.rules import ALL_ATTRIBUTES

if TYPE_CHECKING:
    from dom.protocol import TreeNode
    from simplify.rules import AttributeSelection


def _selected_names(properties: AttributeSelection) -> Optional[frozenset[str]]:
    """Lower-cased attribute names to merge, or ``None`` for all of them."""
    if isinstance(properties, str):
        if properties != ALL_ATTRIBUTES:
            raise TypeError(
                f"properties must be {ALL_ATTRIBUTES!r} or a set of names, got {properties!r}"
            )
        return None
    return frozenset(name.lower() for name in properties)


def concat_properties_from(
    target: TreeNode,
    source: TreeNode,
    properties: AttributeSelection = ALL_ATTRIBUTES,
) -> None:
    """Merge *source*'s attributes into *target*.

    An attribute *target* already has gets the source value appended after
    a single space (``class="b"`` + ``class="a"`` -> ``class="b a"``); any
    other qualifying attribute is copied verbatim.  With an explicit
    *properties* set, only those names qualify, compared case-insensitively.

    Raises:
        TypeError: If *properties* is a string other than ``ALL_ATTRIBUTES``.
    """
    selected = _selected_names(properties)
    for name, value in list(source.attributes.items()):
        if selected is not None and name.lower() not in selected:
            continue
        existing = target.get_attribute(name)
        if existing is None:
            target.set_attribute(name, value)
        else:
            target.set_attribute(name, f"{existing} {value}")


def unfold(
    element: TreeNode,
    *,
    propagate_attributes: bool = False,
    properties: AttributeSelection = ALL_ATTRIBUTES,
) -> list[TreeNode]:
    """Replace *element* with its children, in place and in order.

    Attributes are merged into element children before they are moved, while
    *element* is still attached.

    Returns:
        The promoted children, in their original order.

    Raises:
        UnfoldRootError: If *element* has no parent to promote into.
        TypeError: If *properties* is a string other than ``ALL_ATTRIBUTES``.
    """
    parent = element.parent
    if parent is None:
        raise UnfoldRootError(f"cannot unfold {element!r}: it has no parent", node=element)
    if propagate_attributes:
        _selected_names(properties)

    children = list(element.child_snapshot())
    for child in children:
        if propagate_attributes and child.kind is NodeKind.ELEMENT:
            concat_properties_from(child, element, properties)
        parent.insert_before(child, element)
    element.detach()
    return children
