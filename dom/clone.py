"""Deep cloning with origin back-references.

The simplification pass mutates its input in place, so callers that still
need the source tree simplify a clone instead.  Every cloned node keeps an
``origin`` reference to its source node, which lets classification read the
untouched source attributes and lets diagnostics point back at the node the
user actually sees.
"""

from __future__ import annotations

from dom.node import Container, Element, Node, Other, ShadowRoot, Text
from simplify.errors import CloneMismatchError


def _shallow_copy(node: Node) -> Node:
    if isinstance(node, Element):
        copy: Node = Element(node.tag, node.attributes)
    elif isinstance(node, Text):
        copy = Text(node.data)
    elif isinstance(node, Other):
        copy = Other(node.data, node.name)
    else:
        raise TypeError(f"cannot clone {type(node).__name__}")
    copy.origin = node
    return copy


def _copy_children(source: Container, target: Container, stack: list) -> None:
    for child in source.children:
        child_copy = _shallow_copy(child)
        target.append_child(child_copy)
        stack.append((child, child_copy))


def clone_with_origins(root: Node) -> Node:
    """Deep-clone *root*, shadow roots included, linking each clone to its source.

    Returns:
        The cloned root.  ``clone.origin is root`` and the same holds for
        every descendant pair.

    Raises:
        CloneMismatchError: If the source and the clone do not contain the
            same number of nodes.
    """
    clone = _shallow_copy(root)
    stack: list[tuple[Node, Node]] = [(root, clone)]
    while stack:
        source, target = stack.pop()
        if isinstance(source, Container) and isinstance(target, Container):
            _copy_children(source, target, stack)
        if isinstance(source, Element) and source.shadow_root is not None:
            assert isinstance(target, Element)
            shadow: ShadowRoot = target.attach_shadow(source.shadow_root.mode)
            shadow.origin = source.shadow_root
            _copy_children(source.shadow_root, shadow, stack)

    source_count = root.count_nodes(include_shadow=True)
    clone_count = clone.count_nodes(include_shadow=True)
    if source_count != clone_count:
        raise CloneMismatchError(
            f"clone has {clone_count} nodes, source has {source_count}",
            node=root,
        )
    return clone
