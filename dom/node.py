"""Mutable document tree used by the simplification engine.

Three node variants exist, tagged by ``NodeKind``:

    ``Element`` -- tag name, ordered attributes, ordered children and an
    optional out-of-band ``ShadowRoot``.

    ``Text`` -- a string payload.

    ``Other`` -- anything else (comments, doctypes, processing
    instructions); opaque to the engine.

A node is owned by at most one parent.  Inserting a node that already has a
parent *moves* it.  The ``origin`` attribute is a non-owning back-reference
to the node this one was cloned from (see ``dom.clone``); it is used for
diagnostics and classification only and is never walked as a tree edge.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Optional

from dom.protocol import NodeKind

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

_EMPTY_ATTRS: Mapping[str, str] = MappingProxyType({})


class Node:
    """Base class of every tree node."""

    kind: NodeKind = NodeKind.OTHER

    def __init__(self) -> None:
        self._parent: Optional[Container] = None
        self.origin: Optional[Node] = None

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    @property
    def parent(self) -> Optional[Container]:
        return self._parent

    @property
    def children(self) -> tuple[Node, ...]:
        return ()

    def child_snapshot(self) -> tuple[Node, ...]:
        """Return the current children as an immutable tuple."""
        return self.children

    def index_in_parent(self) -> int:
        """Position of this node among its parent's children.

        Raises:
            ValueError: If the node has no parent.
        """
        if self._parent is None:
            raise ValueError(f"{self!r} has no parent")
        return self._parent._index_of(self)

    def detach(self) -> None:
        """Remove this node from its parent.  No-op for a detached node."""
        if self._parent is not None:
            self._parent._remove_child(self)

    def get_original_node(self) -> Node:
        """Return the node this one was cloned from, or ``self``."""
        return self.origin if self.origin is not None else self

    # ------------------------------------------------------------------
    # Attributes (empty for non-elements)
    # ------------------------------------------------------------------

    @property
    def attributes(self) -> Mapping[str, str]:
        return _EMPTY_ATTRS

    def get_attribute(self, name: str) -> Optional[str]:
        return None

    def has_attribute(self, name: str) -> bool:
        return False

    def set_attribute(self, name: str, value: str) -> None:
        raise TypeError(f"{type(self).__name__} nodes have no attributes")

    def remove_attribute(self, name: str) -> None:
        raise TypeError(f"{type(self).__name__} nodes have no attributes")

    def insert_before(self, child: Node, reference: Optional[Node]) -> None:
        raise TypeError(f"{type(self).__name__} nodes cannot have children")

    def append_child(self, child: Node) -> None:
        raise TypeError(f"{type(self).__name__} nodes cannot have children")

    # ------------------------------------------------------------------
    # Traversal helpers
    # ------------------------------------------------------------------

    def iter_tree(self, *, include_shadow: bool = False) -> Iterator[Node]:
        """Yield this node and its descendants in document (pre-)order.

        With *include_shadow*, an element's shadow root and its subtree are
        yielded after the element's light children.
        """
        stack: list[Node] = [self]
        while stack:
            node = stack.pop()
            yield node
            pending: list[Node] = list(node.children)
            if include_shadow and isinstance(node, Element) and node.shadow_root is not None:
                pending.append(node.shadow_root)
            stack.extend(reversed(pending))

    def count_nodes(self, *, include_shadow: bool = False) -> int:
        return sum(1 for _ in self.iter_tree(include_shadow=include_shadow))

    def text_content(self) -> str:
        return "".join(
            n.data for n in self.iter_tree() if isinstance(n, Text)
        )

    def _ancestors(self) -> Iterator[Node]:
        node: Optional[Node] = self
        while node is not None:
            yield node
            if isinstance(node, ShadowRoot) and node._parent is None:
                node = node.host
            else:
                node = node._parent


class Container(Node):
    """A node that owns an ordered list of children."""

    def __init__(self, children: Optional[list[Node]] = None) -> None:
        super().__init__()
        self._children: list[Node] = []
        for child in children or ():
            self.append_child(child)

    @property
    def children(self) -> tuple[Node, ...]:
        return tuple(self._children)

    @property
    def first_child(self) -> Optional[Node]:
        return self._children[0] if self._children else None

    def has_child_nodes(self) -> bool:
        return bool(self._children)

    def insert_before(self, child: Node, reference: Optional[Node]) -> None:
        """Insert *child* before *reference*, or append when it is ``None``.

        A child that already has a parent is moved.

        Raises:
            ValueError: If *reference* is not a child of this node, or if
                the insertion would make a node its own ancestor.
        """
        if child is reference:
            return
        # Only a node with children can be an ancestor of another node.
        if child is self or (isinstance(child, Container) and child._children):
            for ancestor in self._ancestors():
                if ancestor is child:
                    raise ValueError(f"cannot insert {child!r} into its own subtree")
        if reference is not None and reference._parent is not self:
            raise ValueError(f"{reference!r} is not a child of {self!r}")
        child.detach()
        if reference is None:
            self._children.append(child)
        else:
            self._children.insert(self._index_of(reference), child)
        child._parent = self

    def append_child(self, child: Node) -> None:
        self.insert_before(child, None)

    def _index_of(self, child: Node) -> int:
        for i, existing in enumerate(self._children):
            if existing is child:
                return i
        raise ValueError(f"{child!r} is not a child of {self!r}")

    def _remove_child(self, child: Node) -> None:
        del self._children[self._index_of(child)]
        child._parent = None


class Element(Container):
    """An element node: tag, ordered attributes and children."""

    kind = NodeKind.ELEMENT

    def __init__(
        self,
        tag: str,
        attributes: Optional[Mapping[str, str]] = None,
        children: Optional[list[Node]] = None,
    ) -> None:
        self.tag: str = tag.lower()
        self._attributes: dict[str, str] = dict(attributes or {})
        self.shadow_root: Optional[ShadowRoot] = None
        super().__init__(children)

    def __repr__(self) -> str:
        parts = [self.tag]
        for key in ("id", "class"):
            if key in self._attributes:
                parts.append(f'{key}="{self._attributes[key]}"')
        return f"<{' '.join(parts)}>"

    @property
    def attributes(self) -> dict[str, str]:
        return self._attributes

    def get_attribute(self, name: str) -> Optional[str]:
        return self._attributes.get(name)

    def has_attribute(self, name: str) -> bool:
        return name in self._attributes

    def set_attribute(self, name: str, value: str) -> None:
        self._attributes[name] = str(value)

    def remove_attribute(self, name: str) -> None:
        self._attributes.pop(name, None)

    def attach_shadow(self, mode: str = "open") -> ShadowRoot:
        """Create (or return the existing) shadow root of this element."""
        if self.shadow_root is None:
            self.shadow_root = ShadowRoot(self, mode=mode)
        return self.shadow_root


class ShadowRoot(Container):
    """Out-of-band child list hosted by an element.

    The shadow root is not one of its host's children: the engine only
    reaches shadow content after an action moves it into the light tree.
    """

    kind = NodeKind.OTHER

    def __init__(self, host: Element, mode: str = "open") -> None:
        super().__init__()
        self.host = host
        self.mode = mode

    def __repr__(self) -> str:
        return f"#shadow-root({self.mode}) of {self.host!r}"


class Text(Node):
    """A text node."""

    kind = NodeKind.TEXT

    def __init__(self, data: str = "") -> None:
        super().__init__()
        self.data = data

    def __repr__(self) -> str:
        preview = self.data if len(self.data) <= 30 else self.data[:27] + "..."
        return f"#text({preview!r})"


class Other(Node):
    """Opaque non-element, non-text node (comment, doctype, ...)."""

    kind = NodeKind.OTHER

    def __init__(self, data: str = "", name: str = "comment") -> None:
        super().__init__()
        self.data = data
        self.name = name

    def __repr__(self) -> str:
        return f"#{self.name}"
