"""Document tree model, parsing, cloning, serialisation and classification."""

from dom.clone import clone_with_origins
from dom.node import Container, Element, Node, Other, ShadowRoot, Text
from dom.protocol import NodeKind, TreeNode
from dom.serialize import to_html
from dom.soup import body_of, from_soup, parse_html

__all__ = [
    # Node model
    "NodeKind",
    "TreeNode",
    "Node",
    "Container",
    "Element",
    "ShadowRoot",
    "Text",
    "Other",
    # Collaborators
    "clone_with_origins",
    "parse_html",
    "from_soup",
    "body_of",
    "to_html",
]
