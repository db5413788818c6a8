"""HTML snapshot parsing and BeautifulSoup -> node-model conversion.

Parsing is delegated to ``BeautifulSoup`` with the lxml backend; this module
only walks the resulting soup and builds the mutable tree the simplifier
works on.

Declarative shadow DOM (``<template shadowrootmode="open">`` as the first
template child of a host) is converted into the host's ``shadow_root``
instead of a regular child, so that shadow content stays out of band until
a rule explicitly extracts it.
"""

from __future__ import annotations

from typing import Optional, Union

from bs4 import (
    BeautifulSoup,
    CData,
    Comment,
    Declaration,
    Doctype,
    NavigableString,
    PageElement,
    ProcessingInstruction,
    Tag,
)

from dom.node import Container, Element, Node, Other, Text

_SHADOW_MODE_ATTRS = ("shadowrootmode", "shadowroot")

# Checked in order; all are NavigableString subclasses that are not text.
_OTHER_STRING_TYPES: list[tuple[type, str]] = [
    (Comment, "comment"),
    (Doctype, "doctype"),
    (CData, "cdata"),
    (ProcessingInstruction, "processing-instruction"),
    (Declaration, "declaration"),
]


def parse_html(raw_html: str) -> BeautifulSoup:
    """Parse an HTML snapshot with the lxml backend."""
    return BeautifulSoup(raw_html, "lxml")


def _attrs_to_str_map(attrs: dict) -> dict[str, str]:
    """Convert a BS4 attribute dict to a flat str:str map.

    BS4 returns list values for multi-valued attributes like ``class``.
    These are joined with a space.
    """
    result: dict[str, str] = {}
    for k, v in attrs.items():
        if isinstance(v, list):
            result[k] = " ".join(str(item) for item in v)
        else:
            result[k] = str(v)
    return result


def _shadow_mode(tag: Tag) -> Optional[str]:
    if tag.name != "template":
        return None
    for attr in _SHADOW_MODE_ATTRS:
        mode = tag.get(attr)
        if mode:
            return str(mode)
    return None


def _convert_leaf(el: PageElement) -> Node:
    for string_type, name in _OTHER_STRING_TYPES:
        if isinstance(el, string_type):
            return Other(str(el), name=name)
    if isinstance(el, NavigableString):
        return Text(str(el))
    return Other(str(el), name="other")


def from_soup(root: Union[Tag, NavigableString]) -> Node:
    """Convert a BS4 node (and its subtree) into the node model.

    A ``BeautifulSoup`` document converts to its first top-level element;
    document-level doctypes and comments are dropped.

    Raises:
        ValueError: If *root* is a document without any element.
    """
    if isinstance(root, BeautifulSoup):
        top = next((c for c in root.children if isinstance(c, Tag)), None)
        if top is None:
            raise ValueError("document has no element to convert")
        root = top

    if not isinstance(root, Tag):
        return _convert_leaf(root)

    converted = Element(root.name, _attrs_to_str_map(root.attrs))
    stack: list[tuple[Tag, Container]] = [(root, converted)]
    while stack:
        tag, target = stack.pop()
        for child in tag.children:
            if not isinstance(child, Tag):
                target.append_child(_convert_leaf(child))
                continue
            mode = _shadow_mode(child)
            if mode is not None and isinstance(target, Element) and target.shadow_root is None:
                stack.append((child, target.attach_shadow(mode)))
                continue
            element = Element(child.name, _attrs_to_str_map(child.attrs))
            target.append_child(element)
            stack.append((child, element))
    return converted


def body_of(raw_html: str) -> Element:
    """Parse *raw_html* and convert its ``<body>`` (or its root element)."""
    soup = parse_html(raw_html)
    body = soup.body
    converted = from_soup(body if body is not None else soup)
    if not isinstance(converted, Element):
        raise ValueError("snapshot has no root element")
    return converted
