"""Serialise a node tree back to HTML through BeautifulSoup.

Shadow roots are written as declarative shadow DOM
(``<template shadowrootmode="...">``) in front of the host's light children,
which is the inverse of what ``dom.soup.from_soup`` reads.
"""

from __future__ import annotations

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
from bs4.dammit import EntitySubstitution
from bs4.formatter import HTMLFormatter

from dom.node import Container, Element, Node, Other, Text

_OTHER_STRING_FACTORIES = {
    "comment": Comment,
    "doctype": Doctype,
    "cdata": CData,
    "processing-instruction": ProcessingInstruction,
    "declaration": Declaration,
}


class _DocumentOrderFormatter(HTMLFormatter):
    """The "minimal" formatter, writing attributes in node-model order."""

    def attributes(self, tag: Tag):
        if tag.attrs is None:
            return []
        return list(tag.attrs.items())


_FORMATTER = _DocumentOrderFormatter(entity_substitution=EntitySubstitution.substitute_xml)


def _to_bs4(soup: BeautifulSoup, node: Node) -> PageElement:
    if isinstance(node, Element):
        return soup.new_tag(node.tag, attrs=dict(node.attributes))
    if isinstance(node, Text):
        return NavigableString(node.data)
    if isinstance(node, Other):
        return _OTHER_STRING_FACTORIES.get(node.name, Comment)(node.data)
    raise TypeError(f"cannot serialise {type(node).__name__}")


def to_soup(root: Node) -> BeautifulSoup:
    """Build a standalone ``BeautifulSoup`` document holding *root*."""
    soup = BeautifulSoup("", "lxml")
    converted = _to_bs4(soup, root)
    soup.append(converted)

    stack: list[tuple[Container, Tag]] = []
    if isinstance(root, Element):
        stack.append((root, converted))
    while stack:
        node, tag = stack.pop()
        if isinstance(node, Element) and node.shadow_root is not None:
            template = soup.new_tag("template", attrs={"shadowrootmode": node.shadow_root.mode})
            tag.append(template)
            stack.append((node.shadow_root, template))
        for child in node.children:
            child_tag = _to_bs4(soup, child)
            tag.append(child_tag)
            if isinstance(child, Element):
                stack.append((child, child_tag))
    return soup


def to_html(root: Node, *, pretty: bool = False) -> str:
    """Render *root* as HTML, optionally indented one node per line."""
    soup = to_soup(root)
    if pretty:
        return soup.prettify(formatter=_FORMATTER)
    return soup.decode(formatter=_FORMATTER)
