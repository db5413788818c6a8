"""Domain classification of document nodes.

Answers the questions web simplification rules ask about a node: is it
visible, clickable, meaningful on its own, or just a layout container?

Static snapshots carry no computed layout, so the classifier works from
what a capture step can record on each element:

    * inline ``style`` declarations (plus the ``hidden`` attribute) stand in
      for the computed style;
    * an optional ``data-bbox="x y width height"`` attribute stands in for
      the bounding client rect.  An element without it has unknown geometry
      and is treated as laid out.

Every lookup goes through the node's ``origin`` reference, so a clone that
rules have already stripped of ``style`` is still classified by its source.
Styles and rects are cached per source node; call ``invalidate()`` after
mutating a source node's attributes.
"""

from __future__ import annotations

import re
import weakref
from dataclasses import dataclass
from typing import Mapping, Optional

from dom.geometry import Rect, Viewport, parse_bbox
from dom.node import Element, Node, Text

INDEPENDENT_MEANING_TAGS = {"img", "svg", "input", "button", "a", "select", "option", "video"}

SEMANTIC_CONTAINER_TAGS = {
    "h1", "h2", "h3", "h4", "h5", "h6", "li", "ul", "ol", "table", "tr", "td",
    "th", "tbody", "thead", "tfoot", "dl", "dt", "dd", "blockquote", "address",
    "article", "aside", "details", "dialog", "summary", "fieldset", "figure",
    "figcaption", "footer", "header", "main", "mark", "nav", "section", "time",
}

# Class tokens that hide an element in common CSS frameworks.
HIDDEN_CLASS_TOKENS = {"hidden", "sr-only", "invisible"}

_STYLE_PROPERTIES = {
    "display": "display",
    "visibility": "visibility",
    "opacity": "opacity",
    "overflow": "overflow",
    "cursor": "cursor",
    "background-image": "background_image",
    "background-color": "background_color",
    "clip": "clip",
    "content": "content",
}

_URL_RE = re.compile(r"url\((.*)\)")
_NUMBER_RE = re.compile(r"-?\d+(?:\.\d+)?")


def file_name(url: str) -> str:
    """Last path segment of *url* without query string or fragment."""
    return url.split("/")[-1].split("#")[0].split("?")[0]


def background_image_url(background_image: str) -> Optional[str]:
    """Extract the URL from a ``background-image`` value, unquoted."""
    match = _URL_RE.search(background_image)
    if match is None:
        return None
    return match.group(1).strip().strip("'\"")


# ---------------------------------------------------------------------------
# Style
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ComputedStyle:
    """The subset of computed style the classification rules read."""

    display: str = "inline"
    visibility: str = "visible"
    opacity: str = "1"
    overflow: str = "visible"
    cursor: str = "auto"
    background_image: str = "none"
    background_color: str = "rgba(0, 0, 0, 0)"
    clip: str = "auto"
    content: str = "normal"

    @classmethod
    def from_attributes(cls, attrs: dict[str, str]) -> ComputedStyle:
        """Build a style from an element's inline ``style`` and ``hidden``."""
        declarations: dict[str, str] = {}
        for declaration in attrs.get("style", "").split(";"):
            name, sep, value = declaration.partition(":")
            if not sep:
                continue
            value = value.replace("!important", "").strip()
            declarations[name.strip().lower()] = value

        fields: dict[str, str] = {}
        for prop, field_name in _STYLE_PROPERTIES.items():
            value = declarations.get(prop)
            if value:
                # URLs are case-sensitive, keywords are not
                fields[field_name] = value if prop == "background-image" else value.lower()
        if "hidden" in attrs:
            fields["display"] = "none"
        return cls(**fields)

    @property
    def is_css_hidden(self) -> bool:
        return (
            self.visibility == "hidden"
            or self.display == "none"
            or self.opacity in ("0", "0.0")
        )


def hidden_by_class(attrs: Mapping[str, str]) -> bool:
    """Whether a CSS framework utility class in *attrs* hides the element."""
    return any(token in HIDDEN_CLASS_TOKENS for token in attrs.get("class", "").lower().split())


# ---------------------------------------------------------------------------
# Classifier
# ---------------------------------------------------------------------------


class Classifier:
    """Injectable classification service with a per-node style/rect cache.

    Args:
        viewport: Size of the browser window the snapshot was taken in.
        page: Size of the page body; defaults to *viewport*.
        min_area: Smallest box area (px²) that counts as visible.
    """

    def __init__(
        self,
        viewport: Viewport,
        page: Optional[Viewport] = None,
        min_area: float = 5,
    ) -> None:
        self.viewport = viewport
        self.page = page or viewport
        self.min_area = min_area
        self._styles: weakref.WeakKeyDictionary[Node, ComputedStyle] = weakref.WeakKeyDictionary()
        self._rects: weakref.WeakKeyDictionary[Node, Optional[Rect]] = weakref.WeakKeyDictionary()

    # ------------------------------------------------------------------
    # Cache
    # ------------------------------------------------------------------

    def style(self, node: Node) -> ComputedStyle:
        source = node.get_original_node()
        style = self._styles.get(source)
        if style is None:
            style = ComputedStyle.from_attributes(dict(source.attributes))
            self._styles[source] = style
        return style

    def rect(self, node: Node) -> Optional[Rect]:
        source = node.get_original_node()
        if source not in self._rects:
            self._rects[source] = parse_bbox(source.get_attribute("data-bbox"))
        return self._rects[source]

    def invalidate(self, node: Node) -> None:
        """Drop cached style and geometry of *node*'s source."""
        source = node.get_original_node()
        self._styles.pop(source, None)
        self._rects.pop(source, None)

    def clear(self) -> None:
        self._styles.clear()
        self._rects.clear()

    # ------------------------------------------------------------------
    # Visibility
    # ------------------------------------------------------------------

    def _is_collapsed_with_hidden_overflow(self, node: Node) -> bool:
        rect = self.rect(node)
        if rect is None or (rect.width != 0 and rect.height != 0):
            return False
        return self.style(node).overflow == "hidden"

    def can_have_visible_children(self, node: Node) -> bool:
        if not isinstance(node, Element):
            return False
        if self.style(node).is_css_hidden:
            return False
        return not self._is_collapsed_with_hidden_overflow(node)

    def is_not_visible_and_cant_have_visible_children(self, node: Node) -> bool:
        """True for elements whose whole subtree is guaranteed invisible."""
        if not isinstance(node, Element):
            return False
        if self.style(node).is_css_hidden:
            return True
        if hidden_by_class(node.get_original_node().attributes):
            return True
        return self._is_collapsed_with_hidden_overflow(node)

    def check_parents_css_visibility(self, node: Node, max_depth: int = 10) -> bool:
        """False if the node or one of its first *max_depth* ancestors is CSS-hidden."""
        current: Optional[Node] = node.get_original_node()
        depth = 0
        while isinstance(current, Element) and depth < max_depth:
            if self.style(current).is_css_hidden:
                return False
            current = current.parent
            depth += 1
        return True

    def _clip_area(self, clip: str) -> Optional[float]:
        if clip in ("auto", "initial", "inherit", "none"):
            return None
        values = [float(v) for v in _NUMBER_RE.findall(clip)]
        if len(values) != 4:
            return None
        return (values[2] - values[0]) * (values[1] - values[3])

    def is_visible_on_screen(self, node: Node) -> bool:
        """Whether the node paints at least ``min_area`` pixels inside the page.

        Non-element nodes inherit the answer from their source parent.  A
        plain ``div`` only counts as visible when it renders as an image.
        """
        target: Optional[Node] = node.get_original_node()
        while target is not None and not isinstance(target, Element):
            target = target.parent
        if target is None:
            return False

        style = self.style(target)
        if style.is_css_hidden:
            return False

        rect = self.rect(target)
        if rect is not None:
            if rect.area < self.min_area or not rect.is_in_page(self.page):
                return False
            has_offset = rect.width != 0 and rect.height != 0
        else:
            has_offset = True

        clip_area = self._clip_area(style.clip)
        if clip_area is not None and clip_area < self.min_area:
            return False

        if target.tag != "svg" and not has_offset:
            return False
        return target.tag != "div" or self.is_image_div(target)

    def is_in_viewport(self, node: Node) -> bool:
        rect = self.rect(node)
        return rect is None or rect.is_in_viewport(self.viewport)

    # ------------------------------------------------------------------
    # Clickability
    # ------------------------------------------------------------------

    def is_css_clickable(self, node: Node) -> bool:
        if not isinstance(node, Element):
            return False
        if self.style(node).cursor == "pointer":
            return True
        return node.get_original_node().has_attribute("onclick")

    def is_element_clickable(self, node: Node) -> bool:
        if not isinstance(node, Element):
            return False
        if node.tag in ("button", "a"):
            return True
        input_type = node.get_original_node().get_attribute("type") or ""
        return node.tag == "input" and input_type.lower() == "submit"

    def is_clickable(self, node: Node) -> bool:
        return self.is_css_clickable(node) or self.is_element_clickable(node)

    # ------------------------------------------------------------------
    # Meaning
    # ------------------------------------------------------------------

    def is_image_div(self, node: Node) -> bool:
        """A ``div`` whose background image is content, not decoration.

        Background images whose file name mentions ``bg`` or ``background``
        are treated as decoration.
        """
        if not isinstance(node, Element) or node.tag != "div":
            return False
        url = background_image_url(self.style(node).background_image)
        if not url:
            return False
        name = file_name(url)
        return "bg" not in name and "background" not in name

    def has_pseudo_element(self, node: Node) -> bool:
        if not isinstance(node, Element):
            return False
        content = self.style(node).content
        return "::before" in content or "::after" in content

    def has_independent_meaning(self, node: Node) -> bool:
        """Media, interactive elements and non-blank text mean something on their own."""
        if isinstance(node, Text):
            return node.data.strip() != ""
        if isinstance(node, Element):
            if node.tag in INDEPENDENT_MEANING_TAGS:
                return True
            return self.is_image_div(node)
        return False

    def is_non_semantic_container(self, node: Element) -> bool:
        """A layout-only wrapper that can be dissolved without losing meaning."""
        if self.is_image_div(node):
            return False
        parent = node.parent
        parent_clickable = isinstance(parent, Element) and self.is_clickable(parent)
        if self.is_clickable(node) and not parent_clickable:
            return False
        return node.tag not in SEMANTIC_CONTAINER_TAGS
