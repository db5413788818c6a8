"""The basic rule set for reducing rendered web pages.

Drops invisible and non-content nodes, strips presentation attributes and
Tailwind utility classes, and collapses layout-only wrapper elements, while
keeping interactive, textual and media-bearing nodes.

All rules classify through an injected ``Classifier``; they never look at
layout themselves.
"""

from __future__ import annotations

import logging

from dom.classify import Classifier, background_image_url, file_name
from dom.node import Element, Node, Text
from dom.protocol import NodeKind
from simplify.rules import (
    ElementRemovePreChildrenRule,
    ElementUnfoldRule,
    NodeRemoveRule,
    PreChildrenAction,
    RuleSet,
)

logger = logging.getLogger("simplify")

NON_VISIBLE_TAGS = {"script", "object", "noscript", "meta", "style", "source"}

# Attributes a downstream reader needs; everything else is dropped.
SIMPLE_ATTRIBUTES = {"class", "id", "src", "value", "placeholder", "title", "aria-label", "href"}

TAILWIND_CLASS_PREFIXES = (
    "sm:", "md:", "lg:", "xl:", "2xl:", "xs:", "nd:", "hover:", "focus:", "active:",
    "disabled:", "checked:", "group-hover:", "group-focus:", "focus-within:",
    "focus-visible:", "dark:", "light:", "motion-safe:", "motion-reduce:",
    "portrait:", "landscape:", "first:", "last:", "odd:", "even:", "only:",
    "target:", "default:", "indeterminate:", "required:", "valid:", "invalid:",
    "placeholder-shown:", "autofill:", "read-only:", "empty:", "before:", "after:",
    "first-line:", "first-letter:", "marker:", "selection:", "file:", "backdrop:",
    "container", "block", "inline", "inline-block", "flex", "inline-flex", "grid",
    "inline-grid", "table", "hidden", "static", "fixed", "absolute", "relative",
    "sticky", "inset-", "top-", "right-", "bottom-", "left-", "z-", "float-",
    "clear-", "m-", "mt-", "mr-", "mb-", "ml-", "mx-", "my-", "p-", "pt-", "pr-",
    "pb-", "pl-", "px-", "py-", "gap-", "space-x-", "space-y-", "w-", "min-w-",
    "max-w-", "h-", "min-h-", "max-h-", "aspect-", "font-", "text-", "align-",
    "leading-", "tracking-", "underline", "line-through", "no-underline",
    "uppercase", "lowercase", "capitalize", "truncate", "text-ellipsis",
    "text-clip", "list-", "bg-", "bg-gradient-to-", "from-", "via-", "to-",
    "bg-opacity-", "border-", "border-t-", "border-dashed", "border-dotted",
    "rounded-", "rounded-t-", "rounded-b-", "divide-x-", "divide-y-", "divide-",
    "ring-", "ring-offset-", "shadow-", "opacity-", "mix-blend-", "bg-blend-",
    "transition-", "duration-", "ease-", "delay-", "animate-", "transform",
    "scale-", "rotate-", "translate-x-", "skew-x-", "origin-", "cursor-",
    "resize-", "scroll-", "snap-", "overscroll-", "select-", "fill-", "stroke-",
    "stroke-w-", "sr-only", "not-sr-only", "table-", "border-collapse",
    "border-spacing-", "flex-", "flex-row", "flex-col", "flex-wrap", "order-",
    "grow-", "shrink-", "grid-cols-", "grid-rows-", "col-", "row-", "auto-cols-",
    "auto-rows-", "columns-", "filter", "blur-", "brightness-", "contrast-",
    "backdrop-filter", "backdrop-blur-", "no-visited", "visible", "invisible",
    "prose", "form-", "line-clamp-", "enabled:", "embed-s:", "items-center",
    "pointer-events", "justify-center", "overflow-", "-", "[", "whitespace-",
    "justify-", "s:",
)


def filter_tailwind_classes(class_value: str) -> str:
    """Drop Tailwind utility classes from a ``class`` attribute value."""
    kept = [
        cls for cls in class_value.split(" ")
        if cls and not cls.startswith(TAILWIND_CLASS_PREFIXES)
    ]
    return " ".join(kept)


def build_basic_rule_set(classifier: Classifier) -> RuleSet:
    """Build the web-page rule set on top of *classifier*."""

    # -----------------------------------------------------------------
    # Unfold
    # -----------------------------------------------------------------

    def single_child_container(element: Element) -> bool:
        return (
            element.parent is not None
            and len(element.children) == 1
            and classifier.is_non_semantic_container(element)
        )

    # -----------------------------------------------------------------
    # Node removal
    # -----------------------------------------------------------------

    def non_text_non_element(node: Node) -> bool:
        return node.kind is NodeKind.OTHER

    def empty_text(node: Node) -> bool:
        return isinstance(node, Text) and node.data.strip() == ""

    def invisible_childless(node: Node) -> bool:
        return (
            not node.children
            and not classifier.has_independent_meaning(node)
            and not classifier.has_pseudo_element(node)
            and not classifier.is_visible_on_screen(node)
        )

    # -----------------------------------------------------------------
    # Pre-children actions
    # -----------------------------------------------------------------

    def remove_tailwind_classes(element: Element) -> None:
        class_value = element.get_attribute("class")
        if class_value is not None:
            element.set_attribute("class", filter_tailwind_classes(class_value))

    def extract_shadow_root(element: Element) -> None:
        shadow = element.shadow_root
        if shadow is None or not shadow.has_child_nodes():
            return
        moved = 0
        # Appended after the light children; slot order is not reconstructed.
        for child in shadow.child_snapshot():
            element.append_child(child)
            moved += 1
        element.shadow_root = None
        logger.debug(
            "extracted shadow root",
            extra={"node": repr(element.get_original_node()), "moved": moved},
        )

    def remove_unnecessary_attributes(element: Element) -> None:
        for name in list(element.attributes):
            if name.lower() not in SIMPLE_ATTRIBUTES:
                element.remove_attribute(name)

    def synthetic_background_style(element: Element) -> None:
        style = classifier.style(element)
        if style.background_image == "none" or not style.background_color:
            return
        url = background_image_url(style.background_image)
        if url:
            element.set_attribute("style", f"background-image: url({file_name(url)})")
        else:
            element.set_attribute("style", f"background-image: {style.background_image}")

    def simplify_src(element: Element) -> None:
        src = element.get_attribute("src")
        if src:
            element.set_attribute("src", file_name(src))

    def clickable_to_button(element: Element) -> None:
        parent = element.parent
        parent_clickable = isinstance(parent, Element) and classifier.is_clickable(parent)
        if (
            classifier.is_clickable(element)
            and not classifier.is_element_clickable(element)
            and not parent_clickable
        ):
            element.tag = "button"

    def collapse_class_newlines(element: Element) -> None:
        class_value = element.get_attribute("class")
        if class_value is not None:
            element.set_attribute("class", class_value.replace("\n", " "))

    def remove_empty_class(element: Element) -> None:
        if element.get_attribute("class") == "":
            element.remove_attribute("class")

    return RuleSet(
        element_unfold_rules=[
            ElementUnfoldRule(
                name="Unfold div containers with only one child",
                should_unfold=single_child_container,
                propagate_attributes=True,
            ),
        ],
        element_remove_pre_children_rules=[
            ElementRemovePreChildrenRule(
                name="Remove SVGs",
                should_remove=lambda el: el.tag == "svg",
            ),
            ElementRemovePreChildrenRule(
                name="Remove inherently non-visible elements",
                should_remove=lambda el: el.tag in NON_VISIBLE_TAGS,
            ),
            ElementRemovePreChildrenRule(
                name="Remove iframe",
                should_remove=lambda el: el.tag == "iframe",
            ),
            ElementRemovePreChildrenRule(
                name="Remove non-visible elements",
                should_remove=classifier.is_not_visible_and_cant_have_visible_children,
            ),
        ],
        node_remove_rules=[
            NodeRemoveRule(name="Remove non-text non-element", should_remove=non_text_non_element, log=False),
            NodeRemoveRule(name="Remove empty text", should_remove=empty_text, log=False),
            NodeRemoveRule(
                name="Remove non-visible childrenless elements",
                should_remove=invisible_childless,
                log=False,
            ),
        ],
        pre_children_actions=[
            PreChildrenAction(name="Remove tailwind classes", action=remove_tailwind_classes),
            PreChildrenAction(name="Extract shadowroot", action=extract_shadow_root),
            PreChildrenAction(name="Remove unnecessary attributes", action=remove_unnecessary_attributes),
            PreChildrenAction(name="Synthetic background-image style", action=synthetic_background_style),
            PreChildrenAction(name="Simplify src path", action=simplify_src),
            PreChildrenAction(name="Replace clickable div with button", action=clickable_to_button),
            PreChildrenAction(name="Remove newlines from classnames", action=collapse_class_newlines),
            PreChildrenAction(name="Remove empty class attribute", action=remove_empty_class),
        ],
    )
