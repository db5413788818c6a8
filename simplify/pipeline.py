"""End-to-end simplification of an HTML snapshot.

Orchestrates the collaborators around the engine:

1. Parse the snapshot and convert its ``<body>`` (``dom.soup``)
2. Clone it with origin references (``dom.clone``)
3. Simplify the clone with the basic rule set, or the caller's
4. Serialise source and result (``dom.serialize``)

The source tree is never mutated, so classification reads untouched
attributes through each clone's origin reference.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from dom.classify import Classifier
from dom.clone import clone_with_origins
from dom.geometry import Viewport
from dom.serialize import to_html
from dom.soup import body_of
from simplify.basic import build_basic_rule_set
from simplify.engine import Simplifier

if TYPE_CHECKING:
    from simplify.reporting import MatchReporter
    from simplify.rules import RuleSet

logger = logging.getLogger("simplify")

DEFAULT_VIEWPORT = Viewport(1280, 720)


@dataclass
class SimplifiedPage:
    """Result of ``simplify_html``."""

    html: str
    original_html: str
    source_node_count: int
    simplified_node_count: int


def simplify_html(
    raw_html: str,
    *,
    rule_set: Optional[RuleSet] = None,
    viewport: Optional[Viewport] = None,
    pretty: bool = True,
    reporter: Optional[MatchReporter] = None,
    max_visits_per_node: Optional[int] = None,
) -> SimplifiedPage:
    """Simplify the body of *raw_html*.

    Args:
        raw_html: HTML snapshot of a rendered page.
        rule_set: Rules to apply; the basic web rule set when ``None``.
        viewport: Window size the snapshot was taken in (1280x720 default).
        pretty: Indent the serialised output.
        reporter: Rule-match sink; structured logging when ``None``.
        max_visits_per_node: Optional fail-safe budget (see ``Simplifier``).

    Raises:
        ValueError: If the snapshot contains no element.
        SimplifyError: If a rule fails or a tree invariant is violated.
    """
    source = body_of(raw_html)
    if rule_set is None:
        rule_set = build_basic_rule_set(Classifier(viewport or DEFAULT_VIEWPORT))

    clone = clone_with_origins(source)
    simplified = Simplifier(rule_set, reporter, max_visits_per_node).run(clone)

    page = SimplifiedPage(
        html=to_html(simplified, pretty=pretty),
        original_html=to_html(source, pretty=pretty),
        source_node_count=source.count_nodes(),
        simplified_node_count=simplified.count_nodes(),
    )
    logger.info(
        "simplified page",
        extra={
            "source_nodes": page.source_node_count,
            "simplified_nodes": page.simplified_node_count,
        },
    )
    return page
