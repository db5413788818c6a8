"""Diagnostics for rule matches.

The engine only knows the ``MatchReporter`` protocol; what happens with a
report (structured log line, in-memory list, nothing) is up to the caller.
Reports never influence the traversal.
"""

from __future__ import annotations

import logging
from typing import Any, NamedTuple, Optional, Protocol

REMOVE = "remove"
UNFOLD = "unfold"


class MatchReporter(Protocol):
    def report(self, event: str, node: Any, rule_name: str) -> None: ...


class MatchEvent(NamedTuple):
    event: str
    node: Any
    rule_name: str


def describe_node(node: Any) -> str:
    """Describe *node* by its origin when it has one (the node users see)."""
    origin = getattr(node, "origin", None)
    return repr(origin if origin is not None else node)


class LoggingReporter:
    """Emit one structured log record per rule match."""

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.INFO) -> None:
        self.logger = logger or logging.getLogger("simplify")
        self.level = level

    def report(self, event: str, node: Any, rule_name: str) -> None:
        description = describe_node(node)
        self.logger.log(
            self.level,
            "%s %s on basis of %s",
            "unfolding" if event == UNFOLD else "removing",
            description,
            rule_name,
            extra={"event": event, "rule": rule_name, "node": description},
        )


class CollectingReporter:
    """Keep every match in memory, in the order the engine reported them."""

    def __init__(self) -> None:
        self.events: list[MatchEvent] = []

    def report(self, event: str, node: Any, rule_name: str) -> None:
        self.events.append(MatchEvent(event, node, rule_name))

    def rule_names(self) -> list[str]:
        return [e.rule_name for e in self.events]

    def count(self, event: str) -> int:
        return sum(1 for e in self.events if e.event == event)
