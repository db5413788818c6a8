"""Error taxonomy of the simplification pass.

Every error here is fatal: the pass is aborted and no partially simplified
tree is handed back as if it were complete.
"""

from __future__ import annotations

from typing import Any, Optional


class SimplifyError(Exception):
    """Base class for all simplification failures."""


class RuleEvaluationError(SimplifyError):
    """A rule predicate or action raised.

    The original exception is chained as ``__cause__``.
    """

    def __init__(self, rule_name: str, node: Any, phase: str) -> None:
        self.rule_name = rule_name
        self.node = node
        self.phase = phase
        super().__init__(f"rule {rule_name!r} failed during {phase} on {node!r}")


class StructuralError(SimplifyError):
    """A tree invariant was violated."""

    def __init__(self, message: str, node: Optional[Any] = None) -> None:
        self.node = node
        super().__init__(message)


class UnfoldRootError(StructuralError):
    """An unfold rule matched a node without a parent to promote into."""


class ActionDetachedNodeError(StructuralError):
    """A pre-children action detached or moved the node it was given."""


class CloneMismatchError(StructuralError):
    """Source and cloned trees do not have the same number of nodes."""


class VisitBudgetExceededError(SimplifyError):
    """A node was processed more often than the configured budget allows."""

    def __init__(self, node: Any, budget: int) -> None:
        self.node = node
        self.budget = budget
        super().__init__(f"{node!r} processed more than {budget} times")
