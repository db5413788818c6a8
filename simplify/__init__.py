"""Rule-driven DOM simplification engine.

Only the engine, rule contracts, diagnostics and errors are re-exported
here; ``simplify.basic`` and ``simplify.pipeline`` are imported from their
modules directly.
"""

from simplify.attributes import concat_properties_from, unfold
from simplify.engine import Simplifier, simplify
from simplify.errors import (
    ActionDetachedNodeError,
    CloneMismatchError,
    RuleEvaluationError,
    SimplifyError,
    StructuralError,
    UnfoldRootError,
    VisitBudgetExceededError,
)
from simplify.reporting import (
    CollectingReporter,
    LoggingReporter,
    MatchEvent,
    MatchReporter,
)
from simplify.rules import (
    ALL_ATTRIBUTES,
    ElementRemovePreChildrenRule,
    ElementUnfoldRule,
    NodeRemoveRule,
    PreChildrenAction,
    RuleSet,
)

__all__ = [
    # Engine
    "simplify",
    "Simplifier",
    "unfold",
    "concat_properties_from",
    # Rules
    "ALL_ATTRIBUTES",
    "ElementUnfoldRule",
    "ElementRemovePreChildrenRule",
    "NodeRemoveRule",
    "PreChildrenAction",
    "RuleSet",
    # Diagnostics
    "MatchReporter",
    "MatchEvent",
    "LoggingReporter",
    "CollectingReporter",
    # Errors
    "SimplifyError",
    "RuleEvaluationError",
    "StructuralError",
    "UnfoldRootError",
    "ActionDetachedNodeError",
    "CloneMismatchError",
    "VisitBudgetExceededError",
]
