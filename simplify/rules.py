"""Rule kinds and the ``RuleSet`` that configures a simplification pass.

Four kinds of rule exist, each applied in its own phase of the traversal:

    ``ElementRemovePreChildrenRule`` -- drop an element before its children
    are visited.

    ``PreChildrenAction`` -- unconditionally mutate an element before its
    children are visited.

    ``NodeRemoveRule`` -- drop any node after its children were processed.

    ``ElementUnfoldRule`` -- replace an element by its children.

Predicates return ``True`` for a match and ``False`` or ``None``
("indeterminate") otherwise.  They must not raise to signal "does not
apply": an exception aborts the whole pass.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, AbstractSet, Callable, Literal, Optional, Union

if TYPE_CHECKING:
    from dom.protocol import TreeNode

ALL_ATTRIBUTES: Literal["ALL"] = "ALL"

Predicate = Callable[["TreeNode"], Optional[bool]]
Action = Callable[["TreeNode"], None]
AttributeSelection = Union[Literal["ALL"], AbstractSet[str]]

UNNAMED_RULE = "<unnamed rule>"


@dataclass(frozen=True)
class ElementUnfoldRule:
    """Move an element's children into its parent and drop the element.

    With *propagate_attributes*, the element's attributes (all of them, or
    only the names in *properties*, matched case-insensitively) are merged
    into each promoted element child before the element goes away.
    """

    should_unfold: Predicate
    name: str = UNNAMED_RULE
    propagate_attributes: bool = False
    properties: AttributeSelection = ALL_ATTRIBUTES
    log: bool = True


@dataclass(frozen=True)
class ElementRemovePreChildrenRule:
    """Remove an element before its children are processed."""

    should_remove: Predicate
    name: str = UNNAMED_RULE
    log: bool = True


@dataclass(frozen=True)
class NodeRemoveRule:
    """Remove any node after its children have been processed."""

    should_remove: Predicate
    name: str = UNNAMED_RULE
    log: bool = True


@dataclass(frozen=True)
class PreChildrenAction:
    """Mutate an element before its children are processed.

    Actions may edit attributes or move foreign content into the element;
    they must not detach the element itself.
    """

    action: Action
    name: str = UNNAMED_RULE


@dataclass(frozen=True)
class RuleSet:
    """Ordered rules for every phase.  Registration order is evaluation order."""

    element_unfold_rules: tuple[ElementUnfoldRule, ...] = field(default_factory=tuple)
    element_remove_pre_children_rules: tuple[ElementRemovePreChildrenRule, ...] = field(default_factory=tuple)
    node_remove_rules: tuple[NodeRemoveRule, ...] = field(default_factory=tuple)
    pre_children_actions: tuple[PreChildrenAction, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept lists; store tuples so a RuleSet can't change under a pass.
        for name in (
            "element_unfold_rules",
            "element_remove_pre_children_rules",
            "node_remove_rules",
            "pre_children_actions",
        ):
            object.__setattr__(self, name, tuple(getattr(self, name)))

    def __add__(self, other: RuleSet) -> RuleSet:
        """Concatenate phase by phase; rules of ``self`` run first."""
        if not isinstance(other, RuleSet):
            return NotImplemented
        return RuleSet(
            element_unfold_rules=self.element_unfold_rules + other.element_unfold_rules,
            element_remove_pre_children_rules=(
                self.element_remove_pre_children_rules + other.element_remove_pre_children_rules
            ),
            node_remove_rules=self.node_remove_rules + other.node_remove_rules,
            pre_children_actions=self.pre_children_actions + other.pre_children_actions,
        )
