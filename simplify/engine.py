"""Rule-driven, in-place tree simplification.

Every node goes through five phases, in this order:

    A. pre-children removal (elements) -- first matching
       ``ElementRemovePreChildrenRule`` detaches the element; nothing else
       happens to it or its subtree.
    B. pre-children actions (elements) -- every ``PreChildrenAction`` runs.
    C. children -- a snapshot of the child list is taken and each child is
       processed through all five phases, in snapshot order.
    D. node removal (any node) -- first matching ``NodeRemoveRule``
       detaches the node.
    E. unfold (elements still attached) -- first matching
       ``ElementUnfoldRule`` splices the element's children into its parent
       and then processes every promoted child again from phase A, since its
       parent and attributes changed.  Nested single-child wrappers collapse
       in a single pass this way.

The traversal runs on an explicit stack of frames instead of Python
recursion, so arbitrarily deep documents cannot hit the interpreter's
recursion limit.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Iterator, Optional

from dom.protocol import NodeKind
from simplify.attributes import unfold
from simplify.errors import (
    ActionDetachedNodeError,
    RuleEvaluationError,
    SimplifyError,
    VisitBudgetExceededError,
)
from simplify.reporting import REMOVE, UNFOLD, LoggingReporter

if TYPE_CHECKING:
    from dom.protocol import TreeNode
    from simplify.reporting import MatchReporter
    from simplify.rules import RuleSet

logger = logging.getLogger("simplify")


class _Stage(Enum):
    ENTER = "enter"
    CHILDREN = "children"
    PROMOTED = "promoted"


class _Frame:
    """Traversal state of one ``process`` call on one node."""

    __slots__ = ("node", "stage", "pending", "expected_parent", "alive")

    def __init__(self, node: TreeNode) -> None:
        self.node = node
        self.stage = _Stage.ENTER
        self.pending: Iterator[TreeNode] = iter(())
        # Parent a pending node must still have to be processed.
        self.expected_parent: Optional[TreeNode] = None
        self.alive = True


class Simplifier:
    """Applies a ``RuleSet`` to trees.

    Args:
        rule_set: The rules to apply.
        reporter: Sink for rule-match diagnostics.  Defaults to a
            ``LoggingReporter`` on the ``simplify`` logger.
        max_visits_per_node: Optional fail-safe.  When a single node is
            processed more often than this within one ``process`` call,
            ``VisitBudgetExceededError`` is raised instead of looping on.
    """

    def __init__(
        self,
        rule_set: RuleSet,
        reporter: Optional[MatchReporter] = None,
        max_visits_per_node: Optional[int] = None,
    ) -> None:
        self.rule_set = rule_set
        self.reporter = reporter if reporter is not None else LoggingReporter()
        self.max_visits_per_node = max_visits_per_node
        self._visits: dict[int, list[Any]] = {}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(self, root: TreeNode) -> TreeNode:
        """Simplify the tree rooted at *root* in place and return *root*."""
        self.process(root)
        return root

    def process(self, node: TreeNode) -> bool:
        """Run all phases on *node* and its subtree.

        Returns:
            ``True`` if *node* is still in the tree, ``False`` if it was
            removed or unfolded.
        """
        self._visits = {}
        top = _Frame(node)
        stack: list[_Frame] = [top]
        try:
            while stack:
                frame = stack[-1]

                if frame.stage is _Stage.ENTER:
                    self._count_visit(frame.node)
                    if not self._before_children(frame.node):
                        frame.alive = False
                        stack.pop()
                        continue
                    frame.pending = iter(frame.node.child_snapshot())
                    frame.expected_parent = frame.node
                    frame.stage = _Stage.CHILDREN
                    continue

                child = self._next_pending(frame)
                if child is not None:
                    stack.append(_Frame(child))
                    continue

                if frame.stage is _Stage.CHILDREN:
                    parent = frame.node.parent
                    promoted = self._after_children(frame.node)
                    if promoted is not None:
                        frame.alive = False
                        frame.pending = iter(promoted)
                        frame.expected_parent = parent
                        frame.stage = _Stage.PROMOTED
                        continue

                stack.pop()
        finally:
            self._visits = {}
        return top.alive

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------

    def _before_children(self, node: TreeNode) -> bool:
        """Phases A and B.  Returns ``False`` if *node* was removed."""
        if node.kind is not NodeKind.ELEMENT:
            return True

        for rule in self.rule_set.element_remove_pre_children_rules:
            if self._matches(rule.name, rule.should_remove, node, "pre-children removal"):
                self._remove(node, rule.name, rule.log)
                return False

        parent = node.parent
        for action in self.rule_set.pre_children_actions:
            self._call(action.name, action.action, node, "pre-children action")
            if node.parent is not parent:
                raise ActionDetachedNodeError(
                    f"action {action.name!r} detached or moved {node!r}", node=node
                )
        return True

    def _after_children(self, node: TreeNode) -> Optional[list[TreeNode]]:
        """Phases D and E.

        Returns ``None`` if *node* stays in the tree, otherwise the list of
        nodes to process again (empty for a removal).
        """
        for rule in self.rule_set.node_remove_rules:
            if self._matches(rule.name, rule.should_remove, node, "node removal"):
                self._remove(node, rule.name, rule.log)
                return []

        if node.kind is not NodeKind.ELEMENT:
            return None

        for unfold_rule in self.rule_set.element_unfold_rules:
            if self._matches(unfold_rule.name, unfold_rule.should_unfold, node, "unfold"):
                promoted = unfold(
                    node,
                    propagate_attributes=unfold_rule.propagate_attributes,
                    properties=unfold_rule.properties,
                )
                if unfold_rule.log:
                    self.reporter.report(UNFOLD, node, unfold_rule.name)
                return promoted
        return None

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _next_pending(frame: _Frame) -> Optional[TreeNode]:
        # Nodes moved or detached since the list was taken are skipped, so
        # a detached node is never revisited and none is visited twice.
        for candidate in frame.pending:
            if candidate.parent is frame.expected_parent:
                return candidate
        return None

    def _remove(self, node: TreeNode, rule_name: str, log: bool) -> None:
        if log:
            self.reporter.report(REMOVE, node, rule_name)
        node.detach()

    def _matches(
        self,
        rule_name: str,
        predicate: Callable[[TreeNode], Optional[bool]],
        node: TreeNode,
        phase: str,
    ) -> bool:
        try:
            return bool(predicate(node))
        except SimplifyError:
            raise
        except Exception as exc:
            raise RuleEvaluationError(rule_name, node, phase) from exc

    def _call(
        self,
        rule_name: str,
        action: Callable[[TreeNode], None],
        node: TreeNode,
        phase: str,
    ) -> None:
        try:
            action(node)
        except SimplifyError:
            raise
        except Exception as exc:
            raise RuleEvaluationError(rule_name, node, phase) from exc

    def _count_visit(self, node: TreeNode) -> None:
        if self.max_visits_per_node is None:
            return
        entry = self._visits.setdefault(id(node), [node, 0])
        entry[1] += 1
        if entry[1] > self.max_visits_per_node:
            logger.error(
                "visit budget exceeded",
                extra={"node": repr(node), "budget": self.max_visits_per_node},
            )
            raise VisitBudgetExceededError(node, self.max_visits_per_node)


def simplify(
    root: TreeNode,
    rule_set: RuleSet,
    *,
    reporter: Optional[MatchReporter] = None,
    max_visits_per_node: Optional[int] = None,
) -> TreeNode:
    """Simplify the tree rooted at *root* in place and return *root*.

    Removing the root itself is the rule author's responsibility: the
    returned reference is then a detached node.  Unfolding the root raises
    ``UnfoldRootError``.
    """
    return Simplifier(rule_set, reporter, max_visits_per_node).run(root)
