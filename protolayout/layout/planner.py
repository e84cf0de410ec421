"""Folding planner deciding how messages are grouped into generated files.

The planner walks the declaration tree breadth-first and folds every message
of a subtree into one file group at the shallowest level where folding is
licensed:

- a node without children (a lone message) is folded where it stands;
- a node with at least one direct message child is folded, since that
  message has no finer namespace of its own to be placed in;
- a node whose children are all pure namespaces is not folded, and its
  children are examined instead.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field

from protolayout.layout.tree import DeclarationTree, TreeNode
from protolayout.utils import PERIOD, join_segments, split_segments

logger = logging.getLogger(__name__)


@dataclass
class LayoutPlan:
    """Result of planning a declaration tree.

    Attributes:
        paths: Assigned dotted path per protocol id ('' means root level).
        groups: Fold group per protocol id: the segment name of the node
            where the message was folded.
    """

    paths: dict[int, str] = field(default_factory=dict)
    groups: dict[int, str] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.paths)


class FoldingPlanner:
    """Assigns a path to every message of a declaration tree.

    Example:
        >>> tree = DeclarationTree.from_declarations(declarations)
        >>> plan = FoldingPlanner().plan(tree.root)
        >>> plan.paths
        {1: 'pkg', 2: 'pkg'}
    """

    def plan(self, root: TreeNode | DeclarationTree) -> LayoutPlan:
        """Plan the layout of every message below root.

        The root itself is never assigned a path.

        Args:
            root: The synthetic root node, or a whole DeclarationTree.

        Returns:
            A LayoutPlan with one entry per payload node of the tree.
        """
        if isinstance(root, DeclarationTree):
            root = root.root

        plan = LayoutPlan()
        queue = deque(root.sorted_children())
        while queue:
            node = queue.popleft()
            if self.should_fold(node):
                self.fold(node, plan, parent_full_name=_parent_full_name(node))
                continue
            queue.extend(node.sorted_children())

        logger.info(
            f'Planned {len(plan.paths)} protocols into '
            f'{len(set(plan.paths.values()))} file paths'
        )
        return plan

    @staticmethod
    def should_fold(node: TreeNode) -> bool:
        """Whether the node is the level its subtree should be folded at."""
        return node.is_leaf() or node.has_payload_child()

    def fold(self, node: TreeNode, plan: LayoutPlan, parent_full_name: str) -> None:
        """Assign paths to every message in node's subtree.

        The path of a message is its declaration name with the parent's full
        name removed from the front and its own simple name removed from the
        end, so the folded node's segment is kept as the leading directory.
        """
        logger.debug(f"Folding '{node.full_name}' below '{parent_full_name}'")
        for leaf in node.flatten():
            relative = leaf.full_name
            if parent_full_name and relative.startswith(parent_full_name):
                relative = relative[len(parent_full_name) :]
            # the leaf's own segment is the simple name, i.e. the file name
            segments = split_segments(relative)[:-1]
            path = join_segments(segments, PERIOD)

            protocol_id = leaf.payload.protocol_id
            plan.paths[protocol_id] = path
            plan.groups[protocol_id] = node.name
            logger.debug(f"Protocol {protocol_id} '{leaf.full_name}' -> '{path}'")


def _parent_full_name(node: TreeNode) -> str:
    head, _, _ = node.full_name.rpartition(PERIOD)
    return head


def plan_tree(tree: DeclarationTree) -> LayoutPlan:
    """Convenience function to plan a declaration tree."""
    return FoldingPlanner().plan(tree)
