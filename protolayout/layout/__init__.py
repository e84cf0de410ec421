"""Protocol file layout planning.

This package decides where generated protocol code is written and how
generated files reference each other.

Classes:
    DeclarationTree: Multi-way tree of declaration name segments.
    TreeNode: A node of the declaration tree.
    FoldingPlanner: Folds messages of a subtree into shared file groups.
    LayoutPlan: Assigned paths and fold groups produced by the planner.
    PathResolver: Answers absolute, relative and capitalized path queries.
"""

from protolayout.layout.planner import FoldingPlanner, LayoutPlan, plan_tree
from protolayout.layout.resolver import PathResolver, plan_layout
from protolayout.layout.tree import DeclarationTree, TreeNode

__all__ = [
    'DeclarationTree',
    'FoldingPlanner',
    'LayoutPlan',
    'PathResolver',
    'TreeNode',
    'plan_layout',
    'plan_tree',
]
