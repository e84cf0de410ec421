"""Declaration tree built from fully-qualified message names.

This module provides the TreeNode dataclass and the DeclarationTree that
holds the multi-way tree of declaration name segments. A node carries a
payload exactly when some message declaration name terminates at it.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from protolayout.exceptions import DuplicateDeclarationError
from protolayout.utils import PERIOD, split_segments

if TYPE_CHECKING:
    from protolayout.declarations import MessageDeclaration


@dataclass
class TreeNode:
    """A node of the declaration tree.

    Attributes:
        name: The segment name of this node ('' for the root).
        full_name: Dot-joined segment names from the root (exclusive) to this node.
        children: Child nodes keyed by their segment name.
        payload: The declaration terminating at this node, if any.
    """

    name: str
    full_name: str = ''
    children: dict[str, TreeNode] = field(default_factory=dict)
    payload: MessageDeclaration | None = None

    def child(self, name: str) -> TreeNode:
        """Get the child with the given segment name, creating it if missing."""
        node = self.children.get(name)
        if node is None:
            full_name = f'{self.full_name}{PERIOD}{name}' if self.full_name else name
            node = TreeNode(name=name, full_name=full_name)
            self.children[name] = node
        return node

    def sorted_children(self) -> list[TreeNode]:
        """Children ordered by segment name, independent of insertion order."""
        return [self.children[name] for name in sorted(self.children)]

    def has_payload_child(self) -> bool:
        return any(child.payload is not None for child in self.children.values())

    def is_leaf(self) -> bool:
        return not self.children

    def walk(self) -> Iterator[tuple[list[str], TreeNode]]:
        """Iterate over all nodes of the subtree depth-first (pre-order).

        Yields:
            Tuples of (segments, node) with segments relative to this node.
        """
        stack: list[tuple[list[str], TreeNode]] = [([], self)]
        while stack:
            path, node = stack.pop()
            yield path, node
            for child in reversed(node.sorted_children()):
                stack.append((path + [child.name], child))

    def flatten(self) -> list[TreeNode]:
        """All payload-bearing nodes of the subtree, this node included.

        The order is a pre-order depth-first traversal visiting children in
        sorted segment order, so it is stable across calls and does not
        depend on the order declarations were inserted in.
        """
        return [node for _, node in self.walk() if node.payload is not None]

    def count_payloads(self) -> int:
        return len(self.flatten())


class DeclarationTree:
    """Multi-way tree keyed by dot-separated declaration name segments.

    Example:
        >>> tree = DeclarationTree()
        >>> tree.insert('pkg.Foo', declaration)
        >>> tree.get_node('pkg').children.keys()
        dict_keys(['Foo'])
    """

    def __init__(self):
        self.root = TreeNode(name='')

    @classmethod
    def from_declarations(
        cls, declarations: Iterable[MessageDeclaration]
    ) -> DeclarationTree:
        """Build a tree holding every declaration at its declaration name."""
        tree = cls()
        for declaration in declarations:
            tree.insert(declaration.declaration_name, declaration)
        return tree

    def insert(self, declaration_name: str, payload: MessageDeclaration) -> TreeNode:
        """Insert a payload at the node named by declaration_name.

        Intermediate namespace nodes are created as needed.

        Returns:
            The terminal node now carrying the payload.

        Raises:
            DuplicateDeclarationError: If the terminal node already carries a
                payload.
        """
        segments = split_segments(declaration_name)
        if not segments:
            raise ValueError('Declaration name cannot be empty')

        current = self.root
        for segment in segments:
            current = current.child(segment)

        if current.payload is not None:
            raise DuplicateDeclarationError(
                declaration_name,
                protocol_id=payload.protocol_id,
                existing_id=current.payload.protocol_id,
            )
        current.payload = payload
        return current

    def get_node(self, declaration_name: str) -> TreeNode | None:
        """Get the node at a dotted name, or None if it does not exist."""
        current = self.root
        for segment in split_segments(declaration_name):
            current = current.children.get(segment)
            if current is None:
                return None
        return current

    def walk(self) -> Iterator[tuple[list[str], TreeNode]]:
        return self.root.walk()

    def flatten(self, node: TreeNode | None = None) -> list[TreeNode]:
        return (node or self.root).flatten()

    def is_empty(self) -> bool:
        return not self.root.children

    def __len__(self) -> int:
        return self.root.count_payloads()
