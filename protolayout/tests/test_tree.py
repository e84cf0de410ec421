"""Tests for the declaration tree.

This module tests the TreeNode dataclass and the DeclarationTree built from
fully-qualified declaration names.
"""

import pytest

from protolayout.declarations import MessageDeclaration
from protolayout.exceptions import DuplicateDeclarationError
from protolayout.layout.tree import DeclarationTree, TreeNode
from protolayout.tests.fixtures import GAME_PROTOCOLS, declarations


def make_declaration(protocol_id: int, name: str) -> MessageDeclaration:
    return MessageDeclaration(protocol_id=protocol_id, declaration_name=name)


class TestTreeNode:
    """Tests for the TreeNode dataclass."""

    def test_empty_node(self):
        """Test creating an empty node."""
        node = TreeNode(name='root')
        assert node.name == 'root'
        assert node.full_name == ''
        assert node.children == {}
        assert node.payload is None
        assert node.is_leaf()

    def test_child_created_on_demand(self):
        """Test that child() creates missing children with their full name."""
        root = TreeNode(name='')
        pkg = root.child('pkg')
        sub = pkg.child('sub')

        assert root.children == {'pkg': pkg}
        assert pkg.full_name == 'pkg'
        assert sub.full_name == 'pkg.sub'

    def test_child_reused(self):
        """Test that child() returns the existing node."""
        root = TreeNode(name='')
        assert root.child('pkg') is root.child('pkg')
        assert len(root.children) == 1

    def test_sorted_children(self):
        """Test that children are ordered by name, not insertion."""
        root = TreeNode(name='')
        for name in ('zeta', 'alpha', 'mid'):
            root.child(name)

        assert [child.name for child in root.sorted_children()] == [
            'alpha',
            'mid',
            'zeta',
        ]

    def test_has_payload_child(self):
        """Test detection of a message declared directly below a node."""
        root = TreeNode(name='')
        pkg = root.child('pkg')
        pkg.child('sub')
        assert not pkg.has_payload_child()

        pkg.child('Foo').payload = make_declaration(1, 'pkg.Foo')
        assert pkg.has_payload_child()


class TestDeclarationTree:
    """Tests for inserting declarations into the tree."""

    def test_empty_tree(self):
        """Test a fresh tree."""
        tree = DeclarationTree()
        assert tree.is_empty()
        assert len(tree) == 0
        assert tree.root.full_name == ''
        assert tree.root.payload is None

    def test_insert_creates_namespaces(self):
        """Test that inserting creates intermediate namespace nodes."""
        tree = DeclarationTree()
        declaration = make_declaration(1, 'com.game.Foo')

        node = tree.insert('com.game.Foo', declaration)

        assert node.payload is declaration
        assert node.full_name == 'com.game.Foo'
        assert tree.get_node('com').payload is None
        assert tree.get_node('com.game').payload is None
        assert list(tree.get_node('com.game').children) == ['Foo']

    def test_insert_shares_namespaces(self):
        """Test that declarations in the same namespace share nodes."""
        tree = DeclarationTree.from_declarations(declarations('pkg.Foo', 'pkg.Bar'))

        assert list(tree.root.children) == ['pkg']
        assert set(tree.get_node('pkg').children) == {'Foo', 'Bar'}
        assert len(tree) == 2

    def test_payload_on_intermediate_node(self):
        """Test a message whose name is also the namespace of another message."""
        tree = DeclarationTree.from_declarations(
            declarations('pkg.Outer', 'pkg.Outer.Inner')
        )

        outer = tree.get_node('pkg.Outer')
        assert outer.payload.protocol_id == 1
        assert outer.children['Inner'].payload.protocol_id == 2

    def test_duplicate_declaration_rejected(self):
        """Test that a second payload at the same node is rejected."""
        tree = DeclarationTree()
        first = make_declaration(1, 'pkg.Foo')
        tree.insert('pkg.Foo', first)

        with pytest.raises(DuplicateDeclarationError) as exc_info:
            tree.insert('pkg.Foo', make_declaration(2, 'pkg.Foo'))

        assert exc_info.value.declaration_name == 'pkg.Foo'
        assert exc_info.value.protocol_id == 2
        assert exc_info.value.existing_id == 1
        # the original payload is kept
        assert tree.get_node('pkg.Foo').payload is first

    def test_insert_empty_name_rejected(self):
        """Test that an empty declaration name cannot be inserted."""
        tree = DeclarationTree()
        with pytest.raises(ValueError):
            tree.insert('', make_declaration(1, 'pkg.Foo'))

    def test_get_node_missing(self):
        """Test get_node for a name that is not in the tree."""
        tree = DeclarationTree.from_declarations(declarations('pkg.Foo'))
        assert tree.get_node('pkg.Bar') is None
        assert tree.get_node('other') is None

    def test_get_node_root(self):
        """Test that an empty name addresses the root."""
        tree = DeclarationTree()
        assert tree.get_node('') is tree.root


class TestFlatten:
    """Tests for flattening subtrees into payload nodes."""

    def test_flatten_only_payload_nodes(self):
        """Test that namespace nodes are not part of the flattened list."""
        tree = DeclarationTree.from_declarations(declarations(*GAME_PROTOCOLS))

        flattened = tree.flatten()

        assert len(flattened) == len(GAME_PROTOCOLS)
        assert all(node.payload is not None for node in flattened)

    def test_flatten_includes_node_itself(self):
        """Test that the node itself is included when it carries a payload."""
        tree = DeclarationTree.from_declarations(
            declarations('pkg.Outer', 'pkg.Outer.Inner')
        )
        outer = tree.get_node('pkg.Outer')

        assert [node.full_name for node in outer.flatten()] == [
            'pkg.Outer',
            'pkg.Outer.Inner',
        ]

    def test_flatten_preorder_sorted(self):
        """Test the depth-first pre-order with sorted children."""
        tree = DeclarationTree.from_declarations(
            declarations('a.b.X', 'a.c.Y', 'a.b.c.Z', 'a.A')
        )

        assert [node.full_name for node in tree.flatten()] == [
            'a.A',
            'a.b.X',
            'a.b.c.Z',
            'a.c.Y',
        ]

    def test_flatten_independent_of_insertion_order(self):
        """Test that flattening does not depend on insertion order."""
        names = list(GAME_PROTOCOLS)
        forward = DeclarationTree.from_declarations(declarations(*names))
        backward = DeclarationTree.from_declarations(
            list(reversed(declarations(*names)))
        )

        assert [node.full_name for node in forward.flatten()] == [
            node.full_name for node in backward.flatten()
        ]

    def test_flatten_subtree(self):
        """Test flattening a single subtree."""
        tree = DeclarationTree.from_declarations(declarations(*GAME_PROTOCOLS))

        chat = tree.get_node('com.game.chat')
        assert [node.payload.protocol_id for node in tree.flatten(chat)] == [6, 7, 8]

    def test_walk_yields_segments(self):
        """Test that walk yields relative segment lists."""
        tree = DeclarationTree.from_declarations(declarations('pkg.Foo'))

        walked = [(path, node.full_name) for path, node in tree.walk()]

        assert walked == [
            ([], ''),
            (['pkg'], 'pkg'),
            (['pkg', 'Foo'], 'pkg.Foo'),
        ]
