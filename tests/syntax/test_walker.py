"""Tests for tree traversal."""

import sys

from codegauge.syntax.nodes import SyntaxNode
from codegauge.syntax.walker import iter_nodes, walk, walk_with_parent


def _tree():
    #        Root
    #       /    \
    #      A      D
    #     / \
    #    B   C
    return SyntaxNode(
        "Root",
        {
            "left": SyntaxNode("A", {"items": [SyntaxNode("B"), SyntaxNode("C")]}),
            "right": SyntaxNode("D"),
        },
    )


class TestWalk:
    """Test pre-order walking with enter/leave callbacks."""

    def test_visits_pre_order(self):
        seen = []
        walk(_tree(), lambda n: seen.append(n.type))
        assert seen == ["Root", "A", "B", "C", "D"]

    def test_leave_is_post_order(self):
        left = []
        walk(_tree(), lambda n: None, lambda n: left.append(n.type))
        assert left == ["B", "C", "A", "D", "Root"]

    def test_depth_counter_restored(self):
        """A counter raised in visit and lowered in leave ends where it started."""
        depth = 0
        max_depth = 0

        def visit(node):
            nonlocal depth, max_depth
            depth += 1
            max_depth = max(max_depth, depth)

        def leave(node):
            nonlocal depth
            depth -= 1

        walk(_tree(), visit, leave)
        assert depth == 0
        assert max_depth == 3

    def test_none_is_noop(self):
        seen = []
        walk(None, seen.append)
        assert seen == []

    def test_deep_tree_does_not_recurse(self):
        """Chains deeper than the recursion limit are walked."""
        node = SyntaxNode("Leaf")
        depth = sys.getrecursionlimit() + 500
        for _ in range(depth):
            node = SyntaxNode("Wrap", {"inner": node})
        assert sum(1 for _ in iter_nodes(node)) == depth + 1


class TestWalkWithParent:
    def test_parent_pairs(self):
        pairs = []
        walk_with_parent(_tree(), lambda n, p: pairs.append((n.type, p.type if p else None)))
        assert pairs == [
            ("Root", None),
            ("A", "Root"),
            ("B", "A"),
            ("C", "A"),
            ("D", "Root"),
        ]
