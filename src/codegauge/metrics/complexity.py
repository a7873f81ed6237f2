"""Tree-based complexity calculators.

Cyclomatic complexity (McCabe): one linear path plus one per decision
point. Logical ``&&``/``||``/``??`` count as decision points because they
branch inside expression evaluation.

Cognitive complexity (simplified): every nesting structure adds the depth
it sits at, so the same branch count costs more when nested. Logical
expressions add a flat 1.
"""

from __future__ import annotations

from typing import Optional

from ..syntax.nodes import NodeKind, SyntaxNode
from ..syntax.walker import walk

DECISION_KINDS = frozenset(
    {
        NodeKind.IF_STATEMENT.value,
        NodeKind.CONDITIONAL_EXPRESSION.value,
        NodeKind.SWITCH_CASE.value,
        NodeKind.FOR_STATEMENT.value,
        NodeKind.FOR_IN_STATEMENT.value,
        NodeKind.FOR_OF_STATEMENT.value,
        NodeKind.WHILE_STATEMENT.value,
        NodeKind.DO_WHILE_STATEMENT.value,
        NodeKind.CATCH_CLAUSE.value,
        NodeKind.LOGICAL_EXPRESSION.value,
    }
)

NESTING_KINDS = frozenset(
    {
        NodeKind.IF_STATEMENT.value,
        NodeKind.FOR_STATEMENT.value,
        NodeKind.FOR_IN_STATEMENT.value,
        NodeKind.FOR_OF_STATEMENT.value,
        NodeKind.WHILE_STATEMENT.value,
        NodeKind.DO_WHILE_STATEMENT.value,
        NodeKind.SWITCH_STATEMENT.value,
        NodeKind.CATCH_CLAUSE.value,
    }
)


def cyclomatic_complexity(tree: Optional[SyntaxNode]) -> int:
    """McCabe complexity of a whole tree; always >= 1."""
    complexity = 1

    def visit(node: SyntaxNode) -> None:
        nonlocal complexity
        if node.type in DECISION_KINDS:
            complexity += 1

    walk(tree, visit)
    return complexity


def cognitive_complexity(tree: Optional[SyntaxNode]) -> int:
    """Nesting-weighted complexity of a whole tree; always >= 0.

    Entering a nesting structure raises the level, then adds the new
    level to the total; leaving it lowers the level again.
    """
    total = 0
    nesting = 0

    def visit(node: SyntaxNode) -> None:
        nonlocal total, nesting
        if node.type in NESTING_KINDS:
            nesting += 1
            total += nesting
        if node.type == NodeKind.LOGICAL_EXPRESSION:
            total += 1

    def leave(node: SyntaxNode) -> None:
        nonlocal nesting
        if node.type in NESTING_KINDS:
            nesting -= 1

    walk(tree, visit, leave)
    return total
