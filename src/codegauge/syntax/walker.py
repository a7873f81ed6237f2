"""Generic depth-first traversal over SyntaxNode trees.

Every metric extractor is built on ``walk``: it visits each reachable node
exactly once, parents before children, children in field order. The
walker keeps no state between calls, so several calculators can walk the
same tree at once.

Traversal uses an explicit stack rather than recursion; minified bundles
produce expression chains deeper than the interpreter's recursion limit.
"""

from __future__ import annotations

from typing import Callable, Iterator, Optional

from .nodes import SyntaxNode

Visitor = Callable[[SyntaxNode], None]
ParentVisitor = Callable[[SyntaxNode, Optional[SyntaxNode]], None]

# Marker pushed after a node's children so ``leave`` fires in post-order
_LEAVE = object()


def walk(
    node: Optional[SyntaxNode],
    visit: Visitor,
    leave: Optional[Visitor] = None,
) -> None:
    """Walk a tree depth-first, pre-order.

    Args:
        node: Root node; None is a no-op
        visit: Called for every node before its children
        leave: Optional callback after all of a node's descendants were
            visited. Paired calls follow stack discipline, so counters
            incremented in ``visit`` and decremented in ``leave`` are
            restored exactly on exit from every subtree.
    """
    if node is None:
        return

    stack: list = [node]
    while stack:
        item = stack.pop()
        if item is _LEAVE:
            leave(stack.pop())  # type: ignore[misc]
            continue

        visit(item)
        if leave is not None:
            stack.append(item)
            stack.append(_LEAVE)
        stack.extend(reversed(list(item.children())))


def walk_with_parent(node: Optional[SyntaxNode], visit: ParentVisitor) -> None:
    """Pre-order walk that also hands each node its parent.

    The root's parent is None. Used by extractors that name a node after
    the construct holding it (``const add = () => ...``).
    """
    if node is None:
        return

    stack: list[tuple[SyntaxNode, Optional[SyntaxNode]]] = [(node, None)]
    while stack:
        current, parent = stack.pop()
        visit(current, parent)
        stack.extend((child, current) for child in reversed(list(current.children())))


def iter_nodes(node: Optional[SyntaxNode]) -> Iterator[SyntaxNode]:
    """Yield every node of a tree in pre-order."""
    if node is None:
        return

    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(list(current.children())))
