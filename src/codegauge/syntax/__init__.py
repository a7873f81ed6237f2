"""Syntax trees: model, traversal, and the tree-sitter parser adapter."""

from .nodes import NodeKind, SourceLocation, SyntaxNode
from .parser import ParseResult, parse_source, parse_tree
from .treesitter_parser import TREE_SITTER_AVAILABLE, get_supported_languages
from .walker import iter_nodes, walk, walk_with_parent

__all__ = [
    "NodeKind",
    "SourceLocation",
    "SyntaxNode",
    "ParseResult",
    "parse_source",
    "parse_tree",
    "walk",
    "walk_with_parent",
    "iter_nodes",
    "TREE_SITTER_AVAILABLE",
    "get_supported_languages",
]
