"""Tree-sitter parser wrapper.

Provides a uniform interface over the JavaScript and TypeScript grammars.
Handles a missing tree-sitter installation gracefully: ``parse`` returns
None and callers degrade to text-only metrics.

Usage:
    if TREE_SITTER_AVAILABLE:
        parser = TreeSitterParser()
        tree = parser.parse(code_bytes, "javascript")
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .languages import JAVASCRIPT, TSX, TYPESCRIPT

logger = logging.getLogger(__name__)

TREE_SITTER_AVAILABLE = False
_tree_sitter_module: Any = None
# grammar name -> zero-arg callable returning the language capsule
_language_factories: dict[str, Any] = {}

try:
    import tree_sitter as _tree_sitter_module  # type: ignore[no-redef]

    TREE_SITTER_AVAILABLE = True

    try:
        import tree_sitter_javascript

        _language_factories[JAVASCRIPT] = tree_sitter_javascript.language
    except ImportError:
        pass

    try:
        import tree_sitter_typescript

        _language_factories[TYPESCRIPT] = tree_sitter_typescript.language_typescript
        _language_factories[TSX] = tree_sitter_typescript.language_tsx
    except ImportError:
        pass

except ImportError:
    TREE_SITTER_AVAILABLE = False


if TYPE_CHECKING:

    class Node:
        type: str
        is_named: bool
        is_missing: bool
        has_error: bool
        start_byte: int
        end_byte: int
        start_point: tuple[int, int]
        end_point: tuple[int, int]
        children: list[Node]

    class Tree:
        root_node: Node


def get_supported_languages() -> list[str]:
    """Get list of grammars that are installed."""
    if not TREE_SITTER_AVAILABLE:
        return []
    return list(_language_factories.keys())


class TreeSitterParser:
    """Wrapper around tree-sitter for ECMAScript-family parsing.

    Check TREE_SITTER_AVAILABLE before using, or check if parse() returns
    None.
    """

    def __init__(self) -> None:
        """Initialize parsers for the installed grammars."""
        self._parsers: dict[str, Any] = {}

        if not TREE_SITTER_AVAILABLE:
            return

        for lang_name, factory in _language_factories.items():
            try:
                # tree-sitter >= 0.23 grammars return a PyCapsule; wrap in Language()
                lang_obj = _tree_sitter_module.Language(factory())
                self._parsers[lang_name] = _tree_sitter_module.Parser(lang_obj)
            except (TypeError, ValueError) as e:
                logger.debug(f"Skipping {lang_name} grammar: {e}")

    def parse(self, code: bytes, language: str) -> Tree | None:
        """Parse code and return the concrete syntax tree.

        Args:
            code: Source code as bytes
            language: Grammar name ("javascript", "typescript", "tsx")

        Returns:
            Tree object, or None if the grammar is not installed. Syntax
            errors still produce a tree; inspect ``root_node.has_error``.
        """
        parser = self._parsers.get(language)
        if parser is None:
            return None

        result: Tree | None = parser.parse(code)
        return result

    def is_language_supported(self, language: str) -> bool:
        """Check if a grammar is available."""
        return language in self._parsers
