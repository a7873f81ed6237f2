"""Parse ECMAScript-family source into a SyntaxNode tree.

``parse_source`` is the parser adapter the metrics engine consumes. It
routes the language hint to a grammar, runs tree-sitter, rejects trees
with syntax errors, and normalizes the rest to ESTree shape. It never
raises for bad input; failures come back as a ParseResult with
``success=False`` so callers can degrade to text-only metrics.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from ..exceptions import ParsingError, UnsupportedLanguageError
from .languages import resolve_grammar, supported_hints
from .nodes import SyntaxNode
from .normalizer import EstreeNormalizer, find_syntax_error
from .treesitter_parser import TreeSitterParser

logger = logging.getLogger(__name__)

_parser: Optional[TreeSitterParser] = None


def _get_parser() -> TreeSitterParser:
    global _parser
    if _parser is None:
        _parser = TreeSitterParser()
    return _parser


@dataclass(frozen=True)
class ParseResult:
    """Outcome of parsing one source text.

    Attributes:
        success: True if a tree was produced
        language: Grammar used, or the hint as given when unsupported
        tree: Program node on success
        error: Failure reason
        line: 1-based line of the first syntax error
        column: 0-based column of the first syntax error
    """

    success: bool
    language: str
    tree: Optional[SyntaxNode] = None
    error: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None

    @classmethod
    def failure(cls, error: Exception, language: str) -> "ParseResult":
        if isinstance(error, ParsingError):
            return cls(
                success=False,
                language=language,
                error=error.reason,
                line=error.line,
                column=error.column,
            )
        return cls(success=False, language=language, error=str(error))

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"success": self.success, "language": self.language}
        if not self.success:
            result["error"] = self.error
            if self.line is not None:
                result["line"] = self.line
                result["column"] = self.column
        return result


def parse_tree(source_text: str, language: str) -> SyntaxNode:
    """Parse source text, raising on failure.

    Raises:
        UnsupportedLanguageError: If the hint names no ECMAScript grammar,
            or its grammar is not installed
        ParsingError: If the source has syntax errors
    """
    grammar = resolve_grammar(language)
    parser = _get_parser()
    if grammar is None or not parser.is_language_supported(grammar):
        raise UnsupportedLanguageError(language, supported_hints())

    code_bytes = source_text.encode("utf-8", errors="replace")
    tree = parser.parse(code_bytes, grammar)
    if tree is None:
        raise UnsupportedLanguageError(language, supported_hints())

    error_node = find_syntax_error(tree.root_node)
    if error_node is not None:
        reason = "Missing token" if error_node.is_missing else "Unexpected token"
        raise ParsingError(
            grammar,
            f"{reason} ({error_node.start_point[0] + 1}:{error_node.start_point[1]})",
            line=error_node.start_point[0] + 1,
            column=error_node.start_point[1],
        )

    try:
        program = EstreeNormalizer(code_bytes).convert(tree.root_node)
    except RecursionError:
        raise ParsingError(grammar, "Syntax tree too deeply nested")
    if program is None:
        raise ParsingError(grammar, "Empty syntax tree")
    return program


def parse_source(source_text: str, language: str) -> ParseResult:
    """Parse source text into a ParseResult; never raises.

    Syntax errors, unsupported languages and failures while building the
    tree all come back as ``success=False``.
    """
    grammar = resolve_grammar(language) or language.lower()
    try:
        tree = parse_tree(source_text, language)
    except (ParsingError, UnsupportedLanguageError) as e:
        logger.debug(f"Parse error: {e}")
        return ParseResult.failure(e, grammar)
    except Exception as e:
        # Unexpected grammar node shapes; text metrics still apply
        logger.warning(f"Failed to build syntax tree for {grammar}: {e}", exc_info=True)
        return ParseResult.failure(e, grammar)
    return ParseResult(success=True, language=grammar, tree=tree)
