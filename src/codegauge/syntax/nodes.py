"""Syntax tree model shared by every metric extractor.

A tree is made of SyntaxNode objects. Each node carries an ESTree-style
``type`` discriminator and a dict of named child fields; a field holds a
nested node, a list of nodes, or a primitive (name strings, flags, operators).

Trees come from two places:
    - the tree-sitter normalizer (``codegauge.syntax.normalizer``)
    - ESTree JSON produced upstream, e.g. by Babel (``SyntaxNode.from_dict``)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Mapping, Optional

# Fields that never hold children
DISCRIMINATOR_FIELD = "type"
LOCATION_FIELD = "loc"


class NodeKind(str, Enum):
    """ESTree node kinds the metrics engine inspects.

    Members compare equal to their plain string value, so a node whose
    ``type`` is ``"IfStatement"`` matches ``NodeKind.IF_STATEMENT``. Kinds
    not listed here are carried as raw strings.
    """

    PROGRAM = "Program"

    # Branching
    IF_STATEMENT = "IfStatement"
    CONDITIONAL_EXPRESSION = "ConditionalExpression"
    SWITCH_STATEMENT = "SwitchStatement"
    SWITCH_CASE = "SwitchCase"
    LOGICAL_EXPRESSION = "LogicalExpression"
    TRY_STATEMENT = "TryStatement"
    CATCH_CLAUSE = "CatchClause"

    # Loops
    FOR_STATEMENT = "ForStatement"
    FOR_IN_STATEMENT = "ForInStatement"
    FOR_OF_STATEMENT = "ForOfStatement"
    WHILE_STATEMENT = "WhileStatement"
    DO_WHILE_STATEMENT = "DoWhileStatement"

    # Functions and classes
    FUNCTION_DECLARATION = "FunctionDeclaration"
    FUNCTION_EXPRESSION = "FunctionExpression"
    ARROW_FUNCTION_EXPRESSION = "ArrowFunctionExpression"
    METHOD_DEFINITION = "MethodDefinition"
    CLASS_METHOD = "ClassMethod"
    CLASS_DECLARATION = "ClassDeclaration"
    CLASS_EXPRESSION = "ClassExpression"
    CLASS_BODY = "ClassBody"
    PROPERTY_DEFINITION = "PropertyDefinition"
    CLASS_PROPERTY = "ClassProperty"

    # Modules
    IMPORT_DECLARATION = "ImportDeclaration"
    IMPORT_SPECIFIER = "ImportSpecifier"
    IMPORT_DEFAULT_SPECIFIER = "ImportDefaultSpecifier"
    IMPORT_NAMESPACE_SPECIFIER = "ImportNamespaceSpecifier"
    IMPORT_EXPRESSION = "ImportExpression"
    CALL_EXPRESSION = "CallExpression"

    # Declarations and leaves
    VARIABLE_DECLARATION = "VariableDeclaration"
    VARIABLE_DECLARATOR = "VariableDeclarator"
    PROPERTY = "Property"
    IDENTIFIER = "Identifier"
    LITERAL = "Literal"
    BINARY_EXPRESSION = "BinaryExpression"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class SourceLocation:
    """Span of a node in the source text.

    Lines are 1-based, columns are 0-based (ESTree convention).
    """

    start_line: int
    start_column: int
    end_line: int
    end_column: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Optional["SourceLocation"]:
        """Build from an ESTree ``loc`` object; None if the shape is wrong."""
        start = data.get("start")
        end = data.get("end")
        if not isinstance(start, Mapping) or not isinstance(end, Mapping):
            return None
        return cls(
            start_line=int(start.get("line", 0)),
            start_column=int(start.get("column", 0)),
            end_line=int(end.get("line", 0)),
            end_column=int(end.get("column", 0)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "start": {"line": self.start_line, "column": self.start_column},
            "end": {"line": self.end_line, "column": self.end_column},
        }


@dataclass
class SyntaxNode:
    """A node of the syntax tree.

    Attributes:
        type: Node kind (an ESTree name, see NodeKind)
        fields: Named child fields in source order
        loc: Source span, when the producer recorded one
    """

    type: str
    fields: dict[str, Any] = field(default_factory=dict)
    loc: Optional[SourceLocation] = None

    def __post_init__(self) -> None:
        if isinstance(self.type, NodeKind):
            self.type = self.type.value

    def get(self, name: str, default: Any = None) -> Any:
        """Return a child field, or ``default`` when absent."""
        return self.fields.get(name, default)

    def node(self, name: str) -> Optional["SyntaxNode"]:
        """Return a field only if it holds a single node."""
        value = self.fields.get(name)
        return value if isinstance(value, SyntaxNode) else None

    def nodes(self, name: str) -> list["SyntaxNode"]:
        """Return the nodes held by a list field (empty if absent)."""
        value = self.fields.get(name)
        if isinstance(value, list):
            return [item for item in value if isinstance(item, SyntaxNode)]
        return []

    def flag(self, name: str) -> bool:
        """Truthiness of a boolean field, False when absent."""
        return bool(self.fields.get(name, False))

    @property
    def name(self) -> Optional[str]:
        """The ``name`` primitive of identifier-like nodes."""
        value = self.fields.get("name")
        return value if isinstance(value, str) else None

    def is_a(self, *kinds: str) -> bool:
        """True if the node's type is one of ``kinds``."""
        return self.type in kinds

    def children(self) -> Iterator["SyntaxNode"]:
        """Yield direct child nodes in field order.

        Lists are expanded element-wise; primitives and None are skipped.
        """
        for value in self.fields.values():
            if isinstance(value, SyntaxNode):
                yield value
            elif isinstance(value, list):
                for item in value:
                    if isinstance(item, SyntaxNode):
                        yield item

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SyntaxNode":
        """Convert an ESTree-shaped JSON object into a SyntaxNode tree.

        Any mapping with a ``type`` key becomes a node; lists convert
        element-wise; mappings without ``type`` and primitives are kept
        verbatim. Babel's ``start``/``end``/``range``/``extra`` bookkeeping
        keys are kept too, since they are primitives or untyped objects and
        never reached by traversal.

        Raises:
            ValueError: If ``data`` has no ``type`` discriminator
        """
        if DISCRIMINATOR_FIELD not in data:
            raise ValueError("syntax tree root has no 'type' field")
        return _convert_mapping(data)

    def to_dict(self) -> dict[str, Any]:
        """Inverse of ``from_dict``."""
        result: dict[str, Any] = {DISCRIMINATOR_FIELD: self.type}
        for key, value in self.fields.items():
            result[key] = _export_value(value)
        if self.loc is not None:
            result[LOCATION_FIELD] = self.loc.to_dict()
        return result


def _convert_mapping(data: Mapping[str, Any]) -> SyntaxNode:
    fields: dict[str, Any] = {}
    loc = None
    for key, value in data.items():
        if key == DISCRIMINATOR_FIELD:
            continue
        if key == LOCATION_FIELD:
            if isinstance(value, Mapping):
                loc = SourceLocation.from_dict(value)
            continue
        fields[key] = _convert_value(value)
    return SyntaxNode(type=str(data[DISCRIMINATOR_FIELD]), fields=fields, loc=loc)


def _convert_value(value: Any) -> Any:
    if isinstance(value, Mapping) and DISCRIMINATOR_FIELD in value:
        return _convert_mapping(value)
    if isinstance(value, list):
        return [_convert_value(item) for item in value]
    return value


def _export_value(value: Any) -> Any:
    if isinstance(value, SyntaxNode):
        return value.to_dict()
    if isinstance(value, list):
        return [_export_value(item) for item in value]
    return value
