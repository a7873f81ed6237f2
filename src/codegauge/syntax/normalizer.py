"""Normalizer: converts tree-sitter parse trees to ESTree-shaped SyntaxNodes.

tree-sitter produces a concrete syntax tree with grammar-specific node
names (``if_statement``, ``arrow_function``). The metric extractors are
written against ESTree kinds (``IfStatement``, ``ArrowFunctionExpression``),
the same shape Babel emits. This module bridges the two:

    - node kinds the engine inspects are renamed to their ESTree names
    - functions, classes, imports, calls and declarations are rebuilt with
      the ESTree fields extractors read (``id``, ``params``, ``async``,
      ``superClass``, ``specifiers`` ...)
    - everything else keeps its tree-sitter name and field layout, with
      unnamed children collected under ``children``
    - anonymous tokens and comments are dropped
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Optional

from .nodes import NodeKind, SourceLocation, SyntaxNode

if TYPE_CHECKING:
    from .treesitter_parser import Node

logger = logging.getLogger(__name__)

# Pure renames: same children, ESTree type name
_RENAMES: dict[str, str] = {
    "program": NodeKind.PROGRAM.value,
    "if_statement": NodeKind.IF_STATEMENT.value,
    "ternary_expression": NodeKind.CONDITIONAL_EXPRESSION.value,
    "switch_statement": NodeKind.SWITCH_STATEMENT.value,
    "switch_case": NodeKind.SWITCH_CASE.value,
    "switch_default": NodeKind.SWITCH_CASE.value,
    "for_statement": NodeKind.FOR_STATEMENT.value,
    "while_statement": NodeKind.WHILE_STATEMENT.value,
    "do_statement": NodeKind.DO_WHILE_STATEMENT.value,
    "try_statement": NodeKind.TRY_STATEMENT.value,
    "catch_clause": NodeKind.CATCH_CLAUSE.value,
    "statement_block": "BlockStatement",
    "expression_statement": "ExpressionStatement",
    "return_statement": "ReturnStatement",
    "throw_statement": "ThrowStatement",
    "assignment_expression": "AssignmentExpression",
    "member_expression": "MemberExpression",
    "new_expression": "NewExpression",
    "object": "ObjectExpression",
    "array": "ArrayExpression",
    "template_string": "TemplateLiteral",
    "export_statement": "ExportNamedDeclaration",
}

_IDENTIFIER_TYPES = frozenset(
    {
        "identifier",
        "property_identifier",
        "private_property_identifier",
        "shorthand_property_identifier",
        "shorthand_property_identifier_pattern",
        "type_identifier",
        "statement_identifier",
        "this",
        "super",
    }
)

_LITERAL_CONSTANTS = {"true": True, "false": False, "null": None}

_LOGICAL_OPERATORS = frozenset({"&&", "||", "??"})

_FUNCTION_TYPES = {
    "function_declaration": NodeKind.FUNCTION_DECLARATION.value,
    "generator_function_declaration": NodeKind.FUNCTION_DECLARATION.value,
    "function_expression": NodeKind.FUNCTION_EXPRESSION.value,
    # tree-sitter-javascript < 0.23 names function expressions "function"
    "function": NodeKind.FUNCTION_EXPRESSION.value,
    "generator_function": NodeKind.FUNCTION_EXPRESSION.value,
    "arrow_function": NodeKind.ARROW_FUNCTION_EXPRESSION.value,
}

_CLASS_TYPES = {
    "class_declaration": NodeKind.CLASS_DECLARATION.value,
    "abstract_class_declaration": NodeKind.CLASS_DECLARATION.value,
    "class": NodeKind.CLASS_EXPRESSION.value,
}


class EstreeNormalizer:
    """Converts one tree-sitter tree into a SyntaxNode tree.

    Usage:
        normalizer = EstreeNormalizer(code_bytes)
        program = normalizer.convert(tree.root_node)
    """

    def __init__(self, source: bytes) -> None:
        self._source = source
        self._builders: dict[str, Callable[[Node], Optional[SyntaxNode]]] = {
            "for_in_statement": self._for_in,
            "binary_expression": self._binary,
            "method_definition": self._method,
            "field_definition": self._field_definition,
            "public_field_definition": self._field_definition,
            "import_statement": self._import,
            "call_expression": self._call,
            "lexical_declaration": self._declaration,
            "variable_declaration": self._declaration,
            "variable_declarator": self._declarator,
            "pair": self._pair,
            "string": self._string,
            "number": self._number,
        }
        for ts_type in _FUNCTION_TYPES:
            self._builders[ts_type] = self._function
        for ts_type in _CLASS_TYPES:
            self._builders[ts_type] = self._class

    def convert(self, node: Node) -> Optional[SyntaxNode]:
        """Convert a tree-sitter node (and its subtree).

        Returns None for comments and anonymous tokens.
        """
        if not node.is_named or node.type == "comment":
            return None

        if node.type in _IDENTIFIER_TYPES:
            return self._make(NodeKind.IDENTIFIER.value, node, name=self._text(node))
        if node.type in _LITERAL_CONSTANTS:
            return self._make(
                NodeKind.LITERAL.value,
                node,
                value=_LITERAL_CONSTANTS[node.type],
                raw=node.type,
            )

        builder = self._builders.get(node.type)
        if builder is not None:
            return builder(node)
        return self._generic(node, _RENAMES.get(node.type, node.type))

    # -- generic ---------------------------------------------------------

    def _generic(self, node: Node, kind: str) -> SyntaxNode:
        fields: dict[str, Any] = {}
        for index, child in enumerate(node.children):
            converted = self.convert(child)
            if converted is None:
                continue
            key = node.field_name_for_child(index) or "children"
            if key == "children":
                fields.setdefault(key, []).append(converted)
            elif key in fields:
                existing = fields[key]
                if isinstance(existing, list):
                    existing.append(converted)
                else:
                    fields[key] = [existing, converted]
            else:
                fields[key] = converted
        return SyntaxNode(type=kind, fields=fields, loc=self._loc(node))

    # -- control flow ----------------------------------------------------

    def _for_in(self, node: Node) -> SyntaxNode:
        operator = node.child_by_field_name("operator")
        if operator is not None:
            is_of = self._text(operator) == "of"
        else:
            is_of = self._has_token(node, "of")
        kind = NodeKind.FOR_OF_STATEMENT if is_of else NodeKind.FOR_IN_STATEMENT
        return self._generic(node, kind.value)

    def _binary(self, node: Node) -> SyntaxNode:
        operator_node = node.child_by_field_name("operator")
        operator = self._text(operator_node) if operator_node is not None else ""
        kind = (
            NodeKind.LOGICAL_EXPRESSION
            if operator in _LOGICAL_OPERATORS
            else NodeKind.BINARY_EXPRESSION
        )
        result = self._generic(node, kind.value)
        result.fields["operator"] = operator
        return result

    # -- functions and classes --------------------------------------------

    def _function(self, node: Node) -> SyntaxNode:
        return self._make(
            _FUNCTION_TYPES[node.type],
            node,
            id=self._convert_field(node, "name"),
            params=self._params(node),
            body=self._convert_field(node, "body"),
            generator="generator" in node.type or self._has_token(node, "*"),
            **{"async": self._has_token(node, "async")},
        )

    def _method(self, node: Node) -> SyntaxNode:
        key = self._convert_field(node, "name")
        if key is not None and key.name == "constructor":
            kind = "constructor"
        elif self._has_token(node, "get"):
            kind = "get"
        elif self._has_token(node, "set"):
            kind = "set"
        else:
            kind = "method"
        return self._make(
            NodeKind.METHOD_DEFINITION.value,
            node,
            key=key,
            kind=kind,
            static=self._has_token(node, "static"),
            generator=self._has_token(node, "*"),
            params=self._params(node),
            body=self._convert_field(node, "body"),
            **{"async": self._has_token(node, "async")},
        )

    def _class(self, node: Node) -> SyntaxNode:
        super_class = None
        members: list[SyntaxNode] = []
        body_loc = None
        for child in node.named_children:
            if child.type == "class_heritage":
                super_class = self._superclass(child)
            elif child.type == "class_body":
                body_loc = self._loc(child)
                for member in child.named_children:
                    converted = self.convert(member)
                    if converted is not None:
                        members.append(converted)
        body = SyntaxNode(
            type=NodeKind.CLASS_BODY.value, fields={"body": members}, loc=body_loc
        )
        return self._make(
            _CLASS_TYPES[node.type],
            node,
            id=self._convert_field(node, "name"),
            superClass=super_class,
            body=body,
        )

    def _superclass(self, heritage: Node) -> Optional[SyntaxNode]:
        for child in heritage.named_children:
            if child.type == "extends_clause":
                value = child.child_by_field_name("value")
                if value is None and child.named_children:
                    value = child.named_children[0]
                return self.convert(value) if value is not None else None
            if child.type == "implements_clause":
                continue
            return self.convert(child)
        return None

    def _field_definition(self, node: Node) -> SyntaxNode:
        key_node = node.child_by_field_name("property") or node.child_by_field_name("name")
        return self._make(
            NodeKind.PROPERTY_DEFINITION.value,
            node,
            key=self.convert(key_node) if key_node is not None else None,
            static=self._has_token(node, "static"),
            value=self._convert_field(node, "value"),
        )

    def _params(self, node: Node) -> list[SyntaxNode]:
        single = node.child_by_field_name("parameter")
        if single is not None:
            converted = self.convert(single)
            return [converted] if converted is not None else []

        params_node = node.child_by_field_name("parameters")
        if params_node is None:
            return []
        params = []
        for child in params_node.named_children:
            converted = self.convert(child)
            if converted is not None:
                params.append(converted)
        return params

    # -- modules ---------------------------------------------------------

    def _import(self, node: Node) -> SyntaxNode:
        specifiers: list[SyntaxNode] = []
        for child in node.named_children:
            if child.type == "import_clause":
                specifiers.extend(self._import_clause(child))
        return self._make(
            NodeKind.IMPORT_DECLARATION.value,
            node,
            source=self._convert_field(node, "source"),
            specifiers=specifiers,
        )

    def _import_clause(self, clause: Node) -> list[SyntaxNode]:
        specifiers = []
        for child in clause.named_children:
            if child.type == "identifier":
                specifiers.append(
                    self._make(
                        NodeKind.IMPORT_DEFAULT_SPECIFIER.value, child, local=self.convert(child)
                    )
                )
            elif child.type == "namespace_import":
                local = next(
                    (c for c in child.named_children if c.type == "identifier"), None
                )
                specifiers.append(
                    self._make(
                        NodeKind.IMPORT_NAMESPACE_SPECIFIER.value,
                        child,
                        local=self.convert(local) if local is not None else None,
                    )
                )
            elif child.type == "named_imports":
                for spec in child.named_children:
                    if spec.type != "import_specifier":
                        continue
                    imported = self._convert_field(spec, "name")
                    alias = self._convert_field(spec, "alias")
                    specifiers.append(
                        self._make(
                            NodeKind.IMPORT_SPECIFIER.value,
                            spec,
                            imported=imported,
                            local=alias if alias is not None else imported,
                        )
                    )
        return specifiers

    def _call(self, node: Node) -> SyntaxNode:
        function = node.child_by_field_name("function")
        arguments: list[SyntaxNode] = []
        args_node = node.child_by_field_name("arguments")
        if args_node is not None:
            for child in args_node.named_children:
                converted = self.convert(child)
                if converted is not None:
                    arguments.append(converted)

        if function is not None and function.type == "import":
            return self._make(
                NodeKind.IMPORT_EXPRESSION.value,
                node,
                source=arguments[0] if arguments else None,
                arguments=arguments[1:],
            )
        return self._make(
            NodeKind.CALL_EXPRESSION.value,
            node,
            callee=self.convert(function) if function is not None else None,
            arguments=arguments,
        )

    # -- declarations and literals -----------------------------------------

    def _declaration(self, node: Node) -> SyntaxNode:
        if node.type == "variable_declaration":
            kind = "var"
        else:
            first = node.children[0] if node.children else None
            kind = first.type if first is not None and not first.is_named else "let"
        declarations = []
        for child in node.named_children:
            if child.type == "variable_declarator":
                declarations.append(self._declarator(child))
        return self._make(
            NodeKind.VARIABLE_DECLARATION.value, node, kind=kind, declarations=declarations
        )

    def _declarator(self, node: Node) -> SyntaxNode:
        return self._make(
            NodeKind.VARIABLE_DECLARATOR.value,
            node,
            id=self._convert_field(node, "name"),
            init=self._convert_field(node, "value"),
        )

    def _pair(self, node: Node) -> SyntaxNode:
        return self._make(
            NodeKind.PROPERTY.value,
            node,
            key=self._convert_field(node, "key"),
            value=self._convert_field(node, "value"),
        )

    def _string(self, node: Node) -> SyntaxNode:
        raw = self._text(node)
        value = raw[1:-1] if len(raw) >= 2 and raw[0] == raw[-1] and raw[0] in "'\"" else raw
        return self._make(NodeKind.LITERAL.value, node, value=value, raw=raw)

    def _number(self, node: Node) -> SyntaxNode:
        raw = self._text(node)
        return self._make(NodeKind.LITERAL.value, node, value=_parse_number(raw), raw=raw)

    # -- helpers -----------------------------------------------------------

    def _make(self, node_type: str, node: Node, **fields: Any) -> SyntaxNode:
        # ``kind`` is an ESTree field (declarations, methods)
        return SyntaxNode(type=node_type, fields=fields, loc=self._loc(node))

    def _convert_field(self, node: Node, name: str) -> Optional[SyntaxNode]:
        child = node.child_by_field_name(name)
        return self.convert(child) if child is not None else None

    def _has_token(self, node: Node, *tokens: str) -> bool:
        return any(not child.is_named and child.type in tokens for child in node.children)

    def _text(self, node: Node) -> str:
        return self._source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")

    @staticmethod
    def _loc(node: Node) -> SourceLocation:
        return SourceLocation(
            start_line=node.start_point[0] + 1,
            start_column=node.start_point[1],
            end_line=node.end_point[0] + 1,
            end_column=node.end_point[1],
        )


def find_syntax_error(root: Node) -> Optional[Node]:
    """First ERROR or MISSING node in source order, None if the tree is clean."""
    if not root.has_error:
        return None
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node
        if node.has_error:
            stack.extend(reversed(node.children))
    return root


def _parse_number(raw: str) -> Any:
    text = raw.replace("_", "")
    try:
        if text.lower().startswith(("0x", "0o", "0b")):
            return int(text, 0)
        if text.endswith("n"):
            return int(text[:-1])
        value = float(text)
        return int(value) if value.is_integer() and "." not in text and "e" not in text.lower() else value
    except ValueError:
        return raw
