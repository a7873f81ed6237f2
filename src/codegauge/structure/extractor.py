"""Structural extractor: functions, classes, imports and variables.

Each ``extract_*`` function makes one pass over an ESTree-shaped tree with
the shared walker. They accept trees from the tree-sitter normalizer and
from Babel/ESTree JSON alike, so both method shapes are handled:

    - Babel ``ClassMethod``: params/async directly on the method node
    - ESTree ``MethodDefinition``: params/async on its ``value`` function
"""

from __future__ import annotations

import logging
from typing import Optional

from ..syntax.nodes import NodeKind, SyntaxNode
from ..syntax.walker import walk, walk_with_parent
from .models import (
    ClassInfo,
    CodeStructure,
    FunctionInfo,
    FunctionKind,
    ImportInfo,
    ImportKind,
    ImportSpecifier,
    MethodInfo,
    PropertyInfo,
    VariableInfo,
)

logger = logging.getLogger(__name__)

ANONYMOUS = "anonymous"

_METHOD_KINDS = (NodeKind.METHOD_DEFINITION, NodeKind.CLASS_METHOD)
_PROPERTY_KINDS = (
    NodeKind.PROPERTY_DEFINITION,
    NodeKind.CLASS_PROPERTY,
    "ClassPrivateProperty",
)
_CLASS_KINDS = (NodeKind.CLASS_DECLARATION, NodeKind.CLASS_EXPRESSION)


def extract_structure(tree: Optional[SyntaxNode]) -> CodeStructure:
    """Run every extractor over a tree; an absent tree yields empty lists."""
    if tree is None:
        return CodeStructure()
    return CodeStructure(
        functions=tuple(extract_functions(tree)),
        classes=tuple(extract_classes(tree)),
        imports=tuple(extract_imports(tree)),
        variables=tuple(extract_variables(tree)),
    )


def extract_functions(tree: SyntaxNode) -> list[FunctionInfo]:
    """Function declarations, function/arrow expressions and class methods.

    Expressions take the name of the binding that holds them
    (``const f = () => ...``, ``{ f: function () {} }``, class fields),
    else "anonymous".
    """
    functions: list[FunctionInfo] = []

    def visit(node: SyntaxNode, parent: Optional[SyntaxNode]) -> None:
        if node.type == NodeKind.FUNCTION_DECLARATION:
            functions.append(
                FunctionInfo(
                    name=_key_name(node.node("id")) or ANONYMOUS,
                    kind=FunctionKind.DECLARATION,
                    parameter_count=len(node.nodes("params")),
                    is_async=node.flag("async"),
                    is_generator=node.flag("generator"),
                    location=node.loc,
                )
            )
        elif node.type in (
            NodeKind.ARROW_FUNCTION_EXPRESSION,
            NodeKind.FUNCTION_EXPRESSION,
        ):
            # ESTree methods hold their body in a FunctionExpression; the
            # method itself is reported below
            if parent is not None and parent.type == NodeKind.METHOD_DEFINITION:
                return
            is_arrow = node.type == NodeKind.ARROW_FUNCTION_EXPRESSION
            functions.append(
                FunctionInfo(
                    name=_binding_name(parent) or ANONYMOUS,
                    kind=FunctionKind.ARROW if is_arrow else FunctionKind.EXPRESSION,
                    parameter_count=len(node.nodes("params")),
                    is_async=node.flag("async"),
                    is_generator=node.flag("generator"),
                    location=node.loc,
                )
            )
        elif node.is_a(*_METHOD_KINDS):
            target = node.node("value") or node
            functions.append(
                FunctionInfo(
                    name=_key_name(node.node("key")) or ANONYMOUS,
                    kind=FunctionKind.METHOD,
                    parameter_count=len(target.nodes("params")),
                    is_async=target.flag("async"),
                    is_generator=target.flag("generator"),
                    is_static=node.flag("static"),
                    method_kind=node.get("kind") or "method",
                    location=node.loc,
                )
            )

    walk_with_parent(tree, visit)
    return functions


def extract_classes(tree: SyntaxNode) -> list[ClassInfo]:
    """Class declarations and expressions with their members."""
    classes: list[ClassInfo] = []

    def visit(node: SyntaxNode) -> None:
        if not node.is_a(*_CLASS_KINDS):
            return

        methods: list[MethodInfo] = []
        properties: list[PropertyInfo] = []
        body = node.node("body")
        members = body.nodes("body") if body is not None else []
        for member in members:
            if member.is_a(*_METHOD_KINDS):
                target = member.node("value") or member
                methods.append(
                    MethodInfo(
                        name=_key_name(member.node("key")),
                        kind=member.get("kind") or "method",
                        is_static=member.flag("static"),
                        is_async=target.flag("async"),
                    )
                )
            elif member.is_a(*_PROPERTY_KINDS):
                properties.append(
                    PropertyInfo(
                        name=_key_name(member.node("key")),
                        is_static=member.flag("static"),
                    )
                )

        super_class = node.node("superClass")
        classes.append(
            ClassInfo(
                name=_key_name(node.node("id")) or ANONYMOUS,
                superclass_name=super_class.name if super_class is not None else None,
                methods=tuple(methods),
                properties=tuple(properties),
                location=node.loc,
            )
        )

    walk(tree, visit)
    return classes


def extract_imports(tree: SyntaxNode) -> list[ImportInfo]:
    """ES module imports, dynamic ``import()`` and CommonJS ``require()``.

    Dynamic and CommonJS imports are only recorded when their specifier
    is a string literal.
    """
    imports: list[ImportInfo] = []

    def visit(node: SyntaxNode) -> None:
        if node.type == NodeKind.IMPORT_DECLARATION:
            specifiers = []
            for spec in node.nodes("specifiers"):
                local = _key_name(spec.node("local"))
                imported = _key_name(spec.node("imported")) or local
                specifiers.append(ImportSpecifier(imported_name=imported, local_alias=local))
            imports.append(
                ImportInfo(
                    source_module=_literal_string(node.node("source")) or "",
                    import_kind=ImportKind.STATIC,
                    specifiers=tuple(specifiers),
                )
            )
        elif node.type == NodeKind.CALL_EXPRESSION:
            callee = node.node("callee")
            arguments = node.nodes("arguments")
            source = _literal_string(arguments[0]) if arguments else None
            if callee is None or not source:
                return
            if callee.name == "require":
                imports.append(ImportInfo(source_module=source, import_kind=ImportKind.COMMONJS))
            elif callee.type == "Import":
                # Babel before ImportExpression: import("x") is a call on Import
                imports.append(ImportInfo(source_module=source, import_kind=ImportKind.DYNAMIC))
        elif node.type == NodeKind.IMPORT_EXPRESSION:
            source = _literal_string(node.node("source"))
            if source:
                imports.append(ImportInfo(source_module=source, import_kind=ImportKind.DYNAMIC))

    walk(tree, visit)
    return imports


def extract_variables(tree: SyntaxNode) -> list[VariableInfo]:
    """One entry per declarator of every var/let/const declaration."""
    variables: list[VariableInfo] = []

    def visit(node: SyntaxNode) -> None:
        if node.type != NodeKind.VARIABLE_DECLARATION:
            return
        kind = node.get("kind") or "var"
        for declarator in node.nodes("declarations"):
            variables.append(
                VariableInfo(
                    name=_key_name(declarator.node("id")),
                    declaration_kind=kind,
                    is_initialized=declarator.get("init") is not None,
                    location=declarator.loc,
                )
            )

    walk(tree, visit)
    return variables


def _key_name(node: Optional[SyntaxNode]) -> Optional[str]:
    """Name of an identifier, private name or string-literal key."""
    if node is None:
        return None
    if node.name is not None:
        return node.name
    # Babel PrivateName wraps an Identifier in ``id``
    inner = node.node("id")
    if inner is not None and inner.name is not None:
        return inner.name
    return _literal_string(node)


def _binding_name(parent: Optional[SyntaxNode]) -> Optional[str]:
    if parent is None:
        return None
    return _key_name(parent.node("id")) or _key_name(parent.node("key"))


def _literal_string(node: Optional[SyntaxNode]) -> Optional[str]:
    if node is None:
        return None
    value = node.get("value")
    return value if isinstance(value, str) else None
