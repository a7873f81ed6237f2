"""Tests for the structural extractor."""

import pytest

from codegauge.structure import (
    CodeStructure,
    FunctionKind,
    ImportKind,
    extract_classes,
    extract_functions,
    extract_imports,
    extract_structure,
    extract_variables,
)
from codegauge.syntax.nodes import SyntaxNode
from codegauge.syntax.parser import parse_tree


class TestExtractFunctions:
    """Function discovery on Babel-shaped trees."""

    def test_declaration(self, add_function_tree):
        functions = extract_functions(add_function_tree)
        assert len(functions) == 1
        fn = functions[0]
        assert fn.name == "add"
        assert fn.kind is FunctionKind.DECLARATION
        assert fn.parameter_count == 2
        assert not fn.is_async
        assert fn.location.start_line == 1

    def test_arrow_takes_binding_name(self, module_tree):
        arrows = [f for f in extract_functions(module_tree) if f.kind is FunctionKind.ARROW]
        assert len(arrows) == 1
        assert arrows[0].name == "load"
        assert arrows[0].is_async
        assert arrows[0].parameter_count == 1

    def test_class_methods(self, module_tree):
        methods = [f for f in extract_functions(module_tree) if f.kind is FunctionKind.METHOD]
        assert [(m.name, m.method_kind) for m in methods] == [
            ("constructor", "constructor"),
            ("render", "method"),
        ]
        assert methods[1].is_async

    def test_estree_method_not_reported_twice(self):
        """A MethodDefinition's FunctionExpression value is part of the method."""
        tree = SyntaxNode.from_dict(
            {
                "type": "ClassBody",
                "body": [
                    {
                        "type": "MethodDefinition",
                        "kind": "get",
                        "static": True,
                        "key": {"type": "Identifier", "name": "size"},
                        "value": {
                            "type": "FunctionExpression",
                            "params": [],
                            "async": False,
                            "generator": False,
                            "body": {"type": "BlockStatement", "body": []},
                        },
                    }
                ],
            }
        )
        functions = extract_functions(tree)
        assert len(functions) == 1
        assert functions[0].name == "size"
        assert functions[0].method_kind == "get"
        assert functions[0].is_static

    def test_unbound_expression_is_anonymous(self):
        tree = SyntaxNode.from_dict(
            {
                "type": "CallExpression",
                "callee": {"type": "Identifier", "name": "setTimeout"},
                "arguments": [{"type": "FunctionExpression", "params": [], "body": None}],
            }
        )
        assert extract_functions(tree)[0].name == "anonymous"


class TestExtractClasses:
    def test_members(self, module_tree):
        classes = extract_classes(module_tree)
        assert len(classes) == 1
        widget = classes[0]
        assert widget.name == "Widget"
        assert widget.superclass_name == "Component"
        assert [m.name for m in widget.methods] == ["constructor", "render"]
        assert [(p.name, p.is_static) for p in widget.properties] == [("count", True)]

    def test_member_expression_superclass_has_no_name(self):
        tree = SyntaxNode.from_dict(
            {
                "type": "ClassExpression",
                "id": None,
                "superClass": {
                    "type": "MemberExpression",
                    "object": {"type": "Identifier", "name": "React"},
                    "property": {"type": "Identifier", "name": "Component"},
                },
                "body": {"type": "ClassBody", "body": []},
            }
        )
        cls = extract_classes(tree)[0]
        assert cls.name == "anonymous"
        assert cls.superclass_name is None


class TestExtractImports:
    def test_all_import_kinds(self, module_tree):
        imports = extract_imports(module_tree)
        assert [(i.source_module, i.import_kind) for i in imports] == [
            ("react", ImportKind.STATIC),
            ("fs", ImportKind.COMMONJS),
            ("./lazy", ImportKind.DYNAMIC),
        ]

    def test_specifier_aliases(self, module_tree):
        react = extract_imports(module_tree)[0]
        assert [(s.imported_name, s.local_alias) for s in react.specifiers] == [
            ("React", "React"),
            ("useState", "useState"),
            ("useEffect", "useFx"),
        ]

    def test_non_literal_require_ignored(self):
        tree = SyntaxNode.from_dict(
            {
                "type": "CallExpression",
                "callee": {"type": "Identifier", "name": "require"},
                "arguments": [{"type": "Identifier", "name": "name"}],
            }
        )
        assert extract_imports(tree) == []


class TestExtractVariables:
    def test_declarators(self, module_tree):
        variables = extract_variables(module_tree)
        assert [(v.name, v.declaration_kind, v.is_initialized) for v in variables] == [
            ("fs", "const", True),
            ("pending", "const", False),
            ("load", "const", True),
        ]


class TestExtractStructure:
    def test_none_tree_is_empty(self):
        structure = extract_structure(None)
        assert structure == CodeStructure()
        assert structure.summary().functions == 0
        assert structure.summary().average_parameters == 0.0

    def test_summary(self, module_tree):
        summary = extract_structure(module_tree).summary()
        assert summary.functions == 3
        assert summary.classes == 1
        assert summary.imports == 3
        assert summary.variables == 3
        assert summary.async_functions == 2
        assert summary.average_parameters == pytest.approx(0.67)

    def test_to_dict_shape(self, module_tree):
        data = extract_structure(module_tree).to_dict()
        assert set(data) == {"functions", "classes", "imports", "variables", "summary"}
        assert data["imports"][0]["source"] == "react"


class TestExtractFromParsedSource:
    """End to end through the tree-sitter normalizer."""

    def test_parsed_module(self):
        code = """
import { readFile } from "fs/promises";
const path = require("path");

export class Loader extends Base {
  cache = new Map();
  async load(name) {
    const data = await readFile(path.join(dir, name));
    return data;
  }
}

const parse = function (text) { return JSON.parse(text); };
const plugins = { init: () => null };
"""
        structure = extract_structure(parse_tree(code, "javascript"))

        names = {(f.name, f.kind) for f in structure.functions}
        assert ("load", FunctionKind.METHOD) in names
        assert ("parse", FunctionKind.EXPRESSION) in names
        assert ("init", FunctionKind.ARROW) in names

        loader = structure.classes[0]
        assert loader.name == "Loader"
        assert loader.superclass_name == "Base"
        assert [p.name for p in loader.properties] == ["cache"]

        assert [(i.source_module, i.import_kind) for i in structure.imports] == [
            ("fs/promises", ImportKind.STATIC),
            ("path", ImportKind.COMMONJS),
        ]
        assert [v.name for v in structure.variables] == ["path", "data", "parse", "plugins"]
