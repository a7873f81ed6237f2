"""Shared test fixtures for codegauge tests."""

import pytest

from codegauge.syntax import SyntaxNode


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch, tmp_path):
    """Keep user and project config files and CODEGAUGE_* env vars out of tests."""
    import os

    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("CODEGAUGE_"):
            monkeypatch.delenv(key)


def _ident(name):
    return {"type": "Identifier", "name": name}


def _nested_ifs(depth):
    body = {"type": "ReturnStatement", "argument": {"type": "Literal", "value": 1}}
    for _ in range(depth):
        body = {
            "type": "IfStatement",
            "test": _ident("x"),
            "consequent": {"type": "BlockStatement", "body": [body]},
            "alternate": None,
        }
    return body


@pytest.fixture
def add_function_tree():
    """function add(a, b) { return a + b; }"""
    return SyntaxNode.from_dict(
        {
            "type": "Program",
            "body": [
                {
                    "type": "FunctionDeclaration",
                    "id": _ident("add"),
                    "params": [_ident("a"), _ident("b")],
                    "async": False,
                    "generator": False,
                    "body": {
                        "type": "BlockStatement",
                        "body": [
                            {
                                "type": "ReturnStatement",
                                "argument": {
                                    "type": "BinaryExpression",
                                    "operator": "+",
                                    "left": _ident("a"),
                                    "right": _ident("b"),
                                },
                            }
                        ],
                    },
                    "loc": {"start": {"line": 1, "column": 0}, "end": {"line": 1, "column": 30}},
                }
            ],
        }
    )


@pytest.fixture
def nested_if_tree():
    """Five if statements, each nested in the previous one."""
    return SyntaxNode.from_dict({"type": "Program", "body": [_nested_ifs(5)]})


@pytest.fixture
def module_tree():
    """Babel-style module: imports, a class, arrow function and a require."""
    return SyntaxNode.from_dict(
        {
            "type": "Program",
            "sourceType": "module",
            "body": [
                {
                    "type": "ImportDeclaration",
                    "source": {"type": "StringLiteral", "value": "react"},
                    "specifiers": [
                        {"type": "ImportDefaultSpecifier", "local": _ident("React")},
                        {
                            "type": "ImportSpecifier",
                            "imported": _ident("useState"),
                            "local": _ident("useState"),
                        },
                        {
                            "type": "ImportSpecifier",
                            "imported": _ident("useEffect"),
                            "local": _ident("useFx"),
                        },
                    ],
                },
                {
                    "type": "VariableDeclaration",
                    "kind": "const",
                    "declarations": [
                        {
                            "type": "VariableDeclarator",
                            "id": _ident("fs"),
                            "init": {
                                "type": "CallExpression",
                                "callee": _ident("require"),
                                "arguments": [{"type": "StringLiteral", "value": "fs"}],
                            },
                        },
                        {"type": "VariableDeclarator", "id": _ident("pending"), "init": None},
                    ],
                },
                {
                    "type": "VariableDeclaration",
                    "kind": "const",
                    "declarations": [
                        {
                            "type": "VariableDeclarator",
                            "id": _ident("load"),
                            "init": {
                                "type": "ArrowFunctionExpression",
                                "async": True,
                                "generator": False,
                                "params": [_ident("path")],
                                "body": {
                                    "type": "CallExpression",
                                    "callee": {"type": "Import"},
                                    "arguments": [{"type": "StringLiteral", "value": "./lazy"}],
                                },
                            },
                        }
                    ],
                },
                {
                    "type": "ClassDeclaration",
                    "id": _ident("Widget"),
                    "superClass": _ident("Component"),
                    "body": {
                        "type": "ClassBody",
                        "body": [
                            {
                                "type": "ClassProperty",
                                "key": _ident("count"),
                                "static": True,
                                "value": {"type": "NumericLiteral", "value": 0},
                            },
                            {
                                "type": "ClassMethod",
                                "kind": "constructor",
                                "key": _ident("constructor"),
                                "static": False,
                                "async": False,
                                "generator": False,
                                "params": [_ident("props")],
                                "body": {"type": "BlockStatement", "body": []},
                            },
                            {
                                "type": "ClassMethod",
                                "kind": "method",
                                "key": _ident("render"),
                                "static": False,
                                "async": True,
                                "generator": False,
                                "params": [],
                                "body": {"type": "BlockStatement", "body": []},
                            },
                        ],
                    },
                },
            ],
        }
    )
