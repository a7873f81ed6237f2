"""Structure models for parsed scripts.

CodeStructure lists what a script defines and depends on:
    - functions: declarations, expressions, arrows, class methods
    - classes: superclass, methods, properties
    - imports: ES module imports, dynamic import(), CommonJS require()
    - variables: var/let/const declarators

All records are read-only once the extractor builds them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from ..syntax.nodes import SourceLocation


class FunctionKind(str, Enum):
    DECLARATION = "declaration"
    ARROW = "arrow"
    EXPRESSION = "expression"
    METHOD = "method"


class ImportKind(str, Enum):
    STATIC = "static"
    DYNAMIC = "dynamic"
    COMMONJS = "commonjs"


def _loc_dict(loc: Optional[SourceLocation]) -> Optional[dict[str, Any]]:
    return loc.to_dict() if loc is not None else None


@dataclass(frozen=True)
class FunctionInfo:
    """A function-like definition.

    Attributes:
        name: Resolved name, "anonymous" when none can be found
        kind: declaration, arrow, expression or method
        parameter_count: Number of declared parameters
        is_async: Declared async
        is_generator: Declared as a generator
        is_static: Static class member (methods only)
        method_kind: method, constructor, get or set (methods only)
        location: Source span
    """

    name: str
    kind: FunctionKind
    parameter_count: int = 0
    is_async: bool = False
    is_generator: bool = False
    is_static: bool = False
    method_kind: Optional[str] = None
    location: Optional[SourceLocation] = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "name": self.name,
            "type": self.kind.value,
            "params": self.parameter_count,
            "async": self.is_async,
            "generator": self.is_generator,
            "loc": _loc_dict(self.location),
        }
        if self.kind is FunctionKind.METHOD:
            result["kind"] = self.method_kind
            result["static"] = self.is_static
        return result


@dataclass(frozen=True)
class MethodInfo:
    name: Optional[str]
    kind: str = "method"
    is_static: bool = False
    is_async: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "kind": self.kind,
            "static": self.is_static,
            "async": self.is_async,
        }


@dataclass(frozen=True)
class PropertyInfo:
    name: Optional[str]
    is_static: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "static": self.is_static}


@dataclass(frozen=True)
class ClassInfo:
    """A class declaration or expression.

    Attributes:
        name: Class name, "anonymous" for unnamed class expressions
        superclass_name: Name in the ``extends`` clause when it is a plain
            identifier, otherwise None
        methods: Methods in declaration order
        properties: Class fields in declaration order
        location: Source span
    """

    name: str
    superclass_name: Optional[str] = None
    methods: tuple[MethodInfo, ...] = ()
    properties: tuple[PropertyInfo, ...] = ()
    location: Optional[SourceLocation] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "superClass": self.superclass_name,
            "methods": [m.to_dict() for m in self.methods],
            "properties": [p.to_dict() for p in self.properties],
            "loc": _loc_dict(self.location),
        }


@dataclass(frozen=True)
class ImportSpecifier:
    imported_name: Optional[str]
    local_alias: Optional[str]

    def to_dict(self) -> dict[str, Any]:
        return {"imported": self.imported_name, "local": self.local_alias}


@dataclass(frozen=True)
class ImportInfo:
    """A module dependency.

    Attributes:
        source_module: Module specifier string
        import_kind: static (import declaration), dynamic (import()),
            or commonjs (require())
        specifiers: Bound names; empty for dynamic and CommonJS imports
    """

    source_module: str
    import_kind: ImportKind
    specifiers: tuple[ImportSpecifier, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source_module,
            "type": self.import_kind.value,
            "specifiers": [s.to_dict() for s in self.specifiers],
        }


@dataclass(frozen=True)
class VariableInfo:
    """A single declarator of a var/let/const declaration.

    ``name`` is None for destructuring patterns.
    """

    name: Optional[str]
    declaration_kind: str
    is_initialized: bool
    location: Optional[SourceLocation] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "kind": self.declaration_kind,
            "initialized": self.is_initialized,
            "loc": _loc_dict(self.location),
        }


@dataclass(frozen=True)
class StructureSummary:
    functions: int
    classes: int
    imports: int
    variables: int
    average_parameters: float
    async_functions: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "functions": self.functions,
            "classes": self.classes,
            "imports": self.imports,
            "variables": self.variables,
            "avgFunctionParams": self.average_parameters,
            "asyncFunctions": self.async_functions,
        }


@dataclass(frozen=True)
class CodeStructure:
    """Everything the structural extractor found in one script."""

    functions: tuple[FunctionInfo, ...] = field(default_factory=tuple)
    classes: tuple[ClassInfo, ...] = field(default_factory=tuple)
    imports: tuple[ImportInfo, ...] = field(default_factory=tuple)
    variables: tuple[VariableInfo, ...] = field(default_factory=tuple)

    def summary(self) -> StructureSummary:
        count = len(self.functions)
        total_params = sum(f.parameter_count for f in self.functions)
        return StructureSummary(
            functions=count,
            classes=len(self.classes),
            imports=len(self.imports),
            variables=len(self.variables),
            average_parameters=round(total_params / count, 2) if count else 0.0,
            async_functions=sum(1 for f in self.functions if f.is_async),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "functions": [f.to_dict() for f in self.functions],
            "classes": [c.to_dict() for c in self.classes],
            "imports": [i.to_dict() for i in self.imports],
            "variables": [v.to_dict() for v in self.variables],
            "summary": self.summary().to_dict(),
        }
