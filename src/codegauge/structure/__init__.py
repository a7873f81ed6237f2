"""Structural facts extracted from syntax trees."""

from .extractor import (
    extract_classes,
    extract_functions,
    extract_imports,
    extract_structure,
    extract_variables,
)
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
    StructureSummary,
    VariableInfo,
)

__all__ = [
    "extract_structure",
    "extract_functions",
    "extract_classes",
    "extract_imports",
    "extract_variables",
    "CodeStructure",
    "StructureSummary",
    "FunctionInfo",
    "FunctionKind",
    "ClassInfo",
    "MethodInfo",
    "PropertyInfo",
    "ImportInfo",
    "ImportKind",
    "ImportSpecifier",
    "VariableInfo",
]
