"""Generate consistently formatted build scripts.

Callers describe plugins, repositories, dependencies, tasks and arbitrary
statements through :class:`ScriptBuilder`; the builder renders them into the
text of a Groovy or Kotlin build script. Rendering is deterministic: the same
content always produces the same whitespace, comments and quoting.
"""

from __future__ import annotations

from .builder import DependenciesBuilder, PluginsBuilder, RepositoriesBuilder, ScriptBlock, ScriptBuilder
from .config import GENERATED_BY_HEADER, INCUBATING_APIS_WARNING, ScriptConfig, create_builder
from .dialects import Dialect, GroovyDialect, KotlinDialect, get_dialect
from .errors import (
    DanglingReferenceError,
    InvalidLiteralError,
    ScriptBuilderError,
    ScriptSealedError,
    UnknownDialectError,
)
from .expressions import ContainerElementPath, ElementRef, Literal, MethodCall, PropertyPath
from .statements import AssignmentStyle, Dependency
from .symbols import Symbol, SymbolRegistry

__all__ = [
    "AssignmentStyle",
    "ContainerElementPath",
    "DanglingReferenceError",
    "Dependency",
    "DependenciesBuilder",
    "Dialect",
    "ElementRef",
    "GENERATED_BY_HEADER",
    "GroovyDialect",
    "INCUBATING_APIS_WARNING",
    "InvalidLiteralError",
    "KotlinDialect",
    "Literal",
    "MethodCall",
    "PluginsBuilder",
    "PropertyPath",
    "RepositoriesBuilder",
    "ScriptBlock",
    "ScriptBuilder",
    "ScriptBuilderError",
    "ScriptConfig",
    "ScriptSealedError",
    "Symbol",
    "SymbolRegistry",
    "UnknownDialectError",
    "create_builder",
    "get_dialect",
]

__version__ = "0.1.0"
