"""Interface implemented by every target script syntax."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any

from ..expressions import (
    ContainerElementPath,
    ElementRef,
    Expression,
    Literal,
    MethodCall,
    PropertyPath,
    is_expression,
)
from ..statements import AssignmentStyle, DependencyKind
from ..symbols import Declaration, SymbolRegistry

__all__ = ["Dialect"]

_CONTROL_ESCAPES = (("\n", "\\n"), ("\r", "\\r"), ("\t", "\\t"))


class Dialect(ABC):
    """Syntax tokens for one output language.

    Subclasses supply quoting, call shapes and block headers. Expression
    dispatch and the C-style comment forms shared by the supported languages
    live here.
    """

    name: str
    file_extension: str

    @abstractmethod
    def quote_string(self, value: str) -> str:
        """Return ``value`` as an escaped string literal."""

    @abstractmethod
    def named_argument(self, name: str, value: str) -> str:
        """Render one named argument of a method call."""

    @abstractmethod
    def map_literal(self, entries: Sequence[tuple[str, str]]) -> str:
        """Render an ordered mapping from rendered entries."""

    @abstractmethod
    def list_literal(self, items: Sequence[str]) -> str:
        """Render a list from rendered items."""

    @abstractmethod
    def render_assignment(self, target: str, value: str, style: AssignmentStyle) -> str:
        """Render a property assignment."""

    @abstractmethod
    def reference(self, declaration: Declaration) -> str:
        """Render a reference to a declared container element or task."""

    @abstractmethod
    def container_element_path(self, container: str, element: str) -> str:
        """Render a reference to a container element that was not declared here."""

    @abstractmethod
    def container_element_headers(
        self,
        container: str,
        element: str,
        var_name: str | None,
        element_type: str | None,
    ) -> tuple[str, ...]:
        """Headers of the nested blocks declaring a container element, outermost first."""

    @abstractmethod
    def plugin(self, plugin_id: str, version: str | None) -> str:
        """Render one entry of the ``plugins`` block."""

    @abstractmethod
    def dependency(self, configuration: str, kind: DependencyKind, notation: str) -> str:
        """Render one dependency line."""

    @abstractmethod
    def task_registration_header(self, task_name: str, task_type: str | None) -> str:
        """Header of a block registering a new task."""

    @abstractmethod
    def task_named_header(self, task_name: str, task_type: str | None) -> str:
        """Header of a block configuring one existing task."""

    @abstractmethod
    def task_type_header(self, task_type: str) -> str:
        """Header of a block configuring every task of a type."""

    def open_block(self, header: str) -> str:
        return f"{header} {{"

    def close_block(self) -> str:
        return "}"

    def comment_line(self, text: str) -> str:
        # Blank lines keep the trailing space after the marker.
        return f"// {text}"

    def comment_block_open(self) -> str:
        return "/*"

    def comment_block_line(self, text: str) -> str:
        if not text:
            return " *"
        return f" * {text}"

    def comment_block_close(self) -> str:
        return " */"

    def escape_control(self, text: str) -> str:
        """Escape line breaks and tabs so a string literal stays on one line."""

        for raw, escaped in _CONTROL_ESCAPES:
            text = text.replace(raw, escaped)
        return text

    def boolean(self, value: bool) -> str:
        return "true" if value else "false"

    def number(self, value: int | float) -> str:
        return repr(value)

    def render_call(
        self,
        name: str,
        named: Sequence[tuple[str, str]],
        positional: Sequence[str],
        target: str | None = None,
    ) -> str:
        arguments = [self.named_argument(key, value) for key, value in named]
        arguments.extend(positional)
        callee = f"{target}.{name}" if target is not None else name
        return f"{callee}({', '.join(arguments)})"

    def render_expression(self, expression: Expression, symbols: SymbolRegistry) -> str:
        """Render ``expression``, resolving element references through ``symbols``."""

        if isinstance(expression, Literal):
            return self.render_literal(expression.value, symbols)
        if isinstance(expression, MethodCall):
            return self.render_method_call(
                expression.name, expression.args, expression.target, symbols
            )
        if isinstance(expression, PropertyPath):
            receiver = self.render_expression(expression.receiver, symbols)
            return f"{receiver}.{expression.name}"
        if isinstance(expression, ElementRef):
            return self.reference(symbols.resolve(expression.symbol))
        if isinstance(expression, ContainerElementPath):
            return self.container_element_path(expression.container, expression.element)
        msg = f"cannot render {type(expression).__name__} as an expression"
        raise TypeError(msg)

    def render_literal(self, value: Any, symbols: SymbolRegistry) -> str:
        if is_expression(value):
            return self.render_expression(value, symbols)
        if isinstance(value, bool):
            return self.boolean(value)
        if isinstance(value, (int, float)):
            return self.number(value)
        if isinstance(value, str):
            return self.quote_string(value)
        if isinstance(value, Mapping):
            return self.map_literal(
                [(key, self.render_literal(inner, symbols)) for key, inner in value.items()]
            )
        return self.list_literal([self.render_literal(item, symbols) for item in value])

    def render_method_call(
        self,
        name: str,
        args: Sequence[Expression],
        target: Expression | None,
        symbols: SymbolRegistry,
    ) -> str:
        """Render a call with mapping arguments hoisted to named arguments."""

        named: list[tuple[str, str]] = []
        positional: list[str] = []
        for arg in args:
            # Empty mappings stay positional.
            if isinstance(arg, Literal) and isinstance(arg.value, Mapping) and arg.value:
                named.extend(
                    (key, self.render_literal(inner, symbols)) for key, inner in arg.value.items()
                )
            else:
                positional.append(self.render_expression(arg, symbols))
        target_text = self.render_expression(target, symbols) if target is not None else None
        return self.render_call(name, named, positional, target_text)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
