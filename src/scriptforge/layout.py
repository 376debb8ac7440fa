"""Line layout shared by every dialect.

The engine turns statements into :class:`RenderUnit` objects and then joins
the units of one scope, deciding where blank lines go:

* the first unit of a scope never gets a leading blank line;
* a unit with a comment, and any block, is preceded by a blank line;
* the unit after a commented unit or a block is preceded by a blank line;
* otherwise consecutive units are printed without separation.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from .dialects import Dialect
from .expressions import Expression
from .statements import (
    Block,
    ContainerElementDecl,
    DependencyDecl,
    MethodInvocation,
    PluginDecl,
    PropertyAssignment,
    ScopeKind,
    Section,
    Statement,
    TaskBlock,
    TaskRegistration,
)
from .symbols import SymbolRegistry

__all__ = ["LayoutEngine", "RenderUnit", "split_comment"]


LOGGER = logging.getLogger(__name__)

INDENT = "    "


def split_comment(text: str | None) -> tuple[str, ...]:
    """Split a comment into lines, dropping blank lines at either end."""

    if text is None or not text.strip():
        return ()
    return tuple(text.strip().splitlines())


@dataclass(frozen=True, slots=True)
class RenderUnit:
    """The rendered lines of one statement, without its comment markers."""

    lines: tuple[str, ...]
    comment: tuple[str, ...] = ()
    block: bool = False


class LayoutEngine:
    """Render statements of one script with a given dialect."""

    def __init__(self, dialect: Dialect, symbols: SymbolRegistry, *, indent: str = INDENT) -> None:
        self.dialect = dialect
        self.symbols = symbols
        self.indent = indent

    def render_document(
        self,
        header: Sequence[str],
        statements: Sequence[Statement | Section | TaskBlock],
    ) -> str:
        """Render the header comment followed by ``statements``."""

        lines: list[str] = []
        if header:
            lines.append(self.dialect.comment_block_open())
            lines.extend(self.dialect.comment_block_line(line) for line in header)
            lines.append(self.dialect.comment_block_close())

        body = self.render(statements)
        if body:
            if lines:
                lines.append("")
            lines.extend(body)

        LOGGER.debug(
            "rendered %d statements into %d lines using %s",
            len(statements),
            len(lines),
            self.dialect.name,
        )
        if not lines:
            return ""
        return "\n".join(lines) + "\n"

    def render(self, statements: Iterable[Statement | Section | TaskBlock]) -> list[str]:
        return self.arrange(self.linearize(statements))

    def linearize(self, statements: Iterable[Statement | Section | TaskBlock]) -> list[RenderUnit]:
        return [self.unit(statement) for statement in statements]

    def arrange(self, units: Sequence[RenderUnit]) -> list[str]:
        """Join units of one scope, inserting blank lines and comments."""

        lines: list[str] = []
        separate_next = False
        for position, unit in enumerate(units):
            if position and (separate_next or unit.comment or unit.block):
                lines.append("")
            lines.extend(self.dialect.comment_line(text) for text in unit.comment)
            lines.extend(unit.lines)
            separate_next = bool(unit.comment) or unit.block
        return lines

    def unit(self, statement: Statement | Section | TaskBlock) -> RenderUnit:
        """Render a single statement into a :class:`RenderUnit`."""

        dialect = self.dialect
        if isinstance(statement, PropertyAssignment):
            target = statement.target
            if not isinstance(target, str):
                target = self.expression(target)
            line = dialect.render_assignment(target, self.expression(statement.value), statement.style)
            return RenderUnit((line,), split_comment(statement.comment))

        if isinstance(statement, MethodInvocation):
            line = dialect.render_method_call(
                statement.name, statement.args, statement.target, self.symbols
            )
            return RenderUnit((line,), split_comment(statement.comment))

        if isinstance(statement, PluginDecl):
            line = dialect.plugin(statement.plugin_id, statement.version)
            return RenderUnit((line,), split_comment(statement.comment))

        if isinstance(statement, DependencyDecl):
            lines = tuple(
                dialect.dependency(statement.configuration, statement.kind, notation)
                for notation in statement.notations
            )
            return RenderUnit(lines, split_comment(statement.comment))

        if isinstance(statement, Block):
            return self.block((statement.name,), statement.statements, statement.comment)

        if isinstance(statement, ContainerElementDecl):
            headers = dialect.container_element_headers(
                statement.container_path,
                statement.element_name,
                statement.var_name,
                statement.element_type,
            )
            return self.block(headers, statement.statements, statement.comment)

        if isinstance(statement, TaskRegistration):
            header = dialect.task_registration_header(statement.task_name, statement.task_type)
            return self.block((header,), statement.statements, statement.comment)

        if isinstance(statement, TaskBlock):
            scope = statement.scope
            if scope.kind is ScopeKind.PER_TYPE:
                header = dialect.task_type_header(scope.task_type or "")
            else:
                header = dialect.task_named_header(scope.task_name or "", scope.task_type)
            return self.block((header,), statement.statements, statement.comment)

        if isinstance(statement, Section):
            return self.block((statement.name,), statement.statements, None)

        msg = f"cannot lay out {type(statement).__name__} in this position"
        raise TypeError(msg)

    def block(
        self,
        headers: Sequence[str],
        statements: Iterable[Statement],
        comment: str | None,
    ) -> RenderUnit:
        """Render nested blocks, outermost header first."""

        lines = self.render(statements)
        for header in reversed(headers):
            lines = [
                self.dialect.open_block(header),
                *(f"{self.indent}{line}" if line else line for line in lines),
                self.dialect.close_block(),
            ]
        return RenderUnit(tuple(lines), split_comment(comment), block=True)

    def expression(self, expression: Expression) -> str:
        return self.dialect.render_expression(expression, self.symbols)
