"""Groovy build script syntax (``build.gradle``)."""

from __future__ import annotations

from collections.abc import Sequence

from ..statements import AssignmentStyle, DependencyKind
from ..symbols import Declaration
from .base import Dialect

__all__ = ["GroovyDialect"]


class GroovyDialect(Dialect):
    name = "groovy"
    file_extension = "gradle"

    def quote_string(self, value: str) -> str:
        # Single-quoted strings do not interpolate, so ``$`` is left alone.
        escaped = value.replace("\\", "\\\\").replace("'", "\\'")
        return f"'{self.escape_control(escaped)}'"

    def named_argument(self, name: str, value: str) -> str:
        return f"{name}: {value}"

    def map_literal(self, entries: Sequence[tuple[str, str]]) -> str:
        if not entries:
            return "[:]"
        return "[" + ", ".join(f"{key}: {value}" for key, value in entries) + "]"

    def list_literal(self, items: Sequence[str]) -> str:
        return "[" + ", ".join(items) + "]"

    def render_assignment(self, target: str, value: str, style: AssignmentStyle) -> str:
        return f"{target} = {value}"

    def reference(self, declaration: Declaration) -> str:
        return f"{declaration.container_path}.{declaration.element_name}"

    def container_element_path(self, container: str, element: str) -> str:
        return f"{container}.{element}"

    def container_element_headers(
        self,
        container: str,
        element: str,
        var_name: str | None,
        element_type: str | None,
    ) -> tuple[str, ...]:
        if element_type is not None:
            return (container, f"{element}({element_type})")
        return (container, element)

    def plugin(self, plugin_id: str, version: str | None) -> str:
        spec = f"id {self.quote_string(plugin_id)}"
        if version:
            spec += f" version {self.quote_string(version)}"
        return spec

    def dependency(self, configuration: str, kind: DependencyKind, notation: str) -> str:
        quoted = self.quote_string(notation)
        if kind is DependencyKind.PLATFORM:
            return f"{configuration} platform({quoted})"
        if kind is DependencyKind.PROJECT:
            return f"{configuration} project({quoted})"
        return f"{configuration} {quoted}"

    def task_registration_header(self, task_name: str, task_type: str | None) -> str:
        if task_type is None:
            return f"tasks.register({self.quote_string(task_name)})"
        return f"tasks.register({self.quote_string(task_name)}, {task_type})"

    def task_named_header(self, task_name: str, task_type: str | None) -> str:
        return f"tasks.named({self.quote_string(task_name)})"

    def task_type_header(self, task_type: str) -> str:
        return f"tasks.withType({task_type})"
