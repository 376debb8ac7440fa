"""Kotlin build script syntax (``build.gradle.kts``)."""

from __future__ import annotations

import re
from collections.abc import Sequence

from ..statements import AssignmentStyle, DependencyKind
from ..symbols import Declaration, SymbolKind
from .base import Dialect

__all__ = ["KotlinDialect"]


_SIMPLE_PLUGIN_ID = re.compile(r"[a-z]+")


class KotlinDialect(Dialect):
    name = "kotlin"
    file_extension = "gradle.kts"

    def quote_string(self, value: str) -> str:
        escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("$", "\\$")
        return f'"{self.escape_control(escaped)}"'

    def named_argument(self, name: str, value: str) -> str:
        return f"{name} = {value}"

    def map_literal(self, entries: Sequence[tuple[str, str]]) -> str:
        pairs = ", ".join(f"{self.quote_string(key)} to {value}" for key, value in entries)
        return f"mapOf({pairs})"

    def list_literal(self, items: Sequence[str]) -> str:
        return f"listOf({', '.join(items)})"

    def render_assignment(self, target: str, value: str, style: AssignmentStyle) -> str:
        if style is AssignmentStyle.LEGACY:
            return f"{target}.set({value})"
        return f"{target} = {value}"

    def reference(self, declaration: Declaration) -> str:
        if declaration.kind is SymbolKind.TASK:
            return declaration.element_name
        return declaration.var_name or declaration.element_name

    def container_element_path(self, container: str, element: str) -> str:
        return f"{container}[{self.quote_string(element)}]"

    def container_element_headers(
        self,
        container: str,
        element: str,
        var_name: str | None,
        element_type: str | None,
    ) -> tuple[str, ...]:
        if element_type is None:
            return (f"val {var_name or element} by {container}.creating",)
        create = f"{container}.create<{element_type}>({self.quote_string(element)})"
        if var_name is None:
            return (create,)
        return (f"val {var_name} = {create}",)

    def plugin(self, plugin_id: str, version: str | None) -> str:
        if version:
            return f"id({self.quote_string(plugin_id)}) version {self.quote_string(version)}"
        if "." in plugin_id:
            return f"id({self.quote_string(plugin_id)})"
        if _SIMPLE_PLUGIN_ID.fullmatch(plugin_id):
            return plugin_id
        return f"`{plugin_id}`"

    def dependency(self, configuration: str, kind: DependencyKind, notation: str) -> str:
        quoted = self.quote_string(notation)
        if kind is DependencyKind.PLATFORM:
            return f"{configuration}(platform({quoted}))"
        if kind is DependencyKind.PROJECT:
            return f"{configuration}(project({quoted}))"
        return f"{configuration}({quoted})"

    def task_registration_header(self, task_name: str, task_type: str | None) -> str:
        if task_type is None:
            return f"val {task_name} by tasks.registering"
        return f"val {task_name} by tasks.registering({task_type}::class)"

    def task_named_header(self, task_name: str, task_type: str | None) -> str:
        if task_type is None:
            return f"tasks.named({self.quote_string(task_name)})"
        return f"tasks.named<{task_type}>({self.quote_string(task_name)})"

    def task_type_header(self, task_type: str) -> str:
        return f"tasks.withType<{task_type}>"
