"""Builder API used to describe the content of a build script."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

from .dialects import Dialect, get_dialect
from .errors import ScriptSealedError
from .expressions import (
    ContainerElementPath,
    Expression,
    MethodCall,
    PropertyPath,
    as_expression,
    iter_references,
)
from .layout import LayoutEngine, split_comment
from .statements import (
    AssignmentStyle,
    Block,
    ContainerElementDecl,
    Dependency,
    DependencyDecl,
    DependencyKind,
    DependenciesSection,
    MethodInvocation,
    PluginDecl,
    PropertyAssignment,
    Section,
    Statement,
    TaskConfig,
    TaskConfigurations,
    TaskRegistration,
    TaskScope,
)
from .symbols import Symbol, SymbolKind, SymbolRegistry

__all__ = [
    "DependenciesBuilder",
    "PluginsBuilder",
    "RepositoriesBuilder",
    "ScriptBlock",
    "ScriptBuilder",
]


LOGGER = logging.getLogger(__name__)

JAVA_TOOLCHAIN_COMMENT = "Apply a specific Java toolchain to ease working on different environments."


class _ScriptState:
    """State shared by a script and every nested block builder."""

    def __init__(self) -> None:
        self.symbols = SymbolRegistry()
        self.sealed = False

    def check_open(self) -> None:
        if self.sealed:
            msg = "the script has already been rendered and can no longer be modified"
            raise ScriptSealedError(msg)

    def expression(self, value: Any, *, context: str) -> Expression:
        expression = as_expression(value, context=context)
        for reference in iter_references(expression):
            self.symbols.resolve(reference.symbol)
        return expression


def _describe(kind: str, name: str, comment: str | None) -> str:
    if comment:
        return f"{kind} {name!r} ({comment.strip()!r})"
    return f"{kind} {name!r}"


def _comment(text: str | None) -> str | None:
    return text if split_comment(text) else None


def _header_lines(lines: Iterable[str]) -> list[str]:
    lines = list(lines)
    for line in lines:
        if "*/" in line:
            msg = f"header comment must not contain '*/': {line!r}"
            raise ValueError(msg)
    return lines


class ScriptBlock:
    """Collects the statements of one block.

    Methods that add statements return the builder so calls can be chained,
    methods that declare an element return the new :class:`Symbol`.
    """

    def __init__(self, state: _ScriptState, statements: list[Statement]) -> None:
        self._state = state
        self._statements = statements

    @property
    def statements(self) -> tuple[Statement, ...]:
        return tuple(self._statements)

    def _add(self, statement: Statement) -> None:
        self._state.check_open()
        self._statements.append(statement)

    def property_assignment(
        self,
        comment: str | None,
        name: str | Expression,
        value: Any,
        *,
        style: AssignmentStyle | str = AssignmentStyle.DIRECT,
    ) -> ScriptBlock:
        """Add ``name = value``."""

        self._add(self._assignment(comment, name, value, style))
        return self

    def method_invocation(
        self,
        comment: str | None,
        name: str,
        *args: Any,
        target: Any = None,
    ) -> ScriptBlock:
        """Add ``name(args...)``, or ``target.name(args...)`` when ``target`` is given."""

        self._add(self._invocation(comment, name, args, target))
        return self

    def block(
        self,
        comment: str | None,
        name: str,
        configure: Callable[[ScriptBlock], Any] | None = None,
    ) -> ScriptBlock:
        """Add a nested block.

        Without ``configure`` the nested builder is returned. With it, the
        callback receives the nested builder and this builder is returned so
        calls can keep chaining.
        """

        if not name:
            msg = "block name must be a non-empty string"
            raise ValueError(msg)
        block = Block(name, comment=_comment(comment))
        self._add(block)
        nested = ScriptBlock(self._state, block.statements)
        if configure is None:
            return nested
        configure(nested)
        return self

    def container_element(
        self,
        comment: str | None,
        container: str,
        element: str,
        var_name: str | None = None,
        *,
        element_type: str | None = None,
        configure: Callable[[ScriptBlock], Any] | None = None,
    ) -> Symbol:
        """Declare ``element`` inside ``container`` and return a symbol referring to it."""

        self._state.check_open()
        symbol = self._state.symbols.declare(
            SymbolKind.CONTAINER_ELEMENT, container, element, var_name
        )
        declaration = ContainerElementDecl(
            container,
            element,
            symbol,
            var_name=var_name,
            element_type=element_type,
            comment=_comment(comment),
        )
        self._add(declaration)
        if configure is not None:
            configure(ScriptBlock(self._state, declaration.statements))
        return symbol

    def method_invocation_expression(self, name: str, *args: Any) -> MethodCall:
        context = f"argument of {name}()"
        return MethodCall(name, tuple(self._state.expression(arg, context=context) for arg in args))

    def property_expression(self, receiver: Symbol | Expression, name: str) -> PropertyPath:
        if isinstance(receiver, str):
            msg = f"receiver of {name} must be a symbol or an expression, not a string"
            raise TypeError(msg)
        return PropertyPath(self._state.expression(receiver, context=f"receiver of {name}"), name)

    def container_element_expression(self, container: str, element: str) -> ContainerElementPath:
        return ContainerElementPath(container, element)

    def _assignment(
        self,
        comment: str | None,
        name: str | Expression,
        value: Any,
        style: AssignmentStyle | str,
    ) -> PropertyAssignment:
        if isinstance(name, str) and not name:
            msg = "property name must be a non-empty string"
            raise ValueError(msg)
        context = _describe("property", str(name), comment)
        return PropertyAssignment(
            name,
            self._state.expression(value, context=context),
            AssignmentStyle(style),
            _comment(comment),
        )

    def _invocation(
        self,
        comment: str | None,
        name: str,
        args: Iterable[Any],
        target: Any,
    ) -> MethodInvocation:
        context = _describe("method", name, comment)
        target_expression = None
        if target is not None:
            target_expression = self._state.expression(target, context=f"{context} target")
        return MethodInvocation(
            name,
            tuple(self._state.expression(arg, context=context) for arg in args),
            target_expression,
            _comment(comment),
        )


class PluginsBuilder:
    """Adds entries to the ``plugins`` section."""

    def __init__(self, state: _ScriptState, section: Section) -> None:
        self._state = state
        self._section = section

    def plugin(self, comment: str | None, plugin_id: str, version: str | None = None) -> PluginsBuilder:
        if not plugin_id:
            msg = "plugin id must be a non-empty string"
            raise ValueError(msg)
        self._state.check_open()
        self._section.add(PluginDecl(plugin_id, version, _comment(comment)))
        return self


class RepositoriesBuilder:
    """Adds entries to the ``repositories`` section, kept in call order."""

    def __init__(self, state: _ScriptState, section: Section) -> None:
        self._state = state
        self._section = section

    def _method(self, comment: str | None, name: str) -> RepositoriesBuilder:
        self._state.check_open()
        self._section.add(MethodInvocation(name, comment=_comment(comment)))
        return self

    def maven_local(self, comment: str | None = None) -> RepositoriesBuilder:
        return self._method(comment, "mavenLocal")

    def maven_central(self, comment: str | None = None) -> RepositoriesBuilder:
        return self._method(comment, "mavenCentral")

    def google(self, comment: str | None = None) -> RepositoriesBuilder:
        return self._method(comment, "google")

    def gradle_plugin_portal(self, comment: str | None = None) -> RepositoriesBuilder:
        return self._method(comment, "gradlePluginPortal")

    def maven(self, comment: str | None, url: str) -> RepositoriesBuilder:
        """Add a remote Maven repository located at ``url``."""

        if not url:
            msg = "repository url must be a non-empty string"
            raise ValueError(msg)
        self._state.check_open()
        uri = MethodCall("uri", (as_expression(url, context=f"repository url {url!r}"),))
        self._section.add(
            Block("maven", [PropertyAssignment("url", uri)], comment=_comment(comment))
        )
        return self


def _notation(dependency: Dependency | str) -> str:
    if isinstance(dependency, Dependency):
        return dependency.notation
    if isinstance(dependency, str) and dependency:
        return dependency
    msg = f"dependency must be a Dependency or a non-empty string, got {dependency!r}"
    raise TypeError(msg)


class DependenciesBuilder:
    """Adds entries to the ``dependencies`` section.

    Entries are grouped by configuration in the order each configuration was
    first used.
    """

    def __init__(self, state: _ScriptState, section: DependenciesSection) -> None:
        self._state = state
        self._section = section

    def _add(
        self,
        configuration: str,
        kind: DependencyKind,
        comment: str | None,
        notations: Iterable[str],
    ) -> DependenciesBuilder:
        notations = tuple(notations)
        if not configuration:
            msg = "configuration name must be a non-empty string"
            raise ValueError(msg)
        if not notations:
            msg = f"at least one dependency is required for {configuration!r}"
            raise ValueError(msg)
        self._state.check_open()
        self._section.add(DependencyDecl(configuration, kind, notations, _comment(comment)))
        return self

    def dependency(
        self, configuration: str, comment: str | None, *dependencies: Dependency | str
    ) -> DependenciesBuilder:
        return self._add(
            configuration, DependencyKind.MODULE, comment, (_notation(d) for d in dependencies)
        )

    def platform_dependency(
        self, configuration: str, comment: str | None, dependency: Dependency | str
    ) -> DependenciesBuilder:
        return self._add(configuration, DependencyKind.PLATFORM, comment, (_notation(dependency),))

    def project_dependency(
        self, configuration: str, comment: str | None, project_path: str
    ) -> DependenciesBuilder:
        return self._add(configuration, DependencyKind.PROJECT, comment, (project_path,))


class ScriptBuilder(ScriptBlock):
    """Builder for a complete build script.

    Parameters
    ----------
    dialect:
        A :class:`~scriptforge.dialects.Dialect` or its registered name.
    header:
        Lines printed in the file header comment before any
        :meth:`file_comment` text. No header is printed when there are no lines.
    """

    def __init__(self, dialect: Dialect | str = "groovy", *, header: Iterable[str] = ()) -> None:
        state = _ScriptState()
        super().__init__(state, [])
        self.dialect = get_dialect(dialect)
        self._header = _header_lines(header)
        self._plugins = Section("plugins")
        self._repositories = Section("repositories")
        self._dependencies = DependenciesSection("dependencies")
        self._tasks = TaskConfigurations()

    @property
    def symbols(self) -> SymbolRegistry:
        return self._state.symbols

    @property
    def sealed(self) -> bool:
        return self._state.sealed

    def file_comment(self, comment: str) -> ScriptBuilder:
        """Append ``comment`` to the file header, separated by a blank line."""

        self._state.check_open()
        lines = _header_lines(split_comment(comment))
        if lines:
            self._header.append("")
            self._header.extend(lines)
        return self

    def plugins(self) -> PluginsBuilder:
        return PluginsBuilder(self._state, self._plugins)

    def repositories(self) -> RepositoriesBuilder:
        return RepositoriesBuilder(self._state, self._repositories)

    def dependencies(self) -> DependenciesBuilder:
        return DependenciesBuilder(self._state, self._dependencies)

    def plugin(self, comment: str | None, plugin_id: str, version: str | None = None) -> ScriptBuilder:
        self.plugins().plugin(comment, plugin_id, version)
        return self

    def implementation_dependency(self, comment: str | None, *dependencies: Dependency | str) -> ScriptBuilder:
        self.dependencies().dependency("implementation", comment, *dependencies)
        return self

    def api_dependency(self, comment: str | None, *dependencies: Dependency | str) -> ScriptBuilder:
        self.dependencies().dependency("api", comment, *dependencies)
        return self

    def compile_only_dependency(self, comment: str | None, *dependencies: Dependency | str) -> ScriptBuilder:
        self.dependencies().dependency("compileOnly", comment, *dependencies)
        return self

    def runtime_only_dependency(self, comment: str | None, *dependencies: Dependency | str) -> ScriptBuilder:
        self.dependencies().dependency("runtimeOnly", comment, *dependencies)
        return self

    def test_implementation_dependency(
        self, comment: str | None, *dependencies: Dependency | str
    ) -> ScriptBuilder:
        self.dependencies().dependency("testImplementation", comment, *dependencies)
        return self

    def test_runtime_only_dependency(
        self, comment: str | None, *dependencies: Dependency | str
    ) -> ScriptBuilder:
        self.dependencies().dependency("testRuntimeOnly", comment, *dependencies)
        return self

    def create_container_element(
        self,
        comment: str | None,
        container: str,
        element: str,
        var_name: str | None = None,
        *,
        element_type: str | None = None,
        configure: Callable[[ScriptBlock], Any] | None = None,
    ) -> Symbol:
        return self.container_element(
            comment, container, element, var_name, element_type=element_type, configure=configure
        )

    def task_registration(
        self,
        comment: str | None,
        task_name: str,
        task_type: str | None = None,
        configure: Callable[[ScriptBlock], Any] | None = None,
    ) -> Symbol:
        """Register a new task and return a symbol referring to it."""

        self._state.check_open()
        symbol = self._state.symbols.declare(SymbolKind.TASK, "tasks", task_name)
        registration = TaskRegistration(task_name, task_type, symbol, comment=_comment(comment))
        self._add(registration)
        if configure is not None:
            configure(ScriptBlock(self._state, registration.statements))
        return symbol

    def task_property_assignment(
        self,
        comment: str | None,
        task_name: str,
        task_type: str | None,
        property_name: str,
        value: Any,
        *,
        style: AssignmentStyle | str = AssignmentStyle.DIRECT,
    ) -> ScriptBuilder:
        """Set a property of the task named ``task_name``."""

        scope = TaskScope.per_instance(task_name, task_type)
        return self._task_config(scope, self._assignment(comment, property_name, value, style))

    def task_method_invocation(
        self,
        comment: str | None,
        task_name: str,
        task_type: str | None,
        method_name: str,
        *args: Any,
    ) -> ScriptBuilder:
        scope = TaskScope.per_instance(task_name, task_type)
        return self._task_config(scope, self._invocation(comment, method_name, args, None))

    def task_type_property_assignment(
        self,
        comment: str | None,
        task_type: str,
        property_name: str,
        value: Any,
        *,
        style: AssignmentStyle | str = AssignmentStyle.DIRECT,
    ) -> ScriptBuilder:
        """Set a property on every task of type ``task_type``."""

        scope = TaskScope.per_type(task_type)
        return self._task_config(scope, self._assignment(comment, property_name, value, style))

    def task_type_method_invocation(
        self,
        comment: str | None,
        task_type: str,
        method_name: str,
        *args: Any,
    ) -> ScriptBuilder:
        scope = TaskScope.per_type(task_type)
        return self._task_config(scope, self._invocation(comment, method_name, args, None))

    def java_toolchain(self, language_version: int) -> ScriptBuilder:
        """Pin the Java toolchain to ``language_version``."""

        java = self.block(JAVA_TOOLCHAIN_COMMENT, "java")
        java.block(None, "toolchain").property_assignment(
            None,
            "languageVersion",
            self.method_invocation_expression("JavaLanguageVersion.of", language_version),
        )
        return self

    def _task_config(
        self, scope: TaskScope, inner: PropertyAssignment | MethodInvocation
    ) -> ScriptBuilder:
        self._state.check_open()
        self._tasks.add(TaskConfig(scope, inner))
        return self

    def body(self) -> list[Statement | Section]:
        """Top-level content in render order, empty sections omitted."""

        sections = [
            section
            for section in (self._plugins, self._repositories, self._dependencies)
            if not section.is_empty()
        ]
        return [*sections, *self._statements, *self._tasks.blocks()]

    def generate(self) -> str:
        """Render the script and seal the builder against further changes."""

        self._state.sealed = True
        engine = LayoutEngine(self.dialect, self._state.symbols)
        text = engine.render_document(tuple(self._header), self.body())
        LOGGER.debug("generated %s script (%d characters)", self.dialect.name, len(text))
        return text

    render = generate
