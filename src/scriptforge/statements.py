"""Statement model, section containers and task-scope accumulators."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from .expressions import Expression
from .symbols import Symbol

__all__ = [
    "AssignmentStyle",
    "Block",
    "ContainerElementDecl",
    "Dependency",
    "DependencyDecl",
    "DependencyKind",
    "DependenciesSection",
    "MethodInvocation",
    "PluginDecl",
    "PropertyAssignment",
    "ScopeKind",
    "Section",
    "Statement",
    "TaskBlock",
    "TaskConfig",
    "TaskConfigurations",
    "TaskRegistration",
    "TaskScope",
]


LOGGER = logging.getLogger(__name__)


class AssignmentStyle(str, Enum):
    """How a property is mutated.

    ``LEGACY`` marks lazily configured properties; dialects without a separate
    setter syntax render both styles identically.
    """

    DIRECT = "direct"
    LEGACY = "legacy"


@dataclass(frozen=True, slots=True)
class PropertyAssignment:
    target: str | Expression
    value: Expression
    style: AssignmentStyle = AssignmentStyle.DIRECT
    comment: str | None = None


@dataclass(frozen=True, slots=True)
class MethodInvocation:
    name: str
    args: tuple[Expression, ...] = ()
    target: Expression | None = None
    comment: str | None = None


@dataclass(slots=True)
class Block:
    """A named block such as ``application { ... }``."""

    name: str
    statements: list[Statement] = field(default_factory=list)
    comment: str | None = None


@dataclass(slots=True)
class ContainerElementDecl:
    """Declaration of a named element inside a container such as ``sourceSets``."""

    container_path: str
    element_name: str
    symbol: Symbol
    var_name: str | None = None
    element_type: str | None = None
    statements: list[Statement] = field(default_factory=list)
    comment: str | None = None


@dataclass(slots=True)
class TaskRegistration:
    task_name: str
    task_type: str | None
    symbol: Symbol
    statements: list[Statement] = field(default_factory=list)
    comment: str | None = None


class ScopeKind(str, Enum):
    PER_INSTANCE = "per-instance"
    PER_TYPE = "per-type"


@dataclass(frozen=True, slots=True)
class TaskScope:
    """Which task(s) a :class:`TaskConfig` applies to."""

    kind: ScopeKind
    task_type: str | None
    task_name: str | None = None

    @classmethod
    def per_instance(cls, task_name: str, task_type: str | None = None) -> TaskScope:
        if not task_name:
            msg = "task name must be a non-empty string"
            raise ValueError(msg)
        return cls(ScopeKind.PER_INSTANCE, task_type, task_name)

    @classmethod
    def per_type(cls, task_type: str) -> TaskScope:
        if not task_type:
            msg = "task type must be a non-empty string"
            raise ValueError(msg)
        return cls(ScopeKind.PER_TYPE, task_type)

    @property
    def key(self) -> str:
        """The grouping key: the task name or, for per-type scopes, the type."""

        if self.kind is ScopeKind.PER_INSTANCE:
            return self.task_name or ""
        return self.task_type or ""


@dataclass(frozen=True, slots=True)
class TaskConfig:
    scope: TaskScope
    inner: PropertyAssignment | MethodInvocation

    @property
    def comment(self) -> str | None:
        return self.inner.comment


@dataclass(frozen=True, slots=True)
class PluginDecl:
    plugin_id: str
    version: str | None = None
    comment: str | None = None


@dataclass(frozen=True, slots=True)
class Dependency:
    """A module coordinate, ``group:name`` plus an optional version."""

    module: str
    version: str | None = None

    @classmethod
    def of(cls, module: str, version: str | None = None) -> Dependency:
        if not module or module.count(":") < 1:
            msg = f"dependency module must look like 'group:name', got {module!r}"
            raise ValueError(msg)
        return cls(module, version)

    @property
    def notation(self) -> str:
        if self.version:
            return f"{self.module}:{self.version}"
        return self.module


class DependencyKind(str, Enum):
    MODULE = "module"
    PLATFORM = "platform"
    PROJECT = "project"


@dataclass(frozen=True, slots=True)
class DependencyDecl:
    """One or more notations added to a configuration under one comment."""

    configuration: str
    kind: DependencyKind
    notations: tuple[str, ...]
    comment: str | None = None


Statement = Union[
    PropertyAssignment,
    MethodInvocation,
    Block,
    ContainerElementDecl,
    TaskRegistration,
    TaskConfig,
    PluginDecl,
    DependencyDecl,
]


@dataclass(slots=True)
class TaskBlock:
    """All statements configuring one task scope, merged at render time."""

    scope: TaskScope
    statements: tuple[Statement, ...]
    comment: str | None = None


@dataclass(slots=True)
class Section:
    """A top-level block rendered once at a fixed slot, e.g. ``repositories``."""

    name: str
    _statements: list[Statement] = field(default_factory=list)

    def add(self, statement: Statement) -> None:
        self._statements.append(statement)

    @property
    def statements(self) -> tuple[Statement, ...]:
        return tuple(self._statements)

    def is_empty(self) -> bool:
        return not self.statements


@dataclass(slots=True)
class DependenciesSection(Section):
    """Dependency statements bucketed by configuration in first-use order."""

    _by_configuration: dict[str, list[DependencyDecl]] = field(default_factory=dict)

    def add(self, statement: Statement) -> None:
        if not isinstance(statement, DependencyDecl):
            msg = f"dependencies section only accepts dependency declarations, got {type(statement).__name__}"
            raise TypeError(msg)
        self._by_configuration.setdefault(statement.configuration, []).append(statement)

    @property
    def statements(self) -> tuple[Statement, ...]:
        return tuple(
            statement
            for bucket in self._by_configuration.values()
            for statement in bucket
        )

    @property
    def configurations(self) -> tuple[str, ...]:
        return tuple(self._by_configuration)


class TaskConfigurations:
    """Keyed accumulator for task-scoped statements.

    Statements are bucketed by scope key in first-use order while the script
    is built; :meth:`blocks` turns the buckets into one :class:`TaskBlock` per
    key, per-type scopes first.
    """

    def __init__(self) -> None:
        self._per_type: dict[str, list[TaskConfig]] = {}
        self._per_instance: dict[str, list[TaskConfig]] = {}

    def add(self, config: TaskConfig) -> None:
        buckets = self._per_type if config.scope.kind is ScopeKind.PER_TYPE else self._per_instance
        bucket = buckets.setdefault(config.scope.key, [])
        if bucket:
            LOGGER.debug(
                "merging %s statement into existing %s block %r",
                type(config.inner).__name__,
                config.scope.kind.value,
                config.scope.key,
            )
        bucket.append(config)

    def blocks(self) -> list[TaskBlock]:
        return [*self._blocks(self._per_type), *self._blocks(self._per_instance)]

    @staticmethod
    def _blocks(buckets: dict[str, list[TaskConfig]]) -> Iterator[TaskBlock]:
        for configs in buckets.values():
            # The first statement decides the scope, so a task type given on a
            # later call for the same task name is ignored.
            yield TaskBlock(configs[0].scope, tuple(config.inner for config in configs))

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in (*self._per_type.values(), *self._per_instance.values()))
