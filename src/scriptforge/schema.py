"""Declarative JSON description of a build script."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr, model_validator

from .builder import ScriptBuilder
from .statements import AssignmentStyle, DependencyKind

ScriptValue = Union[StrictBool, StrictInt, StrictFloat, StrictStr, Dict[str, Any], List[Any]]


class RepositoryKind(str, Enum):
    """Repositories that can be declared in a description."""

    MAVEN_CENTRAL = "mavenCentral"
    MAVEN_LOCAL = "mavenLocal"
    GOOGLE = "google"
    GRADLE_PLUGIN_PORTAL = "gradlePluginPortal"
    MAVEN = "maven"


class PluginSpec(BaseModel):
    """Entry of the ``plugins`` section."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(..., min_length=1, description="Plugin identifier, e.g. 'java-library'.")
    version: Optional[str] = Field(None, description="Plugin version for non-core plugins.")
    comment: Optional[str] = Field(None, description="Comment printed above the entry.")


class RepositorySpec(BaseModel):
    """Entry of the ``repositories`` section."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: RepositoryKind = Field(..., description="Which repository to declare.")
    url: Optional[str] = Field(None, description="Location of a 'maven' repository.")
    comment: Optional[str] = Field(None, description="Comment printed above the entry.")

    @model_validator(mode="after")
    def _url_matches_kind(self) -> "RepositorySpec":
        if self.kind is RepositoryKind.MAVEN and not self.url:
            raise ValueError("a 'maven' repository requires a url")
        if self.kind is not RepositoryKind.MAVEN and self.url is not None:
            raise ValueError(f"a '{self.kind.value}' repository does not take a url")
        return self


class DependencySpec(BaseModel):
    """One or more dependencies added to a configuration under one comment."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    configuration: str = Field("implementation", min_length=1, description="Target configuration.")
    kind: DependencyKind = Field(DependencyKind.MODULE, description="Module, platform or project dependency.")
    notations: List[str] = Field(..., min_length=1, description="Coordinates or project paths.")
    comment: Optional[str] = Field(None, description="Comment printed above the entries.")

    @model_validator(mode="after")
    def _single_notation_for_wrappers(self) -> "DependencySpec":
        if self.kind is not DependencyKind.MODULE and len(self.notations) != 1:
            raise ValueError(f"a {self.kind.value} dependency takes exactly one notation")
        return self


class PropertySpec(BaseModel):
    """Top-level property assignment."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., min_length=1, description="Property path, e.g. 'version'.")
    value: ScriptValue = Field(..., description="JSON value rendered as a script literal.")
    style: AssignmentStyle = Field(AssignmentStyle.DIRECT, description="Assignment style.")
    comment: Optional[str] = Field(None, description="Comment printed above the assignment.")


class TaskPropertySpec(BaseModel):
    """Property assignment scoped to a task name or a task type."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    task_name: Optional[str] = Field(None, description="Configure the task with this name.")
    task_type: Optional[str] = Field(None, description="Task type; alone it configures every task of the type.")
    name: str = Field(..., min_length=1, description="Property of the task.")
    value: ScriptValue = Field(..., description="JSON value rendered as a script literal.")
    style: AssignmentStyle = Field(AssignmentStyle.DIRECT, description="Assignment style.")
    comment: Optional[str] = Field(None, description="Comment printed above the assignment.")

    @model_validator(mode="after")
    def _has_scope(self) -> "TaskPropertySpec":
        if not self.task_name and not self.task_type:
            raise ValueError("either task_name or task_type is required")
        return self


class BuildScriptDescription(BaseModel):
    """Everything needed to generate one script."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    comments: List[str] = Field(default_factory=list, description="File header comments.")
    plugins: List[PluginSpec] = Field(default_factory=list, description="Plugins to apply.")
    repositories: List[RepositorySpec] = Field(default_factory=list, description="Repositories to declare.")
    dependencies: List[DependencySpec] = Field(default_factory=list, description="Dependencies to declare.")
    java_toolchain: Optional[int] = Field(None, gt=0, description="Java language version of the toolchain.")
    properties: List[PropertySpec] = Field(default_factory=list, description="Top-level property assignments.")
    tasks: List[TaskPropertySpec] = Field(default_factory=list, description="Task property assignments.")


def load_description(path: str | Path) -> BuildScriptDescription:
    """Read and validate a JSON description from ``path``."""

    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(path)
    return BuildScriptDescription.model_validate_json(path.read_text(encoding="utf-8"))


def apply_description(description: BuildScriptDescription, builder: ScriptBuilder) -> ScriptBuilder:
    """Replay ``description`` onto ``builder`` and return the builder."""

    for comment in description.comments:
        builder.file_comment(comment)

    plugins = builder.plugins()
    for plugin in description.plugins:
        plugins.plugin(plugin.comment, plugin.id, plugin.version)

    repositories = builder.repositories()
    for repository in description.repositories:
        if repository.kind is RepositoryKind.MAVEN:
            repositories.maven(repository.comment, repository.url or "")
        elif repository.kind is RepositoryKind.MAVEN_LOCAL:
            repositories.maven_local(repository.comment)
        elif repository.kind is RepositoryKind.GOOGLE:
            repositories.google(repository.comment)
        elif repository.kind is RepositoryKind.GRADLE_PLUGIN_PORTAL:
            repositories.gradle_plugin_portal(repository.comment)
        else:
            repositories.maven_central(repository.comment)

    dependencies = builder.dependencies()
    for dependency in description.dependencies:
        if dependency.kind is DependencyKind.PLATFORM:
            dependencies.platform_dependency(
                dependency.configuration, dependency.comment, dependency.notations[0]
            )
        elif dependency.kind is DependencyKind.PROJECT:
            dependencies.project_dependency(
                dependency.configuration, dependency.comment, dependency.notations[0]
            )
        else:
            dependencies.dependency(dependency.configuration, dependency.comment, *dependency.notations)

    if description.java_toolchain is not None:
        builder.java_toolchain(description.java_toolchain)

    for prop in description.properties:
        builder.property_assignment(prop.comment, prop.name, prop.value, style=prop.style)

    for task in description.tasks:
        if task.task_name:
            builder.task_property_assignment(
                task.comment, task.task_name, task.task_type, task.name, task.value, style=task.style
            )
        else:
            builder.task_type_property_assignment(
                task.comment, task.task_type or "", task.name, task.value, style=task.style
            )

    return builder


__all__ = [
    "BuildScriptDescription",
    "DependencySpec",
    "PluginSpec",
    "PropertySpec",
    "RepositoryKind",
    "RepositorySpec",
    "ScriptValue",
    "TaskPropertySpec",
    "apply_description",
    "load_description",
]
