from __future__ import annotations

import pytest

from scriptforge.expressions import Literal
from scriptforge.statements import (
    Dependency,
    DependencyDecl,
    DependencyKind,
    DependenciesSection,
    MethodInvocation,
    PropertyAssignment,
    ScopeKind,
    Section,
    TaskConfig,
    TaskConfigurations,
    TaskScope,
)


def _assign(name: str, value: object = 1) -> PropertyAssignment:
    return PropertyAssignment(name, Literal(value))


def test_dependency_notation():
    assert Dependency.of("a:b", "1.2").notation == "a:b:1.2"
    assert Dependency.of("a:b").notation == "a:b"
    with pytest.raises(ValueError):
        Dependency.of("no-group")


def test_task_scope_keys():
    assert TaskScope.per_instance("test", "Test").key == "test"
    assert TaskScope.per_type("Test").key == "Test"
    assert TaskScope.per_type("Test").kind is ScopeKind.PER_TYPE
    with pytest.raises(ValueError):
        TaskScope.per_instance("")
    with pytest.raises(ValueError):
        TaskScope.per_type("")


def test_task_configurations_merge_by_key_in_first_use_order():
    tasks = TaskConfigurations()
    tasks.add(TaskConfig(TaskScope.per_instance("test", "Test"), _assign("a")))
    tasks.add(TaskConfig(TaskScope.per_instance("jar", "Jar"), _assign("b")))
    tasks.add(TaskConfig(TaskScope.per_type("Test"), _assign("c")))
    tasks.add(TaskConfig(TaskScope.per_instance("test", "Test"), MethodInvocation("useJUnit")))

    blocks = tasks.blocks()
    assert [(block.scope.kind, block.scope.key) for block in blocks] == [
        (ScopeKind.PER_TYPE, "Test"),
        (ScopeKind.PER_INSTANCE, "test"),
        (ScopeKind.PER_INSTANCE, "jar"),
    ]
    assert blocks[1].statements == (_assign("a"), MethodInvocation("useJUnit"))
    assert len(tasks) == 4


def test_dependencies_section_buckets_by_configuration():
    section = DependenciesSection("dependencies")
    first = DependencyDecl("implementation", DependencyKind.MODULE, ("a:b:1",))
    second = DependencyDecl("testImplementation", DependencyKind.MODULE, ("a:c:1",))
    third = DependencyDecl("implementation", DependencyKind.PLATFORM, ("a:d:1",))
    for decl in (first, second, third):
        section.add(decl)
    assert section.statements == (first, third, second)
    assert section.configurations == ("implementation", "testImplementation")
    assert not section.is_empty()


def test_dependencies_section_rejects_other_statements():
    with pytest.raises(TypeError):
        DependenciesSection("dependencies").add(_assign("x"))


def test_section_keeps_call_order():
    section = Section("repositories")
    assert section.is_empty()
    section.add(MethodInvocation("mavenLocal"))
    section.add(MethodInvocation("mavenCentral"))
    assert [s.name for s in section.statements] == ["mavenLocal", "mavenCentral"]
