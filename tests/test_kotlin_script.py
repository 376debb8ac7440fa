from __future__ import annotations

import pytest

from scriptforge import AssignmentStyle, Dependency
from scriptforge.builder import ScriptBlock, ScriptBuilder

COMMON_START = "/*\n * This file was generated by the Gradle 'init' task."


def script(body: str = "") -> str:
    text = f"{COMMON_START}\n */\n"
    if body:
        text += "\n" + body
    return text


def test_generates_basic_script(kotlin: ScriptBuilder):
    assert kotlin.generate() == script()


def test_plugins(kotlin: ScriptBuilder):
    kotlin.plugin("Add support for the Java language", "java")
    kotlin.plugin("Add support for Java libraries", "java-library")
    kotlin.plugin(None, "org.example.plain")
    kotlin.plugin("Add support for the Kotlin language", "org.jetbrains.kotlin.jvm", "1.3.41")
    assert kotlin.generate() == script(
        """\
plugins {
    // Add support for the Java language
    java

    // Add support for Java libraries
    `java-library`

    id("org.example.plain")

    // Add support for the Kotlin language
    id("org.jetbrains.kotlin.jvm") version "1.3.41"
}
"""
    )


def test_repositories(kotlin: ScriptBuilder):
    kotlin.repositories().maven_local("Use maven local")
    kotlin.repositories().maven(None, "https://somewhere")
    kotlin.repositories().google()
    kotlin.repositories().gradle_plugin_portal()
    assert kotlin.generate() == script(
        """\
repositories {
    // Use maven local
    mavenLocal()

    maven {
        url = uri("https://somewhere")
    }

    google()
    gradlePluginPortal()
}
"""
    )


def test_dependencies(kotlin: ScriptBuilder):
    kotlin.implementation_dependency("Use slf4j", Dependency.of("org.slf4j:slf4j-api", "2.7"))
    kotlin.dependencies().platform_dependency("testImplementation", None, Dependency.of("a:c", "2.0"))
    kotlin.dependencies().project_dependency("implementation", None, ":p2")
    kotlin.compile_only_dependency(None, "a:unversioned")
    assert kotlin.generate() == script(
        """\
dependencies {
    // Use slf4j
    implementation("org.slf4j:slf4j-api:2.7")

    implementation(project(":p2"))
    testImplementation(platform("a:c:2.0"))
    compileOnly("a:unversioned")
}
"""
    )


def test_legacy_assignments_use_setters(kotlin: ScriptBuilder):
    def configure_application(block: ScriptBlock) -> None:
        block.property_assignment(
            "Define the main class for the application",
            "mainClass",
            "com.example.Main",
            style=AssignmentStyle.LEGACY,
        )
        block.property_assignment("Define the application name", "applicationName", "My Application")

    kotlin.block(None, "application", configure_application)
    assert kotlin.generate() == script(
        """\
application {
    // Define the main class for the application
    mainClass.set("com.example.Main")

    // Define the application name
    applicationName = "My Application"
}
"""
    )


def test_register_tasks_and_refer_to_them_later(kotlin: ScriptBuilder):
    task = kotlin.task_registration(
        "Compile stuff",
        "compile",
        "JavaCompile",
        lambda t: t.property_assignment(None, "classpath", 12, style=AssignmentStyle.LEGACY),
    )
    kotlin.block("Use stuff", "artifacts", lambda b: b.property_assignment(None, "prop", task))
    assert kotlin.generate() == script(
        """\
// Compile stuff
val compile by tasks.registering(JavaCompile::class) {
    classpath.set(12)
}

// Use stuff
artifacts {
    prop = compile
}
"""
    )


def test_container_elements(kotlin: ScriptBuilder):
    e1 = kotlin.create_container_element("Add some thing", "foo.bar", "e1")
    e2 = kotlin.create_container_element(None, "foo.bar", "e2", "someElement")
    kotlin.create_container_element(None, "publications", "maven", element_type="MavenPublication")
    kotlin.property_assignment(None, "prop", e1)
    kotlin.property_assignment(None, "prop2", kotlin.property_expression(e2, "outputDir"))
    assert kotlin.generate() == script(
        """\
// Add some thing
val e1 by foo.bar.creating {
}

val someElement by foo.bar.creating {
}

publications.create<MavenPublication>("maven") {
}

prop = e1
prop2 = someElement.outputDir
"""
    )


def test_maps_lists_and_named_arguments(kotlin: ScriptBuilder):
    kotlin.property_assignment(None, "cathedral", {"a": 12, "b": "value"})
    kotlin.property_assignment(None, "names", ["x", 1.5, True])
    kotlin.method_invocation(None, "cathedral", kotlin.method_invocation_expression("thing", {"a": 12}, 123))
    kotlin.method_invocation(None, "things", target=kotlin.container_element_expression("configurations", "api"))
    assert kotlin.generate() == script(
        """\
cathedral = mapOf("a" to 12, "b" to "value")
names = listOf("x", 1.5, true)
cathedral(thing(a = 12, 123))
configurations["api"].things()
"""
    )


def test_task_configuration_blocks(kotlin: ScriptBuilder):
    kotlin.task_property_assignment(None, "test", "Test", "maxParallelForks", 23)
    kotlin.task_type_method_invocation("Use JUnit", "Test", "useJUnitPlatform")
    kotlin.task_method_invocation(None, "jar", None, "exclude", "**/*.tmp")
    assert kotlin.generate() == script(
        """\
tasks.withType<Test> {
    // Use JUnit
    useJUnitPlatform()
}

tasks.named<Test>("test") {
    maxParallelForks = 23
}

tasks.named("jar") {
    exclude("**/*.tmp")
}
"""
    )


@pytest.mark.parametrize(
    "value, expected",
    [
        ("", ""),
        ("foo", "foo"),
        ("'foo'", "'foo'"),
        ('"bar"', '\\"bar\\"'),
        ("foo '\\' bar", "foo '\\\\' bar"),
        ("$foo", "\\$foo"),
        ("\\$foo", "\\\\\\$foo"),
        ("a\r\nb", "a\\r\\nb"),
        ("tab\there", "tab\\there"),
    ],
)
def test_escaping_of_backslashes_quotes_and_dollars(kotlin: ScriptBuilder, value, expected):
    kotlin.property_assignment(None, "description", value)
    assert kotlin.generate() == script(f'description = "{expected}"\n')


def test_empty_mapping_argument_renders_as_empty_map(kotlin: ScriptBuilder):
    kotlin.method_invocation(None, "foo", {})
    assert kotlin.generate() == script("foo(mapOf())\n")
