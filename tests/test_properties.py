from __future__ import annotations

from hypothesis import given, settings, strategies as st

from scriptforge import ScriptBuilder
from scriptforge.dialects import GroovyDialect, KotlinDialect

identifiers = st.from_regex(r"[a-z][a-zA-Z0-9]{0,8}", fullmatch=True)
comments = st.one_of(st.none(), st.text(alphabet="ab \n", max_size=12))
values = st.one_of(
    st.integers(min_value=-1000, max_value=1000),
    st.booleans(),
    st.text(alphabet=st.characters(exclude_categories=("Cc", "Cs")), max_size=10),
    st.text(alphabet="ab\n\r\t{", max_size=6),
)


CONTROL_ESCAPES = {"n": "\n", "r": "\r", "t": "\t"}


def _unescape(body: str, escapable: str) -> str:
    assert not any(control in body for control in CONTROL_ESCAPES.values())
    chars: list[str] = []
    index = 0
    while index < len(body):
        char = body[index]
        if char == "\\":
            following = body[index + 1]
            if following in CONTROL_ESCAPES:
                chars.append(CONTROL_ESCAPES[following])
            else:
                assert following in escapable
                chars.append(following)
            index += 2
            continue
        assert char not in escapable.replace("\\", "")
        chars.append(char)
        index += 1
    return "".join(chars)


@given(st.text())
@settings(max_examples=200, deadline=None)
def test_groovy_strings_round_trip(text):
    quoted = GroovyDialect().quote_string(text)
    assert quoted[0] == quoted[-1] == "'"
    assert _unescape(quoted[1:-1], "\\'") == text


@given(st.text())
@settings(max_examples=200, deadline=None)
def test_kotlin_strings_round_trip(text):
    quoted = KotlinDialect().quote_string(text)
    assert quoted[0] == quoted[-1] == '"'
    assert _unescape(quoted[1:-1], '\\"$') == text


operations = st.lists(
    st.tuples(
        st.sampled_from(["property", "method", "block", "task", "task_type", "plugin", "repository", "dependency"]),
        comments,
        identifiers,
        values,
    ),
    max_size=15,
)


def _build(dsl: str, ops) -> ScriptBuilder:
    builder = ScriptBuilder(dsl, header=["Generated"])
    for kind, comment, name, value in ops:
        if kind == "property":
            builder.property_assignment(comment, name, value)
        elif kind == "method":
            builder.method_invocation(comment, name, value)
        elif kind == "block":
            builder.block(comment, f"{name}Settings", lambda b, n=name, v=value: b.property_assignment(None, n, v))
        elif kind == "task":
            builder.task_property_assignment(comment, name, None, "enabled", value)
        elif kind == "task_type":
            builder.task_type_method_invocation(comment, "Test", name, value)
        elif kind == "plugin":
            builder.plugin(comment, f"org.example.{name}")
        elif kind == "repository":
            builder.repositories().maven_central(comment)
        else:
            builder.implementation_dependency(comment, f"org.example:{name}:1.0")
    return builder


@given(st.sampled_from(["groovy", "kotlin"]), operations)
@settings(max_examples=100, deadline=None)
def test_rendering_is_deterministic(dsl, ops):
    first = _build(dsl, ops)
    second = _build(dsl, ops)
    text = first.generate()
    assert text == first.generate()
    assert text == second.generate()


@given(st.sampled_from(["groovy", "kotlin"]), operations)
@settings(max_examples=100, deadline=None)
def test_blank_lines_never_pile_up(dsl, ops):
    lines = _build(dsl, ops).generate().split("\n")
    assert lines[-1] == ""
    body = lines[:-1]
    assert body[-1] != ""
    for previous, current in zip(body, body[1:]):
        assert not (previous == "" and current == "")
        if current == "":
            assert not previous.endswith("{")
        if current.strip() == "}":
            assert previous != ""


@given(operations)
@settings(max_examples=100, deadline=None)
def test_sections_render_in_fixed_order(ops):
    lines = _build("groovy", ops).generate().split("\n")
    headers = [line for line in lines if line in ("plugins {", "repositories {", "dependencies {")]
    order = ["plugins {", "repositories {", "dependencies {"]
    assert headers == sorted(headers, key=order.index)
    assert len(headers) == len(set(headers))


@given(st.lists(st.tuples(st.sampled_from(["a", "b", "c"]), identifiers), min_size=1, max_size=12))
@settings(max_examples=100, deadline=None)
def test_task_statements_merge_into_one_block_per_task(calls):
    builder = ScriptBuilder("groovy")
    for task_name, property_name in calls:
        builder.task_property_assignment(None, task_name, None, property_name, 1)
    text = builder.generate()

    first_use = list(dict.fromkeys(task_name for task_name, _ in calls))
    positions = [text.index(f"tasks.named('{task_name}') {{") for task_name in first_use]
    assert positions == sorted(positions)
    for task_name in first_use:
        assert text.count(f"tasks.named('{task_name}') {{") == 1


@given(identifiers, identifiers)
@settings(max_examples=50, deadline=None)
def test_identical_blocks_are_not_merged(first, second):
    builder = ScriptBuilder("groovy")
    builder.block(None, "java", lambda b: b.property_assignment(None, first, 1))
    builder.block(None, "java", lambda b: b.property_assignment(None, second, 2))
    assert builder.generate().count("java {") == 2
