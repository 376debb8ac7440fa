"""Value nodes that can appear as arguments or assigned values in a script."""

from __future__ import annotations

import math
import re
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Union

from .errors import InvalidLiteralError
from .symbols import Symbol

__all__ = [
    "ContainerElementPath",
    "ElementRef",
    "Expression",
    "Literal",
    "MethodCall",
    "PropertyPath",
    "as_expression",
    "is_expression",
    "iter_references",
]

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


@dataclass(frozen=True, slots=True)
class Literal:
    """A string, number, boolean, ordered mapping or list.

    Mappings and lists are validated recursively and frozen, so a literal can be
    shared between statements without being changed behind their back.
    """

    value: Any

    def __post_init__(self) -> None:
        _ensure_renderable(self.value, path="value")
        object.__setattr__(self, "value", _freeze(self.value))


@dataclass(frozen=True, slots=True)
class MethodCall:
    """``name(args...)``, optionally invoked on ``target``."""

    name: str
    args: tuple[Expression, ...] = ()
    target: Expression | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            msg = "method name must be a non-empty string"
            raise ValueError(msg)
        args = tuple(self.args)
        for index, arg in enumerate(args):
            if not is_expression(arg):
                msg = f"argument {index} of {self.name}() is not an expression: {arg!r}"
                raise InvalidLiteralError(msg)
        if self.target is not None and not is_expression(self.target):
            msg = f"target of {self.name}() is not an expression: {self.target!r}"
            raise InvalidLiteralError(msg)
        object.__setattr__(self, "args", args)


@dataclass(frozen=True, slots=True)
class PropertyPath:
    """``receiver.name``."""

    receiver: Expression
    name: str

    def __post_init__(self) -> None:
        if not is_expression(self.receiver):
            msg = f"property receiver is not an expression: {self.receiver!r}"
            raise InvalidLiteralError(msg)
        if not isinstance(self.name, str) or not self.name:
            msg = "property name must be a non-empty string"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class ElementRef:
    """Reference to an element declared earlier in the same script."""

    symbol: Symbol


@dataclass(frozen=True, slots=True)
class ContainerElementPath:
    """Reference to a container element by name, without a declaration."""

    container: str
    element: str


Expression = Union[Literal, MethodCall, PropertyPath, ElementRef, ContainerElementPath]

_EXPRESSION_TYPES = (Literal, MethodCall, PropertyPath, ElementRef, ContainerElementPath)


def is_expression(value: Any) -> bool:
    return isinstance(value, _EXPRESSION_TYPES)


def as_expression(value: Any, *, context: str | None = None) -> Expression:
    """Coerce ``value`` into an expression.

    Expressions pass through, symbols become :class:`ElementRef` and anything
    else is wrapped in a :class:`Literal`. ``context`` describes the statement
    being built and is prepended to error messages.
    """

    if is_expression(value):
        return value
    if isinstance(value, Symbol):
        return ElementRef(value)
    try:
        return Literal(value)
    except InvalidLiteralError as exc:
        if context is None:
            raise
        raise InvalidLiteralError(f"{context}: {exc}") from exc


def _ensure_renderable(value: Any, *, path: str) -> None:
    if isinstance(value, Mapping):
        for key, inner in value.items():
            if not isinstance(key, str) or not key:
                msg = f"{path} keys must be non-empty strings"
                raise InvalidLiteralError(msg)
            if not _IDENTIFIER.fullmatch(key):
                msg = f"{path} key {key!r} is not a valid identifier"
                raise InvalidLiteralError(msg)
            _ensure_renderable(inner, path=f"{path}.{key}")
        return

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        for index, item in enumerate(value):
            _ensure_renderable(item, path=f"{path}[{index}]")
        return

    if isinstance(value, (bool, str, Symbol)) or is_expression(value):
        return

    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            msg = f"{path} contains non-finite float values"
            raise InvalidLiteralError(msg)
        return

    msg = f"{path} contains unsupported value type {type(value).__name__}"
    raise InvalidLiteralError(msg)


def _freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(inner) for key, inner in value.items()})

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return tuple(_freeze(inner) for inner in value)

    if isinstance(value, Symbol):
        return ElementRef(value)

    return value


def iter_references(expression: Any) -> Iterator[ElementRef]:
    """Yield every :class:`ElementRef` nested inside ``expression``."""

    if isinstance(expression, ElementRef):
        yield expression
    elif isinstance(expression, Literal):
        yield from iter_references(expression.value)
    elif isinstance(expression, MethodCall):
        if expression.target is not None:
            yield from iter_references(expression.target)
        for arg in expression.args:
            yield from iter_references(arg)
    elif isinstance(expression, PropertyPath):
        yield from iter_references(expression.receiver)
    elif isinstance(expression, Mapping):
        for inner in expression.values():
            yield from iter_references(inner)
    elif isinstance(expression, tuple):
        for inner in expression:
            yield from iter_references(inner)
