"""Custom exception types raised while building or rendering scripts."""

from __future__ import annotations

__all__ = [
    "DanglingReferenceError",
    "InvalidLiteralError",
    "ScriptBuilderError",
    "ScriptSealedError",
    "UnknownDialectError",
]


class ScriptBuilderError(RuntimeError):
    """Base class for errors caused by an incorrectly built script model."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class InvalidLiteralError(ScriptBuilderError, TypeError):
    """Raised when a value cannot be represented as a script literal."""


class DanglingReferenceError(ScriptBuilderError, LookupError):
    """Raised when a symbol does not resolve to a declaration of this script."""


class ScriptSealedError(ScriptBuilderError):
    """Raised when a script is modified after it has been rendered."""


class UnknownDialectError(ScriptBuilderError, ValueError):
    """Raised when no dialect is registered under the requested name."""
