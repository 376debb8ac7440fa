"""Output dialects and lookup by name."""

from __future__ import annotations

from ..errors import UnknownDialectError
from .base import Dialect
from .groovy import GroovyDialect
from .kotlin import KotlinDialect

__all__ = [
    "DIALECTS",
    "Dialect",
    "GroovyDialect",
    "KotlinDialect",
    "get_dialect",
]


DIALECTS: dict[str, type[Dialect]] = {
    GroovyDialect.name: GroovyDialect,
    KotlinDialect.name: KotlinDialect,
}


def get_dialect(name: str | Dialect) -> Dialect:
    """Return a dialect instance for ``name`` (case-insensitive)."""

    if isinstance(name, Dialect):
        return name
    key = name.strip().lower()
    try:
        return DIALECTS[key]()
    except KeyError as exc:
        allowed = ", ".join(sorted(DIALECTS))
        raise UnknownDialectError(f"unknown dialect {name!r} (expected one of {allowed})") from exc
