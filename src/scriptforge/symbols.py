"""Symbolic handles for declared container elements and tasks."""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from enum import Enum

from .errors import DanglingReferenceError

__all__ = ["Declaration", "Symbol", "SymbolKind", "SymbolRegistry"]


LOGGER = logging.getLogger(__name__)

_REGISTRY_IDS = itertools.count(1)


class SymbolKind(str, Enum):
    """What a symbol was declared as."""

    CONTAINER_ELEMENT = "container-element"
    TASK = "task"


@dataclass(frozen=True, slots=True)
class Symbol:
    """Opaque handle returned to callers when an element is declared.

    ``registry_id`` identifies the registry that issued the handle and ``index``
    the declaration inside it. ``container_path`` and ``element_name`` are kept
    for diagnostics only; rendering always goes through the registry.
    """

    registry_id: int
    index: int
    container_path: str
    element_name: str

    def __str__(self) -> str:
        return f"{self.container_path}.{self.element_name}"


@dataclass(frozen=True, slots=True)
class Declaration:
    """The resolved form of a symbol."""

    kind: SymbolKind
    container_path: str
    element_name: str
    var_name: str | None = None


class SymbolRegistry:
    """Issue symbols for declarations and resolve them at render time."""

    def __init__(self) -> None:
        self._id = next(_REGISTRY_IDS)
        self._declarations: list[Declaration] = []

    def declare(
        self,
        kind: SymbolKind,
        container_path: str,
        element_name: str,
        var_name: str | None = None,
    ) -> Symbol:
        """Record a declaration and return its handle."""

        if not container_path or not element_name:
            msg = "container path and element name must be non-empty strings"
            raise ValueError(msg)

        declaration = Declaration(kind, container_path, element_name, var_name)
        self._declarations.append(declaration)
        symbol = Symbol(self._id, len(self._declarations) - 1, container_path, element_name)
        LOGGER.debug("declared %s %s as symbol #%d", kind.value, symbol, symbol.index)
        return symbol

    def owns(self, symbol: Symbol) -> bool:
        """Whether ``symbol`` was issued by this registry."""

        return symbol.registry_id == self._id and 0 <= symbol.index < len(self._declarations)

    def resolve(self, symbol: Symbol) -> Declaration:
        """Return the declaration behind ``symbol``.

        Raises
        ------
        DanglingReferenceError
            If the symbol was not issued by this registry.
        """

        if not self.owns(symbol):
            msg = f"reference to {symbol} does not resolve to an element declared in this script"
            raise DanglingReferenceError(msg)
        return self._declarations[symbol.index]

    def __len__(self) -> int:
        return len(self._declarations)
