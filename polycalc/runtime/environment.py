from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping, Optional

from polycalc.errors import EnvironmentFrozenError, UnknownSymbolError
from polycalc.runtime.symbols import Constant, SymbolDefinition
from polycalc.types.value import TypedValue

logger = logging.getLogger(__name__)


class Environment:
    """Global symbol table. Mutable while a calculator is being set up,
    read-only once frozen."""

    def __init__(self):
        self._symbols: dict[str, SymbolDefinition] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def set_global_symbol(self, name: str, definition: SymbolDefinition) -> SymbolDefinition:
        if self._frozen:
            raise EnvironmentFrozenError(f"Cannot define {name!r}: environment is frozen")
        if name in self._symbols:
            logger.debug("redefining symbol %s", name)
        self._symbols[name] = definition
        return definition

    def set_global_constant(self, name: str, value: TypedValue) -> SymbolDefinition:
        return self.set_global_symbol(name, Constant(value))

    def get(self, name: str) -> Optional[SymbolDefinition]:
        return self._symbols.get(name)

    def lookup(self, name: str) -> SymbolDefinition:
        definition = self._symbols.get(name)
        if definition is None:
            raise UnknownSymbolError(f"Unknown symbol {name!r}")
        return definition

    def freeze(self) -> Environment:
        self._frozen = True
        return self

    @property
    def symbols(self) -> Mapping[str, SymbolDefinition]:
        return MappingProxyType(self._symbols)

    def __contains__(self, name: str) -> bool:
        return name in self._symbols
