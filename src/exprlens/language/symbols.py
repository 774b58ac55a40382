"""Symbols, symbol tables and the registries resolvers query.

Scope construction and type inference live outside this package; they hand
their results over through the protocols below. Member lookup is a pure
function of a symbol's static type: nothing here looks at runtime values.

The in-memory implementations (``DeclaredSymbol``, ``MapSymbolTable``,
``StaticSymbolQuery``) are what the document loader and the tests build on;
any object satisfying the protocols works with the resolvers.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol, runtime_checkable


class BuiltinType(str, Enum):
    """Pseudo-types with no declaration in user code."""

    ANY = "any"
    UNBOUND = "unbound"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    NULL = "null"
    UNDEFINED = "undefined"
    OBJECT = "object"


@runtime_checkable
class SymbolTable(Protocol):
    """Name -> symbol mapping (a scope, a type's members, a pipe registry)."""

    @property
    def size(self) -> int: ...

    def get(self, key: str) -> Symbol | None: ...

    def has(self, key: str) -> bool: ...

    def values(self) -> Sequence[Symbol]: ...


@runtime_checkable
class Symbol(Protocol):
    """A named entity visible to template expressions.

    ``type`` is the symbol's static type; for callable symbols it is the type
    of the call's result. A falsy symbol means "type unknown".
    """

    name: str
    kind: str
    language: str
    type: Symbol | None
    container: Symbol | None
    public: bool
    callable: bool
    nullable: bool
    documentation: str

    def members(self) -> SymbolTable: ...


class SymbolQuery(Protocol):
    """Registries that are global to a template: pipes and builtin types."""

    def get_pipes(self) -> SymbolTable: ...

    def get_builtin_type(self, kind: BuiltinType) -> Symbol: ...


class MapSymbolTable:
    """SymbolTable over a dict; later symbols with the same name win."""

    __slots__ = ("_symbols",)

    def __init__(self, symbols: Iterable[Symbol] = ()) -> None:
        self._symbols: dict[str, Symbol] = {s.name: s for s in symbols}

    @property
    def size(self) -> int:
        return len(self._symbols)

    def get(self, key: str) -> Symbol | None:
        return self._symbols.get(key)

    def has(self, key: str) -> bool:
        return key in self._symbols

    def values(self) -> list[Symbol]:
        return list(self._symbols.values())

    def __repr__(self) -> str:
        return f"MapSymbolTable({sorted(self._symbols)!r})"


EMPTY_SYMBOL_TABLE: SymbolTable = MapSymbolTable()


@dataclass(eq=False)
class DeclaredSymbol:
    """Plain symbol record.

    Members come either from ``member_table`` or, for types that refer to
    themselves or to types declared later, from a ``member_factory`` called
    on each ``members()`` lookup.
    """

    name: str
    kind: str
    type: Symbol | None = None
    language: str = "typescript"
    container: Symbol | None = None
    public: bool = True
    callable: bool = False
    nullable: bool = False
    documentation: str = ""
    member_table: SymbolTable = field(default=EMPTY_SYMBOL_TABLE)
    member_factory: Callable[[], SymbolTable] | None = field(default=None, repr=False)

    def members(self) -> SymbolTable:
        if self.member_factory is not None:
            return self.member_factory()
        return self.member_table


class _UnknownSymbol:
    """Sentinel for "the type could not be determined". Always falsy."""

    __slots__ = ()

    name = "unknown"
    kind = "unknown"
    language = "ng-template"
    type = None
    container = None
    public = True
    callable = False
    nullable = False
    documentation = ""

    def members(self) -> SymbolTable:
        return EMPTY_SYMBOL_TABLE

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNKNOWN_SYMBOL"


UNKNOWN_SYMBOL: Symbol = _UnknownSymbol()


class StaticSymbolQuery:
    """SymbolQuery backed by a fixed pipe table and builtin-type map.

    Builtins without an explicit entry resolve to a member-less symbol named
    after the builtin, so ``get_builtin_type`` never fails.
    """

    def __init__(
        self,
        pipes: SymbolTable = EMPTY_SYMBOL_TABLE,
        builtins: Mapping[BuiltinType, Symbol] | None = None,
    ) -> None:
        self._pipes = pipes
        self._builtins: dict[BuiltinType, Symbol] = {
            kind: DeclaredSymbol(name=kind.value, kind="type", language="typescript")
            for kind in BuiltinType
        }
        self._builtins.update(builtins or {})

    def get_pipes(self) -> SymbolTable:
        return self._pipes

    def get_builtin_type(self, kind: BuiltinType) -> Symbol:
        return self._builtins[kind]
