"""Shared symbols for resolver tests.

The scope models a component with ``title: string``, ``count: number``,
``hero: Hero`` and a ``prop`` field; ``Hero`` has ``name`` and a callable
``save()``. Pipes ``uppercase`` and ``date`` are registered, and ``any`` has a
single member ``toString``.
"""

from __future__ import annotations

import pytest

from exprlens.language.symbols import (
    BuiltinType,
    DeclaredSymbol,
    MapSymbolTable,
    StaticSymbolQuery,
    Symbol,
    SymbolTable,
)
from exprlens.language.template import TemplateSource


@pytest.fixture
def builtins() -> dict[BuiltinType, Symbol]:
    any_type = DeclaredSymbol(
        name="any",
        kind="type",
        member_table=MapSymbolTable(
            [DeclaredSymbol(name="toString", kind="method", callable=True)]
        ),
    )
    result: dict[BuiltinType, Symbol] = {
        kind: DeclaredSymbol(name=kind.value, kind="type") for kind in BuiltinType
    }
    result[BuiltinType.ANY] = any_type
    return result


@pytest.fixture
def hero_type(builtins: dict[BuiltinType, Symbol]) -> DeclaredSymbol:
    return DeclaredSymbol(
        name="Hero",
        kind="type",
        member_table=MapSymbolTable(
            [
                DeclaredSymbol(name="name", kind="property", type=builtins[BuiltinType.STRING]),
                DeclaredSymbol(
                    name="save",
                    kind="method",
                    type=builtins[BuiltinType.BOOLEAN],
                    callable=True,
                ),
            ]
        ),
    )


@pytest.fixture
def scope(builtins: dict[BuiltinType, Symbol], hero_type: DeclaredSymbol) -> SymbolTable:
    return MapSymbolTable(
        [
            DeclaredSymbol(name="title", kind="property", type=builtins[BuiltinType.STRING]),
            DeclaredSymbol(name="count", kind="property", type=builtins[BuiltinType.NUMBER]),
            DeclaredSymbol(name="hero", kind="property", type=hero_type),
            DeclaredSymbol(name="prop", kind="property", type=builtins[BuiltinType.STRING]),
        ]
    )


@pytest.fixture
def pipes(builtins: dict[BuiltinType, Symbol]) -> SymbolTable:
    return MapSymbolTable(
        [
            DeclaredSymbol(
                name="uppercase", kind="pipe", type=builtins[BuiltinType.STRING], callable=True
            ),
            DeclaredSymbol(
                name="date", kind="pipe", type=builtins[BuiltinType.STRING], callable=True
            ),
        ]
    )


@pytest.fixture
def template(pipes: SymbolTable, builtins: dict[BuiltinType, Symbol]) -> TemplateSource:
    return TemplateSource(
        query=StaticSymbolQuery(pipes=pipes, builtins=builtins),
        source="app.component.html",
    )
