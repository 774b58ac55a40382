"""Expression-position resolution: completions and symbol-under-cursor."""

from exprlens.language.completions import get_expression_completions
from exprlens.language.path_finder import AstPath, find_path
from exprlens.language.symbol_at import SymbolAt, get_expression_symbol
from exprlens.language.symbols import (
    EMPTY_SYMBOL_TABLE,
    UNKNOWN_SYMBOL,
    BuiltinType,
    DeclaredSymbol,
    MapSymbolTable,
    StaticSymbolQuery,
    Symbol,
    SymbolQuery,
    SymbolTable,
)
from exprlens.language.template import TemplateSource
from exprlens.language.type_resolver import ExpressionTypeResolver, TypeResolver

__all__ = [
    # Queries
    "find_path",
    "AstPath",
    "get_expression_completions",
    "get_expression_symbol",
    "SymbolAt",
    # Symbols
    "Symbol",
    "SymbolTable",
    "SymbolQuery",
    "BuiltinType",
    "DeclaredSymbol",
    "MapSymbolTable",
    "StaticSymbolQuery",
    "EMPTY_SYMBOL_TABLE",
    "UNKNOWN_SYMBOL",
    # Context
    "TemplateSource",
    "TypeResolver",
    "ExpressionTypeResolver",
]
