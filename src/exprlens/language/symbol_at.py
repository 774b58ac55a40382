"""The named symbol under a cursor inside a template expression.

Only nodes that carry an identifier can answer: property and method accesses
(looked up as members of the receiver's static type) and pipes (looked up in
the pipe registry). Zero-width nodes are never "under the cursor".

Returned spans are ``ParseSpan``s, relative to the start of the value
expression.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from exprlens.core.errors import SpanError
from exprlens.expression import ast as e
from exprlens.expression.ast import NodeKind
from exprlens.expression.spans import ParseSpan, to_expression_relative
from exprlens.language.dispatch import KindDispatcher
from exprlens.language.path_finder import find_path
from exprlens.language.symbols import Symbol, SymbolTable
from exprlens.language.template import TemplateSource
from exprlens.language.type_resolver import TypeResolver

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class SymbolAt:
    """A resolved symbol and the expression-relative span it was found at."""

    symbol: Symbol
    span: ParseSpan


@dataclass(frozen=True)
class _SymbolQuery:
    scope: SymbolTable
    position: int
    template: TemplateSource
    types: TypeResolver
    strict_spans: bool


def _member(query: _SymbolQuery, receiver: e.AST, name: str) -> Symbol | None:
    receiver_type = query.types.get_type(receiver)
    if not receiver_type:
        return None
    return receiver_type.members().get(name)


def _pair(symbol: Symbol | None, span: ParseSpan | None) -> SymbolAt | None:
    # A member that does not exist on a known type is still "no result".
    if symbol is None or span is None:
        return None
    return SymbolAt(symbol=symbol, span=span)


def _no_symbol(query: _SymbolQuery, node: e.AST) -> SymbolAt | None:  # noqa: ARG001
    return None


def _member_access(query: _SymbolQuery, node: e.AST) -> SymbolAt | None:
    assert isinstance(node, (e.MethodCall, e.PropertyRead, e.SafeMethodCall, e.SafePropertyRead))
    return _pair(_member(query, node.receiver, node.name), node.span)


def _property_write(query: _SymbolQuery, node: e.AST) -> SymbolAt | None:
    assert isinstance(node, e.PropertyWrite)
    # The write spans `name=value`; the value is a nested node of its own.
    start = node.span.start
    return _pair(
        _member(query, node.receiver, node.name),
        ParseSpan(start, start + len(node.name)),
    )


def _pipe(query: _SymbolQuery, node: e.AST) -> SymbolAt | None:
    assert isinstance(node, e.Pipe)
    if not node.source_span.encloses(node.name_span):
        error = SpanError.not_contained(
            "pipe name span", node.name_span.as_tuple(), node.source_span.as_tuple()
        )
        if query.strict_spans:
            raise error
        log.warning("malformed_span", error=error.error_name, **error.details)
        return None

    if node.name_span.is_empty or not node.name_span.contains(query.position):
        return None

    symbol = query.template.query.get_pipes().get(node.name)
    span = to_expression_relative(node.name_span, source_span=node.source_span, span=node.span)
    return _pair(symbol, span)


_SYMBOLS: KindDispatcher[_SymbolQuery, SymbolAt | None] = KindDispatcher(
    "symbol_at",
    {
        NodeKind.METHOD_CALL: _member_access,
        NodeKind.PROPERTY_READ: _member_access,
        NodeKind.SAFE_METHOD_CALL: _member_access,
        NodeKind.SAFE_PROPERTY_READ: _member_access,
        NodeKind.PROPERTY_WRITE: _property_write,
        NodeKind.PIPE: _pipe,
    },
    passthrough=(
        NodeKind.BINARY,
        NodeKind.CHAIN,
        NodeKind.CONDITIONAL,
        NodeKind.FUNCTION_CALL,
        NodeKind.IMPLICIT_RECEIVER,
        NodeKind.INTERPOLATION,
        NodeKind.KEYED_READ,
        NodeKind.KEYED_WRITE,
        NodeKind.LITERAL_ARRAY,
        NodeKind.LITERAL_MAP,
        NodeKind.LITERAL_PRIMITIVE,
        NodeKind.PREFIX_NOT,
        NodeKind.NON_NULL_ASSERT,
        NodeKind.QUOTE,
    ),
    default=_no_symbol,
)


def get_expression_symbol(
    scope: SymbolTable,
    ast: e.Expression,
    position: int,
    template: TemplateSource,
    *,
    strict_spans: bool = True,
) -> SymbolAt | None:
    """Retrieve the expression symbol at a position in a template.

    Args:
        scope: Symbols in scope of the template expression.
        ast: Expression tree (absolute source spans).
        position: Absolute location in the template to retrieve the symbol at.
        template: Registries and type-resolver factory for the template.
        strict_spans: Raise SpanError on a pipe name span outside its node;
            when False, log a warning and return None.

    Returns:
        The symbol and its expression-relative span, or None.
    """
    path = find_path(ast, position, exclude_empty=True)
    tail = path.tail
    if tail is None:
        log.debug("expression_path_empty", position=position, source=template.source)
        return None

    query = _SymbolQuery(
        scope=scope,
        position=position,
        template=template,
        types=template.type_resolver(scope),
        strict_spans=strict_spans,
    )
    result = _SYMBOLS(query, tail)
    if result is None:
        log.debug("symbol_unresolved", position=position, kind=tail.kind.value)
        return None

    log.debug(
        "symbol_resolved",
        position=position,
        kind=tail.kind.value,
        symbol=result.symbol.name,
        span=result.span.as_tuple(),
    )
    return result
