"""Completion candidates for a cursor inside a template expression.

The tail of the path under the cursor decides which table of names applies:

- at the start of a fresh expression: the template scope
- after ``receiver.``: the members of the receiver's static type
- in pipe-name position (``exp | <here>``): the pipe registry
- inside a quote: members of ``any``
- on an interpolation boundary: nothing
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from exprlens.expression import ast as e
from exprlens.expression.ast import NodeKind
from exprlens.language.dispatch import KindDispatcher
from exprlens.language.path_finder import find_path
from exprlens.language.symbols import BuiltinType, Symbol, SymbolTable
from exprlens.language.template import TemplateSource
from exprlens.language.type_resolver import TypeResolver

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class _CompletionQuery:
    scope: SymbolTable
    position: int
    template: TemplateSource
    types: TypeResolver


def _outer_scope(query: _CompletionQuery, node: e.AST) -> SymbolTable | None:  # noqa: ARG001
    return query.scope


def _no_completions(query: _CompletionQuery, node: e.AST) -> SymbolTable | None:  # noqa: ARG001
    return None


def _receiver_members(query: _CompletionQuery, node: e.AST) -> SymbolTable | None:
    assert isinstance(node, (e.PropertyRead, e.PropertyWrite, e.SafePropertyRead, e.SafeMethodCall))
    receiver_type = query.types.get_type(node.receiver)
    return receiver_type.members() if receiver_type else query.scope


def _pipe(query: _CompletionQuery, node: e.AST) -> SymbolTable | None:
    assert isinstance(node, e.Pipe)
    position = query.position
    # Between the piped expression and the first argument a pipe name is expected.
    if position >= node.exp.source_span.end and (
        not node.args or position < node.args[0].source_span.start
    ):
        return query.template.query.get_pipes()
    return query.scope


def _quote(query: _CompletionQuery, node: e.AST) -> SymbolTable | None:  # noqa: ARG001
    return query.template.query.get_builtin_type(BuiltinType.ANY).members()


_COMPLETIONS: KindDispatcher[_CompletionQuery, SymbolTable | None] = KindDispatcher(
    "completions",
    {
        NodeKind.INTERPOLATION: _no_completions,
        NodeKind.PIPE: _pipe,
        NodeKind.PROPERTY_READ: _receiver_members,
        NodeKind.PROPERTY_WRITE: _receiver_members,
        NodeKind.SAFE_METHOD_CALL: _receiver_members,
        NodeKind.SAFE_PROPERTY_READ: _receiver_members,
        NodeKind.QUOTE: _quote,
    },
    passthrough=(
        NodeKind.BINARY,
        NodeKind.CHAIN,
        NodeKind.CONDITIONAL,
        NodeKind.FUNCTION_CALL,
        NodeKind.IMPLICIT_RECEIVER,
        NodeKind.KEYED_READ,
        NodeKind.KEYED_WRITE,
        NodeKind.LITERAL_ARRAY,
        NodeKind.LITERAL_MAP,
        NodeKind.LITERAL_PRIMITIVE,
        NodeKind.METHOD_CALL,
        NodeKind.PREFIX_NOT,
        NodeKind.NON_NULL_ASSERT,
    ),
    default=_outer_scope,
)


def get_expression_completions(
    scope: SymbolTable,
    ast: e.Expression,
    position: int,
    template: TemplateSource,
) -> list[Symbol] | None:
    """Symbols to offer for completion at ``position``.

    Args:
        scope: Symbols visible to the template expression.
        ast: Expression tree (absolute source spans).
        position: Absolute cursor offset.
        template: Registries and type-resolver factory for the template.

    Returns:
        The candidate symbols, or None when nothing applies here (the caller
        falls back to its own defaults, e.g. keywords).
    """
    path = find_path(ast, position)
    tail = path.tail
    if tail is None:
        log.debug("expression_path_empty", position=position, source=template.source)
        return None

    query = _CompletionQuery(
        scope=scope,
        position=position,
        template=template,
        types=template.type_resolver(scope),
    )
    table = _COMPLETIONS(query, tail)
    if table is None:
        log.debug("completions_suppressed", position=position, kind=tail.kind.value)
        return None

    symbols = list(table.values())
    log.debug(
        "completions_resolved",
        position=position,
        kind=tail.kind.value,
        count=len(symbols),
        source=template.source,
    )
    return symbols
