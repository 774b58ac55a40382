"""Static types of expression nodes.

The resolvers only need one question answered: "what is the static type of
this receiver?". ``TypeResolver`` is that contract; ``ExpressionTypeResolver``
is the default answer, tracing member accesses through the scope the way an
editor does for completion (receiver type -> member -> member's type).

Contract:
- deterministic for a fixed (scope, tree) pair
- never mutates the tree
- returns ``UNKNOWN_SYMBOL`` (falsy) instead of raising when a type cannot be
  determined; callers fall back to the enclosing scope
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

import structlog

from exprlens.expression import ast as e
from exprlens.language.symbols import (
    UNKNOWN_SYMBOL,
    BuiltinType,
    DeclaredSymbol,
    Symbol,
    SymbolQuery,
    SymbolTable,
)

log = structlog.get_logger(__name__)

_COMPARISON_OPERATORS = frozenset({"==", "!=", "===", "!==", "<", "<=", ">", ">="})
_LOGICAL_OPERATORS = frozenset({"&&", "||"})
_ARITHMETIC_OPERATORS = frozenset({"-", "*", "/", "%"})


class TypeResolver(Protocol):
    def get_type(self, node: e.AST) -> Symbol: ...


TypeResolverFactory = Callable[[SymbolTable, SymbolQuery, str], TypeResolver]
"""Builds a resolver for ``(scope, query, source)``; called once per query."""


class ExpressionTypeResolver:
    """Default TypeResolver over a scope and the template's registries.

    Usage::

        resolver = ExpressionTypeResolver(scope, query, "app.component.html")
        receiver_type = resolver.get_type(node.receiver)
        if receiver_type:
            members = receiver_type.members()
    """

    def __init__(self, scope: SymbolTable, query: SymbolQuery, source: str = "") -> None:
        self._scope = scope
        self._query = query
        self._source = source
        self._handlers: dict[e.NodeKind, Callable[[e.AST], Symbol]] = {
            e.NodeKind.IMPLICIT_RECEIVER: self._implicit_receiver,
            e.NodeKind.PROPERTY_READ: self._member_type,
            e.NodeKind.SAFE_PROPERTY_READ: self._member_type,
            e.NodeKind.PROPERTY_WRITE: self._member_type,
            e.NodeKind.METHOD_CALL: self._method_result,
            e.NodeKind.SAFE_METHOD_CALL: self._method_result,
            e.NodeKind.FUNCTION_CALL: self._function_result,
            e.NodeKind.LITERAL_PRIMITIVE: self._literal_primitive,
            e.NodeKind.LITERAL_ARRAY: lambda _node: self._builtin(BuiltinType.ANY),
            e.NodeKind.LITERAL_MAP: lambda _node: self._builtin(BuiltinType.OBJECT),
            e.NodeKind.BINARY: self._binary,
            e.NodeKind.PREFIX_NOT: lambda _node: self._builtin(BuiltinType.BOOLEAN),
            e.NodeKind.NON_NULL_ASSERT: self._non_null_assert,
            e.NodeKind.CONDITIONAL: self._conditional,
            e.NodeKind.KEYED_WRITE: self._keyed_write,
            e.NodeKind.INTERPOLATION: lambda _node: self._builtin(BuiltinType.STRING),
            e.NodeKind.CHAIN: lambda _node: self._builtin(BuiltinType.ANY),
            e.NodeKind.KEYED_READ: lambda _node: self._builtin(BuiltinType.ANY),
            e.NodeKind.PIPE: lambda _node: self._builtin(BuiltinType.ANY),
            e.NodeKind.QUOTE: lambda _node: self._builtin(BuiltinType.ANY),
        }

    @property
    def source(self) -> str:
        return self._source

    def get_type(self, node: e.AST) -> Symbol:
        handler = self._handlers.get(node.kind)
        if handler is None:
            return UNKNOWN_SYMBOL
        return handler(node) or UNKNOWN_SYMBOL

    def _builtin(self, kind: BuiltinType) -> Symbol:
        return self._query.get_builtin_type(kind)

    def _implicit_receiver(self, node: e.AST) -> Symbol:  # noqa: ARG002
        return DeclaredSymbol(
            name="$implicit",
            kind="component",
            language="ng-template",
            member_table=self._scope,
        )

    def _lookup_member(self, receiver: e.AST, name: str) -> Symbol | None:
        receiver_type = self.get_type(receiver)
        if not receiver_type:
            return None
        member = receiver_type.members().get(name)
        if member is None:
            log.debug(
                "member_not_found",
                member=name,
                receiver_type=receiver_type.name,
                source=self._source,
            )
        return member

    def _member_type(self, node: e.AST) -> Symbol:
        assert isinstance(node, (e.PropertyRead, e.SafePropertyRead, e.PropertyWrite))
        member = self._lookup_member(node.receiver, node.name)
        if member is None or member.type is None:
            return UNKNOWN_SYMBOL
        return member.type

    def _method_result(self, node: e.AST) -> Symbol:
        assert isinstance(node, (e.MethodCall, e.SafeMethodCall))
        member = self._lookup_member(node.receiver, node.name)
        if member is None or not member.callable or member.type is None:
            return UNKNOWN_SYMBOL
        return member.type

    def _function_result(self, node: e.AST) -> Symbol:
        assert isinstance(node, e.FunctionCall)
        target = node.target
        # get_type() of a member read already yields the call result, so the
        # callable check has to look at the member itself.
        if not isinstance(target, (e.PropertyRead, e.SafePropertyRead)):
            return UNKNOWN_SYMBOL
        member = self._lookup_member(target.receiver, target.name)
        if member is None or not member.callable or member.type is None:
            return UNKNOWN_SYMBOL
        return member.type

    def _literal_primitive(self, node: e.AST) -> Symbol:
        assert isinstance(node, e.LiteralPrimitive)
        value = node.value
        if value is None:
            return self._builtin(BuiltinType.NULL)
        # bool before int: bool is an int subclass
        if isinstance(value, bool):
            return self._builtin(BuiltinType.BOOLEAN)
        if isinstance(value, (int, float)):
            return self._builtin(BuiltinType.NUMBER)
        return self._builtin(BuiltinType.STRING)

    def _binary(self, node: e.AST) -> Symbol:
        assert isinstance(node, e.Binary)
        op = node.operation
        if op in _COMPARISON_OPERATORS or op in _LOGICAL_OPERATORS:
            return self._builtin(BuiltinType.BOOLEAN)
        if op in _ARITHMETIC_OPERATORS:
            return self._builtin(BuiltinType.NUMBER)
        if op == "+":
            string = self._builtin(BuiltinType.STRING)
            number = self._builtin(BuiltinType.NUMBER)
            left = self.get_type(node.left)
            right = self.get_type(node.right)
            if left is string or right is string:
                return string
            if left is number and right is number:
                return number
        return self._builtin(BuiltinType.ANY)

    def _non_null_assert(self, node: e.AST) -> Symbol:
        assert isinstance(node, e.NonNullAssert)
        return self.get_type(node.expression)

    def _conditional(self, node: e.AST) -> Symbol:
        assert isinstance(node, e.Conditional)
        return self.get_type(node.true_exp)

    def _keyed_write(self, node: e.AST) -> Symbol:
        assert isinstance(node, e.KeyedWrite)
        return self.get_type(node.value)
