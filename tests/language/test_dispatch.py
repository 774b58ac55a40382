"""Tests for language/dispatch.py module."""

from __future__ import annotations

import pytest

from exprlens.core.errors import ErrorCode, InternalError
from exprlens.expression import ast as e
from exprlens.expression.ast import NodeKind
from exprlens.language.completions import _COMPLETIONS
from exprlens.language.dispatch import KindDispatcher
from exprlens.language.symbol_at import _SYMBOLS
from tests.language.nodes import literal, read


def _kind_name(query: str, node: e.AST) -> str:
    return f"{query}:{node.kind.value}"


def _default(query: str, node: e.AST) -> str:  # noqa: ARG001
    return "default"


class TestKindDispatcher:
    """Tests for table validation and dispatch."""

    def test_given_complete_table_when_called_then_routes_by_kind(self) -> None:
        """Listed kinds get their handler, passthrough kinds the default."""
        # Given
        dispatcher: KindDispatcher[str, str] = KindDispatcher(
            "test",
            {NodeKind.PROPERTY_READ: _kind_name},
            passthrough=[k for k in NodeKind if k is not NodeKind.PROPERTY_READ],
            default=_default,
        )

        # When / Then
        assert dispatcher("q", read("a", 0)) == "q:property_read"
        assert dispatcher("q", literal(1, 0, 1)) == "default"
        assert dispatcher.handler_for(NodeKind.PIPE) is _default

    def test_given_missing_kind_when_built_then_internal_error(self) -> None:
        """A kind with no handler is caught when the table is built."""
        with pytest.raises(InternalError) as exc_info:
            KindDispatcher(
                "partial",
                {NodeKind.PROPERTY_READ: _kind_name},
                passthrough=[NodeKind.PIPE],
                default=_default,
            )

        error = exc_info.value
        assert error.code == ErrorCode.INTERNAL_ERROR
        assert "quote" in error.details["missing"]
        assert error.details["overlap"] == []

    def test_given_kind_listed_twice_when_built_then_internal_error(self) -> None:
        """A kind both handled and passed through is ambiguous."""
        with pytest.raises(InternalError) as exc_info:
            KindDispatcher(
                "overlapping",
                {NodeKind.PIPE: _kind_name},
                passthrough=list(NodeKind),
                default=_default,
            )

        assert exc_info.value.details["overlap"] == ["pipe"]
        assert exc_info.value.details["missing"] == []


class TestResolverTables:
    """The resolver tables cover every node kind."""

    @pytest.mark.parametrize("kind", list(NodeKind))
    def test_completions_table_has_handler(self, kind: NodeKind) -> None:
        """Every kind resolves to some completion handler."""
        assert callable(_COMPLETIONS.handler_for(kind))

    @pytest.mark.parametrize("kind", list(NodeKind))
    def test_symbol_table_has_handler(self, kind: NodeKind) -> None:
        """Every kind resolves to some symbol handler."""
        assert callable(_SYMBOLS.handler_for(kind))
