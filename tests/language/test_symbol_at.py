"""Tests for language/symbol_at.py module.

Covers:
- Member symbols for reads and calls, with the node span
- Property-write span narrowing to the assigned name
- Pipe symbols and the absolute-to-relative span conversion
- "No result" for unnamed kinds, unknown types and missing members
- Malformed pipe name spans in strict and lenient mode
"""

from __future__ import annotations

from dataclasses import replace

import pytest

from exprlens.core.errors import ErrorCode, SpanError
from exprlens.expression import ast as e
from exprlens.expression.spans import ParseSpan
from exprlens.language.symbol_at import get_expression_symbol
from exprlens.language.symbols import UNKNOWN_SYMBOL, Symbol, SymbolQuery, SymbolTable
from exprlens.language.template import TemplateSource
from tests.language.nodes import implicit, literal, name_span, read, spans


class _UnknownTypes:
    def __init__(self, scope: SymbolTable, query: SymbolQuery, source: str) -> None:
        pass

    def get_type(self, node: e.AST) -> Symbol:  # noqa: ARG002
        return UNKNOWN_SYMBOL


def _title_pipe(pipe_name: str = "uppercase", offset: int = 120) -> e.Pipe:
    # "title | <pipe_name>" at an absolute offset
    end = 8 + len(pipe_name)
    return e.Pipe(
        **spans(0, end, offset=offset),
        exp=read("title", 0, offset=offset),
        name=pipe_name,
        args=(),
        name_span=name_span(8, end, offset=offset),
    )


class TestMemberSymbols:
    """Property and method accesses."""

    def test_given_bare_name_when_lookup_then_scope_symbol(
        self, scope: SymbolTable, template: TemplateSource
    ) -> None:
        """A bare name is a member of the component."""
        # When
        result = get_expression_symbol(scope, read("title", 0), 2, template)

        # Then
        assert result is not None
        assert result.symbol is scope.get("title")
        assert result.span == ParseSpan(0, 5)

    def test_given_absolute_offset_when_lookup_then_relative_span(
        self, scope: SymbolTable, template: TemplateSource
    ) -> None:
        """Positions are absolute; the returned span is expression-relative."""
        result = get_expression_symbol(scope, read("title", 0, offset=100), 102, template)

        assert result is not None
        assert result.span == ParseSpan(0, 5)

    def test_given_member_read_when_lookup_then_type_member(
        self, scope: SymbolTable, template: TemplateSource, hero_type: Symbol
    ) -> None:
        """``hero.name`` resolves to Hero's ``name`` member."""
        tree = read("name", 5, receiver=read("hero", 0))

        result = get_expression_symbol(scope, tree, 6, template)

        assert result is not None
        assert result.symbol is hero_type.members().get("name")
        assert result.span == tree.span

    def test_given_method_call_when_lookup_then_method_member(
        self, scope: SymbolTable, template: TemplateSource
    ) -> None:
        """Method calls resolve against their receiver like reads do."""
        # Given - hero.save()
        tree = e.MethodCall(
            **spans(0, 11),
            receiver=read("hero", 0),
            name="save",
            args=(),
            name_span=name_span(5, 9),
        )

        # When
        result = get_expression_symbol(scope, tree, 6, template)

        # Then
        assert result is not None
        assert result.symbol.name == "save"
        assert result.symbol.callable
        assert result.span == ParseSpan(0, 11)

    @pytest.mark.parametrize("kind", [e.SafePropertyRead, e.SafeMethodCall])
    def test_given_safe_access_when_lookup_then_type_member(
        self, scope: SymbolTable, template: TemplateSource, kind: type[e.AST]
    ) -> None:
        """Safe navigation does not change the lookup."""
        # Given - hero?.save / hero?.save()
        extra = {"args": ()} if kind is e.SafeMethodCall else {}
        tree = kind(
            **spans(0, 10),
            receiver=read("hero", 0),
            name="save",
            name_span=name_span(6, 10),
            **extra,
        )

        # When
        result = get_expression_symbol(scope, tree, 7, template)

        # Then
        assert result is not None
        assert result.symbol.name == "save"

    def test_given_missing_member_when_lookup_then_none(
        self, scope: SymbolTable, template: TemplateSource
    ) -> None:
        """A known type without the member gives no half-filled answer."""
        tree = read("nickname", 5, receiver=read("hero", 0))

        assert get_expression_symbol(scope, tree, 6, template) is None

    def test_given_unknown_receiver_when_lookup_then_none(
        self, scope: SymbolTable, template: TemplateSource
    ) -> None:
        """An unknown receiver type means no symbol."""
        tree = read("name", 8, receiver=read("villain", 0))

        assert get_expression_symbol(scope, tree, 9, template) is None


class TestPropertyWrite:
    """The write span covers ``name = value``; only the name is reported."""

    def test_given_write_when_lookup_then_span_narrowed_to_name(
        self, scope: SymbolTable, template: TemplateSource
    ) -> None:
        """``prop = 'a value'`` spanning [10, 25) reports [10, 14)."""
        # Given
        tree = e.PropertyWrite(
            **spans(10, 25),
            receiver=implicit(10),
            name="prop",
            value=literal("a value", 17, 25),
            name_span=name_span(10, 14),
        )

        # When
        result = get_expression_symbol(scope, tree, 12, template)

        # Then
        assert result is not None
        assert result.symbol is scope.get("prop")
        assert result.span == ParseSpan(10, 14)
        assert result.span != tree.span

    def test_given_offset_in_value_when_lookup_then_value_node_answers(
        self, scope: SymbolTable, template: TemplateSource
    ) -> None:
        """The right-hand side is a node of its own."""
        tree = e.PropertyWrite(
            **spans(0, 12),
            receiver=implicit(0),
            name="prop",
            value=read("title", 7),
            name_span=name_span(0, 4),
        )

        result = get_expression_symbol(scope, tree, 9, template)

        assert result is not None
        assert result.symbol.name == "title"
        assert result.span == ParseSpan(7, 12)


class TestPipeSymbols:
    """Pipe names resolve through the pipe registry."""

    def test_given_offset_in_pipe_name_when_lookup_then_pipe_with_relative_span(
        self, scope: SymbolTable, template: TemplateSource
    ) -> None:
        """The absolute name span is shifted into expression coordinates."""
        # When
        result = get_expression_symbol(scope, _title_pipe(), 130, template)

        # Then
        assert result is not None
        assert result.symbol is template.query.get_pipes().get("uppercase")
        assert result.span == ParseSpan(8, 17)

    @pytest.mark.parametrize("offset", [125, 126, 127, 137])
    def test_given_offset_outside_pipe_name_when_lookup_then_none(
        self, scope: SymbolTable, template: TemplateSource, offset: int
    ) -> None:
        """Between expression and name, or past the end, there is no pipe symbol."""
        assert get_expression_symbol(scope, _title_pipe(), offset, template) is None

    def test_given_unregistered_pipe_when_lookup_then_none(
        self, scope: SymbolTable, template: TemplateSource
    ) -> None:
        """Unknown pipe names resolve to nothing."""
        assert get_expression_symbol(scope, _title_pipe("lowercase"), 130, template) is None

    def test_given_untyped_pipe_name_when_lookup_then_none(
        self, scope: SymbolTable, template: TemplateSource
    ) -> None:
        """A zero-width name span never contains the cursor for symbol lookup."""
        # Given - "title | " with the name not typed yet
        tree = e.Pipe(
            **spans(0, 8, offset=120),
            exp=read("title", 0, offset=120),
            name="",
            args=(),
            name_span=name_span(8, 8, offset=120),
        )

        assert get_expression_symbol(scope, tree, 127, template) is None

    def test_given_name_span_outside_node_when_strict_then_span_error(
        self, scope: SymbolTable, template: TemplateSource
    ) -> None:
        """A name span outside its pipe is an upstream defect."""
        # Given
        tree = replace(_title_pipe(), name_span=name_span(40, 49, offset=120))

        # When / Then
        with pytest.raises(SpanError) as exc_info:
            get_expression_symbol(scope, tree, 130, template)
        assert exc_info.value.code == ErrorCode.SPAN_NOT_CONTAINED
        assert exc_info.value.details["inner"] == [160, 169]

    def test_given_name_span_outside_node_when_lenient_then_none(
        self, scope: SymbolTable, template: TemplateSource
    ) -> None:
        """Lenient mode reports no symbol instead of raising."""
        tree = replace(_title_pipe(), name_span=name_span(40, 49, offset=120))

        assert get_expression_symbol(scope, tree, 130, template, strict_spans=False) is None


class TestNoSymbol:
    """Kinds that carry no single name."""

    @pytest.mark.parametrize(
        "tree",
        [
            literal(42, 0, 2),
            literal("quoted", 0, 8),
            literal(None, 0, 4),
            e.LiteralArray(**spans(0, 9), expressions=(read("title", 1), read("count", 7))),
            e.LiteralMap(
                **spans(0, 10), keys=(e.LiteralMapKey(key="a"),), values=(literal(1, 4, 5),)
            ),
        ],
        ids=["number", "string", "null", "array", "map"],
    )
    def test_given_literal_when_lookup_anywhere_then_none(
        self, scope: SymbolTable, template: TemplateSource, tree: e.AST
    ) -> None:
        """Literal nodes never report a symbol, whatever the type resolver says."""
        blind = replace(template, type_resolver_factory=_UnknownTypes)
        for offset in range(tree.source_span.start, tree.source_span.end):
            path_tail_is_literal = not any(
                child.source_span.contains(offset) for child in tree.children()
            )
            if not path_tail_is_literal:
                continue
            assert get_expression_symbol(scope, tree, offset, template) is None
            assert get_expression_symbol(scope, tree, offset, blind) is None

    def test_given_binary_operator_when_lookup_then_none(
        self, scope: SymbolTable, template: TemplateSource
    ) -> None:
        """The operator position belongs to the binary node."""
        # Given - count + 1
        tree = e.Binary(
            **spans(0, 9), operation="+", left=read("count", 0), right=literal(1, 8, 9)
        )

        assert get_expression_symbol(scope, tree, 6, template) is None

    def test_given_keyed_read_brackets_when_lookup_then_none(
        self, scope: SymbolTable, template: TemplateSource
    ) -> None:
        """Keyed access has no name of its own."""
        # Given - hero['name']
        tree = e.KeyedRead(**spans(0, 12), obj=read("hero", 0), key=literal("name", 5, 11))

        assert get_expression_symbol(scope, tree, 4, template) is None

    def test_given_zero_width_receiver_when_lookup_then_none(
        self, scope: SymbolTable, template: TemplateSource
    ) -> None:
        """Degenerate nodes are never under the cursor."""
        assert get_expression_symbol(scope, implicit(4), 4, template) is None

    def test_given_offset_outside_tree_when_lookup_then_none(
        self, scope: SymbolTable, template: TemplateSource
    ) -> None:
        """An empty path yields no symbol."""
        assert get_expression_symbol(scope, read("title", 0), 9, template) is None
