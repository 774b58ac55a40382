"""Expression tree for template interpolation/binding expressions.

The tree is produced by an external expression parser; this module only
defines its shape. Every node carries two spans of the same extent in two
coordinate systems (see ``exprlens.expression.spans``):

- ``span``: relative to the start of the value expression
- ``source_span``: absolute offsets into the template document

Nodes that carry an identifier (property/method accesses, pipes) also carry
a ``name_span`` covering just the identifier, in absolute coordinates.

Nodes are immutable and compare by identity, so a node can be looked up in a
path even when a structurally equal node exists elsewhere in the tree.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from exprlens.expression.spans import AbsoluteSourceSpan, ParseSpan


class NodeKind(str, Enum):
    """Syntactic kind of an expression node."""

    BINARY = "binary"
    CHAIN = "chain"
    CONDITIONAL = "conditional"
    FUNCTION_CALL = "function_call"
    IMPLICIT_RECEIVER = "implicit_receiver"
    INTERPOLATION = "interpolation"
    KEYED_READ = "keyed_read"
    KEYED_WRITE = "keyed_write"
    LITERAL_ARRAY = "literal_array"
    LITERAL_MAP = "literal_map"
    LITERAL_PRIMITIVE = "literal_primitive"
    METHOD_CALL = "method_call"
    PIPE = "pipe"
    PREFIX_NOT = "prefix_not"
    NON_NULL_ASSERT = "non_null_assert"
    PROPERTY_READ = "property_read"
    PROPERTY_WRITE = "property_write"
    QUOTE = "quote"
    SAFE_METHOD_CALL = "safe_method_call"
    SAFE_PROPERTY_READ = "safe_property_read"


@dataclass(frozen=True, eq=False)
class AST:
    """Base class for all expression nodes."""

    kind: ClassVar[NodeKind]

    span: ParseSpan
    source_span: AbsoluteSourceSpan

    def children(self) -> Iterator[AST]:
        """Direct sub-expressions in source order."""
        return iter(())


# Receivers and member access


@dataclass(frozen=True, eq=False)
class ImplicitReceiver(AST):
    """The component context an unqualified name is read from (zero width)."""

    kind = NodeKind.IMPLICIT_RECEIVER


@dataclass(frozen=True, eq=False)
class PropertyRead(AST):
    kind = NodeKind.PROPERTY_READ

    receiver: AST
    name: str
    name_span: AbsoluteSourceSpan

    def children(self) -> Iterator[AST]:
        yield self.receiver


@dataclass(frozen=True, eq=False)
class SafePropertyRead(AST):
    kind = NodeKind.SAFE_PROPERTY_READ

    receiver: AST
    name: str
    name_span: AbsoluteSourceSpan

    def children(self) -> Iterator[AST]:
        yield self.receiver


@dataclass(frozen=True, eq=False)
class PropertyWrite(AST):
    """``name = value``; the span covers both sides."""

    kind = NodeKind.PROPERTY_WRITE

    receiver: AST
    name: str
    value: AST
    name_span: AbsoluteSourceSpan

    def children(self) -> Iterator[AST]:
        yield self.receiver
        yield self.value


@dataclass(frozen=True, eq=False)
class MethodCall(AST):
    kind = NodeKind.METHOD_CALL

    receiver: AST
    name: str
    args: tuple[AST, ...]
    name_span: AbsoluteSourceSpan

    def children(self) -> Iterator[AST]:
        yield self.receiver
        yield from self.args


@dataclass(frozen=True, eq=False)
class SafeMethodCall(AST):
    kind = NodeKind.SAFE_METHOD_CALL

    receiver: AST
    name: str
    args: tuple[AST, ...]
    name_span: AbsoluteSourceSpan

    def children(self) -> Iterator[AST]:
        yield self.receiver
        yield from self.args


@dataclass(frozen=True, eq=False)
class FunctionCall(AST):
    kind = NodeKind.FUNCTION_CALL

    target: AST
    args: tuple[AST, ...]

    def children(self) -> Iterator[AST]:
        yield self.target
        yield from self.args


@dataclass(frozen=True, eq=False)
class KeyedRead(AST):
    kind = NodeKind.KEYED_READ

    obj: AST
    key: AST

    def children(self) -> Iterator[AST]:
        yield self.obj
        yield self.key


@dataclass(frozen=True, eq=False)
class KeyedWrite(AST):
    kind = NodeKind.KEYED_WRITE

    obj: AST
    key: AST
    value: AST

    def children(self) -> Iterator[AST]:
        yield self.obj
        yield self.key
        yield self.value


@dataclass(frozen=True, eq=False)
class NonNullAssert(AST):
    kind = NodeKind.NON_NULL_ASSERT

    expression: AST

    def children(self) -> Iterator[AST]:
        yield self.expression


# Operators


@dataclass(frozen=True, eq=False)
class Binary(AST):
    kind = NodeKind.BINARY

    operation: str
    left: AST
    right: AST

    def children(self) -> Iterator[AST]:
        yield self.left
        yield self.right


@dataclass(frozen=True, eq=False)
class PrefixNot(AST):
    kind = NodeKind.PREFIX_NOT

    expression: AST

    def children(self) -> Iterator[AST]:
        yield self.expression


@dataclass(frozen=True, eq=False)
class Conditional(AST):
    kind = NodeKind.CONDITIONAL

    condition: AST
    true_exp: AST
    false_exp: AST

    def children(self) -> Iterator[AST]:
        yield self.condition
        yield self.true_exp
        yield self.false_exp


@dataclass(frozen=True, eq=False)
class Chain(AST):
    """``a; b`` statement sequence (event bindings)."""

    kind = NodeKind.CHAIN

    expressions: tuple[AST, ...]

    def children(self) -> Iterator[AST]:
        yield from self.expressions


@dataclass(frozen=True, eq=False)
class Pipe(AST):
    """``exp | name:arg0:arg1``."""

    kind = NodeKind.PIPE

    exp: AST
    name: str
    args: tuple[AST, ...]
    name_span: AbsoluteSourceSpan

    def children(self) -> Iterator[AST]:
        yield self.exp
        yield from self.args


# Literals


@dataclass(frozen=True, eq=False)
class LiteralPrimitive(AST):
    kind = NodeKind.LITERAL_PRIMITIVE

    value: str | int | float | bool | None


@dataclass(frozen=True, eq=False)
class LiteralArray(AST):
    kind = NodeKind.LITERAL_ARRAY

    expressions: tuple[AST, ...]

    def children(self) -> Iterator[AST]:
        yield from self.expressions


@dataclass(frozen=True, slots=True)
class LiteralMapKey:
    key: str
    quoted: bool = False


@dataclass(frozen=True, eq=False)
class LiteralMap(AST):
    kind = NodeKind.LITERAL_MAP

    keys: tuple[LiteralMapKey, ...]
    values: tuple[AST, ...]

    def children(self) -> Iterator[AST]:
        yield from self.values


# Template-level constructs


@dataclass(frozen=True, eq=False)
class Interpolation(AST):
    """``text {{ a }} text {{ b }}``; ``strings`` surround ``expressions``."""

    kind = NodeKind.INTERPOLATION

    strings: tuple[str, ...]
    expressions: tuple[AST, ...]

    def children(self) -> Iterator[AST]:
        yield from self.expressions


@dataclass(frozen=True, eq=False)
class Quote(AST):
    """``prefix:uninterpreted`` escape to a foreign expression language."""

    kind = NodeKind.QUOTE

    prefix: str
    uninterpreted_expression: str
    location: str


@dataclass(frozen=True, eq=False)
class ASTWithSource:
    """A root expression together with the text it was parsed from.

    Carries provenance only; it is not an expression kind and path search
    looks straight through it.
    """

    ast: AST
    source: str | None
    location: str
    absolute_offset: int

    @property
    def span(self) -> ParseSpan:
        return ParseSpan(0, len(self.source or ""))

    @property
    def source_span(self) -> AbsoluteSourceSpan:
        return AbsoluteSourceSpan(
            self.absolute_offset, self.absolute_offset + len(self.source or "")
        )

    def children(self) -> Iterator[AST]:
        yield self.ast


Expression = AST | ASTWithSource
"""Anything a resolver accepts as the root of a query."""
