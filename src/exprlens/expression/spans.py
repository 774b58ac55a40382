"""Source spans for template expressions.

Two coordinate systems are in play and are kept apart by type:

- ``AbsoluteSourceSpan``: offsets into the whole template document. Cursor
  positions handed to the resolvers are absolute, and path search compares
  them against a node's ``source_span``.
- ``ParseSpan``: offsets relative to the start of the value expression (for
  ``{{ a | b }}`` offset 0 is the ``a``). Spans reported back to callers by
  the symbol resolver use this system.

Both are half-open ``[start, end)``. A degenerate span (``start == end``)
contains exactly its own offset, so zero-width nodes such as the implicit
receiver can still be matched when empty nodes are allowed in a path.
"""

from __future__ import annotations

from dataclasses import dataclass

from exprlens.core.errors import SpanError


@dataclass(frozen=True, slots=True)
class _Span:
    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise SpanError.inverted(self.start, self.end)

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    def contains(self, offset: int) -> bool:
        if self.is_empty:
            return offset == self.start
        return self.start <= offset < self.end

    def encloses(self, other: _Span) -> bool:
        """True if ``other`` lies within this span (same coordinate system)."""
        return self.start <= other.start and other.end <= self.end

    def as_tuple(self) -> tuple[int, int]:
        return (self.start, self.end)


@dataclass(frozen=True, slots=True)
class ParseSpan(_Span):
    """Span relative to the start of the value expression."""

    def encloses(self, other: _Span) -> bool:
        if not isinstance(other, ParseSpan):
            raise TypeError(f"Cannot compare ParseSpan with {type(other).__name__}")
        return _Span.encloses(self, other)


@dataclass(frozen=True, slots=True)
class AbsoluteSourceSpan(_Span):
    """Span in absolute document offsets."""

    def encloses(self, other: _Span) -> bool:
        if not isinstance(other, AbsoluteSourceSpan):
            raise TypeError(f"Cannot compare AbsoluteSourceSpan with {type(other).__name__}")
        return _Span.encloses(self, other)


def to_expression_relative(
    absolute: AbsoluteSourceSpan,
    *,
    source_span: AbsoluteSourceSpan,
    span: ParseSpan,
) -> ParseSpan:
    """Convert an absolute span into the coordinates of ``span``'s expression.

    ``source_span`` and ``span`` are the same node's span in both systems;
    their start offsets differ by the expression's absolute start.
    """
    shift = source_span.start - span.start
    return ParseSpan(absolute.start - shift, absolute.end - shift)
