"""Locate the expression nodes enclosing a cursor offset.

``find_path`` walks the tree depth-first. A node joins the path when its
absolute ``source_span`` contains the offset (and, with ``exclude_empty``,
when the span is not zero-width); only admitted nodes are descended into, so
the path runs root to leaf in containment order and its tail is the most
specific node under the cursor.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from exprlens.expression.ast import AST, ASTWithSource, Expression


@dataclass(frozen=True)
class AstPath:
    """Nodes from the effective root down to the deepest match."""

    nodes: tuple[AST, ...]
    position: int

    @property
    def empty(self) -> bool:
        return not self.nodes

    @property
    def head(self) -> AST | None:
        return self.nodes[0] if self.nodes else None

    @property
    def tail(self) -> AST | None:
        return self.nodes[-1] if self.nodes else None

    def __iter__(self) -> Iterator[AST]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)


def find_path(root: Expression, position: int, exclude_empty: bool = False) -> AstPath:
    """Find the path of nodes whose source span contains ``position``.

    Args:
        root: Expression tree, optionally wrapped in ``ASTWithSource``.
        position: Absolute document offset.
        exclude_empty: Skip zero-width nodes (and their subtrees).

    Returns:
        The path; empty when no node contains the offset.
    """
    # The wrapper only carries provenance; visitors never see it.
    if isinstance(root, ASTWithSource):
        root = root.ast

    nodes: list[AST] = []
    pending: list[AST] = [root]
    while pending:
        node = pending.pop()
        span = node.source_span
        if exclude_empty and span.is_empty:
            continue
        if not span.contains(position):
            continue
        nodes.append(node)
        # Reversed so children are visited in source order.
        pending.extend(reversed(list(node.children())))

    return AstPath(tuple(nodes), position)
