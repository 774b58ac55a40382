"""Per-node-kind dispatch tables.

Both resolvers answer "what does this node kind mean here?" for the tail of a
path. A ``KindDispatcher`` is that answer written down as a table: every
``NodeKind`` appears exactly once, either with its own handler or in the
``passthrough`` set that shares the default handler. A table that forgets a
kind (or lists one twice) fails at import time rather than at query time.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Generic, TypeVar

from exprlens.core.errors import InternalError
from exprlens.expression.ast import AST, NodeKind

QueryT = TypeVar("QueryT")
ResultT = TypeVar("ResultT")

Handler = Callable[[QueryT, AST], ResultT]


class KindDispatcher(Generic[QueryT, ResultT]):
    """Exhaustive NodeKind -> handler table."""

    def __init__(
        self,
        name: str,
        handlers: Mapping[NodeKind, Handler[QueryT, ResultT]],
        *,
        passthrough: Iterable[NodeKind],
        default: Handler[QueryT, ResultT],
    ) -> None:
        passthrough = frozenset(passthrough)
        overlap = passthrough & handlers.keys()
        missing = set(NodeKind) - passthrough - handlers.keys()
        if overlap or missing:
            raise InternalError.unexpected(
                f"dispatch table '{name}' does not cover each node kind exactly once",
                overlap=sorted(k.value for k in overlap),
                missing=sorted(k.value for k in missing),
            )
        self.name = name
        self._table: dict[NodeKind, Handler[QueryT, ResultT]] = {
            kind: default for kind in passthrough
        }
        self._table.update(handlers)

    def handler_for(self, kind: NodeKind) -> Handler[QueryT, ResultT]:
        return self._table[kind]

    def __call__(self, query: QueryT, node: AST) -> ResultT:
        return self.handler_for(node.kind)(query, node)
