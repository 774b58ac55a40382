"""Per-template query context handed to the expression resolvers."""

from __future__ import annotations

from dataclasses import dataclass

from exprlens.language.symbols import SymbolQuery, SymbolTable
from exprlens.language.type_resolver import (
    ExpressionTypeResolver,
    TypeResolver,
    TypeResolverFactory,
)


@dataclass(frozen=True)
class TemplateSource:
    """What a resolver needs to know about the template an offset belongs to.

    Attributes:
        query: Pipe and builtin-type registries for the template.
        source: Token naming the document/template (file name, URI, ...);
            passed through to the type resolver.
        type_resolver_factory: Builds the type resolver for one query.
    """

    query: SymbolQuery
    source: str = ""
    type_resolver_factory: TypeResolverFactory = ExpressionTypeResolver

    def type_resolver(self, scope: SymbolTable) -> TypeResolver:
        return self.type_resolver_factory(scope, self.query, self.source)
