"""Pydantic models for template document files.

A template document describes one analysis request: the parsed expression
tree, the types it refers to, the outer scope and the pipe registry.

Example::

    source: app.component.html
    offset: 120
    text: "title | uppercase"
    expression:
      kind: pipe
      span: [0, 17]
      name: uppercase
      name_span: [128, 137]
      args: []
      exp: {kind: property_read, span: [0, 5], name: title, name_span: [120, 125]}
    types:
      Hero:
        members:
          name: {type: string}
    scope:
      title: {type: string}
      hero: {type: Hero}
    pipes:
      uppercase: {type: string}
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class SymbolModel(BaseModel):
    """A named symbol: scope entry, type member or pipe."""

    kind: str = "property"
    type: str | None = Field(
        default=None,
        description="Name of an entry in `types` or a builtin (any, string, number, ...).",
    )
    callable: bool = False
    nullable: bool = False
    documentation: str = ""


class PipeModel(SymbolModel):
    kind: str = "pipe"
    callable: bool = True


class TypeModel(BaseModel):
    members: dict[str, SymbolModel] = Field(default_factory=dict)
    documentation: str = ""


class DocumentModel(BaseModel):
    source: str = ""
    offset: int = Field(
        default=0,
        description="Absolute offset of the expression; shifts `span` into `source_span`.",
    )
    text: str | None = Field(
        default=None,
        description="Expression source text; when present the tree is wrapped with it.",
    )
    expression: dict[str, Any]
    types: dict[str, TypeModel] = Field(default_factory=dict)
    scope: dict[str, SymbolModel] = Field(default_factory=dict)
    pipes: dict[str, PipeModel] = Field(default_factory=dict)
    any_members: dict[str, SymbolModel] = Field(
        default_factory=dict,
        description="Members of the builtin `any` type (offered inside quotes).",
    )
