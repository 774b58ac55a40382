"""Load template documents into expression trees and symbol tables."""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import ValidationError

from exprlens.core.errors import DocumentError
from exprlens.document.models import DocumentModel, SymbolModel
from exprlens.expression import ast as e
from exprlens.expression.spans import AbsoluteSourceSpan, ParseSpan
from exprlens.language.symbols import (
    BuiltinType,
    DeclaredSymbol,
    MapSymbolTable,
    StaticSymbolQuery,
    Symbol,
    SymbolTable,
)
from exprlens.language.template import TemplateSource

log = structlog.get_logger(__name__)

_NODE_CLASSES: dict[e.NodeKind, type[e.AST]] = {
    cls.kind: cls
    for cls in (
        e.Binary,
        e.Chain,
        e.Conditional,
        e.FunctionCall,
        e.ImplicitReceiver,
        e.Interpolation,
        e.KeyedRead,
        e.KeyedWrite,
        e.LiteralArray,
        e.LiteralMap,
        e.LiteralPrimitive,
        e.MethodCall,
        e.Pipe,
        e.PrefixNot,
        e.NonNullAssert,
        e.PropertyRead,
        e.PropertyWrite,
        e.Quote,
        e.SafeMethodCall,
        e.SafePropertyRead,
    )
}

_NODE_FIELDS = frozenset(
    {
        "receiver",
        "value",
        "exp",
        "obj",
        "key",
        "condition",
        "true_exp",
        "false_exp",
        "left",
        "right",
        "expression",
        "target",
    }
)
_NODE_LIST_FIELDS = frozenset({"args", "expressions", "values"})
_TEXT_FIELDS = frozenset({"name", "operation", "prefix", "uninterpreted_expression", "location"})


@dataclass(frozen=True)
class TemplateDocument:
    """Everything one resolver query needs."""

    ast: e.Expression
    scope: SymbolTable
    template: TemplateSource


def load_document(path: Path) -> TemplateDocument:
    """Read a YAML (or JSON) template document.

    Raises:
        DocumentError: File missing, unparseable, or not a valid document.
        SpanError: A span in the document has start > end.
    """
    if not path.exists():
        raise DocumentError.not_found(str(path))
    try:
        with path.open() as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise DocumentError.parse_error(str(path), str(exc)) from exc
    if not isinstance(data, Mapping):
        raise DocumentError.parse_error(str(path), "top-level value must be a mapping")
    document = parse_document(data)
    log.debug("document_loaded", path=str(path), source=document.template.source)
    return document


def parse_document(data: Mapping[str, Any]) -> TemplateDocument:
    """Build a TemplateDocument from already-decoded data."""
    try:
        model = DocumentModel.model_validate(data)
    except ValidationError as exc:
        err = exc.errors()[0]
        location = ".".join(str(loc) for loc in err["loc"])
        raise DocumentError.invalid(location, err["msg"]) from exc

    symbols = _SymbolBuilder(model)
    root = _NodeBuilder(model.offset).build(model.expression, "expression")
    ast: e.Expression = root
    if model.text is not None:
        ast = e.ASTWithSource(
            ast=root, source=model.text, location=model.source, absolute_offset=model.offset
        )
    return TemplateDocument(
        ast=ast,
        scope=symbols.table(model.scope, "scope"),
        template=TemplateSource(query=symbols.query, source=model.source),
    )


class _SymbolBuilder:
    """Turns named type references into DeclaredSymbols.

    Declared types get their members lazily so types may refer to themselves
    or to types declared further down.
    """

    def __init__(self, model: DocumentModel) -> None:
        self._types: dict[str, Symbol] = {}
        self._members: dict[str, SymbolTable] = {}

        builtins: dict[BuiltinType, Symbol] = {
            kind: DeclaredSymbol(name=kind.value, kind="type") for kind in BuiltinType
        }
        builtins[BuiltinType.ANY] = DeclaredSymbol(
            name=BuiltinType.ANY.value,
            kind="type",
            member_factory=self._members_of(BuiltinType.ANY.value),
        )
        self._types.update((kind.value, symbol) for kind, symbol in builtins.items())

        for type_name, type_model in model.types.items():
            if type_name in self._types:
                raise DocumentError.invalid(
                    f"types.{type_name}", "name is reserved for a builtin type"
                )
            self._types[type_name] = DeclaredSymbol(
                name=type_name,
                kind="type",
                documentation=type_model.documentation,
                member_factory=self._members_of(type_name),
            )
        for type_name, type_model in model.types.items():
            self._members[type_name] = self.table(type_model.members, f"types.{type_name}.members")
        self._members[BuiltinType.ANY.value] = self.table(model.any_members, "any_members")

        self.query = StaticSymbolQuery(pipes=self.table(model.pipes, "pipes"), builtins=builtins)

    def _members_of(self, type_name: str) -> Callable[[], SymbolTable]:
        return lambda: self._members[type_name]

    def table(self, entries: Mapping[str, SymbolModel], location: str) -> SymbolTable:
        return MapSymbolTable(
            self._symbol(name, entry, f"{location}.{name}") for name, entry in entries.items()
        )

    def _symbol(self, name: str, entry: SymbolModel, location: str) -> Symbol:
        symbol_type: Symbol | None = None
        if entry.type is not None:
            symbol_type = self._types.get(entry.type)
            if symbol_type is None:
                raise DocumentError.invalid(location, f"unknown type '{entry.type}'")
        return DeclaredSymbol(
            name=name,
            kind=entry.kind,
            type=symbol_type,
            callable=entry.callable,
            nullable=entry.nullable,
            documentation=entry.documentation,
        )


class _NodeBuilder:
    def __init__(self, offset: int) -> None:
        self._offset = offset

    def build(self, data: Any, location: str) -> e.AST:
        if not isinstance(data, Mapping):
            raise DocumentError.invalid(location, "expected a node mapping")
        try:
            cls = _NODE_CLASSES[e.NodeKind(data.get("kind"))]
        except ValueError:
            raise DocumentError.invalid(
                location, f"unknown node kind {data.get('kind')!r}"
            ) from None

        span = ParseSpan(*self._pair(data.get("span"), f"{location}.span"))
        if "source_span" in data:
            raw_source_span = self._pair(data["source_span"], f"{location}.source_span")
            source_span = AbsoluteSourceSpan(*raw_source_span)
        else:
            source_span = AbsoluteSourceSpan(span.start + self._offset, span.end + self._offset)

        kwargs: dict[str, Any] = {"span": span, "source_span": source_span}
        for f in dataclasses.fields(cls):
            if f.name in kwargs:
                continue
            field_location = f"{location}.{f.name}"
            if f.name == "receiver" and "receiver" not in data:
                kwargs["receiver"] = self._implicit_receiver(span, source_span)
            elif f.name in _NODE_LIST_FIELDS and f.name not in data:
                kwargs[f.name] = ()
            elif f.name not in data:
                raise DocumentError.invalid(location, f"missing field '{f.name}'")
            else:
                kwargs[f.name] = self._field(cls, f.name, data[f.name], field_location)
        return cls(**kwargs)

    def _field(self, cls: type[e.AST], name: str, raw: Any, location: str) -> Any:
        if cls is e.LiteralPrimitive and name == "value":
            if raw is not None and not isinstance(raw, (str, int, float, bool)):
                raise DocumentError.invalid(location, "literal must be a scalar")
            return raw
        if name in _NODE_FIELDS:
            return self.build(raw, location)
        if name in _NODE_LIST_FIELDS:
            items = self._list(raw, location)
            return tuple(self.build(item, f"{location}[{i}]") for i, item in enumerate(items))
        if name == "name_span":
            return AbsoluteSourceSpan(*self._pair(raw, location))
        if name == "keys":
            items = self._list(raw, location)
            return tuple(self._map_key(item, f"{location}[{i}]") for i, item in enumerate(items))
        if name == "strings":
            return tuple(str(item) for item in self._list(raw, location))
        if name in _TEXT_FIELDS:
            if not isinstance(raw, str):
                raise DocumentError.invalid(location, "expected a string")
            return raw
        raise DocumentError.invalid(location, f"unsupported field '{name}'")

    def _implicit_receiver(self, span: ParseSpan, source_span: AbsoluteSourceSpan) -> e.AST:
        return e.ImplicitReceiver(
            span=ParseSpan(span.start, span.start),
            source_span=AbsoluteSourceSpan(source_span.start, source_span.start),
        )

    @staticmethod
    def _pair(raw: Any, location: str) -> tuple[int, int]:
        if (
            not isinstance(raw, (list, tuple))
            or len(raw) != 2
            or not all(isinstance(v, int) and not isinstance(v, bool) for v in raw)
        ):
            raise DocumentError.invalid(location, "expected [start, end]")
        return raw[0], raw[1]

    @staticmethod
    def _list(raw: Any, location: str) -> list[Any]:
        if not isinstance(raw, list):
            raise DocumentError.invalid(location, "expected a list")
        return raw

    @staticmethod
    def _map_key(raw: Any, location: str) -> e.LiteralMapKey:
        if isinstance(raw, str):
            return e.LiteralMapKey(key=raw)
        if isinstance(raw, Mapping) and isinstance(raw.get("key"), str):
            return e.LiteralMapKey(key=raw["key"], quoted=bool(raw.get("quoted", False)))
        raise DocumentError.invalid(location, "expected a key string or {key, quoted}")
