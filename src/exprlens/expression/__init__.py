"""Expression tree and span types."""

from exprlens.expression.ast import (
    AST,
    ASTWithSource,
    Binary,
    Chain,
    Conditional,
    Expression,
    FunctionCall,
    ImplicitReceiver,
    Interpolation,
    KeyedRead,
    KeyedWrite,
    LiteralArray,
    LiteralMap,
    LiteralMapKey,
    LiteralPrimitive,
    MethodCall,
    NodeKind,
    NonNullAssert,
    Pipe,
    PrefixNot,
    PropertyRead,
    PropertyWrite,
    Quote,
    SafeMethodCall,
    SafePropertyRead,
)
from exprlens.expression.spans import AbsoluteSourceSpan, ParseSpan, to_expression_relative

__all__ = [
    # Spans
    "AbsoluteSourceSpan",
    "ParseSpan",
    "to_expression_relative",
    # Nodes
    "AST",
    "ASTWithSource",
    "Expression",
    "NodeKind",
    "Binary",
    "Chain",
    "Conditional",
    "FunctionCall",
    "ImplicitReceiver",
    "Interpolation",
    "KeyedRead",
    "KeyedWrite",
    "LiteralArray",
    "LiteralMap",
    "LiteralMapKey",
    "LiteralPrimitive",
    "MethodCall",
    "NonNullAssert",
    "Pipe",
    "PrefixNot",
    "PropertyRead",
    "PropertyWrite",
    "Quote",
    "SafeMethodCall",
    "SafePropertyRead",
]
