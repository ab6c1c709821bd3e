"""
Expression Parser - Extracted from RustTransformer
Handles parsing of operator, cast and call expressions
"""

from typing import Any, Callable, Sequence
from typing_extensions import TypeAlias
from ...shared import (
    Expression, BinaryExpr, UnaryExpr, CastExpr, CallExpr, ParenExpr,
    TypeDescriptor, SourceLocation,
)

# Type aliases for better clarity
LarkMeta: TypeAlias = Any  # Lark's internal Meta object
LocationExtractor: TypeAlias = Callable[[LarkMeta], SourceLocation]


class ExpressionParser:
    """Dedicated parser for composite expressions"""

    def __init__(self, location_extractor: LocationExtractor) -> None:
        self.extract_location = location_extractor

    def parse_binary(self, meta: LarkMeta, left: Expression, operator: str, right: Expression) -> BinaryExpr:
        """All binary precedence levels share one node; the operator is its source text"""
        return BinaryExpr(op=operator, left=left, right=right, location=self.extract_location(meta))

    def parse_prefix(self, meta: LarkMeta, operator: str, operand: Expression) -> UnaryExpr:
        return UnaryExpr(op=operator, operand=operand, location=self.extract_location(meta))

    def parse_cast(self, meta: LarkMeta, expr: Expression, target: TypeDescriptor) -> CastExpr:
        return CastExpr(expr=expr, target=target, location=self.extract_location(meta))

    def parse_call(self, meta: LarkMeta, func: Expression, args: Sequence[Expression]) -> CallExpr:
        return CallExpr(func=func, args=tuple(args), location=self.extract_location(meta))

    def parse_paren(self, meta: LarkMeta, expr: Expression) -> ParenExpr:
        return ParenExpr(expr=expr, location=self.extract_location(meta))
