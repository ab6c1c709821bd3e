"""
Expression Mapper

Only integer literals are translated. Every other initializer becomes a
placeholder the user has to fill in by hand.
"""

from ..shared import Expression, IntLiteral
from ..utils.config import UNKNOWN_EXPR_PLACEHOLDER


def translate_expr(expr: Expression) -> str:
    if isinstance(expr, IntLiteral):
        return expr.text
    return UNKNOWN_EXPR_PLACEHOLDER
