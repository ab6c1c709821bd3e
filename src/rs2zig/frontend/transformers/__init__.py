"""
rs2zig AST Transformers
=======================

Specialized transformers for different AST node types.
"""

from .base import RustTransformer
from .literals import LiteralParser
from .functions import SignatureParser, ParameterParser, VARIADIC
from .expressions import ExpressionParser
from .types import TypeParser

__all__ = [
    'RustTransformer',
    'LiteralParser',
    'SignatureParser',
    'ParameterParser',
    'VARIADIC',
    'ExpressionParser',
    'TypeParser',
]
