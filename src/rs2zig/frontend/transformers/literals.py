"""
Literal Parser - Extracted from RustTransformer
Handles parsing of literal tokens (integers, floats, strings, chars)
"""

from typing import Union
from lark.lexer import Token
from ...shared import IntLiteral, FloatLiteral, StrLiteral, CharLiteral, SourceLocation

LiteralNode = Union[IntLiteral, FloatLiteral, StrLiteral, CharLiteral]


class LiteralParser:
    """Dedicated parser for literal tokens. Source text is kept verbatim."""

    _NODE_BY_TOKEN_TYPE = {
        'INT': IntLiteral,
        'FLOAT': FloatLiteral,
        'STRING': StrLiteral,
        'CHAR': CharLiteral,
    }

    @staticmethod
    def parse(token: Token, location: SourceLocation) -> LiteralNode:
        """Parse literal token into appropriate AST node"""
        try:
            node_class = LiteralParser._NODE_BY_TOKEN_TYPE[token.type]
        except KeyError:
            raise ValueError(f"Not a literal token: {token.type} {str(token)!r}") from None
        return node_class(text=str(token), location=location)
