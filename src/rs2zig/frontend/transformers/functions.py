"""
Function Signature Parser - Extracted from RustTransformer
Handles parsing of function signatures and parameters
"""

from dataclasses import dataclass
from typing import List, Optional, Any, Tuple, Callable
from typing_extensions import TypeAlias
from lark.lexer import Token
from ...shared import FnParam, SourceLocation, TypeDescriptor, GroupToken

# Type aliases for better clarity
LarkMeta: TypeAlias = Any  # Lark's internal Meta object
LocationExtractor: TypeAlias = Callable[[LarkMeta], SourceLocation]


class _Variadic:
    """Marker for a trailing `...` in a foreign function parameter list"""

    def __repr__(self) -> str:
        return "VARIADIC"


VARIADIC = _Variadic()


@dataclass
class Signature:
    """Pieces of a function signature, in source order. The ABI string of `extern "C" fn` is not kept."""
    name: str
    generics: Tuple[str, ...]
    params: Tuple[FnParam, ...]
    is_variadic: bool
    return_type: Optional[TypeDescriptor]
    body: Optional[GroupToken]


class SignatureParser:
    """
    Dedicated parser for function signatures.

    Grammar (foreign_fn and fn_item after anonymous tokens are filtered):
        STRING? NAME generic_params? fn_params? ret_type? brace_group?
    """

    def parse_signature(self, args: Tuple[Any, ...]) -> Signature:
        name: Optional[str] = None
        generics: Tuple[str, ...] = ()
        params: List[Any] = []
        return_type: Optional[TypeDescriptor] = None
        body: Optional[GroupToken] = None

        for item in args:
            if isinstance(item, Token) and item.type == 'STRING':
                continue
            elif isinstance(item, Token):
                name = str(item)
            elif isinstance(item, tuple):
                generics = item
            elif isinstance(item, list):
                params = item
            elif isinstance(item, GroupToken):
                body = item
            elif isinstance(item, TypeDescriptor):
                return_type = item
            else:
                raise ValueError(f"Unexpected function signature part: {item!r}")

        if name is None:
            raise ValueError("Function signature without a name")

        is_variadic = any(param is VARIADIC for param in params)
        typed = tuple(param for param in params if param is not VARIADIC)
        return Signature(name, generics, typed, is_variadic, return_type, body)


class ParameterParser:
    """Dedicated parser for function parameters"""

    def __init__(self, location_extractor: LocationExtractor) -> None:
        self.extract_location = location_extractor

    def parse_typed(self, meta: LarkMeta, name: Optional[str], ty: TypeDescriptor) -> FnParam:
        """`name: T` or `_: T` (name is None)"""
        return FnParam(name=name, ty=ty, location=self.extract_location(meta))

    def parse_receiver(self, meta: LarkMeta, tokens: Tuple[Token, ...]) -> FnParam:
        """`self`, `mut self`, `&self`, `&'a mut self`: the name is the last token"""
        return FnParam(name=str(tokens[-1]), ty=None, is_receiver=True,
                       location=self.extract_location(meta))

    @staticmethod
    def pattern_name(tokens: Tuple[Token, ...]) -> Optional[str]:
        """`mut name` / `name` -> "name"; `_` -> None"""
        last = str(tokens[-1])
        return None if last == "_" else last
