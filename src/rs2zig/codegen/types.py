"""
Type Mapper

TypeDescriptor -> Zig type text. Only the scalar/pointer subset is
translated; any other shape is a hard failure.
"""

from typing import Dict, Optional

from ..shared import (
    TypeVisitor, TypeDescriptor, NamedType, PointerType, UnsupportedType,
    UnsupportedTypeError,
)
from ..utils.config import VOID_RETURN_TYPE

# C scalar aliases whose Zig spelling differs; every other name passes through
SCALAR_RENAMES: Dict[str, str] = {
    "c_uchar": "u8",
    "c_char": "i8",
    "c_schar": "i8",
    "c_float": "f32",
    "c_double": "f64",
    "__int8": "i8",
    "__uint8": "u8",
    "__int16": "i16",
    "__uint16": "u16",
    "__int32": "i32",
    "__uint32": "u32",
    "__int64": "i64",
    "__uint64": "u64",
}


class TypeTranslator(TypeVisitor[str]):
    def visit_named_type(self, node: NamedType) -> str:
        return SCALAR_RENAMES.get(node.name, node.name)

    def visit_pointer_type(self, node: PointerType) -> str:
        constness = "const " if node.is_const else ""
        return f"?*{constness}{node.pointee.accept(self)}"

    def visit_unsupported_type(self, node: UnsupportedType) -> str:
        raise UnsupportedTypeError(node)


_TRANSLATOR = TypeTranslator()


def translate_type(ty: TypeDescriptor) -> str:
    """
    Translate a type descriptor.

    >>> translate_type(PointerType(True, NamedType("c_char")))
    '?*const i8'

    Raises UnsupportedTypeError for anything outside the scalar/pointer subset.
    """
    return ty.accept(_TRANSLATOR)


def translate_return_type(ty: Optional[TypeDescriptor]) -> str:
    """Like translate_type, with `void` for a missing return type"""
    if ty is None:
        return VOID_RETURN_TYPE
    return translate_type(ty)
