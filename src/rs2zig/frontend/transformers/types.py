"""
Type Parser - Extracted from RustTransformer

Only two type shapes are modelled: a single-segment path without generic
arguments (NamedType) and a raw pointer (PointerType). Every other shape is
kept as source text in an UnsupportedType tagged with its kind.
"""

from typing import Any, Callable, Optional, Sequence, Tuple
from typing_extensions import TypeAlias
from ...shared import NamedType, PointerType, UnsupportedType, TypeDescriptor, SourceLocation
from ...utils.config import SOURCE_PATH_SEPARATOR

LarkMeta: TypeAlias = Any  # Lark's internal Meta object
LocationExtractor: TypeAlias = Callable[[LarkMeta], SourceLocation]
SourceTextExtractor: TypeAlias = Callable[[LarkMeta], str]

# (segment name, generic arguments or None)
PathSegment: TypeAlias = Tuple[str, Optional[tuple]]


class TypeParser:
    """Dedicated parser for type syntax"""

    def __init__(self, location_extractor: LocationExtractor, text_extractor: SourceTextExtractor) -> None:
        self.extract_location = location_extractor
        self.extract_text = text_extractor

    def parse_path(self, meta: LarkMeta, segments: Sequence[PathSegment]) -> TypeDescriptor:
        location = self.extract_location(meta)
        text = self.extract_text(meta)
        if any(generic_args is not None for _, generic_args in segments):
            return UnsupportedType(kind="generic", text=text, location=location)
        if len(segments) > 1 or text.startswith(SOURCE_PATH_SEPARATOR):
            return UnsupportedType(kind="path", text=text, location=location)
        return NamedType(name=segments[0][0], location=location)

    def parse_pointer(self, meta: LarkMeta, is_const: bool, pointee: TypeDescriptor) -> PointerType:
        return PointerType(is_const=is_const, pointee=pointee, location=self.extract_location(meta))

    def unsupported(self, meta: LarkMeta, kind: str) -> UnsupportedType:
        return UnsupportedType(kind=kind, text=self.extract_text(meta), location=self.extract_location(meta))
