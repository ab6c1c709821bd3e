"""
Macro Expansion

Two declaration-generating macros have a translation rule:

- STRUCT! { struct NAME { field: T, ... } }
    pub const NAME = extern struct {
        field: T',
    };

- DECLARE_HANDLE! { HANDLE, OPAQUE }
    pub const OPAQUE = @Type(.Opaque);
    pub const HANDLE = ?*OPAQUE;

Any other unqualified macro name is an unhandled item. A qualified path
(`a::b!`) has no rule at all yet.
"""

from typing import Callable, Dict, Sequence
import logging

from ..shared import (
    MacroItem, StructItem, StructKind, TokenTree, IdentToken,
    UnhandledItemError, NotYetImplementedError, MacroSyntaxError, UnsupportedTypeError, Rs2ZigError,
)
from ..utils.config import STRUCT_MACRO, DECLARE_HANDLE_MACRO, SOURCE_PATH_SEPARATOR
from .sink import LineSink
from .types import translate_type

logger = logging.getLogger(__name__)

StructParser = Callable[[Sequence[TokenTree]], StructItem]


class MacroExpander:
    """Dispatches a macro invocation on its name"""

    def __init__(self, sink: LineSink, struct_parser: StructParser):
        self.sink = sink
        self.struct_parser = struct_parser
        self._handlers: Dict[str, Callable[[MacroItem], None]] = {
            STRUCT_MACRO: self.expand_struct,
            DECLARE_HANDLE_MACRO: self.expand_declare_handle,
        }

    def expand(self, node: MacroItem) -> None:
        if len(node.path) != 1:
            raise NotYetImplementedError(
                f"qualified macro `{SOURCE_PATH_SEPARATOR.join(node.path)}!`", node.location)
        name = node.path[0]
        handler = self._handlers.get(name)
        if handler is None:
            raise UnhandledItemError(name, node.location)
        handler(node)

    def expand_struct(self, node: MacroItem) -> None:
        try:
            struct = self.struct_parser(node.tokens)
        except Rs2ZigError as e:
            raise MacroSyntaxError(
                f"{STRUCT_MACRO}! payload is not a struct definition ({e.message})", node.location) from e

        if struct.kind is StructKind.TUPLE:
            raise MacroSyntaxError(f"{STRUCT_MACRO}! struct `{struct.name}` has unnamed fields", node.location)

        logger.debug("STRUCT! %s with %d fields", struct.name, len(struct.fields))
        self.sink.emit(f"pub const {struct.name} = extern struct {{")
        for struct_field in struct.fields:
            try:
                zig_type = translate_type(struct_field.ty)
            except UnsupportedTypeError as e:
                # Payload locations point into the re-rendered text; report the invocation instead
                raise UnsupportedTypeError(e.ty, node.location) from e
            self.sink.emit(f"    {struct_field.name}: {zig_type},")
        self.sink.emit("};")

    def expand_declare_handle(self, node: MacroItem) -> None:
        tokens = node.tokens
        # tokens[1] is the separating comma; it is not checked
        if len(tokens) < 3:
            raise NotYetImplementedError(
                f"{DECLARE_HANDLE_MACRO}! with fewer than two names", node.location)
        handle, opaque = tokens[0], tokens[2]
        if not (isinstance(handle, IdentToken) and isinstance(opaque, IdentToken)):
            raise NotYetImplementedError(
                f"{DECLARE_HANDLE_MACRO}! with non-identifier arguments", node.location)

        self.sink.emit(f"pub const {opaque.text} = @Type(.Opaque);")
        self.sink.emit(f"pub const {handle.text} = ?*{opaque.text};")
