"""
Item Translators

One visit method per top-level item kind. Each method writes zero or more
lines to the sink and may update the TranslationContext. Soft and hard
translation errors propagate to the driver, which decides what to do.
"""

from pprint import pformat
import logging

from ..shared import (
    ItemVisitor, Item, UseItem, ConstItem, TypeAliasItem, ForeignModItem,
    ForeignFn, FnParam, MacroItem, FnItem, Visibility, UnhandledItemError,
)
from ..utils.config import (
    SCALAR_TYPE_NAMESPACE, TARGET_PATH_SEPARATOR, TARGET_MODULE_FILE_EXTENSION,
    ANONYMOUS_PARAM_NAME, CALLING_CONVENTION,
)
from .context import TranslationContext
from .sink import LineSink
from .types import translate_type, translate_return_type
from .exprs import translate_expr
from .imports import expand_use_tree
from .macros import MacroExpander, StructParser

logger = logging.getLogger(__name__)


def visibility_prefix(visibility: Visibility) -> str:
    """`pub ` for public items, nothing otherwise"""
    return "pub " if visibility is Visibility.PUBLIC else ""


class ItemTranslator(ItemVisitor[None]):
    def __init__(self, context: TranslationContext, sink: LineSink, struct_parser: StructParser):
        self.context = context
        self.sink = sink
        self.macros = MacroExpander(sink, struct_parser)

    def translate(self, item: Item) -> None:
        item.accept(self)

    def visit_use_item(self, node: UseItem) -> None:
        vis = visibility_prefix(node.visibility)
        for path in expand_use_tree(node.tree):
            module = path[0]
            if module == SCALAR_TYPE_NAMESPACE:
                continue
            if self.context.register_module(module):
                logger.debug("new top-level module %s", module)
                self.sink.blank()
                self.sink.emit(f'const {module} = @import("{module}{TARGET_MODULE_FILE_EXTENSION}");')
            self.sink.emit(f"{vis}const {path[-1]} = {TARGET_PATH_SEPARATOR.join(path)};")

    def visit_const_item(self, node: ConstItem) -> None:
        vis = visibility_prefix(node.visibility)
        self.sink.emit(f"{vis}const {node.name} = {translate_expr(node.expr)};")

    def visit_type_alias_item(self, node: TypeAliasItem) -> None:
        vis = visibility_prefix(node.visibility)
        self.sink.emit(f"{vis}const {node.name} = {translate_type(node.ty)};")

    def visit_foreign_mod_item(self, node: ForeignModItem) -> None:
        for foreign in node.items:
            if isinstance(foreign, ForeignFn):
                self._translate_foreign_fn(foreign)
            else:
                # Known limitation: no Zig rendering for foreign statics yet
                self.sink.emit(repr(foreign))

    def _translate_foreign_fn(self, fn: ForeignFn) -> None:
        vis = visibility_prefix(fn.visibility)
        self.sink.emit(f'{vis}extern "{self.context.link_name}" fn {fn.name} (')
        for param in fn.params:
            self._translate_param(param)
        if fn.is_variadic:
            self.sink.emit("    ...,")
        self.sink.emit(f") callconv({CALLING_CONVENTION}) {translate_return_type(fn.return_type)};")

    def _translate_param(self, param: FnParam) -> None:
        if param.is_receiver:
            return
        name = param.name if param.name is not None else ANONYMOUS_PARAM_NAME
        self.sink.emit(f"    {name}: {translate_type(param.ty)},")

    def visit_macro_item(self, node: MacroItem) -> None:
        self.macros.expand(node)

    def visit_fn_item(self, node: FnItem) -> None:
        raise UnhandledItemError(node.name, node.location)

    def visit_other_item(self, node: Item) -> None:
        for line in pformat(node).splitlines():
            self.sink.emit(line)
