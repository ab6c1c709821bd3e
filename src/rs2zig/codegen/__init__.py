"""
Zig code generation: mappers, item translators and the output sink.
"""

from .context import TranslationContext
from .sink import LineSink
from .types import SCALAR_RENAMES, TypeTranslator, translate_type, translate_return_type
from .exprs import translate_expr
from .imports import ImportPath, UseTreeExpander, expand_use_tree
from .macros import MacroExpander
from .items import ItemTranslator, visibility_prefix

__all__ = [
    'TranslationContext',
    'LineSink',
    'SCALAR_RENAMES',
    'TypeTranslator',
    'translate_type',
    'translate_return_type',
    'translate_expr',
    'ImportPath',
    'UseTreeExpander',
    'expand_use_tree',
    'MacroExpander',
    'ItemTranslator',
    'visibility_prefix',
]
