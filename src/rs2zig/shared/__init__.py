"""
Shared components: AST nodes, visitors, source locations and errors.
"""

from .source_location import SourceLocation
from .errors import (
    Diagnostic, format_diagnostic,
    Rs2ZigError, TranslationError, SoftTranslationError, HardTranslationError,
    UnhandledItemError, NotYetImplementedError,
    UnsupportedTypeError, UnsupportedSyntaxError, MacroSyntaxError,
)
from .nodes import (
    ASTNode, Visibility, Delimiter, StructKind,
    TokenTree, IdentToken, PunctToken, LiteralToken, LifetimeToken, GroupToken, render_tokens,
    Attribute,
    TypeDescriptor, NamedType, PointerType, UnsupportedType,
    Expression, IntLiteral, FloatLiteral, StrLiteral, CharLiteral, BoolLiteral,
    PathExpr, UnaryExpr, BinaryExpr, CastExpr, ParenExpr, CallExpr, UnitExpr,
    UseTree, UsePath, UseName, UseRename, UseGlob, UseGroup,
    Item, UseItem, ConstItem, StaticItem, TypeAliasItem,
    FnParam, ForeignItem, ForeignFn, ForeignStatic, ForeignModItem,
    MacroItem, FnItem, StructField, StructItem, EnumVariant, EnumItem,
    ModItem, ImplItem, TraitItem, ExternCrateItem, Program,
)
from .ast_visitor import ItemVisitor, TypeVisitor, UseTreeVisitor
