"""
rs2zig AST (Abstract Syntax Tree) Definitions

Nodes for the Rust FFI declaration subset understood by the front end.
All nodes are frozen dataclasses and every sequence is a tuple, so a parsed
Program is immutable once built.

Visitor Pattern Support:
- Items, type descriptors and use-trees have accept() methods
- Expressions and token trees are plain data (matched with isinstance)

The source location is excluded from equality and from repr(): two nodes
parsed from different places compare equal, and repr() is the debug dump
emitted for items that have no translation rule.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Tuple, TypeVar, TYPE_CHECKING

from .source_location import SourceLocation

if TYPE_CHECKING:
    from .ast_visitor import ItemVisitor, TypeVisitor, UseTreeVisitor

T = TypeVar('T')


def _location() -> Any:
    return field(default=None, repr=False, compare=False)


class Visibility(Enum):
    """Item visibility. Only a plain `pub` is public; `pub(crate)` and friends are not."""
    PUBLIC = "pub"
    PRIVATE = ""


class Delimiter(Enum):
    """Token-tree group delimiters"""
    PAREN = ("(", ")")
    BRACKET = ("[", "]")
    BRACE = ("{", "}")

    @property
    def open(self) -> str:
        return self.value[0]

    @property
    def close(self) -> str:
        return self.value[1]


class StructKind(Enum):
    NAMED = "named"
    TUPLE = "tuple"
    UNIT = "unit"


class ASTNode:
    """Base class for all AST nodes"""
    __slots__ = ()


# =============================================================================
# Token trees (macro payloads, attribute arguments, function bodies)
# =============================================================================

class TokenTree(ASTNode):
    """A single token or a delimited group of tokens"""

    def render(self) -> str:
        raise NotImplementedError(f"render() not implemented for {self.__class__.__name__}")


@dataclass(frozen=True)
class IdentToken(TokenTree):
    text: str

    def render(self) -> str:
        return self.text


@dataclass(frozen=True)
class PunctToken(TokenTree):
    text: str

    def render(self) -> str:
        return self.text


@dataclass(frozen=True)
class LiteralToken(TokenTree):
    text: str

    def render(self) -> str:
        return self.text


@dataclass(frozen=True)
class LifetimeToken(TokenTree):
    text: str

    def render(self) -> str:
        return self.text


@dataclass(frozen=True)
class GroupToken(TokenTree):
    delimiter: Delimiter
    tokens: Tuple[TokenTree, ...] = ()

    def render(self) -> str:
        inner = render_tokens(self.tokens)
        if not inner:
            return f"{self.delimiter.open}{self.delimiter.close}"
        return f"{self.delimiter.open} {inner} {self.delimiter.close}"


def render_tokens(tokens: Tuple[TokenTree, ...]) -> str:
    """Render a token stream back to source text, one space between tokens."""
    return " ".join(token.render() for token in tokens)


@dataclass(frozen=True)
class Attribute(ASTNode):
    """`#[path args]` or `#![path args]`"""
    path: str
    tokens: Tuple[TokenTree, ...] = ()
    is_inner: bool = False
    location: Optional[SourceLocation] = _location()


# =============================================================================
# Type descriptors
# =============================================================================

class TypeDescriptor(ASTNode):
    """Base class for type syntax"""

    def accept(self, visitor: 'TypeVisitor[T]') -> 'T':
        raise NotImplementedError(f"accept() not implemented for {self.__class__.__name__}")


@dataclass(frozen=True)
class NamedType(TypeDescriptor):
    """A single-segment path with no generic arguments, e.g. `c_int`, `HWND`"""
    name: str
    location: Optional[SourceLocation] = _location()

    def accept(self, visitor: 'TypeVisitor[T]') -> 'T':
        return visitor.visit_named_type(self)


@dataclass(frozen=True)
class PointerType(TypeDescriptor):
    """`*const T` (is_const=True) or `*mut T`"""
    is_const: bool
    pointee: TypeDescriptor
    location: Optional[SourceLocation] = _location()

    def accept(self, visitor: 'TypeVisitor[T]') -> 'T':
        return visitor.visit_pointer_type(self)


@dataclass(frozen=True)
class UnsupportedType(TypeDescriptor):
    """
    Any other type shape, kept as text.

    kind is one of: path, generic, reference, array, slice, tuple, never, fn.
    """
    kind: str
    text: str
    location: Optional[SourceLocation] = _location()

    def accept(self, visitor: 'TypeVisitor[T]') -> 'T':
        return visitor.visit_unsupported_type(self)


# =============================================================================
# Expressions (constant initializers)
# =============================================================================

class Expression(ASTNode):
    """Base class for expressions"""


@dataclass(frozen=True)
class IntLiteral(Expression):
    """Integer literal, text kept verbatim (radix prefix and suffix included)"""
    text: str
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class FloatLiteral(Expression):
    text: str
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class StrLiteral(Expression):
    text: str
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class CharLiteral(Expression):
    text: str
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class BoolLiteral(Expression):
    value: bool
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class PathExpr(Expression):
    segments: Tuple[str, ...]
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class UnaryExpr(Expression):
    op: str
    operand: Expression
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class BinaryExpr(Expression):
    op: str
    left: Expression
    right: Expression
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class CastExpr(Expression):
    expr: Expression
    target: TypeDescriptor
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class ParenExpr(Expression):
    expr: Expression
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class CallExpr(Expression):
    func: Expression
    args: Tuple[Expression, ...] = ()
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class UnitExpr(Expression):
    location: Optional[SourceLocation] = _location()


# =============================================================================
# Use trees
# =============================================================================

class UseTree(ASTNode):
    """Base class for `use` tree shapes"""

    def accept(self, visitor: 'UseTreeVisitor[T]') -> 'T':
        raise NotImplementedError(f"accept() not implemented for {self.__class__.__name__}")


@dataclass(frozen=True)
class UsePath(UseTree):
    """`ident::tree`"""
    ident: str
    tree: UseTree

    def accept(self, visitor: 'UseTreeVisitor[T]') -> 'T':
        return visitor.visit_use_path(self)


@dataclass(frozen=True)
class UseName(UseTree):
    ident: str

    def accept(self, visitor: 'UseTreeVisitor[T]') -> 'T':
        return visitor.visit_use_name(self)


@dataclass(frozen=True)
class UseRename(UseTree):
    """`ident as rename`"""
    ident: str
    rename: str

    def accept(self, visitor: 'UseTreeVisitor[T]') -> 'T':
        return visitor.visit_use_rename(self)


@dataclass(frozen=True)
class UseGlob(UseTree):
    def accept(self, visitor: 'UseTreeVisitor[T]') -> 'T':
        return visitor.visit_use_glob(self)


@dataclass(frozen=True)
class UseGroup(UseTree):
    """`{a, b::c, ...}`"""
    items: Tuple[UseTree, ...] = ()

    def accept(self, visitor: 'UseTreeVisitor[T]') -> 'T':
        return visitor.visit_use_group(self)


# =============================================================================
# Items
# =============================================================================

class Item(ASTNode):
    """Base class for top-level declarations"""

    def accept(self, visitor: 'ItemVisitor[T]') -> 'T':
        raise NotImplementedError(f"accept() not implemented for {self.__class__.__name__}")


@dataclass(frozen=True)
class UseItem(Item):
    tree: UseTree
    visibility: Visibility = Visibility.PRIVATE
    attributes: Tuple[Attribute, ...] = ()
    location: Optional[SourceLocation] = _location()

    def accept(self, visitor: 'ItemVisitor[T]') -> 'T':
        return visitor.visit_use_item(self)


@dataclass(frozen=True)
class ConstItem(Item):
    name: str
    ty: TypeDescriptor
    expr: Expression
    visibility: Visibility = Visibility.PRIVATE
    attributes: Tuple[Attribute, ...] = ()
    location: Optional[SourceLocation] = _location()

    def accept(self, visitor: 'ItemVisitor[T]') -> 'T':
        return visitor.visit_const_item(self)


@dataclass(frozen=True)
class StaticItem(Item):
    name: str
    ty: TypeDescriptor
    expr: Expression
    is_mut: bool = False
    visibility: Visibility = Visibility.PRIVATE
    attributes: Tuple[Attribute, ...] = ()
    location: Optional[SourceLocation] = _location()

    def accept(self, visitor: 'ItemVisitor[T]') -> 'T':
        return visitor.visit_static_item(self)


@dataclass(frozen=True)
class TypeAliasItem(Item):
    name: str
    ty: TypeDescriptor
    generics: Tuple[str, ...] = ()
    visibility: Visibility = Visibility.PRIVATE
    attributes: Tuple[Attribute, ...] = ()
    location: Optional[SourceLocation] = _location()

    def accept(self, visitor: 'ItemVisitor[T]') -> 'T':
        return visitor.visit_type_alias_item(self)


@dataclass(frozen=True)
class FnParam(ASTNode):
    """
    A function parameter.

    name is None for a wildcard pattern (`_: T`). Receivers (`self`,
    `&mut self`) have is_receiver=True and no type.
    """
    name: Optional[str]
    ty: Optional[TypeDescriptor]
    is_receiver: bool = False
    location: Optional[SourceLocation] = _location()


class ForeignItem(ASTNode):
    """Base class for declarations inside an `extern { ... }` block"""


@dataclass(frozen=True)
class ForeignFn(ForeignItem):
    name: str
    params: Tuple[FnParam, ...] = ()
    return_type: Optional[TypeDescriptor] = None
    is_variadic: bool = False
    visibility: Visibility = Visibility.PRIVATE
    attributes: Tuple[Attribute, ...] = ()
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class ForeignStatic(ForeignItem):
    name: str
    ty: TypeDescriptor
    is_mut: bool = False
    visibility: Visibility = Visibility.PRIVATE
    attributes: Tuple[Attribute, ...] = ()
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class ForeignModItem(Item):
    """`extern "abi" { ... }`"""
    abi: Optional[str]
    items: Tuple[ForeignItem, ...] = ()
    visibility: Visibility = Visibility.PRIVATE
    attributes: Tuple[Attribute, ...] = ()
    location: Optional[SourceLocation] = _location()

    def accept(self, visitor: 'ItemVisitor[T]') -> 'T':
        return visitor.visit_foreign_mod_item(self)


@dataclass(frozen=True)
class MacroItem(Item):
    """
    Macro invocation in item position: `path! { tokens }`.

    ident is set for the `macro_rules! name { ... }` form.
    """
    path: Tuple[str, ...]
    tokens: Tuple[TokenTree, ...] = ()
    delimiter: Delimiter = Delimiter.BRACE
    ident: Optional[str] = None
    visibility: Visibility = Visibility.PRIVATE
    attributes: Tuple[Attribute, ...] = ()
    location: Optional[SourceLocation] = _location()

    def accept(self, visitor: 'ItemVisitor[T]') -> 'T':
        return visitor.visit_macro_item(self)


@dataclass(frozen=True)
class FnItem(Item):
    """A function with a body. The body is kept as an unparsed token stream."""
    name: str
    params: Tuple[FnParam, ...] = ()
    return_type: Optional[TypeDescriptor] = None
    generics: Tuple[str, ...] = ()
    body: Tuple[TokenTree, ...] = ()
    visibility: Visibility = Visibility.PRIVATE
    attributes: Tuple[Attribute, ...] = ()
    location: Optional[SourceLocation] = _location()

    def accept(self, visitor: 'ItemVisitor[T]') -> 'T':
        return visitor.visit_fn_item(self)


@dataclass(frozen=True)
class StructField(ASTNode):
    """name is None for tuple-struct fields"""
    name: Optional[str]
    ty: TypeDescriptor
    visibility: Visibility = Visibility.PRIVATE
    attributes: Tuple[Attribute, ...] = ()
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class StructItem(Item):
    name: str
    fields: Tuple[StructField, ...] = ()
    kind: StructKind = StructKind.NAMED
    generics: Tuple[str, ...] = ()
    visibility: Visibility = Visibility.PRIVATE
    attributes: Tuple[Attribute, ...] = ()
    location: Optional[SourceLocation] = _location()

    def accept(self, visitor: 'ItemVisitor[T]') -> 'T':
        return visitor.visit_struct_item(self)


@dataclass(frozen=True)
class EnumVariant(ASTNode):
    name: str
    fields: Optional[GroupToken] = None
    discriminant: Optional[Expression] = None
    attributes: Tuple[Attribute, ...] = ()
    location: Optional[SourceLocation] = _location()


@dataclass(frozen=True)
class EnumItem(Item):
    name: str
    variants: Tuple[EnumVariant, ...] = ()
    generics: Tuple[str, ...] = ()
    visibility: Visibility = Visibility.PRIVATE
    attributes: Tuple[Attribute, ...] = ()
    location: Optional[SourceLocation] = _location()

    def accept(self, visitor: 'ItemVisitor[T]') -> 'T':
        return visitor.visit_enum_item(self)


@dataclass(frozen=True)
class ModItem(Item):
    """`mod name;` (items is None) or `mod name { ... }`"""
    name: str
    items: Optional[Tuple[Item, ...]] = None
    visibility: Visibility = Visibility.PRIVATE
    attributes: Tuple[Attribute, ...] = ()
    location: Optional[SourceLocation] = _location()

    def accept(self, visitor: 'ItemVisitor[T]') -> 'T':
        return visitor.visit_mod_item(self)


@dataclass(frozen=True)
class ImplItem(Item):
    self_ty: TypeDescriptor
    trait_ty: Optional[TypeDescriptor] = None
    generics: Tuple[str, ...] = ()
    body: Tuple[TokenTree, ...] = ()
    is_unsafe: bool = False
    visibility: Visibility = Visibility.PRIVATE
    attributes: Tuple[Attribute, ...] = ()
    location: Optional[SourceLocation] = _location()

    def accept(self, visitor: 'ItemVisitor[T]') -> 'T':
        return visitor.visit_impl_item(self)


@dataclass(frozen=True)
class TraitItem(Item):
    name: str
    generics: Tuple[str, ...] = ()
    body: Tuple[TokenTree, ...] = ()
    is_unsafe: bool = False
    visibility: Visibility = Visibility.PRIVATE
    attributes: Tuple[Attribute, ...] = ()
    location: Optional[SourceLocation] = _location()

    def accept(self, visitor: 'ItemVisitor[T]') -> 'T':
        return visitor.visit_trait_item(self)


@dataclass(frozen=True)
class ExternCrateItem(Item):
    name: str
    rename: Optional[str] = None
    visibility: Visibility = Visibility.PRIVATE
    attributes: Tuple[Attribute, ...] = ()
    location: Optional[SourceLocation] = _location()

    def accept(self, visitor: 'ItemVisitor[T]') -> 'T':
        return visitor.visit_extern_crate_item(self)


@dataclass(frozen=True)
class Program(ASTNode):
    """A parsed source file: inner attributes and top-level items in source order"""
    items: Tuple[Item, ...] = ()
    attributes: Tuple[Attribute, ...] = ()
    location: Optional[SourceLocation] = _location()
