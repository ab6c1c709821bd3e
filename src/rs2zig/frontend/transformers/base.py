"""
rs2zig AST Transformer
Converts the lark parse tree to rs2zig AST nodes

Method names match grammar rules and aliases in grammar.lark. With
@v_args(inline=True, meta=True) every method receives the rule's meta
followed by its children; anonymous tokens (keywords, punctuation) are
filtered out by lark, named terminals (NAME, STRING, MUT, UNSAFE, ...) are
kept.
"""

from dataclasses import dataclass, replace
from typing import List, Optional, Any, Tuple
from typing_extensions import TypeAlias
import logging

from lark import Transformer, v_args
from lark.lexer import Token

from ...shared import (
    ASTNode, Visibility, Delimiter, StructKind, SourceLocation, Rs2ZigError,
    TokenTree, IdentToken, PunctToken, LiteralToken, LifetimeToken, GroupToken,
    Attribute, TypeDescriptor, Expression, BoolLiteral, PathExpr, UnitExpr,
    UseTree, UsePath, UseName, UseRename, UseGlob, UseGroup,
    Item, UseItem, ConstItem, StaticItem, TypeAliasItem,
    FnParam, ForeignItem, ForeignFn, ForeignStatic, ForeignModItem,
    MacroItem, FnItem, StructField, StructItem, EnumVariant, EnumItem,
    ModItem, ImplItem, TraitItem, ExternCrateItem, Program,
)
from ...utils.config import SOURCE_PATH_SEPARATOR
from .literals import LiteralParser
from .functions import SignatureParser, ParameterParser, VARIADIC
from .expressions import ExpressionParser
from .types import TypeParser, PathSegment

LarkMeta: TypeAlias = Any  # Lark's internal Meta object

logger: logging.Logger = logging.getLogger(__name__)


@dataclass
class StructBody:
    """Internal result of named_fields / tuple_fields / unit_fields"""
    kind: StructKind
    fields: Tuple[StructField, ...] = ()


def _is_token(value: Any, token_type: str) -> bool:
    return isinstance(value, Token) and value.type == token_type


def _split_modifiers(children: Tuple[Any, ...]) -> Tuple[Tuple[Attribute, ...], Visibility, Tuple[Any, ...]]:
    """Leading outer attributes and optional visibility, then the rest"""
    attributes: List[Attribute] = []
    visibility = Visibility.PRIVATE
    index = 0
    while index < len(children) and isinstance(children[index], Attribute):
        attributes.append(children[index])
        index += 1
    if index < len(children) and isinstance(children[index], Visibility):
        visibility = children[index]
        index += 1
    return tuple(attributes), visibility, children[index:]


@v_args(inline=True, meta=True)
class RustTransformer(Transformer):
    """
    rs2zig AST Transformer

    Catches missing transformer methods and reports them by grammar rule
    instead of leaking lark Tree objects into the AST.
    """

    def __default__(self, data, children, meta):
        raise Rs2ZigError(f"Missing transformer method for grammar rule '{data}'")

    def __init__(self) -> None:
        super().__init__()
        self.signature_parser: SignatureParser = SignatureParser()
        self.parameter_parser: ParameterParser = ParameterParser(self._extract_location)
        self.expression_parser: ExpressionParser = ExpressionParser(self._extract_location)
        self.type_parser: TypeParser = TypeParser(self._extract_location, self._source_text)
        self.current_file: str = ""    # Must be set by parser before use
        self.current_source: str = ""  # Used for the text of unsupported types

    def _extract_location(self, meta: LarkMeta) -> Optional[SourceLocation]:
        """Extract location from Lark meta object"""
        if not self.current_file:
            raise RuntimeError(
                "Parser bug: current_file not set. "
                "Parser must set current_file before transforming."
            )
        if meta is None or getattr(meta, 'empty', True):
            return None
        return SourceLocation(
            file=self.current_file,
            line=meta.line,
            column=meta.column,
            start=meta.start_pos,
            end=meta.end_pos,
            end_line=meta.end_line,
            end_column=meta.end_column,
        )

    def _source_text(self, meta: LarkMeta) -> str:
        if meta is None or getattr(meta, 'empty', True):
            return ""
        return self.current_source[meta.start_pos:meta.end_pos]

    # =========================================================================
    # PROGRAM STRUCTURE
    # =========================================================================

    def file(self, meta: LarkMeta, *children: ASTNode) -> Program:
        attributes = tuple(child for child in children if isinstance(child, Attribute))
        items = tuple(child for child in children if isinstance(child, Item))
        return Program(items=items, attributes=attributes, location=self._extract_location(meta))

    def struct_macro_body(self, meta: LarkMeta, *children: Any) -> StructItem:
        """STRUCT! payload: outer_attr* vis? struct_item"""
        attributes, visibility, rest = _split_modifiers(children)
        return replace(rest[0], visibility=visibility, attributes=attributes + rest[0].attributes)

    def item(self, meta: LarkMeta, *children: Any) -> Item:
        """Grammar: outer_attr* vis? _item_kind - modifiers are folded into the item node"""
        attributes, visibility, rest = _split_modifiers(children)
        node = rest[0]
        return replace(node, visibility=visibility, attributes=attributes + node.attributes)

    # =========================================================================
    # ATTRIBUTES AND VISIBILITY
    # =========================================================================

    def outer_attr(self, meta: LarkMeta, path: str, *tokens: TokenTree) -> Attribute:
        return Attribute(path=path, tokens=tokens, is_inner=False, location=self._extract_location(meta))

    def inner_attr(self, meta: LarkMeta, path: str, *tokens: TokenTree) -> Attribute:
        return Attribute(path=path, tokens=tokens, is_inner=True, location=self._extract_location(meta))

    def attr_path(self, meta: LarkMeta, *names: Token) -> str:
        return SOURCE_PATH_SEPARATOR.join(str(name) for name in names)

    def vis(self, meta: LarkMeta, scope: Optional[Tuple[str, ...]] = None) -> Visibility:
        """Plain `pub` is public; `pub(crate)`, `pub(super)`, `pub(in path)` are not"""
        return Visibility.PUBLIC if scope is None else Visibility.PRIVATE

    def vis_scope(self, meta: LarkMeta, *names: Token) -> Tuple[str, ...]:
        # `(crate)` has no named children; the scope is still present
        return tuple(str(name) for name in names) or ("crate",)

    def tuple_field_vis(self, meta: LarkMeta) -> Visibility:
        return Visibility.PUBLIC

    # =========================================================================
    # USE DECLARATIONS
    # =========================================================================

    def use_item(self, meta: LarkMeta, tree: UseTree) -> UseItem:
        return UseItem(tree=tree, location=self._extract_location(meta))

    def use_path(self, meta: LarkMeta, name: Token, tree: UseTree) -> UsePath:
        return UsePath(ident=str(name), tree=tree)

    def use_name(self, meta: LarkMeta, name: Token) -> UseName:
        return UseName(ident=str(name))

    def use_rename(self, meta: LarkMeta, name: Token, rename: str) -> UseRename:
        return UseRename(ident=str(name), rename=rename)

    def use_glob(self, meta: LarkMeta) -> UseGlob:
        return UseGlob()

    def use_group(self, meta: LarkMeta, *trees: UseTree) -> UseGroup:
        return UseGroup(items=trees)

    def binding_name(self, meta: LarkMeta, token: Token) -> str:
        return str(token)

    # =========================================================================
    # CONSTANTS, STATICS, TYPE ALIASES
    # =========================================================================

    def const_item(self, meta: LarkMeta, name: str, ty: TypeDescriptor, expr: Expression) -> ConstItem:
        return ConstItem(name=name, ty=ty, expr=expr, location=self._extract_location(meta))

    def static_item(self, meta: LarkMeta, *args: Any) -> StaticItem:
        """Grammar: "static" MUT? NAME ":" type "=" expr ";" """
        is_mut = _is_token(args[0], 'MUT')
        name, ty, expr = args[1:] if is_mut else args
        return StaticItem(name=str(name), ty=ty, expr=expr, is_mut=is_mut,
                          location=self._extract_location(meta))

    def type_alias(self, meta: LarkMeta, name: Token, *args: Any) -> TypeAliasItem:
        """Grammar: "type" NAME generic_params? "=" type ";" """
        generics: Tuple[str, ...] = args[0] if len(args) == 2 else ()
        return TypeAliasItem(name=str(name), ty=args[-1], generics=generics,
                             location=self._extract_location(meta))

    # =========================================================================
    # FOREIGN BLOCKS
    # =========================================================================

    def foreign_mod(self, meta: LarkMeta, *children: Any) -> ForeignModItem:
        """Grammar: "unsafe"? "extern" STRING? "{" inner_attr* foreign_item* "}" """
        abi: Optional[str] = None
        attributes: List[Attribute] = []
        items: List[ForeignItem] = []
        for child in children:
            if _is_token(child, 'STRING'):
                abi = child[1:-1]
            elif isinstance(child, Attribute):
                attributes.append(child)
            else:
                items.append(child)
        return ForeignModItem(abi=abi, items=tuple(items), attributes=tuple(attributes),
                              location=self._extract_location(meta))

    def foreign_item(self, meta: LarkMeta, *children: Any) -> ForeignItem:
        attributes, visibility, rest = _split_modifiers(children)
        return replace(rest[0], visibility=visibility, attributes=attributes)

    def foreign_fn(self, meta: LarkMeta, *args: Any) -> ForeignFn:
        signature = self.signature_parser.parse_signature(args)
        return ForeignFn(
            name=signature.name,
            params=signature.params,
            return_type=signature.return_type,
            is_variadic=signature.is_variadic,
            location=self._extract_location(meta),
        )

    def foreign_static(self, meta: LarkMeta, *args: Any) -> ForeignStatic:
        is_mut = _is_token(args[0], 'MUT')
        name, ty = args[1:] if is_mut else args
        return ForeignStatic(name=str(name), ty=ty, is_mut=is_mut, location=self._extract_location(meta))

    # =========================================================================
    # FUNCTIONS
    # =========================================================================

    def fn_item(self, meta: LarkMeta, *args: Any) -> FnItem:
        signature = self.signature_parser.parse_signature(args)
        return FnItem(
            name=signature.name,
            params=signature.params,
            return_type=signature.return_type,
            generics=signature.generics,
            body=signature.body.tokens if signature.body is not None else (),
            location=self._extract_location(meta),
        )

    def fn_params(self, meta: LarkMeta, *params: Any) -> List[Any]:
        return list(params)

    def typed_param(self, meta: LarkMeta, name: Optional[str], ty: TypeDescriptor) -> FnParam:
        return self.parameter_parser.parse_typed(meta, name, ty)

    def ref_receiver(self, meta: LarkMeta, *tokens: Token) -> FnParam:
        return self.parameter_parser.parse_receiver(meta, tokens)

    def value_receiver(self, meta: LarkMeta, *tokens: Token) -> FnParam:
        return self.parameter_parser.parse_receiver(meta, tokens)

    def param_pattern(self, meta: LarkMeta, *tokens: Token) -> Optional[str]:
        return ParameterParser.pattern_name(tokens)

    def variadic(self, meta: LarkMeta):
        return VARIADIC

    def ret_type(self, meta: LarkMeta, ty: TypeDescriptor) -> TypeDescriptor:
        return ty

    # =========================================================================
    # MACRO INVOCATIONS
    # =========================================================================

    def macro_item(self, meta: LarkMeta, path: Tuple[str, ...], *args: Any) -> MacroItem:
        """Grammar: macro_path "!" NAME? _delim_group ";"? """
        ident = str(args[0]) if len(args) == 2 else None
        group: GroupToken = args[-1]
        return MacroItem(path=path, tokens=group.tokens, delimiter=group.delimiter, ident=ident,
                         location=self._extract_location(meta))

    def macro_path(self, meta: LarkMeta, *names: Token) -> Tuple[str, ...]:
        return tuple(str(name) for name in names)

    # =========================================================================
    # STRUCTS AND ENUMS
    # =========================================================================

    def struct_item(self, meta: LarkMeta, name: Token, *args: Any) -> StructItem:
        """Grammar: "struct" NAME generic_params? _struct_body"""
        generics: Tuple[str, ...] = args[0] if len(args) == 2 else ()
        body: StructBody = args[-1]
        return StructItem(name=str(name), fields=body.fields, kind=body.kind, generics=generics,
                          location=self._extract_location(meta))

    def named_fields(self, meta: LarkMeta, *fields: StructField) -> StructBody:
        return StructBody(StructKind.NAMED, fields)

    def tuple_fields(self, meta: LarkMeta, *fields: StructField) -> StructBody:
        return StructBody(StructKind.TUPLE, fields)

    def unit_fields(self, meta: LarkMeta) -> StructBody:
        return StructBody(StructKind.UNIT)

    def struct_field(self, meta: LarkMeta, *children: Any) -> StructField:
        attributes, visibility, (name, ty) = _split_modifiers(children)
        return StructField(name=str(name), ty=ty, visibility=visibility, attributes=attributes,
                           location=self._extract_location(meta))

    def tuple_field(self, meta: LarkMeta, *children: Any) -> StructField:
        attributes, visibility, (ty,) = _split_modifiers(children)
        return StructField(name=None, ty=ty, visibility=visibility, attributes=attributes,
                           location=self._extract_location(meta))

    def enum_item(self, meta: LarkMeta, name: Token, *args: Any) -> EnumItem:
        generics: Tuple[str, ...] = ()
        variants: List[EnumVariant] = []
        for arg in args:
            if isinstance(arg, tuple):
                generics = arg
            else:
                variants.append(arg)
        return EnumItem(name=str(name), variants=tuple(variants), generics=generics,
                        location=self._extract_location(meta))

    def enum_variant(self, meta: LarkMeta, *children: Any) -> EnumVariant:
        """Grammar: outer_attr* NAME (paren_group | brace_group)? ("=" expr)?"""
        attributes, _, rest = _split_modifiers(children)
        name, rest = rest[0], rest[1:]
        fields: Optional[GroupToken] = None
        discriminant: Optional[Expression] = None
        for part in rest:
            if isinstance(part, GroupToken):
                fields = part
            else:
                discriminant = part
        return EnumVariant(name=str(name), fields=fields, discriminant=discriminant,
                           attributes=attributes, location=self._extract_location(meta))

    # =========================================================================
    # MODULES, IMPLS, TRAITS, EXTERN CRATES
    # =========================================================================

    def mod_decl(self, meta: LarkMeta, name: Token) -> ModItem:
        return ModItem(name=str(name), items=None, location=self._extract_location(meta))

    def mod_inline(self, meta: LarkMeta, name: Token, *children: Any) -> ModItem:
        attributes = tuple(child for child in children if isinstance(child, Attribute))
        items = tuple(child for child in children if isinstance(child, Item))
        return ModItem(name=str(name), items=items, attributes=attributes,
                       location=self._extract_location(meta))

    def impl_item(self, meta: LarkMeta, *args: Any) -> ImplItem:
        """Grammar: UNSAFE? "impl" generic_params? type ("for" type)? brace_group"""
        is_unsafe = _is_token(args[0], 'UNSAFE')
        rest = args[1:] if is_unsafe else args
        generics: Tuple[str, ...] = ()
        if isinstance(rest[0], tuple):
            generics, rest = rest[0], rest[1:]
        body: GroupToken = rest[-1]
        types = rest[:-1]
        # `impl Trait for Type`: the implementing type comes second
        self_ty, trait_ty = (types[1], types[0]) if len(types) == 2 else (types[0], None)
        return ImplItem(self_ty=self_ty, trait_ty=trait_ty, generics=generics, body=body.tokens,
                        is_unsafe=is_unsafe, location=self._extract_location(meta))

    def trait_item(self, meta: LarkMeta, *args: Any) -> TraitItem:
        """Grammar: UNSAFE? "trait" NAME generic_params? (":" bound ("+" bound)*)? brace_group"""
        is_unsafe = _is_token(args[0], 'UNSAFE')
        rest = args[1:] if is_unsafe else args
        name = rest[0]
        generics: Tuple[str, ...] = rest[1] if len(rest) > 2 and isinstance(rest[1], tuple) else ()
        body: GroupToken = rest[-1]
        return TraitItem(name=str(name), generics=generics, body=body.tokens, is_unsafe=is_unsafe,
                         location=self._extract_location(meta))

    def extern_crate(self, meta: LarkMeta, name: Token, rename: Optional[str] = None) -> ExternCrateItem:
        return ExternCrateItem(name=str(name), rename=rename, location=self._extract_location(meta))

    # =========================================================================
    # GENERICS
    # =========================================================================

    def generic_params(self, meta: LarkMeta, *params: str) -> Tuple[str, ...]:
        return tuple(params)

    def generic_param(self, meta: LarkMeta, name: Token, *bounds: Any) -> str:
        """Only the parameter name is kept; bounds and defaults are dropped"""
        return str(name)

    # =========================================================================
    # TYPES
    # =========================================================================

    def path_type(self, meta: LarkMeta, *segments: PathSegment) -> TypeDescriptor:
        return self.type_parser.parse_path(meta, segments)

    def path_segment(self, meta: LarkMeta, name: Token, generic_args: Optional[tuple] = None) -> PathSegment:
        return (str(name), generic_args)

    def generic_args(self, meta: LarkMeta, *args: Any) -> tuple:
        return tuple(args)

    def const_pointer_type(self, meta: LarkMeta, pointee: TypeDescriptor) -> TypeDescriptor:
        return self.type_parser.parse_pointer(meta, True, pointee)

    def mut_pointer_type(self, meta: LarkMeta, mut: Token, pointee: TypeDescriptor) -> TypeDescriptor:
        return self.type_parser.parse_pointer(meta, False, pointee)

    def ref_type(self, meta: LarkMeta, *args: Any) -> TypeDescriptor:
        return self.type_parser.unsupported(meta, "reference")

    def array_type(self, meta: LarkMeta, element: TypeDescriptor, length: Expression) -> TypeDescriptor:
        return self.type_parser.unsupported(meta, "array")

    def slice_type(self, meta: LarkMeta, element: TypeDescriptor) -> TypeDescriptor:
        return self.type_parser.unsupported(meta, "slice")

    def tuple_type(self, meta: LarkMeta, *elements: TypeDescriptor) -> TypeDescriptor:
        return self.type_parser.unsupported(meta, "tuple")

    def paren_type(self, meta: LarkMeta, inner: TypeDescriptor) -> TypeDescriptor:
        # `(T)` is `T`
        return inner

    def never_type(self, meta: LarkMeta) -> TypeDescriptor:
        return self.type_parser.unsupported(meta, "never")

    def bare_fn_type(self, meta: LarkMeta, *args: Any) -> TypeDescriptor:
        return self.type_parser.unsupported(meta, "fn")

    def bare_fn_param(self, meta: LarkMeta, *args: Any) -> None:
        return None

    # =========================================================================
    # EXPRESSIONS
    # =========================================================================

    def binary_expr(self, meta: LarkMeta, left: Expression, operator: str, right: Expression) -> Expression:
        return self.expression_parser.parse_binary(meta, left, operator, right)

    def as_expr(self, meta: LarkMeta, expr: Expression, target: TypeDescriptor) -> Expression:
        return self.expression_parser.parse_cast(meta, expr, target)

    def prefix_expr(self, meta: LarkMeta, operator: str, operand: Expression) -> Expression:
        return self.expression_parser.parse_prefix(meta, operator, operand)

    def call_expr(self, meta: LarkMeta, func: Expression, *args: Expression) -> Expression:
        return self.expression_parser.parse_call(meta, func, args)

    def paren_expr(self, meta: LarkMeta, expr: Expression) -> Expression:
        return self.expression_parser.parse_paren(meta, expr)

    def unit_expr(self, meta: LarkMeta) -> Expression:
        return UnitExpr(location=self._extract_location(meta))

    def int_lit(self, meta: LarkMeta, token: Token) -> Expression:
        return LiteralParser.parse(token, self._extract_location(meta))

    float_lit = int_lit
    str_lit = int_lit
    char_lit = int_lit

    def true_lit(self, meta: LarkMeta) -> Expression:
        return BoolLiteral(value=True, location=self._extract_location(meta))

    def false_lit(self, meta: LarkMeta) -> Expression:
        return BoolLiteral(value=False, location=self._extract_location(meta))

    def expr_path(self, meta: LarkMeta, *names: Token) -> Expression:
        return PathExpr(segments=tuple(str(name) for name in names), location=self._extract_location(meta))

    def _operator(self, meta: LarkMeta, token: Token) -> str:
        return str(token)

    bitor_op = _operator
    bitxor_op = _operator
    bitand_op = _operator
    shift_op = _operator
    sum_op = _operator
    product_op = _operator
    unary_op = _operator

    # =========================================================================
    # TOKEN TREES
    # =========================================================================

    def tt_ident(self, meta: LarkMeta, token: Token) -> TokenTree:
        return IdentToken(str(token))

    def tt_literal(self, meta: LarkMeta, token: Token) -> TokenTree:
        return LiteralToken(str(token))

    def tt_lifetime(self, meta: LarkMeta, token: Token) -> TokenTree:
        return LifetimeToken(str(token))

    def tt_punct(self, meta: LarkMeta, token: Token) -> TokenTree:
        return PunctToken(str(token))

    def paren_group(self, meta: LarkMeta, *tokens: TokenTree) -> GroupToken:
        return GroupToken(Delimiter.PAREN, tokens)

    def bracket_group(self, meta: LarkMeta, *tokens: TokenTree) -> GroupToken:
        return GroupToken(Delimiter.BRACKET, tokens)

    def brace_group(self, meta: LarkMeta, *tokens: TokenTree) -> GroupToken:
        return GroupToken(Delimiter.BRACE, tokens)
