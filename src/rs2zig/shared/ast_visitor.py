"""
AST Visitor Pattern

This module provides one abstract visitor per closed node family:
1. ItemVisitor (top-level declarations)
2. TypeVisitor (type descriptors)
3. UseTreeVisitor (use-tree shapes)

Design:
- Abstract base classes with visit_* methods for each node kind
- A visitor that leaves a variant unimplemented cannot be instantiated, so
  adding a node kind forces every visitor to handle it
- Nodes dispatch through accept() (LLVM-style polymorphic dispatch)
"""

from typing import TypeVar, Generic, TYPE_CHECKING
from abc import ABC, abstractmethod

if TYPE_CHECKING:
    from .nodes import (
        Item, UseItem, ConstItem, StaticItem, TypeAliasItem, ForeignModItem,
        MacroItem, FnItem, StructItem, EnumItem, ModItem, ImplItem, TraitItem,
        ExternCrateItem, NamedType, PointerType, UnsupportedType,
        UsePath, UseName, UseRename, UseGlob, UseGroup,
    )

T = TypeVar('T')


class ItemVisitor(ABC, Generic[T]):
    """
    Visitor over top-level items.

    Items with a dedicated translation rule MUST be implemented:
    - visit_use_item, visit_const_item, visit_type_alias_item
    - visit_foreign_mod_item, visit_macro_item, visit_fn_item

    The remaining kinds (static, struct, enum, mod, impl, trait, extern crate)
    default to visit_other_item, which is also abstract.

    Usage:
        class ItemNamer(ItemVisitor[str]):
            def visit_const_item(self, node) -> str:
                return node.name
            ...

        name = item.accept(ItemNamer())
    """

    @abstractmethod
    def visit_use_item(self, node: 'UseItem') -> T:
        raise NotImplementedError(f"{self.__class__.__name__} must implement visit_use_item()")

    @abstractmethod
    def visit_const_item(self, node: 'ConstItem') -> T:
        raise NotImplementedError(f"{self.__class__.__name__} must implement visit_const_item()")

    @abstractmethod
    def visit_type_alias_item(self, node: 'TypeAliasItem') -> T:
        raise NotImplementedError(f"{self.__class__.__name__} must implement visit_type_alias_item()")

    @abstractmethod
    def visit_foreign_mod_item(self, node: 'ForeignModItem') -> T:
        raise NotImplementedError(f"{self.__class__.__name__} must implement visit_foreign_mod_item()")

    @abstractmethod
    def visit_macro_item(self, node: 'MacroItem') -> T:
        raise NotImplementedError(f"{self.__class__.__name__} must implement visit_macro_item()")

    @abstractmethod
    def visit_fn_item(self, node: 'FnItem') -> T:
        raise NotImplementedError(f"{self.__class__.__name__} must implement visit_fn_item()")

    @abstractmethod
    def visit_other_item(self, node: 'Item') -> T:
        raise NotImplementedError(f"{self.__class__.__name__} must implement visit_other_item()")

    def visit_static_item(self, node: 'StaticItem') -> T:
        return self.visit_other_item(node)

    def visit_struct_item(self, node: 'StructItem') -> T:
        return self.visit_other_item(node)

    def visit_enum_item(self, node: 'EnumItem') -> T:
        return self.visit_other_item(node)

    def visit_mod_item(self, node: 'ModItem') -> T:
        return self.visit_other_item(node)

    def visit_impl_item(self, node: 'ImplItem') -> T:
        return self.visit_other_item(node)

    def visit_trait_item(self, node: 'TraitItem') -> T:
        return self.visit_other_item(node)

    def visit_extern_crate_item(self, node: 'ExternCrateItem') -> T:
        return self.visit_other_item(node)


class TypeVisitor(ABC, Generic[T]):
    """Visitor over type descriptors. All three variants are required."""

    @abstractmethod
    def visit_named_type(self, node: 'NamedType') -> T:
        raise NotImplementedError(f"{self.__class__.__name__} must implement visit_named_type()")

    @abstractmethod
    def visit_pointer_type(self, node: 'PointerType') -> T:
        raise NotImplementedError(f"{self.__class__.__name__} must implement visit_pointer_type()")

    @abstractmethod
    def visit_unsupported_type(self, node: 'UnsupportedType') -> T:
        raise NotImplementedError(f"{self.__class__.__name__} must implement visit_unsupported_type()")


class UseTreeVisitor(ABC, Generic[T]):
    """Visitor over use-tree shapes. All five variants are required."""

    @abstractmethod
    def visit_use_path(self, node: 'UsePath') -> T:
        raise NotImplementedError(f"{self.__class__.__name__} must implement visit_use_path()")

    @abstractmethod
    def visit_use_name(self, node: 'UseName') -> T:
        raise NotImplementedError(f"{self.__class__.__name__} must implement visit_use_name()")

    @abstractmethod
    def visit_use_rename(self, node: 'UseRename') -> T:
        raise NotImplementedError(f"{self.__class__.__name__} must implement visit_use_rename()")

    @abstractmethod
    def visit_use_glob(self, node: 'UseGlob') -> T:
        raise NotImplementedError(f"{self.__class__.__name__} must implement visit_use_glob()")

    @abstractmethod
    def visit_use_group(self, node: 'UseGroup') -> T:
        raise NotImplementedError(f"{self.__class__.__name__} must implement visit_use_group()")
