"""
Import Expander

Flattens a use-tree into import paths: `a::{b, c::d}` -> (a, b), (a, c, d).
"""

from typing import List, Tuple

from ..shared import (
    UseTreeVisitor, UseTree, UsePath, UseName, UseRename, UseGlob, UseGroup,
    UnsupportedSyntaxError,
)

ImportPath = Tuple[str, ...]


class UseTreeExpander(UseTreeVisitor[List[ImportPath]]):
    """Expands one use-tree below a fixed prefix"""

    def __init__(self, prefix: ImportPath = ()):
        self.prefix = prefix

    def visit_use_path(self, node: UsePath) -> List[ImportPath]:
        return node.tree.accept(UseTreeExpander(self.prefix + (node.ident,)))

    def visit_use_name(self, node: UseName) -> List[ImportPath]:
        return [self.prefix + (node.ident,)]

    def visit_use_rename(self, node: UseRename) -> List[ImportPath]:
        raise UnsupportedSyntaxError(f"renamed import `{node.ident} as {node.rename}`")

    def visit_use_glob(self, node: UseGlob) -> List[ImportPath]:
        raise UnsupportedSyntaxError("glob import `*`")

    def visit_use_group(self, node: UseGroup) -> List[ImportPath]:
        paths: List[ImportPath] = []
        for tree in node.items:
            paths.extend(tree.accept(self))
        return paths


def expand_use_tree(tree: UseTree) -> List[ImportPath]:
    """
    All import paths of a use-tree, in source order.

    Raises UnsupportedSyntaxError for glob and renamed imports.
    """
    return tree.accept(UseTreeExpander())
