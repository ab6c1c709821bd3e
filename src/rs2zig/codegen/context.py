"""
Translation Context

Per-run mutable state shared by the item translators.
"""

from dataclasses import dataclass, field
from typing import Set

from ..utils.config import DEFAULT_LINK_NAME


@dataclass
class TranslationContext:
    """
    - link_name: library name written into every extern declaration
    - toplevel_imports: top-level modules that already have an @import line

    Created once per run by the driver. Written by the import translator,
    read by the foreign-block translator.
    """
    link_name: str = DEFAULT_LINK_NAME
    toplevel_imports: Set[str] = field(default_factory=set)

    def register_module(self, module: str) -> bool:
        """Record a module; True the first time it is seen."""
        if module in self.toplevel_imports:
            return False
        self.toplevel_imports.add(module)
        return True
