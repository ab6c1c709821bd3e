"""
Error Reporting

Two exception families for translation:

- SoftTranslationError: the item is skipped, a placeholder comment is written
  and the run continues.
- HardTranslationError: the whole run stops. Output already written is kept.

Plus a rustc-style diagnostic formatter used by the CLI for parse errors and
hard failures.
"""

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, List, Dict, TYPE_CHECKING
from .source_location import SourceLocation

if TYPE_CHECKING:
    from .nodes import UnsupportedType


# ---------------------------------------------------------------------------
# ANSI color helpers (disabled when NO_COLOR is set)
# ---------------------------------------------------------------------------

def _use_color() -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    explicit = os.environ.get("RS2ZIG_COLOR", "").lower()
    if explicit in ("0", "false", "no", "never"):
        return False
    return True

_BOLD   = "\033[1m"
_RED    = "\033[31m"
_BLUE   = "\033[34m"
_CYAN   = "\033[36m"
_RESET  = "\033[0m"

def _style(text: str, *codes: str, color: bool = True) -> str:
    if not color:
        return text
    prefix = "".join(codes)
    return f"{prefix}{text}{_RESET}" if prefix else text


# ---------------------------------------------------------------------------
# Diagnostic dataclass
# ---------------------------------------------------------------------------

@dataclass
class Diagnostic:
    """A single error to show the user."""
    message: str
    location: Optional[SourceLocation]
    code: Optional[str] = None
    help: Optional[str] = None


def format_diagnostic(
    diagnostic: Diagnostic,
    source_files: Dict[str, str],
    color: Optional[bool] = None,
) -> str:
    """
    Render a diagnostic in rustc style.

    Example output (plain, no color)::

        error[E0002]: unsupported type `[u8; 4]`
         --> winuser.rs:12:19
          |
        12 | pub type BYTES4 = [u8; 4];
          |                   ^^^^^^^
    """
    if color is None:
        color = _use_color()
    out: List[str] = []

    code_str = f"[{diagnostic.code}]" if diagnostic.code else ""
    out.append(
        _style(f"error{code_str}", _BOLD, _RED, color=color)
        + _style(f": {diagnostic.message}", _BOLD, color=color)
    )

    loc = diagnostic.location
    if loc is None:
        out.append(_style(" --> ", _BOLD, _BLUE, color=color) + "<unknown location>")
        _append_help(out, diagnostic, 1, color)
        return "\n".join(out)

    source = source_files.get(loc.file)
    src_lines = source.split("\n") if source is not None else []
    if not 1 <= loc.line <= len(src_lines):
        out.append(_style(" --> ", _BOLD, _BLUE, color=color) + str(loc))
        _append_help(out, diagnostic, 1, color)
        return "\n".join(out)

    gw = len(str(loc.line))
    code_line = src_lines[loc.line - 1]
    col_start = max(loc.column, 1) - 1
    if loc.end_line == loc.line and loc.end_column > loc.column:
        span_len = loc.end_column - loc.column
    else:
        span_len = _guess_span(code_line, col_start)

    out.append(_style(" " * gw + "--> ", _BOLD, _BLUE, color=color) + str(loc))
    out.append(_style(" " * (gw + 1) + "|", _BOLD, _BLUE, color=color))
    out.append(_style(str(loc.line).rjust(gw) + " | ", _BOLD, _BLUE, color=color) + code_line)
    carets = " " * col_start + "^" * max(1, span_len)
    out.append(_style(" " * (gw + 1) + "| ", _BOLD, _BLUE, color=color) + _style(carets, _BOLD, _RED, color=color))
    _append_help(out, diagnostic, gw, color)
    return "\n".join(out)


def _guess_span(code_line: str, col_start: int) -> int:
    """Guess token length when the end column is unavailable."""
    length = 0
    for ch in code_line[col_start:]:
        if ch in (" ", "\t", ";", ",", ")", "]", "}"):
            break
        length += 1
    return max(1, length)


def _append_help(out: List[str], diagnostic: Diagnostic, gw: int, color: bool) -> None:
    if not diagnostic.help:
        return
    out.append(_style(" " * (gw + 1) + "|", _BOLD, _BLUE, color=color))
    out.append(
        _style(" " * (gw + 1) + "= ", _BOLD, _CYAN, color=color)
        + _style("help: ", _BOLD, color=color)
        + diagnostic.help
    )


# ============================================================================
# Exception Classes
# ============================================================================

class Rs2ZigError(Exception):
    """Base exception for all rs2zig errors"""
    error_code = "E0001"

    def __init__(self, message: str, location: Optional[SourceLocation] = None):
        super().__init__(message)
        self.message = message
        self.location = location

    def __str__(self):
        if self.location:
            return f"{self.message} at {self.location}"
        return self.message

    def to_diagnostic(self) -> Diagnostic:
        return Diagnostic(message=self.message, location=self.location, code=self.error_code)


class TranslationError(Rs2ZigError):
    """Base class for errors raised while translating items"""


class SoftTranslationError(TranslationError, ABC):
    """The item is skipped with a placeholder comment; translation continues."""

    @abstractmethod
    def placeholder(self) -> str:
        raise NotImplementedError(f"{self.__class__.__name__} must implement placeholder()")


class UnhandledItemError(SoftTranslationError):
    """A recognized construct with no translation in this direction (plain fns, unknown macros)."""
    error_code = "W0001"

    def __init__(self, name: str, location: Optional[SourceLocation] = None):
        super().__init__(f"Unhandled item {name}", location)
        self.name = name

    def placeholder(self) -> str:
        return f"// Unhandled item: {self.name}"


class NotYetImplementedError(SoftTranslationError):
    """A gap with no rule at all yet."""
    error_code = "W0002"

    def __init__(self, construct: str, location: Optional[SourceLocation] = None):
        super().__init__(f"Not yet implemented: {construct}", location)
        self.construct = construct

    def placeholder(self) -> str:
        return f"// Item not yet implemented: {self.construct}"


class HardTranslationError(TranslationError):
    """Aborts the whole run."""


class UnsupportedTypeError(HardTranslationError):
    """A type shape outside the scalar/pointer subset."""
    error_code = "E0002"

    def __init__(self, ty: 'UnsupportedType', location: Optional[SourceLocation] = None):
        super().__init__(f"unsupported {ty.kind} type `{ty.text}`", location or ty.location)
        self.ty = ty


class UnsupportedSyntaxError(HardTranslationError):
    """A syntax form with no translation rule (glob or renamed imports, tuple fields, ...)."""
    error_code = "E0003"
    message_prefix = "unsupported syntax: "

    def __init__(self, construct: str, location: Optional[SourceLocation] = None):
        super().__init__(f"{self.message_prefix}{construct}", location)
        self.construct = construct


class MacroSyntaxError(UnsupportedSyntaxError):
    """A macro payload that does not have the shape its macro requires."""
    error_code = "E0004"
    message_prefix = ""
