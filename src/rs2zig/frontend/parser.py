"""
Parser

Source text -> Program, through a lark LALR grammar and RustTransformer.
The same grammar has a second start symbol for STRUCT! payloads so the macro
translator can re-parse a token stream as a struct definition.
"""

from typing import List, Optional, Sequence
from pathlib import Path
from lark import Lark
from lark.exceptions import (
    UnexpectedToken, UnexpectedCharacters, UnexpectedEOF, VisitError,
    ParseError as LarkParseError,
)
import logging

from ..shared.nodes import Program, StructItem, TokenTree, render_tokens
from ..shared.errors import Rs2ZigError, Diagnostic
from ..shared.source_location import SourceLocation
from ..utils.config import DEFAULT_PARSER_CACHE_FILE, GRAMMAR_FILE
from .transformers.base import RustTransformer

logger = logging.getLogger("rs2zig.frontend.parser")

FILE_START = "file"
STRUCT_START = "struct_macro_body"
STRUCT_PAYLOAD_FILE = "<STRUCT! payload>"


class ParseError(Rs2ZigError):
    """Parse error with source location"""
    error_code = "E0001"

    def __init__(self, message: str, source_file: str, location: Optional[SourceLocation] = None,
                 expected: Sequence[str] = ()):
        super().__init__(message, location)
        self.source_file = source_file
        self.expected = tuple(expected)

    def __str__(self):
        if self.location:
            return f"{self.message} at {self.location}"
        return f"{self.message} in {self.source_file}"

    def to_diagnostic(self) -> Diagnostic:
        diagnostic = super().to_diagnostic()
        if self.expected:
            diagnostic.help = "expected one of: " + ", ".join(self.expected)
        return diagnostic


class Parser:
    """
    Front-end parser.

    - Takes source code, returns the AST
    - Preserves source locations
    - Converts lark errors to ParseError
    - Uses lark's grammar cache
    """

    def __init__(self, cache_file: str = DEFAULT_PARSER_CACHE_FILE):
        grammar_path = Path(__file__).parent / GRAMMAR_FILE
        self.parser = Lark.open(
            str(grammar_path),
            start=[FILE_START, STRUCT_START],
            parser='lalr',              # Required for caching
            cache=cache_file,
            propagate_positions=True,   # Location tracking for diagnostics
            maybe_placeholders=False,
        )
        self.transformer = RustTransformer()

    def parse(self, source: str, source_file: str = "main.rs") -> Program:
        """Parse a whole source file."""
        logger.debug("parsing %s (%d bytes)", source_file, len(source))
        return self._parse(source, source_file, FILE_START)

    def parse_struct(self, tokens: Sequence[TokenTree], source_file: str = STRUCT_PAYLOAD_FILE) -> StructItem:
        """
        Parse a macro token stream as a struct definition.

        The tokens are rendered back to text (one space between tokens) and
        parsed from the struct_macro_body start symbol.
        """
        text = render_tokens(tuple(tokens))
        logger.debug("re-parsing macro payload as struct: %s", text)
        return self._parse(text, source_file, STRUCT_START)

    def _parse(self, source: str, source_file: str, start: str):
        self.transformer.current_file = source_file
        self.transformer.current_source = source
        try:
            tree = self.parser.parse(source, start=start)
            return self.transformer.transform(tree)

        except UnexpectedEOF as e:
            raise ParseError(
                "unexpected end of input", source_file,
                _end_location(source, source_file), self._describe_expected(e.expected),
            ) from e

        except UnexpectedToken as e:
            if e.token.type == '$END':
                location = _end_location(source, source_file)
                message = "unexpected end of input"
            else:
                location = _error_location(e, source_file, len(e.token))
                message = f"unexpected token `{e.token}`"
            raise ParseError(message, source_file, location, self._describe_expected(e.expected)) from e

        except UnexpectedCharacters as e:
            raise ParseError(
                f"unexpected character `{e.char}`", source_file,
                _error_location(e, source_file, 1),
            ) from e

        except VisitError as e:
            if isinstance(e.orig_exc, Rs2ZigError):
                raise e.orig_exc from e
            raise ParseError(f"Parse error: {e.orig_exc}", source_file) from e

        except LarkParseError as e:
            raise ParseError(f"Parse error: {e}", source_file) from e

    def _describe_expected(self, names) -> List[str]:
        """Terminal names -> `literal` for keywords and punctuation, the name otherwise."""
        described = []
        for name in sorted(names):
            try:
                terminal = self.parser.get_terminal(name)
            except KeyError:
                described.append(name)
                continue
            if terminal.pattern.type == "str":
                described.append(f"`{terminal.pattern.value}`")
            else:
                described.append(name)
        return described


def _error_location(e, source_file: str, width: int) -> Optional[SourceLocation]:
    line = getattr(e, 'line', None)
    column = getattr(e, 'column', None)
    if not line or line < 1:
        return None
    return SourceLocation(
        file=source_file,
        line=line,
        column=column,
        start=e.pos_in_stream or 0,
        end=(e.pos_in_stream or 0) + width,
        end_line=line,
        end_column=column + width,
    )


def _end_location(source: str, source_file: str) -> SourceLocation:
    lines = source.split("\n")
    return SourceLocation(
        file=source_file,
        line=len(lines),
        column=len(lines[-1]) + 1,
        start=len(source),
        end=len(source),
    )
