"""
Configuration constants to replace magic strings throughout rs2zig
"""

import os
import tempfile

# Parser configuration constants (cache under temp dir to avoid cluttering project root)
DEFAULT_PARSER_CACHE_FILE = os.path.join(tempfile.gettempdir(), "rs2zig_parser.cache")
GRAMMAR_FILE = "grammar.lark"

# Link name attached to every extern declaration unless overridden
DEFAULT_LINK_NAME = "user32"

# Calling convention tag attached to every extern declaration
CALLING_CONVENTION = ".Stdcall"

# First path segment of imports that only bring C scalar aliases into scope
SCALAR_TYPE_NAMESPACE = "ctypes"

# Module resolution constants
SOURCE_PATH_SEPARATOR = "::"
TARGET_PATH_SEPARATOR = "."
TARGET_MODULE_FILE_EXTENSION = ".zig"

# Placeholders
UNKNOWN_EXPR_PLACEHOLDER = "???"
ANONYMOUS_PARAM_NAME = "_"
VOID_RETURN_TYPE = "void"

# Macros with a translation rule
STRUCT_MACRO = "STRUCT"
DECLARE_HANDLE_MACRO = "DECLARE_HANDLE"

# File encoding constants
DEFAULT_FILE_ENCODING = "utf-8"
