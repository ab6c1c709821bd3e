#!/usr/bin/env python3
"""
Tests for STRUCT! and DECLARE_HANDLE! expansion and for macro dispatch.
"""

import pytest
from rs2zig.codegen import MacroExpander, LineSink
from rs2zig.shared import (
    MacroItem, IdentToken, PunctToken, LiteralToken, Delimiter,
    MacroSyntaxError, UnsupportedTypeError, UnhandledItemError, NotYetImplementedError,
    Rs2ZigError, format_diagnostic,
)


def _no_struct_parser(tokens):
    raise AssertionError("struct parser must not be called")


class TestStructMacro:
    def test_named_fields(self, translate_lines):
        lines = translate_lines("STRUCT!{struct POINT {\n    x: LONG,\n    y: LONG,\n}}")
        assert lines == [
            "pub const POINT = extern struct {",
            "    x: LONG,",
            "    y: LONG,",
            "};",
        ]

    def test_field_types_are_mapped(self, translate_lines):
        lines = translate_lines("STRUCT!{struct S {a: c_uchar, b: *const c_char}}")
        assert lines == [
            "pub const S = extern struct {",
            "    a: u8,",
            "    b: ?*const i8,",
            "};",
        ]

    def test_always_public(self, translate_lines):
        lines = translate_lines("STRUCT!{struct S {x: c_int}}")
        assert lines[0] == "pub const S = extern struct {"

    def test_attributes_and_field_visibility(self, translate_lines):
        source = "STRUCT!{#[debug] struct RECT {pub left: LONG, #[doc = \"x\"] pub top: LONG}}"
        assert translate_lines(source) == [
            "pub const RECT = extern struct {",
            "    left: LONG,",
            "    top: LONG,",
            "};",
        ]

    def test_unit_struct(self, translate_lines):
        assert translate_lines("STRUCT!{struct Empty;}") == [
            "pub const Empty = extern struct {",
            "};",
        ]

    def test_paren_delimited_invocation(self, translate_lines):
        lines = translate_lines("STRUCT!(struct P {x: c_int});")
        assert lines[0] == "pub const P = extern struct {"

    def test_enum_payload_aborts(self, translate):
        with pytest.raises(MacroSyntaxError) as exc_info:
            translate("STRUCT!{enum E { A, B }}")
        assert "not a struct definition" in exc_info.value.message
        assert exc_info.value.location is not None

    def test_tuple_struct_aborts(self, translate):
        with pytest.raises(MacroSyntaxError) as exc_info:
            translate("STRUCT!{struct T(u32);}")
        assert "unnamed fields" in exc_info.value.message

    def test_unsupported_field_type_keeps_header(self, driver, parse):
        sink = LineSink()
        program = parse("STRUCT!{struct S {data: [u8; 16], len: c_int}}")
        with pytest.raises(UnsupportedTypeError):
            driver.translate(program, sink)
        assert sink.lines == ["pub const S = extern struct {"]

    def test_unsupported_field_type_reports_invocation(self, translate):
        source = "\n\nSTRUCT!{struct S { a: [u8; 4], }}"
        with pytest.raises(UnsupportedTypeError) as exc_info:
            translate(source)
        location = exc_info.value.location
        assert (location.file, location.line, location.column) == ("test.rs", 3, 1)
        rendered = format_diagnostic(exc_info.value.to_diagnostic(), {"test.rs": source}, color=False)
        assert "test.rs:3:1" in rendered
        assert "3 | STRUCT!" in rendered

    def test_attribute_before_struct_keyword(self, translate_lines):
        assert translate_lines("STRUCT!{#[debug] struct RECT { left: LONG, }}") == [
            "pub const RECT = extern struct {",
            "    left: LONG,",
            "};",
        ]

    def test_statement_body_does_not_stop_later_items(self, translate_lines):
        assert translate_lines("pub fn f() { g(); }\nconst A: u32 = 1;") == [
            "// Unhandled item: f",
            "const A = 1;",
        ]

    def test_parser_errors_are_wrapped(self):
        def failing_parser(tokens):
            raise Rs2ZigError("boom")

        expander = MacroExpander(LineSink(), failing_parser)
        with pytest.raises(MacroSyntaxError) as exc_info:
            expander.expand(MacroItem(path=("STRUCT",), tokens=(IdentToken("x"),)))
        assert exc_info.value.message == "STRUCT! payload is not a struct definition (boom)"
        assert isinstance(exc_info.value.__cause__, Rs2ZigError)


class TestDeclareHandle:
    def test_braces(self, translate_lines):
        assert translate_lines("DECLARE_HANDLE!{HWND, HWND__}") == [
            "pub const HWND__ = @Type(.Opaque);",
            "pub const HWND = ?*HWND__;",
        ]

    def test_parens(self, translate_lines):
        assert translate_lines("DECLARE_HANDLE!(HINSTANCE, HINSTANCE__);") == [
            "pub const HINSTANCE__ = @Type(.Opaque);",
            "pub const HINSTANCE = ?*HINSTANCE__;",
        ]

    def test_trailing_tokens_ignored(self):
        sink = LineSink()
        expander = MacroExpander(sink, _no_struct_parser)
        tokens = (IdentToken("A"), PunctToken(","), IdentToken("B"), PunctToken(","), IdentToken("C"))
        expander.expand(MacroItem(path=("DECLARE_HANDLE",), tokens=tokens))
        assert sink.lines == ["pub const B = @Type(.Opaque);", "pub const A = ?*B;"]

    def test_too_few_names(self, translate):
        result = translate("DECLARE_HANDLE!{HWND}")
        assert result.lines == ["// Item not yet implemented: DECLARE_HANDLE! with fewer than two names"]
        assert isinstance(result.skipped[0].error, NotYetImplementedError)

    def test_non_identifier_arguments(self):
        expander = MacroExpander(LineSink(), _no_struct_parser)
        tokens = (LiteralToken("1"), PunctToken(","), IdentToken("B"))
        with pytest.raises(NotYetImplementedError) as exc_info:
            expander.expand(MacroItem(path=("DECLARE_HANDLE",), tokens=tokens))
        assert exc_info.value.placeholder() == \
            "// Item not yet implemented: DECLARE_HANDLE! with non-identifier arguments"


class TestDispatch:
    def test_macro_rules_is_unhandled(self, translate_lines):
        assert translate_lines("macro_rules! foo { () => {} }") == ["// Unhandled item: macro_rules"]

    @pytest.mark.parametrize("name", ["ENUM", "UNION", "RIDL", "FN"])
    def test_other_macros_are_unhandled(self, name):
        expander = MacroExpander(LineSink(), _no_struct_parser)
        with pytest.raises(UnhandledItemError) as exc_info:
            expander.expand(MacroItem(path=(name,), delimiter=Delimiter.BRACE))
        assert exc_info.value.placeholder() == f"// Unhandled item: {name}"

    def test_unknown_macro_in_source(self, translate_lines):
        lines = translate_lines("ENUM!{enum COLOR { RED = 0, GREEN = 1 }}")
        assert lines == ["// Unhandled item: ENUM"]

    def test_qualified_path_is_not_implemented(self, translate_lines):
        lines = translate_lines("shared::STRUCT!{struct A {x: c_int}}")
        assert lines == ["// Item not yet implemented: qualified macro `shared::STRUCT!`"]

    def test_run_continues_after_soft_failure(self, translate_lines):
        lines = translate_lines(
            "ENUM!{enum E { A }}\n"
            "DECLARE_HANDLE!{HKEY, HKEY__}\n"
        )
        assert lines == [
            "// Unhandled item: ENUM",
            "pub const HKEY__ = @Type(.Opaque);",
            "pub const HKEY = ?*HKEY__;",
        ]
