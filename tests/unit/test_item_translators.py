#!/usr/bin/env python3
"""
Tests for the per-item translators, driven from source text.
"""

import pytest
from rs2zig.codegen import ItemTranslator, TranslationContext, LineSink
from rs2zig.shared import (
    UseItem, UsePath, UseName, ConstItem, IntLiteral, NamedType, Visibility,
    UnsupportedTypeError, UnsupportedSyntaxError,
)


class TestImports:
    def test_first_import_declares_module(self, translate_lines):
        lines = translate_lines("pub use shared::minwindef::{DWORD, BOOL};")
        assert lines == [
            "",
            'const shared = @import("shared.zig");',
            "pub const DWORD = shared.minwindef.DWORD;",
            "pub const BOOL = shared.minwindef.BOOL;",
        ]

    def test_module_declared_once_per_run(self, translate_lines):
        lines = translate_lines(
            "use shared::minwindef::DWORD;\n"
            "use shared::windef::HWND;\n"
            "use um::winnt::LPCSTR;\n"
            "use shared::ntdef::LONG;\n"
        )
        assert lines.count('const shared = @import("shared.zig");') == 1
        assert lines.count('const um = @import("um.zig");') == 1
        assert lines == [
            "",
            'const shared = @import("shared.zig");',
            "const DWORD = shared.minwindef.DWORD;",
            "const HWND = shared.windef.HWND;",
            "",
            'const um = @import("um.zig");',
            "const LPCSTR = um.winnt.LPCSTR;",
            "const LONG = shared.ntdef.LONG;",
        ]

    def test_scalar_namespace_is_skipped(self, translate_lines):
        assert translate_lines("use ctypes::{c_int, c_char, c_void};") == []

    def test_scalar_namespace_skipped_inside_group(self, translate_lines):
        lines = translate_lines("use {ctypes::c_int, um::winuser::MSG};")
        assert lines == [
            "",
            'const um = @import("um.zig");',
            "const MSG = um.winuser.MSG;",
        ]

    def test_single_segment_import(self, translate_lines):
        assert translate_lines("use foo;") == [
            "",
            'const foo = @import("foo.zig");',
            "const foo = foo;",
        ]

    def test_glob_aborts(self, translate):
        with pytest.raises(UnsupportedSyntaxError) as exc_info:
            translate("use um::winuser::*;")
        assert exc_info.value.location is not None
        assert exc_info.value.location.line == 1

    def test_rename_aborts(self, translate):
        with pytest.raises(UnsupportedSyntaxError):
            translate("use um::winuser::MSG as Message;")

    def test_context_records_modules(self, session_parser):
        context = TranslationContext()
        sink = LineSink()
        translator = ItemTranslator(context, sink, session_parser.parse_struct)
        item = UseItem(tree=UsePath("um", UseName("MSG")), visibility=Visibility.PUBLIC)
        translator.translate(item)
        translator.translate(item)
        assert context.toplevel_imports == {"um"}
        assert sink.lines == [
            "",
            'const um = @import("um.zig");',
            "pub const MSG = um.MSG;",
            "pub const MSG = um.MSG;",
        ]


class TestConstants:
    def test_integer_literal(self, translate_lines):
        assert translate_lines("pub const MAX_PATH: usize = 260;") == ["pub const MAX_PATH = 260;"]

    def test_private(self, translate_lines):
        assert translate_lines("const WM_USER: UINT = 0x0400;") == ["const WM_USER = 0x0400;"]

    def test_restricted_visibility_is_private(self, translate_lines):
        assert translate_lines("pub(crate) const X: u32 = 1;") == ["const X = 1;"]

    @pytest.mark.parametrize("init", ["1 << 4", "-1", "WM_USER + 1", "1.5", '"abc"', "0 as HANDLE", "f(1)", "true"])
    def test_other_initializers_are_placeholders(self, translate_lines, init):
        assert translate_lines(f"pub const X: u32 = {init};") == ["pub const X = ???;"]

    def test_direct_node(self, session_parser):
        sink = LineSink()
        translator = ItemTranslator(TranslationContext(), sink, session_parser.parse_struct)
        translator.translate(ConstItem(name="ONE", ty=NamedType("u32"), expr=IntLiteral("1")))
        assert sink.lines == ["const ONE = 1;"]


class TestTypeAliases:
    def test_scalar(self, translate_lines):
        assert translate_lines("pub type BYTE = c_uchar;") == ["pub const BYTE = u8;"]

    def test_pointer(self, translate_lines):
        assert translate_lines("pub type LPCSTR = *const CHAR;") == ["pub const LPCSTR = ?*const CHAR;"]

    def test_pointer_to_pointer(self, translate_lines):
        assert translate_lines("type PPSTR = *mut *mut c_char;") == ["const PPSTR = ?*?*i8;"]

    def test_parenthesized_type(self, translate_lines):
        assert translate_lines("pub type A = (c_uchar);") == ["pub const A = u8;"]

    @pytest.mark.parametrize("ty,kind", [
        ("[u8; 4]", "array"),
        ("Option<HWND>", "generic"),
        ("um::winnt::HANDLE", "path"),
        ("&'static str", "reference"),
        ("(u8, u16)", "tuple"),
        ("extern \"system\" fn(HWND) -> BOOL", "fn"),
    ])
    def test_unsupported_aborts(self, translate, ty, kind):
        with pytest.raises(UnsupportedTypeError) as exc_info:
            translate(f"pub type T = {ty};")
        assert exc_info.value.ty.kind == kind
        assert exc_info.value.location is not None


class TestForeignBlocks:
    SOURCE = (
        'extern "system" {\n'
        "    pub fn MessageBoxA(hWnd: HWND, lpText: LPCSTR, lpCaption: LPCSTR, uType: UINT) -> c_int;\n"
        "}\n"
    )

    def test_function(self, translate_lines):
        assert translate_lines(self.SOURCE) == [
            'pub extern "user32" fn MessageBoxA (',
            "    hWnd: HWND,",
            "    lpText: LPCSTR,",
            "    lpCaption: LPCSTR,",
            "    uType: UINT,",
            ") callconv(.Stdcall) c_int;",
        ]

    def test_link_name(self, translate_lines):
        lines = translate_lines(self.SOURCE, link_name="kernel32")
        assert lines[0] == 'pub extern "kernel32" fn MessageBoxA ('

    def test_wildcard_parameter(self, translate_lines):
        lines = translate_lines("extern { pub fn f(_: c_int, x: *mut c_uchar); }")
        assert lines == [
            'pub extern "user32" fn f (',
            "    _: c_int,",
            "    x: ?*u8,",
            ") callconv(.Stdcall) void;",
        ]

    def test_no_parameters(self, translate_lines):
        lines = translate_lines("extern \"C\" { fn GetLastError() -> DWORD; }")
        assert lines == ['extern "user32" fn GetLastError (', ") callconv(.Stdcall) DWORD;"]

    def test_variadic(self, translate_lines):
        lines = translate_lines(
            "extern \"C\" { pub fn wsprintfA(buf: LPSTR, fmt: LPCSTR, ...) -> c_int; }"
        )
        assert lines == [
            'pub extern "user32" fn wsprintfA (',
            "    buf: LPSTR,",
            "    fmt: LPCSTR,",
            "    ...,",
            ") callconv(.Stdcall) c_int;",
        ]

    def test_every_function_in_block(self, translate_lines):
        lines = translate_lines(
            "extern \"system\" {\n"
            "    pub fn A() -> BOOL;\n"
            "    pub fn B(x: c_int);\n"
            "}\n"
        )
        assert [line for line in lines if "extern" in line] == [
            'pub extern "user32" fn A (',
            'pub extern "user32" fn B (',
        ]

    def test_static_is_dumped(self, translate_lines):
        lines = translate_lines("extern { pub static mut errno: c_int; }")
        assert len(lines) == 1
        assert lines[0].startswith("ForeignStatic(name='errno'")

    def test_unsupported_parameter_aborts_after_partial_output(self, driver, parse):
        sink = LineSink()
        program = parse("extern { pub fn f(a: c_int, b: [u8; 4]); }")
        with pytest.raises(UnsupportedTypeError):
            driver.translate(program, sink)
        assert sink.lines == ['pub extern "user32" fn f (', "    a: c_int,"]


class TestFunctions:
    def test_plain_function_is_unhandled(self, translate):
        result = translate("pub fn helper(x: u32) -> u32 { x + 1 }")
        assert result.lines == ["// Unhandled item: helper"]
        assert len(result.skipped) == 1
        assert result.translated_count == 0

    def test_unsafe_extern_function_is_unhandled(self, translate_lines):
        source = 'pub unsafe extern "system" fn WndProc(h: HWND, m: UINT) -> LRESULT { 0 }'
        assert translate_lines(source) == ["// Unhandled item: WndProc"]


class TestOtherItems:
    @pytest.mark.parametrize("source,node", [
        ("pub struct POINT { pub x: LONG, pub y: LONG }", "StructItem("),
        ("pub enum E { A = 1, B }", "EnumItem("),
        ("mod foo;", "ModItem("),
        ("static mut COUNT: u32 = 0;", "StaticItem("),
        ("impl Foo { fn f(&self) {} }", "ImplItem("),
        ("pub trait T { fn f(&self); }", "TraitItem("),
        ("extern crate winapi;", "ExternCrateItem("),
    ])
    def test_debug_dump(self, translate, source, node):
        result = translate(source)
        assert result.lines
        assert result.lines[0].startswith(node)
        assert result.translated_count == 1
        assert not result.skipped
