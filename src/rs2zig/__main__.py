"""CLI entry point: run `rs2zig file.rs` or `python -m rs2zig file.rs`."""

import sys
from pathlib import Path


def main(argv=None) -> int:
    import argparse
    import logging
    from .compiler.driver import TranslationDriver
    from .codegen import LineSink
    from .frontend.parser import ParseError
    from .shared.errors import HardTranslationError, format_diagnostic
    from .utils.config import DEFAULT_LINK_NAME
    from .utils.io_utils import read_source_file, write_output_file

    parser = argparse.ArgumentParser(prog="rs2zig", description="Translate Rust FFI declarations (.rs) to Zig.")
    parser.add_argument("file", type=Path, help="Path to .rs source file")
    parser.add_argument("--link-name", default=DEFAULT_LINK_NAME,
                        help=f"Library name for extern declarations (default: {DEFAULT_LINK_NAME})")
    parser.add_argument("-o", "--output", type=Path, default=None, help="Output file (default: stdout)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    path = args.file
    if not path.exists():
        sys.stderr.write(f"rs2zig: error: file not found: {path}\n")
        return 1
    if not path.is_file():
        sys.stderr.write(f"rs2zig: error: not a file: {path}\n")
        return 1

    try:
        source = read_source_file(path)
    except (OSError, UnicodeDecodeError) as e:
        sys.stderr.write(f"rs2zig: error: could not read file: {e}\n")
        return 1

    source_file = str(path)
    driver = TranslationDriver(link_name=args.link_name)
    # stdout gets each line as it is written; a file is written once at the end
    sink = LineSink(stream=sys.stdout if args.output is None else None)
    status = 0
    try:
        program = driver.parser.parse(source, source_file)
        driver.translate(program, sink)
    except ParseError as e:
        sys.stderr.write(format_diagnostic(e.to_diagnostic(), {source_file: source}) + "\n")
        return 1
    except HardTranslationError as e:
        sys.stderr.write(format_diagnostic(e.to_diagnostic(), {source_file: source}) + "\n")
        status = 1

    if args.output is not None:
        try:
            write_output_file(args.output, sink.getvalue())
        except OSError as e:
            sys.stderr.write(f"rs2zig: error: could not write {args.output}: {e}\n")
            return 1
    return status


if __name__ == "__main__":
    sys.exit(main())
