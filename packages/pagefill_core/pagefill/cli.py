"""
Command-line interface for pagefill.

Usage:
    pagefill generate directory.xlsx cover.pdf --output directory.pdf
    pagefill paginate directory.xlsx --json
    pagefill html directory.xlsx --output directory.html
    pagefill version
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

_CONFIG_FLAGS = (
    ("rows_per_page", "--rows-per-page", "Page capacity in row units"),
    ("group_header_units", "--group-header-units", "Cost of a group header"),
    ("table_header_units", "--table-header-units", "Cost of a table header"),
    ("continued_note_units", "--continued-note-units", "Cost of a continuation note"),
    ("section_spacing_units", "--section-spacing-units", "Spacing charged between groups"),
)


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("spreadsheet", help="Input XLSX file")
    parser.add_argument("--sheet", help="Worksheet name (default: active sheet)")
    parser.add_argument(
        "--group-column",
        help="Column whose values define groups (default: title rows define groups)"
    )
    parser.add_argument("--config", help="JSON file with pagination options")
    for dest, flag, help_text in _CONFIG_FLAGS:
        parser.add_argument(flag, dest=dest, type=float, help=help_text)
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--plain-logs", action="store_true", help="Plain log output without rich formatting")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="pagefill",
        description="pagefill - paginated PDF documents from spreadsheet exports",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  pagefill generate directory.xlsx cover.pdf -o directory.pdf
  pagefill generate directory.xlsx cover.pdf --rows-per-page 16 --group-column Region
  pagefill paginate directory.xlsx --json
  pagefill html directory.xlsx -o directory.html
  pagefill version
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    generate_parser = subparsers.add_parser("generate", help="Build the merged PDF")
    _add_common_arguments(generate_parser)
    generate_parser.add_argument("attachment", help="Attachment PDF (cover and closing pages)")
    generate_parser.add_argument(
        "-o", "--output",
        default="directory.pdf",
        help="Output PDF path (default: directory.pdf)"
    )
    generate_parser.add_argument(
        "--leading-pages", type=int, default=2,
        help="Attachment pages placed before the generated pages (default: 2)"
    )
    generate_parser.add_argument(
        "--closing-pages", type=int, default=1,
        help="Attachment pages placed after the generated pages (default: 1)"
    )

    paginate_parser = subparsers.add_parser("paginate", help="Show the page structure")
    _add_common_arguments(paginate_parser)
    paginate_parser.add_argument("--json", action="store_true", help="Output as JSON")

    html_parser = subparsers.add_parser("html", help="Export paginated print HTML")
    _add_common_arguments(html_parser)
    html_parser.add_argument("-o", "--output", help="Output HTML path (default: input name with .html)")

    subparsers.add_parser("version", help="Show version information")

    return parser


def _build_config(args):
    from .engine.pagination_config import PaginationConfig

    options: Dict[str, Any] = {}
    if args.config:
        options.update(PaginationConfig.from_file(args.config).to_dict())
    for dest, _flag, _help in _CONFIG_FLAGS:
        value = getattr(args, dest, None)
        if value is not None:
            options[dest] = int(value) if float(value).is_integer() else value
    return PaginationConfig.from_dict(options)


def _build_parser(args):
    from .parser.xlsx_parser import XLSXParser
    return XLSXParser(sheet_name=args.sheet, group_column=args.group_column)


def _check_inputs(*paths: str) -> Optional[str]:
    for path in paths:
        if not Path(path).exists():
            return f"File not found: {path}"
    return None


def cmd_generate(args) -> int:
    """Handle generate command."""
    from .api import DirectoryBuilder
    from .merger import AssemblyPolicy

    error = _check_inputs(args.spreadsheet, args.attachment)
    if error:
        print(f"Error: {error}", file=sys.stderr)
        return 1

    builder = DirectoryBuilder(
        config=_build_config(args),
        parser=_build_parser(args),
        policy=AssemblyPolicy(leading_pages=args.leading_pages, closing_pages=args.closing_pages),
    )
    print(f"📄 Reading: {args.spreadsheet}")
    output_path = builder.build_to_file(args.spreadsheet, args.attachment, args.output)
    print(f"✅ Saved: {output_path}")
    return 0


def cmd_paginate(args) -> int:
    """Handle paginate command."""
    from .api import DirectoryBuilder

    error = _check_inputs(args.spreadsheet)
    if error:
        print(f"Error: {error}", file=sys.stderr)
        return 1

    builder = DirectoryBuilder(config=_build_config(args), parser=_build_parser(args))
    layout = builder.layout(args.spreadsheet)

    if args.json:
        print(json.dumps(layout.to_dict(), indent=2, ensure_ascii=False, default=str))
        return 0

    print(f"📄 File: {args.spreadsheet}")
    print(f"   Pages: {layout.page_count}")
    print(f"   Continuation notes: {layout.continuation_count}")
    for page in layout.pages:
        groups = ", ".join(str(group) for group in page.group_ids)
        suffix = " (overflow)" if page.overflow else ""
        print(f"   Page {page.number}: {len(page)} blocks, {page.total_units} units, groups: {groups}{suffix}")
    return 0


def cmd_html(args) -> int:
    """Handle html command."""
    from .api import render_to_html

    error = _check_inputs(args.spreadsheet)
    if error:
        print(f"Error: {error}", file=sys.stderr)
        return 1

    output_path = Path(args.output) if args.output else Path(args.spreadsheet).with_suffix(".html")
    render_to_html(args.spreadsheet, output_path, config=_build_config(args), parser=_build_parser(args))
    print(f"✅ Saved: {output_path}")
    return 0


def cmd_version(args=None) -> int:
    """Handle version command."""
    from .version import __version__
    print(f"pagefill v{__version__}")
    print("Paginated PDF documents from spreadsheet exports")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    from .utils.exceptions import DocumentError, handle_exception
    from .utils.logger import setup_logging

    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command == "version":
        return cmd_version(args)

    handlers = {
        "generate": cmd_generate,
        "paginate": cmd_paginate,
        "html": cmd_html,
    }
    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 0

    setup_logging("DEBUG" if args.verbose else "WARNING", use_rich=not args.plain_logs)
    try:
        return handler(args)
    except DocumentError as exc:
        error_info = handle_exception(exc, context={"command": args.command})
        print(f"Error: {exc}", file=sys.stderr)
        if args.verbose and error_info["traceback"]:
            print(error_info["traceback"], file=sys.stderr, end="")
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)
