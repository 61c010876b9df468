"""
Command-line interface for PageQuill.

Usage:
    pagequill paginate input.html --format html --output pages.html
    pagequill paginate input.html --format json --chars-per-page 1800
    pagequill headings input.html
    pagequill search input.html "quarterly report"
    pagequill --log-file run.log paginate input.html
    pagequill version
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console

from .api import PagedDocument
from .config import load_settings
from .engine.measurement import CharacterBudgetOracle, MeasurementOracle
from .exceptions import ConfigurationError, PageQuillError, ParsingError
from .export.json_exporter import JSONExporter
from .models.page import PaginationResult
from .utils.logger import add_file_handler, get_logger
from .utils.rich_logger import print_summary, print_table, setup_logging

logger = get_logger(__name__)

_EXTENSIONS = {"html": ".pages.html", "json": ".pages.json", "text": ".pages.txt"}


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="pagequill",
        description="PageQuill - fixed-size page layout for editor content",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  pagequill paginate notes.html --format html --output notes.pages.html
  pagequill paginate notes.html --format json --chars-per-page 1800
  pagequill headings notes.html
  pagequill search notes.html "budget"
  pagequill version
        """,
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )
    parser.add_argument(
        "--log-file",
        help="Also write log records (INFO and above, DEBUG with -v) to this file"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Shared document options
    document_options = argparse.ArgumentParser(add_help=False)
    document_options.add_argument(
        "--config",
        help="JSON settings file (default: $PAGEQUILL_CONFIG)"
    )
    document_options.add_argument(
        "--chars-per-page",
        type=int,
        help="Lay out by character budget instead of font metrics"
    )
    document_options.add_argument(
        "--font-size",
        type=float,
        help="Override the font size in px"
    )

    paginate_parser = subparsers.add_parser(
        "paginate", parents=[document_options], help="Lay out HTML into pages"
    )
    paginate_parser.add_argument("input", help="Input HTML file")
    paginate_parser.add_argument(
        "--title",
        default="Document Title",
        help="Title shown in every page header"
    )
    paginate_parser.add_argument(
        "-f", "--format",
        choices=["html", "json", "text"],
        default="html",
        help="Output format (default: html)"
    )
    paginate_parser.add_argument(
        "-o", "--output",
        help="Output file path (default: input name with new extension)"
    )

    headings_parser = subparsers.add_parser(
        "headings", parents=[document_options], help="List headings and their pages"
    )
    headings_parser.add_argument("input", help="Input HTML file")

    search_parser = subparsers.add_parser(
        "search", parents=[document_options], help="Find the pages containing a text"
    )
    search_parser.add_argument("input", help="Input HTML file")
    search_parser.add_argument("query", help="Text to look for (case-insensitive)")

    subparsers.add_parser("version", help="Show version information")

    return parser


def _read_input(path: str) -> Optional[str]:
    input_path = Path(path)
    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return None
    try:
        return input_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ParsingError("Cannot read input file", f"{input_path}: {exc}") from exc


def _open_document(args, html: str, title: str = "Document Title") -> PagedDocument:
    settings, style = load_settings(args.config)
    if args.font_size is not None:
        style = style.replace(font_size=args.font_size)
    oracle: Optional[MeasurementOracle] = None
    if args.chars_per_page is not None:
        if args.chars_per_page < 0:
            raise ConfigurationError("--chars-per-page cannot be negative", str(args.chars_per_page))
        oracle = CharacterBudgetOracle(args.chars_per_page)
    return PagedDocument(html, title=title, style=style, oracle=oracle, settings=settings)


def render_text(result: PaginationResult) -> str:
    """Plain-text rendition: one banner line per page followed by its text."""
    sections = []
    for page in result.pages:
        sections.append(f"--- Page {page.number} ---")
        if page.text:
            sections.append(page.text)
    return "\n".join(sections) + "\n"


def cmd_paginate(args, console: Console) -> int:
    """Handle paginate command."""
    html = _read_input(args.input)
    if html is None:
        return 1

    input_path = Path(args.input)
    output_path = Path(args.output) if args.output else input_path.with_suffix(_EXTENSIONS[args.format])

    with _open_document(args, html, title=args.title) as doc:
        result = doc.result
        if args.format == "html":
            doc.to_html(output_path)
        elif args.format == "json":
            JSONExporter(title=args.title, style=doc.style).export(result, output_path)
        else:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(render_text(result), encoding="utf-8")

        print_summary(console, "Pagination", {
            "Input": input_path,
            "Output": output_path,
            "Pages": result.page_count,
            "Headings": len(result.headings),
            "Characters": doc.character_count,
            "Overflow pages": ", ".join(str(n) for n in result.overflow_pages) or "-",
            "Degraded": "yes" if result.degraded else "no",
        })
    return 0


def cmd_headings(args, console: Console) -> int:
    """Handle headings command."""
    html = _read_input(args.input)
    if html is None:
        return 1

    with _open_document(args, html) as doc:
        rows = [(entry.level, entry.text, entry.page_index) for entry in doc.headings]
    if not rows:
        console.print("No headings found")
        return 0
    print_table(console, "Headings", {"Level": "cyan", "Heading": "white", "Page": "magenta"}, rows)
    return 0


def cmd_search(args, console: Console) -> int:
    """Handle search command."""
    html = _read_input(args.input)
    if html is None:
        return 1

    with _open_document(args, html) as doc:
        matches = doc.search(args.query)
    if matches:
        console.print(f"Found on pages: {', '.join(str(page) for page in matches)}")
    else:
        console.print("No matches")
    return 0


def cmd_version(args=None) -> int:
    """Handle version command."""
    from .version import __version__
    print(f"PageQuill v{__version__}")
    print("Fixed-size page layout for rich-text editor content")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    console = setup_logging("DEBUG" if args.verbose else "WARNING")
    output = Console()

    commands = {
        "paginate": cmd_paginate,
        "headings": cmd_headings,
        "search": cmd_search,
    }
    if args.command == "version":
        return cmd_version(args)
    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 0

    root_logger = logging.getLogger()
    file_handler = None
    if args.log_file:
        file_handler = add_file_handler(root_logger, args.log_file, "DEBUG" if args.verbose else "INFO")
    try:
        return handler(args, output)
    except PageQuillError as exc:
        logger.debug("Command failed", exc_info=True)
        console.print(f"Error: {exc}", markup=False)
        return 1
    finally:
        if file_handler is not None:
            root_logger.removeHandler(file_handler)
            file_handler.close()


if __name__ == "__main__":
    sys.exit(main())
