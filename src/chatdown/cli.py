"""Command-line interface for chatdown."""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape

from . import __version__
from .conversion.converter import ChatMarkdownConverter
from .exceptions import ChatdownError
from .logging_config import SERVER_LOGGERS, setup_logging
from .models.config import ChatdownConfig
from .models.results import TranslationResult


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="chatdown",
        description="Convert HTML documents and manual pages to chat markdown",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Convert an HTML file
  chatdown page.html

  # Convert HTML from stdin, capturing untagged text too
  curl -s https://example.com | chatdown --plaintext

  # Print markdown and extracted images as JSON
  chatdown page.html --json

  # Render a manual page
  chatdown --man 1 ls

  # Serve manual pages over HTTP
  chatdown --serve --port 3014
        """,
    )

    parser.add_argument(
        "file",
        nargs="?",
        default=None,
        help="HTML file to convert (default: stdin)",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--doctor",
        action="store_true",
        help="Run diagnostic checks",
    )

    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        metavar="YAML",
        help="Configuration file (requires pyyaml)",
    )

    # Conversion settings
    conversion_group = parser.add_argument_group("conversion settings")
    conversion_group.add_argument(
        "--plaintext",
        action="store_true",
        default=None,
        help="Capture untagged top-level text",
    )
    conversion_group.add_argument(
        "--table-width",
        type=int,
        default=None,
        metavar="COLUMNS",
        help="Maximum rendered table width",
    )
    conversion_group.add_argument(
        "--json",
        action="store_true",
        help="Print markdown and images as JSON",
    )

    # Manual pages
    manual_group = parser.add_argument_group("manual pages")
    manual_group.add_argument(
        "--man",
        nargs=2,
        metavar=("SECTION", "PAGE"),
        help="Render a manual page instead of an HTML file",
    )
    manual_group.add_argument(
        "--man-root",
        type=Path,
        default=None,
        metavar="DIR",
        help="Man page directory (default: /usr/share/man)",
    )
    manual_group.add_argument(
        "--pandoc",
        type=str,
        default=None,
        metavar="CMD",
        help="Pandoc executable (default: pandoc)",
    )

    # Server settings
    server_group = parser.add_argument_group("server settings")
    server_group.add_argument(
        "--serve",
        action="store_true",
        help="Serve manual pages over HTTP",
    )
    server_group.add_argument(
        "--host",
        type=str,
        default=None,
        help="Interface to bind (default: 127.0.0.1)",
    )
    server_group.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: 3014)",
    )

    # Output control
    output_group = parser.add_argument_group("output control")
    output_group.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose output",
    )
    output_group.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Only log errors",
    )
    output_group.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write logs to this file",
    )

    return parser


def build_config(args: argparse.Namespace) -> ChatdownConfig:
    """Merge the config file (if any) with command-line overrides."""
    base = ChatdownConfig.from_yaml_file(args.config) if args.config else ChatdownConfig()
    data = base.model_dump()

    if args.plaintext is not None:
        data["conversion"]["plaintext"] = args.plaintext
    if args.table_width is not None:
        data["conversion"]["table_width"] = args.table_width

    if args.man_root is not None:
        data["manual"]["root"] = args.man_root
    if args.pandoc is not None:
        data["manual"]["pandoc_command"] = args.pandoc

    if args.host is not None:
        data["server"]["host"] = args.host
    if args.port is not None:
        data["server"]["port"] = args.port

    if args.verbose:
        data["log_level"] = "DEBUG"
    elif args.quiet:
        data["log_level"] = "ERROR"
    if args.log_file is not None:
        data["log_file"] = args.log_file

    return ChatdownConfig.model_validate(data)


def _read_html(file: Optional[str]) -> str:
    if file is None or file == "-":
        return sys.stdin.read()
    return Path(file).read_text(encoding="utf-8")


def _write_result(result: TranslationResult, as_json: bool) -> None:
    if as_json:
        sys.stdout.write(json.dumps(result.to_dict(), ensure_ascii=False, indent=2) + "\n")
    else:
        sys.stdout.write((result.markdown or "") + "\n")


def run_convert(args: argparse.Namespace, config: ChatdownConfig) -> int:
    """Convert an HTML file, stdin, or a manual page and print the result."""
    console = Console(stderr=True)
    converter = ChatMarkdownConverter.from_config(config.conversion)

    try:
        if args.man:
            from .manpages.renderer import ManPageService

            section, page = args.man
            service = ManPageService.from_config(config.manual, converter=converter)
            result = service.render_markdown_blocking(section, page)
        else:
            result = converter.convert(_read_html(args.file))
    except (ChatdownError, OSError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1

    _write_result(result, args.json)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = build_config(args)
    except Exception as e:
        Console(stderr=True).print(f"[red]Configuration error:[/red] {escape(str(e))}")
        return 1

    setup_logging(
        level=config.log_level,
        log_file=str(config.log_file) if config.log_file else None,
        extra_loggers=SERVER_LOGGERS if args.serve else (),
    )

    if args.doctor:
        from .doctor import run_doctor

        return run_doctor(manual=config.manual)

    if args.serve:
        from .server import run_server

        run_server(config)
        return 0

    return run_convert(args, config)


if __name__ == "__main__":
    sys.exit(main())
