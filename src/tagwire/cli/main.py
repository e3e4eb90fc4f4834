"""Main CLI entry point for tagwire."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .. import __version__
from ..cli.analyze import analyze_file, print_raw
from ..exceptions import DecodeError
from ..log import setup_logging


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the tagwire CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        description="tagwire: Tag-Based Binary Record Codec",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  tagwire --analyze messages.py          Show field numbers, wire types and tags
  tagwire --decode-raw 0801120178        Dump wire fields without a schema
  tagwire --version                      Show version
        """,
    )

    parser.add_argument(
        "--analyze",
        metavar="FILE",
        type=str,
        help="Analyze message schemas defined in a Python file",
    )

    parser.add_argument(
        "--decode-raw",
        metavar="HEX",
        type=str,
        help="Decode hex-encoded wire data without a schema",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log debug events (encoded sizes, unknown fields) to stderr",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"tagwire {__version__}",
    )

    args = parser.parse_args(argv)

    if args.debug:
        setup_logging(debug=True)

    # Handle --analyze
    if args.analyze:
        file_path = Path(args.analyze)
        if not file_path.exists():
            print(f"Error: File not found: {file_path}", file=sys.stderr)
            return 1

        try:
            analyze_file(file_path)
            return 0
        except Exception as e:
            print(f"Error analyzing file: {e}", file=sys.stderr)
            return 1

    # Handle --decode-raw
    if args.decode_raw:
        try:
            data = bytes.fromhex(args.decode_raw)
        except ValueError as e:
            print(f"Error: invalid hex input: {e}", file=sys.stderr)
            return 1

        try:
            print_raw(data)
            return 0
        except DecodeError as e:
            print(f"Error decoding data: {e}", file=sys.stderr)
            return 1

    # If no command specified, show help
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
