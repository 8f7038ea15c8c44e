"""Command-line interface for dfreport."""

import argparse
from pathlib import Path
from typing import List, Optional

from .sink import default_output_path


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="dfreport",
        allow_abbrev=False,
        description="Show type, readiness, size, usage and label of every storage volume.",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "-c", "--console",
        action="store_true",
        help="Print the report to standard output (default)",
    )
    mode.add_argument(
        "-t", "--text",
        type=Path,
        nargs="?",
        const=default_output_path(),
        default=None,
        metavar="PATH",
        help=f"Write the report to a UTF-8 text file (default: {default_output_path()})",
    )
    parser.add_argument(
        "--wait",
        action="store_true",
        help="Wait for Enter before exiting (keeps a double-clicked console window open)",
    )
    args = parser.parse_args(argv)
    args.mode = "file" if args.text is not None else "console"
    args.output = args.text
    return args
