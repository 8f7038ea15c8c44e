"""Entry point: analyze volumes, format rows, write the report."""

import sys
from pathlib import Path
from typing import List, Optional, TextIO

from .analyzer import VolumeEnumerationError, analyze
from .cli import parse_args
from .formatter import format_row
from .sink import emit
from .source import VolumeSource


def run(
    output: Optional[Path] = None,
    source: Optional[VolumeSource] = None,
    stream: Optional[TextIO] = None,
) -> str:
    """One pass of the pipeline. output None means console."""
    reports = analyze(source)
    return emit([format_row(r) for r in reports], path=output, stream=stream)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        run(output=args.output)
    except (VolumeEnumerationError, OSError) as e:
        print(f"dfreport: error: {e}", file=sys.stderr)
        return 1
    if args.mode == "file":
        print(f"Wrote {args.output}", file=sys.stderr)
    if args.wait:
        try:
            input()
        except EOFError:
            pass
    return 0


if __name__ == "__main__":
    sys.exit(main())
