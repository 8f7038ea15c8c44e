"""Report sink: header, separator and rows to the console or a UTF-8 text file."""

import os
import sys
import tempfile
from pathlib import Path
from typing import Iterable, Optional, TextIO

from jinja2 import Environment, FileSystemLoader

from .formatter import HEADER, SEPARATOR

_DEBUG = bool(os.environ.get("DFREPORT_DEBUG", ""))

TEMPLATES_DIR = Path(__file__).parent / "templates"
DEFAULT_FILENAME = "df.txt"


def _debug(msg: str) -> None:
    if _DEBUG:
        print(f"[dfreport] sink: {msg}", file=sys.stderr)


def make_env() -> Environment:
    # Plain text; labels are emitted verbatim.
    return Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=False,
    )


def default_output_path() -> Path:
    return Path(tempfile.gettempdir()) / DEFAULT_FILENAME


def render_report(lines: Iterable[str], env: Optional[Environment] = None) -> str:
    """Header, separator, then one line per row; every line ends with a newline."""
    env = env or make_env()
    template = env.get_template("report.txt.j2")
    return template.render(header=HEADER, separator=SEPARATOR, lines=list(lines))


def write_file(text: str, path: Path) -> None:
    """Create missing parent directories, then create or truncate path. Errors propagate."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        f.write(text)
    _debug(f"wrote {len(text)} characters to {path}")


def emit(
    lines: Iterable[str],
    path: Optional[Path] = None,
    stream: Optional[TextIO] = None,
    env: Optional[Environment] = None,
) -> str:
    """Write the report to path, or to stream (stdout by default) when path is None."""
    text = render_report(lines, env)
    if path is None:
        out = stream if stream is not None else sys.stdout
        out.write(text)
        out.flush()
    else:
        write_file(text, path)
    return text
