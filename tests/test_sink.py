"""Tests for report rendering and the console/file sinks."""

import io

import pytest

from dfreport.formatter import HEADER, SEPARATOR
from dfreport.sink import DEFAULT_FILENAME, default_output_path, emit, render_report

ROWS = [
    "C:    Fixed    476GB   210GB   266GB  44% OS",
    "D:    CDRom        -       -       -    -",
]


def test_render_report_layout():
    text = render_report(ROWS)
    assert text == "\n".join([HEADER, SEPARATOR] + ROWS) + "\n"


def test_render_report_without_rows():
    assert render_report([]) == f"{HEADER}\n{SEPARATOR}\n"


def test_render_report_keeps_labels_verbatim():
    row = "E:    Fixed      1GB     0GB     1GB   0% <Backup & Photos>"
    assert row in render_report([row]).splitlines()


def test_emit_console_stream():
    stream = io.StringIO()
    text = emit(ROWS, stream=stream)
    assert stream.getvalue() == text
    assert text.splitlines()[0] == HEADER


def test_emit_console_defaults_to_stdout(capsys):
    emit(ROWS)
    out = capsys.readouterr().out
    assert out.splitlines() == [HEADER, SEPARATOR] + ROWS


def test_console_and_file_output_identical(tmp_path):
    stream = io.StringIO()
    emit(ROWS, stream=stream)
    target = tmp_path / "df.txt"
    emit(ROWS, path=target)
    assert target.read_text(encoding="utf-8") == stream.getvalue()


def test_file_mode_creates_missing_parents(tmp_path):
    target = tmp_path / "a" / "b" / "report.txt"
    text = emit(ROWS, path=target)
    assert target.parent.is_dir()
    assert target.read_text(encoding="utf-8") == text


def test_file_mode_overwrites_existing_file(tmp_path):
    target = tmp_path / "df.txt"
    target.write_text("old content that is longer than the report " * 20, encoding="utf-8")
    text = emit(ROWS, path=target)
    assert target.read_text(encoding="utf-8") == text


def test_file_mode_writes_utf8(tmp_path):
    target = tmp_path / "df.txt"
    emit(["C:    Fixed      1GB     0GB     1GB   0% ディスク"], path=target)
    assert "ディスク".encode("utf-8") in target.read_bytes()


def test_file_mode_error_propagates(tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("")
    with pytest.raises(OSError):
        emit(ROWS, path=blocker / "df.txt")


def test_default_output_path_in_temp_dir():
    import tempfile
    path = default_output_path()
    assert path.name == DEFAULT_FILENAME == "df.txt"
    assert str(path.parent) == tempfile.gettempdir()
