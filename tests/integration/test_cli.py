#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/integration/test_cli.py
"""Integration tests for the mdconv command line."""

import io
import json
import logging

import pytest

from mdconv.cli import create_parser, get_exit_code_for_exception, main
from mdconv.exceptions import (
    MdConvError,
    RenderingError,
    StructuralParseError,
    UnreadableInputError,
    UnrecognizedFormatError,
)


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo the root logger changes made by configure_logging."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)


@pytest.fixture
def markdown_file(tmp_path):
    path = tmp_path / "doc.md"
    path.write_text("# Title\n\nHello **world**\n", encoding="utf-8")
    return path


@pytest.mark.cli
@pytest.mark.integration
class TestCliConversion:
    """Tests for successful conversions."""

    def test_file_to_stdout(self, markdown_file, capsys):
        assert main([str(markdown_file)]) == 0
        assert capsys.readouterr().out == "<h1>Title</h1>\n<p>Hello <strong>world</strong></p>\n"

    def test_target_format(self, markdown_file, capsys):
        assert main([str(markdown_file), "-t", "tex"]) == 0
        assert capsys.readouterr().out == "\\section{Title}\n\nHello \\textbf{world}\n"

    def test_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("*hi*"))
        assert main(["-t", "plain"]) == 0
        assert capsys.readouterr().out == "hi\n"

    def test_stdin_marker(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("- a"))
        assert main(["-", "--to", "gfm"]) == 0
        assert capsys.readouterr().out == "- a\n"

    def test_output_file(self, markdown_file, tmp_path, capsys):
        out = tmp_path / "out.typ"
        assert main([str(markdown_file), "-t", "typst", "-o", str(out)]) == 0
        assert out.read_text(encoding="utf-8") == "= Title\n\nHello *world*\n"
        assert capsys.readouterr().out == ""

    def test_standalone(self, markdown_file, capsys):
        assert main([str(markdown_file), "--standalone"]) == 0
        assert capsys.readouterr().out.startswith("<!DOCTYPE html>")

    def test_format_detected_from_extension(self, tmp_path, capsys):
        path = tmp_path / "doc.json"
        path.write_text(json.dumps({"blocks": [{"t": "Para", "c": [{"t": "Str", "c": "x"}]}]}), encoding="utf-8")
        assert main([str(path), "-t", "gfm"]) == 0
        assert capsys.readouterr().out == "x\n"

    def test_list_formats(self, capsys):
        assert main(["--list-formats"]) == 0
        out = capsys.readouterr().out
        for name in ("gfm", "native", "html", "latex", "typst", "plain"):
            assert name in out
        assert "[R+W]" in out

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert capsys.readouterr().out.startswith("mdconv ")

    def test_warnings_go_to_stderr(self, tmp_path, capsys):
        path = tmp_path / "doc.md"
        path.write_text("---\n[unclosed\n---\n\nbody\n", encoding="utf-8")
        assert main([str(path), "-t", "plain"]) == 0
        captured = capsys.readouterr()
        assert captured.out.endswith("\n\nbody\n")
        assert "WARNING: Ignoring invalid YAML front matter" in captured.err


@pytest.mark.cli
@pytest.mark.integration
class TestCliErrors:
    """Tests for error reporting and exit codes."""

    def test_unknown_output_format(self, markdown_file, capsys):
        assert main([str(markdown_file), "-t", "docx"]) == 2
        assert "Unrecognized output format: 'docx'" in capsys.readouterr().err

    def test_unknown_format_checked_before_reading(self, tmp_path):
        assert main([str(tmp_path / "missing.md"), "-f", "rtf"]) == 2

    def test_missing_input(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing.md")]) == 3
        assert capsys.readouterr().err.startswith("Error: Cannot read input from")

    def test_parse_failure(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        assert main([str(path)]) == 4
        assert "Invalid Pandoc JSON document" in capsys.readouterr().err

    def test_strict_native_input(self, tmp_path):
        path = tmp_path / "u.json"
        payload = {"blocks": [{"t": "Para", "c": [{"t": "Underline", "c": [{"t": "Str", "c": "u"}]}]}]}
        path.write_text(json.dumps(payload), encoding="utf-8")
        assert main([str(path)]) == 0
        assert main([str(path), "--strict"]) == 4

    def test_unwritable_output(self, markdown_file, tmp_path):
        assert main([str(markdown_file), "-o", str(tmp_path / "no" / "dir" / "out.html")]) == 1

    @pytest.mark.parametrize(
        "error,code",
        [
            (UnrecognizedFormatError("x"), 2),
            (UnreadableInputError(file_path="a.md"), 3),
            (StructuralParseError("bad"), 4),
            (RenderingError("bad"), 1),
            (MdConvError("bad"), 1),
        ],
    )
    def test_exit_code_mapping(self, error, code):
        assert get_exit_code_for_exception(error) == code


@pytest.mark.cli
@pytest.mark.unit
class TestArgumentParser:
    """Tests for argument parsing."""

    def test_defaults(self):
        args = create_parser().parse_args([])
        assert args.input is None
        assert args.source_format is None
        assert args.target_format == "html"
        assert args.log_level == "WARNING"

    def test_log_level_is_case_insensitive(self):
        assert create_parser().parse_args(["--log-level", "debug"]).log_level == "DEBUG"
