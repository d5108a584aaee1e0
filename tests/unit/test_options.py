#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_options.py
"""Unit tests for options dataclasses and logging setup."""

import dataclasses
import logging

import pytest

from mdconv.logging_utils import configure_logging, resolve_log_level
from mdconv.options import (
    HtmlRendererOptions,
    LatexRendererOptions,
    MarkdownParserOptions,
    MarkdownRendererOptions,
    NativeParserOptions,
    NativeRendererOptions,
    PlainTextRendererOptions,
    TypstRendererOptions,
)


@pytest.mark.unit
class TestOptionDefaults:
    """Tests for default option values."""

    def test_parser_defaults(self):
        options = MarkdownParserOptions()
        assert all(getattr(options, f.name) is True for f in dataclasses.fields(options))
        assert NativeParserOptions().strict_mode is False

    def test_markdown_renderer_defaults(self):
        options = MarkdownRendererOptions()
        assert options.bullet_symbol == "-"
        assert options.emphasis_symbol == "*"
        assert options.strong_symbol == "*"
        assert options.code_fence_char == "`"
        assert options.code_fence_min == 3
        assert options.emit_frontmatter is True

    def test_other_renderer_defaults(self):
        assert HtmlRendererOptions().title == "Untitled"
        assert LatexRendererOptions().packages == ["hyperref", "graphicx", "ulem", "amssymb", "listings"]
        assert LatexRendererOptions().code_environment == "verbatim"
        assert TypstRendererOptions().include_metadata is True
        assert PlainTextRendererOptions().table_cell_separator == " | "
        assert NativeRendererOptions().indent is None

    def test_link_helpers(self):
        options = HtmlRendererOptions()
        assert options.mention_url("octocat") == "https://github.com/octocat"
        assert options.issue_url(3) is None
        options = HtmlRendererOptions(mention_base_url=None, issue_base_url="https://x.org/issues/")
        assert options.mention_url("octocat") is None
        assert options.issue_url(3) == "https://x.org/issues/3"

    def test_every_field_has_help(self):
        for options_class in (MarkdownParserOptions, MarkdownRendererOptions, HtmlRendererOptions):
            for f in dataclasses.fields(options_class):
                assert f.metadata.get("help"), f"{options_class.__name__}.{f.name}"


@pytest.mark.unit
class TestFrozenOptions:
    """Tests for immutability and create_updated."""

    def test_options_are_frozen(self):
        options = HtmlRendererOptions()
        with pytest.raises(dataclasses.FrozenInstanceError):
            options.standalone = True  # type: ignore[misc]

    def test_create_updated(self):
        options = HtmlRendererOptions()
        updated = options.create_updated(standalone=True)
        assert updated.standalone is True
        assert options.standalone is False
        assert isinstance(updated, HtmlRendererOptions)

    def test_create_updated_validates(self):
        with pytest.raises(ValueError, match="code_fence_min"):
            MarkdownRendererOptions().create_updated(code_fence_min=1)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


@pytest.mark.unit
class TestLogging:
    """Tests for logging configuration."""

    @pytest.mark.parametrize(
        "value,expected",
        [("debug", logging.DEBUG), ("INFO", logging.INFO), (logging.ERROR, logging.ERROR), ("bogus", logging.WARNING)],
    )
    def test_resolve_log_level(self, value, expected):
        assert resolve_log_level(value) == expected

    def test_configure_logging_replaces_handlers(self, restore_root_logger):
        root = configure_logging("info")
        assert root is restore_root_logger
        assert root.level == logging.INFO
        assert len(root.handlers) == 1

    def test_log_file(self, restore_root_logger, tmp_path):
        log_file = tmp_path / "mdconv.log"
        root = configure_logging("debug", log_file=str(log_file), trace_mode=True)
        logging.getLogger("mdconv.test").debug("hello file")
        for handler in root.handlers:
            handler.flush()
        content = log_file.read_text(encoding="utf-8")
        assert "[mdconv.test] hello file" in content
