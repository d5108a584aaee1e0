#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_plaintext_renderer.py
"""Unit tests for the plain text writer."""

import pytest

from mdconv.options import PlainTextRendererOptions
from mdconv.parsers.markdown import GfmParser
from mdconv.renderers.plaintext import PlainTextRenderer


def plain(markdown, **options):
    doc = GfmParser().parse(markdown)
    return PlainTextRenderer(PlainTextRendererOptions(**options)).render_to_string(doc)


@pytest.mark.unit
class TestPlainTextBlocks:
    """Tests for block-level plain text output."""

    def test_headings(self):
        assert plain("# Notes") == "Notes\n=====\n"
        assert plain("## Sub") == "Sub\n---\n"
        assert plain("### Three") == "Three\n"

    def test_code_block_content(self):
        assert plain("```\ncode here\n```") == "code here\n"

    def test_bullet_list(self):
        assert plain("- a\n- b") == "* a\n* b\n"
        assert plain("- a", bullet="-") == "- a\n"

    def test_task_items(self):
        assert plain("- [x] done\n- [ ] todo") == "* [x] done\n* [ ] todo\n"

    def test_ordered_list(self):
        assert plain("3. x\n4. y") == "3. x\n4. y\n"

    def test_nested_list_hangs(self):
        assert plain("- a\n  - b") == "* a\n  * b\n"

    def test_table(self):
        assert plain("| a | b |\n|---|---|\n| 1 |  |") == "a | b\n1 |\n"

    def test_table_separator_option(self):
        assert plain("| a | b |\n|---|---|", table_cell_separator="\t") == "a\tb\n"

    def test_block_quote_is_indented(self):
        assert plain("> q") == "  q\n"

    def test_thematic_break(self):
        assert plain("***") == "-" * 40 + "\n"


@pytest.mark.unit
class TestPlainTextInlines:
    """Tests for inline plain text output."""

    def test_markup_is_removed(self):
        assert plain("*a* **b** `c` ~~d~~") == "a b c d\n"

    def test_link_shows_url(self):
        assert plain("[docs](https://d.org)") == "docs <https://d.org>\n"
        assert plain("[docs](https://d.org)", show_link_urls=False) == "docs\n"

    def test_link_with_url_as_text(self):
        assert plain("[https://d.org](https://d.org)") == "https://d.org\n"

    def test_image_and_autolink(self):
        assert plain("![alt](i.png)") == "alt\n"
        assert plain("<a@b.com>") == "a@b.com\n"

    def test_extension_nodes(self):
        assert plain("@me #3 :tada:") == "@me #3 :tada:\n"

    def test_hard_break(self):
        assert plain("a  \nb") == "a\nb\n"
