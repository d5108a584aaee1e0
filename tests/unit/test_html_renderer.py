#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_html_renderer.py
"""Unit tests for the HTML writer."""

import pytest

from mdconv.ast import Document, Heading, Paragraph, Text
from mdconv.exceptions import InvalidOptionsError
from mdconv.options import HtmlRendererOptions, LatexRendererOptions
from mdconv.parsers.markdown import GfmParser
from mdconv.renderers.html import HtmlRenderer


def html(markdown, **options):
    doc = GfmParser().parse(markdown)
    return HtmlRenderer(HtmlRendererOptions(**options)).render_to_string(doc)


@pytest.mark.unit
class TestHtmlBlocks:
    """Tests for block-level HTML output."""

    def test_paragraph(self):
        assert html("*hi*") == "<p><em>hi</em></p>\n"

    def test_headings(self):
        assert html("# A\n\n### C") == "<h1>A</h1>\n<h3>C</h3>\n"

    def test_tight_list_omits_paragraph_tags(self):
        assert html("- x") == "<ul>\n<li>x</li>\n</ul>\n"

    def test_loose_list_keeps_paragraph_tags(self):
        assert html("- a\n\n- b") == "<ul>\n<li>\n<p>a</p>\n</li>\n<li>\n<p>b</p>\n</li>\n</ul>\n"

    def test_nested_tight_list(self):
        assert html("- a\n  - b") == "<ul>\n<li>a\n<ul>\n<li>b</li>\n</ul>\n</li>\n</ul>\n"

    def test_task_items(self):
        assert html("- [x] done") == (
            '<ul>\n<li class="task-list-item"><input type="checkbox" checked disabled> done</li>\n</ul>\n'
        )
        assert html("- [ ] todo") == (
            '<ul>\n<li class="task-list-item"><input type="checkbox" disabled> todo</li>\n</ul>\n'
        )

    def test_ordered_list_start(self):
        assert html("1. x") == "<ol>\n<li>x</li>\n</ol>\n"
        assert html("3. x") == '<ol start="3">\n<li>x</li>\n</ol>\n'

    def test_code_block(self):
        assert html("```python\n<x>\n```") == '<pre><code class="language-python">&lt;x&gt;\n</code></pre>\n'

    def test_block_quote(self):
        assert html("> q") == "<blockquote>\n<p>q</p>\n</blockquote>\n"

    def test_thematic_break(self):
        assert html("***") == "<hr>\n"

    def test_table(self):
        assert html("| a | b |\n|:-|-:|\n| 1 | 2 |") == (
            "<table>\n<thead>\n<tr>\n"
            '<th style="text-align: left">a</th>\n'
            '<th style="text-align: right">b</th>\n'
            "</tr>\n</thead>\n<tbody>\n<tr>\n"
            '<td style="text-align: left">1</td>\n'
            '<td style="text-align: right">2</td>\n'
            "</tr>\n</tbody>\n</table>\n"
        )

    def test_table_without_rows_has_no_tbody(self):
        assert "<tbody>" not in html("| a |\n|---|")


@pytest.mark.unit
class TestHtmlInlines:
    """Tests for inline HTML output."""

    def test_text_is_escaped(self):
        assert html("a < b & c") == "<p>a &lt; b &amp; c</p>\n"

    def test_strikethrough(self):
        assert html("~~x~~") == "<p><del>x</del></p>\n"

    def test_hard_break(self):
        assert html("a  \nb") == "<p>a<br>\nb</p>\n"

    def test_link_and_image(self):
        assert html('[a](u "T")') == '<p><a href="u" title="T">a</a></p>\n'
        assert html("![alt](i.png)") == '<p><img src="i.png" alt="alt"></p>\n'

    def test_autolinks(self):
        assert html("<a@b.com>") == '<p><a href="mailto:a@b.com">a@b.com</a></p>\n'
        assert html("www.example.com") == '<p><a href="http://www.example.com">www.example.com</a></p>\n'

    def test_mention_links_to_profile(self):
        assert html("@octocat") == '<p><a href="https://github.com/octocat" class="user-mention">@octocat</a></p>\n'

    def test_mention_linking_disabled(self):
        assert html("@octocat", mention_base_url=None) == "<p>@octocat</p>\n"

    def test_issue_reference(self):
        assert html("#42") == "<p>#42</p>\n"
        assert html("#42", issue_base_url="https://github.com/o/r/issues/") == (
            '<p><a href="https://github.com/o/r/issues/42" class="issue-reference">#42</a></p>\n'
        )

    def test_emoji(self):
        assert html(":tada:") == '<p><span class="emoji">:tada:</span></p>\n'
        assert html(":tada:", class_prefix="md-") == '<p><span class="md-emoji">:tada:</span></p>\n'

    def test_escaped_char(self):
        assert html("\\<b\\>") == "<p>&lt;b&gt;</p>\n"


@pytest.mark.unit
class TestHtmlStandalone:
    """Tests for complete HTML documents."""

    def test_title_from_metadata(self):
        output = html("---\ntitle: My Doc\nauthor: Ann\n---\n\nhi", standalone=True)
        assert output.startswith("<!DOCTYPE html>\n<html>\n")
        assert "<title>My Doc</title>" in output
        assert '<meta name="author" content="Ann">' in output
        assert "<body>\n<p>hi</p>\n</body>" in output
        assert output.endswith("</html>\n")

    def test_default_title(self):
        doc = Document(children=[Heading(level=1, content=[Text("x")])])
        output = HtmlRenderer(HtmlRendererOptions(standalone=True)).render_to_string(doc)
        assert "<title>Untitled</title>" in output

    def test_title_option(self):
        doc = Document(children=[Paragraph(content=[Text("x")])])
        output = HtmlRenderer(HtmlRendererOptions(standalone=True, title="A & B")).render_to_string(doc)
        assert "<title>A &amp; B</title>" in output

    def test_wrong_options_type(self):
        with pytest.raises(InvalidOptionsError):
            HtmlRenderer(LatexRendererOptions())  # type: ignore[arg-type]
