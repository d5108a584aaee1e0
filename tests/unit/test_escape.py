#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_escape.py
"""Unit tests for format-specific escaping helpers."""

import pytest

from mdconv.utils.escape import (
    escape_html,
    escape_inline_code,
    escape_latex,
    escape_markdown,
    escape_typst,
    longest_run,
)


@pytest.mark.unit
class TestEscapeMarkdown:
    """Tests for escape_markdown."""

    def test_inline_specials(self):
        assert escape_markdown("Text with [brackets] and *stars*") == "Text with \\[brackets\\] and \\*stars\\*"
        assert escape_markdown("a_b ~c~ `d` <e> \\") == "a\\_b \\~c\\~ \\`d\\` \\<e> \\\\"

    def test_empty(self):
        assert escape_markdown("") == ""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("# heading", "\\# heading"),
            ("> quote", "\\> quote"),
            ("+ item", "\\+ item"),
            ("- item", "\\- item"),
            ("12) item", "12\\) item"),
            ("===", "\\==="),
            ("#hashtag", "#hashtag"),
        ],
    )
    def test_line_start_markers(self, text, expected):
        assert escape_markdown(text, "line_start") == expected

    def test_markers_mid_line_untouched(self):
        assert escape_markdown("a # b", "line_start") == "a # b"
        assert escape_markdown("# heading") == "# heading"

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("@bob", "\\@bob"),
            ("see #12", "see \\#12"),
            (":smile:", "\\:smile:"),
            ("@1_", "\\@1\\_"),
            ("#12", "\\#12"),
            ("a@b.org", "a@b.org"),
            ("C#1 and #0", "C#1 and #0"),
            ("10:30:00", "10:30:00"),
            (":a_b:", ":a\\_b:"),
        ],
    )
    def test_shorthand_lookalikes(self, text, expected):
        assert escape_markdown(text) == expected


@pytest.mark.unit
class TestInlineCode:
    """Tests for longest_run and escape_inline_code."""

    def test_longest_run(self):
        assert longest_run("a ``b`` ```c", "`") == 3
        assert longest_run("abc", "`") == 0

    def test_plain_code(self):
        assert escape_inline_code("x") == ("x", "`")

    def test_backticks_inside(self):
        assert escape_inline_code("a``b") == ("a``b", "```")

    def test_leading_backtick_is_padded(self):
        assert escape_inline_code("`a") == (" `a ", "``")

    def test_space_at_both_ends_is_padded(self):
        assert escape_inline_code(" a ") == ("  a  ", "`")
        assert escape_inline_code("  ") == ("  ", "`")


@pytest.mark.unit
class TestOtherFormats:
    """Tests for HTML, LaTeX and Typst escaping."""

    def test_html(self):
        assert escape_html("<b>&</b>") == "&lt;b&gt;&amp;&lt;/b&gt;"
        assert escape_html('"q"') == "&quot;q&quot;"
        assert escape_html('"q"', quote=False) == '"q"'

    def test_latex(self):
        assert escape_latex("50% of $10 & ~more") == "50\\% of \\$10 \\& \\textasciitilde{}more"
        assert escape_latex("a\\b_{c}^") == "a\\textbackslash{}b\\_\\{c\\}\\^{}"

    def test_typst(self):
        assert escape_typst("a*b #c") == "a\\*b \\#c"
        assert escape_typst("see // and /* here") == "see \\/\\/ and /\\* here"

    def test_typst_line_start(self):
        assert escape_typst("= x", "line_start") == "\\= x"
        assert escape_typst("+ x", "line_start") == "\\+ x"
        assert escape_typst("2. x", "line_start") == "2\\. x"

    def test_typst_string(self):
        assert escape_typst('say "hi" \\', "string") == 'say \\"hi\\" \\\\'
