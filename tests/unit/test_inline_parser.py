#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_inline_parser.py
"""Unit tests for the GFM inline parser."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from mdconv.ast import (
    Autolink,
    Code,
    EmojiShortcode,
    Emphasis,
    EscapedChar,
    HardBreak,
    Image,
    IssueReference,
    Link,
    SoftBreak,
    Strikethrough,
    Strong,
    Text,
    UserMention,
)
from mdconv.options import MarkdownParserOptions
from mdconv.parsers.inline import InlineParser, normalize_label, unescape_string


def parse(text, **kwargs):
    return InlineParser(**kwargs).parse(text)


@pytest.mark.unit
class TestEmphasis:
    """Tests for emphasis, strong emphasis and strikethrough."""

    def test_emphasis_strong_and_combined(self):
        assert parse("*a* **b** ***c***") == [
            Emphasis(content=[Text("a")]),
            Text(" "),
            Strong(content=[Text("b")]),
            Text(" "),
            Emphasis(content=[Strong(content=[Text("c")])]),
        ]

    def test_nested_emphasis_inside_strong(self):
        assert parse("**bold *nested* text**") == [
            Strong(content=[Text("bold "), Emphasis(content=[Text("nested")]), Text(" text")]),
        ]

    def test_underscore_emphasis(self):
        assert parse("_a_ __b__") == [
            Emphasis(content=[Text("a")]),
            Text(" "),
            Strong(content=[Text("b")]),
        ]

    def test_intraword_star_emphasis(self):
        assert parse("foo*bar*baz") == [Text("foo"), Emphasis(content=[Text("bar")]), Text("baz")]

    def test_intraword_underscore_is_literal(self):
        assert parse("snake_case_name") == [Text("snake_case_name")]

    def test_lone_delimiter_is_text(self):
        assert parse("*") == [Text("*")]
        assert parse("a * b") == [Text("a * b")]

    def test_unmatched_opener_is_text(self):
        assert parse("**open") == [Text("**open")]

    def test_strikethrough(self):
        assert parse("~~gone~~") == [Strikethrough(content=[Text("gone")])]
        assert parse("~gone~") == [Strikethrough(content=[Text("gone")])]

    def test_triple_tilde_is_text(self):
        assert parse("~~~x~~~") == [Text("~~~x~~~")]

    def test_strikethrough_disabled(self):
        options = MarkdownParserOptions(parse_strikethrough=False)
        assert parse("~~x~~", options=options) == [Text("~~x~~")]


@pytest.mark.unit
class TestEscapesAndEntities:
    """Tests for backslash escapes and character references."""

    def test_escaped_delimiters(self):
        assert parse(r"\*not italic\*") == [EscapedChar("*"), Text("not italic"), EscapedChar("*")]

    def test_backslash_before_letter_is_literal(self):
        assert parse(r"\a") == [Text("\\a")]

    def test_named_entity(self):
        assert parse("&amp;") == [Text("&")]
        assert parse("&copy; 2024") == [Text("© 2024")]

    def test_numeric_entity_does_not_start_reference(self):
        assert parse("&#35;1") == [Text("#1")]

    def test_unknown_entity_is_text(self):
        assert parse("AT&T &bogus;") == [Text("AT&T &bogus;")]


@pytest.mark.unit
class TestCodeSpans:
    """Tests for code spans."""

    def test_simple_code_span(self):
        assert parse("`code`") == [Code("code")]

    def test_double_backtick_span_with_inner_backtick(self):
        assert parse("`` a`b ``") == [Code("a`b")]

    def test_code_span_content_is_literal(self):
        assert parse("`*x* @me`") == [Code("*x* @me")]

    def test_unmatched_backtick_is_text(self):
        assert parse("`a") == [Text("`a")]


@pytest.mark.unit
class TestLineBreaks:
    """Tests for soft and hard line breaks."""

    def test_soft_break(self):
        assert parse("a\nb") == [Text("a"), SoftBreak(), Text("b")]

    def test_hard_break_from_trailing_spaces(self):
        assert parse("a  \nb") == [Text("a"), HardBreak(), Text("b")]

    def test_hard_break_from_backslash(self):
        assert parse("a\\\nb") == [Text("a"), HardBreak(), Text("b")]

    def test_leading_spaces_after_break_are_dropped(self):
        assert parse("a\n   b") == [Text("a"), SoftBreak(), Text("b")]


@pytest.mark.unit
class TestExtensions:
    """Tests for mentions, issue references, emoji and autolinks."""

    def test_user_mention(self):
        assert parse("thanks @octocat!") == [Text("thanks "), UserMention("octocat"), Text("!")]

    def test_mention_with_hyphen(self):
        assert parse("@octo-cat") == [UserMention("octo-cat")]

    def test_email_like_text_is_not_a_mention(self):
        assert parse("foo@bar") == [Text("foo@bar")]

    def test_overlong_handle_is_text(self):
        handle = "a" * 40
        assert parse(f"@{handle}") == [Text(f"@{handle}")]

    def test_issue_reference(self):
        assert parse("#123") == [IssueReference(123)]
        assert parse("see #12.") == [Text("see "), IssueReference(12), Text(".")]

    def test_invalid_issue_references_are_text(self):
        assert parse("#0") == [Text("#0")]
        assert parse("abc#1") == [Text("abc#1")]
        assert parse("#12abc") == [Text("#12abc")]

    def test_emoji_shortcode(self):
        assert parse(":smile:") == [EmojiShortcode("smile")]
        assert parse("yes :+1: ok") == [Text("yes "), EmojiShortcode("+1"), Text(" ok")]

    def test_clock_time_is_not_emoji(self):
        assert parse("10:30:00") == [Text("10:30:00")]

    def test_angle_autolinks(self):
        assert parse("<https://example.com/a?b=c>") == [Autolink("https://example.com/a?b=c")]
        assert parse("<a@b.com>") == [Autolink("mailto:a@b.com")]

    def test_bare_url_trims_trailing_punctuation(self):
        assert parse("Visit https://example.com.") == [
            Text("Visit "),
            Autolink("https://example.com"),
            Text("."),
        ]

    def test_bare_www_url_in_parentheses(self):
        assert parse("(www.example.com)") == [Text("("), Autolink("www.example.com"), Text(")")]

    def test_bare_url_needs_boundary(self):
        assert parse("xhttps://a.com") == [Text("xhttps://a.com")]

    def test_extensions_disabled(self):
        options = MarkdownParserOptions(
            parse_mentions=False,
            parse_issue_references=False,
            parse_emoji=False,
            parse_autolinks=False,
        )
        text = "@a #1 :b: https://c.org"
        assert parse(text, options=options) == [Text(text)]


@pytest.mark.unit
class TestLinksAndImages:
    """Tests for inline links, images and reference resolution."""

    def test_inline_link_with_title(self):
        assert parse('[text](https://x.org "T")') == [
            Link(url="https://x.org", content=[Text("text")], title="T"),
        ]

    def test_link_with_emphasis(self):
        assert parse("[*a*](u)") == [Link(url="u", content=[Emphasis(content=[Text("a")])])]

    def test_angle_bracket_destination(self):
        assert parse("[a](<my file.md>)") == [Link(url="my file.md", content=[Text("a")])]

    def test_image_keeps_raw_label_as_alt(self):
        assert parse("![alt *x*](img.png)") == [Image(url="img.png", alt_text="alt *x*")]

    def test_unresolved_brackets_are_text(self):
        assert parse("[not a link]") == [Text("[not a link]")]

    def test_empty_title_becomes_none(self):
        assert parse('[a](u "")') == [Link(url="u", content=[Text("a")])]

    def test_shortcut_reference_is_case_insensitive(self):
        refs = {"foo": ("https://f.org", None)}
        assert parse("[Foo]", references=refs) == [Link(url="https://f.org", content=[Text("Foo")])]

    def test_full_and_collapsed_references(self):
        refs = {"foo": ("https://f.org", "Title")}
        expected = Link(url="https://f.org", content=[Text("text")], title="Title")
        assert parse("[text][FOO]", references=refs) == [expected]
        assert parse("[foo][]", references=refs) == [Link(url="https://f.org", content=[Text("foo")], title="Title")]

    def test_unknown_full_reference_is_text(self):
        assert parse("[a][missing]", references={}) == [Text("[a][missing]")]


@pytest.mark.unit
class TestHelpers:
    """Tests for label normalization and string unescaping."""

    def test_normalize_label(self):
        assert normalize_label("  Foo \n  Bar ") == "foo bar"

    def test_unescape_string(self):
        assert unescape_string(r"a\*b&amp;c") == "a*b&c"


@pytest.mark.unit
class TestInlineProperties:
    """Property-based tests for the inline parser."""

    @given(st.text(alphabet="ab *_~`[]()!<>&#@:\\\nhttps/.", max_size=40))
    def test_never_raises_and_merges_text(self, text):
        nodes = InlineParser().parse(text)
        for left, right in zip(nodes, nodes[1:]):
            assert not (isinstance(left, Text) and isinstance(right, Text))
        assert all(node.content for node in nodes if isinstance(node, Text))
