#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/integration/test_properties.py
"""End-to-end behavior of the reader, the document model and the writers.

Tests cover:
- Pandoc JSON round trips of parsed documents
- Emphasis nesting and escaping
- GFM render, parse stability with escapes folded into text
- Table row normalization
- Task list round trips through GFM
- Failure of unknown writers before any output

"""

import dataclasses
from io import StringIO

import pytest
from hypothesis import given
from hypothesis import strategies as st

from mdconv import UnrecognizedFormatError, convert, from_ast, to_ast
from mdconv.ast import (
    BulletList,
    Document,
    Emphasis,
    EscapedChar,
    ListItem,
    Paragraph,
    Strong,
    TableCell,
    Text,
    json_to_ast,
    merge_adjacent_text,
)
from mdconv.ast.serialization import ast_to_json


def fold_escapes(value):
    """Return a copy of ``value`` with escaped characters folded into plain text."""
    if isinstance(value, EscapedChar):
        return Text(value.char)
    if isinstance(value, list):
        return merge_adjacent_text([fold_escapes(item) for item in value])
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        changes = {f.name: fold_escapes(getattr(value, f.name)) for f in dataclasses.fields(value) if f.init}
        return dataclasses.replace(value, **changes)
    return value


@pytest.mark.integration
class TestDocumentProperties:
    """Properties of parsed documents."""

    def test_sample_round_trips_through_json(self, sample_markdown):
        doc = to_ast(sample_markdown)
        assert json_to_ast(ast_to_json(doc)) == doc

    def test_sample_round_trips_through_native_format(self, sample_markdown):
        doc = to_ast(sample_markdown)
        assert to_ast(from_ast(doc, "native"), "native") == doc

    def test_sample_reparses_from_gfm(self, sample_markdown):
        doc = to_ast(sample_markdown)
        assert to_ast(from_ast(doc, "gfm")) == doc

    def test_emphasis_nesting(self):
        (para,) = to_ast("*a* **b** ***c***").children
        assert para.content == [
            Emphasis(content=[Text("a")]),
            Text(" "),
            Strong(content=[Text("b")]),
            Text(" "),
            Emphasis(content=[Strong(content=[Text("c")])]),
        ]

    def test_escaped_delimiters(self):
        (para,) = to_ast("\\*not italic\\*").children
        assert para.content == [EscapedChar("*"), Text("not italic"), EscapedChar("*")]

    def test_short_table_row_is_padded(self):
        (table,) = to_ast("| a | b | c |\n|---|---|---|\n| 1 | 2 |").children
        assert table.column_count == 3
        assert len(table.rows[0].cells) == 3
        assert table.rows[0].cells[2] == TableCell()

    def test_task_item_round_trip(self):
        (lst,) = to_ast("- [x] done").children
        assert lst == BulletList(
            items=[ListItem(children=[Paragraph(content=[Text("done")])], task_status="checked")]
        )
        assert from_ast(to_ast("- [x] done"), "gfm") == "- [x] done\n"

    def test_literal_shorthand_survives_gfm(self):
        for text in ("ping @bob about #12 :smile:", "@1_"):
            doc = Document(children=[Paragraph(content=[Text(text)])])
            assert fold_escapes(to_ast(from_ast(doc, "gfm"))) == doc

    def test_nested_emphasis_survives_gfm(self):
        for source in ("*_1_*", "*a _b_ c*", "**_x_**"):
            doc = to_ast(source)
            assert to_ast(from_ast(doc, "gfm")) == doc

    def test_lone_star_is_text(self):
        (para,) = to_ast("a * b").children
        assert para.content == [Text("a * b")]

    def test_unknown_writer_produces_no_output(self):
        output = StringIO()
        with pytest.raises(UnrecognizedFormatError) as exc_info:
            convert("# x", target_format="rtf", output=output)
        assert exc_info.value.format_type == "rtf"
        assert "html" in exc_info.value.supported_formats
        assert output.getvalue() == ""


_MARKDOWN_PIECES = st.sampled_from(
    [
        "# Heading\n",
        "plain words\n",
        "*em* and **strong**\n",
        "- item\n- [ ] task\n",
        "1. one\n2. two\n",
        "> quoted\n",
        "```\ncode\n```\n",
        "| a | b |\n|---|:-:|\n| 1 | 2 |\n",
        "see <https://x.org> and @me #7 :+1:\n",
        "***\n",
        "text with `code` and ~~strike~~\n",
        "*a _b_ c* and *_1_* and **_x_**\n",
        "\\@bob \\#5 \\:ok: and @me\n",
    ]
)

_LITERAL_WORDS = st.sampled_from(["@bob", "#12", ":smile:", "@1_", "a", "*", "_", ":", "-"])


@pytest.mark.integration
class TestGeneratedDocuments:
    """Property-based checks over generated documents."""

    @given(st.lists(_MARKDOWN_PIECES, min_size=1, max_size=6))
    def test_json_round_trip(self, pieces):
        doc = to_ast("\n".join(pieces))
        assert json_to_ast(ast_to_json(doc)) == doc

    @given(st.lists(_MARKDOWN_PIECES, min_size=1, max_size=6))
    def test_gfm_reparse(self, pieces):
        doc = to_ast("\n".join(pieces))
        assert fold_escapes(to_ast(from_ast(doc, "gfm"))) == fold_escapes(doc)

    @given(st.lists(_LITERAL_WORDS, min_size=1, max_size=8))
    def test_literal_text_reparses_from_gfm(self, words):
        doc = Document(children=[Paragraph(content=[Text(" ".join(words))])])
        assert fold_escapes(to_ast(from_ast(doc, "gfm"))) == doc

    @given(st.text(max_size=200))
    def test_any_text_parses_and_renders(self, text):
        doc = to_ast(text)
        for target in ("gfm", "html", "latex", "typst", "plain", "native"):
            assert isinstance(from_ast(doc, target), str)
