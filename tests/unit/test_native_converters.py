#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_native_converters.py
"""Unit tests for the Pandoc JSON parser and renderer."""

import json

import pytest

from mdconv.ast import Document, Paragraph, Text, UserMention, ast_to_dict
from mdconv.exceptions import InvalidOptionsError, StructuralParseError
from mdconv.options import HtmlRendererOptions, MarkdownParserOptions, NativeParserOptions, NativeRendererOptions
from mdconv.parsers.native import NativeParser
from mdconv.renderers.native import NativeRenderer


def span(classes, attributes, text):
    return {"t": "Span", "c": [["", classes, attributes], [{"t": "Str", "c": text}]]}


@pytest.mark.unit
class TestNativeRenderer:
    """Tests for NativeRenderer."""

    def test_output_matches_encoder(self, sample_document):
        output = NativeRenderer().render_to_string(sample_document)
        assert output.endswith("}\n")
        assert json.loads(output) == ast_to_dict(sample_document)

    def test_indent_option(self):
        doc = Document(children=[Paragraph(content=[Text("x")])])
        compact = NativeRenderer().render_to_string(doc)
        pretty = NativeRenderer(NativeRendererOptions(indent=2)).render_to_string(doc)
        assert compact.count("\n") == 1
        assert pretty.count("\n") > 1
        assert json.loads(compact) == json.loads(pretty)

    def test_wrong_options_type(self):
        with pytest.raises(InvalidOptionsError):
            NativeRenderer(HtmlRendererOptions())  # type: ignore[arg-type]


@pytest.mark.unit
class TestNativeParser:
    """Tests for NativeParser."""

    def test_parse_string_and_bytes(self, sample_document):
        payload = NativeRenderer().render_to_string(sample_document)
        assert NativeParser().parse(payload) == sample_document
        assert NativeParser().parse(payload.encode("utf-8")) == sample_document

    def test_malformed_json(self):
        with pytest.raises(StructuralParseError) as exc_info:
            NativeParser().parse("{not json")
        assert exc_info.value.parsing_stage == "json_decoding"

    def test_missing_blocks(self):
        with pytest.raises(StructuralParseError) as exc_info:
            NativeParser().parse('{"meta": {}}')
        assert exc_info.value.parsing_stage == "json_decoding"

    def test_strict_mode_rejects_underline(self):
        payload = json.dumps(
            {"blocks": [{"t": "Para", "c": [{"t": "Underline", "c": [{"t": "Str", "c": "u"}]}]}]}
        )
        assert NativeParser().parse(payload).children == [Paragraph(content=[Text("u")])]
        with pytest.raises(StructuralParseError):
            NativeParser(NativeParserOptions(strict_mode=True)).parse(payload)

    def test_mention_span(self):
        payload = json.dumps({"blocks": [{"t": "Para", "c": [span(["user-mention"], [["handle", "me"]], "@me")]}]})
        assert NativeParser().parse(payload).children == [Paragraph(content=[UserMention("me")])]

    def test_invalid_mention_fails_validation(self):
        payload = json.dumps({"blocks": [{"t": "Para", "c": [span(["user-mention"], [["handle", ""]], "@")]}]})
        with pytest.raises(StructuralParseError) as exc_info:
            NativeParser().parse(payload)
        assert exc_info.value.parsing_stage == "validation"

    def test_wrong_options_type(self):
        with pytest.raises(InvalidOptionsError):
            NativeParser(MarkdownParserOptions())  # type: ignore[arg-type]
