#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_typst_renderer.py
"""Unit tests for the Typst writer."""

import pytest

from mdconv.ast import Document, Paragraph, Text
from mdconv.options import TypstRendererOptions
from mdconv.parsers.markdown import GfmParser
from mdconv.renderers.typst import TypstRenderer


def typst(markdown, **options):
    doc = GfmParser().parse(markdown)
    return TypstRenderer(TypstRendererOptions(**options)).render_to_string(doc)


def typst_text(text):
    doc = Document(children=[Paragraph(content=[Text(text)])])
    return TypstRenderer().render_to_string(doc)


@pytest.mark.unit
class TestTypstBlocks:
    """Tests for block-level Typst output."""

    def test_headings(self):
        assert typst("## Setup") == "== Setup\n"
        assert typst("# A\n\n### B") == "= A\n\n=== B\n"

    def test_code_block(self):
        assert typst("```rust\nfn main() {}\n```") == "```rust\nfn main() {}\n```\n"

    def test_bullet_list(self):
        assert typst("- a\n- b") == "- a\n- b\n"

    def test_loose_list(self):
        assert typst("- a\n\n- b") == "- a\n\n- b\n"

    def test_ordered_list(self):
        assert typst("1. a\n2. b") == "+ a\n+ b\n"

    def test_ordered_list_with_start(self):
        assert typst("3. x\n4. y") == "#enum(start: 3)[x][y]\n"

    def test_task_items(self):
        assert typst("- [x] done\n- [ ] todo") == "- ☒ done\n- ☐ todo\n"

    def test_nested_list(self):
        assert typst("- a\n  - b") == "- a\n  - b\n"
        assert typst("1. a\n   - b\n2. c") == "+ a\n  - b\n+ c\n"

    def test_nested_list_in_loose_list(self):
        assert typst("- a\n\n  - b\n\n- c") == "- a\n\n  - b\n\n- c\n"

    def test_table(self):
        assert typst("| a | b |\n|:-|--|\n| 1 | 2 |") == (
            "#table(\n  columns: 2,\n  align: (left, auto),\n  table.header([a], [b]),\n  [1], [2],\n)\n"
        )

    def test_single_column_alignment_is_a_tuple(self):
        assert "  align: (auto,)," in typst("| a |\n|---|")

    def test_block_quote(self):
        assert typst("> q") == "#quote(block: true)[\nq\n]\n"

    def test_thematic_break(self):
        assert typst("***") == "#line(length: 100%)\n"

    def test_document_settings(self):
        source = '---\ntitle: My "T"\nauthor: A\n---\n\nx'
        assert typst(source) == '#set document(title: "My \\"T\\"", author: "A")\n\nx\n'
        assert typst(source, include_metadata=False) == "x\n"


@pytest.mark.unit
class TestTypstInlines:
    """Tests for inline Typst output."""

    def test_formatting(self):
        assert typst("*a* **b** ~~c~~") == "_a_ *b* #strike[c]\n"

    def test_nested_emphasis_is_flattened(self):
        assert typst("*a _b_ c* and **x __y__ z**") == "_a b c_ and *x y z*\n"

    def test_mixed_nesting_keeps_both_markers(self):
        assert typst("*a **b** c*") == "_a *b* c_\n"
        assert typst("***x***") == "_*x*_\n"

    def test_inline_code(self):
        assert typst("`x`") == "`x`\n"
        assert typst("``a`b``") == '#raw("a`b")\n'

    def test_links(self):
        assert typst("[x](https://x.org)") == '#link("https://x.org")[x]\n'
        assert typst("<https://x.org>") == '#link("https://x.org")\n'

    def test_image(self):
        assert typst("![a](p.png)") == '#image("p.png", alt: "a")\n'

    def test_mention(self):
        assert typst("@me") == '#link("https://github.com/me")[\\@me]\n'
        assert typst("@me", mention_base_url=None) == "\\@me\n"

    def test_hard_break(self):
        assert typst("a  \nb") == "a\\\nb\n"

    def test_markup_characters_escaped(self):
        assert typst_text("a // b #c $d") == "a \\/\\/ b \\#c \\$d\n"

    def test_line_start_markers_escaped(self):
        assert typst_text("= not heading") == "\\= not heading\n"
        assert typst_text("1. not a list") == "1\\. not a list\n"
        assert typst_text("a = b") == "a = b\n"
