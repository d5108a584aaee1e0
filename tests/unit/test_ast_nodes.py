#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_ast_nodes.py
"""Unit tests for AST node classes.

Tests cover:
- Node creation and validation of construction-time invariants
- Visitor pattern acceptance
- Completeness of the visitor interface and of the JSON encoder tables
- Structural validation and text helpers

"""

import inspect

import pytest

from mdconv.ast import (
    ALL_NODE_TYPES,
    BLOCK_NODE_TYPES,
    INLINE_NODE_TYPES,
    Autolink,
    BlockQuote,
    BulletList,
    Code,
    CodeBlock,
    Document,
    EmojiShortcode,
    Emphasis,
    EscapedChar,
    HardBreak,
    Heading,
    Image,
    IssueReference,
    Link,
    ListItem,
    NodeVisitor,
    OrderedList,
    Paragraph,
    SoftBreak,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    UserMention,
    extract_text,
    get_node_children,
    merge_adjacent_text,
    validate_ast,
)
from mdconv.ast import serialization
from mdconv.ast.utils import normalize_row
from mdconv.renderers import (
    HtmlRenderer,
    LatexRenderer,
    MarkdownRenderer,
    PlainTextRenderer,
    TypstRenderer,
)


def _visit_method_name(node_type: type) -> str:
    """Return the visit_* method name a node type dispatches to."""
    calls = []

    class Recorder:
        def __getattr__(self, name):
            calls.append(name)
            return lambda node: None

    # Construct a minimal instance so accept() can be invoked
    minimal = {
        Heading: lambda: Heading(level=1),
        CodeBlock: lambda: CodeBlock(content=""),
        Table: lambda: Table(alignments=[], header=TableRow()),
        Text: lambda: Text(""),
        Code: lambda: Code(content=""),
        Link: lambda: Link(url=""),
        Image: lambda: Image(url=""),
        Autolink: lambda: Autolink(url="x:y"),
        UserMention: lambda: UserMention(handle="a"),
        IssueReference: lambda: IssueReference(number=1),
        EmojiShortcode: lambda: EmojiShortcode(name="a"),
        EscapedChar: lambda: EscapedChar(char="*"),
    }
    node = minimal.get(node_type, node_type)()
    node.accept(Recorder())
    return calls[0]


@pytest.mark.unit
class TestNodeCreation:
    """Tests for constructing nodes."""

    def test_document_defaults(self) -> None:
        """A bare Document has no children and empty metadata."""
        doc = Document()
        assert doc.children == []
        assert doc.metadata == {}

    def test_heading_level_bounds(self) -> None:
        """Heading levels outside 1-6 are rejected."""
        assert Heading(level=6).level == 6
        with pytest.raises(ValueError):
            Heading(level=0)
        with pytest.raises(ValueError):
            Heading(level=7)

    def test_ordered_list_defaults(self) -> None:
        """OrderedList starts at 1 with '.' and is tight."""
        lst = OrderedList()
        assert lst.start == 1
        assert lst.delimiter == "."
        assert lst.tight is True

    def test_table_rows_must_match_columns(self) -> None:
        """Every row must have exactly one cell per alignment."""
        header = TableRow(cells=[TableCell(), TableCell()])
        table = Table(alignments=[None, "right"], header=header, rows=[TableRow(cells=[TableCell(), TableCell()])])
        assert table.column_count == 2

        with pytest.raises(ValueError, match="body row 1"):
            Table(alignments=[None, None], header=header, rows=[TableRow(cells=[TableCell()])])
        with pytest.raises(ValueError, match="header"):
            Table(alignments=[None], header=header)

    def test_nodes_compare_by_value(self) -> None:
        """Nodes are dataclasses with structural equality."""
        a = Paragraph(content=[Strong(content=[Text("x")])])
        b = Paragraph(content=[Strong(content=[Text("x")])])
        assert a == b
        assert a != Paragraph(content=[Emphasis(content=[Text("x")])])


@pytest.mark.unit
class TestVisitorCompleteness:
    """Every node type is covered by the visitor interface and every writer."""

    def test_node_type_tuples_are_disjoint(self) -> None:
        """Block and inline node types do not overlap."""
        assert not set(BLOCK_NODE_TYPES) & set(INLINE_NODE_TYPES)
        assert len(ALL_NODE_TYPES) == len(BLOCK_NODE_TYPES) + len(INLINE_NODE_TYPES)

    @pytest.mark.parametrize("node_type", ALL_NODE_TYPES, ids=lambda t: t.__name__)
    def test_visit_method_is_abstract(self, node_type: type) -> None:
        """NodeVisitor declares an abstract visit_* method for each node type."""
        method = _visit_method_name(node_type)
        assert method in NodeVisitor.__abstractmethods__

    def test_no_extra_abstract_methods(self) -> None:
        """The visitor interface has exactly one method per node type."""
        expected = {_visit_method_name(node_type) for node_type in ALL_NODE_TYPES}
        assert set(NodeVisitor.__abstractmethods__) == expected

    @pytest.mark.parametrize(
        "renderer_class",
        [MarkdownRenderer, HtmlRenderer, LatexRenderer, TypstRenderer, PlainTextRenderer],
        ids=lambda c: c.__name__,
    )
    def test_renderers_are_concrete(self, renderer_class: type) -> None:
        """Each writer implements every visit_* method."""
        assert not inspect.isabstract(renderer_class)
        renderer_class()

    def test_incomplete_visitor_cannot_be_instantiated(self) -> None:
        """A writer missing a visit_* method fails at construction time."""

        class Partial(NodeVisitor):
            def visit_text(self, node):
                return node.content

        with pytest.raises(TypeError):
            Partial()

    def test_json_encoders_cover_every_node(self) -> None:
        """The Pandoc JSON encoder tables cover every block and inline node."""
        encodable_blocks = set(serialization._BLOCK_ENCODERS)
        encodable_inlines = set(serialization._INLINE_ENCODERS)
        # Structural parts are encoded by their containers
        structural = {Document, ListItem, TableRow, TableCell}
        assert set(BLOCK_NODE_TYPES) - structural == encodable_blocks
        assert set(INLINE_NODE_TYPES) == encodable_inlines


@pytest.mark.unit
class TestValidation:
    """Tests for structural validation."""

    def test_valid_document(self, sample_document) -> None:
        """A well-formed document has no validation errors."""
        assert validate_ast(sample_document) == []

    def test_inline_in_block_position(self) -> None:
        """Inline nodes directly under Document are reported."""
        doc = Document(children=[Text("loose")])
        errors = validate_ast(doc, strict=False)
        assert len(errors) == 1
        assert "Document can only contain block nodes" in errors[0]

    def test_strict_raises(self) -> None:
        """Strict validation raises on the first problem."""
        doc = Document(children=[Paragraph(content=[Paragraph()])])
        with pytest.raises(ValueError):
            validate_ast(doc, strict=True)

    def test_nested_links_reported(self) -> None:
        """Links may not contain links."""
        doc = Document(children=[Paragraph(content=[Link(url="a", content=[Link(url="b")])])])
        assert any("cannot contain other links" in e for e in validate_ast(doc, strict=False))

    def test_bad_escape_reported(self) -> None:
        """EscapedChar holds exactly one character."""
        doc = Document(children=[Paragraph(content=[EscapedChar(char="ab")])])
        assert validate_ast(doc, strict=False)

    def test_list_items_must_be_list_items(self) -> None:
        """Lists only contain ListItem nodes."""
        doc = Document(children=[BulletList(items=[Paragraph()])])  # type: ignore[list-item]
        assert validate_ast(doc, strict=False)


@pytest.mark.unit
class TestTextHelpers:
    """Tests for extract_text, merge_adjacent_text and normalize_row."""

    def test_extract_text_from_extension_nodes(self) -> None:
        """Extension nodes contribute their visible text."""
        nodes = [
            UserMention(handle="octocat"),
            Text(" "),
            IssueReference(number=7),
            SoftBreak(),
            EmojiShortcode(name="tada"),
            HardBreak(),
            Autolink(url="https://x.org"),
        ]
        assert extract_text(nodes) == "@octocat #7 :tada:\nhttps://x.org"

    def test_extract_text_nested(self) -> None:
        """Container nodes are flattened in document order."""
        quote = BlockQuote(children=[Paragraph(content=[Text("a "), Strong(content=[Code(content="b")])])])
        assert extract_text(quote) == "a b"

    def test_merge_adjacent_text(self) -> None:
        """Consecutive Text nodes merge and empty ones disappear."""
        merged = merge_adjacent_text([Text("a"), Text(""), Text("b"), SoftBreak(), Text("c")])
        assert merged == [Text("ab"), SoftBreak(), Text("c")]

    def test_normalize_row_pads_and_truncates(self) -> None:
        """Rows are fitted to the column count."""
        cell = TableCell(content=[Text("x")])
        assert normalize_row([cell], 3) == [cell, TableCell(), TableCell()]
        assert normalize_row([cell, cell, cell], 2) == [cell, cell]

    def test_get_node_children(self) -> None:
        """Children are returned for containers and nothing for leaves."""
        item = ListItem(children=[Paragraph()])
        assert get_node_children(BulletList(items=[item])) == [item]
        assert get_node_children(Text("x")) == []
