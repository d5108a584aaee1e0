#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconv/ast/nodes.py
"""AST node classes for the neutral document model.

This module defines the closed set of node types produced by the GFM reader
and consumed by every writer. Each node is a plain dataclass, so two trees
are structurally equal exactly when ``==`` says so.

Node Hierarchy
--------------
All nodes inherit from the base Node class and support the visitor pattern.

Block-level nodes represent structural document elements:
    - Document, Paragraph, Heading, CodeBlock, BlockQuote
    - BulletList, OrderedList, ListItem
    - Table, TableRow, TableCell
    - ThematicBreak

Inline nodes represent text content and formatting:
    - Text, SoftBreak, HardBreak
    - Emphasis, Strong, Strikethrough, Code
    - Link, Image, Autolink
    - UserMention, IssueReference, EmojiShortcode, EscapedChar

Ownership is strictly tree shaped: a parent exclusively owns its children and
no node holds a reference back to its parent.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

from mdconv.constants import MAX_HEADING_LEVEL, Alignment, OrderedDelimiter, TaskStatus


class Node(ABC):
    """Base class for all AST nodes.

    All document nodes inherit from this base class and support the visitor
    pattern for traversal and rendering.
    """

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """
        pass


# ============================================================================
# Block-level Nodes
# ============================================================================


@dataclass
class Document(Node):
    """Root document node containing all other nodes.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes in the document
    metadata : dict, default = empty dict
        Document-level metadata read from YAML front matter

    """

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this document."""
        return visitor.visit_document(self)


@dataclass
class Paragraph(Node):
    """Paragraph block containing inline content.

    Parameters
    ----------
    content : list of Node, default = empty list
        Inline nodes in the paragraph

    """

    content: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this paragraph."""
        return visitor.visit_paragraph(self)


@dataclass
class Heading(Node):
    """Heading block with level and inline content.

    Parameters
    ----------
    level : int
        Heading level (1-6)
    content : list of Node, default = empty list
        Inline nodes in the heading

    Raises
    ------
    ValueError
        If level is not between 1 and 6

    """

    level: int
    content: list[Node] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate heading level."""
        if not 1 <= self.level <= MAX_HEADING_LEVEL:
            raise ValueError(f"Heading level must be 1-{MAX_HEADING_LEVEL}, got {self.level}")

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this heading."""
        return visitor.visit_heading(self)


@dataclass
class CodeBlock(Node):
    """Code block with verbatim content and an optional language tag.

    Parameters
    ----------
    content : str
        Literal code content, never inline-parsed
    language : str or None, default = None
        Language tag taken from the fence info string

    """

    content: str
    language: Optional[str] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this code block."""
        return visitor.visit_code_block(self)


@dataclass
class BlockQuote(Node):
    """Block quote containing block-level children."""

    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this block quote."""
        return visitor.visit_block_quote(self)


@dataclass
class ListItem(Node):
    """List item containing block-level content.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes in the item
    task_status : {"checked", "unchecked"} or None, default = None
        Task checkbox state. None means the item is not a task item and must
        not be rendered with a checkbox.

    """

    children: list[Node] = field(default_factory=list)
    task_status: Optional[TaskStatus] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this list item."""
        return visitor.visit_list_item(self)


@dataclass
class BulletList(Node):
    """Unordered list.

    Parameters
    ----------
    items : list of ListItem, default = empty list
        The list items
    tight : bool, default = True
        Tight lists render item paragraphs without surrounding blank lines

    """

    items: list[ListItem] = field(default_factory=list)
    tight: bool = True

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this list."""
        return visitor.visit_bullet_list(self)


@dataclass
class OrderedList(Node):
    """Numbered list.

    Parameters
    ----------
    items : list of ListItem, default = empty list
        The list items
    start : int, default = 1
        Number of the first item
    delimiter : {".", ")"}, default = "."
        Character following each item number
    tight : bool, default = True
        Tight lists render item paragraphs without surrounding blank lines

    """

    items: list[ListItem] = field(default_factory=list)
    start: int = 1
    delimiter: OrderedDelimiter = "."
    tight: bool = True

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this list."""
        return visitor.visit_ordered_list(self)


@dataclass
class TableCell(Node):
    """Table cell holding inline content."""

    content: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table cell."""
        return visitor.visit_table_cell(self)


@dataclass
class TableRow(Node):
    """Table row holding one cell per column."""

    cells: list[TableCell] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table row."""
        return visitor.visit_table_row(self)


@dataclass
class Table(Node):
    """Table with a header row, body rows and per-column alignment.

    The column count is ``len(alignments)``. Every row, header included,
    must hold exactly that many cells; the markdown parser pads and truncates
    rows before constructing the table.

    Parameters
    ----------
    alignments : list of {"left", "center", "right", None}
        Alignment for each column, None meaning unspecified
    header : TableRow
        Header row
    rows : list of TableRow, default = empty list
        Body rows

    Raises
    ------
    ValueError
        If any row does not have one cell per column

    """

    alignments: list[Optional[Alignment]]
    header: TableRow
    rows: list[TableRow] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate that all rows match the column count."""
        columns = len(self.alignments)
        for index, row in enumerate([self.header, *self.rows]):
            if len(row.cells) != columns:
                where = "header" if index == 0 else f"body row {index}"
                raise ValueError(f"Table {where} has {len(row.cells)} cells, expected {columns}")

    @property
    def column_count(self) -> int:
        """Return the number of columns."""
        return len(self.alignments)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table."""
        return visitor.visit_table(self)


@dataclass
class ThematicBreak(Node):
    """Horizontal rule separating sections."""

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this thematic break."""
        return visitor.visit_thematic_break(self)


# ============================================================================
# Inline Nodes
# ============================================================================


@dataclass
class Text(Node):
    """Plain text content."""

    content: str

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this text."""
        return visitor.visit_text(self)


@dataclass
class SoftBreak(Node):
    """Line ending inside a paragraph that is not a hard break."""

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this soft break."""
        return visitor.visit_soft_break(self)


@dataclass
class HardBreak(Node):
    """Forced line break (two trailing spaces or a trailing backslash)."""

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this hard break."""
        return visitor.visit_hard_break(self)


@dataclass
class Emphasis(Node):
    """Emphasized (italic) inline content."""

    content: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this emphasis."""
        return visitor.visit_emphasis(self)


@dataclass
class Strong(Node):
    """Strong (bold) inline content."""

    content: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this strong."""
        return visitor.visit_strong(self)


@dataclass
class Strikethrough(Node):
    """Struck-through inline content."""

    content: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this strikethrough."""
        return visitor.visit_strikethrough(self)


@dataclass
class Code(Node):
    """Inline code span with verbatim content."""

    content: str

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this code span."""
        return visitor.visit_code(self)


@dataclass
class Link(Node):
    """Hyperlink with an inline label.

    Parameters
    ----------
    url : str
        Link destination
    content : list of Node, default = empty list
        Inline nodes forming the link label
    title : str or None, default = None
        Optional link title

    """

    url: str
    content: list[Node] = field(default_factory=list)
    title: Optional[str] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this link."""
        return visitor.visit_link(self)


@dataclass
class Image(Node):
    """Image reference.

    Parameters
    ----------
    url : str
        Image source
    alt_text : str, default = ""
        Literal alternative text
    title : str or None, default = None
        Optional image title

    """

    url: str
    alt_text: str = ""
    title: Optional[str] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this image."""
        return visitor.visit_image(self)


@dataclass
class Autolink(Node):
    """URL recognized in running text or written in angle brackets."""

    url: str

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this autolink."""
        return visitor.visit_autolink(self)


@dataclass
class UserMention(Node):
    """GitHub-style ``@handle`` mention (handle stored without the ``@``)."""

    handle: str

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this mention."""
        return visitor.visit_user_mention(self)


@dataclass
class IssueReference(Node):
    """GitHub-style ``#123`` issue reference."""

    number: int

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this issue reference."""
        return visitor.visit_issue_reference(self)


@dataclass
class EmojiShortcode(Node):
    """Emoji written as ``:name:`` (name stored without colons)."""

    name: str

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this emoji shortcode."""
        return visitor.visit_emoji_shortcode(self)


@dataclass
class EscapedChar(Node):
    """Backslash-escaped punctuation character, rendered without markup significance."""

    char: str

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this escaped character."""
        return visitor.visit_escaped_char(self)


BLOCK_NODE_TYPES: tuple[type[Node], ...] = (
    Document,
    Paragraph,
    Heading,
    CodeBlock,
    BlockQuote,
    BulletList,
    OrderedList,
    ListItem,
    Table,
    TableRow,
    TableCell,
    ThematicBreak,
)

INLINE_NODE_TYPES: tuple[type[Node], ...] = (
    Text,
    SoftBreak,
    HardBreak,
    Emphasis,
    Strong,
    Strikethrough,
    Code,
    Link,
    Image,
    Autolink,
    UserMention,
    IssueReference,
    EmojiShortcode,
    EscapedChar,
)

ALL_NODE_TYPES: tuple[type[Node], ...] = BLOCK_NODE_TYPES + INLINE_NODE_TYPES


def get_node_children(node: Node) -> list[Node]:
    """Get the direct children of a node in document order.

    Parameters
    ----------
    node : Node
        Node to get children from

    Returns
    -------
    list of Node
        Child nodes, empty for leaf nodes

    """
    if isinstance(node, (Document, BlockQuote, ListItem)):
        return list(node.children)
    if isinstance(node, (BulletList, OrderedList)):
        return list(node.items)
    if isinstance(node, Table):
        return [node.header, *node.rows]
    if isinstance(node, TableRow):
        return list(node.cells)
    if isinstance(node, (Paragraph, Heading, TableCell, Emphasis, Strong, Strikethrough, Link)):
        return list(node.content)
    return []
