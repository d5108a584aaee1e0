#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconv/ast/visitors.py
"""Visitor pattern implementation for AST traversal.

Every node type has exactly one abstract ``visit_*`` method on
:class:`NodeVisitor`. A renderer that forgets a node type cannot be
instantiated, so adding a node type surfaces immediately in every writer.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from mdconv.ast.nodes import (
    BLOCK_NODE_TYPES,
    INLINE_NODE_TYPES,
    Autolink,
    BlockQuote,
    BulletList,
    Code,
    CodeBlock,
    Document,
    Emphasis,
    EmojiShortcode,
    EscapedChar,
    HardBreak,
    Heading,
    Image,
    IssueReference,
    Link,
    ListItem,
    Node,
    OrderedList,
    Paragraph,
    SoftBreak,
    Strikethrough,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
    UserMention,
)


class NodeVisitor(ABC):
    """Abstract base class for AST node visitors.

    Subclasses implement one visit_* method per node type. Nodes dispatch to
    them through ``node.accept(visitor)``.

    Examples
    --------
    Counting text characters:

        >>> class TextLength(NodeVisitor):
        ...     def visit_text(self, node):
        ...         return len(node.content)
        ...     # ... remaining visit_* methods

    """

    @abstractmethod
    def visit_document(self, node: Document) -> Any:
        """Visit a Document node.

        Parameters
        ----------
        node : Document
            The document node to visit

        Returns
        -------
        Any
            Result of processing this node

        """
        pass

    @abstractmethod
    def visit_paragraph(self, node: Paragraph) -> Any:
        """Visit a Paragraph node."""
        pass

    @abstractmethod
    def visit_heading(self, node: Heading) -> Any:
        """Visit a Heading node."""
        pass

    @abstractmethod
    def visit_code_block(self, node: CodeBlock) -> Any:
        """Visit a CodeBlock node."""
        pass

    @abstractmethod
    def visit_block_quote(self, node: BlockQuote) -> Any:
        """Visit a BlockQuote node."""
        pass

    @abstractmethod
    def visit_bullet_list(self, node: BulletList) -> Any:
        """Visit a BulletList node."""
        pass

    @abstractmethod
    def visit_ordered_list(self, node: OrderedList) -> Any:
        """Visit an OrderedList node."""
        pass

    @abstractmethod
    def visit_list_item(self, node: ListItem) -> Any:
        """Visit a ListItem node."""
        pass

    @abstractmethod
    def visit_table(self, node: Table) -> Any:
        """Visit a Table node."""
        pass

    @abstractmethod
    def visit_table_row(self, node: TableRow) -> Any:
        """Visit a TableRow node."""
        pass

    @abstractmethod
    def visit_table_cell(self, node: TableCell) -> Any:
        """Visit a TableCell node."""
        pass

    @abstractmethod
    def visit_thematic_break(self, node: ThematicBreak) -> Any:
        """Visit a ThematicBreak node."""
        pass

    @abstractmethod
    def visit_text(self, node: Text) -> Any:
        """Visit a Text node."""
        pass

    @abstractmethod
    def visit_soft_break(self, node: SoftBreak) -> Any:
        """Visit a SoftBreak node."""
        pass

    @abstractmethod
    def visit_hard_break(self, node: HardBreak) -> Any:
        """Visit a HardBreak node."""
        pass

    @abstractmethod
    def visit_emphasis(self, node: Emphasis) -> Any:
        """Visit an Emphasis node."""
        pass

    @abstractmethod
    def visit_strong(self, node: Strong) -> Any:
        """Visit a Strong node."""
        pass

    @abstractmethod
    def visit_strikethrough(self, node: Strikethrough) -> Any:
        """Visit a Strikethrough node."""
        pass

    @abstractmethod
    def visit_code(self, node: Code) -> Any:
        """Visit a Code node."""
        pass

    @abstractmethod
    def visit_link(self, node: Link) -> Any:
        """Visit a Link node."""
        pass

    @abstractmethod
    def visit_image(self, node: Image) -> Any:
        """Visit an Image node."""
        pass

    @abstractmethod
    def visit_autolink(self, node: Autolink) -> Any:
        """Visit an Autolink node."""
        pass

    @abstractmethod
    def visit_user_mention(self, node: UserMention) -> Any:
        """Visit a UserMention node."""
        pass

    @abstractmethod
    def visit_issue_reference(self, node: IssueReference) -> Any:
        """Visit an IssueReference node."""
        pass

    @abstractmethod
    def visit_emoji_shortcode(self, node: EmojiShortcode) -> Any:
        """Visit an EmojiShortcode node."""
        pass

    @abstractmethod
    def visit_escaped_char(self, node: EscapedChar) -> Any:
        """Visit an EscapedChar node."""
        pass


class ValidationVisitor(NodeVisitor):
    """Visitor that validates AST structure.

    Checks the invariants that dataclass construction alone cannot enforce:
    block/inline containment, list item types, task states and non-empty
    single-character escapes. Documents decoded from foreign JSON are run
    through this visitor before being handed to a writer.

    Parameters
    ----------
    strict : bool, default = True
        Whether to raise on the first validation failure. When False, all
        problems are collected in ``errors``.

    """

    INLINE_NODES = frozenset(INLINE_NODE_TYPES)
    BLOCK_NODES = frozenset(BLOCK_NODE_TYPES) - {Document, ListItem, TableRow, TableCell}

    def __init__(self, strict: bool = True):
        """Initialize the validator."""
        self.strict = strict
        self.errors: list[str] = []

    def _add_error(self, message: str) -> None:
        self.errors.append(message)
        if self.strict:
            raise ValueError(message)

    def _visit_inline_children(self, children: list[Node], context: str) -> None:
        for i, child in enumerate(children):
            if type(child) not in self.INLINE_NODES:
                self._add_error(f"{context} can only contain inline nodes, but child {i} is {type(child).__name__}")
                continue
            child.accept(self)

    def _visit_block_children(self, children: list[Node], context: str) -> None:
        for i, child in enumerate(children):
            if type(child) not in self.BLOCK_NODES:
                self._add_error(f"{context} can only contain block nodes, but child {i} is {type(child).__name__}")
                continue
            child.accept(self)

    def _visit_items(self, items: list[ListItem], context: str) -> None:
        for i, item in enumerate(items):
            if not isinstance(item, ListItem):
                self._add_error(f"{context} item {i} is {type(item).__name__}, expected ListItem")
                continue
            item.accept(self)

    def visit_document(self, node: Document) -> None:
        """Validate a Document node."""
        self._visit_block_children(node.children, "Document")

    def visit_paragraph(self, node: Paragraph) -> None:
        """Validate a Paragraph node."""
        self._visit_inline_children(node.content, "Paragraph")

    def visit_heading(self, node: Heading) -> None:
        """Validate a Heading node."""
        if not 1 <= node.level <= 6:
            self._add_error(f"Invalid heading level: {node.level}")
        self._visit_inline_children(node.content, "Heading")

    def visit_code_block(self, node: CodeBlock) -> None:
        """Validate a CodeBlock node."""
        if node.language is not None and (not node.language or any(c.isspace() for c in node.language)):
            self._add_error(f"CodeBlock language must be a single non-empty word, got {node.language!r}")

    def visit_block_quote(self, node: BlockQuote) -> None:
        """Validate a BlockQuote node."""
        self._visit_block_children(node.children, "BlockQuote")

    def visit_bullet_list(self, node: BulletList) -> None:
        """Validate a BulletList node."""
        self._visit_items(node.items, "BulletList")

    def visit_ordered_list(self, node: OrderedList) -> None:
        """Validate an OrderedList node."""
        if node.start < 0:
            self._add_error(f"Ordered list start must be >= 0, got {node.start}")
        if node.delimiter not in (".", ")"):
            self._add_error(f"Ordered list delimiter must be '.' or ')', got {node.delimiter!r}")
        self._visit_items(node.items, "OrderedList")

    def visit_list_item(self, node: ListItem) -> None:
        """Validate a ListItem node."""
        if node.task_status not in (None, "checked", "unchecked"):
            self._add_error(f"Invalid task status: {node.task_status!r}")
        self._visit_block_children(node.children, "ListItem")

    def visit_table(self, node: Table) -> None:
        """Validate a Table node."""
        for alignment in node.alignments:
            if alignment not in (None, "left", "center", "right"):
                self._add_error(f"Invalid column alignment: {alignment!r}")
        node.header.accept(self)
        for row in node.rows:
            row.accept(self)

    def visit_table_row(self, node: TableRow) -> None:
        """Validate a TableRow node."""
        for cell in node.cells:
            cell.accept(self)

    def visit_table_cell(self, node: TableCell) -> None:
        """Validate a TableCell node."""
        self._visit_inline_children(node.content, "TableCell")

    def visit_thematic_break(self, node: ThematicBreak) -> None:
        """Validate a ThematicBreak node."""
        pass

    def visit_text(self, node: Text) -> None:
        """Validate a Text node."""
        pass

    def visit_soft_break(self, node: SoftBreak) -> None:
        """Validate a SoftBreak node."""
        pass

    def visit_hard_break(self, node: HardBreak) -> None:
        """Validate a HardBreak node."""
        pass

    def visit_emphasis(self, node: Emphasis) -> None:
        """Validate an Emphasis node."""
        self._visit_inline_children(node.content, "Emphasis")

    def visit_strong(self, node: Strong) -> None:
        """Validate a Strong node."""
        self._visit_inline_children(node.content, "Strong")

    def visit_strikethrough(self, node: Strikethrough) -> None:
        """Validate a Strikethrough node."""
        self._visit_inline_children(node.content, "Strikethrough")

    def visit_code(self, node: Code) -> None:
        """Validate a Code node."""
        pass

    def visit_link(self, node: Link) -> None:
        """Validate a Link node."""
        for child in node.content:
            if isinstance(child, Link):
                self._add_error("Links cannot contain other links")
        self._visit_inline_children(node.content, "Link")

    def visit_image(self, node: Image) -> None:
        """Validate an Image node."""
        pass

    def visit_autolink(self, node: Autolink) -> None:
        """Validate an Autolink node."""
        if not node.url:
            self._add_error("Autolink url cannot be empty")

    def visit_user_mention(self, node: UserMention) -> None:
        """Validate a UserMention node."""
        if not node.handle or node.handle.startswith("@"):
            self._add_error(f"Invalid mention handle: {node.handle!r}")

    def visit_issue_reference(self, node: IssueReference) -> None:
        """Validate an IssueReference node."""
        if node.number < 0:
            self._add_error(f"Issue number must be non-negative, got {node.number}")

    def visit_emoji_shortcode(self, node: EmojiShortcode) -> None:
        """Validate an EmojiShortcode node."""
        if not node.name:
            self._add_error("Emoji shortcode name cannot be empty")

    def visit_escaped_char(self, node: EscapedChar) -> None:
        """Validate an EscapedChar node."""
        if len(node.char) != 1:
            self._add_error(f"EscapedChar must hold exactly one character, got {node.char!r}")


def validate_ast(doc: Document, strict: bool = True) -> list[str]:
    """Validate a document tree.

    Parameters
    ----------
    doc : Document
        Document to validate
    strict : bool, default = True
        Raise ValueError on the first problem instead of collecting them

    Returns
    -------
    list of str
        Validation problems found (empty when valid)

    """
    validator = ValidationVisitor(strict=strict)
    doc.accept(validator)
    return validator.errors
