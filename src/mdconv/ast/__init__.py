#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconv/ast/__init__.py
"""Neutral document model shared by every reader and writer.

The module consists of several components:

- nodes: AST node classes representing document structure
- visitors: Visitor base class and structural validation
- serialization: Pandoc JSON serialization and deserialization
- utils: Text extraction and normalization helpers

Examples
--------
Basic usage:

    >>> from mdconv.ast import Document, Heading, Paragraph, Text
    >>> from mdconv.renderers.markdown import MarkdownRenderer
    >>>
    >>> doc = Document(children=[
    ...     Heading(level=1, content=[Text(content="Title")]),
    ...     Paragraph(content=[Text(content="Hello world")])
    ... ])
    >>> MarkdownRenderer().render_to_string(doc)
    '# Title\n\nHello world\n'

"""

from mdconv.ast.nodes import (
    ALL_NODE_TYPES,
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
    get_node_children,
)
from mdconv.ast.serialization import ast_to_dict, ast_to_json, dict_to_ast, json_to_ast
from mdconv.ast.utils import extract_text, merge_adjacent_text
from mdconv.ast.visitors import NodeVisitor, ValidationVisitor, validate_ast

__all__ = [
    "ALL_NODE_TYPES",
    "BLOCK_NODE_TYPES",
    "INLINE_NODE_TYPES",
    "Node",
    "Document",
    "Paragraph",
    "Heading",
    "CodeBlock",
    "BlockQuote",
    "BulletList",
    "OrderedList",
    "ListItem",
    "Table",
    "TableRow",
    "TableCell",
    "ThematicBreak",
    "Text",
    "SoftBreak",
    "HardBreak",
    "Emphasis",
    "Strong",
    "Strikethrough",
    "Code",
    "Link",
    "Image",
    "Autolink",
    "UserMention",
    "IssueReference",
    "EmojiShortcode",
    "EscapedChar",
    "NodeVisitor",
    "ValidationVisitor",
    "validate_ast",
    "get_node_children",
    "extract_text",
    "merge_adjacent_text",
    "ast_to_dict",
    "ast_to_json",
    "dict_to_ast",
    "json_to_ast",
]
