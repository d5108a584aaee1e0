#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconv/ast/utils.py
"""Utility functions for working with AST nodes."""

from __future__ import annotations

from typing import Union

from mdconv.ast.nodes import (
    Autolink,
    Code,
    CodeBlock,
    EmojiShortcode,
    EscapedChar,
    HardBreak,
    Image,
    IssueReference,
    Node,
    SoftBreak,
    TableCell,
    Text,
    UserMention,
    get_node_children,
)


def extract_text(node_or_nodes: Union[Node, list[Node]], joiner: str = "") -> str:
    r"""Extract plain text from a node or list of nodes.

    Leaf inline nodes contribute their visible text: mentions keep their
    ``@``, issue references their ``#`` and emoji their colons. Soft breaks
    become a space and hard breaks a newline.

    Parameters
    ----------
    node_or_nodes : Node or list of Node
        A single node or list of nodes to extract text from
    joiner : str, default = ""
        String used to join the text of sibling nodes

    Returns
    -------
    str
        Concatenated text content

    Examples
    --------
    >>> extract_text([Text("a "), Strong([Text("b")])])
    'a b'

    """
    if isinstance(node_or_nodes, list):
        return joiner.join(extract_text(node, joiner) for node in node_or_nodes)

    node = node_or_nodes
    if isinstance(node, (Text, Code, CodeBlock)):
        return node.content
    if isinstance(node, SoftBreak):
        return " "
    if isinstance(node, HardBreak):
        return "\n"
    if isinstance(node, Image):
        return node.alt_text
    if isinstance(node, Autolink):
        return node.url
    if isinstance(node, UserMention):
        return f"@{node.handle}"
    if isinstance(node, IssueReference):
        return f"#{node.number}"
    if isinstance(node, EmojiShortcode):
        return f":{node.name}:"
    if isinstance(node, EscapedChar):
        return node.char
    return joiner.join(extract_text(child, joiner) for child in get_node_children(node))


def merge_adjacent_text(nodes: list[Node]) -> list[Node]:
    """Merge consecutive Text nodes and drop empty ones.

    Parameters
    ----------
    nodes : list of Node
        Inline sequence

    Returns
    -------
    list of Node
        New inline sequence with no two adjacent Text nodes

    """
    merged: list[Node] = []
    for node in nodes:
        if isinstance(node, Text):
            if not node.content:
                continue
            if merged and isinstance(merged[-1], Text):
                merged[-1] = Text(merged[-1].content + node.content)
                continue
        merged.append(node)
    return merged


def normalize_row(cells: list[TableCell], columns: int) -> list[TableCell]:
    """Pad or truncate a row of cells to exactly ``columns`` entries.

    Parameters
    ----------
    cells : list of TableCell
        Cells as found in the source
    columns : int
        Column count established by the header row

    Returns
    -------
    list of TableCell
        Short rows are padded with empty cells, long rows truncated

    """
    if len(cells) >= columns:
        return list(cells[:columns])
    return list(cells) + [TableCell() for _ in range(columns - len(cells))]
