#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconv/renderers/typst.py
"""Typst rendering from AST.

This module provides the TypstRenderer class which converts AST nodes to
Typst markup. Constructs without a markup shorthand use Typst functions
(``#link``, ``#image``, ``#quote``, ``#table``).

"""

from __future__ import annotations

from typing import Any

from mdconv.ast.nodes import (
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
from mdconv.ast.visitors import NodeVisitor
from mdconv.constants import CHECKED_BOX, UNCHECKED_BOX
from mdconv.converter_metadata import ConverterMetadata
from mdconv.options.typst import TypstRendererOptions
from mdconv.renderers.base import BaseRenderer, InlineContentMixin
from mdconv.utils.escape import escape_typst, longest_run

_ALIGNMENTS = {None: "auto", "left": "left", "center": "center", "right": "right"}


def _string(value: str) -> str:
    """Quote a value as a Typst string literal."""
    return f'"{escape_typst(value, "string")}"'


def _indent_continuation(text: str, width: int) -> str:
    lines = text.split("\n")
    return "\n".join([lines[0]] + [(" " * width + line) if line else "" for line in lines[1:]])


class TypstRenderer(NodeVisitor, InlineContentMixin, BaseRenderer):
    """Render AST nodes to Typst markup.

    Parameters
    ----------
    options : TypstRendererOptions or None, default = None
        Typst rendering options

    Examples
    --------
        >>> from mdconv.ast import Document, Heading, Text
        >>> doc = Document(children=[Heading(level=2, content=[Text("Setup")])])
        >>> print(TypstRenderer().render_to_string(doc))
        == Setup

    """

    def __init__(self, options: TypstRendererOptions | None = None):
        """Initialize the Typst renderer with options."""
        BaseRenderer._validate_options_type(options, TypstRendererOptions, "typst")
        options = options or TypstRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: TypstRendererOptions = options
        self._output: list[str] = []
        self._at_line_start: bool = False
        self._in_emphasis: bool = False
        self._in_strong: bool = False
        self._tight_list: bool = False

    def render_to_string(self, doc: Document) -> str:
        """Render a document AST to a Typst string.

        Parameters
        ----------
        doc : Document
            The document node to render

        Returns
        -------
        str
            Typst markup

        """
        self._output = []
        self._at_line_start = False
        self._in_emphasis = False
        self._in_strong = False
        self._tight_list = False

        if self.options.include_metadata:
            self._render_document_settings(doc.metadata or {})
        doc.accept(self)

        result = "".join(self._output).rstrip()
        self._output = []
        return result + "\n" if result else ""

    def _render_document_settings(self, metadata: dict[str, Any]) -> None:
        arguments = []
        for key in ("title", "author"):
            value = metadata.get(key)
            if isinstance(value, str):
                arguments.append(f"{key}: {_string(value)}")
        if arguments:
            self._output.append(f"#set document({', '.join(arguments)})\n\n")

    # ------------------------------------------------------------------
    # Block nodes
    # ------------------------------------------------------------------

    def visit_document(self, node: Document) -> None:
        self._output.append("\n\n".join(self._render_blocks(node.children)))

    def visit_heading(self, node: Heading) -> None:
        self._at_line_start = False
        content = self._render_inline_content(node.content).replace("\n", " ")
        self._output.append(f"{'=' * node.level} {content}")

    def visit_paragraph(self, node: Paragraph) -> None:
        self._at_line_start = True
        self._output.append(self._render_inline_content(node.content))

    def visit_code_block(self, node: CodeBlock) -> None:
        fence = "`" * max(3, longest_run(node.content, "`") + 1)
        body = f"{node.content}\n" if node.content else ""
        self._output.append(f"{fence}{node.language or ''}\n{body}{fence}")

    def visit_block_quote(self, node: BlockQuote) -> None:
        content = "\n\n".join(self._render_blocks(node.children))
        self._output.append(f"#quote(block: true)[\n{content}\n]")

    def visit_bullet_list(self, node: BulletList) -> None:
        separator = "\n" if node.tight else "\n\n"
        items = [_indent_continuation(f"- {text}", 2) for text in self._render_items(node)]
        self._output.append(separator.join(items))

    def visit_ordered_list(self, node: OrderedList) -> None:
        """Render an OrderedList as ``+`` items, or ``#enum`` for other starts."""
        rendered = self._render_items(node)
        if node.start == 1:
            separator = "\n" if node.tight else "\n\n"
            self._output.append(separator.join(_indent_continuation(f"+ {text}", 2) for text in rendered))
            return
        items = "".join(f"[{text}]" for text in rendered)
        self._output.append(f"#enum(start: {node.start}){items}")

    def _render_items(self, node: BulletList | OrderedList) -> list[str]:
        saved_tight = self._tight_list
        self._tight_list = node.tight
        rendered = self._render_blocks(node.items)
        self._tight_list = saved_tight
        return rendered

    def visit_list_item(self, node: ListItem) -> None:
        """Render a ListItem; a nested list in a tight list follows on the next line."""
        parts: list[str] = []
        for child, text in zip(node.children, self._render_blocks(node.children)):
            if parts:
                nested = isinstance(child, (BulletList, OrderedList))
                parts.append("\n" if self._tight_list and nested else "\n\n")
            parts.append(text)
        content = "".join(parts)
        if node.task_status is not None:
            box = CHECKED_BOX if node.task_status == "checked" else UNCHECKED_BOX
            content = f"{box} {content}"
        self._output.append(content)

    def visit_table(self, node: Table) -> None:
        """Render a Table as a ``#table`` call with a ``table.header``."""
        alignments = ", ".join(_ALIGNMENTS[alignment] for alignment in node.alignments)
        if len(node.alignments) == 1:
            alignments += ","
        lines = [
            "#table(",
            f"  columns: {node.column_count},",
            f"  align: ({alignments}),",
        ]
        header = self._render_row(node.header)
        lines.append(f"  table.header({header}),")
        lines.extend(f"  {self._render_row(row)}," for row in node.rows)
        lines.append(")")
        self._output.append("\n".join(lines))

    def _render_row(self, row: TableRow) -> str:
        saved_output = self._output
        self._output = []
        row.accept(self)
        result = "".join(self._output)
        self._output = saved_output
        return result

    def visit_table_row(self, node: TableRow) -> None:
        cells = []
        for cell in node.cells:
            saved_output = self._output
            self._output = []
            cell.accept(self)
            cells.append(f"[{''.join(self._output)}]")
            self._output = saved_output
        self._output.append(", ".join(cells))

    def visit_table_cell(self, node: TableCell) -> None:
        self._at_line_start = False
        self._output.append(self._render_inline_content(node.content))

    def visit_thematic_break(self, node: ThematicBreak) -> None:
        self._output.append("#line(length: 100%)")

    # ------------------------------------------------------------------
    # Inline nodes
    # ------------------------------------------------------------------

    def visit_text(self, node: Text) -> None:
        context = "line_start" if self._at_line_start else "text"
        self._at_line_start = False
        self._output.append(escape_typst(node.content, context))

    def visit_soft_break(self, node: SoftBreak) -> None:
        self._output.append("\n")
        self._at_line_start = True

    def visit_hard_break(self, node: HardBreak) -> None:
        self._output.append("\\\n")
        self._at_line_start = True

    def visit_emphasis(self, node: Emphasis) -> None:
        """Render Emphasis as ``_..._``; emphasis nested in emphasis is flattened."""
        self._at_line_start = False
        if self._in_emphasis:
            self._output.append(self._render_inline_content(node.content))
            return
        self._in_emphasis = True
        content = self._render_inline_content(node.content)
        self._in_emphasis = False
        self._output.append(f"_{content}_")

    def visit_strong(self, node: Strong) -> None:
        self._at_line_start = False
        if self._in_strong:
            self._output.append(self._render_inline_content(node.content))
            return
        self._in_strong = True
        content = self._render_inline_content(node.content)
        self._in_strong = False
        self._output.append(f"*{content}*")

    def visit_strikethrough(self, node: Strikethrough) -> None:
        self._at_line_start = False
        self._output.append(f"#strike[{self._render_inline_content(node.content)}]")

    def visit_code(self, node: Code) -> None:
        """Render inline Code as raw text; code containing backticks uses ``#raw``."""
        self._at_line_start = False
        if "`" in node.content or not node.content:
            self._output.append(f"#raw({_string(node.content)})")
        else:
            self._output.append(f"`{node.content}`")

    def visit_link(self, node: Link) -> None:
        self._at_line_start = False
        label = self._render_inline_content(node.content)
        self._output.append(f"#link({_string(node.url)})[{label}]")

    def visit_image(self, node: Image) -> None:
        self._at_line_start = False
        alt = f", alt: {_string(node.alt_text)}" if node.alt_text else ""
        self._output.append(f"#image({_string(node.url)}{alt})")

    def visit_autolink(self, node: Autolink) -> None:
        self._at_line_start = False
        self._output.append(f"#link({_string(node.url)})")

    def visit_user_mention(self, node: UserMention) -> None:
        self._at_line_start = False
        text = escape_typst(f"@{node.handle}")
        url = self.options.mention_url(node.handle)
        self._output.append(f"#link({_string(url)})[{text}]" if url else text)

    def visit_issue_reference(self, node: IssueReference) -> None:
        self._at_line_start = False
        text = escape_typst(f"#{node.number}")
        url = self.options.issue_url(node.number)
        self._output.append(f"#link({_string(url)})[{text}]" if url else text)

    def visit_emoji_shortcode(self, node: EmojiShortcode) -> None:
        self._at_line_start = False
        self._output.append(escape_typst(f":{node.name}:"))

    def visit_escaped_char(self, node: EscapedChar) -> None:
        self._at_line_start = False
        self._output.append(escape_typst(node.char))


# Converter metadata for registry registration
CONVERTER_METADATA = ConverterMetadata(
    format_name="typst",
    extensions=[".typ"],
    renderer_class=TypstRenderer,
    renderer_options_class=TypstRendererOptions,
    description="Typst markup",
)
