#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconv/renderers/plaintext.py
"""Plain text rendering from AST.

This module provides the PlainTextRenderer class which strips markup and
keeps the document readable: headings are underlined, list markers are kept
and tables become separator-joined rows.

"""

from __future__ import annotations

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
from mdconv.ast.utils import extract_text
from mdconv.ast.visitors import NodeVisitor
from mdconv.converter_metadata import ConverterMetadata
from mdconv.options.plaintext import PlainTextRendererOptions
from mdconv.renderers.base import BaseRenderer, InlineContentMixin

_UNDERLINES = {1: "=", 2: "-"}


def _hang(text: str, marker: str) -> str:
    """Put ``marker`` before the first line and align the rest under its text."""
    lines = text.split("\n")
    pad = " " * len(marker)
    return "\n".join([marker + lines[0]] + [pad + line if line else "" for line in lines[1:]])


class PlainTextRenderer(NodeVisitor, InlineContentMixin, BaseRenderer):
    """Render AST nodes to plain text.

    Parameters
    ----------
    options : PlainTextRendererOptions or None, default = None
        Plain text rendering options

    Examples
    --------
        >>> from mdconv.ast import Document, Heading, Text
        >>> doc = Document(children=[Heading(level=1, content=[Text("Notes")])])
        >>> print(PlainTextRenderer().render_to_string(doc))
        Notes
        =====

    """

    def __init__(self, options: PlainTextRendererOptions | None = None):
        """Initialize the plain text renderer with options."""
        BaseRenderer._validate_options_type(options, PlainTextRendererOptions, "plain")
        options = options or PlainTextRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: PlainTextRendererOptions = options
        self._output: list[str] = []
        self._marker: str = ""

    def render_to_string(self, doc: Document) -> str:
        """Render a document AST to plain text."""
        self._output = []
        doc.accept(self)
        result = "".join(self._output).rstrip()
        self._output = []
        return result + "\n" if result else ""

    # ------------------------------------------------------------------
    # Block nodes
    # ------------------------------------------------------------------

    def visit_document(self, node: Document) -> None:
        self._output.append("\n\n".join(self._render_blocks(node.children)))

    def visit_heading(self, node: Heading) -> None:
        content = self._render_inline_content(node.content)
        underline = _UNDERLINES.get(node.level)
        if underline and content:
            width = max(len(line) for line in content.split("\n"))
            content = f"{content}\n{underline * width}"
        self._output.append(content)

    def visit_paragraph(self, node: Paragraph) -> None:
        self._output.append(self._render_inline_content(node.content))

    def visit_code_block(self, node: CodeBlock) -> None:
        self._output.append(node.content)

    def visit_block_quote(self, node: BlockQuote) -> None:
        content = "\n\n".join(self._render_blocks(node.children))
        self._output.append(_hang(content, "  ") if content else "")

    def visit_bullet_list(self, node: BulletList) -> None:
        self._render_list(node.items, [f"{self.options.bullet} "] * len(node.items), node.tight)

    def visit_ordered_list(self, node: OrderedList) -> None:
        markers = [f"{node.start + i}{node.delimiter} " for i in range(len(node.items))]
        self._render_list(node.items, markers, node.tight)

    def _render_list(self, items: list[ListItem], markers: list[str], tight: bool) -> None:
        rendered = []
        for item, marker in zip(items, markers):
            self._marker = marker
            saved_output = self._output
            self._output = []
            item.accept(self)
            rendered.append("".join(self._output))
            self._output = saved_output
        self._output.append(("\n" if tight else "\n\n").join(rendered))

    def visit_list_item(self, node: ListItem) -> None:
        marker = self._marker
        content = "\n".join(self._render_blocks(node.children))
        if node.task_status is not None:
            box = "[x]" if node.task_status == "checked" else "[ ]"
            content = f"{box} {content}" if content else box
        self._output.append(_hang(content, marker) if content else marker.rstrip())

    def visit_table(self, node: Table) -> None:
        rows = [node.header, *node.rows]
        self._output.append("\n".join(self._render_blocks(rows)))

    def visit_table_row(self, node: TableRow) -> None:
        cells = self._render_blocks(node.cells)
        self._output.append(self.options.table_cell_separator.join(cells).rstrip())

    def visit_table_cell(self, node: TableCell) -> None:
        self._output.append(self._render_inline_content(node.content).replace("\n", " "))

    def visit_thematic_break(self, node: ThematicBreak) -> None:
        self._output.append("-" * 40)

    # ------------------------------------------------------------------
    # Inline nodes
    # ------------------------------------------------------------------

    def visit_text(self, node: Text) -> None:
        self._output.append(node.content)

    def visit_soft_break(self, node: SoftBreak) -> None:
        self._output.append("\n")

    def visit_hard_break(self, node: HardBreak) -> None:
        self._output.append("\n")

    def visit_emphasis(self, node: Emphasis) -> None:
        self._output.append(self._render_inline_content(node.content))

    def visit_strong(self, node: Strong) -> None:
        self._output.append(self._render_inline_content(node.content))

    def visit_strikethrough(self, node: Strikethrough) -> None:
        self._output.append(self._render_inline_content(node.content))

    def visit_code(self, node: Code) -> None:
        self._output.append(node.content)

    def visit_link(self, node: Link) -> None:
        """Render a Link as its label, followed by ``<url>`` when the url adds information."""
        label = self._render_inline_content(node.content)
        if self.options.show_link_urls and node.url and extract_text(node.content) != node.url:
            self._output.append(f"{label} <{node.url}>" if label else f"<{node.url}>")
        else:
            self._output.append(label)

    def visit_image(self, node: Image) -> None:
        self._output.append(node.alt_text)

    def visit_autolink(self, node: Autolink) -> None:
        self._output.append(node.url[len("mailto:") :] if node.url.startswith("mailto:") else node.url)

    def visit_user_mention(self, node: UserMention) -> None:
        self._output.append(f"@{node.handle}")

    def visit_issue_reference(self, node: IssueReference) -> None:
        self._output.append(f"#{node.number}")

    def visit_emoji_shortcode(self, node: EmojiShortcode) -> None:
        self._output.append(f":{node.name}:")

    def visit_escaped_char(self, node: EscapedChar) -> None:
        self._output.append(node.char)


# Converter metadata for registry registration
CONVERTER_METADATA = ConverterMetadata(
    format_name="plain",
    aliases=["plaintext", "txt"],
    extensions=[".txt"],
    renderer_class=PlainTextRenderer,
    renderer_options_class=PlainTextRendererOptions,
    description="Plain text with markup removed",
)
