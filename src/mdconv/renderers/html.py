#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconv/renderers/html.py
"""HTML rendering from AST.

This module provides the HtmlRenderer class which converts AST nodes to an
HTML5 fragment, or to a complete document in standalone mode.

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
from mdconv.ast.visitors import NodeVisitor
from mdconv.converter_metadata import ConverterMetadata
from mdconv.options.html import HtmlRendererOptions
from mdconv.renderers.base import BaseRenderer, InlineContentMixin
from mdconv.utils.escape import escape_html


class HtmlRenderer(NodeVisitor, InlineContentMixin, BaseRenderer):
    """Render AST nodes to HTML.

    Parameters
    ----------
    options : HtmlRendererOptions or None, default = None
        HTML rendering options

    Examples
    --------
        >>> from mdconv.ast import Document, Paragraph, Strikethrough, Text
        >>> doc = Document(children=[Paragraph(content=[Strikethrough(content=[Text("old")])])])
        >>> HtmlRenderer().render_to_string(doc)
        '<p><del>old</del></p>\\n'

    """

    def __init__(self, options: HtmlRendererOptions | None = None):
        """Initialize the HTML renderer with options."""
        BaseRenderer._validate_options_type(options, HtmlRendererOptions, "html")
        options = options or HtmlRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: HtmlRendererOptions = options
        self._output: list[str] = []
        self._tight_stack: list[bool] = []
        self._cell_tag: str = "td"
        self._alignments: list = []

    def render_to_string(self, doc: Document) -> str:
        """Render a document AST to an HTML string.

        Parameters
        ----------
        doc : Document
            The document node to render

        Returns
        -------
        str
            HTML fragment, or a full document when ``standalone`` is set

        """
        self._output = []
        self._tight_stack = []

        doc.accept(self)

        content = "".join(self._output)
        self._output = []
        if self.options.standalone:
            return self._wrap_in_document(doc, content)
        return content

    def _wrap_in_document(self, doc: Document, content: str) -> str:
        """Wrap content in a complete HTML5 document."""
        title = doc.metadata.get("title") if doc.metadata else None
        if not isinstance(title, str):
            title = self.options.title

        parts = [
            "<!DOCTYPE html>",
            "<html>",
            "<head>",
            '<meta charset="UTF-8">',
            f"<title>{escape_html(title)}</title>",
        ]
        author = doc.metadata.get("author") if doc.metadata else None
        if isinstance(author, str):
            parts.append(f'<meta name="author" content="{escape_html(author)}">')
        parts.extend(["</head>", "<body>", content.rstrip("\n"), "</body>", "</html>", ""])
        return "\n".join(parts)

    def _class_attr(self, name: str) -> str:
        return f' class="{escape_html(self.options.class_prefix + name)}"'

    def _in_tight_list(self) -> bool:
        return bool(self._tight_stack) and self._tight_stack[-1]

    # ------------------------------------------------------------------
    # Block nodes
    # ------------------------------------------------------------------

    def visit_document(self, node: Document) -> None:
        for child in node.children:
            child.accept(self)

    def visit_heading(self, node: Heading) -> None:
        content = self._render_inline_content(node.content)
        self._output.append(f"<h{node.level}>{content}</h{node.level}>\n")

    def visit_paragraph(self, node: Paragraph) -> None:
        """Render a Paragraph; inside tight list items the ``<p>`` is omitted."""
        content = self._render_inline_content(node.content)
        if self._in_tight_list():
            self._output.append(content)
        else:
            self._output.append(f"<p>{content}</p>\n")

    def visit_code_block(self, node: CodeBlock) -> None:
        class_attr = f' class="language-{escape_html(node.language)}"' if node.language else ""
        body = escape_html(node.content, quote=False)
        if body:
            body += "\n"
        self._output.append(f"<pre><code{class_attr}>{body}</code></pre>\n")

    def visit_block_quote(self, node: BlockQuote) -> None:
        self._tight_stack.append(False)
        self._output.append("<blockquote>\n")
        for child in node.children:
            child.accept(self)
        self._output.append("</blockquote>\n")
        self._tight_stack.pop()

    def visit_bullet_list(self, node: BulletList) -> None:
        self._render_list("ul", "", node.items, node.tight)

    def visit_ordered_list(self, node: OrderedList) -> None:
        start_attr = f' start="{node.start}"' if node.start != 1 else ""
        self._render_list("ol", start_attr, node.items, node.tight)

    def _render_list(self, tag: str, attrs: str, items: list[ListItem], tight: bool) -> None:
        self._tight_stack.append(tight)
        self._output.append(f"<{tag}{attrs}>\n")
        for item in items:
            item.accept(self)
        self._output.append(f"</{tag}>\n")
        self._tight_stack.pop()

    def visit_list_item(self, node: ListItem) -> None:
        """Render a ListItem, with a disabled checkbox for task items."""
        if node.task_status is not None:
            checked = " checked" if node.task_status == "checked" else ""
            self._output.append(f'<li{self._class_attr("task-list-item")}>')
            self._output.append(f'<input type="checkbox"{checked} disabled> ')
        else:
            self._output.append("<li>")

        for i, child in enumerate(node.children):
            # Block children after tight paragraph text start on their own line
            if i > 0 and self._in_tight_list() and isinstance(node.children[i - 1], Paragraph):
                self._output.append("\n")
            elif i == 0 and not (self._in_tight_list() and isinstance(child, Paragraph)):
                self._output.append("\n")
            child.accept(self)

        self._output.append("</li>\n")

    def visit_table(self, node: Table) -> None:
        """Render a Table with a ``thead`` and (when there are rows) a ``tbody``."""
        self._alignments = list(node.alignments)
        self._output.append("<table>\n<thead>\n")
        self._cell_tag = "th"
        node.header.accept(self)
        self._output.append("</thead>\n")

        if node.rows:
            self._cell_tag = "td"
            self._output.append("<tbody>\n")
            for row in node.rows:
                row.accept(self)
            self._output.append("</tbody>\n")

        self._output.append("</table>\n")

    def visit_table_row(self, node: TableRow) -> None:
        self._output.append("<tr>\n")
        for i, cell in enumerate(node.cells):
            alignment = self._alignments[i] if i < len(self._alignments) else None
            style = f' style="text-align: {alignment}"' if alignment else ""
            self._output.append(f"<{self._cell_tag}{style}>")
            cell.accept(self)
            self._output.append(f"</{self._cell_tag}>\n")
        self._output.append("</tr>\n")

    def visit_table_cell(self, node: TableCell) -> None:
        self._output.append(self._render_inline_content(node.content))

    def visit_thematic_break(self, node: ThematicBreak) -> None:
        self._output.append("<hr>\n")

    # ------------------------------------------------------------------
    # Inline nodes
    # ------------------------------------------------------------------

    def visit_text(self, node: Text) -> None:
        self._output.append(escape_html(node.content, quote=False))

    def visit_soft_break(self, node: SoftBreak) -> None:
        self._output.append("\n")

    def visit_hard_break(self, node: HardBreak) -> None:
        self._output.append("<br>\n")

    def visit_emphasis(self, node: Emphasis) -> None:
        self._output.append(f"<em>{self._render_inline_content(node.content)}</em>")

    def visit_strong(self, node: Strong) -> None:
        self._output.append(f"<strong>{self._render_inline_content(node.content)}</strong>")

    def visit_strikethrough(self, node: Strikethrough) -> None:
        self._output.append(f"<del>{self._render_inline_content(node.content)}</del>")

    def visit_code(self, node: Code) -> None:
        self._output.append(f"<code>{escape_html(node.content, quote=False)}</code>")

    def visit_link(self, node: Link) -> None:
        title_attr = f' title="{escape_html(node.title)}"' if node.title else ""
        content = self._render_inline_content(node.content)
        self._output.append(f'<a href="{escape_html(node.url)}"{title_attr}>{content}</a>')

    def visit_image(self, node: Image) -> None:
        title_attr = f' title="{escape_html(node.title)}"' if node.title else ""
        self._output.append(f'<img src="{escape_html(node.url)}" alt="{escape_html(node.alt_text)}"{title_attr}>')

    def visit_autolink(self, node: Autolink) -> None:
        label = node.url[len("mailto:") :] if node.url.startswith("mailto:") else node.url
        href = f"http://{node.url}" if node.url.lower().startswith("www.") else node.url
        self._output.append(f'<a href="{escape_html(href)}">{escape_html(label, quote=False)}</a>')

    def visit_user_mention(self, node: UserMention) -> None:
        text = escape_html(f"@{node.handle}", quote=False)
        url = self.options.mention_url(node.handle)
        if url is None:
            self._output.append(text)
        else:
            self._output.append(f'<a href="{escape_html(url)}"{self._class_attr("user-mention")}>{text}</a>')

    def visit_issue_reference(self, node: IssueReference) -> None:
        text = f"#{node.number}"
        url = self.options.issue_url(node.number)
        if url is None:
            self._output.append(text)
        else:
            self._output.append(f'<a href="{escape_html(url)}"{self._class_attr("issue-reference")}>{text}</a>')

    def visit_emoji_shortcode(self, node: EmojiShortcode) -> None:
        name = escape_html(node.name, quote=False)
        self._output.append(f'<span{self._class_attr("emoji")}>:{name}:</span>')

    def visit_escaped_char(self, node: EscapedChar) -> None:
        self._output.append(escape_html(node.char, quote=False))


# Converter metadata for registry registration
CONVERTER_METADATA = ConverterMetadata(
    format_name="html",
    extensions=[".html", ".htm"],
    renderer_class=HtmlRenderer,
    renderer_options_class=HtmlRendererOptions,
    description="HTML5 fragment or standalone document",
)
