#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconv/renderers/markdown.py
"""GFM rendering from AST.

This module provides the MarkdownRenderer class which converts AST nodes
back to GitHub-flavored markdown. Output produced from a parsed document
parses back to the same AST.

Container blocks are rendered child by child into strings, then prefixed
(``> `` for block quotes, the list marker for list items) and indented as a
whole, so nesting needs no shared indentation state.

"""

from __future__ import annotations

import re
from typing import Callable

import yaml

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
from mdconv.ast.visitors import NodeVisitor
from mdconv.options.markdown import MarkdownRendererOptions
from mdconv.renderers.base import BaseRenderer, InlineContentMixin
from mdconv.utils.escape import escape_inline_code, escape_markdown, longest_run

_UNESCAPED_PIPE_RE = re.compile(r"(?<!\\)\|")
_ALIGNMENT_ROWS = {None: "---", "left": ":---", "center": ":---:", "right": "---:"}
_ESCAPED_CHAR_RE = re.compile(r"\\.")
_SCHEME_RE = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]{1,31}:")


def _indent_lines(text: str, prefix: str, first_prefix: str | None = None) -> str:
    """Prefix every line of ``text``; blank lines get the prefix without trailing spaces."""
    lines = text.split("\n")
    result = []
    for i, line in enumerate(lines):
        current = first_prefix if i == 0 and first_prefix is not None else prefix
        result.append(current + line if line else current.rstrip())
    return "\n".join(result)


def _image_alt(alt: str) -> str:
    """Return alt text as label source.

    Parsed alt text is the raw label source and is emitted unchanged. Labels
    whose brackets do not balance have their brackets escaped.
    """
    depth = 0
    for char in _ESCAPED_CHAR_RE.sub("", alt):
        if char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
            if depth < 0:
                break
    if depth == 0:
        return alt
    return alt.replace("[", "\\[").replace("]", "\\]")


class MarkdownRenderer(NodeVisitor, InlineContentMixin, BaseRenderer):
    """Render AST nodes to GitHub-flavored markdown.

    Parameters
    ----------
    options : MarkdownRendererOptions or None, default = None
        Markdown formatting options

    Examples
    --------
        >>> from mdconv.ast import BulletList, Document, ListItem, Paragraph, Text
        >>> doc = Document(children=[BulletList(items=[
        ...     ListItem(children=[Paragraph(content=[Text("done")])], task_status="checked")
        ... ])])
        >>> print(MarkdownRenderer().render_to_string(doc))
        - [x] done

    """

    def __init__(self, options: MarkdownRendererOptions | None = None):
        """Initialize the Markdown renderer with options."""
        BaseRenderer._validate_options_type(options, MarkdownRendererOptions, "gfm")
        options = options or MarkdownRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: MarkdownRendererOptions = options
        self._output: list[str] = []
        self._at_line_start: bool = False
        self._current_marker: str = ""
        self._current_tight: bool = True
        self._enclosing_span: tuple[Emphasis | Strong, str] | None = None

    def render_to_string(self, doc: Document) -> str:
        """Render a document AST to a GFM string.

        Parameters
        ----------
        doc : Document
            The document node to render

        Returns
        -------
        str
            Markdown text ending with a single newline (empty for an empty
            document)

        """
        self._output = []
        self._at_line_start = False
        self._enclosing_span = None

        doc.accept(self)

        result = "".join(self._output).rstrip()
        self._output = []
        return result + "\n" if result else ""

    def _join_blocks(self, blocks: list[Node]) -> str:
        rendered = self._render_blocks(blocks)
        parts: list[str] = []
        previous: Node | None = None
        alternate = False
        for block, text in zip(blocks, rendered):
            if previous is not None:
                parts.append("\n\n")
            # Adjacent bullet lists would merge into one list unless their markers differ
            alternate = isinstance(previous, BulletList) and isinstance(block, BulletList) and not alternate
            if alternate:
                text = self._with_alternate_bullet(block)
            parts.append(text)
            previous = block
        return "".join(parts)

    def _with_alternate_bullet(self, node: BulletList) -> str:
        alternate = "*" if self.options.bullet_symbol != "*" else "-"
        saved_output = self._output
        self._output = []
        self._render_list(node, lambda _i: alternate + " ")
        result = "".join(self._output)
        self._output = saved_output
        return result

    # ------------------------------------------------------------------
    # Block nodes
    # ------------------------------------------------------------------

    def visit_document(self, node: Document) -> None:
        """Render a Document node, front matter first."""
        if node.metadata and self.options.emit_frontmatter:
            frontmatter = yaml.safe_dump(
                node.metadata, sort_keys=False, allow_unicode=True, default_flow_style=False
            )
            self._output.append(f"---\n{frontmatter}---\n\n")
        self._output.append(self._join_blocks(node.children))

    def visit_paragraph(self, node: Paragraph) -> None:
        self._at_line_start = True
        self._output.append(self._render_inline_content(node.content))

    def visit_heading(self, node: Heading) -> None:
        self._at_line_start = False
        content = self._render_inline_content(node.content).replace("\n", " ")
        marker = "#" * node.level
        self._output.append(f"{marker} {content}" if content else marker)

    def visit_code_block(self, node: CodeBlock) -> None:
        """Render a CodeBlock as a fenced block.

        The fence is longer than any run of the fence character inside the
        code, so the content can never close it early.
        """
        char = self.options.code_fence_char
        fence = char * max(self.options.code_fence_min, longest_run(node.content, char) + 1)
        info = node.language or ""
        body = f"{node.content}\n" if node.content else ""
        self._output.append(f"{fence}{info}\n{body}{fence}")

    def visit_block_quote(self, node: BlockQuote) -> None:
        content = self._join_blocks(node.children)
        self._output.append(_indent_lines(content, "> ") if content else ">")

    def visit_bullet_list(self, node: BulletList) -> None:
        self._render_list(node, lambda _i: self.options.bullet_symbol + " ")

    def visit_ordered_list(self, node: OrderedList) -> None:
        self._render_list(node, lambda i: f"{node.start + i}{node.delimiter} ")

    def _render_list(self, node: BulletList | OrderedList, marker_for: Callable[[int], str]) -> None:
        separator = "\n" if node.tight else "\n\n"
        items = []
        for i, item in enumerate(node.items):
            self._current_marker = marker_for(i)
            self._current_tight = node.tight
            saved_output = self._output
            self._output = []
            item.accept(self)
            items.append("".join(self._output))
            self._output = saved_output
        self._output.append(separator.join(items))

    def visit_list_item(self, node: ListItem) -> None:
        """Render a ListItem with its marker and indented continuation lines."""
        marker = self._current_marker
        tight = self._current_tight
        rendered = self._render_blocks(node.children)

        parts: list[str] = []
        for i, (child, text) in enumerate(zip(node.children, rendered)):
            if i > 0:
                parts.append("\n" if tight and self._can_join_tightly(node.children[i - 1], child) else "\n\n")
            parts.append(text)
        content = "".join(parts)

        if node.task_status is not None:
            checkbox = "[x]" if node.task_status == "checked" else "[ ]"
            content = f"{checkbox} {content}" if content else checkbox

        if not content:
            self._output.append(marker.rstrip())
            return
        self._output.append(_indent_lines(content, " " * len(marker), first_prefix=marker))

    @staticmethod
    def _can_join_tightly(previous: Node, following: Node) -> bool:
        """Check whether two item children can sit on adjacent lines."""
        if not isinstance(previous, Paragraph):
            return True
        if isinstance(following, (Paragraph, Table, ThematicBreak)):
            return False
        if isinstance(following, OrderedList):
            return following.start == 1
        return True

    def visit_table(self, node: Table) -> None:
        """Render a Table as a pipe table with alignment colons."""
        lines = [self._render_row(node.header)]
        lines.append("| " + " | ".join(_ALIGNMENT_ROWS[a] for a in node.alignments) + " |")
        lines.extend(self._render_row(row) for row in node.rows)
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
            cells.append("".join(self._output))
            self._output = saved_output
        self._output.append("| " + " | ".join(cells) + " |")

    def visit_table_cell(self, node: TableCell) -> None:
        self._at_line_start = False
        content = self._render_inline_content(node.content).replace("\n", " ")
        # Pipes inside code spans must be escaped too
        self._output.append(_UNESCAPED_PIPE_RE.sub(r"\\|", content))

    def visit_thematic_break(self, node: ThematicBreak) -> None:
        self._output.append("---")

    # ------------------------------------------------------------------
    # Inline nodes
    # ------------------------------------------------------------------

    def visit_text(self, node: Text) -> None:
        context = "line_start" if self._at_line_start else "text"
        self._at_line_start = False
        self._output.append(escape_markdown(node.content, context))

    def visit_soft_break(self, node: SoftBreak) -> None:
        self._output.append("\n")
        self._at_line_start = True

    def visit_hard_break(self, node: HardBreak) -> None:
        self._output.append("\\\n")
        self._at_line_start = True

    def visit_emphasis(self, node: Emphasis) -> None:
        """Render Emphasis, switching symbol at the edge of a span using the same one.

        ``*`` directly inside ``*`` (or ``**``) would merge into a longer
        delimiter run, so such an Emphasis is written with ``_`` instead, and
        the other way around.
        """
        self._at_line_start = False
        symbol = self.options.emphasis_symbol
        if self._enclosing_span is not None:
            span, span_symbol = self._enclosing_span
            at_edge = bool(span.content) and (node is span.content[0] or node is span.content[-1])
            if at_edge and symbol == span_symbol:
                symbol = "_" if symbol == "*" else "*"
        content = self._render_span(node, symbol)
        self._output.append(f"{symbol}{content}{symbol}")

    def visit_strong(self, node: Strong) -> None:
        self._at_line_start = False
        symbol = self.options.strong_symbol
        content = self._render_span(node, symbol)
        self._output.append(f"{symbol * 2}{content}{symbol * 2}")

    def _render_span(self, node: Emphasis | Strong, symbol: str) -> str:
        saved_span = self._enclosing_span
        self._enclosing_span = (node, symbol)
        content = self._render_inline_content(node.content)
        self._enclosing_span = saved_span
        return content

    def visit_strikethrough(self, node: Strikethrough) -> None:
        self._at_line_start = False
        self._output.append(f"~~{self._render_inline_content(node.content)}~~")

    def visit_code(self, node: Code) -> None:
        self._at_line_start = False
        code, delimiter = escape_inline_code(node.content)
        self._output.append(f"{delimiter}{code}{delimiter}")

    @staticmethod
    def _link_target(url: str, title: str | None) -> str:
        if not url or any(c in url for c in " <>()") or any(ord(c) < 0x20 for c in url):
            destination = "<" + url.replace("<", "\\<").replace(">", "\\>") + ">"
        else:
            destination = url
        if title is not None:
            escaped_title = title.replace("\\", "\\\\").replace('"', '\\"')
            return f'({destination} "{escaped_title}")'
        return f"({destination})"

    def visit_link(self, node: Link) -> None:
        self._at_line_start = False
        label = self._render_inline_content(node.content)
        self._output.append(f"[{label}]{self._link_target(node.url, node.title)}")

    def visit_image(self, node: Image) -> None:
        self._at_line_start = False
        alt = _image_alt(node.alt_text)
        self._output.append(f"![{alt}]{self._link_target(node.url, node.title)}")

    def visit_autolink(self, node: Autolink) -> None:
        self._at_line_start = False
        if _SCHEME_RE.match(node.url):
            self._output.append(f"<{node.url}>")
        else:
            # www. links have no scheme and only parse back in bare form
            self._output.append(node.url)

    def visit_user_mention(self, node: UserMention) -> None:
        self._at_line_start = False
        self._output.append(f"@{node.handle}")

    def visit_issue_reference(self, node: IssueReference) -> None:
        self._output.append(f"#{node.number}")
        self._at_line_start = False

    def visit_emoji_shortcode(self, node: EmojiShortcode) -> None:
        self._at_line_start = False
        self._output.append(f":{node.name}:")

    def visit_escaped_char(self, node: EscapedChar) -> None:
        self._at_line_start = False
        self._output.append(f"\\{node.char}")
