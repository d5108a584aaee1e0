#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconv/renderers/latex.py
"""LaTeX rendering from AST.

This module provides the LatexRenderer class which converts AST nodes to
LaTeX source, either as a fragment for inclusion or as a complete document
with a preamble.

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
from mdconv.converter_metadata import ConverterMetadata
from mdconv.options.latex import LatexRendererOptions
from mdconv.renderers.base import BaseRenderer, InlineContentMixin
from mdconv.utils.escape import escape_latex

_HEADING_COMMANDS = {
    1: "section",
    2: "subsection",
    3: "subsubsection",
    4: "paragraph",
    5: "subparagraph",
    6: "subparagraph",
}
_COLUMN_SPECS = {None: "l", "left": "l", "center": "c", "right": "r"}
_ENUM_COUNTERS = ("enumi", "enumii", "enumiii", "enumiv")


def _escape_url(url: str) -> str:
    """Escape the characters hyperref cannot take verbatim in a URL argument."""
    return "".join("\\" + char if char in "\\#%{}" else char for char in url)


class LatexRenderer(NodeVisitor, InlineContentMixin, BaseRenderer):
    r"""Render AST nodes to LaTeX text.

    Parameters
    ----------
    options : LatexRendererOptions or None, default = None
        LaTeX rendering options

    Examples
    --------
        >>> from mdconv.ast import Document, Heading, Text
        >>> doc = Document(children=[Heading(level=1, content=[Text("Title")])])
        >>> print(LatexRenderer().render_to_string(doc))
        \section{Title}

    """

    def __init__(self, options: LatexRendererOptions | None = None):
        """Initialize the LaTeX renderer with options."""
        BaseRenderer._validate_options_type(options, LatexRendererOptions, "latex")
        options = options or LatexRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: LatexRendererOptions = options
        self._output: list[str] = []
        self._enum_depth: int = 0

    def render_to_string(self, doc: Document) -> str:
        """Render a document AST to a LaTeX string.

        Parameters
        ----------
        doc : Document
            The document node to render

        Returns
        -------
        str
            LaTeX text

        """
        self._output = []
        self._enum_depth = 0

        if self.options.include_preamble:
            self._render_preamble(doc.metadata or {})

        doc.accept(self)

        if self.options.include_preamble:
            self._output.append("\n\n\\end{document}")

        result = "".join(self._output)
        self._output = []
        return result + "\n" if result else ""

    def _render_preamble(self, metadata: dict[str, Any]) -> None:
        """Render the document class, packages and title block."""
        self._output.append(f"\\documentclass{{{self.options.document_class}}}\n\n")
        for package in self.options.packages:
            self._output.append(f"\\usepackage{{{package}}}\n")
        self._output.append("\n")

        title = metadata.get("title")
        if isinstance(title, str):
            self._output.append(f"\\title{{{escape_latex(title)}}}\n")
        author = metadata.get("author")
        if isinstance(author, str):
            self._output.append(f"\\author{{{escape_latex(author)}}}\n")
        date = metadata.get("date")
        self._output.append(f"\\date{{{escape_latex(date)}}}\n" if isinstance(date, str) else "\\date{\\today}\n")

        self._output.append("\n\\begin{document}\n\n")
        if isinstance(title, str):
            self._output.append("\\maketitle\n\n")

    # ------------------------------------------------------------------
    # Block nodes
    # ------------------------------------------------------------------

    def visit_document(self, node: Document) -> None:
        self._output.append("\n\n".join(self._render_blocks(node.children)))

    def visit_heading(self, node: Heading) -> None:
        command = _HEADING_COMMANDS[node.level]
        self._output.append(f"\\{command}{{{self._render_inline_content(node.content)}}}")

    def visit_paragraph(self, node: Paragraph) -> None:
        self._output.append(self._render_inline_content(node.content))

    def visit_code_block(self, node: CodeBlock) -> None:
        """Render a CodeBlock in the configured verbatim environment."""
        environment = self.options.code_environment
        options = ""
        if environment == "lstlisting" and node.language:
            options = f"[language={node.language}]"
        body = f"{node.content}\n" if node.content else ""
        self._output.append(f"\\begin{{{environment}}}{options}\n{body}\\end{{{environment}}}")

    def visit_block_quote(self, node: BlockQuote) -> None:
        content = "\n\n".join(self._render_blocks(node.children))
        self._output.append(f"\\begin{{quote}}\n{content}\n\\end{{quote}}")

    def visit_bullet_list(self, node: BulletList) -> None:
        items = "\n".join(self._render_blocks(node.items))
        self._output.append(f"\\begin{{itemize}}\n{items}\n\\end{{itemize}}")

    def visit_ordered_list(self, node: OrderedList) -> None:
        """Render an OrderedList; a start other than 1 sets the enumerate counter."""
        counter = _ENUM_COUNTERS[min(self._enum_depth, len(_ENUM_COUNTERS) - 1)]
        self._enum_depth += 1
        items = "\n".join(self._render_blocks(node.items))
        self._enum_depth -= 1

        lines = ["\\begin{enumerate}"]
        if node.start != 1:
            lines.append(f"\\setcounter{{{counter}}}{{{node.start - 1}}}")
        lines.extend([items, "\\end{enumerate}"])
        self._output.append("\n".join(lines))

    def visit_list_item(self, node: ListItem) -> None:
        if node.task_status == "checked":
            label = "\\item[$\\boxtimes$]"
        elif node.task_status == "unchecked":
            label = "\\item[$\\square$]"
        else:
            label = "\\item"
        content = "\n\n".join(self._render_blocks(node.children))
        self._output.append(f"{label} {content}" if content else label)

    def visit_table(self, node: Table) -> None:
        """Render a Table as a ``tabular`` with one column spec per alignment."""
        spec = "".join(_COLUMN_SPECS[alignment] for alignment in node.alignments)
        lines = [f"\\begin{{tabular}}{{{spec}}}", "\\hline"]
        lines.append(self._render_row(node.header))
        lines.append("\\hline")
        lines.extend(self._render_row(row) for row in node.rows)
        if node.rows:
            lines.append("\\hline")
        lines.append("\\end{tabular}")
        self._output.append("\n".join(lines))

    def _render_row(self, row: TableRow) -> str:
        saved_output = self._output
        self._output = []
        row.accept(self)
        result = "".join(self._output)
        self._output = saved_output
        return result

    def visit_table_row(self, node: TableRow) -> None:
        cells = [self._render_inline_content(cell.content) for cell in node.cells]
        self._output.append(" & ".join(cells) + " \\\\")

    def visit_table_cell(self, node: TableCell) -> None:
        self._output.append(self._render_inline_content(node.content))

    def visit_thematic_break(self, node: ThematicBreak) -> None:
        self._output.append("\\noindent\\rule{\\linewidth}{0.4pt}")

    # ------------------------------------------------------------------
    # Inline nodes
    # ------------------------------------------------------------------

    def visit_text(self, node: Text) -> None:
        self._output.append(escape_latex(node.content))

    def visit_soft_break(self, node: SoftBreak) -> None:
        self._output.append("\n")

    def visit_hard_break(self, node: HardBreak) -> None:
        self._output.append("\\\\\n")

    def visit_emphasis(self, node: Emphasis) -> None:
        self._output.append(f"\\emph{{{self._render_inline_content(node.content)}}}")

    def visit_strong(self, node: Strong) -> None:
        self._output.append(f"\\textbf{{{self._render_inline_content(node.content)}}}")

    def visit_strikethrough(self, node: Strikethrough) -> None:
        self._output.append(f"\\sout{{{self._render_inline_content(node.content)}}}")

    def visit_code(self, node: Code) -> None:
        self._output.append(f"\\texttt{{{escape_latex(node.content)}}}")

    def visit_link(self, node: Link) -> None:
        label = self._render_inline_content(node.content)
        self._output.append(f"\\href{{{_escape_url(node.url)}}}{{{label}}}")

    def visit_image(self, node: Image) -> None:
        self._output.append(f"\\includegraphics{{{_escape_url(node.url)}}}")

    def visit_autolink(self, node: Autolink) -> None:
        self._output.append(f"\\url{{{_escape_url(node.url)}}}")

    def visit_user_mention(self, node: UserMention) -> None:
        text = escape_latex(f"@{node.handle}")
        url = self.options.mention_url(node.handle)
        self._output.append(f"\\href{{{_escape_url(url)}}}{{{text}}}" if url else text)

    def visit_issue_reference(self, node: IssueReference) -> None:
        text = escape_latex(f"#{node.number}")
        url = self.options.issue_url(node.number)
        self._output.append(f"\\href{{{_escape_url(url)}}}{{{text}}}" if url else text)

    def visit_emoji_shortcode(self, node: EmojiShortcode) -> None:
        self._output.append(escape_latex(f":{node.name}:"))

    def visit_escaped_char(self, node: EscapedChar) -> None:
        self._output.append(escape_latex(node.char))


# Converter metadata for registry registration
CONVERTER_METADATA = ConverterMetadata(
    format_name="latex",
    aliases=["tex"],
    extensions=[".tex"],
    renderer_class=LatexRenderer,
    renderer_options_class=LatexRendererOptions,
    description="LaTeX fragment or document",
)
