#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconv/parsers/markdown.py
"""GFM to AST parser.

Parsing runs in two phases. The first phase scans the complete input line
by line into a tree of raw blocks, collecting link reference definitions
into a lookup table as it goes. The second phase walks that tree, hands every
leaf block's text to :class:`~mdconv.parsers.inline.InlineParser` together
with the finished reference table, and builds the immutable AST.

Containers (block quotes and list items) are handled by gathering their
lines, stripping the container prefix, and parsing the result recursively.

"""

from __future__ import annotations

import datetime
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Optional, Union

import yaml

from mdconv.ast import (
    BlockQuote,
    BulletList,
    CodeBlock,
    Document,
    Heading,
    ListItem,
    Node,
    OrderedList,
    Paragraph,
    Table,
    TableCell,
    TableRow,
    ThematicBreak,
)
from mdconv.ast.utils import normalize_row
from mdconv.constants import CODE_INDENT, MAX_ORDERED_START_DIGITS, TAB_STOP, Alignment, TaskStatus
from mdconv.converter_metadata import ConverterMetadata
from mdconv.exceptions import StructuralParseError
from mdconv.options.markdown import MarkdownParserOptions
from mdconv.parsers.base import BaseParser
from mdconv.parsers.inline import (
    InlineParser,
    ReferenceTable,
    find_label_end,
    normalize_label,
    parse_link_destination,
    parse_link_title,
    skip_link_whitespace,
    unescape_string,
)

logger = logging.getLogger(__name__)

_ATX_RE = re.compile(r"(#{1,6})(?:[ \t]+(.*))?$")
_ATX_CLOSING_RE = re.compile(r"(?:^|[ \t])#+[ \t]*$")
_FENCE_RE = re.compile(r"(`{3,}|~{3,})(.*)$")
_THEMATIC_BREAK_RE = re.compile(r"(?:(?:\*[ \t]*){3,}|(?:-[ \t]*){3,}|(?:_[ \t]*){3,})$")
_SETEXT_RE = re.compile(r"(=+|-+)[ \t]*$")
_BULLET_RE = re.compile(r"([-+*])([ \t]+|$)")
_ORDERED_RE = re.compile(r"([0-9]{1,%d})([.)])([ \t]+|$)" % MAX_ORDERED_START_DIGITS)
_TASK_RE = re.compile(r"\[([ xX])\][ \t]+(?=\S)")
_DELIMITER_CELL_RE = re.compile(r":?-+:?")
_UNESCAPED_PIPE_RE = re.compile(r"(?<!\\)\|")


# ============================================================================
# Raw block tree (phase one output)
# ============================================================================


@dataclass
class _RawParagraph:
    lines: list[str]


@dataclass
class _RawHeading:
    level: int
    text: str


@dataclass
class _RawCode:
    content: str
    language: Optional[str] = None


@dataclass
class _RawBreak:
    pass


@dataclass
class _RawQuote:
    children: list[Any]


@dataclass
class _RawItem:
    children: list[Any]
    task_status: Optional[TaskStatus] = None


@dataclass
class _RawList:
    ordered: bool
    marker: str
    start: int = 1
    items: list[_RawItem] = field(default_factory=list)
    tight: bool = True


@dataclass
class _RawTable:
    alignments: list[Optional[Alignment]]
    header: list[str]
    rows: list[list[str]]


_RawBlock = Union[_RawParagraph, _RawHeading, _RawCode, _RawBreak, _RawQuote, _RawList, _RawTable]


@dataclass
class _ListMarker:
    """A list item marker found at the start of a line."""

    ordered: bool
    marker: str
    start: int
    indent: int
    width: int
    content: str


# ============================================================================
# Line helpers
# ============================================================================


def _expand_leading_tabs(line: str) -> str:
    """Expand tabs in the leading whitespace to 4-column tab stops."""
    stripped = line.lstrip(" \t")
    if "\t" not in line[: len(line) - len(stripped)]:
        return line
    prefix = line[: len(line) - len(stripped)]
    return prefix.expandtabs(TAB_STOP) + stripped


def _is_blank(line: str) -> bool:
    return not line.strip()


def _indent(line: str) -> int:
    return len(line) - len(line.lstrip(" "))


def _match_list_marker(line: str) -> _ListMarker | None:
    indent = _indent(line)
    if indent >= CODE_INDENT:
        return None
    rest = line[indent:]
    bullet = _BULLET_RE.match(rest)
    if bullet:
        ordered, marker, start, marker_len = False, bullet.group(1), 1, 1
        spacing = bullet.group(2)
    else:
        numbered = _ORDERED_RE.match(rest)
        if not numbered:
            return None
        ordered, marker, start = True, numbered.group(2), int(numbered.group(1))
        marker_len = len(numbered.group(1)) + 1
        spacing = numbered.group(3)

    after_marker = rest[marker_len:]
    content = after_marker.lstrip(" \t")
    if not content or len(spacing) > CODE_INDENT:
        # Empty item, or content starting with indented code: one space belongs to the marker
        width = indent + marker_len + 1
        content = after_marker[1:] if content else ""
    else:
        width = indent + marker_len + len(spacing)
    return _ListMarker(ordered=ordered, marker=marker, start=start, indent=indent, width=width, content=content)


def _split_table_row(line: str) -> list[str]:
    """Split a pipe-delimited row into stripped cell strings."""
    row = line.strip()
    if row.startswith("|"):
        row = row[1:]
    if row.endswith("|") and not row.endswith("\\|"):
        row = row[:-1]
    return [cell.strip().replace("\\|", "|") for cell in _UNESCAPED_PIPE_RE.split(row)]


def _parse_delimiter_row(line: str) -> list[Optional[Alignment]] | None:
    if "|" not in line:
        return None
    cells = _split_table_row(line)
    alignments: list[Optional[Alignment]] = []
    for cell in cells:
        if not _DELIMITER_CELL_RE.fullmatch(cell):
            return None
        if cell.startswith(":") and cell.endswith(":"):
            alignments.append("center")
        elif cell.startswith(":"):
            alignments.append("left")
        elif cell.endswith(":"):
            alignments.append("right")
        else:
            alignments.append(None)
    return alignments


def _is_fence_line(line: str) -> bool:
    return _indent(line) < CODE_INDENT and _FENCE_RE.match(line.lstrip(" ")) is not None


def _ends_in_paragraph(lines: list[str]) -> bool:
    """Return True when the last collected line continues paragraph text.

    Lazy continuation lines are only accepted in that case.
    """
    if not lines or _is_blank(lines[-1]):
        return False
    open_fence = False
    for line in lines:
        if _is_fence_line(line):
            open_fence = not open_fence
    if open_fence:
        return False
    last = lines[-1]
    if _indent(last) >= CODE_INDENT:
        return False
    stripped = last.lstrip(" ")
    return not (_ATX_RE.match(stripped) or _THEMATIC_BREAK_RE.match(stripped) or _is_fence_line(last))


def _end_of_line(text: str, pos: int) -> int | None:
    while pos < len(text) and text[pos] in " \t":
        pos += 1
    if pos == len(text):
        return pos
    if text[pos] == "\n":
        return pos + 1
    return None


def _normalize_metadata(value: Any) -> Any:
    """Normalize YAML values to strings, booleans, lists and mappings."""
    if isinstance(value, bool):
        return value
    if isinstance(value, dict):
        return {str(k): _normalize_metadata(v) for k, v in value.items() if v is not None}
    if isinstance(value, (list, tuple)):
        return [_normalize_metadata(v) for v in value if v is not None]
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    return str(value)


# ============================================================================
# Phase one: block structure
# ============================================================================


class _BlockScanner:
    """Line scanner producing the raw block tree and the reference table."""

    def __init__(self, options: MarkdownParserOptions):
        self.options = options
        self.references: ReferenceTable = {}

    def parse_blocks(self, lines: list[str]) -> tuple[list[_RawBlock], bool]:
        """Parse one container level.

        Returns
        -------
        tuple
            The raw blocks and whether a blank line separated two of them
            (used to decide list looseness)

        """
        blocks: list[_RawBlock] = []
        paragraph: list[str] | None = None
        pending_blank = False
        gap = False

        def close_paragraph() -> None:
            nonlocal paragraph
            if paragraph is not None:
                remaining = self._extract_reference_definitions(paragraph)
                if remaining:
                    blocks.append(_RawParagraph(lines=remaining))
                paragraph = None

        def start_block() -> None:
            nonlocal pending_blank, gap
            if pending_blank and blocks:
                gap = True
            pending_blank = False

        i = 0
        n = len(lines)
        while i < n:
            line = lines[i]

            if _is_blank(line):
                close_paragraph()
                pending_blank = True
                i += 1
                continue

            indent = _indent(line)

            if indent >= CODE_INDENT:
                if paragraph is not None:
                    paragraph.append(line.strip())
                    i += 1
                    continue
                start_block()
                block, i = self._parse_indented_code(lines, i)
                blocks.append(block)
                continue

            stripped = line[indent:]

            if paragraph is not None and self.options.parse_tables:
                alignments = _parse_delimiter_row(stripped)
                if alignments is not None and "|" in paragraph[-1]:
                    header = _split_table_row(paragraph[-1])
                    if len(header) == len(alignments):
                        head_line = paragraph.pop()
                        if not paragraph:
                            paragraph = None
                        close_paragraph()
                        table, i = self._parse_table(lines, i + 1, head_line, alignments)
                        blocks.append(table)
                        continue

            if paragraph is not None:
                setext = _SETEXT_RE.match(stripped)
                if setext:
                    remaining = self._extract_reference_definitions(paragraph)
                    paragraph = None
                    if remaining:
                        level = 1 if setext.group(1)[0] == "=" else 2
                        blocks.append(_RawHeading(level=level, text="\n".join(remaining)))
                        i += 1
                        continue

            fence = _FENCE_RE.match(stripped)
            if fence and not (fence.group(1)[0] == "`" and "`" in fence.group(2)):
                close_paragraph()
                start_block()
                block, i = self._parse_fenced_code(lines, i, indent, fence.group(1), fence.group(2))
                blocks.append(block)
                continue

            atx = _ATX_RE.match(stripped)
            if atx:
                close_paragraph()
                start_block()
                blocks.append(self._make_atx_heading(atx))
                i += 1
                continue

            if stripped.startswith(">"):
                close_paragraph()
                start_block()
                block, i = self._parse_block_quote(lines, i)
                blocks.append(block)
                continue

            if _THEMATIC_BREAK_RE.match(stripped):
                close_paragraph()
                start_block()
                blocks.append(_RawBreak())
                i += 1
                continue

            marker = _match_list_marker(line)
            if marker is not None and (paragraph is None or self._can_interrupt_paragraph(marker)):
                close_paragraph()
                start_block()
                block, i = self._parse_list(lines, i, marker)
                blocks.append(block)
                continue

            if paragraph is None:
                start_block()
                paragraph = []
            paragraph.append(stripped)
            i += 1

        close_paragraph()
        return blocks, gap

    @staticmethod
    def _can_interrupt_paragraph(marker: _ListMarker) -> bool:
        if not marker.content:
            return False
        return not marker.ordered or marker.start == 1

    def _parse_indented_code(self, lines: list[str], i: int) -> tuple[_RawCode, int]:
        collected: list[str] = []
        while i < len(lines) and (_is_blank(lines[i]) or _indent(lines[i]) >= CODE_INDENT):
            line = lines[i]
            collected.append(line[CODE_INDENT:])
            i += 1
        while collected and _is_blank(collected[-1]):
            collected.pop()
            i -= 1
        return _RawCode(content="\n".join(collected)), i

    def _parse_fenced_code(
        self, lines: list[str], i: int, fence_indent: int, opener: str, info: str
    ) -> tuple[_RawCode, int]:
        char, length = opener[0], len(opener)
        info = unescape_string(info.strip())
        language = info.split()[0] if info else None
        collected: list[str] = []
        i += 1
        while i < len(lines):
            line = lines[i]
            indent = _indent(line)
            closing = line[indent:].rstrip()
            if indent < CODE_INDENT and len(closing) >= length and closing == char * len(closing):
                return _RawCode(content="\n".join(collected), language=language), i + 1
            collected.append(line[min(indent, fence_indent) :])
            i += 1
        # Unterminated fence: the block runs to the end of its container
        logger.debug("Unterminated code fence consumed to end of input")
        return _RawCode(content="\n".join(collected), language=language), i

    @staticmethod
    def _make_atx_heading(match: re.Match[str]) -> _RawHeading:
        text = (match.group(2) or "").strip()
        closing = _ATX_CLOSING_RE.search(text)
        if closing:
            text = text[: closing.start()].rstrip()
        return _RawHeading(level=len(match.group(1)), text=text)

    def _parse_block_quote(self, lines: list[str], i: int) -> tuple[_RawQuote, int]:
        collected: list[str] = []
        while i < len(lines):
            line = lines[i]
            if _is_blank(line):
                break
            indent = _indent(line)
            stripped = line[indent:]
            if indent < CODE_INDENT and stripped.startswith(">"):
                content = stripped[1:]
                if content.startswith(" "):
                    content = content[1:]
                collected.append(content)
            elif _ends_in_paragraph(collected) and not self._starts_block(line):
                collected.append(line)
            else:
                break
            i += 1
        children, _ = self.parse_blocks(collected)
        return _RawQuote(children=children), i

    def _starts_block(self, line: str) -> bool:
        """Return True if ``line`` would interrupt a paragraph."""
        indent = _indent(line)
        if indent >= CODE_INDENT:
            return False
        stripped = line[indent:]
        if stripped.startswith(">") or _ATX_RE.match(stripped) or _THEMATIC_BREAK_RE.match(stripped):
            return True
        if _FENCE_RE.match(stripped):
            return True
        marker = _match_list_marker(line)
        return marker is not None and self._can_interrupt_paragraph(marker)

    def _parse_list(self, lines: list[str], i: int, first: _ListMarker) -> tuple[_RawList, int]:
        raw_list = _RawList(ordered=first.ordered, marker=first.marker, start=first.start)
        loose = False
        marker: _ListMarker | None = first

        while marker is not None:
            item_lines = [marker.content]
            j = i + 1
            if marker.content or (j < len(lines) and not _is_blank(lines[j])):
                while j < len(lines):
                    line = lines[j]
                    if _is_blank(line):
                        item_lines.append("")
                    elif _indent(line) >= marker.width:
                        item_lines.append(line[marker.width :])
                    elif _is_blank(lines[j - 1]) or _match_list_marker(line) is not None:
                        break
                    elif _ends_in_paragraph(item_lines) and not self._starts_block(line):
                        item_lines.append(line.lstrip(" "))
                    else:
                        break
                    j += 1

            trailing = 0
            while item_lines and _is_blank(item_lines[-1]) and len(item_lines) > 1:
                item_lines.pop()
                trailing += 1
            end = j - trailing

            item, item_gap = self._make_item(item_lines)
            raw_list.items.append(item)
            loose = loose or item_gap

            following = _match_list_marker(lines[j]) if j < len(lines) else None
            if (
                following is not None
                and following.ordered == first.ordered
                and following.marker == first.marker
                and following.indent == first.indent
            ):
                loose = loose or trailing > 0
                marker = following
                i = j
            else:
                marker = None
                i = end

        has_paragraph = any(
            isinstance(child, _RawParagraph) for item in raw_list.items for child in item.children
        )
        raw_list.tight = not loose or not has_paragraph
        return raw_list, i

    def _make_item(self, item_lines: list[str]) -> tuple[_RawItem, bool]:
        if self.options.parse_task_lists and item_lines:
            task = _TASK_RE.match(item_lines[0])
            if task:
                stripped_lines = [item_lines[0][task.end() :], *item_lines[1:]]
                children, gap = self.parse_blocks(stripped_lines)
                if children and isinstance(children[0], _RawParagraph):
                    status: TaskStatus = "unchecked" if task.group(1) == " " else "checked"
                    return _RawItem(children=children, task_status=status), gap
        children, gap = self.parse_blocks(item_lines)
        return _RawItem(children=children), gap

    def _parse_table(
        self, lines: list[str], i: int, head_line: str, alignments: list[Optional[Alignment]]
    ) -> tuple[_RawTable, int]:
        rows: list[list[str]] = []
        while i < len(lines):
            line = lines[i]
            if _is_blank(line) or "|" not in line or self._starts_block(line):
                break
            rows.append(_split_table_row(line))
            i += 1
        return _RawTable(alignments=alignments, header=_split_table_row(head_line), rows=rows), i

    def _extract_reference_definitions(self, lines: list[str]) -> list[str]:
        """Consume leading link reference definitions from paragraph lines.

        Returns the lines that remain paragraph text. The first definition of
        a label wins.
        """
        text = "\n".join(lines)
        pos = 0
        while pos < len(text):
            parsed = _parse_reference_definition(text, pos)
            if parsed is None:
                break
            label, url, title, pos = parsed
            self.references.setdefault(normalize_label(label), (url, title))
        if pos == 0:
            return lines
        return text[pos:].split("\n") if text[pos:] else []


def _parse_reference_definition(text: str, pos: int) -> tuple[str, str, Optional[str], int] | None:
    """Parse ``[label]: destination "title"`` at ``pos``."""
    if not text.startswith("[", pos):
        return None
    close = find_label_end(text, pos + 1)
    if close is None or not text.startswith(":", close + 1):
        return None
    label = text[pos + 1 : close]
    if not label.strip():
        return None

    dest_start = skip_link_whitespace(text, close + 2)
    destination, dest_end = parse_link_destination(text, dest_start)
    if destination is None or (not destination and not text.startswith("<", dest_start)):
        return None
    line_end = _end_of_line(text, dest_end)

    title_start = skip_link_whitespace(text, dest_end)
    if title_start > dest_end and title_start < len(text) and text[title_start] in "\"'(":
        parsed = parse_link_title(text, title_start)
        if parsed is not None:
            title, title_end = parsed
            end = _end_of_line(text, title_end)
            if end is not None:
                return label, unescape_string(destination), unescape_string(title) or None, end

    if line_end is None:
        return None
    return label, unescape_string(destination), None, line_end


# ============================================================================
# Phase two: AST construction
# ============================================================================


class GfmParser(BaseParser):
    """Convert GitHub-flavored markdown to the AST.

    Parameters
    ----------
    options : MarkdownParserOptions or None, default = None
        Parser configuration options

    Examples
    --------
    >>> doc = GfmParser().parse("- [x] done")
    >>> doc.children[0].items[0].task_status
    'checked'

    """

    def __init__(self, options: MarkdownParserOptions | None = None):
        BaseParser._validate_options_type(options, MarkdownParserOptions, "markdown")
        options = options or MarkdownParserOptions()
        super().__init__(options)
        self.options: MarkdownParserOptions = options

    def parse(self, input_data: Union[str, bytes]) -> Document:
        """Parse GFM input into an AST Document.

        Parameters
        ----------
        input_data : str or bytes
            The complete markdown document

        Returns
        -------
        Document
            AST document node

        Raises
        ------
        StructuralParseError
            If the input is not text, or nests containers too deeply to parse

        """
        text = self._coerce_text(input_data)
        text = text.replace("\r\n", "\n").replace("\r", "\n").replace("\0", "�")
        lines = [_expand_leading_tabs(line) for line in text.split("\n")]

        metadata: dict[str, Any] = {}
        if self.options.parse_frontmatter:
            metadata, lines = self._extract_frontmatter(lines)

        scanner = _BlockScanner(self.options)
        try:
            raw_blocks, _ = scanner.parse_blocks(lines)
            inline = InlineParser(scanner.references, self.options)
            children = [self._build(block, inline) for block in raw_blocks]
        except RecursionError as e:
            raise StructuralParseError(
                "Document nests containers too deeply to parse", parsing_stage="block_parsing", original_error=e
            ) from e

        logger.debug("Parsed %d top-level blocks, %d link references", len(children), len(scanner.references))
        return Document(children=children, metadata=metadata)

    def _extract_frontmatter(self, lines: list[str]) -> tuple[dict[str, Any], list[str]]:
        """Split a leading YAML front matter block from the document lines."""
        if not lines or lines[0].rstrip() != "---":
            return {}, lines

        end_index = next((i for i in range(1, len(lines)) if lines[i].rstrip() in ("---", "...")), None)
        if end_index is None:
            return {}, lines

        try:
            data = yaml.safe_load("\n".join(lines[1:end_index]))
        except yaml.YAMLError as e:
            logger.warning("Ignoring invalid YAML front matter: %s", e)
            return {}, lines

        if data is None:
            return {}, lines[end_index + 1 :]
        if not isinstance(data, dict):
            logger.warning("Ignoring front matter that is not a mapping (got %s)", type(data).__name__)
            return {}, lines
        return _normalize_metadata(data), lines[end_index + 1 :]

    def _build(self, block: _RawBlock, inline: InlineParser) -> Node:
        if isinstance(block, _RawParagraph):
            return Paragraph(content=inline.parse("\n".join(block.lines).rstrip()))
        if isinstance(block, _RawHeading):
            return Heading(level=block.level, content=inline.parse(block.text.rstrip()))
        if isinstance(block, _RawCode):
            return CodeBlock(content=block.content, language=block.language)
        if isinstance(block, _RawBreak):
            return ThematicBreak()
        if isinstance(block, _RawQuote):
            return BlockQuote(children=[self._build(child, inline) for child in block.children])
        if isinstance(block, _RawList):
            items = [
                ListItem(
                    children=[self._build(child, inline) for child in item.children],
                    task_status=item.task_status,
                )
                for item in block.items
            ]
            if block.ordered:
                return OrderedList(items=items, start=block.start, delimiter=block.marker, tight=block.tight)
            return BulletList(items=items, tight=block.tight)
        if isinstance(block, _RawTable):
            columns = len(block.alignments)
            header = TableRow(cells=[TableCell(content=inline.parse(cell)) for cell in block.header])
            rows = [
                TableRow(cells=normalize_row([TableCell(content=inline.parse(cell)) for cell in row], columns))
                for row in block.rows
            ]
            return Table(alignments=block.alignments, header=header, rows=rows)
        raise StructuralParseError(f"Unknown raw block {type(block).__name__}", parsing_stage="ast_building")


def markdown_to_ast(markdown_content: str, options: MarkdownParserOptions | None = None) -> Document:
    r"""Convert a GFM string to an AST.

    Parameters
    ----------
    markdown_content : str
        Markdown text to parse
    options : MarkdownParserOptions or None, default = None
        Parser configuration

    Returns
    -------
    Document
        AST document node

    Examples
    --------
    >>> doc = markdown_to_ast("# Hello\n\nWorld")
    >>> len(doc.children)
    2

    """
    return GfmParser(options).parse(markdown_content)


# Converter metadata for registry registration
CONVERTER_METADATA = ConverterMetadata(
    format_name="gfm",
    aliases=["markdown", "md"],
    extensions=[".md", ".markdown"],
    parser_class=GfmParser,
    renderer_class="mdconv.renderers.markdown.MarkdownRenderer",
    parser_options_class=MarkdownParserOptions,
    renderer_options_class="mdconv.options.markdown.MarkdownRendererOptions",
    description="GitHub-flavored markdown",
)
