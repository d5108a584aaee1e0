#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconv/ast/serialization.py
"""Pandoc JSON serialization and deserialization for AST nodes.

This module converts documents to and from the JSON encoding of Pandoc's
document AST (API version 1.23), so mdconv can sit on either side of a
pipeline with Pandoc. Every node is encoded as ``{"t": tag, "c": content}``.

Node types with no direct Pandoc counterpart use the conventions of Pandoc's
own GFM reader where one exists:

- Autolink: ``Link`` with class ``uri`` (``email`` is also accepted)
- EmojiShortcode: ``Span`` with class ``emoji`` and a ``data-emoji`` attribute
- Task items: the item's first paragraph starts with ``☐`` or ``☒``

and otherwise a classed ``Span``:

- UserMention: class ``user-mention``, attribute ``handle``
- IssueReference: class ``issue-reference``, attribute ``number``
- EscapedChar: class ``escaped``

Absent link titles encode as ``""`` and absent code languages as an empty
class list. Decoding merges consecutive ``Str``/``Space`` tokens back into a
single Text node, so a document produced by the markdown parser survives a
round trip unchanged.

Examples
--------
Serialize a document to JSON:

    >>> from mdconv.ast import Document, Heading, Text
    >>> from mdconv.ast.serialization import ast_to_json
    >>> doc = Document(children=[Heading(level=1, content=[Text("Title")])])
    >>> ast_to_json(doc)
    '{"pandoc-api-version": [1, 23, 1], "meta": {}, "blocks": [{"t": "Header", ...

Deserialize JSON back to a document:

    >>> from mdconv.ast.serialization import json_to_ast
    >>> json_to_ast(ast_to_json(doc)) == doc
    True

"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Optional

from mdconv.ast.nodes import (
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
from mdconv.ast.utils import extract_text, merge_adjacent_text, normalize_row
from mdconv.constants import (
    CHECKED_BOX,
    CLASS_EMOJI,
    CLASS_ESCAPED,
    CLASS_ISSUE_REFERENCE,
    CLASS_URI,
    CLASS_USER_MENTION,
    PANDOC_API_VERSION,
    UNCHECKED_BOX,
)

logger = logging.getLogger(__name__)

_ALIGN_TO_PANDOC = {None: "AlignDefault", "left": "AlignLeft", "center": "AlignCenter", "right": "AlignRight"}
_ALIGN_FROM_PANDOC = {value: key for key, value in _ALIGN_TO_PANDOC.items()}
_DELIM_TO_PANDOC = {".": "Period", ")": "OneParen"}
_DELIM_FROM_PANDOC = {"Period": ".", "DefaultDelim": ".", "OneParen": ")", "TwoParens": ")"}
_SPACE: dict[str, Any] = {"t": "Space"}


# ============================================================================
# Encoding
# ============================================================================


def _attr(classes: Optional[list[str]] = None, attributes: Optional[list[list[str]]] = None) -> list[Any]:
    return ["", classes or [], attributes or []]


def _tagged(tag: str, content: Any = None) -> dict[str, Any]:
    if content is None:
        return {"t": tag}
    return {"t": tag, "c": content}


def _str_tokens(text: str) -> list[dict[str, Any]]:
    """Split literal text into Pandoc ``Str``/``Space`` tokens."""
    tokens: list[dict[str, Any]] = []
    for index, word in enumerate(text.split(" ")):
        if index:
            tokens.append(dict(_SPACE))
        if word:
            tokens.append(_tagged("Str", word))
    return tokens


def _span(cls: str, text: str, attributes: list[list[str]]) -> dict[str, Any]:
    return _tagged("Span", [_attr([cls], attributes), _str_tokens(text)])


def _encode_inlines(nodes: list[Node]) -> list[dict[str, Any]]:
    encoded: list[dict[str, Any]] = []
    for node in nodes:
        encoder = _INLINE_ENCODERS.get(type(node))
        if encoder is None:
            raise ValueError(f"Cannot serialize {type(node).__name__} as an inline node")
        encoded.extend(encoder(node))
    return encoded


def _encode_link(node: Link) -> list[dict[str, Any]]:
    return [_tagged("Link", [_attr(), _encode_inlines(node.content), [node.url, node.title or ""]])]


def _encode_image(node: Image) -> list[dict[str, Any]]:
    return [_tagged("Image", [_attr(), _str_tokens(node.alt_text), [node.url, node.title or ""]])]


def _encode_autolink(node: Autolink) -> list[dict[str, Any]]:
    return [_tagged("Link", [_attr([CLASS_URI]), _str_tokens(node.url), [node.url, ""]])]


_INLINE_ENCODERS: dict[type, Callable[[Any], list[dict[str, Any]]]] = {
    Text: lambda node: _str_tokens(node.content),
    SoftBreak: lambda node: [_tagged("SoftBreak")],
    HardBreak: lambda node: [_tagged("LineBreak")],
    Emphasis: lambda node: [_tagged("Emph", _encode_inlines(node.content))],
    Strong: lambda node: [_tagged("Strong", _encode_inlines(node.content))],
    Strikethrough: lambda node: [_tagged("Strikeout", _encode_inlines(node.content))],
    Code: lambda node: [_tagged("Code", [_attr(), node.content])],
    Link: _encode_link,
    Image: _encode_image,
    Autolink: _encode_autolink,
    UserMention: lambda node: [_span(CLASS_USER_MENTION, f"@{node.handle}", [["handle", node.handle]])],
    IssueReference: lambda node: [_span(CLASS_ISSUE_REFERENCE, f"#{node.number}", [["number", str(node.number)]])],
    EmojiShortcode: lambda node: [_span(CLASS_EMOJI, f":{node.name}:", [["data-emoji", node.name]])],
    EscapedChar: lambda node: [_span(CLASS_ESCAPED, node.char, [])],
}


def _encode_blocks(nodes: list[Node], plain: bool = False) -> list[dict[str, Any]]:
    encoded = []
    for node in nodes:
        encoder = _BLOCK_ENCODERS.get(type(node))
        if encoder is None:
            raise ValueError(f"Cannot serialize {type(node).__name__} as a block node")
        encoded.append(encoder(node, plain))
    return encoded


def _encode_list_item(item: ListItem, tight: bool) -> list[dict[str, Any]]:
    blocks = _encode_blocks(item.children, plain=tight)
    if item.task_status is not None and blocks and blocks[0]["t"] in ("Plain", "Para"):
        box = CHECKED_BOX if item.task_status == "checked" else UNCHECKED_BOX
        blocks[0]["c"] = [_tagged("Str", box), dict(_SPACE), *blocks[0]["c"]]
    return blocks


def _encode_paragraph(node: Paragraph, plain: bool) -> dict[str, Any]:
    return _tagged("Plain" if plain else "Para", _encode_inlines(node.content))


def _encode_code_block(node: CodeBlock, plain: bool) -> dict[str, Any]:
    classes = [node.language] if node.language else []
    return _tagged("CodeBlock", [_attr(classes), node.content])


def _encode_bullet_list(node: BulletList, plain: bool) -> dict[str, Any]:
    return _tagged("BulletList", [_encode_list_item(item, node.tight) for item in node.items])


def _encode_ordered_list(node: OrderedList, plain: bool) -> dict[str, Any]:
    attributes = [node.start, _tagged("Decimal"), _tagged(_DELIM_TO_PANDOC[node.delimiter])]
    return _tagged("OrderedList", [attributes, [_encode_list_item(item, node.tight) for item in node.items]])


def _encode_row(row: TableRow) -> list[Any]:
    cells = []
    for cell in row.cells:
        blocks = [_tagged("Plain", _encode_inlines(cell.content))] if cell.content else []
        cells.append([_attr(), _tagged("AlignDefault"), 1, 1, blocks])
    return [_attr(), cells]


def _encode_table(node: Table, plain: bool) -> dict[str, Any]:
    colspecs = [[_tagged(_ALIGN_TO_PANDOC[align]), _tagged("ColWidthDefault")] for align in node.alignments]
    head = [_attr(), [_encode_row(node.header)]]
    bodies = [[_attr(), 0, [], [_encode_row(row) for row in node.rows]]]
    foot = [_attr(), []]
    return _tagged("Table", [_attr(), [None, []], colspecs, head, bodies, foot])


_BLOCK_ENCODERS: dict[type, Callable[[Any, bool], dict[str, Any]]] = {
    Paragraph: _encode_paragraph,
    Heading: lambda node, plain: _tagged("Header", [node.level, _attr(), _encode_inlines(node.content)]),
    CodeBlock: _encode_code_block,
    BlockQuote: lambda node, plain: _tagged("BlockQuote", _encode_blocks(node.children)),
    BulletList: _encode_bullet_list,
    OrderedList: _encode_ordered_list,
    Table: _encode_table,
    ThematicBreak: lambda node, plain: _tagged("HorizontalRule"),
}


def _encode_meta_value(value: Any) -> dict[str, Any]:
    if isinstance(value, bool):
        return _tagged("MetaBool", value)
    if isinstance(value, dict):
        return _tagged("MetaMap", {str(k): _encode_meta_value(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return _tagged("MetaList", [_encode_meta_value(v) for v in value])
    return _tagged("MetaString", str(value))


def ast_to_dict(doc: Document) -> dict[str, Any]:
    """Convert a document to a Pandoc JSON-compatible dictionary.

    Parameters
    ----------
    doc : Document
        Document to serialize

    Returns
    -------
    dict
        Dictionary with ``pandoc-api-version``, ``meta`` and ``blocks`` keys

    Raises
    ------
    ValueError
        If the tree contains a node in a position it cannot occupy

    """
    if not isinstance(doc, Document):
        raise ValueError(f"Expected a Document, got {type(doc).__name__}")
    return {
        "pandoc-api-version": list(PANDOC_API_VERSION),
        "meta": {key: _encode_meta_value(value) for key, value in doc.metadata.items()},
        "blocks": _encode_blocks(doc.children),
    }


def ast_to_json(doc: Document, indent: int | None = None, ensure_ascii: bool = False) -> str:
    """Serialize a document to a Pandoc JSON string.

    Parameters
    ----------
    doc : Document
        Document to serialize
    indent : int or None, default None
        Indentation for pretty printing, None for compact output
    ensure_ascii : bool, default False
        Escape non-ASCII characters

    Returns
    -------
    str
        JSON text

    """
    return json.dumps(ast_to_dict(doc), indent=indent, ensure_ascii=ensure_ascii)


# ============================================================================
# Decoding
# ============================================================================


class _Decoder:
    """Stateful helper carrying the strictness policy through recursive decoding."""

    def __init__(self, strict_mode: bool) -> None:
        self.strict_mode = strict_mode

    def degrade(self, message: str) -> None:
        """Report a foreign construct, raising in strict mode."""
        if self.strict_mode:
            raise ValueError(message)
        logger.warning(message)

    # -- inlines ------------------------------------------------------------

    def inlines(self, data: list[Any]) -> list[Node]:
        if not isinstance(data, list):
            raise ValueError(f"Expected a list of inline elements, got {type(data).__name__}")
        nodes: list[Node] = []
        for element in data:
            tag, content = _split(element)
            handler = _INLINE_DECODERS.get(tag)
            if handler is None:
                self.degrade(f"Unknown inline element '{tag}' dropped")
                continue
            nodes.extend(handler(self, content))
        return merge_adjacent_text(nodes)

    def link(self, content: list[Any]) -> list[Node]:
        attr, label, target = content
        url, title = target
        if set(attr[1]) & {CLASS_URI, "email"}:
            return [Autolink(url=url)]
        return [Link(url=url, content=self.inlines(label), title=title or None)]

    def image(self, content: list[Any]) -> list[Node]:
        _, alt, target = content
        url, title = target
        return [Image(url=url, alt_text=extract_text(self.inlines(alt)), title=title or None)]

    def span(self, content: list[Any]) -> list[Node]:
        attr, children = content
        classes = attr[1]
        attributes = {key: value for key, value in attr[2]}
        inner = self.inlines(children)
        text = extract_text(inner)
        if CLASS_USER_MENTION in classes:
            return [UserMention(handle=attributes.get("handle", text.lstrip("@")))]
        if CLASS_ISSUE_REFERENCE in classes:
            number = attributes.get("number", text.lstrip("#"))
            if number.isdigit():
                return [IssueReference(number=int(number))]
        if CLASS_EMOJI in classes:
            return [EmojiShortcode(name=attributes.get("data-emoji", text.strip(":")))]
        if CLASS_ESCAPED in classes and len(text) == 1:
            return [EscapedChar(char=text)]
        self.degrade(f"Span with classes {classes} unwrapped")
        return inner

    def unwrap_inlines(self, tag: str) -> Callable[[Any], list[Node]]:
        def handler(content: list[Any]) -> list[Node]:
            self.degrade(f"{tag} has no markdown equivalent; keeping its text content")
            return self.inlines(content)

        return handler

    def quoted(self, content: list[Any]) -> list[Node]:
        quote_type, children = content
        mark = '"' if _tag(quote_type) == "DoubleQuote" else "'"
        self.degrade("Quoted rendered with literal quote characters")
        return [Text(mark), *self.inlines(children), Text(mark)]

    def literal_code(self, tag: str, text: str) -> list[Node]:
        self.degrade(f"{tag} rendered as inline code")
        return [Code(content=text)]

    def note(self, content: Any) -> list[Node]:
        self.degrade("Note dropped")
        return []

    # -- blocks -------------------------------------------------------------

    def blocks(self, data: list[Any]) -> list[Node]:
        if not isinstance(data, list):
            raise ValueError(f"Expected a list of block elements, got {type(data).__name__}")
        nodes: list[Node] = []
        for element in data:
            tag, content = _split(element)
            handler = _BLOCK_DECODERS.get(tag)
            if handler is None:
                self.degrade(f"Unknown block element '{tag}' dropped")
                continue
            nodes.extend(handler(self, content))
        return nodes

    def heading(self, content: list[Any]) -> list[Node]:
        level, _, children = content
        if not 1 <= level <= 6:
            self.degrade(f"Header level {level} clamped to 1-6")
            level = min(max(level, 1), 6)
        return [Heading(level=level, content=self.inlines(children))]

    def code_block(self, content: list[Any]) -> list[Node]:
        attr, text = content
        classes = attr[1]
        return [CodeBlock(content=text, language=classes[0] if classes else None)]

    def list_items(self, items: list[Any]) -> tuple[list[ListItem], bool]:
        decoded = []
        has_para = False
        for item_blocks in items:
            task_status = None
            if item_blocks and _tag(item_blocks[0]) in ("Plain", "Para"):
                has_para = has_para or _tag(item_blocks[0]) == "Para"
                first = item_blocks[0].get("c", [])
                if len(first) >= 2 and _tag(first[1]) == "Space" and _tag(first[0]) == "Str":
                    box = first[0].get("c")
                    if box in (CHECKED_BOX, UNCHECKED_BOX):
                        task_status = "checked" if box == CHECKED_BOX else "unchecked"
                        item_blocks = [{"t": item_blocks[0]["t"], "c": first[2:]}, *item_blocks[1:]]
            else:
                has_para = has_para or any(_tag(block) == "Para" for block in item_blocks)
            decoded.append(ListItem(children=self.blocks(item_blocks), task_status=task_status))
        return decoded, not has_para

    def bullet_list(self, content: list[Any]) -> list[Node]:
        items, tight = self.list_items(content)
        return [BulletList(items=items, tight=tight)]

    def ordered_list(self, content: list[Any]) -> list[Node]:
        attributes, raw_items = content
        start, style, delim = attributes
        if _tag(style) not in ("Decimal", "DefaultStyle"):
            self.degrade(f"List number style {_tag(style)} rendered as decimal")
        delim_tag = _tag(delim)
        if delim_tag == "TwoParens":
            self.degrade("TwoParens list delimiter rendered as ')'")
        items, tight = self.list_items(raw_items)
        return [OrderedList(items=items, start=start, delimiter=_DELIM_FROM_PANDOC.get(delim_tag, "."), tight=tight)]

    def cell_inlines(self, blocks: list[Any]) -> list[Node]:
        content: list[Node] = []
        for node in self.blocks(blocks):
            if content:
                content.append(HardBreak())
            if isinstance(node, (Paragraph, Heading)):
                content.extend(node.content)
            elif isinstance(node, CodeBlock):
                content.append(Code(content=node.content))
            else:
                self.degrade(f"{type(node).__name__} inside a table cell flattened to text")
                content.append(Text(extract_text(node)))
        return merge_adjacent_text(content)

    def row(self, data: list[Any], columns: int) -> TableRow:
        _, cells = data
        decoded = []
        for cell in cells:
            _, _, row_span, col_span, blocks = cell
            if row_span != 1 or col_span != 1:
                self.degrade("Spanning table cell flattened to a single cell")
            decoded.append(TableCell(content=self.cell_inlines(blocks)))
        return TableRow(cells=normalize_row(decoded, columns))

    def table(self, content: list[Any]) -> list[Node]:
        _, caption, colspecs, head, bodies, foot = content
        if caption and caption[1]:
            self.degrade("Table caption dropped")
        alignments = [_ALIGN_FROM_PANDOC.get(_tag(spec[0])) for spec in colspecs]
        columns = len(alignments)
        head_rows = [self.row(row, columns) for row in head[1]]
        body_rows: list[TableRow] = head_rows[1:]
        for body in bodies:
            _, _, intermediate, rows = body
            body_rows.extend(self.row(row, columns) for row in intermediate)
            body_rows.extend(self.row(row, columns) for row in rows)
        body_rows.extend(self.row(row, columns) for row in foot[1])
        header = head_rows[0] if head_rows else TableRow(cells=normalize_row([], columns))
        return [Table(alignments=alignments, header=header, rows=body_rows)]

    def unwrap_div(self, content: list[Any]) -> list[Node]:
        self.degrade("Div unwrapped")
        return self.blocks(content[1])

    def figure(self, content: list[Any]) -> list[Node]:
        self.degrade("Figure unwrapped")
        return self.blocks(content[2])

    def raw_block(self, content: list[Any]) -> list[Node]:
        fmt, text = content
        self.degrade(f"RawBlock ({fmt}) rendered as a code block")
        return [CodeBlock(content=text, language=fmt or None)]

    def line_block(self, content: list[Any]) -> list[Node]:
        self.degrade("LineBlock rendered as a paragraph with hard breaks")
        inlines: list[Node] = []
        for index, line in enumerate(content):
            if index:
                inlines.append(HardBreak())
            inlines.extend(self.inlines(line))
        return [Paragraph(content=merge_adjacent_text(inlines))]

    def definition_list(self, content: list[Any]) -> list[Node]:
        self.degrade("DefinitionList rendered as a bullet list")
        items = []
        for term, definitions in content:
            children: list[Node] = [Paragraph(content=self.inlines(term))]
            for definition in definitions:
                children.extend(self.blocks(definition))
            items.append(ListItem(children=children))
        return [BulletList(items=items, tight=False)]

    # -- metadata -----------------------------------------------------------

    def meta_value(self, data: dict[str, Any]) -> Any:
        tag, content = _split(data)
        if tag == "MetaBool":
            return bool(content)
        if tag == "MetaString":
            return str(content)
        if tag == "MetaList":
            return [self.meta_value(item) for item in content]
        if tag == "MetaMap":
            return {key: self.meta_value(value) for key, value in content.items()}
        if tag == "MetaInlines":
            return extract_text(self.inlines(content))
        if tag == "MetaBlocks":
            return "\n\n".join(extract_text(block) for block in self.blocks(content))
        raise ValueError(f"Unknown metadata value type '{tag}'")


def _tag(element: Any) -> str:
    if not isinstance(element, dict) or "t" not in element:
        raise ValueError(f"Expected a tagged element, got {element!r}")
    return element["t"]


def _split(element: Any) -> tuple[str, Any]:
    return _tag(element), element.get("c")


_INLINE_DECODERS: dict[str, Callable[[_Decoder, Any], list[Node]]] = {
    "Str": lambda d, c: [Text(content=c)],
    "Space": lambda d, c: [Text(content=" ")],
    "SoftBreak": lambda d, c: [SoftBreak()],
    "LineBreak": lambda d, c: [HardBreak()],
    "Emph": lambda d, c: [Emphasis(content=d.inlines(c))],
    "Strong": lambda d, c: [Strong(content=d.inlines(c))],
    "Strikeout": lambda d, c: [Strikethrough(content=d.inlines(c))],
    "Code": lambda d, c: [Code(content=c[1])],
    "Link": _Decoder.link,
    "Image": _Decoder.image,
    "Span": _Decoder.span,
    "Underline": lambda d, c: d.unwrap_inlines("Underline")(c),
    "SmallCaps": lambda d, c: d.unwrap_inlines("SmallCaps")(c),
    "Superscript": lambda d, c: d.unwrap_inlines("Superscript")(c),
    "Subscript": lambda d, c: d.unwrap_inlines("Subscript")(c),
    "Cite": lambda d, c: d.unwrap_inlines("Cite")(c[1]),
    "Quoted": _Decoder.quoted,
    "Math": lambda d, c: d.literal_code("Math", c[1]),
    "RawInline": lambda d, c: d.literal_code("RawInline", c[1]),
    "Note": _Decoder.note,
}

_BLOCK_DECODERS: dict[str, Callable[[_Decoder, Any], list[Node]]] = {
    "Para": lambda d, c: [Paragraph(content=d.inlines(c))],
    "Plain": lambda d, c: [Paragraph(content=d.inlines(c))],
    "Header": _Decoder.heading,
    "CodeBlock": _Decoder.code_block,
    "BlockQuote": lambda d, c: [BlockQuote(children=d.blocks(c))],
    "BulletList": _Decoder.bullet_list,
    "OrderedList": _Decoder.ordered_list,
    "HorizontalRule": lambda d, c: [ThematicBreak()],
    "Table": _Decoder.table,
    "Div": _Decoder.unwrap_div,
    "Figure": _Decoder.figure,
    "RawBlock": _Decoder.raw_block,
    "LineBlock": _Decoder.line_block,
    "DefinitionList": _Decoder.definition_list,
    "Null": lambda d, c: [],
}


def dict_to_ast(data: dict[str, Any], strict_mode: bool = False) -> Document:
    """Convert a Pandoc JSON dictionary to a document.

    Parameters
    ----------
    data : dict
        Decoded Pandoc JSON with ``blocks`` and optional ``meta`` keys
    strict_mode : bool, default False
        If True, raise ValueError on constructs that have no mdconv
        equivalent. If False, log a warning and degrade them.

    Returns
    -------
    Document
        Reconstructed document

    Raises
    ------
    ValueError
        If the data is not shaped like a Pandoc document, or (in strict mode)
        contains constructs with no equivalent

    """
    if not isinstance(data, dict) or "blocks" not in data:
        raise ValueError("Pandoc JSON must be an object with a 'blocks' key")

    version = data.get("pandoc-api-version")
    if version is not None and list(version[:2]) != PANDOC_API_VERSION[:2]:
        logger.warning(
            "Pandoc API version %s differs from supported version %s",
            ".".join(str(v) for v in version),
            ".".join(str(v) for v in PANDOC_API_VERSION),
        )

    decoder = _Decoder(strict_mode)
    metadata = {key: decoder.meta_value(value) for key, value in (data.get("meta") or {}).items()}
    return Document(children=decoder.blocks(data["blocks"]), metadata=metadata)


def json_to_ast(json_str: str, strict_mode: bool = False) -> Document:
    """Deserialize a Pandoc JSON string to a document.

    Parameters
    ----------
    json_str : str
        JSON text as produced by ``pandoc -t json`` or :func:`ast_to_json`
    strict_mode : bool, default False
        See :func:`dict_to_ast`

    Returns
    -------
    Document
        Reconstructed document

    Raises
    ------
    ValueError
        If the JSON is malformed or not a Pandoc document

    """
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON: {e}") from e
    return dict_to_ast(data, strict_mode=strict_mode)


__all__ = [
    "ast_to_dict",
    "ast_to_json",
    "dict_to_ast",
    "json_to_ast",
]
