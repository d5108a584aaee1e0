#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconv/parsers/inline.py
"""Inline parser for GFM text spans.

The block parser hands each leaf block's raw text to :class:`InlineParser`,
which turns it into a flat sequence of inline nodes. Parsing happens in one
left-to-right scan:

1. Code spans, backslash escapes, entities and autolinks are recognized as
   soon as they are reached and emitted as finished nodes, so they bind
   tighter than everything else.
2. Runs of ``*``, ``_`` and ``~`` are emitted as delimiter records carrying
   their flanking classification.
3. ``[`` and ``![`` push bracket records; a ``]`` that is followed by a valid
   destination or resolves against the reference table closes the nearest
   bracket into a Link or Image.
4. Delimiter records are matched against an explicit stack of openers (see
   :func:`_resolve_emphasis`). Whatever is left unmatched becomes Text.

No input raises: every malformed construct falls back to literal text.

"""

from __future__ import annotations

import html
import logging
import re
import string
import unicodedata
from dataclasses import dataclass
from typing import Optional, Union

from mdconv.ast.nodes import (
    Autolink,
    Code,
    EmojiShortcode,
    Emphasis,
    EscapedChar,
    HardBreak,
    Image,
    IssueReference,
    Link,
    Node,
    SoftBreak,
    Strikethrough,
    Strong,
    Text,
    UserMention,
)
from mdconv.ast.utils import merge_adjacent_text
from mdconv.constants import MAX_MENTION_LENGTH
from mdconv.options.markdown import MarkdownParserOptions

logger = logging.getLogger(__name__)

ReferenceTable = dict[str, tuple[str, Optional[str]]]

ASCII_PUNCTUATION = frozenset(string.punctuation)

_ENTITY_RE = re.compile(r"&(?:#[xX][0-9a-fA-F]{1,6}|#[0-9]{1,7}|[A-Za-z][A-Za-z0-9]{1,31});")
_URI_AUTOLINK_RE = re.compile(r"<([A-Za-z][A-Za-z0-9+.\-]{1,31}:[^\s<>]*)>")
_EMAIL_AUTOLINK_RE = re.compile(
    r"<([A-Za-z0-9.!#$%&'*+/=?^_`{|}~\-]+@[A-Za-z0-9](?:[A-Za-z0-9\-]{0,61}[A-Za-z0-9])?"
    r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9\-]{0,61}[A-Za-z0-9])?)*)>"
)
_BARE_URL_RE = re.compile(r"(?:https?://|ftp://|www\.)[^\s<]*", re.IGNORECASE)
_DOMAIN_RE = re.compile(r"[\w\-]+(?:\.[\w\-]+)*(?::[0-9]+)?")
_MENTION_RE = re.compile(r"[A-Za-z0-9](?:-?[A-Za-z0-9])*")
_ISSUE_RE = re.compile(r"[1-9][0-9]*")
_EMOJI_RE = re.compile(r":([A-Za-z0-9_+\-]*[A-Za-z0-9][A-Za-z0-9_+\-]*):")
_SPECIAL_RE = re.compile(r"[\\`*_~\[\]!<&\n@#:hHfFwW]")

_AUTOLINK_PRECEDERS = frozenset(" \t\n*_~(")
_URL_TRAILING_PUNCTUATION = "?!.,:*_~'\""


def normalize_label(label: str) -> str:
    """Normalize a link reference label for case-insensitive matching.

    Parameters
    ----------
    label : str
        Raw label text between the brackets

    Returns
    -------
    str
        Case-folded label with internal whitespace collapsed

    """
    return " ".join(label.split()).casefold()


def unescape_string(value: str) -> str:
    r"""Resolve backslash escapes and entity references in a destination or title.

    Examples
    --------
    >>> unescape_string(r"a\*b&amp;c")
    'a*b&c'

    """
    out: list[str] = []
    i = 0
    while i < len(value):
        char = value[i]
        if char == "\\" and i + 1 < len(value) and value[i + 1] in ASCII_PUNCTUATION:
            out.append(value[i + 1])
            i += 2
            continue
        if char == "&":
            match = _ENTITY_RE.match(value, i)
            if match:
                out.append(html.unescape(match.group(0)))
                i = match.end()
                continue
        out.append(char)
        i += 1
    return "".join(out)


def _is_punctuation(char: str) -> bool:
    if char in ASCII_PUNCTUATION:
        return True
    return unicodedata.category(char)[0] in ("P", "S")


@dataclass
class _Delimiter:
    """A run of emphasis or strikethrough characters awaiting matching."""

    char: str
    count: int
    length: int
    can_open: bool
    can_close: bool


@dataclass
class _Bracket:
    """An open ``[`` or ``![`` awaiting its closing ``]``."""

    index: int
    image: bool
    label_start: int
    active: bool = True


_Item = Union[Node, _Delimiter]


def _wrap(delimiter: str, used: int, content: list[Node]) -> Node:
    content = merge_adjacent_text(content)
    if delimiter == "~":
        return Strikethrough(content=content)
    if used == 2:
        return Strong(content=content)
    return Emphasis(content=content)


def _compatible(opener: _Delimiter, closer: _Delimiter) -> bool:
    if opener.char != closer.char:
        return False
    if closer.char == "~":
        return opener.count == closer.count
    if opener.can_close or closer.can_open:
        total = opener.length + closer.length
        if total % 3 == 0 and not (opener.length % 3 == 0 and closer.length % 3 == 0):
            return False
    return True


def _resolve_emphasis(items: list[_Item]) -> list[Node]:
    """Match delimiter records and return the finished inline sequence.

    Each stack frame pairs a potential opener with the nodes collected after
    it. When a closer meets a compatible opener, every frame above that opener
    is flattened back into literal text, the opener's frame is wrapped in the
    emphasis node, and any leftover characters on either side stay available
    for further matches.
    """
    root: list[Node] = []
    frames: list[tuple[_Delimiter, list[Node]]] = []

    def current() -> list[Node]:
        return frames[-1][1] if frames else root

    def collapse_above(depth: int) -> None:
        while len(frames) > depth + 1:
            opener, content = frames.pop()
            current().append(Text(opener.char * opener.count))
            current().extend(content)

    for item in items:
        if not isinstance(item, _Delimiter):
            current().append(item)
            continue

        closer = item
        while closer.count and closer.can_close:
            depth = next(
                (d for d in range(len(frames) - 1, -1, -1) if _compatible(frames[d][0], closer)),
                None,
            )
            if depth is None:
                break
            collapse_above(depth)
            opener, content = frames[-1]
            used = closer.count if closer.char == "~" else (2 if opener.count >= 2 and closer.count >= 2 else 1)
            node = _wrap(opener.char, used, content)
            opener.count -= used
            closer.count -= used
            if opener.count:
                frames[-1] = (opener, [node])
            else:
                frames.pop()
                current().append(node)

        if closer.count:
            if closer.can_open:
                frames.append((closer, []))
            else:
                current().append(Text(closer.char * closer.count))

    collapse_above(-1)
    return merge_adjacent_text(root)


class InlineParser:
    """Convert a leaf block's raw text into inline nodes.

    Parameters
    ----------
    references : dict, optional
        Link reference table mapping normalized labels to ``(url, title)``.
        Entries are copied by value into each Link or Image built from them.
    options : MarkdownParserOptions, optional
        Toggles for the GFM inline extensions

    Examples
    --------
    >>> InlineParser().parse(r"\\*not italic\\*")
    [EscapedChar(char='*'), Text(content='not italic'), EscapedChar(char='*')]

    """

    def __init__(self, references: ReferenceTable | None = None, options: MarkdownParserOptions | None = None):
        self.references: ReferenceTable = references or {}
        self.options = options or MarkdownParserOptions()

    def parse(self, text: str) -> list[Node]:
        """Parse ``text`` into an inline node sequence."""
        self._text = text
        self._pos = 0
        self._items: list[_Item] = []
        self._buffer: list[str] = []
        self._brackets: list[_Bracket] = []

        length = len(text)
        while self._pos < length:
            match = _SPECIAL_RE.search(text, self._pos)
            if match is None:
                self._buffer.append(text[self._pos :])
                break
            if match.start() > self._pos:
                self._buffer.append(text[self._pos : match.start()])
                self._pos = match.start()
            if not self._handle_special(text[self._pos]):
                self._buffer.append(text[self._pos])
                self._pos += 1

        self._flush()
        return _resolve_emphasis(self._items)

    # ------------------------------------------------------------------
    # Scanner plumbing
    # ------------------------------------------------------------------

    def _flush(self) -> None:
        if self._buffer:
            self._items.append(Text("".join(self._buffer)))
            self._buffer = []

    def _emit(self, node: _Item) -> None:
        self._flush()
        self._items.append(node)

    def _char_before(self, pos: int) -> str:
        return self._text[pos - 1] if pos > 0 else "\n"

    def _char_at(self, pos: int) -> str:
        return self._text[pos] if pos < len(self._text) else "\n"

    def _handle_special(self, char: str) -> bool:
        """Try to consume a construct at the current position.

        Returns False when the character is literal text.
        """
        if char == "\\":
            return self._handle_backslash()
        if char == "`":
            return self._handle_code_span()
        if char in "*_":
            return self._handle_delimiter_run(char)
        if char == "~":
            return self.options.parse_strikethrough and self._handle_delimiter_run(char)
        if char == "[":
            return self._open_bracket(image=False)
        if char == "!":
            return self._char_at(self._pos + 1) == "[" and self._open_bracket(image=True)
        if char == "]":
            return self._close_bracket()
        if char == "<":
            return self._handle_angle_autolink()
        if char == "&":
            return self._handle_entity()
        if char == "\n":
            return self._handle_line_ending()
        if char == "@":
            return self.options.parse_mentions and self._handle_mention()
        if char == "#":
            return self.options.parse_issue_references and self._handle_issue_reference()
        if char == ":":
            return self.options.parse_emoji and self._handle_emoji()
        return self.options.parse_autolinks and self._handle_bare_url()

    # ------------------------------------------------------------------
    # Leaf constructs
    # ------------------------------------------------------------------

    def _handle_backslash(self) -> bool:
        nxt = self._char_at(self._pos + 1)
        if self._pos + 1 < len(self._text) and nxt in ASCII_PUNCTUATION:
            self._emit(EscapedChar(char=nxt))
            self._pos += 2
            return True
        if self._pos + 1 < len(self._text) and nxt == "\n":
            self._emit(HardBreak())
            self._pos += 2
            self._skip_leading_spaces()
            return True
        return False

    def _handle_code_span(self) -> bool:
        text = self._text
        start = self._pos
        run_end = start
        while run_end < len(text) and text[run_end] == "`":
            run_end += 1
        ticks = run_end - start

        search = run_end
        while True:
            close = text.find("`" * ticks, search)
            if close == -1:
                # No closing run of the same length: the backticks are literal
                self._buffer.append("`" * ticks)
                self._pos = run_end
                return True
            close_end = close
            while close_end < len(text) and text[close_end] == "`":
                close_end += 1
            if close_end - close == ticks:
                break
            search = close_end

        content = text[run_end:close].replace("\n", " ")
        if len(content) >= 2 and content[0] == " " and content[-1] == " " and content.strip(" "):
            content = content[1:-1]
        self._emit(Code(content=content))
        self._pos = close_end
        return True

    def _handle_entity(self) -> bool:
        match = _ENTITY_RE.match(self._text, self._pos)
        if not match:
            return False
        decoded = html.unescape(match.group(0))
        if decoded == match.group(0):
            return False
        self._buffer.append(decoded)
        self._pos = match.end()
        return True

    def _handle_line_ending(self) -> bool:
        pending = "".join(self._buffer)
        stripped = pending.rstrip(" ")
        hard = len(pending) - len(stripped) >= 2
        self._buffer = [stripped] if stripped else []
        if not pending and self._items and isinstance(self._items[-1], Text):
            # Trailing spaces already flushed before a delimiter or node
            previous = self._items[-1].content
            self._items[-1] = Text(previous.rstrip(" "))
        self._emit(HardBreak() if hard else SoftBreak())
        self._pos += 1
        self._skip_leading_spaces()
        return True

    def _skip_leading_spaces(self) -> None:
        while self._pos < len(self._text) and self._text[self._pos] in " \t":
            self._pos += 1

    def _handle_angle_autolink(self) -> bool:
        match = _URI_AUTOLINK_RE.match(self._text, self._pos)
        if match:
            self._emit(Autolink(url=match.group(1)))
            self._pos = match.end()
            return True
        match = _EMAIL_AUTOLINK_RE.match(self._text, self._pos)
        if match:
            self._emit(Autolink(url=f"mailto:{match.group(1)}"))
            self._pos = match.end()
            return True
        return False

    def _handle_bare_url(self) -> bool:
        if self._char_before(self._pos) not in _AUTOLINK_PRECEDERS:
            return False
        match = _BARE_URL_RE.match(self._text, self._pos)
        if not match:
            return False
        url = _trim_url(match.group(0))
        prefix_end = url.find("//") + 2 if "//" in url[:8] else 0
        host = re.split(r"[/?#]", url[prefix_end:], maxsplit=1)[0]
        if not host or not _DOMAIN_RE.fullmatch(host) or (prefix_end == 0 and "." not in host[4:]):
            return False
        self._emit(Autolink(url=url))
        self._pos += len(url)
        return True

    def _handle_mention(self) -> bool:
        before = self._char_before(self._pos)
        if before.isalnum() or before in "_@/.`":
            return False
        match = _MENTION_RE.match(self._text, self._pos + 1)
        if not match or len(match.group(0)) > MAX_MENTION_LENGTH:
            return False
        after = self._char_at(match.end())
        if after.isalnum() or after in "_@":
            return False
        self._emit(UserMention(handle=match.group(0)))
        self._pos = match.end()
        return True

    def _handle_issue_reference(self) -> bool:
        before = self._char_before(self._pos)
        if before.isalnum() or before in "_&":
            return False
        match = _ISSUE_RE.match(self._text, self._pos + 1)
        if not match:
            return False
        after = self._char_at(match.end())
        if after.isalnum() or after == "_":
            return False
        self._emit(IssueReference(number=int(match.group(0))))
        self._pos = match.end()
        return True

    def _handle_emoji(self) -> bool:
        if self._char_before(self._pos).isalnum():
            return False
        match = _EMOJI_RE.match(self._text, self._pos)
        if not match:
            return False
        self._emit(EmojiShortcode(name=match.group(1)))
        self._pos = match.end()
        return True

    # ------------------------------------------------------------------
    # Delimiter runs
    # ------------------------------------------------------------------

    def _handle_delimiter_run(self, char: str) -> bool:
        start = self._pos
        end = start
        while end < len(self._text) and self._text[end] == char:
            end += 1
        count = end - start
        if char == "~" and count > 2:
            self._buffer.append(char * count)
            self._pos = end
            return True

        before = self._char_before(start)
        after = self._char_at(end)
        before_space = before.isspace()
        after_space = after.isspace()
        before_punct = _is_punctuation(before)
        after_punct = _is_punctuation(after)

        left_flanking = not after_space and (not after_punct or before_space or before_punct)
        right_flanking = not before_space and (not before_punct or after_space or after_punct)

        if char == "_":
            can_open = left_flanking and (not right_flanking or before_punct)
            can_close = right_flanking and (not left_flanking or after_punct)
        else:
            can_open = left_flanking
            can_close = right_flanking

        self._emit(_Delimiter(char=char, count=count, length=count, can_open=can_open, can_close=can_close))
        self._pos = end
        return True

    # ------------------------------------------------------------------
    # Links and images
    # ------------------------------------------------------------------

    def _open_bracket(self, image: bool) -> bool:
        marker = "![" if image else "["
        self._flush()
        self._brackets.append(_Bracket(index=len(self._items), image=image, label_start=self._pos + len(marker)))
        self._items.append(Text(marker))
        self._pos += len(marker)
        return True

    def _close_bracket(self) -> bool:
        if not self._brackets:
            return False
        bracket = self._brackets.pop()
        if not bracket.active:
            return False

        label_end = self._pos
        target = self._parse_inline_target(label_end + 1)
        if target is None:
            target = self._parse_reference_target(bracket, label_end)
        if target is None:
            return False

        url, title, end = target
        self._flush()
        inner = self._items[bracket.index + 1 :]
        del self._items[bracket.index :]

        node: Node
        if bracket.image:
            node = Image(url=url, alt_text=self._text[bracket.label_start : label_end], title=title)
        else:
            node = Link(url=url, content=_demote_autolinks(_resolve_emphasis(inner)), title=title)
            for earlier in self._brackets:
                if not earlier.image:
                    earlier.active = False
        self._items.append(node)
        self._pos = end
        return True

    def _parse_inline_target(self, pos: int) -> tuple[str, Optional[str], int] | None:
        """Parse ``(destination "title")`` starting at ``pos``."""
        text = self._text
        if pos >= len(text) or text[pos] != "(":
            return None
        pos = skip_link_whitespace(text, pos + 1)

        destination, pos_after = parse_link_destination(text, pos)
        if destination is None:
            return None
        pos = pos_after

        title: Optional[str] = None
        after_ws = skip_link_whitespace(text, pos)
        if after_ws < len(text) and text[after_ws] in "\"'(" and after_ws > pos:
            parsed = parse_link_title(text, after_ws)
            if parsed is None:
                return None
            title, pos = parsed
            after_ws = skip_link_whitespace(text, pos)
        pos = after_ws
        if pos >= len(text) or text[pos] != ")":
            return None
        if title is not None:
            title = unescape_string(title) or None
        return unescape_string(destination), title, pos + 1

    def _parse_reference_target(self, bracket: _Bracket, label_end: int) -> tuple[str, Optional[str], int] | None:
        """Resolve full, collapsed or shortcut reference links."""
        text = self._text
        bracket_label = text[bracket.label_start : label_end]
        after = label_end + 1

        if after < len(text) and text[after] == "[":
            close = find_label_end(text, after + 1)
            if close is not None:
                label = text[after + 1 : close]
                key = normalize_label(label if label.strip() else bracket_label)
                if key in self.references:
                    url, title = self.references[key]
                    return url, title, close + 1
                return None

        key = normalize_label(bracket_label)
        if key and key in self.references:
            url, title = self.references[key]
            return url, title, after
        return None


def skip_link_whitespace(text: str, pos: int) -> int:
    newlines = 0
    while pos < len(text) and text[pos] in " \t\n":
        if text[pos] == "\n":
            newlines += 1
            if newlines > 1:
                break
        pos += 1
    return pos


def parse_link_destination(text: str, pos: int) -> tuple[Optional[str], int]:
    """Parse a link destination; returns (None, pos) on failure."""
    if pos < len(text) and text[pos] == "<":
        i = pos + 1
        while i < len(text):
            char = text[i]
            if char == "\\" and i + 1 < len(text):
                i += 2
                continue
            if char in "\n<":
                return None, pos
            if char == ">":
                return text[pos + 1 : i], i + 1
            i += 1
        return None, pos

    depth = 0
    i = pos
    while i < len(text):
        char = text[i]
        if char == "\\" and i + 1 < len(text) and text[i + 1] in ASCII_PUNCTUATION:
            i += 2
            continue
        if char.isspace() or ord(char) < 0x20:
            break
        if char == "(":
            depth += 1
        elif char == ")":
            if depth == 0:
                break
            depth -= 1
        i += 1
    if depth != 0:
        return None, pos
    return text[pos:i], i


def parse_link_title(text: str, pos: int) -> tuple[str, int] | None:
    opening = text[pos]
    closing = ")" if opening == "(" else opening
    i = pos + 1
    while i < len(text):
        char = text[i]
        if char == "\\" and i + 1 < len(text):
            i += 2
            continue
        if char == closing:
            return text[pos + 1 : i], i + 1
        if opening == "(" and char == "(":
            return None
        i += 1
    return None


def find_label_end(text: str, pos: int) -> int | None:
    """Return the index of the ``]`` closing a reference label starting at ``pos``."""
    i = pos
    while i < len(text) and i - pos <= 999:
        char = text[i]
        if char == "\\" and i + 1 < len(text):
            i += 2
            continue
        if char == "[":
            return None
        if char == "]":
            return i
        i += 1
    return None


def _trim_url(url: str) -> str:
    """Drop trailing punctuation that belongs to the surrounding sentence."""
    while url:
        last = url[-1]
        if last in _URL_TRAILING_PUNCTUATION:
            url = url[:-1]
        elif last == ")" and url.count(")") > url.count("("):
            url = url[:-1]
        else:
            break
    return url


def _demote_autolinks(nodes: list[Node]) -> list[Node]:
    """Turn autolinks inside a link label back into text, links cannot nest."""
    demoted: list[Node] = []
    for node in nodes:
        if isinstance(node, Autolink):
            demoted.append(Text(node.url.removeprefix("mailto:")))
        elif isinstance(node, (Emphasis, Strong, Strikethrough)):
            demoted.append(type(node)(content=_demote_autolinks(node.content)))
        else:
            demoted.append(node)
    return merge_adjacent_text(demoted)
