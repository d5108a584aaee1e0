#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconv/utils/escape.py
"""Format-specific text escaping utilities.

This module provides escape functions for the markup formats mdconv writes,
so that literal text never turns into formatting in rendered output.

"""

from __future__ import annotations

import html
import re

_MARKDOWN_SPECIAL = frozenset("\\`*_[]<~")
_MARKDOWN_LINE_START_RE = re.compile(r"^(#{1,6}|>|\+|-+|=+|[0-9]+[.)])(?=\s|$)")
# A mention, issue reference or emoji shortcode the reader would recognize
_MARKDOWN_SHORTHAND_RE = re.compile(
    r"(?<![A-Za-z0-9])(?:@(?=[A-Za-z0-9])|#(?=[1-9])|:(?=[A-Za-z0-9_+\-]*[A-Za-z0-9][A-Za-z0-9_+\-]*:))"
)

LATEX_SPECIAL_CHARS = {
    "\\": r"\textbackslash{}",
    "&": r"\&",
    "%": r"\%",
    "$": r"\$",
    "#": r"\#",
    "_": r"\_",
    "{": r"\{",
    "}": r"\}",
    "~": r"\textasciitilde{}",
    "^": r"\^{}",
}

_TYPST_SPECIAL = frozenset("\\#*_`$<>@[]~")
_TYPST_LINE_START_RE = re.compile(r"^([=+\-]|[0-9]+\.)(?=\s|$)")


def escape_markdown(text: str, context: str = "text") -> str:
    r"""Escape GFM special characters in literal text.

    Parameters
    ----------
    text : str
        Text to escape
    context : {'text', 'line_start'}, default = 'text'
        ``line_start`` additionally escapes a leading block marker (``#``,
        ``>``, list markers) that would otherwise start a new block

    Returns
    -------
    str
        Escaped text

    Examples
    --------
        >>> escape_markdown("Text with [brackets] and *stars*")
        'Text with \\[brackets\\] and \\*stars\\*'
        >>> escape_markdown("# not a heading", "line_start")
        '\\# not a heading'
        >>> escape_markdown("ping @bob about #12")
        'ping \\@bob about \\#12'

    """
    if not text:
        return text

    result = "".join("\\" + char if char in _MARKDOWN_SPECIAL else char for char in text)
    result = _MARKDOWN_SHORTHAND_RE.sub(lambda m: "\\" + m.group(0), result)
    if context == "line_start":
        result = _MARKDOWN_LINE_START_RE.sub(lambda m: _escape_marker(m.group(1)), result)
    return result


def _escape_marker(marker: str) -> str:
    # "1." becomes "1\." and "#" becomes "\#"
    if marker[-1] in ".)":
        return marker[:-1] + "\\" + marker[-1]
    return "\\" + marker


def longest_run(text: str, char: str) -> int:
    """Return the length of the longest run of ``char`` in ``text``.

    Examples
    --------
        >>> longest_run("a ``b`` ```c", "`")
        3

    """
    longest = current = 0
    for c in text:
        if c == char:
            current += 1
            longest = max(longest, current)
        else:
            current = 0
    return longest


def escape_inline_code(code: str, delimiter: str = "`") -> tuple[str, str]:
    """Pad inline code and pick a delimiter longer than any run it contains.

    Parameters
    ----------
    code : str
        Code content
    delimiter : str, default = '`'
        Delimiter character

    Returns
    -------
    tuple[str, str]
        (code_to_emit, delimiter_to_use)

    Examples
    --------
        >>> escape_inline_code("simple code")
        ('simple code', '`')
        >>> escape_inline_code("code with ` backtick")
        ('code with ` backtick', '``')
        >>> escape_inline_code("`tick")
        (' `tick ', '``')

    """
    final_delimiter = delimiter * (longest_run(code, delimiter) + 1)

    # A leading or trailing delimiter character, or a space at both ends,
    # would be misread unless padded with one space on each side
    if code.startswith(delimiter) or code.endswith(delimiter):
        code = f" {code} "
    elif len(code) > 1 and code.startswith(" ") and code.endswith(" ") and code.strip():
        code = f" {code} "
    return code, final_delimiter


def escape_html(text: str, quote: bool = True) -> str:
    """Escape HTML special characters to entities.

    Examples
    --------
        >>> escape_html("<b>&</b>")
        '&lt;b&gt;&amp;&lt;/b&gt;'

    """
    if not text:
        return text
    return html.escape(text, quote=quote)


def escape_latex(text: str) -> str:
    r"""Escape special LaTeX characters.

    Examples
    --------
        >>> escape_latex("50% of $10 & ~more")
        '50\\% of \\$10 \\& \\textasciitilde{}more'

    """
    if not text:
        return text
    return "".join(LATEX_SPECIAL_CHARS.get(char, char) for char in text)


def escape_typst(text: str, context: str = "text") -> str:
    r"""Escape Typst markup characters with a backslash.

    Parameters
    ----------
    text : str
        Text to escape
    context : {'text', 'line_start', 'string'}, default = 'text'
        ``line_start`` also escapes a leading heading or list marker;
        ``string`` escapes for use inside a double-quoted Typst string

    Examples
    --------
        >>> escape_typst("a*b #c")
        'a\\*b \\#c'
        >>> escape_typst('say "hi"', "string")
        'say \\"hi\\"'

    """
    if not text:
        return text
    if context == "string":
        return text.replace("\\", "\\\\").replace('"', '\\"')

    result = "".join("\\" + char if char in _TYPST_SPECIAL else char for char in text)
    # Line comment marker; "/*" is already broken up by the escaped star
    result = result.replace("//", "\\/\\/")
    if context == "line_start":
        result = _TYPST_LINE_START_RE.sub(lambda m: _escape_marker(m.group(1)), result)
    return result


__all__ = [
    "LATEX_SPECIAL_CHARS",
    "escape_html",
    "escape_inline_code",
    "escape_latex",
    "escape_markdown",
    "escape_typst",
    "longest_run",
]
