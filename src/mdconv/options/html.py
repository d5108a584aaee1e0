#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconv/options/html.py
"""Configuration options for HTML rendering."""

from __future__ import annotations

from dataclasses import dataclass, field

from mdconv.constants import DEFAULT_HTML_CLASS_PREFIX, DEFAULT_HTML_STANDALONE, DEFAULT_HTML_TITLE
from mdconv.options.base import BaseRendererOptions


@dataclass(frozen=True)
class HtmlRendererOptions(BaseRendererOptions):
    """Configuration options for AST-to-HTML rendering.

    Parameters
    ----------
    standalone : bool, default False
        Wrap the fragment in a complete HTML5 document
    title : str, default "Untitled"
        Document title used when standalone and the metadata has no title
    class_prefix : str, default ""
        Prefix added to the CSS classes mdconv emits (``emoji``,
        ``user-mention``, ``issue-reference``, ``task-list-item``)

    """

    standalone: bool = field(
        default=DEFAULT_HTML_STANDALONE,
        metadata={"help": "Generate a complete HTML document", "importance": "core"},
    )
    title: str = field(
        default=DEFAULT_HTML_TITLE,
        metadata={"help": "Fallback document title for standalone output", "importance": "core"},
    )
    class_prefix: str = field(
        default=DEFAULT_HTML_CLASS_PREFIX,
        metadata={"help": "Prefix for generated CSS class names", "importance": "advanced"},
    )
