#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconv/options/plaintext.py
"""Configuration options for plain text rendering."""

from __future__ import annotations

from dataclasses import dataclass, field

from mdconv.constants import (
    DEFAULT_PLAINTEXT_BULLET,
    DEFAULT_PLAINTEXT_CELL_SEPARATOR,
    DEFAULT_PLAINTEXT_SHOW_LINK_URLS,
)
from mdconv.options.base import BaseRendererOptions


@dataclass(frozen=True)
class PlainTextRendererOptions(BaseRendererOptions):
    """Configuration options for AST-to-plain-text rendering.

    Parameters
    ----------
    bullet : str, default "*"
        Marker for bullet list items
    table_cell_separator : str, default " | "
        Separator placed between table cells
    show_link_urls : bool, default True
        Append ``<url>`` after link labels that differ from the url

    """

    bullet: str = field(
        default=DEFAULT_PLAINTEXT_BULLET,
        metadata={"help": "Bullet list marker", "importance": "core"},
    )
    table_cell_separator: str = field(
        default=DEFAULT_PLAINTEXT_CELL_SEPARATOR,
        metadata={"help": "Separator between table cells", "importance": "core"},
    )
    show_link_urls: bool = field(
        default=DEFAULT_PLAINTEXT_SHOW_LINK_URLS,
        metadata={"help": "Show link targets after link text", "importance": "core"},
    )
