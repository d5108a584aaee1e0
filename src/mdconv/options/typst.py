#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconv/options/typst.py
"""Configuration options for Typst rendering."""

from __future__ import annotations

from dataclasses import dataclass, field

from mdconv.constants import DEFAULT_TYPST_INCLUDE_METADATA
from mdconv.options.base import BaseRendererOptions


@dataclass(frozen=True)
class TypstRendererOptions(BaseRendererOptions):
    """Configuration options for AST-to-Typst rendering.

    Parameters
    ----------
    include_metadata : bool, default True
        Emit a ``#set document(...)`` rule from the title/author metadata

    """

    include_metadata: bool = field(
        default=DEFAULT_TYPST_INCLUDE_METADATA,
        metadata={"help": "Emit document title and author settings", "importance": "core"},
    )
