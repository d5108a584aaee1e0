#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconv/options/native.py
"""Configuration options for the Pandoc JSON (native) reader and writer."""

from __future__ import annotations

from dataclasses import dataclass, field

from mdconv.constants import DEFAULT_NATIVE_ENSURE_ASCII, DEFAULT_NATIVE_INDENT, DEFAULT_NATIVE_STRICT_MODE
from mdconv.options.base import BaseParserOptions, BaseRendererOptions


@dataclass(frozen=True)
class NativeParserOptions(BaseParserOptions):
    """Configuration options for reading Pandoc JSON.

    Parameters
    ----------
    strict_mode : bool, default False
        Raise on Pandoc constructs with no GFM equivalent instead of
        degrading them with a logged warning

    """

    strict_mode: bool = field(
        default=DEFAULT_NATIVE_STRICT_MODE,
        metadata={"help": "Reject Pandoc constructs with no GFM equivalent", "importance": "core"},
    )


@dataclass(frozen=True)
class NativeRendererOptions(BaseRendererOptions):
    """Configuration options for writing Pandoc JSON.

    Parameters
    ----------
    indent : int or None, default None
        JSON indentation, None for compact output
    ensure_ascii : bool, default False
        Escape non-ASCII characters

    """

    indent: int | None = field(
        default=DEFAULT_NATIVE_INDENT,
        metadata={"help": "JSON indentation (omit for compact output)", "type": int, "importance": "core"},
    )
    ensure_ascii: bool = field(
        default=DEFAULT_NATIVE_ENSURE_ASCII,
        metadata={"help": "Escape non-ASCII characters in JSON output", "importance": "advanced"},
    )
