#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconv/options/__init__.py
"""Frozen dataclass options for every parser and renderer."""

from mdconv.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from mdconv.options.html import HtmlRendererOptions
from mdconv.options.latex import LatexRendererOptions
from mdconv.options.markdown import MarkdownParserOptions, MarkdownRendererOptions
from mdconv.options.native import NativeParserOptions, NativeRendererOptions
from mdconv.options.plaintext import PlainTextRendererOptions
from mdconv.options.typst import TypstRendererOptions

__all__ = [
    "CloneFrozenMixin",
    "BaseParserOptions",
    "BaseRendererOptions",
    "MarkdownParserOptions",
    "MarkdownRendererOptions",
    "NativeParserOptions",
    "NativeRendererOptions",
    "HtmlRendererOptions",
    "LatexRendererOptions",
    "TypstRendererOptions",
    "PlainTextRendererOptions",
]
