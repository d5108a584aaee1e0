#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconv/parsers/__init__.py
"""Document readers.

Each reader module exposes a CONVERTER_METADATA object that the registry
picks up during auto-discovery; adding a reader only requires adding a
module to this package.
"""

from mdconv.parsers.base import BaseParser
from mdconv.parsers.inline import InlineParser
from mdconv.parsers.markdown import GfmParser, markdown_to_ast
from mdconv.parsers.native import NativeParser

__all__ = ["BaseParser", "GfmParser", "InlineParser", "NativeParser", "markdown_to_ast"]
