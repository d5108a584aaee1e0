#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconv/renderers/__init__.py
"""Document writers.

Every writer turns a :class:`~mdconv.ast.Document` into text. Writers for
formats that cannot be read declare their own CONVERTER_METADATA; the GFM
and Pandoc JSON writers are registered by their readers' metadata.
"""

from mdconv.renderers.base import BaseRenderer, InlineContentMixin
from mdconv.renderers.html import HtmlRenderer
from mdconv.renderers.latex import LatexRenderer
from mdconv.renderers.markdown import MarkdownRenderer
from mdconv.renderers.native import NativeRenderer
from mdconv.renderers.plaintext import PlainTextRenderer
from mdconv.renderers.typst import TypstRenderer

__all__ = [
    "BaseRenderer",
    "HtmlRenderer",
    "InlineContentMixin",
    "LatexRenderer",
    "MarkdownRenderer",
    "NativeRenderer",
    "PlainTextRenderer",
    "TypstRenderer",
]
