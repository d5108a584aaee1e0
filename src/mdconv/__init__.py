#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconv/__init__.py
"""mdconv - GitHub-flavored markdown conversion through a neutral document model.

mdconv reads GitHub-flavored markdown (or Pandoc JSON) into a typed
document tree and writes that tree back out as GFM, HTML, LaTeX, Typst,
plain text or Pandoc JSON. Malformed markup never fails a conversion: it
degrades to literal text the way GitHub renders it.

Supported Formats
-----------------
- **Readers**: gfm (markdown, md), native (json)
- **Writers**: gfm, html, latex (tex), typst, plain (plaintext, txt), native

Examples
--------
Convert a string:

    >>> from mdconv import convert
    >>> convert("Hello **world**", target_format="html")
    '<p>Hello <strong>world</strong></p>\\n'

Work with the document tree:

    >>> from mdconv import to_ast, from_ast
    >>> doc = to_ast("- [x] done")
    >>> from_ast(doc, "gfm")
    '- [x] done\\n'

"""

from mdconv.api import convert, from_ast, to_ast
from mdconv.ast import Document
from mdconv.converter_registry import registry
from mdconv.exceptions import (
    FormatError,
    InvalidOptionsError,
    MdConvError,
    ParsingError,
    RenderingError,
    StructuralParseError,
    UnreadableInputError,
    UnrecognizedFormatError,
    ValidationError,
)
from mdconv.options import (
    BaseParserOptions,
    BaseRendererOptions,
    HtmlRendererOptions,
    LatexRendererOptions,
    MarkdownParserOptions,
    MarkdownRendererOptions,
    NativeParserOptions,
    NativeRendererOptions,
    PlainTextRendererOptions,
    TypstRendererOptions,
)

__version__ = "0.3.0"

__all__ = [
    "__version__",
    "to_ast",
    "from_ast",
    "convert",
    # Registry system
    "registry",
    # Document model
    "Document",
    # Options
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
    # Exceptions
    "MdConvError",
    "ValidationError",
    "InvalidOptionsError",
    "UnreadableInputError",
    "FormatError",
    "UnrecognizedFormatError",
    "ParsingError",
    "StructuralParseError",
    "RenderingError",
]
