#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconv/renderers/native.py
"""Pandoc JSON rendering from Document.

This module provides the NativeRenderer class which serializes documents to
the Pandoc JSON interchange format, readable by ``pandoc -f json`` and by
:class:`mdconv.parsers.native.NativeParser`.

The encoding itself lives in :mod:`mdconv.ast.serialization`.
"""

from __future__ import annotations

from mdconv.ast import Document
from mdconv.ast.serialization import ast_to_json
from mdconv.options.native import NativeRendererOptions
from mdconv.renderers.base import BaseRenderer


class NativeRenderer(BaseRenderer):
    """Render Document nodes to Pandoc JSON.

    Parameters
    ----------
    options : NativeRendererOptions or None, default = None
        JSON rendering options

    Examples
    --------
        >>> from mdconv.ast import Document, Paragraph, Text
        >>> doc = Document(children=[Paragraph(content=[Text("Hi")])])
        >>> NativeRenderer().render_to_string(doc)
        '{"pandoc-api-version": [1, 23, 1], "meta": {}, "blocks": [{"t": "Para", "c": [{"t": "Str", "c": "Hi"}]}]}\\n'

    """

    def __init__(self, options: NativeRendererOptions | None = None):
        """Initialize the Pandoc JSON renderer with options."""
        BaseRenderer._validate_options_type(options, NativeRendererOptions, "native")
        options = options or NativeRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: NativeRendererOptions = options

    def render_to_string(self, doc: Document) -> str:
        """Render a Document to a Pandoc JSON string.

        Parameters
        ----------
        doc : Document
            The document node to render

        Returns
        -------
        str
            JSON text followed by a newline

        """
        return ast_to_json(doc, indent=self.options.indent, ensure_ascii=self.options.ensure_ascii) + "\n"
