#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconv/parsers/native.py
"""Pandoc JSON to AST parser.

Reads documents in the Pandoc JSON interchange format (API version 1.23)
and rebuilds the mdconv AST. Pandoc constructs with no GFM counterpart are
degraded with a logged warning, or rejected when ``strict_mode`` is set.
"""

from __future__ import annotations

import logging
from typing import Union

from mdconv.ast import Document, json_to_ast, validate_ast
from mdconv.converter_metadata import ConverterMetadata
from mdconv.exceptions import StructuralParseError
from mdconv.options.native import NativeParserOptions
from mdconv.parsers.base import BaseParser

logger = logging.getLogger(__name__)


class NativeParser(BaseParser):
    """Convert Pandoc JSON to the AST.

    Parameters
    ----------
    options : NativeParserOptions or None, default = None
        Parser configuration options

    """

    def __init__(self, options: NativeParserOptions | None = None):
        BaseParser._validate_options_type(options, NativeParserOptions, "native")
        options = options or NativeParserOptions()
        super().__init__(options)
        self.options: NativeParserOptions = options

    def parse(self, input_data: Union[str, bytes]) -> Document:
        """Parse Pandoc JSON into an AST Document.

        Parameters
        ----------
        input_data : str or bytes
            Complete JSON document

        Returns
        -------
        Document
            AST document node

        Raises
        ------
        StructuralParseError
            If the input is not JSON, is not shaped like a Pandoc document,
            or (in strict mode) contains constructs with no equivalent

        """
        text = self._coerce_text(input_data)
        try:
            doc = json_to_ast(text, strict_mode=self.options.strict_mode)
        except (ValueError, TypeError, KeyError, IndexError) as e:
            raise StructuralParseError(
                f"Invalid Pandoc JSON document: {e}", parsing_stage="json_decoding", original_error=e
            ) from e

        errors = validate_ast(doc, strict=False)
        if errors:
            raise StructuralParseError(
                f"Pandoc JSON produced an invalid document: {errors[0]}", parsing_stage="validation"
            )

        logger.debug("Decoded %d top-level blocks from Pandoc JSON", len(doc.children))
        return doc


# Converter metadata for registry registration
CONVERTER_METADATA = ConverterMetadata(
    format_name="native",
    aliases=["json"],
    extensions=[".json"],
    parser_class=NativeParser,
    renderer_class="mdconv.renderers.native.NativeRenderer",
    parser_options_class=NativeParserOptions,
    renderer_options_class="mdconv.options.native.NativeRendererOptions",
    description="Pandoc JSON interchange format (API 1.23)",
)
