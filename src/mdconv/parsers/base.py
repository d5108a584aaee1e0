#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconv/parsers/base.py
"""Base classes for document parsers.

This module defines the abstract base class that all readers inherit from.
Readers receive the complete, already-acquired input text; acquiring it from
a path or stream is the job of :mod:`mdconv.utils.io_utils`.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Union

from mdconv.ast import Document
from mdconv.exceptions import InvalidOptionsError, StructuralParseError
from mdconv.options.base import BaseParserOptions

logger = logging.getLogger(__name__)


class BaseParser(ABC):
    """Abstract base class for all document parsers.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Format-specific parsing options

    Examples
    --------
    Creating a custom parser:

        >>> from mdconv.parsers.base import BaseParser
        >>> from mdconv.ast import Document
        >>>
        >>> class EmptyParser(BaseParser):
        ...     def parse(self, input_data):
        ...         return Document(children=[])

    """

    def __init__(self, options: BaseParserOptions | None = None):
        """Initialize the parser with optional configuration."""
        self.options: BaseParserOptions | None = options

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Validate that options are of the correct type for this parser.

        Parameters
        ----------
        options : BaseParserOptions or None
            The options object to validate
        expected_type : type
            The expected options class type
        parser_name : str
            Name of the parser (for error messages)

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @staticmethod
    def _coerce_text(input_data: Union[str, bytes]) -> str:
        """Return the input as text, decoding UTF-8 bytes.

        Raises
        ------
        StructuralParseError
            If the input is neither text nor UTF-8 encoded bytes

        """
        if isinstance(input_data, str):
            return input_data
        if isinstance(input_data, (bytes, bytearray)):
            try:
                return bytes(input_data).decode("utf-8-sig")
            except UnicodeDecodeError as e:
                raise StructuralParseError(
                    f"Input is not valid UTF-8 text: {e}", parsing_stage="decoding", original_error=e
                ) from e
        raise StructuralParseError(
            f"Expected text input, got {type(input_data).__name__}", parsing_stage="decoding"
        )

    @abstractmethod
    def parse(self, input_data: Union[str, bytes]) -> Document:
        """Parse the complete input into an AST.

        Parameters
        ----------
        input_data : str or bytes
            The whole input document. Bytes are decoded as UTF-8.

        Returns
        -------
        Document
            AST Document node representing the parsed document structure

        Raises
        ------
        StructuralParseError
            If the input defeats every fallback rule

        """
        raise NotImplementedError
