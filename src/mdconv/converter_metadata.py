#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconv/converter_metadata.py
"""Converter metadata definitions for the mdconv library.

Every reader or writer module exposes a module level ``CONVERTER_METADATA``
describing the format it handles. The registry collects these descriptions
and resolves class references lazily, so importing the registry does not
import every renderer.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional, Union


@dataclass
class ConverterMetadata:
    """Metadata describing one document format.

    Parameters
    ----------
    format_name : str
        Canonical identifier for the format (e.g., "gfm", "native")
    aliases : list[str]
        Alternative identifiers accepted on the command line and in the API
        (e.g., "markdown" and "md" for "gfm")
    extensions : list[str]
        File extensions used to detect the format from a path
    parser_class : Union[str, type, None], optional
        Reader class, given either directly or as a fully qualified dotted
        name. ``None`` for write-only formats.
    renderer_class : Union[str, type, None], optional
        Writer class, given either directly or as a fully qualified dotted
        name. ``None`` for read-only formats.
    parser_options_class : Union[str, type, None]
        Options dataclass accepted by the reader
    renderer_options_class : Union[str, type, None]
        Options dataclass accepted by the writer
    description : str
        Human-readable description shown by ``--list-formats``
    priority : int
        Priority when several converters register the same format name
        (higher wins)

    """

    format_name: str
    aliases: list[str] = field(default_factory=list)
    extensions: list[str] = field(default_factory=list)
    parser_class: Optional[Union[str, type]] = None
    renderer_class: Optional[Union[str, type]] = None
    parser_options_class: Optional[Union[str, type]] = None
    renderer_options_class: Optional[Union[str, type]] = None
    description: str = ""
    priority: int = 0

    @property
    def names(self) -> list[str]:
        """All identifiers resolving to this format, canonical name first."""
        return [self.format_name, *self.aliases]

    def matches_name(self, identifier: str) -> bool:
        """Check whether ``identifier`` names this format (case-insensitive).

        Parameters
        ----------
        identifier : str
            Format identifier supplied by a caller

        Returns
        -------
        bool
            True if the identifier is the format name or one of its aliases

        """
        return identifier.strip().lower() in self.names

    def matches_extension(self, filename: str) -> bool:
        """Check if a filename carries one of this format's extensions."""
        if not filename:
            return False

        _, ext = os.path.splitext(filename.lower())
        return ext in self.extensions

    @property
    def can_parse(self) -> bool:
        return self.parser_class is not None

    @property
    def can_render(self) -> bool:
        return self.renderer_class is not None

    @staticmethod
    def _display_name(class_spec: Union[str, type, None]) -> str:
        if class_spec is None:
            return "N/A"
        if isinstance(class_spec, type):
            return f"{class_spec.__module__}.{class_spec.__qualname__}"
        return class_spec

    def get_parser_display_name(self) -> str:
        """Get a dotted display name for the reader class."""
        return self._display_name(self.parser_class)

    def get_renderer_display_name(self) -> str:
        """Get a dotted display name for the writer class."""
        return self._display_name(self.renderer_class)

    def get_converter_display_string(self) -> str:
        """Get combined display string in the form ``Parser: X | Renderer: Y``."""
        return f"Parser: {self.get_parser_display_name()} | Renderer: {self.get_renderer_display_name()}"
