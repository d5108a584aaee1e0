#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconv/converter_registry.py
"""Converter registry for format lookup.

This module implements the registry that maps format identifiers to readers
and writers:

- Format identifiers and aliases resolve to one canonical format name
- Reader and writer classes are loaded lazily from their metadata
- Formats can be detected from a file extension
- Built-in modules are discovered by scanning the ``parsers`` and
  ``renderers`` packages for a ``CONVERTER_METADATA`` attribute
"""

from __future__ import annotations

import importlib
import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Union

from mdconv.converter_metadata import ConverterMetadata
from mdconv.exceptions import FormatError, UnrecognizedFormatError

logger = logging.getLogger(__name__)


def _load_class(class_spec: Union[str, type, None], class_type_name: str) -> Optional[type]:
    """Load a reader, writer, or options class from its specification.

    Parameters
    ----------
    class_spec : Union[str, type, None]
        Either a class or a fully qualified dotted name
    class_type_name : str
        Type name for log messages (e.g., "options", "parser", "renderer")

    Returns
    -------
    Optional[type]
        The loaded class, or None if it cannot be imported

    """
    if class_spec is None or isinstance(class_spec, type):
        return class_spec

    module_path, class_name = class_spec.rsplit(".", 1)
    try:
        module = importlib.import_module(module_path)
        return getattr(module, class_name)
    except (ImportError, AttributeError) as e:
        logger.warning(f"Could not load {class_type_name} class '{class_spec}': {e}")
        return None


class ConverterRegistry:
    """Registry for document readers and writers.

    The registry is a singleton: every ``ConverterRegistry()`` call returns
    the same instance, also available as the module level ``registry``.
    Built-in converters are discovered on first use.

    Attributes
    ----------
    _instance : ConverterRegistry or None
        Singleton instance of the registry
    _converters : dict
        Registered converters by canonical format name, each a
        priority-sorted list of ConverterMetadata objects
    _initialized : bool
        Whether auto-discovery has run

    """

    _instance: Optional[ConverterRegistry] = None
    _converters: Dict[str, List[ConverterMetadata]] = {}
    _initialized: bool = False

    def __new__(cls) -> ConverterRegistry:
        """Create or return singleton instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._converters = {}
            cls._instance._initialized = False
        return cls._instance

    def register(self, metadata: ConverterMetadata) -> None:
        """Register a converter with its metadata.

        Several converters may share a format name; the one with the highest
        priority is used first.
        """
        converters = self._converters.setdefault(metadata.format_name, [])
        converters.append(metadata)
        converters.sort(key=lambda m: m.priority, reverse=True)
        logger.debug(f"Registered converter: {metadata.format_name} (priority={metadata.priority})")

    def unregister(self, format_name: str) -> bool:
        """Unregister every converter for a format.

        Returns
        -------
        bool
            True if unregistered, False if not found

        """
        if format_name in self._converters:
            del self._converters[format_name]
            logger.debug(f"Unregistered converter: {format_name}")
            return True
        return False

    def list_formats(self) -> List[str]:
        """List canonical names of all registered formats, sorted."""
        self.auto_discover()
        return sorted(self._converters)

    def list_parser_formats(self) -> List[str]:
        """List formats that can be read."""
        return [name for name in self.list_formats() if any(m.can_parse for m in self._converters[name])]

    def list_renderer_formats(self) -> List[str]:
        """List formats that can be written."""
        return [name for name in self.list_formats() if any(m.can_render for m in self._converters[name])]

    def get_format_info(self, format_name: str) -> Optional[List[ConverterMetadata]]:
        """Get the metadata list for a format name or alias, or None."""
        self.auto_discover()
        try:
            return self._converters[self.resolve_format_name(format_name)]
        except UnrecognizedFormatError:
            return None

    def resolve_format_name(self, format_name: str, role: str = "format") -> str:
        """Resolve a format identifier or alias to its canonical name.

        Parameters
        ----------
        format_name : str
            Identifier as supplied by the caller; matching ignores case
        role : str, default "format"
            "input", "output" or "format", used in the error message

        Returns
        -------
        str
            Canonical format name

        Raises
        ------
        UnrecognizedFormatError
            If no registered format uses this identifier

        Examples
        --------
        >>> registry.resolve_format_name("md")
        'gfm'

        """
        self.auto_discover()
        if isinstance(format_name, str):
            for name, converters in self._converters.items():
                if any(metadata.matches_name(format_name) for metadata in converters):
                    return name
        raise UnrecognizedFormatError(format_name, supported_formats=self._all_identifiers(), role=role)

    def _all_identifiers(self) -> List[str]:
        identifiers: List[str] = []
        for name in sorted(self._converters):
            for metadata in self._converters[name]:
                identifiers.extend(i for i in metadata.names if i not in identifiers)
        return identifiers

    def get_parser(self, format_name: str) -> type:
        """Get the reader class for a format.

        Parameters
        ----------
        format_name : str
            Format name or alias

        Returns
        -------
        type
            Parser class (subclass of BaseParser)

        Raises
        ------
        UnrecognizedFormatError
            If the identifier names no format, or the format cannot be read

        """
        name = self.resolve_format_name(format_name, role="input")
        for metadata in self._converters[name]:
            parser_class = _load_class(metadata.parser_class, "parser")
            if parser_class is not None:
                logger.debug(f"Selected parser for '{name}': {metadata.get_parser_display_name()}")
                return parser_class
        raise UnrecognizedFormatError(format_name, supported_formats=self.list_parser_formats(), role="input")

    def get_renderer(self, format_name: str) -> type:
        """Get the writer class for a format.

        Parameters
        ----------
        format_name : str
            Format name or alias

        Returns
        -------
        type
            Renderer class (subclass of BaseRenderer)

        Raises
        ------
        UnrecognizedFormatError
            If the identifier names no format, or the format cannot be written

        """
        name = self.resolve_format_name(format_name, role="output")
        for metadata in self._converters[name]:
            renderer_class = _load_class(metadata.renderer_class, "renderer")
            if renderer_class is not None:
                logger.debug(f"Selected renderer for '{name}': {metadata.get_renderer_display_name()}")
                return renderer_class
        raise UnrecognizedFormatError(format_name, supported_formats=self.list_renderer_formats(), role="output")

    def get_parser_options_class(self, format_name: str) -> Optional[type]:
        """Get the parser options class for a format, or None if it has none."""
        name = self.resolve_format_name(format_name, role="input")
        for metadata in self._converters[name]:
            options_class = _load_class(metadata.parser_options_class, "options")
            if options_class is not None:
                return options_class
        return None

    def get_renderer_options_class(self, format_name: str) -> Optional[type]:
        """Get the renderer options class for a format, or None if it has none."""
        name = self.resolve_format_name(format_name, role="output")
        for metadata in self._converters[name]:
            options_class = _load_class(metadata.renderer_options_class, "options")
            if options_class is not None:
                return options_class
        return None

    def detect_format(self, path: Union[str, Path, None]) -> Optional[str]:
        """Detect a readable format from a file name's extension.

        Parameters
        ----------
        path : str, Path or None
            File name to inspect

        Returns
        -------
        str or None
            Canonical format name, or None when no reader claims the extension

        Examples
        --------
        >>> registry.detect_format("notes.markdown")
        'gfm'

        """
        if not path:
            return None
        filename = os.fspath(path)
        for name in self.list_parser_formats():
            if any(metadata.matches_extension(filename) for metadata in self._converters[name]):
                logger.debug(f"Detected format '{name}' from extension of {filename!r}")
                return name
        return None

    def auto_discover(self) -> None:
        """Discover and register the built-in readers and writers.

        Scans ``mdconv.parsers`` and ``mdconv.renderers`` for modules that
        define ``CONVERTER_METADATA``. Runs once; later calls are no-ops.
        """
        if self._initialized:
            return
        self._initialized = True

        for package_name in ("parsers", "renderers"):
            for module_name in self._discover_converter_modules(package_name):
                module_path = f"mdconv.{package_name}.{module_name}"
                try:
                    module = importlib.import_module(module_path)
                except ImportError as e:
                    logger.warning(f"Could not load {module_path}: {e}")
                    continue
                metadata = getattr(module, "CONVERTER_METADATA", None)
                if isinstance(metadata, ConverterMetadata):
                    self.register(metadata)

    @staticmethod
    def _discover_converter_modules(package_name: str) -> List[str]:
        """List public module names in ``mdconv.<package_name>``."""
        package = importlib.import_module(f"mdconv.{package_name}")
        if package.__file__ is None:
            raise FormatError(f"Package mdconv.{package_name} has no __file__ attribute")

        package_path = Path(package.__file__).parent
        modules = sorted(
            path.stem for path in package_path.glob("*.py") if path.stem != "__init__" and not path.stem.startswith("_")
        )
        logger.debug(f"Discovered {package_name} modules: {modules}")
        return modules


# Global registry instance
registry = ConverterRegistry()
