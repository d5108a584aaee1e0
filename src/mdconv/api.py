#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconv/api.py
"""Programmatic entry points for mdconv.

Three functions cover the conversion pipeline:

- :func:`to_ast` reads a source and returns its :class:`~mdconv.ast.Document`
- :func:`from_ast` renders a Document to a target format
- :func:`convert` does both in one call

Format identifiers are resolved through :data:`mdconv.converter_registry.registry`,
so aliases such as ``md`` or ``tex`` are accepted wherever a format name is.

"""

from __future__ import annotations

import logging
from dataclasses import fields
from typing import Any, Optional, TypeVar, Union

from mdconv.ast import Document
from mdconv.constants import DEFAULT_INPUT_FORMAT, DEFAULT_OUTPUT_FORMAT
from mdconv.converter_registry import registry
from mdconv.exceptions import MdConvError, ParsingError, RenderingError
from mdconv.options.base import BaseParserOptions, BaseRendererOptions
from mdconv.renderers.base import BaseRenderer
from mdconv.utils.io_utils import OutputType, SourceType, read_source

logger = logging.getLogger(__name__)

OptionsT = TypeVar("OptionsT", BaseParserOptions, BaseRendererOptions)


def _merge_options(
    options_class: Optional[type],
    options: Optional[OptionsT],
    kind: str,
    **kwargs: Any,
) -> Optional[OptionsT]:
    """Combine an options object with keyword overrides.

    Parameters
    ----------
    options_class : type or None
        Options class registered for the format
    options : BaseParserOptions, BaseRendererOptions or None
        Options supplied by the caller
    kind : str
        "parser" or "renderer", used in log messages
    **kwargs
        Field overrides; names the options class does not define are skipped

    Returns
    -------
    BaseParserOptions, BaseRendererOptions or None
        The options to pass to the converter, or None for its defaults

    """
    if not kwargs:
        return options

    base_class = type(options) if options is not None else options_class
    if base_class is None:
        logger.debug(f"Format has no {kind} options; ignoring {sorted(kwargs)}")
        return options

    known = {f.name for f in fields(base_class)}
    valid = {key: value for key, value in kwargs.items() if key in known}
    skipped = sorted(key for key in kwargs if key not in known)
    if skipped:
        logger.debug(f"Skipping unknown {kind} options: {skipped}")

    if options is not None:
        return options.create_updated(**valid)
    return base_class(**valid)


def to_ast(
    source: SourceType,
    source_format: str = DEFAULT_INPUT_FORMAT,
    parser_options: Optional[BaseParserOptions] = None,
    **kwargs: Any,
) -> Document:
    """Parse a source document into an AST.

    Parameters
    ----------
    source : str, Path, IO[str] or IO[bytes]
        Source document. A ``Path`` is always read as a file; a ``str`` is
        read as a file when one of that name exists and is otherwise taken as
        the document text. Streams are read to EOF.
    source_format : str, default "gfm"
        Reader identifier or alias (``gfm``, ``markdown``, ``md``, ``native``,
        ``json``)
    parser_options : BaseParserOptions, optional
        Options for the reader; must match the reader's options class
    **kwargs
        Individual option overrides applied on top of ``parser_options``

    Returns
    -------
    Document
        The parsed document

    Raises
    ------
    UnrecognizedFormatError
        If ``source_format`` names no reader
    UnreadableInputError
        If the source cannot be read
    StructuralParseError
        If the input defeats every fallback rule
    InvalidOptionsError
        If ``parser_options`` belongs to another format

    Examples
    --------
        >>> doc = to_ast("# Hello\\n\\nWorld")
        >>> [type(node).__name__ for node in doc.children]
        ['Heading', 'Paragraph']

    """
    parser_class = registry.get_parser(source_format)
    options = _merge_options(
        registry.get_parser_options_class(source_format), parser_options, "parser", **kwargs
    )
    parser = parser_class(options)

    data = read_source(source)
    logger.debug(f"Parsing input as {registry.resolve_format_name(source_format)}")

    try:
        return parser.parse(data)
    except MdConvError:
        raise
    except Exception as e:
        raise ParsingError(f"AST conversion failed: {e!r}", parsing_stage="ast_conversion", original_error=e) from e


def _render(renderer: BaseRenderer, doc: Document, output: Optional[OutputType]) -> Union[str, None]:
    try:
        if output is None:
            return renderer.render_to_string(doc)
        renderer.render(doc, output)
        return None
    except MdConvError:
        raise
    except Exception as e:
        raise RenderingError(f"Rendering failed: {e!r}", rendering_stage="rendering", original_error=e) from e


def from_ast(
    doc: Document,
    target_format: str = "gfm",
    output: Optional[OutputType] = None,
    renderer_options: Optional[BaseRendererOptions] = None,
    **kwargs: Any,
) -> Union[str, None]:
    """Render an AST document to a target format.

    Parameters
    ----------
    doc : Document
        Document to render
    target_format : str, default "gfm"
        Writer identifier or alias
    output : str, Path, IO[str] or IO[bytes], optional
        Destination. When omitted the rendered text is returned.
    renderer_options : BaseRendererOptions, optional
        Options for the writer; must match the writer's options class
    **kwargs
        Individual option overrides applied on top of ``renderer_options``

    Returns
    -------
    str or None
        Rendered text when ``output`` is None, otherwise None

    Raises
    ------
    UnrecognizedFormatError
        If ``target_format`` names no writer
    RenderingError
        If the output cannot be written

    """
    renderer_class = registry.get_renderer(target_format)
    options = _merge_options(
        registry.get_renderer_options_class(target_format), renderer_options, "renderer", **kwargs
    )
    return _render(renderer_class(options), doc, output)


def convert(
    source: SourceType,
    source_format: str = DEFAULT_INPUT_FORMAT,
    target_format: str = DEFAULT_OUTPUT_FORMAT,
    output: Optional[OutputType] = None,
    parser_options: Optional[BaseParserOptions] = None,
    renderer_options: Optional[BaseRendererOptions] = None,
) -> Union[str, None]:
    """Convert a document from one format to another.

    Both format identifiers are resolved before the source is read, so an
    unknown writer fails without touching the input.

    Parameters
    ----------
    source : str, Path, IO[str] or IO[bytes]
        Source document, as accepted by :func:`to_ast`
    source_format : str, default "gfm"
        Reader identifier or alias
    target_format : str, default "html"
        Writer identifier or alias
    output : str, Path, IO[str] or IO[bytes], optional
        Destination. When omitted the rendered text is returned.
    parser_options : BaseParserOptions, optional
        Options for the reader
    renderer_options : BaseRendererOptions, optional
        Options for the writer

    Returns
    -------
    str or None
        Rendered text when ``output`` is None, otherwise None

    Raises
    ------
    UnrecognizedFormatError
        If either identifier is unknown
    UnreadableInputError
        If the source cannot be read
    StructuralParseError
        If the input defeats every fallback rule
    RenderingError
        If the output cannot be written

    Examples
    --------
        >>> convert("*hi*", target_format="html")
        '<p><em>hi</em></p>\\n'

    """
    renderer = registry.get_renderer(target_format)(renderer_options)
    registry.get_parser(source_format)

    doc = to_ast(source, source_format=source_format, parser_options=parser_options)
    return _render(renderer, doc, output)


__all__ = ["convert", "from_ast", "to_ast"]
