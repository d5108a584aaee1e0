#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconv/utils/io_utils.py
"""I/O utilities for input sources and output destinations.

Input is always read completely before parsing starts, and rendered output is
written in one piece after rendering finishes.

"""

from __future__ import annotations

import io
import logging
from io import BytesIO, StringIO
from pathlib import Path
from typing import IO, Union, cast

from mdconv.exceptions import RenderingError, UnreadableInputError

logger = logging.getLogger(__name__)

SourceType = Union[str, Path, IO[str], IO[bytes]]
OutputType = Union[str, Path, IO[str], IO[bytes]]


def _is_binary_stream(stream: IO) -> bool:
    if isinstance(stream, BytesIO):
        return True
    if isinstance(stream, (StringIO, io.TextIOBase)):
        return False
    if isinstance(stream, (io.BufferedIOBase, io.RawIOBase)):
        return True
    mode = getattr(stream, "mode", "")
    return isinstance(mode, str) and "b" in mode


def looks_like_path(source: str) -> bool:
    """Guess whether a string names a file rather than holding document text.

    Multi-line strings are always text; single-line strings are paths when a
    file of that name exists.
    """
    if not source or "\n" in source or len(source) > 4096:
        return False
    try:
        return Path(source).is_file()
    except (OSError, ValueError):
        return False


def read_source(source: SourceType) -> Union[str, bytes]:
    """Read an input source to completion.

    Parameters
    ----------
    source : str, Path, IO[str] or IO[bytes]
        A ``Path`` is always read as a file. A ``str`` is read as a file when
        it names an existing file and is otherwise returned as document text.
        Streams are read to EOF.

    Returns
    -------
    str or bytes
        The complete input; bytes from binary streams are decoded by the parser

    Raises
    ------
    UnreadableInputError
        If the file cannot be opened or the stream fails while reading

    """
    if isinstance(source, Path) or (isinstance(source, str) and looks_like_path(source)):
        path = Path(source)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise UnreadableInputError(file_path=str(path), original_error=e) from e
        logger.debug("Read %d bytes from %s", len(data), path)
        return data

    if isinstance(source, str):
        return source

    if hasattr(source, "read"):
        try:
            return cast(IO, source).read()
        except (OSError, ValueError, UnicodeDecodeError) as e:
            name = getattr(source, "name", None)
            raise UnreadableInputError(file_path=str(name) if isinstance(name, str) else None, original_error=e) from e

    raise UnreadableInputError(f"Unsupported input source type: {type(source).__name__}")


def write_content(content: Union[str, bytes], output: OutputType) -> None:
    """Write content to a file path or file-like object.

    Parameters
    ----------
    content : str or bytes
        Content to write; text is encoded as UTF-8 for binary destinations
    output : str, Path, IO[bytes] or IO[str]
        Output destination

    Raises
    ------
    RenderingError
        If the destination cannot be written
    TypeError
        If the output type is not supported

    Examples
    --------
    Write to a text buffer:
        >>> buffer = StringIO()
        >>> write_content("# Hello", buffer)
        >>> buffer.getvalue()
        '# Hello'

    """
    if isinstance(output, (str, Path)):
        output_path = Path(output)
        try:
            if isinstance(content, str):
                output_path.write_text(content, encoding="utf-8")
            else:
                output_path.write_bytes(content)
        except OSError as e:
            raise RenderingError(
                f"Cannot write output to {output_path}: {e}", rendering_stage="output", original_error=e
            ) from e
        return

    if not hasattr(output, "write"):
        raise TypeError(f"Unsupported output type: {type(output)}")

    try:
        if _is_binary_stream(output):
            cast(IO[bytes], output).write(content.encode("utf-8") if isinstance(content, str) else content)
        else:
            cast(IO[str], output).write(content.decode("utf-8") if isinstance(content, bytes) else content)
    except OSError as e:
        raise RenderingError(f"Cannot write output: {e}", rendering_stage="output", original_error=e) from e


__all__ = ["looks_like_path", "read_source", "write_content"]
