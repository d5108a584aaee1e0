#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the mdconv library.

This module defines the exception classes raised by the conversion pipeline.
Parsers degrade malformed markup instead of raising, so these errors are
reserved for conditions the caller must act on: an unknown format
identifier, an input source that cannot be read, or an input that defeats
every fallback rule.

Exception Hierarchy
-------------------
- MdConvError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class for a parser or renderer)

  - FileError (file access and I/O)
    - UnreadableInputError (input source cannot be acquired)

  - FormatError (format identifier problems)
    - UnrecognizedFormatError (identifier matches no reader or writer)

  - ParsingError (input document parsing failures)
    - StructuralParseError (input defeats all fallback rules)

  - RenderingError (output generation failures)

"""

from typing import Any


class MdConvError(Exception):
    """Base exception class for all mdconv-specific errors.

    Catching this will catch all library-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(MdConvError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """Exception raised when a parser or renderer receives the wrong options class.

    Parameters
    ----------
    converter_name : str
        Name of the parser or renderer that received invalid options
    expected_type : type
        The expected options class type
    received_type : type
        The actual options class type that was received
    message : str, optional
        Custom error message. If not provided, one is generated.
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        converter_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the invalid options error."""
        if message is None:
            message = (
                f"{converter_name} expected options of type '{expected_type.__name__}' "
                f"but received '{received_type.__name__}'."
            )
        super().__init__(
            message, parameter_name="options", parameter_value=received_type, original_error=original_error
        )
        self.converter_name = converter_name
        self.expected_type = expected_type
        self.received_type = received_type


class FileError(MdConvError):
    """Base exception for file access and I/O errors.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path of the file involved
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class UnreadableInputError(FileError):
    """Exception raised when the input source cannot be acquired.

    Covers missing files, permission problems, directories given as files,
    undecodable bytes and streams that fail while being read.
    """

    def __init__(self, message: str | None = None, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the unreadable input error."""
        if message is None:
            target = file_path if file_path else "<stream>"
            message = f"Cannot read input from {target}"
            if original_error is not None:
                message += f": {original_error}"
        super().__init__(message, file_path=file_path, original_error=original_error)


class FormatError(MdConvError):
    """Exception raised for format identifier problems.

    Parameters
    ----------
    message : str, optional
        Custom error message
    format_type : str, optional
        The offending format identifier
    supported_formats : list of str, optional
        Identifiers that would have been accepted
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str | None = None,
        format_type: str | None = None,
        supported_formats: list[str] | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the format error."""
        if message is None:
            message = f"Unsupported format: {format_type!r}" if format_type else "Unsupported format"
            if supported_formats:
                message += f". Supported formats: {', '.join(supported_formats)}"
        super().__init__(message, original_error=original_error)
        self.format_type = format_type
        self.supported_formats = supported_formats or []


class UnrecognizedFormatError(FormatError):
    """Exception raised when a format identifier matches no known reader or writer."""

    def __init__(
        self,
        format_type: str,
        supported_formats: list[str] | None = None,
        role: str = "format",
        original_error: Exception | None = None,
    ):
        """Initialize the error for an identifier used as ``role`` (reader/writer)."""
        label = "format" if role == "format" else f"{role} format"
        message = f"Unrecognized {label}: {format_type!r}"
        if supported_formats:
            message += f". Supported formats: {', '.join(supported_formats)}"
        super().__init__(
            message, format_type=format_type, supported_formats=supported_formats, original_error=original_error
        )
        self.role = role


class ParsingError(MdConvError):
    """Exception raised when an input document cannot be parsed.

    Parameters
    ----------
    message : str
        Description of the parsing error
    parsing_stage : str, optional
        Stage at which parsing failed (e.g. "decoding", "json_parsing")
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error=original_error)
        self.parsing_stage = parsing_stage


class StructuralParseError(ParsingError):
    """Exception raised for input that defeats every fallback rule.

    Malformed markup never raises; this error covers input that is not text
    at all, JSON that is not a document, and foreign document constructs
    rejected in strict mode.
    """


class RenderingError(MdConvError):
    """Exception raised when rendered output cannot be produced or written.

    Parameters
    ----------
    message : str
        Description of the rendering error
    rendering_stage : str, optional
        Stage at which rendering failed
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error."""
        super().__init__(message, original_error=original_error)
        self.rendering_stage = rendering_stage


__all__ = [
    "MdConvError",
    "ValidationError",
    "InvalidOptionsError",
    "FileError",
    "UnreadableInputError",
    "FormatError",
    "UnrecognizedFormatError",
    "ParsingError",
    "StructuralParseError",
    "RenderingError",
]
