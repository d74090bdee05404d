#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the mdsync library.

This module defines specialized exception classes for the error conditions
that can occur while rendering or reformatting Markdown. The core pipeline
accepts any text, so only the engine and the pretty-printer stage can fail;
everything else is a total string transform.

Exception Hierarchy
-------------------
- MdSyncError (base exception)

  - ValidationError (CLI argument validation)
    - InvalidOptionsError (wrong options class for a renderer)

  - FileError (file access and I/O)
    - FileNotFoundError (file doesn't exist)

  - ParsingError (markdown engine parse failures)

  - RenderError (HTML serialization failures)

  - FormatError (pretty-print stage failures)

"""

from typing import Any


class MdSyncError(Exception):
    """Base exception class for all mdsync-specific errors.

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


class ValidationError(MdSyncError):
    """Exception raised for invalid command-line parameters.

    Library entry points never raise this for document content or formatter
    options; out-of-range option values are replaced by defaults instead.

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
    """Exception raised when a renderer receives the wrong options class.

    Parameters
    ----------
    renderer_name : str
        Name of the renderer that received invalid options
    expected_type : type
        The expected options class type
    received_type : type
        The actual options class type that was received

    """

    def __init__(self, renderer_name: str, expected_type: type, received_type: type):
        """Initialize with a message naming both option classes."""
        message = (
            f"{renderer_name} expected options of type '{expected_type.__name__}', "
            f"but received '{received_type.__name__}'."
        )
        super().__init__(message, parameter_name="options", parameter_value=received_type)
        self.renderer_name = renderer_name
        self.expected_type = expected_type
        self.received_type = received_type


class FileError(MdSyncError):
    """Base exception for file access and I/O errors.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path to the problematic file
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error with path and message."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class FileNotFoundError(FileError):
    """Exception raised when an input file does not exist."""

    def __init__(self, file_path: str, original_error: Exception | None = None):
        """Initialize with the missing path."""
        super().__init__(f"File not found: {file_path}", file_path=file_path, original_error=original_error)


class ParsingError(MdSyncError):
    """Exception raised when the markdown engine fails to parse its input.

    Apart from documents that nest blocks deeper than the engine's nesting
    limit, well-formed Unicode text always parses, so this usually signals a
    defect in the engine or one of its plugins.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    parsing_stage : str, optional
        The stage of parsing where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the parsing failure

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


class RenderError(MdSyncError):
    """Exception raised when HTML serialization fails.

    Parameters
    ----------
    message : str
        Description of the rendering failure, including the underlying message
    rendering_stage : str, optional
        The stage of rendering where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the rendering failure

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error."""
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage


class FormatError(MdSyncError):
    """Exception raised when the reformatter cannot pretty-print a document.

    No partial output accompanies this error; callers keep their original
    text.

    Parameters
    ----------
    message : str
        Description of the failure, including the underlying message
    stage : str, optional
        Reformat stage that failed (normally ``"pretty-print"``)
    original_error : Exception, optional
        The underlying exception raised by the pretty-printer

    """

    def __init__(self, message: str, stage: str | None = None, original_error: Exception | None = None):
        """Initialize the format error."""
        super().__init__(message, original_error)
        self.stage = stage
