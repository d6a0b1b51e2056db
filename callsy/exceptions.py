"""Errors raised by the callsy pipeline.

Every error ends the run; the CLI prints ``str(error)`` on a single line.
"""

import os


class CallsyError(Exception):
    """Base class for all errors surfaced by the pipeline."""

    pass


class InputIOError(CallsyError):
    """Exception raised when an input file cannot be opened or read."""

    def __init__(self, path: str | os.PathLike, cause: Exception, what: str = "input file"):
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to read {what} {str(path)!r}. {_describe(cause)}")


class MalformedInputError(CallsyError):
    """Exception raised when the input document does not match the request schema."""

    def __init__(
        self, detail: str, line: int | None = None, column: int | None = None
    ):
        self.detail = detail
        self.line = line
        self.column = column
        if line is not None:
            message = f"Unable to deserialise data from input file at line {line}, column {column}: {detail}."
        else:
            message = f"Unable to deserialise data from input file: {detail}."
        super().__init__(message)


class NormalizationError(CallsyError):
    """Base class for errors turning a request description into a sendable request."""

    pass


class ConflictingBodySource(NormalizationError):
    """Exception raised when both an inline body and a body file are given."""

    def __init__(self) -> None:
        super().__init__("Cannot provide both a body and body_path.")


class BodySourceUnreadable(NormalizationError, InputIOError):
    """Exception raised when the file named by body_path cannot be read as text."""

    def __init__(self, path: str | os.PathLike, cause: Exception):
        InputIOError.__init__(self, path, cause, what="body file")


class InvalidMethod(NormalizationError):
    """Exception raised when the method is not a standard HTTP method."""

    def __init__(self, method: str):
        self.method = method
        super().__init__(f"The provided HTTP method of {method} is invalid.")


class UnresolvableHeader(NormalizationError):
    """Exception raised when a null header value cannot be computed."""

    def __init__(self, header: str):
        self.header = header
        super().__init__(
            f"Cannot autocomplete value of {header} header. Try supplying a value directly."
        )


class InvalidUrl(NormalizationError):
    """Exception raised when the url is not an absolute http or https URL."""

    def __init__(self, details: str):
        self.details = details
        super().__init__(f"Error while parsing URL. {details}")


class TransportError(CallsyError):
    """Exception raised when the request could not be sent or answered."""

    def __init__(self, cause: Exception | str):
        self.cause = cause
        super().__init__(f"Error when sending the request, {cause}")


class ProjectionError(CallsyError):
    """Base class for errors converting a response into the output document."""

    pass


class BodyDecodeError(ProjectionError):
    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"Failed to get text from response body, {cause}")


class OutputIOError(CallsyError):
    """Exception raised when an output file cannot be created or written."""

    def __init__(self, path: str | os.PathLike, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to write output file {str(path)!r}. {_describe(cause)}")


class OverwriteDeclined(CallsyError):
    """Exception raised when the user refuses to overwrite an existing output file."""

    def __init__(self, path: str | os.PathLike, reason: str = "overwrite declined"):
        self.path = path
        super().__init__(
            f"Exited due to inability to overwrite existing file {str(path)!r} ({reason})."
        )


def _describe(cause: Exception) -> str:
    if isinstance(cause, OSError) and cause.strerror:
        return f"OS error {cause.errno}: {cause.strerror}"
    return str(cause)
