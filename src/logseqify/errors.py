"""Error hierarchy for logseqify.

Every public error class inherits from :class:`LogseqifyError`.  Each
carries a machine-readable ``code`` (from :class:`ErrorCode`), a
human-readable ``message``, an optional structured ``context`` dict, and
an optional ``cause`` (chained exception).

Parse and conversion errors are raised by the pipeline stages and
recovered by :class:`~logseqify.converter.md_to_blocks.MarkdownToBlocksConverter`;
they never reach callers of the public entry points.  Validation errors
describe caller mistakes and do propagate.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Error code enum
# ---------------------------------------------------------------------------

class ErrorCode(str, Enum):
    """Machine-readable error codes for every error the package can raise."""

    PARSE_ERROR = "PARSE_ERROR"
    CONVERSION_ERROR = "CONVERSION_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"


# ---------------------------------------------------------------------------
# Base error
# ---------------------------------------------------------------------------

class LogseqifyError(Exception):
    """Base exception for all logseqify errors.

    Parameters
    ----------
    code:
        A value from :class:`ErrorCode` (or any string) identifying the
        error category.
    message:
        A developer-friendly description of what went wrong.
    context:
        Arbitrary structured data providing extra diagnostic detail.
    cause:
        The underlying exception, if this error wraps another.
    """

    def __init__(
        self,
        code: str,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.code: str = code
        self.message: str = message
        self.context: dict[str, Any] = context or {}
        self.cause: Exception | None = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        ctx = f", context={self.context!r}" if self.context else ""
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r}{ctx})"


# ---------------------------------------------------------------------------
# Pipeline errors
# ---------------------------------------------------------------------------

class LogseqifyParseError(LogseqifyError):
    """The Markdown AST library failed on the input text.

    Context keys: ``length`` (input length in characters).
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.PARSE_ERROR,
            message=message,
            context=context,
            cause=cause,
        )


class LogseqifyConversionError(LogseqifyError):
    """The normalized AST could not be turned into blocks.

    Context keys: ``token_type`` (the token being converted, if known).
    """

    def __init__(
        self,
        message: str = "Conversion error",
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.CONVERSION_ERROR,
            message=message,
            context=context,
            cause=cause,
        )


class LogseqifyValidationError(LogseqifyError):
    """A caller passed an argument outside its accepted values.

    Context keys: ``field``, ``value``, ``allowed``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.VALIDATION_ERROR,
            message=message,
            context=context,
            cause=cause,
        )
