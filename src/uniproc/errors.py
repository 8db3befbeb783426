from __future__ import annotations

from enum import IntEnum


class ErrorCode(IntEnum):
    NOMEM = -1
    OVERFLOW = -2
    INVALIDUTF8 = -3
    NOTASSIGNED = -4
    INVALIDOPTS = -5


_MESSAGES = {
    ErrorCode.NOMEM: "Memory for processing UTF-8 data could not be allocated.",
    ErrorCode.OVERFLOW: "UTF-8 string is too long to be processed.",
    ErrorCode.INVALIDUTF8: "Invalid UTF-8 string",
    ErrorCode.NOTASSIGNED: "Unassigned Unicode code point found in UTF-8 string.",
    ErrorCode.INVALIDOPTS: "Invalid options for UTF-8 processing chosen.",
}


def errmsg(code: int) -> str:
    """Return an informative message for an error code returned by this package."""
    try:
        return _MESSAGES[ErrorCode(code)]
    except ValueError:
        return "An unknown error occurred while processing UTF-8 data."


class UnicodeProcError(Exception):
    """Aborts a transform; carries the ErrorCode the call reports."""

    def __init__(self, code: int, message: str | None = None) -> None:
        self.code = ErrorCode(code)
        super().__init__(message or errmsg(code))


class DataError(Exception):
    """The bundled Unicode data resource is malformed or does not match."""
