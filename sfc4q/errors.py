"""Structured exceptions for curve and numeral validation.

Every failure in the core is a deterministic input-validation error raised
synchronously at the offending call. Each carries a stable ``code`` and a
small ``context`` dict so callers (e.g. the HTTP layer) can classify it
without string matching.
"""

from __future__ import annotations

import enum
from typing import Any, Mapping


class ErrorCode(enum.IntEnum):
    GENERIC = 1000
    INVALID_LEVEL = 1001
    OUT_OF_RANGE = 1002
    BIT_WIDTH_EXCEEDED = 1003
    INVALID_SYMBOL = 1004
    INVALID_FORMAT = 1005
    UNSUPPORTED_BASE = 1006


class Sfc4qError(ValueError):
    """Base class for validation errors raised by the core."""

    code: ErrorCode = ErrorCode.GENERIC

    def __init__(self, message: str, *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context: dict[str, Any] = dict(context) if context else {}

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "error": type(self).__name__,
            "code": int(self.code),
            "message": self.message,
        }
        if self.context:
            out["context"] = self.context
        return out


class InvalidLevel(Sfc4qError):
    """Level is negative, not a multiple of 0.5, or beyond the curve's limit."""

    code = ErrorCode.INVALID_LEVEL


class OutOfRange(Sfc4qError):
    """Key, bkey or coordinate outside the configured grid."""

    code = ErrorCode.OUT_OF_RANGE


class BitWidthExceeded(Sfc4qError):
    """Value needs more bits than allowed and truncation was not permitted."""

    code = ErrorCode.BIT_WIDTH_EXCEEDED


class InvalidSymbol(Sfc4qError):
    code = ErrorCode.INVALID_SYMBOL


class InvalidFormat(Sfc4qError):
    code = ErrorCode.INVALID_FORMAT


class UnsupportedBase(Sfc4qError):
    code = ErrorCode.UNSUPPORTED_BASE


class UnsupportedCurve(LookupError):
    """No curve strategy registered under the requested name."""
