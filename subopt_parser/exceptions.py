"""
Custom exception hierarchy for subopt-parser.

Two families hang off a single root:

- SubOptError and its three concrete kinds are the parse-time taxonomy.
  A record raises one of them from its update methods; the dispatcher
  stops at the first one and hands it to the caller unchanged.
- SettingsError covers bad parser settings (e.g. an empty YAML file).

The three parse-time kinds are flat. The only payload is the offending
key or a rendered message; there is no retry state.
"""

from __future__ import annotations

import enum


class ErrorKind(enum.Enum):
    """Tag identifying which of the three parse-time errors occurred."""

    UNKNOWN_KEY = "unknown_key"
    MISSING_VALUE = "missing_value"
    CUSTOM = "custom"


class SubOptParserError(Exception):
    """Base exception for all subopt-parser errors."""


class SettingsError(SubOptParserError):
    """Raised when parser settings cannot be loaded or are inconsistent."""


class SubOptError(SubOptParserError):
    """Base for errors raised while applying a sub-option to a record."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UnknownKeyError(SubOptError):
    """The key (or bare value) does not name anything the record understands."""

    kind = ErrorKind.UNKNOWN_KEY

    def __init__(self, key: str) -> None:
        super().__init__(f"Unknown key: {key}")
        self.key = key


class MissingValueForKeyError(SubOptError):
    """A bare value names a key that needs ``key=value`` form."""

    kind = ErrorKind.MISSING_VALUE

    def __init__(self, key: str) -> None:
        super().__init__(f"Missing value for key '{key}'")
        self.key = key


class CustomError(SubOptError):
    """Domain-specific conversion or validation failure.

    ``detail`` is the human-readable rendering of the underlying cause,
    e.g. the message of a failed integer conversion.
    """

    kind = ErrorKind.CUSTOM

    def __init__(self, detail: str) -> None:
        super().__init__(f"Custom error: {detail}")
        self.detail = detail

    @classmethod
    def from_exception(cls, exc: BaseException) -> CustomError:
        """Wrap *exc*, keeping its message and chaining it as the cause."""
        err = cls(str(exc))
        err.__cause__ = exc
        return err
