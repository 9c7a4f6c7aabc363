"""
argparse integration for subopt-parser.

argparse converts option values through a ``type=`` callable and reports
``argparse.ArgumentTypeError`` messages as ``argument --opt: <message>``.
This module is the only place that knows about argparse:

- ``to_argument_error()`` maps each SubOptError kind to an argparse error
  category (1:1, same message text).
- ``subopt_type()`` builds the ``type=`` callable.
- ``add_subopt_argument()`` registers an option, optionally repeatable
  (``action="append"``) so every occurrence lands in a list.

Usage::

    parser = argparse.ArgumentParser()
    add_subopt_argument(parser, "--buf", record_type=Buf, repeatable=True,
                        help="Example: --buf source=0:offset=1000")
    args = parser.parse_args(["--buf", "source=0:offset=1000"])
"""

from __future__ import annotations

import argparse
import enum
from collections.abc import Callable
from typing import Any

from subopt_parser.config import ParserSettings
from subopt_parser.exceptions import ErrorKind, SubOptError
from subopt_parser.parser import R, SubOptParser


class ArgumentErrorKind(enum.Enum):
    """argparse-side diagnostic categories."""

    UNKNOWN_ARGUMENT = "unknown_argument"
    EMPTY_VALUE = "empty_value"
    INVALID_VALUE = "invalid_value"


_KIND_MAP: dict[ErrorKind, ArgumentErrorKind] = {
    ErrorKind.UNKNOWN_KEY: ArgumentErrorKind.UNKNOWN_ARGUMENT,
    ErrorKind.MISSING_VALUE: ArgumentErrorKind.EMPTY_VALUE,
    ErrorKind.CUSTOM: ArgumentErrorKind.INVALID_VALUE,
}


class SubOptArgumentError(argparse.ArgumentTypeError):
    """ArgumentTypeError tagged with the category it was mapped to."""

    def __init__(self, kind: ArgumentErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind


def to_argument_error(err: SubOptError) -> SubOptArgumentError:
    """Convert a SubOptError into the argparse error argparse will report.

    Raises:
        TypeError: If *err* carries a kind with no mapping.
    """
    try:
        kind = _KIND_MAP[err.kind]
    except (AttributeError, KeyError):
        raise TypeError(f"No argparse mapping for {type(err).__name__}") from None
    return SubOptArgumentError(kind, str(err))


def subopt_type(
    record_type: type[R],
    settings: ParserSettings | None = None,
    validate: bool = False,
) -> Callable[[str], R]:
    """Return an argparse ``type=`` callable producing *record_type*."""
    parse = SubOptParser(record_type, settings, validate)

    def convert(value: str) -> R:
        try:
            return parse(value)
        except SubOptError as exc:
            raise to_argument_error(exc) from exc

    # argparse names the type in some of its messages
    convert.__name__ = record_type.__name__
    return convert


def add_subopt_argument(
    parser: argparse.ArgumentParser,
    *flags: str,
    record_type: type[R],
    repeatable: bool = False,
    settings: ParserSettings | None = None,
    validate: bool = False,
    **kwargs: Any,
) -> argparse.Action:
    """Register an option whose value is parsed into *record_type*.

    With ``repeatable=True`` the option may be given several times and
    the parsed records are collected into a list (``[]`` if absent).
    """
    kwargs["type"] = subopt_type(record_type, settings, validate)
    if repeatable:
        kwargs.setdefault("action", "append")
        kwargs.setdefault("default", [])
    kwargs.setdefault("metavar", record_type.__name__.upper())
    return parser.add_argument(*flags, **kwargs)
