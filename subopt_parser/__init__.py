"""
subopt-parser: parse ``key1=val1:key2=val2`` option values into records.

Public API surface:

- ``SubOpt`` -- the record contract (``update_from_value`` /
  ``update_from_kvpair`` plus a default starting value).
- ``SubOptModel`` -- a Pydantic-backed record whose fields are the keys.
- ``parse_subopts(record_type, raw)`` / ``SubOptParser(record_type)`` --
  fold a raw string into a fresh record.
- ``add_subopt_argument(...)`` / ``subopt_type(...)`` -- argparse glue.
- ``SubOptError`` and its kinds: ``UnknownKeyError``,
  ``MissingValueForKeyError``, ``CustomError``.

Example::

    class Buf(SubOptModel):
        source: NonNegativeInt = 0
        offset: NonNegativeInt = 0

    parse_subopts(Buf, "source=0:offset=1000")  # Buf(source=0, offset=1000)
"""

from __future__ import annotations

from subopt_parser.argparse_adapter import (
    ArgumentErrorKind,
    SubOptArgumentError,
    add_subopt_argument,
    subopt_type,
    to_argument_error,
)
from subopt_parser.config import (
    DEFAULT_SETTINGS,
    ParserSettings,
    load_settings,
    save_settings,
)
from subopt_parser.exceptions import (
    CustomError,
    ErrorKind,
    MissingValueForKeyError,
    SettingsError,
    SubOptError,
    SubOptParserError,
    UnknownKeyError,
)
from subopt_parser.parser import SubOptParser, parse_subopts
from subopt_parser.record import SubOpt, SubOptModel
from subopt_parser.tokens import PairToken, ValueToken, tokenize

__all__ = [
    "ArgumentErrorKind",
    "CustomError",
    "DEFAULT_SETTINGS",
    "ErrorKind",
    "MissingValueForKeyError",
    "PairToken",
    "ParserSettings",
    "SettingsError",
    "SubOpt",
    "SubOptArgumentError",
    "SubOptError",
    "SubOptModel",
    "SubOptParser",
    "SubOptParserError",
    "UnknownKeyError",
    "ValueToken",
    "add_subopt_argument",
    "load_settings",
    "parse_subopts",
    "save_settings",
    "subopt_type",
    "to_argument_error",
    "tokenize",
]
