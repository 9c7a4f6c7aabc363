"""
Sub-option dispatcher for subopt-parser.

Folds the tokens of a raw option string into a fresh record:

1. ``record_type.default()`` -> starting record (new for every call).
2. ``tokenize()`` -> ValueToken / PairToken in left-to-right order.
3. Each token is routed to ``update_from_value`` or ``update_from_kvpair``.
4. The first SubOptError stops the loop; no later token is applied and the
   partially built record is discarded.
5. Otherwise the record is returned to the caller, who owns it from then on.

The dispatcher itself has no state, does no I/O and never recovers from
an error. Exceptions that are not SubOptError propagate unchanged.
"""

from __future__ import annotations

import logging
from typing import Generic, TypeVar

from subopt_parser.config import DEFAULT_SETTINGS, ParserSettings
from subopt_parser.exceptions import SubOptError
from subopt_parser.record import SubOpt, SubOptModel
from subopt_parser.tokens import PairToken, tokenize

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=SubOpt)


def parse_subopts(
    record_type: type[R],
    raw: str | bytes,
    settings: ParserSettings | None = None,
    validate: bool = False,
) -> R:
    """Parse *raw* into a new instance of *record_type*.

    Args:
        record_type: A SubOpt subclass.
        raw: The option value, e.g. ``"source=0:offset=1000"``. Bytes are
            decoded as UTF-8.
        settings: Delimiters to use. Defaults to ``:`` and ``=``.
        validate: If True and the record is a SubOptModel, run
            ``validate_complete()`` once all tokens have been applied.

    Returns:
        The populated record.

    Raises:
        SubOptError: The error raised for the first offending token.
        UnicodeDecodeError: If *raw* is bytes that are not valid UTF-8.
    """
    settings = settings or DEFAULT_SETTINGS
    record = record_type.default()
    for index, token in enumerate(tokenize(raw, settings)):
        try:
            if isinstance(token, PairToken):
                record.update_from_kvpair(token.key, token.value)
            else:
                record.update_from_value(token.text)
        except SubOptError as exc:
            logger.debug(
                "%s rejected sub-option #%d %r: %s",
                record_type.__name__, index, token, exc,
            )
            raise
        logger.debug("%s applied sub-option #%d %r", record_type.__name__, index, token)

    if validate and isinstance(record, SubOptModel):
        record = record.validate_complete()
    return record


class SubOptParser(Generic[R]):
    """Reusable conversion callable: ``SubOptParser(Buf)("source=1") -> Buf``.

    Usable anywhere a one-argument string converter is expected. Two
    parsers compare equal when they build the same record type with the
    same settings.
    """

    def __init__(
        self,
        record_type: type[R],
        settings: ParserSettings | None = None,
        validate: bool = False,
    ) -> None:
        if not (isinstance(record_type, type) and issubclass(record_type, SubOpt)):
            raise TypeError(
                f"record_type must be a SubOpt subclass, got {record_type!r}"
            )
        self.record_type = record_type
        self.settings = settings or DEFAULT_SETTINGS
        self.validate = validate

    def __call__(self, raw: str | bytes) -> R:
        return parse_subopts(self.record_type, raw, self.settings, self.validate)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SubOptParser):
            return NotImplemented
        return (
            self.record_type is other.record_type
            and self.settings == other.settings
            and self.validate == other.validate
        )

    def __hash__(self) -> int:
        return hash((self.record_type, self.settings, self.validate))

    def __repr__(self) -> str:
        return f"SubOptParser({self.record_type.__name__})"
