"""
Tokenizer for sub-option strings.

Splitting is purely syntactic: the raw string is cut on the delimiter and
each segment is cut once, at its first separator. There is no quoting or
escaping, so ``a=b=c`` is the pair ``("a", "b=c")`` and ``a::b`` contains
an empty bare value between the two colons.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from subopt_parser.config import DEFAULT_SETTINGS, ParserSettings


@dataclass(frozen=True)
class ValueToken:
    """A sub-option with no separator, e.g. ``verbose``."""
    text: str


@dataclass(frozen=True)
class PairToken:
    """A ``key=value`` sub-option. Either side may be empty."""
    key: str
    value: str


Token = ValueToken | PairToken


def decode_raw(raw: str | bytes) -> str:
    """Return *raw* as text.

    Bytes are decoded as strict UTF-8. A decoding failure is not a
    sub-option error: the ``UnicodeDecodeError`` propagates to the caller.
    """
    if isinstance(raw, bytes):
        return raw.decode("utf-8")
    return raw


def classify(segment: str, separator: str = "=") -> Token:
    """Classify one delimiter-free segment as a value or a key/value pair."""
    key, sep, value = segment.partition(separator)
    if not sep:
        return ValueToken(segment)
    return PairToken(key, value)


def tokenize(
    raw: str | bytes, settings: ParserSettings | None = None
) -> Iterator[Token]:
    """Yield the tokens of *raw* in left-to-right order.

    An empty string yields exactly one empty ValueToken.
    """
    settings = settings or DEFAULT_SETTINGS
    text = decode_raw(raw)
    for segment in text.split(settings.delimiter):
        yield classify(segment, settings.separator)
