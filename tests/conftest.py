"""
Shared test fixtures and record types for subopt-parser tests.

Record types used across modules are defined here once and handed out
through fixtures, so each test module can ask for the record it needs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

import pytest
from pydantic import Field, NonNegativeInt, model_validator

from subopt_parser.exceptions import (
    CustomError,
    MissingValueForKeyError,
    UnknownKeyError,
)
from subopt_parser.record import SubOpt, SubOptModel


# ---------------------------------------------------------------------------
# Hand-written records (SubOpt subclasses)
# ---------------------------------------------------------------------------

@dataclass
class Buf(SubOpt):
    """A buffer with a source index and an offset, both unsigned."""
    source: int = 0
    offset: int = 0

    def update_from_value(self, value: str) -> None:
        if value in ("source", "offset"):
            raise MissingValueForKeyError(value)
        raise UnknownKeyError(value)

    def update_from_kvpair(self, key: str, value: str) -> None:
        if key not in ("source", "offset"):
            raise UnknownKeyError(key)
        try:
            number = int(value)
        except ValueError as exc:
            raise CustomError.from_exception(exc) from exc
        if number < 0:
            raise CustomError(f"{key} must be non-negative, got {number}")
        setattr(self, key, number)


@dataclass
class LenientBuf(Buf):
    """Like Buf, but an empty bare value is accepted and ignored."""

    def update_from_value(self, value: str) -> None:
        if value == "":
            return
        super().update_from_value(value)


@dataclass
class Recorder(SubOpt):
    """Records every call; rejects the key ``bad`` and the bare value ``bad``."""
    calls: list[tuple[str, ...]] = field(default_factory=list)

    def update_from_value(self, value: str) -> None:
        self.calls.append(("value", value))
        if value == "bad":
            raise UnknownKeyError(value)

    def update_from_kvpair(self, key: str, value: str) -> None:
        self.calls.append(("pair", key, value))
        if key == "bad":
            raise UnknownKeyError(key)


# ---------------------------------------------------------------------------
# Pydantic records (SubOptModel subclasses)
# ---------------------------------------------------------------------------

class BufModel(SubOptModel):
    source: NonNegativeInt = 0
    offset: NonNegativeInt = 0


class Mount(SubOptModel):
    """A mount spec: positional path, a flag, an aliased key."""
    subopt_positional: ClassVar[str | None] = "path"

    path: str = ""
    readonly: bool = False
    fs_type: str = Field("ext4", alias="type")
    size: int | None = None


class Range(SubOptModel):
    """Both bounds required; start must not exceed end."""
    start: int
    end: int

    @model_validator(mode="after")
    def _check_order(self) -> Range:
        if self.start > self.end:
            raise ValueError("start must not exceed end")
        return self


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def buf_type() -> type[Buf]:
    return Buf


@pytest.fixture()
def lenient_buf_type() -> type[LenientBuf]:
    return LenientBuf


@pytest.fixture()
def recorder_type() -> type[Recorder]:
    return Recorder


@pytest.fixture()
def buf_model_type() -> type[BufModel]:
    return BufModel


@pytest.fixture()
def mount_type() -> type[Mount]:
    return Mount


@pytest.fixture()
def range_type() -> type[Range]:
    return Range


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------
def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (end-to-end through argparse)",
    )
