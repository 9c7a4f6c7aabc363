"""
Parser settings and YAML I/O for subopt-parser.

The grammar is fixed by default (``:`` between sub-options, ``=`` between
key and value). ParserSettings lets a host program pick different
single-purpose delimiters, e.g. ``,`` for options whose values contain
colons, and persist that choice next to the rest of its configuration.

Key objects:
- ParserSettings: delimiter + separator, validated and frozen.
- DEFAULT_SETTINGS: the stock ``:`` / ``=`` grammar.
- load_settings(path) / save_settings(settings, path): YAML round trip.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator

from subopt_parser.exceptions import SettingsError

logger = logging.getLogger(__name__)


class ParserSettings(BaseModel):
    """Delimiters used to split a raw sub-option string."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    delimiter: str = Field(":", min_length=1, description="Separates sub-options")
    separator: str = Field(
        "=", min_length=1, description="Splits a sub-option into key and value"
    )

    @model_validator(mode="after")
    def _check_distinct(self) -> ParserSettings:
        """Delimiter and separator must not overlap."""
        if self.delimiter in self.separator or self.separator in self.delimiter:
            raise ValueError(
                f"delimiter {self.delimiter!r} and separator {self.separator!r} "
                "must not overlap"
            )
        return self


DEFAULT_SETTINGS = ParserSettings()


def load_settings(path: str | Path) -> ParserSettings:
    """Load and validate parser settings from a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        SettingsError: If the file is empty or not a mapping.
        pydantic.ValidationError: If the mapping fails schema validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Settings file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if raw is None:
        raise SettingsError(f"Settings file is empty: {path}")
    if not isinstance(raw, dict):
        raise SettingsError(
            f"Settings file must contain a mapping, got {type(raw).__name__}: {path}"
        )
    logger.info("Loaded parser settings from %s", path)
    return ParserSettings.model_validate(raw)


def save_settings(settings: ParserSettings, path: str | Path) -> None:
    """Serialize ParserSettings to YAML."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write("# subopt-parser settings\n\n")
        yaml.dump(
            settings.model_dump(mode="json"),
            f,
            allow_unicode=True,
            default_flow_style=False,
            sort_keys=False,
        )
    logger.info("Saved parser settings to %s", path)
