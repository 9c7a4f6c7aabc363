"""
Unit tests for parser settings and YAML I/O (subopt_parser.config).

Tests Pydantic model validation, YAML serialization round-trip and the
error paths of load_settings().
"""

import pytest
from pydantic import ValidationError

from subopt_parser.config import (
    DEFAULT_SETTINGS,
    ParserSettings,
    load_settings,
    save_settings,
)
from subopt_parser.exceptions import SettingsError


# ---------------------------------------------------------------------------
# ParserSettings
# ---------------------------------------------------------------------------

class TestParserSettings:
    """Tests for ParserSettings validation."""

    def test_defaults(self):
        cfg = ParserSettings()
        assert cfg.delimiter == ":"
        assert cfg.separator == "="

    def test_default_constant_matches_model_defaults(self):
        assert DEFAULT_SETTINGS == ParserSettings()

    def test_custom_values(self):
        cfg = ParserSettings(delimiter=",", separator=":")
        assert cfg.delimiter == ","
        assert cfg.separator == ":"

    def test_empty_delimiter(self):
        with pytest.raises(ValidationError, match="delimiter"):
            ParserSettings(delimiter="")

    def test_empty_separator(self):
        with pytest.raises(ValidationError, match="separator"):
            ParserSettings(separator="")

    def test_same_delimiter_and_separator(self):
        with pytest.raises(ValidationError, match="must not overlap"):
            ParserSettings(delimiter="=", separator="=")

    def test_overlapping_multichar(self):
        with pytest.raises(ValidationError, match="must not overlap"):
            ParserSettings(delimiter="::", separator=":")

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            ParserSettings(quote='"')

    def test_frozen(self):
        cfg = ParserSettings()
        with pytest.raises(ValidationError):
            cfg.delimiter = ","

    def test_hashable(self):
        assert hash(ParserSettings()) == hash(ParserSettings())


# ---------------------------------------------------------------------------
# YAML I/O
# ---------------------------------------------------------------------------

class TestSettingsIO:
    """Tests for load_settings / save_settings."""

    def test_roundtrip(self, tmp_path):
        path = tmp_path / "subopt.yaml"
        original = ParserSettings(delimiter=",", separator=":")
        save_settings(original, path)
        assert load_settings(path) == original

    def test_save_creates_parent_dirs(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "subopt.yaml"
        save_settings(DEFAULT_SETTINGS, path)
        assert path.exists()

    def test_saved_file_is_readable_yaml(self, tmp_path):
        path = tmp_path / "subopt.yaml"
        save_settings(DEFAULT_SETTINGS, path)
        text = path.read_text(encoding="utf-8")
        assert text.startswith("# subopt-parser settings")
        assert "delimiter:" in text

    def test_partial_file_uses_defaults(self, tmp_path):
        path = tmp_path / "subopt.yaml"
        path.write_text("delimiter: ','\n", encoding="utf-8")
        cfg = load_settings(path)
        assert cfg.delimiter == ","
        assert cfg.separator == "="

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "nope.yaml")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(SettingsError, match="empty"):
            load_settings(path)

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- ':'\n- '='\n", encoding="utf-8")
        with pytest.raises(SettingsError, match="mapping"):
            load_settings(path)

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("delimiter: '='\nseparator: '='\n", encoding="utf-8")
        with pytest.raises(ValidationError):
            load_settings(path)
