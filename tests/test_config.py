"""Tests for environment-driven CLI defaults."""
import pytest

from base1024 import config
from base1024.core.alphabet import Version


class TestParse:
    @pytest.mark.parametrize("value,expected", [
        ("1", Version.V1), ("2", Version.V2),
        ("v1", Version.V1), (" V2 ", Version.V2),
    ])
    def test_parse_version(self, value, expected):
        assert config.parse_version(value) is expected

    def test_parse_version_invalid(self):
        with pytest.raises(ValueError, match="1 or 2"):
            config.parse_version("3")

    def test_parse_wrap(self):
        assert config.parse_wrap("76") == 76
        assert config.parse_wrap("0") == 0

    def test_parse_wrap_invalid(self):
        with pytest.raises(ValueError, match="integer"):
            config.parse_wrap("wide")
        with pytest.raises(ValueError, match="0 or more"):
            config.parse_wrap("-1")


class TestDefaults:
    def test_defaults_without_env(self, monkeypatch):
        monkeypatch.delenv(config.VERSION_ENV, raising=False)
        monkeypatch.delenv(config.WRAP_ENV, raising=False)
        assert config.default_version() is Version.V2
        assert config.default_wrap() == 0

    def test_defaults_from_env(self, monkeypatch):
        monkeypatch.setenv(config.VERSION_ENV, "1")
        monkeypatch.setenv(config.WRAP_ENV, "40")
        assert config.default_version() is Version.V1
        assert config.default_wrap() == 40
