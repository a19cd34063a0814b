"""Tests for lpml.settings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from lpml import decode
from lpml.errors import LPMLStructureError
from lpml.settings import DecoderSettings, get_settings, reset_settings_cache


def test_defaults():
    settings = get_settings()
    assert settings.strict is False
    assert settings.root is None
    assert settings.encoding == "utf-8"


def test_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("LPML_STRICT", "true")
    monkeypatch.setenv("LPML_ROOT", str(tmp_path))
    monkeypatch.setenv("LPML_ENCODING", "latin-1")
    reset_settings_cache()
    settings = get_settings()
    assert settings.strict is True
    assert settings.root == str(tmp_path)
    assert settings.encoding == "latin-1"


def test_cached_until_reset(monkeypatch):
    first = get_settings()
    monkeypatch.setenv("LPML_STRICT", "1")
    assert get_settings() is first
    reset_settings_cache()
    assert get_settings().strict is True


def test_root_expands_user():
    settings = DecoderSettings(root="~/mudlib")
    assert settings.root == str(Path("~/mudlib").expanduser())


def test_empty_root_is_none():
    assert DecoderSettings(root="").root is None


def test_blank_encoding_falls_back():
    assert DecoderSettings(encoding="  ").encoding == "utf-8"


def test_invalid_strict_value():
    with pytest.raises(ValidationError):
        DecoderSettings(strict="sometimes")


def test_env_strict_applies_to_decode(monkeypatch):
    monkeypatch.setenv("LPML_STRICT", "yes")
    reset_settings_cache()
    with pytest.raises(LPMLStructureError):
        decode("a: 1\n???\n")
