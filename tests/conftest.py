"""Shared fixtures: keep LPML_* environment variables out of the tests."""

import pytest

from lpml.settings import reset_settings_cache


@pytest.fixture(autouse=True)
def _clean_settings(monkeypatch):
    for name in ("LPML_STRICT", "LPML_ROOT", "LPML_ENCODING"):
        monkeypatch.delenv(name, raising=False)
    reset_settings_cache()
    yield
    reset_settings_cache()
