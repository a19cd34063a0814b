"""Decoder configuration loaded from the environment."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import BaseModel, field_validator

_ENV_PREFIX = "LPML_"


class DecoderSettings(BaseModel):
    """Options shared by every decode call.

    ``root`` is the directory that absolute merge paths (``<<: /d/base.lpml``)
    are looked up under; without it they are real filesystem paths.
    ``strict`` turns unrecognised lines into errors instead of skipping them.
    """

    strict: bool = False
    root: str | None = None
    encoding: str = "utf-8"

    @field_validator("root", mode="before")
    @classmethod
    def _expand_root(cls, value: str | None) -> str | None:  # noqa: D401
        if not value:
            return None
        return str(Path(value).expanduser())

    @field_validator("encoding")
    @classmethod
    def _normalise_encoding(cls, value: str) -> str:  # noqa: D401
        return value.strip() or "utf-8"


def _collect_env_overrides() -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for name in DecoderSettings.model_fields:
        value = os.getenv(_ENV_PREFIX + name.upper())
        if value is not None:
            overrides[name] = value
    return overrides


@lru_cache(maxsize=1)
def get_settings() -> DecoderSettings:
    """Build the default settings from ``LPML_*`` variables, caching the result."""

    return DecoderSettings.model_validate(_collect_env_overrides())


def reset_settings_cache() -> None:
    """Clear the cached settings instance (useful for tests)."""

    get_settings.cache_clear()  # type: ignore[attr-defined]


__all__ = ["DecoderSettings", "get_settings", "reset_settings_cache"]
