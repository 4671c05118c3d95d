"""Centralised configuration handling for ForecastLens."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Mapping

import streamlit as st
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DEBOUNCE_MS = 300
DEFAULT_MIN_VISIBLE_POINTS = 10


def _streamlit_section(name: str) -> Mapping[str, Any] | None:
    """Return a mapping from Streamlit secrets for the given section."""

    try:
        if hasattr(st, "secrets") and name in st.secrets:
            section = st.secrets[name]
            if isinstance(section, Mapping):
                return section
            return dict(section)
    except Exception:  # pragma: no cover - accessing secrets may fail in tests
        return None
    return None


class Settings(BaseSettings):
    """Engine settings sourced from env vars and Streamlit secrets."""

    debounce_ms: int = Field(default=DEFAULT_DEBOUNCE_MS, ge=0)
    min_visible_points: int = Field(default=DEFAULT_MIN_VISIBLE_POINTS, ge=1)
    max_zoom: float = Field(default=5.0, ge=1.0)
    zoom_factor: float = Field(default=1.5, gt=1.0)
    pan_divisions: int = Field(default=20, ge=1)
    log_level: str = "INFO"
    currency_symbol: str = "$"

    model_config = SettingsConfigDict(env_prefix="FORECAST_", extra="ignore")

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000.0


@lru_cache
def get_settings() -> Settings:
    """Load and cache engine settings."""

    overrides: dict[str, Any] = {}
    secrets_section = _streamlit_section("forecast")
    if secrets_section:
        overrides = {name: secrets_section.get(name) for name in Settings.model_fields}

    return Settings(**{k: v for k, v in overrides.items() if v is not None})
