"""Runtime settings for the storefront, read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True, slots=True)
class Settings:
    state_dir: Path
    strict_status: bool = False
    gemini_api_key: str | None = None
    gemini_model: str = "gemini-3-flash-preview"
    gemini_temperature: float = 0.7

    @staticmethod
    def from_env() -> Settings:
        return Settings(
            state_dir=Path(os.getenv("STOREFRONT_STATE_DIR", ".storefront")),
            strict_status=os.getenv("STOREFRONT_STRICT_STATUS", "").strip().lower() in _TRUTHY,
            gemini_api_key=os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY"),
            gemini_model=os.getenv("GEMINI_MODEL", "gemini-3-flash-preview"),
            gemini_temperature=float(os.getenv("GEMINI_TEMPERATURE", "0.7")),
        )
