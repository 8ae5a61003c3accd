"""Runtime settings resolved from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from functools import lru_cache

_ENV_NAMES = {
    "expiry_threshold_days": "PROJECTFLOW_EXPIRY_DAYS",
    "timeline_buffer_days": "PROJECTFLOW_BUFFER_DAYS",
    "default_duration_days": "PROJECTFLOW_DEFAULT_DURATION_DAYS",
    "sender_address": "PROJECTFLOW_SENDER",
    "fallback_manager_address": "PROJECTFLOW_FALLBACK_MANAGER",
    "send_latency_seconds": "PROJECTFLOW_SEND_LATENCY",
}


@dataclass
class Settings:
    """Engine configuration.

    A PROJECTFLOW_* variable replaces a field only while it holds its class
    default; values passed to the constructor win over the environment.
    """

    expiry_threshold_days: int = 15
    timeline_buffer_days: int = 5
    default_duration_days: int = 30
    sender_address: str = "system@projectflow.ai"
    fallback_manager_address: str = "manager@flow.com"
    send_latency_seconds: float = 0.0

    def __post_init__(self) -> None:
        for field_info in fields(self):
            current = getattr(self, field_info.name)
            if current != field_info.default:
                continue

            raw = os.getenv(_ENV_NAMES[field_info.name])
            if raw is None or not raw.strip():
                continue

            cast = type(field_info.default)
            try:
                setattr(self, field_info.name, cast(raw.strip()))
            except ValueError:
                continue


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()
