"""Application configuration."""

import os
from dataclasses import dataclass, field

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    supabase_timeout_seconds: float = 10.0
    meal_transaction_timeout_ms: int = 5000
    meal_images_bucket: str = "meal-images"
    openai_api_keys: str
    openai_model: str = "gpt-5.2"
    openai_reasoning_effort: str | None = "low"
    openai_store: bool = False
    fcm_project_id: str | None = None
    fcm_access_token: str | None = None
    reminders_enabled: bool = False
    default_timezone: str = "UTC"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def push_configured(self) -> bool:
        """Return True when FCM credentials are present."""
        return bool(self.fcm_project_id and self.fcm_access_token)


@dataclass
class ApiKeyRing:
    """Ordered API keys with a rotation cursor."""

    keys: list[str]
    cursor: int = field(default=0)

    def __post_init__(self) -> None:
        if not self.keys:
            raise ValueError("At least one API key is required")
        self.cursor %= len(self.keys)

    def __len__(self) -> int:
        return len(self.keys)

    def current(self) -> str:
        """Return the key at the cursor."""
        return self.keys[self.cursor]

    def rotate(self) -> str:
        """Advance to the next key, wrapping around, and return it."""
        self.cursor = (self.cursor + 1) % len(self.keys)
        return self.keys[self.cursor]


def parse_api_keys(raw: str | None) -> ApiKeyRing:
    """Parse a comma-separated list of API keys into a key ring."""
    keys: list[str] = []
    for chunk in (raw or "").split(","):
        value = chunk.strip()
        if value and value not in keys:
            keys.append(value)
    return ApiKeyRing(keys)
