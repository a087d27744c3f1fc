"""Application configuration."""

import os
from typing import Literal

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

DEFAULT_VISION_MODELS = {
    "gemini": "gemini-3-flash-preview",
    "openai": "gpt-5.2",
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    api_key: str
    vision_provider: Literal["gemini", "openai"] = "gemini"
    vision_model: str = ""
    request_timeout_seconds: float | None = None
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @model_validator(mode="after")
    def _default_model_for_provider(self) -> "Settings":
        if not self.vision_model:
            self.vision_model = DEFAULT_VISION_MODELS[self.vision_provider]
        return self
