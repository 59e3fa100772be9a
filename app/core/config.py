from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    project_name: str = "TripTailor API"
    api_v1_prefix: str = "/api/v1"
    log_level: str = "INFO"

    openai_api_key: str = Field(default="", description="OpenAI API key used for itinerary and enrichment calls")
    openai_model_itinerary: str = "gpt-4.1"
    openai_model_enrichment: str = "gpt-4.1-mini"
    openai_max_output_tokens: int = 2048
    openai_timeout_seconds: float = 60.0
    # Transport-level retries inside the OpenAI SDK; schema failures are never retried.
    openai_max_retries: int = 0

    google_maps_api_key: str | None = None

    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()  # type: ignore[arg-type]


settings = get_settings()
