"""Application settings loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Any, List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from backend.schemas.proration import DEFAULT_ANCHOR_DAY, DEFAULT_VAT_RATE


class Settings(BaseSettings):
    """Read from ``PRORATA_*`` variables, e.g. ``PRORATA_DEFAULT_VAT_RATE``."""

    model_config = SettingsConfigDict(env_prefix="PRORATA_", env_file=".env", extra="ignore")

    default_vat_rate: float = Field(DEFAULT_VAT_RATE, ge=0)
    default_anchor_day: int = Field(DEFAULT_ANCHOR_DAY, ge=1, le=31)
    # comma-separated in the environment
    cors_origins: Annotated[List[str], NoDecode] = ["http://localhost:5173", "http://127.0.0.1:5173"]
    log_level: str = "INFO"

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("log_level")
    @classmethod
    def upper_level(cls, value: str) -> str:
        return value.upper()


@lru_cache()
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
