"""Application configuration using Pydantic V2."""

import sys

from loguru import logger
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven settings for the IEX Cloud API client."""

    model_config = SettingsConfigDict(
        env_prefix="QUOTEDESK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    # IEX Cloud endpoints
    api_base_url: str = Field(
        default="https://sandbox.iexapis.com/stable",
        description="Base URL of the quote and company list endpoints",
    )
    logo_base_url: str = Field(
        default="https://storage.googleapis.com/iex/api/logos",
        description="Base URL of the company logo images",
    )
    api_token: str = Field(default="", description="IEX Cloud API token")

    # Request behaviour
    request_timeout: float = Field(
        default=2.0, gt=0, description="Seconds before a request is abandoned"
    )
    list_limit: int = Field(
        default=20, gt=0, description="Number of companies requested from the most-active list"
    )
    cancel_stale_requests: bool = Field(
        default=True,
        description="Cancel an in-flight refresh when the user selects another company",
    )


def configure_logging(level: str) -> None:
    """Replace loguru's default sink with a stderr sink at the given level."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def get_settings() -> Settings:
    """Build settings from the environment and `.env`."""
    return Settings()
