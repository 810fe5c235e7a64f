"""Configuration management for Quote Desk.

Describes where the company directory comes from and a few UI options.
"""

from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from loguru import logger
from pydantic import BaseModel, Field, field_validator

DEFAULT_CONFIG_PATH = Path("config/config.yaml")


class DirectorySource(str, Enum):
    """Where the company directory is loaded from."""

    API = "api"
    STATIC = "static"


class DirectoryConfig(BaseModel):
    """Company directory configuration."""

    source: DirectorySource = Field(default=DirectorySource.API)
    companies: dict[str, str] = Field(
        default_factory=dict,
        description="Ordered company name -> ticker symbol mapping for the static source",
    )

    @field_validator("companies")
    @classmethod
    def validate_companies(cls, v: dict[str, str]) -> dict[str, str]:
        """Reject blank ticker symbols."""
        for name, symbol in v.items():
            if not symbol.strip():
                raise ValueError(f"Company '{name}' has an empty ticker symbol")
        return v


class UIConfig(BaseModel):
    """Streamlit page options."""

    page_title: str = Field(default="Quote Desk")
    page_icon: str = Field(default="📈")


class Config(BaseModel):
    """Root configuration model."""

    directory: DirectoryConfig = Field(default_factory=DirectoryConfig)
    ui: UIConfig = Field(default_factory=UIConfig)


def load_config(config_path: Path = DEFAULT_CONFIG_PATH) -> Config:
    """Load configuration from YAML file.

    Args:
        config_path: Path to config.yaml file

    Returns:
        Parsed configuration object. Defaults are used when the default
        path does not exist.

    Raises:
        FileNotFoundError: If an explicitly given config file doesn't exist
        yaml.YAMLError: If config file is malformed
    """
    if not config_path.exists():
        if config_path == DEFAULT_CONFIG_PATH:
            logger.debug(f"No configuration at {config_path}, using defaults")
            return Config()
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    logger.info(f"Loading configuration from {config_path}")

    with config_path.open("r") as f:
        raw_config: dict[str, Any] = yaml.safe_load(f) or {}

    config = Config(**raw_config)
    logger.debug(
        f"Directory source: {config.directory.source.value} "
        f"({len(config.directory.companies)} static companies)"
    )

    return config
