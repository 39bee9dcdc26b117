from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["development", "production", "test"]


class EnvironmentVariables(BaseSettings):
    """Bootstrap values read before ``config.yaml``: which file, which environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    app_environment: Environment = Field(
        default="development",
        description="Selects the <ENV>_ variable prefix applied to config.yaml",
    )
    config_file: str = Field(
        default="config.yaml", description="Path of the templated YAML config"
    )
