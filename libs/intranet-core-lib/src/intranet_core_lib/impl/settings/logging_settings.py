"""Contains settings regarding logging."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Log level and record format."""

    model_config = SettingsConfigDict(env_prefix="LOG_", case_sensitive=False)

    level: str = Field(default="INFO")
    format: str = Field(default="%(asctime)s %(levelname)s %(name)s: %(message)s")
