"""Settings for custom domain verification."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DomainSettings(BaseSettings):
    """Controls the simulated DNS verification."""

    model_config = SettingsConfigDict(env_prefix="INTRANET_DOMAIN_", case_sensitive=False)

    verification_delay_seconds: float = Field(default=1.5)
    token_prefix: str = Field(default="companyhub-verification")
