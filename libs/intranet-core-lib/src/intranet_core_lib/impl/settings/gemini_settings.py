"""Settings for the Gemini backed question answerer."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GeminiSettings(BaseSettings):
    """Model selection and call limits.

    The API key itself is configured per company, not here.
    """

    model_config = SettingsConfigDict(env_prefix="GEMINI_", case_sensitive=False)

    model: str = Field(default="gemini-2.5-flash")
    temperature: float = Field(default=0.3)
    max_output_tokens: int = Field(default=1024)
    timeout_seconds: float = Field(default=30.0, description="Upper bound for a single AI call.")
