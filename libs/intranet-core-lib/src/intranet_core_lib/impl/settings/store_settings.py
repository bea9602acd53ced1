"""Settings for the key-value store."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StoreSettings(BaseSettings):
    """Where and under which key names collections are persisted."""

    model_config = SettingsConfigDict(env_prefix="INTRANET_STORE_", case_sensitive=False)

    root_dir: str = Field(
        default="infrastructure/intranet/store",
        description="Directory holding one JSON file per collection.",
    )
    key_prefix: str = Field(
        default="intranet_",
        description="Prefix prepended to every logical collection name.",
    )

    @field_validator("key_prefix")
    @classmethod
    def _validate_prefix(cls, value: str) -> str:
        if any(separator in value for separator in ("/", "\\")):
            raise ValueError("INTRANET_STORE_KEY_PREFIX must not contain path separators.")
        return value
