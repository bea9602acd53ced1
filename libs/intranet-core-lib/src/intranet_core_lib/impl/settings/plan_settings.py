"""Settings describing the Basic/Pro plan allowances."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PlanSettings(BaseSettings):
    """Limits and feature gates applied per subscription plan."""

    model_config = SettingsConfigDict(env_prefix="INTRANET_PLAN_", case_sensitive=False)

    basic_max_users: int = Field(default=50, description="Active users allowed on the Basic plan.")
    basic_max_spaces: int = Field(default=5, description="Spaces allowed on the Basic plan.")
    basic_restricted_features: list[str] = Field(
        default_factory=lambda: ["ai", "analytics", "policies", "advanced_branding"],
        description="Feature keys unavailable without an active Pro subscription.",
    )
    expiring_soon_days: int = Field(
        default=7,
        description="Days before the subscription end at which renewal status turns ExpiringSoon.",
    )
    trial_days: int = Field(default=30, description="Length of the subscription window for new companies.")
    default_max_users: int = Field(default=10, description="maxUsers recorded on newly registered companies.")
