"""Tenant models."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import Field

from intranet_core_api.models.base import IntranetRecord


class PlanType(StrEnum):
    """Subscription tiers."""

    BASIC = "Basic"
    PRO = "Pro"


class RenewalStatus(StrEnum):
    """Subscription renewal state shown to administrators."""

    ACTIVE = "Active"
    EXPIRING_SOON = "ExpiringSoon"
    EXPIRED = "Expired"


class Company(IntranetRecord):
    """Isolation boundary that owns every other record."""

    company_name: str
    logo_url: str = Field(default="", alias="logoURL")
    favicon_url: str | None = Field(default=None, alias="faviconURL")
    primary_admin_email: str
    created_on: datetime
    invite_code: str | None = None
    primary_color: str | None = None
    secondary_color: str | None = None
    accent_color: str | None = None
    home_title: str | None = None
    show_logo_in_header: bool | None = None
    heading_font_family: str | None = None
    body_font_family: str | None = None
    plan_type: PlanType = PlanType.BASIC
    is_active: bool = True
    max_users: int | None = None
    notes: str | None = None
    subscription_start_date: datetime | None = None
    subscription_end_date: datetime | None = None
    is_subscription_active: bool = False
    renewal_status: RenewalStatus | None = None
    gemini_api_key: str | None = None
