"""Billing and infrastructure records."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from intranet_core_api.models.base import IntranetRecord
from intranet_core_api.models.company import PlanType


class PaymentStatus(StrEnum):
    """Payment order lifecycle."""

    CREATED = "Created"
    PENDING = "Pending"
    PAID = "Paid"
    FAILED = "Failed"
    CANCELLED = "Cancelled"


class PaymentOrder(IntranetRecord):
    """Plan purchase order."""

    company_id: str
    plan_name: PlanType
    duration_months: int
    amount_in_paise: int
    currency: str = "INR"
    razorpay_order_id: str | None = None
    razorpay_payment_id: str | None = None
    razorpay_signature: str | None = None
    status: PaymentStatus = PaymentStatus.CREATED
    created_on: datetime
    paid_on: datetime | None = None


class RazorpayConfig(BaseModel):
    """Platform wide payment gateway credentials (single record)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    key_id: str
    key_secret: str


class CustomDomain(IntranetRecord):
    """Company owned host name pending or passing DNS verification."""

    company_id: str
    domain_name: str
    dns_verification_token: str
    is_verified: bool = False
    created_on: datetime
    verified_on: datetime | None = None
    last_check: datetime | None = None
