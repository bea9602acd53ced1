"""Repositories for payment orders, gateway config and custom domains."""

from __future__ import annotations

from intranet_core_api.models.billing import CustomDomain, PaymentOrder, RazorpayConfig
from intranet_core_api.repositories.base import Repository
from intranet_core_lib.store.key_value_store import KeyValueStore
from intranet_core_lib.store.storage_keys import StorageKey


class PaymentOrderRepository(Repository[PaymentOrder]):
    model = PaymentOrder
    storage_key = StorageKey.PAYMENT_ORDERS
    active_field = None

    def history(self, company_id: str | None = None) -> list[PaymentOrder]:
        """Return orders newest first, optionally for one company."""
        rows = self.all() if company_id is None else self.list(company_id)
        return sorted(rows, key=lambda row: row.created_on, reverse=True)

    def get_by_gateway_order_id(self, razorpay_order_id: str) -> PaymentOrder | None:
        return next((row for row in self._load() if row.razorpay_order_id == razorpay_order_id), None)


class CustomDomainRepository(Repository[CustomDomain]):
    model = CustomDomain
    storage_key = StorageKey.CUSTOM_DOMAINS
    active_field = None
    allow_hard_delete = True

    def get_by_name(self, domain_name: str) -> CustomDomain | None:
        needle = domain_name.strip().lower()
        return next((row for row in self._load() if row.domain_name == needle), None)


class RazorpayConfigStore:
    """Single platform wide gateway configuration record."""

    def __init__(self, store: KeyValueStore):
        self._store = store

    def get(self) -> RazorpayConfig | None:
        record = self._store.read_record(StorageKey.RAZORPAY_CONFIG)
        return RazorpayConfig.model_validate(record) if record else None

    def save(self, config: RazorpayConfig) -> None:
        self._store.write_record(StorageKey.RAZORPAY_CONFIG, config.model_dump(by_alias=True))
