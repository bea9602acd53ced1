"""Helpers for building principals from stored user records."""

from __future__ import annotations

from typing import Any

from intranet_core_lib.principal import Principal, RoleType


def _as_role(value: Any) -> RoleType:
    if isinstance(value, RoleType):
        return value
    if value is None:
        return RoleType.MEMBER
    try:
        return RoleType(str(value).strip())
    except ValueError:
        return RoleType.MEMBER


def principal_from_record(record: dict[str, Any]) -> Principal:
    """Build a principal from a serialized user record (camelCase keys)."""
    return Principal(
        subject=str(record["id"]),
        company_id=str(record.get("companyId") or ""),
        role=_as_role(record.get("role")),
        email=record.get("email"),
        full_name=record.get("fullName"),
    )
