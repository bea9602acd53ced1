"""Base class for persisted records."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Read a naive datetime as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class IntranetRecord(BaseModel):
    """Flat record stored with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, use_enum_values=False)

    id: str

    @field_validator("*", mode="after")
    @classmethod
    def _assume_utc(cls, value: Any) -> Any:
        if isinstance(value, datetime):
            return as_utc(value)
        return value

    def to_record(self) -> dict[str, Any]:
        """Serialize for storage."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
