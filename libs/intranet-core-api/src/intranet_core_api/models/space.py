"""Space and membership models."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import Field

from intranet_core_api.models.base import IntranetRecord


class SpaceRole(StrEnum):
    """Privilege of a user inside one space."""

    MEMBER = "Member"
    SPACE_MANAGER = "SpaceManager"


class Space(IntranetRecord):
    """Content container scoped to a company."""

    space_name: str
    description: str = ""
    company_id: str
    created_by: str
    created_at: datetime | None = None
    cover_image_url: str | None = Field(default=None, alias="coverImageURL")


class SpaceMember(IntranetRecord):
    """Grants a user a role inside a space while active."""

    space_id: str
    user_id: str
    role_in_space: SpaceRole = SpaceRole.MEMBER
    is_active: bool = True
    created_on: datetime | None = None
