"""Who has acknowledged an announcement or document."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from intranet_core_api.models.engagement import EntityRef
from intranet_core_api.models.user import User
from intranet_core_api.repositories.registry import Repositories
from intranet_core_api.views.entity_resolver import UNKNOWN_LABEL, UNKNOWN_USER_LABEL


class AcknowledgementRow(BaseModel):
    user_id: str
    user_name: str
    user_email: str
    department: str
    acknowledged_on: datetime


class AcknowledgementReport:
    """Joins acknowledgements to users and departments."""

    def __init__(self, repositories: Repositories):
        self._repositories = repositories

    def rows(self, ref: EntityRef, company_id: str) -> list[AcknowledgementRow]:
        """Return one row per acknowledgement, newest first."""
        users = {user.id: user for user in self._repositories.users.list(company_id)}
        departments = {department.id: department.name for department in self._repositories.departments.list(company_id)}
        rows = []
        for acknowledgement in self._repositories.acknowledgements.for_entity(ref):
            if acknowledgement.company_id != company_id:
                continue
            user = users.get(acknowledgement.user_id)
            rows.append(
                AcknowledgementRow(
                    user_id=acknowledgement.user_id,
                    user_name=user.full_name if user else UNKNOWN_USER_LABEL,
                    user_email=user.email if user else "-",
                    department=self._department_name(user, departments),
                    acknowledged_on=acknowledgement.acknowledged_on,
                )
            )
        return sorted(rows, key=lambda row: row.acknowledged_on, reverse=True)

    @staticmethod
    def _department_name(user: User | None, departments: dict[str, str]) -> str:
        if user is None:
            return UNKNOWN_LABEL
        if user.department_id and user.department_id in departments:
            return departments[user.department_id]
        return user.department or UNKNOWN_LABEL

    def pending_users(self, ref: EntityRef, company_id: str) -> list[User]:
        """Active users of the company that have not acknowledged yet."""
        done = {row.user_id for row in self._repositories.acknowledgements.for_entity(ref)}
        return [
            user for user in self._repositories.users.list(company_id) if user.is_active and user.id not in done
        ]
