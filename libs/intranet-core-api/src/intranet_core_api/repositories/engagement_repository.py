"""Repositories for notifications, activity logs, favorites and acknowledgements."""

from __future__ import annotations

import logging

from intranet_core_api.models.engagement import (
    ActionType,
    ActivityLog,
    EntityRef,
    EntityType,
    FavoriteItem,
    Notification,
    ReadAcknowledgement,
)
from intranet_core_api.repositories.base import Repository
from intranet_core_lib.store.storage_keys import StorageKey

logger = logging.getLogger(__name__)


class NotificationRepository(Repository[Notification]):
    model = Notification
    storage_key = StorageKey.NOTIFICATIONS
    active_field = None

    def for_user(self, user_id: str) -> list[Notification]:
        """Return a user's notifications, newest first."""
        rows = [row for row in self._load() if row.user_id == user_id]
        return sorted(rows, key=lambda row: row.created_on, reverse=True)

    def unread_count(self, user_id: str) -> int:
        return sum(1 for row in self.for_user(user_id) if not row.is_read)

    def mark_read(self, notification_id: str) -> Notification:
        return self.patch(notification_id, is_read=True)

    def mark_all_read(self, user_id: str) -> int:
        """Mark every notification of a user as read; return how many changed."""
        rows = self._load()
        changed = 0
        for index, row in enumerate(rows):
            if row.user_id == user_id and not row.is_read:
                rows[index] = row.model_copy(update={"is_read": True})
                changed += 1
        if changed:
            self._save(rows)
        return changed


class ActivityLogRepository(Repository[ActivityLog]):
    model = ActivityLog
    storage_key = StorageKey.ACTIVITY_LOGS
    active_field = None

    def record(
        self,
        company_id: str,
        user_id: str,
        ref: EntityRef,
        action_type: ActionType,
        description: str | None = None,
    ) -> ActivityLog:
        """Append an audit entry."""
        return self.create(
            company_id=company_id,
            user_id=user_id,
            entity_type=ref.entity_type,
            entity_id=ref.entity_id,
            action_type=action_type,
            description=description,
        )

    def query(
        self,
        company_id: str,
        entity_type: EntityType | None = None,
        entity_id: str | None = None,
        action_type: ActionType | None = None,
    ) -> list[ActivityLog]:
        """Return a company's entries, newest first, narrowed by the given filters."""
        rows = [
            row
            for row in self.list(company_id)
            if (entity_type is None or row.entity_type == entity_type)
            and (entity_id is None or row.entity_id == entity_id)
            and (action_type is None or row.action_type == action_type)
        ]
        return sorted(rows, key=lambda row: row.created_on, reverse=True)


class FavoriteRepository(Repository[FavoriteItem]):
    model = FavoriteItem
    storage_key = StorageKey.FAVORITES

    def for_user(self, user_id: str) -> list[FavoriteItem]:
        """Return the active favorites of a user."""
        return [row for row in self._load() if row.user_id == user_id and row.is_active]

    def find(self, user_id: str, ref: EntityRef) -> FavoriteItem | None:
        return next((row for row in self._load() if row.user_id == user_id and row.points_at(ref)), None)

    def is_favorite(self, user_id: str, ref: EntityRef) -> bool:
        existing = self.find(user_id, ref)
        return existing is not None and existing.is_active

    def toggle(self, company_id: str, user_id: str, ref: EntityRef) -> bool:
        """Flip the favorite flag for a (user, entity) pair and return the new state.

        The pair owns at most one row; later toggles reuse it.
        """
        existing = self.find(user_id, ref)
        if existing is not None:
            updated = self.update(existing.model_copy(update={"is_active": not existing.is_active}))
            return updated.is_active
        self.create(
            company_id=company_id,
            user_id=user_id,
            entity_type=ref.entity_type,
            entity_id=ref.entity_id,
            is_active=True,
        )
        return True


class ReadAcknowledgementRepository(Repository[ReadAcknowledgement]):
    model = ReadAcknowledgement
    storage_key = StorageKey.READ_ACKNOWLEDGEMENTS
    timestamp_field = "acknowledged_on"
    active_field = None

    def for_user(self, user_id: str) -> list[ReadAcknowledgement]:
        return [row for row in self._load() if row.user_id == user_id]

    def for_entity(self, ref: EntityRef) -> list[ReadAcknowledgement]:
        return [row for row in self._load() if row.points_at(ref)]

    def find(self, user_id: str, ref: EntityRef) -> ReadAcknowledgement | None:
        return next((row for row in self._load() if row.user_id == user_id and row.points_at(ref)), None)

    def acknowledge(self, company_id: str, user_id: str, ref: EntityRef) -> ReadAcknowledgement:
        """Record an acknowledgement once; repeated calls return the first row."""
        existing = self.find(user_id, ref)
        if existing is not None:
            return existing
        return self.create(
            company_id=company_id,
            user_id=user_id,
            entity_type=ref.entity_type,
            entity_id=ref.entity_id,
        )
