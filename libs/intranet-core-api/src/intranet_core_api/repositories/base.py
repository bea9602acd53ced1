"""Company-scoped CRUD shim over the key-value store."""

from __future__ import annotations

import logging
from typing import Any, Callable, ClassVar, Generic, Iterable, TypeVar

from pydantic import ValidationError

from intranet_core_api.models.base import IntranetRecord, utc_now
from intranet_core_lib.errors import ValidationFailedError, NotFoundError
from intranet_core_lib.ids import generate_id
from intranet_core_lib.store.key_value_store import KeyValueStore
from intranet_core_lib.store.storage_keys import StorageKey

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=IntranetRecord)


class Repository(Generic[RecordT]):
    """Flat collection of records persisted under one storage key.

    Every call reads the collection from the store and every mutation
    writes the full collection back, so rows are returned in storage
    (insertion) order and concurrent writers are last-write-wins.
    """

    model: ClassVar[type[IntranetRecord]]
    storage_key: ClassVar[StorageKey]
    company_field: ClassVar[str | None] = "company_id"
    timestamp_field: ClassVar[str | None] = "created_on"
    active_field: ClassVar[str | None] = "is_active"
    allow_hard_delete: ClassVar[bool] = False

    def __init__(
        self,
        store: KeyValueStore,
        id_factory: Callable[[], str] = generate_id,
        clock: Callable[[], Any] = utc_now,
    ):
        self._store = store
        self._id_factory = id_factory
        self._clock = clock

    @property
    def name(self) -> str:
        """Return the model name used in error messages."""
        return self.model.__name__

    def now(self) -> Any:
        """Return the repository clock's current time."""
        return self._clock()

    def _parse(self, record: dict[str, Any]) -> RecordT | None:
        try:
            return self.model.model_validate(record)
        except ValidationError as exc:
            logger.warning("Skipping unreadable %s row %s: %d validation errors", self.name, record.get("id"), exc.error_count())
            return None

    def _load(self) -> list[RecordT]:
        rows = (self._parse(record) for record in self._store.read_collection(self.storage_key))
        return [row for row in rows if row is not None]

    def _unreadable(self) -> list[dict[str, Any]]:
        unreadable = []
        for record in self._store.read_collection(self.storage_key):
            try:
                self.model.model_validate(record)
            except ValidationError:
                unreadable.append(record)
        return unreadable

    def _save(self, rows: Iterable[RecordT]) -> None:
        # rows that fail validation are never returned but are written back untouched
        records = [row.to_record() for row in rows]
        self._store.write_collection(self.storage_key, records + self._unreadable())

    def all(self) -> list[RecordT]:
        """Return every row regardless of company."""
        return self._load()

    def list(self, company_id: str) -> list[RecordT]:
        """Return the rows owned by a company in storage order."""
        if self.company_field is None:
            raise TypeError(f"{self.name} records are not company scoped.")
        return [row for row in self._load() if getattr(row, self.company_field) == company_id]

    def filter(self, predicate: Callable[[RecordT], bool]) -> list[RecordT]:
        """Return the rows matching a predicate."""
        return [row for row in self._load() if predicate(row)]

    def get(self, record_id: str) -> RecordT | None:
        """Return one row or None."""
        return next((row for row in self._load() if row.id == record_id), None)

    def require(self, record_id: str) -> RecordT:
        """Return one row or raise ``NotFoundError``."""
        row = self.get(record_id)
        if row is None:
            raise NotFoundError(self.name, record_id)
        return row

    def create(self, **fields: Any) -> RecordT:
        """Append a new row with a fresh identifier and creation timestamp."""
        rows = self._load()
        taken = {row.id for row in rows}
        record_id = self._id_factory()
        while record_id in taken:
            record_id = self._id_factory()
        fields["id"] = record_id
        if self.timestamp_field and fields.get(self.timestamp_field) is None:
            fields[self.timestamp_field] = self._clock()
        row = self.model.model_validate(fields)
        rows.append(row)
        self._save(rows)
        logger.debug("Created %s %s", self.name, row.id)
        return row

    def _before_update(self, row: RecordT) -> RecordT:
        return row

    def revise(self, row: RecordT, **changes: Any) -> RecordT:
        """Return a validated copy of the row with changes applied; nothing is persisted."""
        return self.model.model_validate({**row.model_dump(), **changes})

    def update(self, row: RecordT) -> RecordT:
        """Replace the row with the same identifier."""
        rows = self._load()
        for index, existing in enumerate(rows):
            if existing.id == row.id:
                rows[index] = self._before_update(self.revise(row))
                self._save(rows)
                return rows[index]
        raise NotFoundError(self.name, row.id)

    def patch(self, record_id: str, **changes: Any) -> RecordT:
        """Apply field changes to one row."""
        return self.update(self.require(record_id).model_copy(update=changes))

    def soft_delete(self, record_id: str) -> RecordT:
        """Flip the activity flag off instead of removing the row."""
        if self.active_field is None:
            raise TypeError(f"{self.name} records cannot be soft deleted.")
        return self.patch(record_id, **{self.active_field: False})

    def delete(self, record_id: str) -> None:
        """Remove the row; missing rows are ignored."""
        if not self.allow_hard_delete:
            raise ValidationFailedError(f"{self.name} records are deactivated, not deleted.")
        self._save(row for row in self._load() if row.id != record_id)

    def count(self, company_id: str, predicate: Callable[[RecordT], bool] | None = None) -> int:
        """Return the number of company rows, optionally filtered."""
        rows = self.list(company_id)
        if predicate is None:
            return len(rows)
        return sum(1 for row in rows if predicate(row))
