"""In-memory records client.

No network calls. Useful for local dry runs and tests, and as a reference
when implementing new transports: implement BaseRecordsClient and register
the adapter in RecordsClientFactory.
"""

import copy
import uuid
from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from typing import Any

from shelter.api.base import BaseRecordsClient
from shelter.api.exceptions import CollaboratorRejectedError, RecordNotFoundError
from shelter.entities import EntityType
from shelter.interchange.fields import DomainRecord
from shelter.workflow.stats import ALL_STATUSES

RecordValidator = Callable[[EntityType, DomainRecord], str | None]


class InMemoryRecordsClient(BaseRecordsClient):
    """Keeps records per entity in insertion order and assigns ``_id`` values.

    Status updates append a history entry attributed to ``actor``, the identity
    the API would derive from its credential.

    ``validator`` may return a rejection message for a record about to be
    created, mimicking the API's 400 responses.
    """

    def __init__(
        self,
        validator: RecordValidator | None = None,
        actor: str = "Admin",
    ) -> None:
        self._records: dict[EntityType, dict[str, DomainRecord]] = {
            entity: {} for entity in EntityType
        }
        self._validator = validator
        self._actor = actor

    def create_record(self, entity: EntityType, record: DomainRecord) -> DomainRecord:
        if self._validator is not None:
            reason = self._validator(entity, record)
            if reason:
                raise CollaboratorRejectedError(reason, status_code=400)
        stored = copy.deepcopy(record)
        record_id = str(stored.get("_id") or uuid.uuid4().hex)
        stored["_id"] = record_id
        self._records[entity][record_id] = stored
        return copy.deepcopy(stored)

    def update_record_status(
        self,
        entity: EntityType,
        record_id: str,
        new_status: str,
        notes: str | None = None,
    ) -> DomainRecord:
        stored = self._records[entity].get(record_id)
        if stored is None:
            raise RecordNotFoundError(f"{entity.value} record {record_id} not found")
        stored["status"] = new_status
        if entity is EntityType.VOLUNTEERS:
            stored["applicationStatus"] = new_status
        if notes:
            stored["adminNotes"] = notes
        if entity is EntityType.ANIMALS:
            return copy.deepcopy(stored)
        stored.setdefault("statusHistory", []).append({
            "status": new_status,
            "changedBy": self._actor,
            "changedAt": datetime.now(timezone.utc).isoformat(),
            "notes": notes,
        })
        return copy.deepcopy(stored)

    def fetch_records(
        self,
        entity: EntityType,
        filters: Mapping[str, Any] | None = None,
    ) -> list[DomainRecord]:
        status = (filters or {}).get("status")
        records = self._records[entity].values()
        if status is not None and status not in ALL_STATUSES:
            records = [r for r in records if r.get("status") == status]
        return [copy.deepcopy(record) for record in records]

