from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from shelter.api.exceptions import RecordNotFoundError
from shelter.entities import EntityType
from shelter.interchange.fields import DomainRecord


class BaseRecordsClient(ABC):
    """Contract for the records API the core calls into.

    ``syncs_animal_status`` is True when the backing API moves an inquiry's
    animal to Pending or Adopted itself as part of the inquiry status update.
    """

    syncs_animal_status: bool = False

    @abstractmethod
    def create_record(self, entity: EntityType, record: DomainRecord) -> DomainRecord:
        """Create one record.

        Args:
            entity: Collection the record belongs to.
            record: Nested record without a server-assigned id.

        Returns:
            The stored record, including its id.

        Raises:
            CollaboratorError: on network failure or rejection.
        """

    @abstractmethod
    def update_record_status(
        self,
        entity: EntityType,
        record_id: str,
        new_status: str,
        notes: str | None = None,
    ) -> DomainRecord:
        """Persist a status change for one record.

        Returns:
            The API's view of the record after the update.

        Raises:
            RecordNotFoundError: if ``record_id`` is unknown.
            CollaboratorError: on network failure or rejection.
        """

    @abstractmethod
    def fetch_records(
        self,
        entity: EntityType,
        filters: Mapping[str, Any] | None = None,
    ) -> list[DomainRecord]:
        """List records of a collection, optionally filtered.

        Raises:
            CollaboratorError: on network failure or rejection.
        """

    def find_record(self, entity: EntityType, record_id: str) -> DomainRecord:
        """Return the record with ``record_id`` from ``fetch_records``.

        Raises:
            RecordNotFoundError: if no fetched record has that id.
        """
        for record in self.fetch_records(entity):
            if str(record.get("_id") or record.get("id")) == record_id:
                return record
        raise RecordNotFoundError(f"{entity.value} record {record_id} not found")

    def close(self) -> None:
        """Release transport resources. No-op for clients that hold none."""
