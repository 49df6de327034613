from abc import ABC, abstractmethod
from collections.abc import Callable

from shelter.api.base import BaseRecordsClient
from shelter.entities import EntityType
from shelter.logging.logger import Log
from shelter.workflow.models import StatefulRecord


class TransitionHook(ABC):
    """Contract for side effects run after a transition is persisted."""

    @abstractmethod
    def on_transition(
        self,
        entity: EntityType,
        previous_status: str,
        record: StatefulRecord,
    ) -> None:
        """React to ``record`` having moved from ``previous_status``.

        Args:
            entity: Collection the record belongs to.
            previous_status: Status before the transition.
            record: The record after the transition, history included.
        """


class AnimalStatusSyncHook(TransitionHook):
    """Keeps an animal's availability in step with its adoption inquiry.

    Entering ``Approved`` puts the animal on hold (``Pending``); entering
    ``Completed`` marks it ``Adopted``. Re-entering the same status does nothing.
    """

    ANIMAL_STATUS_BY_INQUIRY_STATUS = {
        "Approved": "Pending",
        "Completed": "Adopted",
    }

    def __init__(self, client: BaseRecordsClient) -> None:
        self._client = client

    def on_transition(
        self,
        entity: EntityType,
        previous_status: str,
        record: StatefulRecord,
    ) -> None:
        if entity is not EntityType.ADOPTION_INQUIRIES:
            return
        if record.status == previous_status:
            return
        animal_status = self.ANIMAL_STATUS_BY_INQUIRY_STATUS.get(record.status)
        if animal_status is None:
            return
        if record.subject_id is None:
            Log.warning(f"Inquiry {record.id} has no animal, skipping animal status sync")
            return
        self._client.update_record_status(
            EntityType.ANIMALS, record.subject_id, animal_status
        )
        Log.info(f"Animal {record.subject_id} set to {animal_status} for inquiry {record.id}")


class NotificationHook(TransitionHook):
    """Hands each transition to a notifier (e.g. an email sender)."""

    def __init__(self, notify: Callable[[EntityType, StatefulRecord], None]) -> None:
        self._notify = notify

    def on_transition(
        self,
        entity: EntityType,
        previous_status: str,
        record: StatefulRecord,
    ) -> None:
        _ = previous_status
        self._notify(entity, record)
