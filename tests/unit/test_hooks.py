from unittest.mock import MagicMock

from shelter.entities import EntityType
from shelter.workflow.hooks import AnimalStatusSyncHook, NotificationHook
from shelter.workflow.models import StatefulRecord


def _make_inquiry(status: str, subject_id: str | None = "a1") -> StatefulRecord:
    return StatefulRecord(id="i1", status=status, subject_id=subject_id)


class TestAnimalStatusSyncHook:
    def test_approved_puts_animal_on_hold(self) -> None:
        client = MagicMock()

        AnimalStatusSyncHook(client).on_transition(
            EntityType.ADOPTION_INQUIRIES, "Under Review", _make_inquiry("Approved")
        )

        client.update_record_status.assert_called_once_with(EntityType.ANIMALS, "a1", "Pending")

    def test_completed_marks_animal_adopted(self) -> None:
        client = MagicMock()

        AnimalStatusSyncHook(client).on_transition(
            EntityType.ADOPTION_INQUIRIES, "Approved", _make_inquiry("Completed")
        )

        client.update_record_status.assert_called_once_with(EntityType.ANIMALS, "a1", "Adopted")

    def test_other_statuses_do_nothing(self) -> None:
        client = MagicMock()

        AnimalStatusSyncHook(client).on_transition(
            EntityType.ADOPTION_INQUIRIES, "Pending", _make_inquiry("Rejected")
        )

        client.update_record_status.assert_not_called()

    def test_reentering_same_status_does_nothing(self) -> None:
        client = MagicMock()

        AnimalStatusSyncHook(client).on_transition(
            EntityType.ADOPTION_INQUIRIES, "Approved", _make_inquiry("Approved")
        )

        client.update_record_status.assert_not_called()

    def test_missing_animal_is_skipped(self) -> None:
        client = MagicMock()

        AnimalStatusSyncHook(client).on_transition(
            EntityType.ADOPTION_INQUIRIES, "Pending", _make_inquiry("Approved", subject_id=None)
        )

        client.update_record_status.assert_not_called()

    def test_ignores_volunteers(self) -> None:
        client = MagicMock()

        AnimalStatusSyncHook(client).on_transition(
            EntityType.VOLUNTEERS, "pending", StatefulRecord(id="v1", status="approved")
        )

        client.update_record_status.assert_not_called()


class TestNotificationHook:
    def test_forwards_transition(self) -> None:
        notify = MagicMock()
        record = _make_inquiry("Approved")

        NotificationHook(notify).on_transition(EntityType.ADOPTION_INQUIRIES, "Pending", record)

        notify.assert_called_once_with(EntityType.ADOPTION_INQUIRIES, record)
