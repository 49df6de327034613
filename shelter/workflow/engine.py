"""Status transitions with an append-only audit trail.

The engine validates the target status, consults the transition policy,
appends one history entry and returns a new record. It performs no I/O;
persisting the result and notifying anyone is the caller's job.
"""

from collections.abc import Callable
from dataclasses import replace
from datetime import datetime, timezone

from shelter.logging.logger import Log
from shelter.workflow.exceptions import InvalidStatusError
from shelter.workflow.models import StatefulRecord, StatusTransitionEntry, WorkflowDefinition
from shelter.workflow.policies import FreeTransitionPolicy, TransitionPolicy

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class StatusWorkflowEngine:
    """Applies status transitions for one workflow."""

    def __init__(
        self,
        workflow: WorkflowDefinition,
        policy: TransitionPolicy | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._workflow = workflow
        self._policy = policy or FreeTransitionPolicy()
        self._clock = clock or utc_now

    @property
    def workflow(self) -> WorkflowDefinition:
        return self._workflow

    def new_record(self, record_id: str, subject_id: str | None = None) -> StatefulRecord:
        """Build a record at the initial status with an empty history."""
        return StatefulRecord(
            id=record_id,
            status=self._workflow.initial,
            subject_id=subject_id,
        )

    def transition(
        self,
        record: StatefulRecord,
        new_status: str,
        actor: str,
        notes: str | None = None,
    ) -> StatefulRecord:
        """Move ``record`` to ``new_status`` and append an audit entry.

        Raises:
            InvalidStatusError: if ``new_status`` is not part of the workflow.
            TransitionNotAllowedError: if the policy rejects the move.
        """
        if not self._workflow.is_valid(new_status):
            raise InvalidStatusError(
                f"Invalid {self._workflow.name} status {new_status!r}. "
                f"Choose from: {list(self._workflow.statuses)}"
            )
        self._policy.check(record, new_status)

        entry = StatusTransitionEntry(
            status=new_status,
            changed_by=actor,
            timestamp=self._clock(),
            notes=notes,
        )
        updated = replace(
            record,
            status=new_status,
            status_history=record.status_history + (entry,),
            admin_notes=notes or record.admin_notes,
        )
        Log.info(
            f"{self._workflow.name} {record.id} moved {record.status} -> {new_status}",
            actor=actor,
        )
        return updated

    def current_status(self, record: StatefulRecord) -> str:
        """Status derived from the audit trail, falling back to the initial status."""
        latest = record.latest_entry
        if latest is not None:
            return latest.status
        return record.status or self._workflow.initial
