from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class StatusTransitionEntry:
    """One audit-trail entry. Never edited once written."""

    status: str
    changed_by: str
    timestamp: datetime
    notes: str | None = None


@dataclass(frozen=True)
class StatefulRecord:
    """A record whose lifecycle is governed by a workflow.

    ``subject_id`` points at the record this one concerns, e.g. the animal an
    adoption inquiry is about.
    """

    id: str
    status: str
    status_history: tuple[StatusTransitionEntry, ...] = field(default_factory=tuple)
    admin_notes: str | None = None
    subject_id: str | None = None

    @property
    def latest_entry(self) -> StatusTransitionEntry | None:
        return self.status_history[-1] if self.status_history else None


@dataclass(frozen=True)
class WorkflowDefinition:
    """Closed set of statuses for one record type."""

    name: str
    statuses: tuple[str, ...]
    initial: str
    status_field: str = "status"

    def __post_init__(self) -> None:
        if self.initial not in self.statuses:
            raise ValueError(
                f"Initial status {self.initial!r} is not one of {list(self.statuses)}"
            )

    def is_valid(self, status: str) -> bool:
        return status in self.statuses
