"""Translate REST payloads to and from StatefulRecord values."""

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from shelter.workflow.exceptions import RecordPayloadError
from shelter.workflow.models import StatefulRecord, StatusTransitionEntry, WorkflowDefinition

_ID_KEYS = ("_id", "id")
_TIMESTAMP_KEYS = ("changedAt", "timestamp")
_SUBJECT_KEY = "animal"
_DEFAULT_ACTOR = "Admin"


def stateful_record_from_payload(
    payload: Mapping[str, Any],
    workflow: WorkflowDefinition,
) -> StatefulRecord:
    """Build a StatefulRecord from an API record.

    A missing status falls back to the last history entry, then to the
    workflow's initial status.

    Raises:
        RecordPayloadError: if the payload has no id or a malformed history.
    """
    record_id = _build_id(payload)
    history = _build_history(payload.get("statusHistory"), record_id)
    status = payload.get(workflow.status_field) or payload.get("status")
    if history:
        status = history[-1].status
    if not status:
        status = workflow.initial
    if not isinstance(status, str):
        raise RecordPayloadError(f"Record {record_id}: status must be a string")
    return StatefulRecord(
        id=record_id,
        status=status,
        status_history=history,
        admin_notes=payload.get("adminNotes") or None,
        subject_id=_build_subject_id(payload.get(_SUBJECT_KEY)),
    )


def stateful_record_to_payload(
    record: StatefulRecord,
    workflow: WorkflowDefinition,
) -> dict[str, Any]:
    """Render a StatefulRecord in the API's field names."""
    payload: dict[str, Any] = {
        "_id": record.id,
        workflow.status_field: record.status,
        "statusHistory": [
            {
                "status": entry.status,
                "changedBy": entry.changed_by,
                "changedAt": entry.timestamp.isoformat(),
                "notes": entry.notes,
            }
            for entry in record.status_history
        ],
    }
    if record.admin_notes is not None:
        payload["adminNotes"] = record.admin_notes
    if record.subject_id is not None:
        payload[_SUBJECT_KEY] = record.subject_id
    return payload


def _build_id(payload: Mapping[str, Any]) -> str:
    for key in _ID_KEYS:
        value = payload.get(key)
        if value:
            return str(value)
    raise RecordPayloadError("Record payload has no '_id' or 'id'")


def _build_subject_id(raw: Any) -> str | None:
    if raw is None or raw == "":
        return None
    if isinstance(raw, Mapping):
        for key in _ID_KEYS:
            if raw.get(key):
                return str(raw[key])
        return None
    return str(raw)


def _build_history(raw: Any, record_id: str) -> tuple[StatusTransitionEntry, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise RecordPayloadError(f"Record {record_id}: 'statusHistory' must be a list")
    return tuple(_build_entry(item, record_id, i) for i, item in enumerate(raw))


def _build_entry(raw: Any, record_id: str, index: int) -> StatusTransitionEntry:
    if not isinstance(raw, Mapping):
        raise RecordPayloadError(
            f"Record {record_id}: history entry {index} must be an object"
        )
    status = raw.get("status")
    if not status or not isinstance(status, str):
        raise RecordPayloadError(
            f"Record {record_id}: history entry {index} has no status"
        )
    notes = raw.get("notes")
    return StatusTransitionEntry(
        status=status,
        changed_by=str(raw.get("changedBy") or _DEFAULT_ACTOR),
        timestamp=_build_timestamp(raw, record_id, index),
        notes=notes if isinstance(notes, str) else None,
    )


def _build_timestamp(raw: Mapping[str, Any], record_id: str, index: int) -> datetime:
    for key in _TIMESTAMP_KEYS:
        value = raw.get(key)
        if isinstance(value, datetime):
            return value
        if isinstance(value, str) and value:
            try:
                return datetime.fromisoformat(value.replace("Z", "+00:00"))
            except ValueError as exc:
                raise RecordPayloadError(
                    f"Record {record_id}: history entry {index} has a bad timestamp: {exc}"
                ) from exc
    raise RecordPayloadError(
        f"Record {record_id}: history entry {index} has no timestamp"
    )
