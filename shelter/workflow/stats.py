from collections.abc import Iterable

from shelter.workflow.models import StatefulRecord, WorkflowDefinition

ALL_STATUSES = frozenset({"All", "all"})


def count_by_status(
    records: Iterable[StatefulRecord],
    workflow: WorkflowDefinition,
) -> dict[str, int]:
    """Count records per workflow status, zero-filled, in workflow order.

    Statuses outside the workflow (legacy data) are counted after the known ones.
    """
    counts = dict.fromkeys(workflow.statuses, 0)
    for record in records:
        counts[record.status] = counts.get(record.status, 0) + 1
    return counts


def filter_by_status(
    records: Iterable[StatefulRecord],
    status: str | None,
) -> list[StatefulRecord]:
    """Keep records at ``status``. ``None``, ``All`` and ``all`` keep everything."""
    if status is None or status in ALL_STATUSES:
        return list(records)
    return [record for record in records if record.status == status]
