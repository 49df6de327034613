from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping

from shelter.workflow.exceptions import TransitionNotAllowedError
from shelter.workflow.models import StatefulRecord


class TransitionPolicy(ABC):
    """Contract for deciding whether a record may move to a status."""

    @abstractmethod
    def check(self, record: StatefulRecord, new_status: str) -> None:
        """Validate a move from ``record.status`` to ``new_status``.

        Args:
            record: The record as it is before the transition.
            new_status: A status already known to belong to the workflow.

        Raises:
            TransitionNotAllowedError: if the move is rejected.
        """


class FreeTransitionPolicy(TransitionPolicy):
    """Any status is reachable from any other, terminal ones included."""

    def check(self, record: StatefulRecord, new_status: str) -> None:
        _ = record, new_status


class AllowedTransitionsPolicy(TransitionPolicy):
    """Only the listed moves are accepted.

    Staying in the same status is always allowed so notes can be appended.
    """

    def __init__(self, allowed: Mapping[str, Iterable[str]]) -> None:
        self._allowed = {source: frozenset(targets) for source, targets in allowed.items()}

    def check(self, record: StatefulRecord, new_status: str) -> None:
        if new_status == record.status:
            return
        if new_status not in self._allowed.get(record.status, frozenset()):
            raise TransitionNotAllowedError(
                f"Cannot move record {record.id} from {record.status!r} to {new_status!r}"
            )
