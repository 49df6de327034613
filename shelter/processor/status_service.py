from collections.abc import Sequence

from shelter.api.base import BaseRecordsClient
from shelter.entities import EntityType
from shelter.logging.logger import Log
from shelter.workflow.definitions import WORKFLOWS
from shelter.workflow.engine import StatusWorkflowEngine
from shelter.workflow.hooks import AnimalStatusSyncHook, TransitionHook
from shelter.workflow.models import StatefulRecord
from shelter.workflow.serialization import stateful_record_from_payload


class StatusService:
    """Validates a transition, persists it, then runs hooks.

    Hook failures are logged and never undo a persisted transition.
    """

    def __init__(
        self,
        client: BaseRecordsClient,
        engines: dict[EntityType, StatusWorkflowEngine],
        hooks: Sequence[TransitionHook] = (),
    ) -> None:
        self._client = client
        self._engines = engines
        self._hooks = list(hooks)

    def load_record(self, entity: EntityType, record_id: str) -> StatefulRecord:
        """Fetch a fresh copy of a record from the API."""
        payload = self._client.find_record(entity, record_id)
        return stateful_record_from_payload(payload, self._engine(entity).workflow)

    def update_status(
        self,
        entity: EntityType,
        record: StatefulRecord,
        new_status: str,
        actor: str,
        notes: str | None = None,
    ) -> StatefulRecord:
        """Apply and persist one transition.

        Raises:
            InvalidStatusError: if ``new_status`` is unknown; nothing is persisted.
            CollaboratorError: if the API refuses the update; hooks do not run.
        """
        updated = self._engine(entity).transition(record, new_status, actor, notes)
        self._client.update_record_status(entity, record.id, new_status, notes)
        for hook in self._hooks:
            try:
                hook.on_transition(entity, record.status, updated)
            except Exception as exc:
                Log.error(
                    f"{type(hook).__name__} failed for {entity.value} {record.id}: {exc}"
                )
        return updated

    def _engine(self, entity: EntityType) -> StatusWorkflowEngine:
        engine = self._engines.get(entity)
        if engine is None:
            raise ValueError(f"Entity '{entity.value}' has no status workflow")
        return engine


def build_status_service(client: BaseRecordsClient) -> StatusService:
    """Status service for every workflow entity, syncing animals on adoption.

    The sync hook is only attached when the client's API does not already
    update the animal on its own.
    """
    engines = {
        entity: StatusWorkflowEngine(workflow) for entity, workflow in WORKFLOWS.items()
    }
    hooks: list[TransitionHook] = []
    if not client.syncs_animal_status:
        hooks.append(AnimalStatusSyncHook(client))
    return StatusService(client, engines, hooks=hooks)
