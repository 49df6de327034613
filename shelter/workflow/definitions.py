from shelter.entities import EntityType
from shelter.workflow.models import WorkflowDefinition

ADOPTION_INQUIRY_WORKFLOW = WorkflowDefinition(
    name="adoption_inquiry",
    statuses=("Pending", "Under Review", "Approved", "Rejected", "Completed"),
    initial="Pending",
)

VOLUNTEER_APPLICATION_WORKFLOW = WorkflowDefinition(
    name="volunteer_application",
    statuses=("pending", "approved", "rejected", "contacted"),
    initial="pending",
    status_field="applicationStatus",
)

ANIMAL_STATUSES = (
    "Available", "Adopted", "Pending", "Medical Hold", "Foster", "Not Available",
)

WORKFLOWS: dict[EntityType, WorkflowDefinition] = {
    EntityType.ADOPTION_INQUIRIES: ADOPTION_INQUIRY_WORKFLOW,
    EntityType.VOLUNTEERS: VOLUNTEER_APPLICATION_WORKFLOW,
}


def workflow_for(entity: EntityType) -> WorkflowDefinition:
    """Return the workflow governing ``entity``.

    Raises:
        ValueError: if the entity has no status workflow.
    """
    workflow = WORKFLOWS.get(entity)
    if workflow is None:
        raise ValueError(
            f"Entity '{entity.value}' has no status workflow. "
            f"Choose from: {[e.value for e in WORKFLOWS]}"
        )
    return workflow
