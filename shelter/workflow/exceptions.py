class WorkflowError(Exception):
    """Base exception for status workflow errors."""


class InvalidStatusError(WorkflowError):
    """Raised when a transition targets a status outside the workflow."""


class TransitionNotAllowedError(WorkflowError):
    """Raised when a transition policy rejects a move between two statuses."""


class RecordPayloadError(WorkflowError):
    """Raised when an API payload cannot be read as a stateful record."""
