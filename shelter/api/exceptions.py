class CollaboratorError(Exception):
    """Raised when the records API cannot complete a call."""


class CollaboratorNetworkError(CollaboratorError):
    """Raised when the records API call fails due to network/infrastructure issues."""


class CollaboratorRejectedError(CollaboratorError):
    """Raised when the records API answers with a non-success status."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class RecordNotFoundError(CollaboratorError):
    """Raised when a record id is unknown to the records API."""
