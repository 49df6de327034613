class InterchangeError(Exception):
    """Base exception for CSV interchange errors."""


class MalformedDocumentError(InterchangeError):
    """Raised when a CSV document has no usable header or no data rows."""


class RowDecodeError(InterchangeError):
    """Raised when a single data row cannot be decoded into a record."""

    def __init__(self, reason: str, row_index: int | None = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.row_index = row_index
