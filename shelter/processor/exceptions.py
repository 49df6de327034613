class ProcessorError(Exception):
    """Base exception for all import/export processing errors."""


class SourceFileError(ProcessorError):
    """Raised when a CSV file cannot be read from disk."""


class NothingToExportError(ProcessorError):
    """Raised when an export finds no records to write."""
