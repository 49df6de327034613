from collections.abc import Callable, Iterable
from typing import Any

from shelter.importer.models import ImportFailure, ImportTally
from shelter.interchange.fields import DomainRecord
from shelter.logging.logger import Log

CreateRecord = Callable[[DomainRecord], Any]


class BulkImportExecutor:
    """Apply records one at a time against a creation collaborator.

    A failed creation is counted and the batch carries on. Earlier successes
    are never rolled back and nothing is retried.
    """

    def run(self, records: Iterable[DomainRecord], create: CreateRecord) -> ImportTally:
        """Create each record in input order and tally the outcomes."""
        tally = ImportTally()
        for index, record in enumerate(records):
            try:
                create(record)
            except Exception as exc:
                self._handle_failure(tally, index, exc)
            else:
                tally.succeeded += 1
        Log.info(tally.summary(), succeeded=tally.succeeded, failed=tally.failed)
        return tally

    @staticmethod
    def _handle_failure(tally: ImportTally, index: int, exc: Exception) -> None:
        tally.failed += 1
        tally.failures.append(ImportFailure(index=index, reason=str(exc)))
        Log.error(f"Record {index} failed to import: {exc}")
