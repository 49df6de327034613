from collections.abc import Sequence
from pathlib import Path

from shelter.api.base import BaseRecordsClient
from shelter.config.settings import Settings
from shelter.importer.executor import BulkImportExecutor
from shelter.interchange.schemas import CODECS
from shelter.logging.logger import Log
from shelter.processor.file_loader import CsvFileLoader
from shelter.processor.pipeline import PipelineContext, PipelineStep
from shelter.processor.steps import (
    DecodeCsvStep,
    EncodeCsvStep,
    FetchRecordsStep,
    ReadCsvStep,
    RunImportStep,
    WriteExportStep,
)


class Processor:
    """Runs pipeline steps in order over a shared context.

    Import: read -> decode -> create each record.
    Export: fetch -> encode -> write file.
    """

    def __init__(self, steps: Sequence[PipelineStep]) -> None:
        self._steps = list(steps)

    def run(self, context: PipelineContext) -> PipelineContext:
        Log.info(f"Processing {context.entity.value} with {len(self._steps)} steps")
        for step in self._steps:
            try:
                context = step.run(context)
            except Exception as exc:
                Log.error(f"{type(step).__name__} failed for {context.entity.value}: {exc}")
                raise
        return context


def build_import_processor(client: BaseRecordsClient) -> Processor:
    """Build the CSV import pipeline around a records client."""
    return Processor(steps=[
        ReadCsvStep(CsvFileLoader()),
        DecodeCsvStep(CODECS),
        RunImportStep(BulkImportExecutor(), client),
    ])


def build_export_processor(
    settings: Settings,
    client: BaseRecordsClient,
    export_dir: Path | None = None,
) -> Processor:
    """Build the CSV export pipeline writing into ``export_dir`` or settings.export_dir."""
    file_loader = CsvFileLoader()
    return Processor(steps=[
        FetchRecordsStep(client),
        EncodeCsvStep(CODECS),
        WriteExportStep(file_loader, export_dir or Path(settings.export_dir)),
    ])
