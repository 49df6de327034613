from collections.abc import Callable, Mapping
from datetime import date
from functools import partial
from pathlib import Path

from shelter.api.base import BaseRecordsClient
from shelter.entities import EntityType
from shelter.importer.executor import BulkImportExecutor
from shelter.interchange.codec import CsvCodec
from shelter.logging.logger import Log
from shelter.processor.exceptions import NothingToExportError
from shelter.processor.file_loader import CsvFileLoader, export_file_path
from shelter.processor.pipeline import PipelineContext, PipelineStep


class ReadCsvStep(PipelineStep):
    def __init__(self, file_loader: CsvFileLoader) -> None:
        self._file_loader = file_loader

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.source_path is None:
            raise ValueError("PipelineContext.source_path must be set before reading")
        context.text = self._file_loader.load(context.source_path)
        Log.info(f"Read {len(context.text)} chars from {context.source_path}")
        return context


class DecodeCsvStep(PipelineStep):
    def __init__(self, codecs: Mapping[EntityType, CsvCodec]) -> None:
        self._codecs = codecs

    def run(self, context: PipelineContext) -> PipelineContext:
        result = self._codecs[context.entity].decode_text(context.text)
        context.decode_result = result
        context.records = result.records
        for error in result.row_errors:
            Log.warning(
                f"Row {error.row_index} rejected: {error.reason}",
                entity=context.entity.value,
            )
        return context


class RunImportStep(PipelineStep):
    def __init__(self, executor: BulkImportExecutor, client: BaseRecordsClient) -> None:
        self._executor = executor
        self._client = client

    def run(self, context: PipelineContext) -> PipelineContext:
        create = partial(self._client.create_record, context.entity)
        context.tally = self._executor.run(context.records, create)
        return context


class FetchRecordsStep(PipelineStep):
    def __init__(self, client: BaseRecordsClient) -> None:
        self._client = client

    def run(self, context: PipelineContext) -> PipelineContext:
        filters = {"status": context.status_filter} if context.status_filter else None
        context.records = self._client.fetch_records(context.entity, filters)
        Log.info(f"Fetched {len(context.records)} {context.entity.value} records")
        return context


class EncodeCsvStep(PipelineStep):
    def __init__(self, codecs: Mapping[EntityType, CsvCodec]) -> None:
        self._codecs = codecs

    def run(self, context: PipelineContext) -> PipelineContext:
        if not context.records:
            raise NothingToExportError(f"No {context.entity.value} to export.")
        codec = self._codecs[context.entity]
        context.export_text = codec.encode_text(context.records, context.columns)
        return context


class WriteExportStep(PipelineStep):
    def __init__(
        self,
        file_loader: CsvFileLoader,
        export_dir: Path,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._file_loader = file_loader
        self._export_dir = export_dir
        self._today = today

    def run(self, context: PipelineContext) -> PipelineContext:
        path = export_file_path(self._export_dir, context.entity, self._today())
        context.export_path = self._file_loader.write(path, context.export_text)
        Log.info(f"Exported {len(context.records)} {context.entity.value} records to {path}")
        return context
