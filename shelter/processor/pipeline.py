from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path

from shelter.entities import EntityType
from shelter.importer.models import ImportTally
from shelter.interchange.codec import DecodeResult
from shelter.interchange.fields import DomainRecord


@dataclass(slots=True)
class PipelineContext:
    entity: EntityType
    source_path: Path | None = None
    text: str = ""
    decode_result: DecodeResult | None = None
    tally: ImportTally | None = None
    status_filter: str | None = None
    records: list[DomainRecord] = field(default_factory=list)
    columns: tuple[str, ...] | None = None
    export_text: str = ""
    export_path: Path | None = None


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
