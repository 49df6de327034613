from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from shelter.interchange.exceptions import MalformedDocumentError, RowDecodeError
from shelter.interchange.fields import DomainRecord, FieldTable, decode_row, encode_record
from shelter.interchange.tokenizer import serialize_line, split_lines, tokenize_line
from shelter.logging.logger import Log

LINE_TERMINATOR = "\r\n"


@dataclass
class CsvDocument:
    """Ordered rows of raw cells. Row 0 is the header."""

    rows: list[list[str]] = field(default_factory=list)

    @property
    def header(self) -> list[str]:
        return self.rows[0] if self.rows else []

    @property
    def data_rows(self) -> list[list[str]]:
        return self.rows[1:]


@dataclass(frozen=True)
class RowError:
    """A data row excluded from the decoded records."""

    row_index: int
    reason: str


@dataclass
class DecodeResult:
    records: list[DomainRecord] = field(default_factory=list)
    row_errors: list[RowError] = field(default_factory=list)


def parse_document(text: str) -> CsvDocument:
    """Lex CSV text into a document. Blank lines are skipped."""
    return CsvDocument(rows=[tokenize_line(line) for line in split_lines(text)])


def render_document(document: CsvDocument) -> str:
    """Render a document with every cell quoted and CRLF line endings."""
    return LINE_TERMINATOR.join(serialize_line(row) for row in document.rows)


def decode(document: CsvDocument, specs: FieldTable) -> DecodeResult:
    """Decode every data row, collecting row-level failures.

    Raises:
        MalformedDocumentError: if the header is missing, empty or has
            duplicate names, or there are no data rows.
    """
    header = _validate_header(document)
    result = DecodeResult()
    for row_index, cells in enumerate(document.data_rows, start=1):
        try:
            result.records.append(decode_row(header, cells, specs))
        except RowDecodeError as exc:
            Log.warning(f"Skipping CSV row: {exc.reason}", row=row_index)
            result.row_errors.append(RowError(row_index=row_index, reason=exc.reason))
    Log.info(
        f"Decoded {len(result.records)} records, {len(result.row_errors)} rows rejected"
    )
    return result


def encode(
    records: Iterable[Mapping[str, Any]],
    columns: Sequence[str],
    specs: FieldTable,
) -> CsvDocument:
    """Build a document with ``columns`` as header and one row per record."""
    rows = [list(columns)]
    rows.extend(encode_record(record, columns, specs) for record in records)
    return CsvDocument(rows=rows)


def _validate_header(document: CsvDocument) -> list[str]:
    if len(document.rows) < 2:
        raise MalformedDocumentError(
            "CSV must have a header and at least one data row."
        )
    header = [name.strip() for name in document.header]
    if not any(header):
        raise MalformedDocumentError("CSV header is empty")
    duplicates = sorted({name for name in header if header.count(name) > 1})
    if duplicates:
        raise MalformedDocumentError(
            f"Duplicate header columns: {', '.join(duplicates)}"
        )
    return header


class CsvCodec:
    """Field table plus default column order for one entity type."""

    def __init__(self, specs: FieldTable, columns: Sequence[str]) -> None:
        self._specs = specs
        self._columns = tuple(columns)

    @property
    def columns(self) -> tuple[str, ...]:
        return self._columns

    def decode_text(self, text: str) -> DecodeResult:
        return decode(parse_document(text), self._specs)

    def encode_text(
        self,
        records: Iterable[Mapping[str, Any]],
        columns: Sequence[str] | None = None,
    ) -> str:
        document = encode(records, columns or self._columns, self._specs)
        return render_document(document)
