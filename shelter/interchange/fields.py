"""Schema-driven mapping between flat CSV columns and nested domain records."""

import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from shelter.interchange.exceptions import RowDecodeError

DomainRecord = dict[str, Any]

DEFAULT_LIST_DELIMITER = ";"
ALT_TEXT_SUFFIX = " photo"
_TRUE_LITERAL = "true"
_ENCODED_TRUE = "TRUE"
_ENCODED_FALSE = "FALSE"
_REFERENCE_KEYS = ("_id", "id")
_ADDRESS_KEYS = ("street", "city", "state", "zipCode")
_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


class FieldKind(str, Enum):
    """How a CSV cell is coerced into a record value."""

    STRING = "string"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    STRING_LIST = "string_list"
    NESTED_OBJECT_LIST = "nested_object_list"


@dataclass(frozen=True)
class FieldSpec:
    """Maps one CSV column onto a (possibly nested) record field.

    ``export_path``, when set, is read first on encode. It covers columns the
    API returns inside a populated reference, e.g. an inquiry's ``animal.name``.
    """

    column: str
    target_path: tuple[str, ...]
    kind: FieldKind = FieldKind.STRING
    list_delimiter: str = DEFAULT_LIST_DELIMITER
    alt_text_field: str = "name"
    export_path: tuple[str, ...] | None = None


FieldTable = Mapping[str, FieldSpec]


def column_spec(
    column: str,
    kind: FieldKind = FieldKind.STRING,
    path: str | None = None,
    export_path: str | None = None,
    **options: Any,
) -> FieldSpec:
    """Shorthand for a FieldSpec whose paths are dot-paths (target defaults to the column)."""
    target = tuple((path or column).split("."))
    exported = tuple(export_path.split(".")) if export_path else None
    return FieldSpec(
        column=column, target_path=target, kind=kind, export_path=exported, **options
    )


def field_table(specs: Iterable[FieldSpec]) -> dict[str, FieldSpec]:
    """Index specs by column name.

    Raises:
        ValueError: if a column name appears more than once.
    """
    table: dict[str, FieldSpec] = {}
    for spec in specs:
        if spec.column in table:
            raise ValueError(f"Duplicate column in field table: {spec.column}")
        if not spec.target_path or not all(spec.target_path):
            raise ValueError(f"Column {spec.column!r} has an empty target path")
        table[spec.column] = spec
    return table


def get_path(record: Mapping[str, Any], path: Sequence[str]) -> Any:
    """Return the value at ``path`` or None when any segment is missing."""
    current: Any = record
    for key in path:
        if not isinstance(current, Mapping) or key not in current:
            return None
        current = current[key]
    return current


def set_path(record: DomainRecord, path: Sequence[str], value: Any) -> None:
    """Assign ``value`` at ``path``, creating intermediate objects."""
    current = record
    for key in path[:-1]:
        child = current.get(key)
        if not isinstance(child, dict):
            child = {}
            current[key] = child
        current = child
    current[path[-1]] = value


def decode_row(
    header: Sequence[str],
    raw_cells: Sequence[str],
    specs: FieldTable,
) -> DomainRecord:
    """Translate one row of raw cells into a nested domain record.

    Columns missing from ``specs`` pass through as top-level strings.

    Raises:
        RowDecodeError: if the cell count differs from the header or a cell
            cannot be coerced to its column's kind.
    """
    if len(raw_cells) != len(header):
        raise RowDecodeError(
            f"Expected {len(header)} cells, got {len(raw_cells)}"
        )

    record: DomainRecord = {}
    galleries: list[tuple[FieldSpec, list[str]]] = []
    for column, raw in zip(header, raw_cells):
        spec = specs.get(column)
        if spec is None:
            record[column] = raw
            continue
        if spec.kind is FieldKind.NESTED_OBJECT_LIST:
            galleries.append((spec, _split_list(raw, spec.list_delimiter)))
            continue
        present, value = _decode_cell(spec, raw)
        if present:
            set_path(record, spec.target_path, value)

    # Alt text depends on a sibling field that may sit in a later column.
    for spec, urls in galleries:
        label = get_path(record, spec.target_path[:-1] + (spec.alt_text_field,))
        alt_text = f"{'' if label is None else label}{ALT_TEXT_SUFFIX}"
        set_path(
            record,
            spec.target_path,
            [{"url": url, "altText": alt_text} for url in urls],
        )
    return record


def encode_record(
    record: Mapping[str, Any],
    columns: Sequence[str],
    specs: FieldTable,
) -> list[str]:
    """Flatten a domain record into raw cells in ``columns`` order (unquoted)."""
    cells: list[str] = []
    for column in columns:
        spec = specs.get(column)
        if spec is None:
            cells.append(_encode_scalar(record.get(column)))
        else:
            cells.append(_encode_cell(spec, _export_value(record, spec)))
    return cells


def _decode_cell(spec: FieldSpec, raw: str) -> tuple[bool, Any]:
    if spec.kind is FieldKind.STRING:
        value = _strip_quotes(raw)
        return (value != "", value)
    if spec.kind is FieldKind.INTEGER:
        text = raw.strip()
        if not text:
            return (False, None)
        if not _INTEGER_PATTERN.fullmatch(text):
            raise RowDecodeError(f"Column {spec.column!r}: {raw!r} is not an integer")
        return (True, int(text))
    if spec.kind is FieldKind.BOOLEAN:
        return (True, raw.strip().lower() == _TRUE_LITERAL)
    if spec.kind is FieldKind.STRING_LIST:
        return (True, _split_list(raw, spec.list_delimiter))
    raise ValueError(f"Unsupported field kind: {spec.kind}")


def _encode_cell(spec: FieldSpec, value: Any) -> str:
    if value is None:
        return ""
    if spec.kind is FieldKind.BOOLEAN:
        return _ENCODED_TRUE if value else _ENCODED_FALSE
    if spec.kind is FieldKind.STRING_LIST:
        return spec.list_delimiter.join(str(item) for item in value)
    if spec.kind is FieldKind.NESTED_OBJECT_LIST:
        urls = (
            item.get("url", "") if isinstance(item, Mapping) else str(item)
            for item in value
        )
        return spec.list_delimiter.join(url for url in urls if url)
    return _encode_scalar(value)


def _encode_scalar(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return _ENCODED_TRUE if value else _ENCODED_FALSE
    if isinstance(value, Mapping):
        return _encode_mapping(value)
    return str(value)


def _encode_mapping(value: Mapping[str, Any]) -> str:
    # Populated references (e.g. an inquiry's animal) export as their id.
    for key in _REFERENCE_KEYS:
        if key in value:
            return str(value[key])
    if any(key in value for key in _ADDRESS_KEYS):
        return _format_address(value)
    return "; ".join(
        f"{key}={_encode_scalar(item)}" for key, item in value.items() if item not in (None, "")
    )


def _format_address(address: Mapping[str, Any]) -> str:
    """Render ``street, city, state zipCode``, skipping empty parts."""
    region = f"{address.get('state') or ''} {address.get('zipCode') or ''}".strip()
    parts = (address.get("street") or "", address.get("city") or "", region)
    return ", ".join(str(part).strip() for part in parts if str(part).strip())


def _export_value(record: Mapping[str, Any], spec: FieldSpec) -> Any:
    if spec.export_path is not None:
        value = get_path(record, spec.export_path)
        if value is not None:
            return value
    return get_path(record, spec.target_path)


def _split_list(raw: str, delimiter: str) -> list[str]:
    return [segment.strip() for segment in raw.split(delimiter) if segment.strip()]


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return value[1:-1]
    return value
