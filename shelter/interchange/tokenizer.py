"""Line-level CSV lexing.

Decoding accepts both fully quoted output (as produced by ``serialize_line``)
and hand-edited spreadsheet output where only some fields are quoted.
Encoding always quotes every field.

A quote opens a quoted section only at the start of a field. Elsewhere it is
an ordinary character, so a cell such as ``6" tall`` stays on its own line.
"""

from collections.abc import Iterable

QUOTE = '"'
SEPARATOR = ","


def tokenize_line(line: str) -> list[str]:
    """Split one CSV line into raw field strings.

    A doubled quote inside a quoted section is a literal quote. A comma outside
    quotes ends the current field. An empty line yields ``[""]``.
    """
    fields, _ = _scan(line)
    return fields


def serialize_line(fields: Iterable[str]) -> str:
    """Join fields into one CSV line, quoting every field."""
    return SEPARATOR.join(quote_field(field) for field in fields)


def quote_field(value: str) -> str:
    return QUOTE + value.replace(QUOTE, QUOTE * 2) + QUOTE


def split_lines(text: str) -> list[str]:
    """Split a CSV document into logical lines.

    Physical lines (``\\n`` or ``\\r\\n``) are joined back together only while
    a quoted field is still open at the line end. Blank lines are dropped.
    """
    result: list[str] = []
    pending: str | None = None
    for physical in text.split("\n"):
        line = physical if pending is None else f"{pending}\n{physical}"
        _, still_open = _scan(line)
        if still_open:
            pending = line
            continue
        pending = None
        _append_line(result, line)
    if pending is not None:
        _append_line(result, pending)
    return result


def _append_line(result: list[str], line: str) -> None:
    if line.endswith("\r"):
        line = line[:-1]
    if line.strip():
        result.append(line)


def _scan(line: str) -> tuple[list[str], bool]:
    """Tokenize ``line``; the flag is True when it ends inside a quoted field."""
    fields: list[str] = []
    buffer: list[str] = []
    in_quotes = False
    at_field_start = True
    i = 0
    length = len(line)
    while i < length:
        char = line[i]
        if in_quotes:
            if char != QUOTE:
                buffer.append(char)
            elif i + 1 < length and line[i + 1] == QUOTE:
                buffer.append(QUOTE)
                i += 1
            else:
                in_quotes = False
        elif char == SEPARATOR:
            fields.append("".join(buffer))
            buffer = []
            at_field_start = True
            i += 1
            continue
        elif char == QUOTE and at_field_start:
            in_quotes = True
        else:
            buffer.append(char)
        at_field_start = False
        i += 1
    fields.append("".join(buffer))
    return fields, in_quotes
