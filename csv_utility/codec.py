"""
CSV row codec.

Parsing goes through the stdlib csv reader so quoted fields may carry the
delimiter, doubled quotes and line breaks. Serialization applies the minimal
quoting rule from rules.QUOTE_TRIGGERS.
"""

from __future__ import annotations

import csv
import io
import sys
from typing import Iterable, Iterator, List, Sequence, Tuple

from .errors import MalformedRow
from .rules import DELIMITER, QUOTE, QUOTE_TRIGGERS, ROW_TERMINATOR

# The reader caps fields at 131072 characters by default.
_limit = sys.maxsize
while True:
    try:
        csv.field_size_limit(_limit)
        break
    except OverflowError:
        _limit //= 10


def _reader(text: str, strict: bool):
    return csv.reader(
        io.StringIO(text, newline=""),
        delimiter=DELIMITER,
        quotechar=QUOTE,
        doublequote=True,
        strict=strict,
    )


def parse_row(line: str, strict: bool = False) -> List[str]:
    """
    Split a single record into its fields.

    Unbalanced quoting is passed through best-effort unless strict is set,
    in which case MalformedRow is raised. A line holding more than one record
    is always rejected.
    """
    if line == "":
        return [""]

    try:
        records = list(_reader(line, strict))
    except csv.Error as e:
        raise MalformedRow(str(e), line=line) from e

    if len(records) > 1:
        raise MalformedRow(f"expected one record, found {len(records)}", line=line)

    # A lone line terminator reads back as an empty record.
    if not records or not records[0]:
        return [""]
    return records[0]


def quote_field(field: str) -> str:
    if not field:
        return ""
    if any(trigger in field for trigger in QUOTE_TRIGGERS):
        return QUOTE + field.replace(QUOTE, QUOTE * 2) + QUOTE
    return field


def serialize_row(fields: Sequence[str]) -> str:
    """Join fields with the delimiter; the caller appends the terminator."""
    return DELIMITER.join(quote_field(f) for f in fields)


def iter_records(text: str, strict: bool = False) -> Iterator[Tuple[int, List[str]]]:
    """
    Yield (line, record) pairs, line being the physical line the record starts on.

    Blank lines come through as empty records.
    """
    reader = _reader(text, strict)
    start = 1
    try:
        for record in reader:
            yield start, record
            start = reader.line_num + 1
    except csv.Error as e:
        raise MalformedRow(f"line {reader.line_num}: {e}") from e


def parse_table(text: str, strict: bool = False, keep_blank: bool = False) -> List[List[str]]:
    """
    Split a whole document into rows.

    Line breaks inside quoted fields stay part of the field. Blank lines become
    single empty-field rows when keep_blank is set and are dropped otherwise.
    """
    rows: List[List[str]] = []
    for _, record in iter_records(text, strict):
        if not record:
            if keep_blank:
                rows.append([""])
            continue
        rows.append(record)
    return rows


def serialize_table(rows: Iterable[Sequence[str]]) -> str:
    return "".join(serialize_row(row) + ROW_TERMINATOR for row in rows)
