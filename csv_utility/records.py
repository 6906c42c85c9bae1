"""
Record export to CSV and import from CSV.

Export writes a header of schema field names followed by one row per stored
record. Import creates one new record per data row whose width matches the
header; other rows are skipped and reported, never aborting the import.
Conversion failures are reported per field and the record is still created.
"""

from __future__ import annotations

import logging
import posixpath
import uuid
from typing import List, Sequence

from .codec import iter_records, serialize_table
from .errors import ConversionError
from .models import ExportResult, ImportResult
from .ports import AssetIndexPort, AssetStorePort
from .rules import ASSET_NAME_COLUMNS, ASSET_SUFFIX
from .schema import RecordSchema, format_value, parse_value

logger = logging.getLogger(__name__)


def export_records(
    schema: RecordSchema,
    index: AssetIndexPort,
    store: AssetStorePort,
    folder: str,
) -> ExportResult:
    result = ExportResult(type_name=schema.type_name, folder=folder)
    report = result.report

    paths = index.find(schema.type_name, folder)
    if not paths:
        logger.warning("No records of type '%s' found in '%s'", schema.type_name, folder)
        report.warn("no_records_found", "nothing_exported", value=folder)
        return result

    records = []
    for path in paths:
        obj = store.load(path, schema.type_name)
        if obj is None:
            logger.warning("Could not load '%s' as '%s'", path, schema.type_name)
            report.warn("load_failed", "skipped", value=path)
            continue
        records.append(obj)

    if not records:
        report.warn("no_records_loaded", "nothing_exported", value=folder)
        return result

    rows: List[List[str]] = [schema.header()]
    for i, obj in enumerate(records, start=2):
        row = []
        for spec in schema.fields:
            try:
                row.append(format_value(spec, spec.getter(obj), store))
            except (ConversionError, AttributeError) as e:
                logger.error("Failed to read field '%s' for row %d: %s", spec.name, i, e)
                report.error("format_failed", "left_empty", row=i, column=spec.name)
                row.append("")
        rows.append(row)

    result.text = serialize_table(rows)
    result.exported = len(records)
    return result


def _asset_name(header: Sequence[str], values: Sequence[str]) -> str:
    for column in ASSET_NAME_COLUMNS:
        if column in header:
            value = values[list(header).index(column)].strip()
            if value:
                return value.replace("/", "_").replace("\\", "_")
    return str(uuid.uuid4())


def import_records(
    schema: RecordSchema,
    text: str,
    store: AssetStorePort,
    folder: str,
    strict: bool = False,
) -> ImportResult:
    """
    Create one record per matching data row and store it under folder.

    MalformedRow propagates when strict is set and the text has broken quoting.
    """
    result = ImportResult(type_name=schema.type_name, folder=folder)
    report = result.report

    # Blank lines read back as empty records and are dropped here.
    records = [(line, values) for line, values in iter_records(text, strict=strict) if values]
    if len(records) < 2:
        logger.warning("CSV text is empty or contains only a header")
        report.warn("no_data_rows", "nothing_imported", value=str(len(records)))
        return result

    header = records[0][1]
    for row_no, (line, values) in enumerate(records[1:], start=2):
        # Whitespace-only lines; a quoted "" is a real (empty) value.
        if len(values) == 1 and values[0] and not values[0].strip():
            continue

        if len(values) != len(header):
            logger.warning(
                "Skipping row %d (line %d): mismatched column count. Expected %d, got %d.",
                row_no, line, len(header), len(values),
            )
            report.warn(
                "row_width_mismatch",
                f"skipped_expected_{len(header)}",
                row=row_no,
                line=line,
                value=str(len(values)),
            )
            result.skipped_rows += 1
            continue

        obj = schema.factory()
        for column, raw in zip(header, values):
            spec = schema.field(column)
            if spec is None:
                continue
            try:
                spec.setter(obj, parse_value(spec, raw, store))
            except ConversionError as e:
                logger.error("Failed to set field '%s' on row %d (line %d). Value: '%s'. Error: %s",
                             column, row_no, line, raw, e.reason)
                report.error("conversion_failed", "field_left_default",
                             row=row_no, line=line, column=column, value=raw)
            except (ValueError, TypeError, AttributeError) as e:
                # Raised by caller-supplied setters
                logger.error("Failed to set field '%s' on row %d (line %d). Value: '%s'. Error: %s",
                             column, row_no, line, raw, e)
                report.error("assignment_failed", "field_left_default",
                             row=row_no, line=line, column=column, value=raw)

        path = store.unique_path(posixpath.join(folder, _asset_name(header, values) + ASSET_SUFFIX))
        store.create(obj, path, schema.type_name)
        result.created += 1
        result.created_paths.append(path)

    store.save()
    logger.info("Imported %d '%s' records into '%s'", result.created, schema.type_name, folder)
    return result
