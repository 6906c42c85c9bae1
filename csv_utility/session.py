"""
Editor workflows driven through host ports.

CsvEditorSession is the grid editor: load, edit and save one CSV file.
RecordTransferSession exports stored records to a CSV file and imports CSV
rows back as new records. Both report the outcome of every action through
``status`` and the module logger; file failures never propagate to the caller.
"""

from __future__ import annotations

import logging
from typing import Optional

from .errors import MalformedRow, UnknownRecordType
from .grid import CsvGrid
from .models import ExportResult, ImportResult, Status, StatusLevel, TransferConfig
from .ports import AssetIndexPort, AssetStorePort, DialogPort, FileStorePort
from .records import export_records, import_records
from .rules import CSV_EXTENSION, DEFAULT_SAVE_NAME
from .schema import RecordSchema, SchemaRegistry
from .textio import decode_csv_bytes

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    StatusLevel.INFO: logging.INFO,
    StatusLevel.WARNING: logging.WARNING,
    StatusLevel.ERROR: logging.ERROR,
}


class _StatusMixin:
    status: Status

    def _set_status(self, message: str, level: StatusLevel = StatusLevel.INFO) -> None:
        self.status = Status(message=message, level=level)
        logger.log(_LOG_LEVELS[level], message)


class CsvEditorSession(_StatusMixin):
    def __init__(self, dialogs: DialogPort, files: FileStorePort):
        self.dialogs = dialogs
        self.files = files
        self.grid = CsvGrid()
        self.file_path: Optional[str] = None
        self.status = Status()

    def load(self) -> bool:
        path = self.dialogs.open_file("Open CSV File", CSV_EXTENSION)
        if not path:
            return False

        try:
            decoded = decode_csv_bytes(self.files.read_bytes(path))
            grid = CsvGrid.from_text(decoded.text)
        except (OSError, ValueError, MalformedRow) as e:
            logger.error("Error loading CSV file: %s", e)
            self._set_status(f"Could not load the CSV file '{path}'.", StatusLevel.ERROR)
            self.dialogs.alert("Error", "Could not load the CSV file. Check the log for more details.")
            return False

        self.file_path = path
        self.grid = grid
        self._set_status(f"Loaded {grid.row_count} rows from '{path}'.")
        return True

    def save(self) -> bool:
        if not self.file_path:
            self._set_status("No file path specified. Use 'Save As...' first.", StatusLevel.ERROR)
            self.dialogs.alert("Save Error", self.status.message)
            return False
        return self._write(self.file_path)

    def save_as(self) -> bool:
        path = self.dialogs.save_file("Save CSV As...", DEFAULT_SAVE_NAME, CSV_EXTENSION)
        if not path:
            return False
        self.file_path = path
        return self._write(path)

    def _write(self, path: str) -> bool:
        try:
            self.files.write_text(path, self.grid.to_text())
        except (OSError, ValueError) as e:
            logger.error("Error saving CSV file: %s", e)
            self._set_status(f"Could not save the CSV file '{path}'.", StatusLevel.ERROR)
            self.dialogs.alert("Error", "Could not save the CSV file. Check the log for more details.")
            return False

        self._set_status(f"The data was saved to: {path}")
        self.dialogs.alert("Save Successful", self.status.message)
        return True

    def add_row(self) -> None:
        self.grid.append_row()

    def add_column(self) -> None:
        self.grid.append_column()

    def set_cell(self, row: int, col: int, value: str) -> None:
        self.grid.set_cell(row, col, value)

    def remove_row(self, index: int) -> bool:
        if not self.dialogs.confirm("Confirm Delete", "Are you sure you want to delete this row?"):
            return False
        return self.grid.remove_row(index)


class RecordTransferSession(_StatusMixin):
    def __init__(
        self,
        registry: SchemaRegistry,
        dialogs: DialogPort,
        files: FileStorePort,
        index: AssetIndexPort,
        store: AssetStorePort,
        config: Optional[TransferConfig] = None,
    ):
        self.registry = registry
        self.dialogs = dialogs
        self.files = files
        self.index = index
        self.store = store
        self.config = config or TransferConfig()
        self.status = Status()

    def _schema(self, action: str) -> Optional[RecordSchema]:
        try:
            return self.registry.get(self.config.type_name)
        except UnknownRecordType:
            self._set_status(
                f"Please assign a known record type before {action} "
                f"(got {self.config.type_name!r}).",
                StatusLevel.ERROR,
            )
            return None

    def count_exportable(self) -> int:
        type_name = self.config.type_name
        if not type_name or type_name not in self.registry or not self.config.export_folder:
            return 0
        return len(self.index.find(type_name, self.config.export_folder))

    def export(self) -> Optional[ExportResult]:
        schema = self._schema("exporting")
        if schema is None:
            return None

        folder = self.config.export_folder
        result = export_records(schema, self.index, self.store, folder)
        if result.text is None:
            self._set_status(
                f"No records of type '{schema.type_name}' could be exported from '{folder}'.",
                StatusLevel.WARNING,
            )
            return result

        path = self.config.csv_path
        try:
            self.files.write_text(path, result.text)
        except (OSError, ValueError) as e:
            self._set_status(f"Failed to write file at '{path}'. Error: {e}", StatusLevel.ERROR)
            return result

        self._set_status(f"Successfully exported {result.exported} records to '{path}'.")
        return result

    def import_(self) -> Optional[ImportResult]:
        schema = self._schema("importing")
        if schema is None:
            return None

        folder = self.config.import_folder
        if not self.dialogs.confirm(
            "Confirm Import",
            "This will create new records in the destination folder based on the CSV data. "
            "Are you sure you want to continue?",
            "Yes, Import",
            "Cancel",
        ):
            return None

        path = self.config.csv_path
        try:
            text = decode_csv_bytes(self.files.read_bytes(path)).text
        except (OSError, ValueError) as e:
            self._set_status(f"Failed to read CSV file at '{path}'. Error: {e}", StatusLevel.ERROR)
            return None

        try:
            result = import_records(schema, text, self.store, folder, strict=self.config.strict)
        except MalformedRow as e:
            self._set_status(f"CSV file at '{path}' is malformed: {e}", StatusLevel.ERROR)
            return None

        if any(w.issue == "no_data_rows" for w in result.report.warnings):
            self._set_status("CSV file is empty or contains only a header.", StatusLevel.WARNING)
            return result

        self._set_status(f"Successfully imported and created {result.created} records in '{folder}'.")
        return result
