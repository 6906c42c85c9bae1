from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from .rules import DEFAULT_CSV_PATH, DEFAULT_EXPORT_FOLDER, DEFAULT_IMPORT_FOLDER


class ReportItem(BaseModel):
    row: Optional[int] = None
    line: Optional[int] = None
    column: Optional[str] = None
    issue: str
    value: Optional[str] = None
    action: str


class Report(BaseModel):
    warnings: List[ReportItem] = Field(default_factory=list)
    errors: List[ReportItem] = Field(default_factory=list)

    def warn(self, issue: str, action: str, **kwargs: Any) -> None:
        self.warnings.append(ReportItem(issue=issue, action=action, **kwargs))

    def error(self, issue: str, action: str, **kwargs: Any) -> None:
        self.errors.append(ReportItem(issue=issue, action=action, **kwargs))


class ExportResult(BaseModel):
    type_name: str
    folder: str
    exported: int = 0
    text: Optional[str] = None
    report: Report = Field(default_factory=Report)


class ImportResult(BaseModel):
    type_name: str
    folder: str
    created: int = 0
    created_paths: List[str] = Field(default_factory=list)
    skipped_rows: int = 0
    report: Report = Field(default_factory=Report)


class StatusLevel(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class Status(BaseModel):
    message: str = "Ready."
    level: StatusLevel = StatusLevel.INFO


class TransferConfig(BaseModel):
    type_name: Optional[str] = None
    export_folder: str = DEFAULT_EXPORT_FOLDER
    import_folder: str = DEFAULT_IMPORT_FOLDER
    csv_path: str = DEFAULT_CSV_PATH
    strict: bool = False


class ParseSummary(BaseModel):
    rows: int = 0
    columns: Optional[int] = Field(default=None, examples=[None])
    warnings: int = 0
    errors: int = 0


class ParseResponse(BaseModel):
    rows: List[List[str]]
    summary: ParseSummary
    encoding: Dict[str, Any] = Field(default_factory=dict)
    warnings: List[ReportItem] = Field(default_factory=list)
    errors: List[ReportItem] = Field(default_factory=list)


class SerializeRequest(BaseModel):
    rows: List[List[str]]


class SerializeResponse(BaseModel):
    text: str


class GridRequest(BaseModel):
    rows: List[List[str]] = Field(default_factory=list)
    index: Optional[int] = None


class GridResponse(BaseModel):
    rows: List[List[str]]
    changed: bool = True


class HealthResponse(BaseModel):
    ok: bool = True
