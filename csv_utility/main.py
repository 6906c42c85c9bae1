from typing import Optional

from fastapi import FastAPI, UploadFile, File, HTTPException, Request

from .adapters import MemoryAssetStore
from .codec import parse_table, serialize_table
from .errors import MalformedRow, UnknownRecordType
from .grid import CsvGrid
from .models import (
    ExportResult,
    GridRequest,
    GridResponse,
    HealthResponse,
    ImportResult,
    ParseResponse,
    ParseSummary,
    Report,
    SerializeRequest,
    SerializeResponse,
)
from .records import export_records, import_records
from .rules import DEFAULT_EXPORT_FOLDER, DEFAULT_IMPORT_FOLDER
from .schema import RecordSchema, SchemaRegistry
from .textio import decode_csv_bytes


def _require_csv_upload(file: UploadFile) -> None:
    if not (file.filename or "").lower().endswith(".csv"):
        raise HTTPException(status_code=422, detail="Only CSV files are supported")


def _schema_or_404(request: Request, type_name: str) -> RecordSchema:
    try:
        return request.app.state.registry.get(type_name)
    except UnknownRecordType as e:
        raise HTTPException(status_code=404, detail=str(e))


def create_app(
    registry: Optional[SchemaRegistry] = None,
    store: Optional[MemoryAssetStore] = None,
) -> FastAPI:
    app = FastAPI(
        title="csv-utility",
        description="CSV grid editing and record import/export",
        version="0.1.0",
    )
    app.state.registry = registry or SchemaRegistry()
    app.state.store = store if store is not None else MemoryAssetStore()

    @app.get("/health", response_model=HealthResponse)
    def health():
        return {"ok": True}

    @app.post("/parse", response_model=ParseResponse)
    async def parse_csv(file: UploadFile = File(...), strict: bool = False):
        _require_csv_upload(file)
        decoded = decode_csv_bytes(await file.read())
        try:
            rows = parse_table(decoded.text, strict=strict, keep_blank=True)
        except MalformedRow as e:
            raise HTTPException(status_code=422, detail=str(e))

        report = Report()
        width = len(rows[0]) if rows else None
        for i, row in enumerate(rows[1:], start=2):
            if len(row) != width:
                report.warn("row_width_mismatch", f"expected_{width}", row=i, value=str(len(row)))

        return ParseResponse(
            rows=rows,
            summary=ParseSummary(
                rows=len(rows),
                columns=width,
                warnings=len(report.warnings),
                errors=len(report.errors),
            ),
            encoding=decoded.report(),
            warnings=report.warnings,
            errors=report.errors,
        )

    @app.post("/serialize", response_model=SerializeResponse)
    def serialize_csv(body: SerializeRequest):
        return {"text": serialize_table(body.rows)}

    @app.post("/grid/{operation}", response_model=GridResponse)
    def edit_grid(operation: str, body: GridRequest):
        grid = CsvGrid(body.rows)
        changed = True
        if operation == "append-row":
            grid.append_row()
        elif operation == "append-column":
            grid.append_column()
        elif operation == "remove-row":
            if body.index is None:
                raise HTTPException(status_code=422, detail="remove-row needs an index")
            changed = grid.remove_row(body.index)
        else:
            raise HTTPException(status_code=404, detail=f"Unknown grid operation: {operation}")
        return {"rows": grid.rows, "changed": changed}

    @app.get("/records")
    def list_record_types(request: Request):
        return {"types": request.app.state.registry.names()}

    @app.get("/records/{type_name}/export", response_model=ExportResult)
    def export_csv(request: Request, type_name: str, folder: str = DEFAULT_EXPORT_FOLDER):
        schema = _schema_or_404(request, type_name)
        store = request.app.state.store
        return export_records(schema, store, store, folder)

    @app.post("/records/{type_name}/import", response_model=ImportResult)
    async def import_csv(
        request: Request,
        type_name: str,
        file: UploadFile = File(...),
        folder: str = DEFAULT_IMPORT_FOLDER,
        strict: bool = False,
    ):
        schema = _schema_or_404(request, type_name)
        _require_csv_upload(file)
        text = decode_csv_bytes(await file.read()).text
        try:
            return import_records(schema, text, request.app.state.store, folder, strict=strict)
        except MalformedRow as e:
            raise HTTPException(status_code=422, detail=str(e))

    return app


app = create_app()
