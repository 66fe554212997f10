"""FastAPI application exposing the ledger and monthly reports over HTTP.

Structure:
    * create_application - application factory wiring routes to a LedgerStore.
    * Exception handlers - map ledger errors to status codes with generic bodies.

Routes are plain ``def`` functions so FastAPI runs them in its threadpool;
each one is a single blocking call into the store or report generator.
"""

from typing import Any

from fastapi import Body, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from ledgerline import __version__
from ledgerline.config import Settings, get_settings
from ledgerline.domain.transactions import validate_payload
from ledgerline.errors import NotFoundError, ReportError, StorageError, ValidationError
from ledgerline.logging_utils import configure_logging, get_logger
from ledgerline.reports import ReportExport, ReportGenerator
from ledgerline.store import LedgerStore

LOGGER = get_logger(__name__)


def _attachment(export: ReportExport) -> Response:
    return Response(
        content=export.content,
        media_type=export.media_type,
        headers={"Content-Disposition": f'attachment; filename="{export.filename}"'},
    )


def create_application(store: LedgerStore | None = None, settings: Settings | None = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        store: Ledger to serve. If None, one is opened at the configured path.
        settings: Runtime settings. If None, loaded from the config file.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        settings = get_settings()
    configure_logging(settings.log_level, force=True)
    if store is None:
        store = LedgerStore(settings.db_path)

    reports = ReportGenerator(store, settings.currency_symbol, settings.pdf_font)

    app = FastAPI(title="ledgerline", version=__version__)
    app.state.store = store
    app.state.reports = reports

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": "Missing or invalid fields", "fields": exc.fields})

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        fields = {".".join(str(part) for part in error["loc"]): error["msg"] for error in exc.errors()}
        return JSONResponse(status_code=400, content={"error": "Missing or invalid fields", "fields": fields})

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"error": "Transaction not found"})

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError) -> JSONResponse:
        LOGGER.error("Storage error on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    @app.exception_handler(ReportError)
    async def handle_report_error(request: Request, exc: ReportError) -> JSONResponse:
        LOGGER.error("Report error on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=500, content={"error": "Failed to generate report"})

    @app.get("/health")
    def health() -> dict[str, str]:
        """Report that the server is running."""
        return {"status": "ok", "message": "Server is running"}

    @app.get("/transactions/summary/stats")
    def summary_stats() -> dict[str, float]:
        """Total income, expenses and balance across the ledger."""
        return store.summary().as_dict()

    @app.get("/transactions")
    def list_transactions() -> list[dict[str, Any]]:
        """All transactions, newest first."""
        return [transaction.as_dict() for transaction in store.list()]

    @app.get("/transactions/{transaction_id}")
    def get_transaction(transaction_id: int) -> dict[str, Any]:
        """A single transaction."""
        return store.get(transaction_id).as_dict()

    @app.post("/transactions", status_code=201)
    def create_transaction(payload: Any = Body(None)) -> dict[str, Any]:
        """Record a new transaction dated now."""
        fields = validate_payload(payload)
        return store.create(fields.description, fields.amount, fields.type).as_dict()

    @app.put("/transactions/{transaction_id}")
    def update_transaction(transaction_id: int, payload: Any = Body(None)) -> dict[str, Any]:
        """Replace description, amount and type of a transaction."""
        fields = validate_payload(payload)
        return store.update(transaction_id, fields.description, fields.amount, fields.type).as_dict()

    @app.delete("/transactions/{transaction_id}")
    def delete_transaction(transaction_id: int) -> dict[str, str]:
        """Permanently delete a transaction."""
        store.delete(transaction_id)
        return {"message": "Transaction deleted successfully"}

    @app.get("/reports/monthly/{year}/{month}")
    def monthly_transactions(year: int, month: int) -> list[dict[str, Any]]:
        """Transactions dated within the month, newest first."""
        return [transaction.as_dict() for transaction in reports.monthly_transactions(year, month)]

    @app.get("/reports/monthly/{year}/{month}/csv")
    def monthly_csv(year: int, month: int) -> Response:
        """Download the month as CSV."""
        return _attachment(reports.monthly_csv(year, month))

    @app.get("/reports/monthly/{year}/{month}/pdf")
    def monthly_pdf(year: int, month: int) -> Response:
        """Download the month as a PDF document."""
        return _attachment(reports.monthly_pdf(year, month))

    return app
