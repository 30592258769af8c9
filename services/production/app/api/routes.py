from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, FastAPI, Path, Query, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from shared.core import get_logger
from app.infrastructure.db import get_db
from app.application.errors import ConflictError, NotFoundError, ValidationFailed
from app.application.export import XLSX_MEDIA_TYPE, build_batches_workbook, export_filename, workbook_bytes
from app.application.service import BatchService, ProductService
from app.application.validation import MAX_INTEGER
from app.application.schemas import (
    BatchCreate, BatchRead, BatchWithProductRead, ErrorResponse, NextBatchCode, ProductCreate, ProductRead,
)

logger = get_logger(__name__)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing or invalid fields"},
    404: {"model": ErrorResponse, "description": "Referenced record not found"},
    409: {"model": ErrorResponse, "description": "Duplicate part number or batch code"},
    500: {"model": ErrorResponse, "description": "Unexpected store failure"},
}

products_router = APIRouter(prefix="/products", tags=["products"])
batches_router = APIRouter(prefix="/batches", tags=["batches"])

@products_router.get("/", response_model=list[ProductRead])
def list_products(
    search: Optional[str] = Query(None, max_length=100, description="Part number, type or description"),
    db: Session = Depends(get_db),
):
    return ProductService(db).list(search=search)

@products_router.get("/{product_id}", response_model=ProductRead, responses={404: ERROR_RESPONSES[404]})
def get_product(product_id: int = Path(..., ge=1, le=MAX_INTEGER), db: Session = Depends(get_db)):
    return ProductService(db).get(product_id)

@products_router.post("/", response_model=ProductRead, status_code=201, responses=ERROR_RESPONSES)
def create_product(payload: ProductCreate, db: Session = Depends(get_db)):
    return ProductService(db).create(payload)

@batches_router.get("/", response_model=list[BatchWithProductRead])
def list_batches(
    search: Optional[str] = Query(None, max_length=100, description="Batch code or part number"),
    db: Session = Depends(get_db),
):
    """List batches with product details, newest first."""
    return BatchService(db).list(search=search)

@batches_router.get("/export.xlsx", responses={404: ERROR_RESPONSES[404]})
def export_batches(
    search: Optional[str] = Query(None, max_length=100),
    db: Session = Depends(get_db),
):
    """Download the (optionally filtered) batch list as a spreadsheet."""
    batches = BatchService(db).list(search=search)
    if not batches:
        raise NotFoundError("No batches to export")

    content = workbook_bytes(build_batches_workbook(batches))
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename={export_filename(date.today())}"},
    )

@batches_router.get("/next-code", response_model=NextBatchCode, responses={404: ERROR_RESPONSES[404]})
def next_batch_code(product_id: int = Query(..., ge=1, le=MAX_INTEGER), db: Session = Depends(get_db)):
    return NextBatchCode(product_id=product_id, batch_code=BatchService(db).next_batch_code(product_id))

@batches_router.get("/{batch_id}", response_model=BatchRead, responses={404: ERROR_RESPONSES[404]})
def get_batch(batch_id: int = Path(..., ge=1, le=MAX_INTEGER), db: Session = Depends(get_db)):
    return BatchService(db).get(batch_id)

@batches_router.post("/", response_model=BatchRead, status_code=201, responses=ERROR_RESPONSES)
def create_batch(payload: BatchCreate, db: Session = Depends(get_db)):
    return BatchService(db).create(payload)

def _error(status_code: int, message: str, errors: Optional[list] = None) -> JSONResponse:
    content = {"error": message}
    if errors is not None:
        content["errors"] = errors
    return JSONResponse(status_code=status_code, content=content)

def _field_from_loc(loc) -> str:
    parts = [str(p) for p in loc if p not in ("body", "query", "path")]
    return parts[0] if parts else "body"

def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationFailed)
    async def validation_failed(request: Request, exc: ValidationFailed):
        return _error(400, exc.message, [{"field": e.field, "message": e.message} for e in exc.errors])

    @app.exception_handler(RequestValidationError)
    async def malformed_request(request: Request, exc: RequestValidationError):
        # Report schema errors like ValidationFailed: 400, one entry per field
        errors = {}
        for err in exc.errors():
            errors.setdefault(_field_from_loc(err.get("loc", ())), err.get("msg", "Invalid value"))
        field_errors = [{"field": f, "message": m} for f, m in errors.items()]
        return _error(400, "Invalid request", field_errors)

    @app.exception_handler(NotFoundError)
    async def not_found(request: Request, exc: NotFoundError):
        return _error(404, exc.message)

    @app.exception_handler(ConflictError)
    async def conflict(request: Request, exc: ConflictError):
        return _error(409, exc.message)

    @app.exception_handler(SQLAlchemyError)
    async def store_failure(request: Request, exc: SQLAlchemyError):
        logger.error(f"Store failure on {request.method} {request.url.path}", exc_info=exc)
        return _error(500, "Internal server error")

    @app.exception_handler(Exception)
    async def unexpected_failure(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
        return _error(500, "Internal server error")
