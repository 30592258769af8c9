"""Spreadsheet export of production batch lists."""

import io
from datetime import date, datetime
from typing import Any, Iterable, Mapping, Optional
from openpyxl import Workbook
from openpyxl.utils import get_column_letter

SHEET_TITLE = "Production Batches"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# (header, source key, column width)
EXPORT_COLUMNS = [
    ("Batch Code", "batch_code", 15),
    ("Part Number", "part_number", 15),
    ("Product Type", "product_type", 12),
    ("Quantity", "quantity", 10),
    ("Produced By", "produced_by", 15),
    ("Production Line", "production_line", 15),
    ("Remarks", "remarks", 20),
    ("Created At", "created_at", 15),
    ("Updated At", "updated_at", 15),
]

MISSING = "-"

def format_date(value: Optional[datetime]) -> str:
    """Short US style date, e.g. Feb 15, 2026"""
    if value is None:
        return MISSING
    return f"{value:%b} {value.day}, {value.year}"

def _cell(key: str, value: Any) -> Any:
    if key in ("created_at", "updated_at"):
        return format_date(value)
    if value is None or value == "":
        return MISSING
    if hasattr(value, "value"):
        return value.value
    return value

def build_batches_workbook(batches: Iterable[Mapping[str, Any]]) -> Workbook:
    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE

    ws.append([header for header, _, _ in EXPORT_COLUMNS])
    for batch in batches:
        ws.append([_cell(key, batch.get(key)) for _, key, _ in EXPORT_COLUMNS])

    for index, (_, _, width) in enumerate(EXPORT_COLUMNS, start=1):
        ws.column_dimensions[get_column_letter(index)].width = width

    return wb

def workbook_bytes(wb: Workbook) -> bytes:
    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()

def export_filename(today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"production_batches_{today.isoformat()}.xlsx"
