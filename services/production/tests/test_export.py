import io
from datetime import date, datetime
from openpyxl import load_workbook
from app.application.export import build_batches_workbook, export_filename, format_date
from app.domain.models import ProductType

HEADERS = [
    "Batch Code", "Part Number", "Product Type", "Quantity", "Produced By",
    "Production Line", "Remarks", "Created At", "Updated At",
]

def test_workbook_layout():
    batches = [{
        "batch_code": "AB123-20260215-001",
        "part_number": "AB123",
        "product_type": ProductType.AIR_FILTER,
        "quantity": 12,
        "produced_by": None,
        "production_line": "L1",
        "remarks": "",
        "created_at": datetime(2026, 2, 15, 8, 30),
        "updated_at": None,
    }]
    ws = build_batches_workbook(batches).active

    assert ws.title == "Production Batches"
    rows = list(ws.iter_rows(values_only=True))
    assert list(rows[0]) == HEADERS
    assert list(rows[1]) == [
        "AB123-20260215-001", "AB123", "AIR_FILTER", 12, "-", "L1", "-", "Feb 15, 2026", "-",
    ]
    assert ws.column_dimensions["A"].width == 15
    assert ws.column_dimensions["G"].width == 20

def test_export_filename():
    assert export_filename(date(2026, 2, 15)) == "production_batches_2026-02-15.xlsx"

def test_format_date():
    assert format_date(datetime(2026, 11, 3)) == "Nov 3, 2026"
    assert format_date(None) == "-"

def test_export_endpoint(client, product):
    client.post('/batches/', json={"batch_code": "B-1", "product_id": product["id"], "quantity": 5})
    client.post('/batches/', json={"batch_code": "X-2", "product_id": product["id"], "quantity": "6"})

    resp = client.get('/batches/export.xlsx', params={"search": "x-2"})
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("application/vnd.openxmlformats-officedocument.spreadsheetml.sheet")
    assert f"production_batches_{date.today().isoformat()}.xlsx" in resp.headers["content-disposition"]

    rows = list(load_workbook(io.BytesIO(resp.content)).active.iter_rows(values_only=True))
    assert len(rows) == 2
    assert rows[1][:4] == ("X-2", "AB123", "AIR_FILTER", 6)

def test_export_nothing_to_export(client):
    resp = client.get('/batches/export.xlsx')
    assert resp.status_code == 404
    assert resp.json() == {"error": "No batches to export"}
