import pytest
from app.application.validation import MAX_INTEGER, coerce_int, validate_batch, validate_product
from app.application.presentation import get_field_error

def fields(result):
    return [e.field for e in result.errors]

@pytest.mark.parametrize("product_type", ["AIR_FILTER", "OIL_FILTER", "AIR_OIL_SEPARATOR"])
def test_valid_product(product_type):
    result = validate_product({"part_number": "AB123", "product_type": product_type})
    assert result.is_valid
    assert result.errors == []

def test_missing_part_number_and_type_reported_together():
    result = validate_product({})
    assert not result.is_valid
    assert fields(result) == ["part_number", "product_type"]
    assert get_field_error(result.errors, "part_number") == "Part number is required"
    assert get_field_error(result.errors, "product_type") == "Product type is required"

def test_part_number_too_short_after_trim():
    result = validate_product({"part_number": " A ", "product_type": "OIL_FILTER"})
    assert fields(result) == ["part_number"]
    assert "at least 2" in result.errors[0].message

def test_unknown_product_type_rejected():
    result = validate_product({"part_number": "AB123", "product_type": "FUEL_FILTER"})
    assert fields(result) == ["product_type"]

def test_description_limit():
    assert validate_product({"part_number": "AB", "product_type": "AIR_FILTER", "description": "x" * 500}).is_valid
    result = validate_product({"part_number": "AB", "product_type": "AIR_FILTER", "description": "x" * 501})
    assert fields(result) == ["description"]

def test_description_measured_trimmed():
    data = {"part_number": "AB", "product_type": "AIR_FILTER", "description": "  " + "x" * 500 + "  "}
    assert validate_product(data).is_valid

def test_valid_batch():
    assert validate_batch({"product_id": 1, "quantity": "7"}).is_valid

@pytest.mark.parametrize("quantity", [0, -5, "abc", "0", "1.5", 2.5])
def test_bad_quantity(quantity):
    result = validate_batch({"product_id": 1, "quantity": quantity})
    assert fields(result) == ["quantity"]
    assert result.errors[0].message == "Quantity must be a positive number"

def test_batch_collects_every_error():
    result = validate_batch({"quantity": None, "remarks": "r" * 501})
    assert fields(result) == ["product_id", "quantity", "remarks"]
    assert get_field_error(result.errors, "product_id") == "Please select a product"
    assert get_field_error(result.errors, "batch_code") is None

def test_zero_product_id_is_missing():
    result = validate_batch({"product_id": 0, "quantity": 3})
    assert fields(result) == ["product_id"]

def test_integer_column_bounds():
    assert validate_batch({"product_id": MAX_INTEGER, "quantity": MAX_INTEGER}).is_valid
    result = validate_batch({"product_id": MAX_INTEGER + 1, "quantity": str(MAX_INTEGER + 1)})
    assert fields(result) == ["product_id", "quantity"]
    assert result.errors[1].message == f"Quantity must be at most {MAX_INTEGER}"

@pytest.mark.parametrize("value,expected", [
    (7, 7),
    ("7", 7),
    (" 12 ", 12),
    (3.0, 3),
    (3.5, None),
    ("abc", None),
    (True, None),
    (None, None),
])
def test_coerce_int(value, expected):
    assert coerce_int(value) == expected
