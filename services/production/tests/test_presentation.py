from app.application.presentation import batch_matches, normalize_search, product_matches
from app.domain.models import Product, ProductType

def test_normalize_search():
    assert normalize_search("  Ab 1\t2 ") == "ab12"
    assert normalize_search(None) == ""

def test_product_matches_on_every_searchable_field():
    product = Product(part_number="AOS-55", product_type=ProductType.AIR_OIL_SEPARATOR, description="Compressor separator")
    assert product_matches(product, "aos 55")
    assert product_matches(product, "air_oil")
    assert product_matches(product, "compressor")
    assert not product_matches(product, "oil_filter")
    assert product_matches(product, "")

def test_batch_matches_code_or_part_number():
    batch = {"batch_code": "AB123-20260215-001", "part_number": "AB123", "remarks": "night"}
    assert batch_matches(batch, "2026 0215")
    assert batch_matches(batch, "ab123")
    assert not batch_matches(batch, "night")
    assert not batch_matches({"batch_code": "Z-1", "part_number": None}, "ab")
