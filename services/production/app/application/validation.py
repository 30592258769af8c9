"""
Form validation rules for products and production batches.

Every rule is checked on each call and all failures are returned together;
the validators never raise.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional
from app.domain.models import ProductType

PRODUCT_TYPES = tuple(t.value for t in ProductType)
MIN_PART_NUMBER_LENGTH = 2
MAX_TEXT_LENGTH = 500
# Largest value an INTEGER column holds on every supported store
MAX_INTEGER = 2**31 - 1

@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

@dataclass
class ValidationResult:
    errors: list[FieldError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

def coerce_int(value: Any) -> Optional[int]:
    """
    Integer value of a form field, or None when it is not a whole number.
    Accepts ints, integral floats and numeric strings ("7", " 12 ").
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None

def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())

def _too_long(value: Any) -> bool:
    return isinstance(value, str) and len(value.strip()) > MAX_TEXT_LENGTH

def validate_product(data: Mapping[str, Any]) -> ValidationResult:
    errors = []

    part_number = data.get("part_number")
    if _is_blank(part_number):
        errors.append(FieldError("part_number", "Part number is required"))
    elif not isinstance(part_number, str) or len(part_number.strip()) < MIN_PART_NUMBER_LENGTH:
        errors.append(FieldError("part_number", f"Part number must be at least {MIN_PART_NUMBER_LENGTH} characters"))

    product_type = data.get("product_type")
    if _is_blank(product_type):
        errors.append(FieldError("product_type", "Product type is required"))
    elif product_type not in PRODUCT_TYPES:
        errors.append(FieldError("product_type", "Product type must be AIR_FILTER, OIL_FILTER, or AIR_OIL_SEPARATOR"))

    if _too_long(data.get("description")):
        errors.append(FieldError("description", f"Description must be {MAX_TEXT_LENGTH} characters or less"))

    return ValidationResult(errors)

def validate_batch(data: Mapping[str, Any]) -> ValidationResult:
    errors = []

    product_id = data.get("product_id")
    if _is_blank(product_id) or product_id == 0:
        errors.append(FieldError("product_id", "Please select a product"))
    else:
        coerced = coerce_int(product_id)
        if coerced is None or coerced <= 0 or coerced > MAX_INTEGER:
            errors.append(FieldError("product_id", "Product id must be a positive whole number"))

    quantity = data.get("quantity")
    if _is_blank(quantity):
        errors.append(FieldError("quantity", "Quantity is required"))
    else:
        qty = coerce_int(quantity)
        if qty is None or qty <= 0:
            errors.append(FieldError("quantity", "Quantity must be a positive number"))
        elif qty > MAX_INTEGER:
            errors.append(FieldError("quantity", f"Quantity must be at most {MAX_INTEGER}"))

    if _too_long(data.get("remarks")):
        errors.append(FieldError("remarks", f"Remarks must be {MAX_TEXT_LENGTH} characters or less"))

    return ValidationResult(errors)
