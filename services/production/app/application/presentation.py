"""
Search and form helpers used by the list views.

Search is whitespace- and case-insensitive: "ab 12" matches "AB12-X".
Records may be ORM objects or the dict rows returned by BatchService.list.
"""

import re
from typing import Any, Iterable, Optional
from .validation import FieldError

_WHITESPACE = re.compile(r"\s+")

def normalize_search(term: Optional[str]) -> str:
    if not term:
        return ""
    return _WHITESPACE.sub("", term).lower()

def _value(record: Any, name: str) -> Any:
    if isinstance(record, dict):
        return record.get(name)
    return getattr(record, name, None)

def _contains(value: Any, needle: str) -> bool:
    if value is None:
        return False
    # ProductType is a str enum; compare on its value, not its repr
    text = value.value if hasattr(value, "value") else str(value)
    return needle in normalize_search(text)

def product_matches(product: Any, term: Optional[str]) -> bool:
    needle = normalize_search(term)
    if not needle:
        return True
    return any(
        _contains(_value(product, name), needle)
        for name in ("part_number", "product_type", "description")
    )

def batch_matches(batch: Any, term: Optional[str]) -> bool:
    needle = normalize_search(term)
    if not needle:
        return True
    return _contains(_value(batch, "batch_code"), needle) or _contains(_value(batch, "part_number"), needle)

def get_field_error(errors: Iterable[FieldError], field: str) -> Optional[str]:
    """Message of the first error reported for `field`, if any."""
    for error in errors:
        if error.field == field:
            return error.message
    return None
