"""
Batch code helpers.

Format: PARTNUMBER-YYYYMMDD-SEQ, e.g. AB123-20260215-001. The part number may
itself contain dashes; the date and sequence are always the last two groups.
"""

import re
from dataclasses import dataclass
from datetime import date
from typing import Optional

BATCH_CODE_PATTERN = re.compile(r"(.+)-(\d{8})-(\d{3})")

@dataclass(frozen=True)
class ParsedBatchCode:
    part_number: str
    date: date
    sequence: int

def generate_batch_code(part_number: str, last_sequence: int = 0, today: Optional[date] = None) -> str:
    """
    Build the next batch code for `part_number`.

    `last_sequence` is the highest sequence already used on `today`
    (defaults to the current local date); the result uses that plus one,
    zero-padded to three digits.
    """
    today = today or date.today()
    return f"{part_number}-{today:%Y%m%d}-{last_sequence + 1:03d}"

def parse_batch_code(batch_code: str) -> Optional[ParsedBatchCode]:
    """Split a batch code into its parts, or None when it does not follow the format."""
    if not isinstance(batch_code, str):
        return None

    match = BATCH_CODE_PATTERN.fullmatch(batch_code)
    if not match:
        return None

    part_number, date_str, seq_str = match.groups()
    try:
        produced_on = date(int(date_str[:4]), int(date_str[4:6]), int(date_str[6:8]))
    except ValueError:
        # Eight digits that are not a calendar date, e.g. 20261341
        return None

    return ParsedBatchCode(part_number=part_number, date=produced_on, sequence=int(seq_str))
