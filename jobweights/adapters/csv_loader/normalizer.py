"""CSV value normalization — handles BOM, trailing spaces, quoted values."""

from __future__ import annotations

import re
from datetime import date, datetime

DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d %H:%M:%S",
    "%d.%m.%Y",
    "%d/%m/%Y",
)

# Whole percent with an optional decimal part of one or two digits: "25", "25.0", "25,00"
_WEIGHTING_RE = re.compile(r"^(\d+)(?:[.,](\d{1,2}))?$")


def normalize_column_name(name: str) -> str:
    """Normalize a CSV column name.

    - Removes BOM characters (\\ufeff) and surrounding quotes
    - Strips leading/trailing whitespace
    - Replaces runs of spaces / non-breaking spaces with a single underscore
    - Lowercases
    - Strips anything that is not alphanumeric or underscore
    """
    name = name.replace("\ufeff", "").strip().strip('"').strip()
    name = re.sub(r"[\s\u00a0]+", "_", name)
    name = name.lower()
    name = re.sub(r"[^\w]", "", name, flags=re.UNICODE)
    return name


def clean_string(value: str | None) -> str | None:
    """Strip whitespace and return None for empty strings."""
    if value is None:
        return None
    value = value.strip()
    return value if value else None


def normalize_code(value: str | None) -> str | None:
    """Registry codes are compared case-insensitively."""
    value = clean_string(value)
    return value.upper() if value else None


def parse_date(raw: str | None) -> date | None:
    """Parse a calendar date in one of DATE_FORMATS.

    Raises:
        ValueError: if *raw* is non-empty and matches no known format.
    """
    raw = clean_string(raw)
    if not raw:
        return None
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(raw, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"Unrecognized date: {raw}")


def parse_weighting(raw: str | None) -> int | None:
    """Parse a weighting like "25", "25.0", "25,0" or "25%".

    A comma is only read as a decimal mark, so "1,000" is rejected rather
    than read as 1.

    Raises:
        ValueError: if *raw* is non-empty and not a whole number.
    """
    raw = clean_string(raw)
    if not raw:
        return None
    match = _WEIGHTING_RE.match(raw.rstrip("%").strip())
    if match is None or int(match.group(2) or 0) != 0:
        raise ValueError(f"Weighting must be a whole number: {raw}")
    return int(match.group(1))
