from __future__ import annotations

import math
from datetime import date, datetime
from typing import Any, Optional


DATE_FORMATS = ("%Y-%m-%d", "%m/%d/%Y", "%Y/%m/%d", "%d-%m-%Y")


def coerce_number(value: Any) -> float:
    """Parse a numeric field, defaulting anything malformed to zero."""
    if value is None:
        return 0.0
    if isinstance(value, str):
        value = value.strip().replace(",", "")
        if not value:
            return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def normalize_date(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    # ISO timestamps coming from the store ("2024-05-01T00:00:00+00:00")
    if len(text) > 10 and text[4:5] == "-" and text[10:11] in ("T", " "):
        text = text[:10]
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def clean_text(value: Any) -> str:
    if value is None:
        return ""
    text = str(value).strip()
    # Collapse multiple spaces
    while "  " in text:
        text = text.replace("  ", " ")
    return text
