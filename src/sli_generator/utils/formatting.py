"""
Display formatting shared by the markup and vector renderers.
"""

from __future__ import annotations

from datetime import date
from typing import Optional


def format_quantity(value: float) -> str:
    if value == int(value):
        return f"{int(value):,}"
    return f"{value:,.3f}".rstrip("0").rstrip(".")


def format_money(value: float) -> str:
    return f"${value:,.2f}"


def format_weight(value: float) -> str:
    return f"{value:,.2f} kg"


def format_date(value: Optional[date]) -> str:
    if value is None:
        return ""
    return value.strftime("%m/%d/%Y")
