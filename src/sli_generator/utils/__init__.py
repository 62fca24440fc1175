from .normalization import clean_text, coerce_number, normalize_date
from .formatting import format_date, format_money, format_quantity, format_weight

__all__ = [
    "clean_text",
    "coerce_number",
    "normalize_date",
    "format_date",
    "format_money",
    "format_quantity",
    "format_weight",
]
