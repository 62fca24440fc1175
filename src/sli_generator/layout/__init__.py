from .fields import bind_fields, field_value, product_row_values, product_total_values
from .model import (
    A4,
    LETTER,
    PAGE_SIZES,
    Borders,
    Check,
    Field,
    FormCell,
    FormLayout,
    FormRow,
    FormSection,
    PageGeometry,
    PlacedCell,
    ProductColumn,
    ProductTable,
    Text,
    place_row,
)
from .sli_form import SLI_LAYOUT

__all__ = [
    "A4",
    "LETTER",
    "PAGE_SIZES",
    "SLI_LAYOUT",
    "Borders",
    "Check",
    "Field",
    "FormCell",
    "FormLayout",
    "FormRow",
    "FormSection",
    "PageGeometry",
    "PlacedCell",
    "ProductColumn",
    "ProductTable",
    "Text",
    "bind_fields",
    "field_value",
    "place_row",
    "product_row_values",
    "product_total_values",
]
