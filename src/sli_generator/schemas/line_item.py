"""
Line item input and the rows derived from it by the product aggregator.
"""

from typing import Any
from pydantic import BaseModel, Field, field_validator

from ..utils.normalization import clean_text, coerce_number

DOMESTIC_ORIGINS = frozenset({"usa", "united states", "us"})
NO_CODE = "N/A"


def origin_flag(made_in: str | None) -> str:
    """Domestic ("D") or foreign ("F") marker for a country of origin."""
    country = (made_in or "").strip().lower()
    return "D" if country in DOMESTIC_ORIGINS else "F"


class LineItem(BaseModel):
    """
    One order line as handed over by the data assembly layer.

    Numeric fields never fail validation: anything that cannot be read as a
    finite number becomes 0.
    """
    hs_code: str | None = None
    quantity: float = 0.0
    case_qty: float = 0.0
    unit_weight: float = 0.0
    value: float = 0.0
    made_in: str = ""
    item_name: str = ""

    @field_validator("quantity", "case_qty", "unit_weight", "value", mode="before")
    @classmethod
    def _lenient_number(cls, value: Any) -> float:
        return coerce_number(value)

    @field_validator("hs_code", mode="before")
    @classmethod
    def _code_as_text(cls, value: Any) -> str | None:
        return None if value is None else str(value)

    @field_validator("made_in", "item_name", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return clean_text(value)

    @property
    def weight(self) -> float:
        """Shipping weight is measured per physical case."""
        return self.case_qty * self.unit_weight


class AggregatedRow(BaseModel):
    """Summary row of the commodity table, keyed by HS code."""
    hs_code: str = NO_CODE
    quantity: float = 0.0
    weight: float = 0.0
    value: float = 0.0
    made_in: str = ""
    item_names: list[str] = Field(default_factory=list)

    @property
    def origin_flag(self) -> str:
        return origin_flag(self.made_in)


class AggregationResult(BaseModel):
    """Output of the product aggregator."""
    with_code: list[AggregatedRow] = Field(default_factory=list)
    without_code: list[AggregatedRow] = Field(default_factory=list)

    @property
    def rows(self) -> list[AggregatedRow]:
        return [*self.with_code, *self.without_code]

    @property
    def total_quantity(self) -> float:
        return sum(row.quantity for row in self.rows)

    @property
    def total_weight(self) -> float:
        return sum(row.weight for row in self.rows)

    @property
    def total_value(self) -> float:
        return sum(row.value for row in self.rows)
