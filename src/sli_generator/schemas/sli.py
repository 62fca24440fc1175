"""
SliInput - the normalized record every renderer consumes.

The record is fully resolved by the data assembly layer; the renderers never
reach back into the store.
"""

from datetime import date
from typing import Any
from pydantic import BaseModel, Field, field_validator

from ..utils.normalization import clean_text, normalize_date
from .line_item import LineItem


class SliInput(BaseModel):
    """Normalized input for one Shipper's Letter of Instruction."""
    sli_number: int | None = None
    sli_date: date = Field(default_factory=date.today)
    reference_number: str = ""  # USPPI reference / invoice number
    forwarding_agent_lines: list[str] = Field(default_factory=list, max_length=4)
    consignee_name: str = ""
    consignee_address_lines: list[str] = Field(default_factory=list, max_length=3)
    consignee_country: str = ""
    intermediate_consignee: str = ""
    in_bond_code: str = ""
    license_number: str = ""
    instructions_to_forwarder: str = ""
    export_date: date | None = None
    checkbox_states: dict[str, bool] = Field(default_factory=dict)
    line_items: list[LineItem] = Field(default_factory=list)

    @field_validator("export_date", mode="before")
    @classmethod
    def _parse_export_date(cls, value: Any) -> date | None:
        return normalize_date(value)

    @field_validator("sli_date", mode="before")
    @classmethod
    def _parse_sli_date(cls, value: Any) -> date:
        return normalize_date(value) or date.today()

    @field_validator("forwarding_agent_lines", "consignee_address_lines", mode="before")
    @classmethod
    def _drop_blank_lines(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [clean_text(line) for line in value if clean_text(line)]
        return value

    @field_validator("checkbox_states", mode="before")
    @classmethod
    def _checkbox_flags(cls, value: Any) -> dict[str, bool]:
        # Only a literal true checks a box; anything else is left unchecked
        if not isinstance(value, dict):
            return {}
        return {str(key): flag is True for key, flag in value.items()}
