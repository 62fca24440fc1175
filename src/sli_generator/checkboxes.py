"""
Checkbox state resolver.

Maps the sparse ``checkbox_states`` bag of an SLI onto the glyphs the form
draws. Exclusivity of yes/no style pairs is left to the caller; the resolver
only reports pairs that are both set.
"""

from __future__ import annotations

from enum import Enum
from typing import Mapping


class Glyph(str, Enum):
    """Rendered state of one form checkbox."""
    CHECKED = "checked"
    UNCHECKED = "unchecked"

    @property
    def markup(self) -> str:
        return "☒" if self is Glyph.CHECKED else "☐"

    @property
    def is_checked(self) -> bool:
        return self is Glyph.CHECKED


# Every checkbox the form draws, with the caption printed beside it
CHECKBOX_CAPTIONS: dict[str, str] = {
    "related_party_related": "Related",
    "related_party_non_related": "Non-Related",
    "routed_export_yes": "Yes",
    "routed_export_no": "No",
    "consignee_type_government": "Government Entity",
    "consignee_type_direct_consumer": "Direct Consumer",
    "consignee_type_other_unknown": "Other/Unknown",
    "consignee_type_reseller": "Re-Seller",
    "hazardous_material_yes": "Yes",
    "hazardous_material_no": "No",
    "tib_carnet_yes": "Yes",
    "tib_carnet_no": "No",
    "deliver_to_checkbox": "Deliver to forwarder's facility",
    "declaration_statement_checkbox": (
        "USPPI authorizes the forwarder named above to act as forwarding agent "
        "for export control and customs purposes."
    ),
    "signature_checkbox": "Validate Electronic Signature",
}

EXCLUSIVE_PAIRS: tuple[tuple[str, str], ...] = (
    ("related_party_related", "related_party_non_related"),
    ("routed_export_yes", "routed_export_no"),
    ("hazardous_material_yes", "hazardous_material_no"),
    ("tib_carnet_yes", "tib_carnet_no"),
)


def resolve(state: Mapping[str, bool], key: str) -> Glyph:
    """Glyph for ``key``; unknown or non-true keys are unchecked."""
    return Glyph.CHECKED if state.get(key) is True else Glyph.UNCHECKED


def conflicting_pairs(state: Mapping[str, bool]) -> list[tuple[str, str]]:
    """Yes/no style pairs where both boxes are checked."""
    return [
        (first, second)
        for first, second in EXCLUSIVE_PAIRS
        if resolve(state, first).is_checked and resolve(state, second).is_checked
    ]
