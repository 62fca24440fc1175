"""
ShipperProfile - the exporter's fixed identity printed on every SLI.
"""

from pydantic import BaseModel, Field


class ShipperProfile(BaseModel):
    """USPPI (U.S. Principal Party in Interest) and freight-location data."""
    usppi_name: str = ""
    usppi_address_lines: list[str] = Field(default_factory=list, max_length=3)
    usppi_ein: str = ""
    usppi_email: str = ""
    usppi_phone: str = ""
    officer_name: str = ""
    officer_title: str = ""
    freight_location_name: str = ""
    freight_location_address_lines: list[str] = Field(default_factory=list, max_length=3)
    state_of_origin: str = ""
    mode_of_transport: str = ""
    # Commodity table defaults
    default_uom: str = "Each"
    default_eccn: str = "EAR99"
    default_license_symbol: str = "NLR"
