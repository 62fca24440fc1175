"""
Configuration module for the SLI generator.
Loads environment variables and provides configuration settings.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

from .schemas.shipper import ShipperProfile

# Load .env file from the sli_generator directory
BASE_DIR = Path(__file__).resolve().parent
load_dotenv(BASE_DIR / ".env")


def _split_lines(value: str) -> list[str]:
    return [part.strip() for part in value.split("|") if part.strip()]


def _float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, default))
    except ValueError:
        return default


class Config:
    """Configuration settings for the SLI generator."""

    PAGE_SIZE: str = os.getenv("SLI_PAGE_SIZE", "LETTER").upper()
    # Oversampling factor used when rasterizing the markup surface
    RASTER_SCALE: float = _float("SLI_RASTER_SCALE", 2.0)
    TEMPLATE_PATH: str = os.getenv("SLI_TEMPLATE_PATH", "")
    LOG_LEVEL: str = os.getenv("SLI_LOG_LEVEL", "INFO").upper()
    OUTPUT_DIR: Path = Path(os.getenv("SLI_OUTPUT_DIR", "generated"))

    # Exporter (USPPI) identity printed on every form
    USPPI_NAME: str = os.getenv("SLI_USPPI_NAME", "")
    USPPI_ADDRESS: str = os.getenv("SLI_USPPI_ADDRESS", "")
    USPPI_EIN: str = os.getenv("SLI_USPPI_EIN", "")
    USPPI_EMAIL: str = os.getenv("SLI_USPPI_EMAIL", "")
    USPPI_PHONE: str = os.getenv("SLI_USPPI_PHONE", "")
    USPPI_OFFICER: str = os.getenv("SLI_USPPI_OFFICER", "")
    USPPI_TITLE: str = os.getenv("SLI_USPPI_TITLE", "")
    FREIGHT_LOCATION_NAME: str = os.getenv("SLI_FREIGHT_LOCATION_NAME", "")
    FREIGHT_LOCATION_ADDRESS: str = os.getenv("SLI_FREIGHT_LOCATION_ADDRESS", "")
    STATE_OF_ORIGIN: str = os.getenv("SLI_STATE_OF_ORIGIN", "")
    MODE_OF_TRANSPORT: str = os.getenv("SLI_MODE_OF_TRANSPORT", "Ocean")

    # Per-row defaults for the commodity table
    DEFAULT_UOM: str = os.getenv("SLI_DEFAULT_UOM", "Each")
    DEFAULT_ECCN: str = os.getenv("SLI_DEFAULT_ECCN", "EAR99")
    DEFAULT_LICENSE_SYMBOL: str = os.getenv("SLI_DEFAULT_LICENSE_SYMBOL", "NLR")

    SUPPORTED_PAGE_SIZES: list[str] = ["LETTER", "A4"]

    @classmethod
    def validate(cls) -> None:
        """Validate that the configured values are usable."""
        if cls.PAGE_SIZE not in cls.SUPPORTED_PAGE_SIZES:
            raise ValueError(
                f"SLI_PAGE_SIZE must be one of {cls.SUPPORTED_PAGE_SIZES}, got {cls.PAGE_SIZE!r}"
            )
        if cls.RASTER_SCALE <= 0:
            raise ValueError("SLI_RASTER_SCALE must be positive")

    @classmethod
    def shipper_profile(cls) -> ShipperProfile:
        """Build the exporter profile from the environment."""
        return ShipperProfile(
            usppi_name=cls.USPPI_NAME,
            usppi_address_lines=_split_lines(cls.USPPI_ADDRESS),
            usppi_ein=cls.USPPI_EIN,
            usppi_email=cls.USPPI_EMAIL,
            usppi_phone=cls.USPPI_PHONE,
            officer_name=cls.USPPI_OFFICER,
            officer_title=cls.USPPI_TITLE,
            freight_location_name=cls.FREIGHT_LOCATION_NAME,
            freight_location_address_lines=_split_lines(cls.FREIGHT_LOCATION_ADDRESS),
            state_of_origin=cls.STATE_OF_ORIGIN,
            mode_of_transport=cls.MODE_OF_TRANSPORT,
            default_uom=cls.DEFAULT_UOM,
            default_eccn=cls.DEFAULT_ECCN,
            default_license_symbol=cls.DEFAULT_LICENSE_SYMBOL,
        )


config = Config()
