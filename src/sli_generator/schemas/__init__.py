from .document import GeneratedDocument, HTML_CONTENT_TYPE, PDF_CONTENT_TYPE
from .line_item import AggregatedRow, AggregationResult, LineItem, NO_CODE, origin_flag
from .shipper import ShipperProfile
from .sli import SliInput

__all__ = [
    "AggregatedRow",
    "AggregationResult",
    "GeneratedDocument",
    "HTML_CONTENT_TYPE",
    "LineItem",
    "NO_CODE",
    "PDF_CONTENT_TYPE",
    "ShipperProfile",
    "SliInput",
    "origin_flag",
]
