"""
Output records handed back to the surrounding application.
"""

from pydantic import BaseModel

PDF_CONTENT_TYPE = "application/pdf"
HTML_CONTENT_TYPE = "text/html; charset=utf-8"


class GeneratedDocument(BaseModel):
    """
    A rendered SLI ready for download.

    Attributes:
        content: Raw document bytes
        content_type: MIME type of ``content``
        filename: Suggested download name, derived from the reference number
        page_count: Number of physical pages (1 for markup)
    """
    content: bytes
    content_type: str = PDF_CONTENT_TYPE
    filename: str
    page_count: int = 1
