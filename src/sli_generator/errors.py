"""
Exceptions raised by the SLI generator.
"""


class SliError(Exception):
    """Base exception for SLI generation failures."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class RecordNotFoundError(SliError):
    """An upstream record (SLI, order, standalone document) does not exist."""

    def __init__(self, kind: str, record_id: str):
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind} not found: {record_id}")


class LayoutError(SliError):
    """The form layout declaration breaks a geometry invariant."""


class PageOverflowError(SliError):
    """The vector composer ran out of vertical space on the page."""

    def __init__(self, message: str, rows_fitting: int):
        self.rows_fitting = rows_fitting
        super().__init__(message)


class CaptureError(SliError):
    """The rendered markup is taller than the capture canvas."""
