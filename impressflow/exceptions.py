"""Exceptions raised by the positioning engine.

Parsing never raises for malformed documents; bad directives and frontmatter
values are corrected in place. Only requests that have no sensible geometry end
up here.
"""

from datetime import datetime
from typing import Optional


class ImpressFlowError(Exception):
    """Base exception for all ImpressFlow errors"""

    def __init__(
        self,
        message: str,
        error_type: str = "general",
        original_error: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.original_error = original_error
        self.timestamp = datetime.now()

    def __str__(self):
        return f"{self.error_type}: {self.message}"


class PositioningError(ImpressFlowError):
    """Slide poses could not be computed"""

    def __init__(self, message: str, error_type: str = "invalid_request", **kwargs):
        super().__init__(message, error_type=error_type, **kwargs)


class UnknownLayoutError(PositioningError, ValueError):
    """Layout name is not one of the registered positioning algorithms"""

    def __init__(self, layout: str, available: Optional[list] = None):
        available = list(available or [])
        message = f"Unknown layout: {layout!r}"
        if available:
            message += f". Available: {', '.join(available)}"
        super().__init__(message, error_type="unknown_layout")
        self.layout = layout
        self.available = available
