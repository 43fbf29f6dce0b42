"""
HOOPSTATS - Error Taxonomy
Every error carries a human-readable message, the underlying error text and
the HTTP status it is rendered with.
"""

from typing import Optional


class HoopStatsError(Exception):
    """Base class for all service errors."""

    status_code: int = 500
    default_message: str = "Internal error"

    def __init__(self, message: Optional[str] = None, detail: Optional[str] = None):
        self.message = message or self.default_message
        self.detail = detail if detail is not None else self.message
        super().__init__(self.detail)

    def to_envelope(self) -> dict:
        return {"success": False, "message": self.message, "error": self.detail}


class UpstreamError(HoopStatsError):
    """Failure talking to the upstream provider."""

    default_message = "Upstream API error"


class UpstreamTransportError(UpstreamError):
    """Timeout, connection failure, non-2xx status or undecodable body."""

    default_message = "Upstream API request failed"


class UpstreamProtocolError(UpstreamError):
    """Envelope status was not "success"."""

    default_message = "Invalid API response"


class EndpointNotFoundError(HoopStatsError):
    """Every candidate endpoint of a fallback chain failed."""

    status_code = 404
    default_message = "Endpoint not found. Check API documentation."


class NoDataError(HoopStatsError):
    """Upstream answered but returned no usable records."""

    status_code = 404
    default_message = "No data found in API response"


class NotFoundError(HoopStatsError):
    status_code = 404
    default_message = "Record not found"


class StoreError(HoopStatsError):
    """Database operation failure."""

    default_message = "Database error"
