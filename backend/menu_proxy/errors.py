"""
Error taxonomy for the proxy endpoint.

Every error knows the HTTP status and JSON body it should be reported with,
so the router can turn any of them into a response in one place.
"""

from typing import Any, Optional


class ProxyError(Exception):
    """Base class for errors that map directly onto an HTTP response."""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    @property
    def body(self) -> Any:
        return {"error": self.message}


class PayloadValidationError(ProxyError):
    """The caller's payload is missing required fields (400)."""

    status_code = 400


class ConfigurationError(ProxyError):
    """The server is misconfigured, e.g. the API key is not set (500)."""

    status_code = 500


class UpstreamError(ProxyError):
    """
    The external API answered with a non-success status.

    The upstream body is relayed verbatim instead of being wrapped in
    ``{"error": ...}``.
    """

    def __init__(self, status_code: int, body: Any):
        super().__init__(f"Upstream API returned status {status_code}", status_code)
        self.upstream_body = body

    @property
    def body(self) -> Any:
        return self.upstream_body
