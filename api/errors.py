"""
Proxy error taxonomy. Each error carries the HTTP status and the short message
returned to the caller as {"error": message}.
"""

from typing import Optional


class ProxyError(Exception):
    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ConfigurationError(ProxyError):
    """Server is missing something it needs (e.g. the gateway credential). Not retried."""


class RateLimitError(ProxyError):
    status_code = 429


class UsageLimitError(ProxyError):
    status_code = 402


class UpstreamError(ProxyError):
    """Any other gateway failure."""

    def __init__(self, message: str = "AI service error", upstream_status: Optional[int] = None):
        super().__init__(message)
        self.upstream_status = upstream_status


class GenerationError(ProxyError):
    """The gateway answered but produced no usable structured output."""


def error_body(message: str) -> dict:
    return {"error": message}
