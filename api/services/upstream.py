"""
Maps gateway failures onto proxy errors. Rate and usage limits are surfaced with
their own messages; everything else is logged with status and body and reported
as a generic service error.
"""

import httpx

from api.errors import ProxyError, RateLimitError, UpstreamError, UsageLimitError
from api.utils.logger import configure_logging
from infra.llm.gateway import GatewayStatusError

logger = configure_logging()


def translate_gateway_error(
    exc: Exception,
    *,
    rate_limit_message: str,
    usage_limit_message: str,
) -> ProxyError:
    if isinstance(exc, GatewayStatusError):
        if exc.status_code == 429:
            return RateLimitError(rate_limit_message)
        if exc.status_code == 402:
            return UsageLimitError(usage_limit_message)
        logger.error("AI gateway error status=%s body=%s", exc.status_code, exc.body)
        return UpstreamError(upstream_status=exc.status_code)
    if isinstance(exc, httpx.HTTPError):
        logger.error("AI gateway unreachable error=%r", exc)
        return UpstreamError()
    raise TypeError(f"not a gateway failure: {exc!r}")
