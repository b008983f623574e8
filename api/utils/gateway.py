"""
FastAPI dependency that hands routes a configured gateway client.
"""

from fastapi import Depends

from api.config import Settings, get_settings
from api.errors import ConfigurationError
from infra.llm.gateway import GatewayClient, get_http_client


def get_gateway(settings: Settings = Depends(get_settings)) -> GatewayClient:
    """Checked per request so a missing credential fails the call, not startup."""
    if not settings.ai_gateway_api_key:
        raise ConfigurationError("AI_GATEWAY_API_KEY is not configured")
    return GatewayClient(
        api_key=settings.ai_gateway_api_key,
        url=settings.ai_gateway_url,
        model=settings.ai_model,
        http_client=get_http_client(settings.gateway_timeout),
    )
