"""
Client for the hosted chat-completion gateway (OpenAI-compatible
/v1/chat/completions). Knows the wire format and status codes only; mapping
failures to caller-facing errors is left to the services.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

_shared_client: Optional[httpx.AsyncClient] = None


def get_http_client(timeout: float = 60.0) -> httpx.AsyncClient:
    """Process-wide AsyncClient used for gateway calls (closed on app shutdown)."""
    global _shared_client
    if _shared_client is None or _shared_client.is_closed:
        _shared_client = httpx.AsyncClient(timeout=httpx.Timeout(timeout))
    return _shared_client


async def close_http_client() -> None:
    global _shared_client
    if _shared_client is not None and not _shared_client.is_closed:
        await _shared_client.aclose()
    _shared_client = None


class GatewayStatusError(Exception):
    """Non-success status from the gateway; ``body`` is kept for diagnostics."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"gateway returned {status_code}")
        self.status_code = status_code
        self.body = body


class GatewayClient:
    def __init__(
        self,
        api_key: str,
        url: str,
        model: str,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.url = url
        self.model = model
        self._api_key = api_key
        self._http = http_client or get_http_client()

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

    def build_payload(self, messages: list[dict[str, Any]], **options: Any) -> dict[str, Any]:
        """Request body: model and messages plus any non-None option (stream, temperature, tools, ...)."""
        payload: dict[str, Any] = {"model": self.model, "messages": messages}
        payload.update({k: v for k, v in options.items() if v is not None})
        return payload

    async def open_stream(
        self,
        messages: list[dict[str, Any]],
        *,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> httpx.Response:
        """
        Start a streaming completion and return the open response.
        The caller relays ``aiter_bytes()`` (content-decoded) and must ``aclose()`` it.
        """
        payload = self.build_payload(messages, stream=True, temperature=temperature, max_tokens=max_tokens)
        request = self._http.build_request("POST", self.url, json=payload, headers=self._headers())
        response = await self._http.send(request, stream=True)
        if not response.is_success:
            try:
                body = (await response.aread()).decode("utf-8", errors="replace")
            finally:
                await response.aclose()
            raise GatewayStatusError(response.status_code, body)
        return response

    async def complete(
        self,
        messages: list[dict[str, Any]],
        *,
        tools: Optional[list[dict[str, Any]]] = None,
        tool_choice: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        """Non-streaming completion; returns the decoded JSON body."""
        payload = self.build_payload(messages, tools=tools, tool_choice=tool_choice)
        response = await self._http.post(self.url, json=payload, headers=self._headers())
        if not response.is_success:
            raise GatewayStatusError(response.status_code, response.text)
        return response.json()


def first_tool_call(completion: dict[str, Any]) -> Optional[dict[str, Any]]:
    """choices[0].message.tool_calls[0], or None when the model produced no tool call."""
    try:
        calls = completion["choices"][0]["message"].get("tool_calls") or []
    except (KeyError, IndexError, TypeError, AttributeError):
        return None
    if not calls or not isinstance(calls[0], dict):
        return None
    return calls[0]
