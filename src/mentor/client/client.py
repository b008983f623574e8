"""
HTTP client for the mentor proxy endpoints.

Two call styles:
- stream_chat: one POST whose event-stream body is decoded incrementally.
- invoke: one POST/JSON round trip (quiz and roadmap generation).

Each call is independent; nothing is retried and no state survives between calls.
"""

from __future__ import annotations

import json
import logging
from typing import Any, AsyncIterator, Mapping, Optional, Sequence, Type, TypeVar, Union

import httpx
from pydantic import BaseModel, ValidationError

from mentor.client.stream import CancelToken, iter_stream_events
from mentor.client.sse import StreamEvent
from mentor.config import ClientSettings, get_client_settings
from mentor.core.errors import GENERIC_ERROR, NoResponseBodyError, RequestFailedError
from mentor.models import ChatMessage, Interest, Level, QuizPayload, RoadmapPayload

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

MessageLike = Union[ChatMessage, Mapping[str, Any]]

_UNSET: Any = object()


def extract_error_message(body: Union[bytes, str, None], default: str = GENERIC_ERROR) -> str:
    """Pull ``error`` out of a JSON error body, falling back to ``default``."""
    if not body:
        return default
    try:
        parsed = json.loads(body)
    except (TypeError, ValueError):
        return default
    if isinstance(parsed, dict):
        error = parsed.get("error")
        if isinstance(error, str) and error:
            return error
    return default


def _has_no_body(response: httpx.Response) -> bool:
    return response.status_code in (204, 205) or response.headers.get("content-length") == "0"


def _message_dict(message: MessageLike) -> dict[str, Any]:
    if isinstance(message, BaseModel):
        return message.model_dump()
    return {"role": message["role"], "content": message["content"]}


def _enum_value(value: Any) -> Any:
    return value.value if isinstance(value, (Interest, Level)) else value


class MentorClient:
    """
    Client for the chat/quiz/roadmap proxy.

        async with MentorClient() as client:
            async for event in client.stream_chat("chat", messages, {"interest": ..., "level": ...}):
                ...
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = _UNSET,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        idle_timeout: Optional[float] = _UNSET,
        settings: Optional[ClientSettings] = None,
    ):
        settings = settings or get_client_settings()
        self.base_url = (base_url or settings.functions_url).rstrip("/")
        self._api_key = settings.api_key if api_key is _UNSET else api_key
        self.idle_timeout = settings.idle_timeout if idle_timeout is _UNSET else idle_timeout
        self._owns_http = http_client is None
        # Reads are bounded per chunk by idle_timeout, not by httpx.
        self._http = http_client or httpx.AsyncClient(timeout=httpx.Timeout(settings.request_timeout, read=None))

    def _url(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    async def stream_chat(
        self,
        endpoint: str,
        messages: Optional[Sequence[MessageLike]] = None,
        extra: Optional[Mapping[str, Any]] = None,
        *,
        cancel_token: Optional[CancelToken] = None,
        idle_timeout: Optional[float] = _UNSET,
    ) -> AsyncIterator[StreamEvent]:
        """
        Stream a reply as DeltaFrame items followed by one StreamDone.

        Lazy: the request is sent on first iteration. Raises RequestFailedError for a
        non-success status (message taken from the ``error`` field when present),
        NoResponseBodyError for an empty success response and StreamTimeoutError when
        no bytes arrive within the idle timeout.
        """
        body: dict[str, Any] = {}
        if messages is not None:
            body["messages"] = [_message_dict(m) for m in messages]
        body.update({k: _enum_value(v) for k, v in (extra or {}).items()})
        timeout = self.idle_timeout if idle_timeout is _UNSET else idle_timeout

        request = self._http.build_request("POST", self._url(endpoint), json=body, headers=self._headers())
        try:
            response = await self._http.send(request, stream=True)
        except httpx.HTTPError as exc:
            logger.warning("stream request failed endpoint=%s error=%s", endpoint, exc)
            raise RequestFailedError() from exc

        try:
            if not response.is_success:
                await response.aread()
                message = extract_error_message(response.content)
                logger.info("stream request rejected endpoint=%s status=%s", endpoint, response.status_code)
                raise RequestFailedError(message, status_code=response.status_code)
            if _has_no_body(response):
                raise NoResponseBodyError(status_code=response.status_code)

            async for event in iter_stream_events(response, idle_timeout=timeout, cancel_token=cancel_token):
                yield event
        except httpx.HTTPError as exc:
            logger.warning("stream read failed endpoint=%s error=%s", endpoint, exc)
            raise RequestFailedError() from exc
        finally:
            await response.aclose()

    async def invoke(
        self,
        endpoint: str,
        body: Mapping[str, Any],
        response_model: Optional[Type[T]] = None,
    ) -> Any:
        """POST ``body`` and return the parsed JSON reply (validated into ``response_model`` if given)."""
        payload = {k: _enum_value(v) for k, v in body.items()}
        try:
            response = await self._http.post(self._url(endpoint), json=payload, headers=self._headers())
        except httpx.HTTPError as exc:
            logger.warning("request failed endpoint=%s error=%s", endpoint, exc)
            raise RequestFailedError() from exc

        if not response.is_success:
            logger.info("request rejected endpoint=%s status=%s", endpoint, response.status_code)
            raise RequestFailedError(extract_error_message(response.content), status_code=response.status_code)

        try:
            data = response.json()
        except ValueError as exc:
            raise RequestFailedError(status_code=response.status_code) from exc
        if response_model is None:
            return data
        try:
            return response_model.model_validate(data)
        except ValidationError as exc:
            logger.warning("unexpected %s payload: %s", endpoint, exc)
            raise RequestFailedError(status_code=response.status_code) from exc

    async def generate_quiz(self, interest: Union[Interest, str], level: Union[Level, str]) -> QuizPayload:
        return await self.invoke("quiz", {"interest": interest, "level": level}, QuizPayload)

    async def generate_roadmap(self, interest: Union[Interest, str], level: Union[Level, str]) -> RoadmapPayload:
        return await self.invoke("roadmap", {"interest": interest, "level": level}, RoadmapPayload)

    async def close(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> "MentorClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
