"""Unit tests for MentorClient streaming and JSON calls over httpx.MockTransport."""
import asyncio
import json

import httpx
import pytest

from mentor.client.sse import DeltaFrame, StreamDone
from mentor.client.stream import CancelToken, consume_stream
from mentor.client.client import extract_error_message
from mentor.core.errors import (
    GENERIC_ERROR,
    NoResponseBodyError,
    RequestFailedError,
    StreamTimeoutError,
)
from mentor.models import ChatMessage, Interest, Level, QuizPayload


def _stream_response(body, status_code=200):
    return httpx.Response(status_code, headers={"content-type": "text/event-stream"}, content=body)


async def _collect(stream) -> list:
    return [event async for event in stream]


@pytest.mark.unit
class TestExtractErrorMessage:
    def test_error_field(self):
        assert extract_error_message(b'{"error": "Rate limit exceeded."}') == "Rate limit exceeded."

    def test_fallbacks(self):
        assert extract_error_message(b"") == GENERIC_ERROR
        assert extract_error_message(b"<html>oops</html>") == GENERIC_ERROR
        assert extract_error_message(b'{"detail": "x"}') == GENERIC_ERROR
        assert extract_error_message(b'{"error": 42}') == GENERIC_ERROR
        assert extract_error_message(b"[]", default="Nope") == "Nope"


@pytest.mark.unit
class TestStreamChat:
    @pytest.mark.asyncio
    async def test_sentinel_stops_reading(self, mentor_client_factory, sse_body, data_line, done_line):
        pulled: list[int] = []
        body = sse_body([data_line("Hi") + done_line + data_line("ignored"), data_line("late")], pulled=pulled)
        client = mentor_client_factory(lambda request: _stream_response(body))

        events = await _collect(client.stream_chat("chat", [ChatMessage(role="user", content="hello")]))

        assert events == [DeltaFrame("Hi"), StreamDone("sentinel")]
        assert pulled == [0]

    @pytest.mark.asyncio
    async def test_split_chunks_and_non_data_lines(self, mentor_client_factory, sse_body, data_line):
        line = data_line("Grüße")
        body = sse_body([line[:9], line[9:] + b": ping\n\n", data_line(" there")])
        client = mentor_client_factory(lambda request: _stream_response(body))

        events = await _collect(client.stream_chat("chat", []))

        assert events == [DeltaFrame("Grüße"), DeltaFrame(" there"), StreamDone("closed")]

    @pytest.mark.asyncio
    async def test_request_body_and_headers(self, mentor_client_factory, sse_body, done_line):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["auth"] = request.headers.get("authorization")
            seen["body"] = json.loads(request.content)
            return _stream_response(sse_body([done_line]))

        client = mentor_client_factory(handler)
        messages = [ChatMessage(role="user", content="hi"), {"role": "assistant", "content": "hello"}]
        extra = {"interest": Interest.DATA_SCIENCE, "level": Level.BEGINNER, "temperature": 0.5}

        await _collect(client.stream_chat("chat", messages, extra))

        assert seen["url"] == "https://proxy.test/functions/v1/chat"
        assert seen["auth"] == "Bearer pk-test"
        assert seen["body"] == {
            "messages": [{"role": "user", "content": "hi"}, {"role": "assistant", "content": "hello"}],
            "interest": "Data Science",
            "level": "Beginner",
            "temperature": 0.5,
        }

    @pytest.mark.asyncio
    async def test_no_auth_header_without_key(self, mentor_client_factory, sse_body, done_line):
        seen = {}

        def handler(request):
            seen["auth"] = request.headers.get("authorization")
            return _stream_response(sse_body([done_line]))

        client = mentor_client_factory(handler, api_key=None)
        await _collect(client.stream_chat("chat"))
        assert seen["auth"] is None

    @pytest.mark.asyncio
    async def test_error_status_uses_error_field(self, mentor_client_factory):
        message = "Rate limit exceeded. Please try again in a moment."
        client = mentor_client_factory(lambda request: httpx.Response(429, json={"error": message}))

        with pytest.raises(RequestFailedError) as exc_info:
            await _collect(client.stream_chat("chat", []))

        assert exc_info.value.message == message
        assert exc_info.value.status_code == 429

    @pytest.mark.asyncio
    async def test_error_status_without_json(self, mentor_client_factory):
        client = mentor_client_factory(lambda request: httpx.Response(502, content=b"Bad Gateway"))

        with pytest.raises(RequestFailedError) as exc_info:
            await _collect(client.stream_chat("chat", []))

        assert exc_info.value.message == GENERIC_ERROR
        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    async def test_empty_success_response(self, mentor_client_factory):
        client = mentor_client_factory(lambda request: httpx.Response(204))

        with pytest.raises(NoResponseBodyError) as exc_info:
            await _collect(client.stream_chat("chat", []))

        assert exc_info.value.message == "No response body"

    @pytest.mark.asyncio
    async def test_transport_failure(self, mentor_client_factory):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = mentor_client_factory(handler)

        with pytest.raises(RequestFailedError) as exc_info:
            await _collect(client.stream_chat("chat", []))

        assert exc_info.value.message == GENERIC_ERROR
        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_cancel_between_reads(self, mentor_client_factory, sse_body, data_line):
        pulled: list[int] = []
        body = sse_body([data_line("one"), data_line("two")], pulled=pulled, hang=True)
        client = mentor_client_factory(lambda request: _stream_response(body))
        token = CancelToken()

        events = []
        async for event in client.stream_chat("chat", [], cancel_token=token):
            events.append(event)
            token.cancel()

        assert events == [DeltaFrame("one")]
        assert pulled == [0]

    @pytest.mark.asyncio
    async def test_cancel_while_waiting(self, mentor_client_factory, sse_body, data_line):
        body = sse_body([data_line("one")], hang=True)
        client = mentor_client_factory(lambda request: _stream_response(body), idle_timeout=None)
        token = CancelToken()

        events = []

        async def consume():
            async for event in client.stream_chat("chat", [], cancel_token=token):
                events.append(event)

        task = asyncio.create_task(consume())
        await asyncio.sleep(0.05)
        token.cancel()
        await asyncio.wait_for(task, timeout=1.0)

        # No completion is reported for a cancelled stream.
        assert events == [DeltaFrame("one")]

    @pytest.mark.asyncio
    async def test_idle_timeout(self, mentor_client_factory, sse_body, data_line):
        body = sse_body([data_line("one")], hang=True)
        client = mentor_client_factory(lambda request: _stream_response(body), idle_timeout=0.05)

        events = []
        with pytest.raises(StreamTimeoutError):
            async for event in client.stream_chat("chat", []):
                events.append(event)

        assert events == [DeltaFrame("one")]

    @pytest.mark.asyncio
    async def test_consume_stream_callbacks(self, mentor_client_factory, sse_body, data_line, done_line):
        body = sse_body([data_line("a"), data_line("b") + done_line])
        client = mentor_client_factory(lambda request: _stream_response(body))
        deltas: list[str] = []
        done: list[bool] = []

        async def on_done():
            done.append(True)

        await consume_stream(client.stream_chat("chat", []), deltas.append, on_done)

        assert deltas == ["a", "b"]
        assert done == [True]


@pytest.mark.unit
class TestInvoke:
    QUIZ = {
        "topic": "Python basics",
        "questions": [
            {"question": "2 + 2?", "options": ["3", "4", "5", "22"], "correct": 1, "explanation": "Sum."},
        ],
    }

    @pytest.mark.asyncio
    async def test_returns_raw_json(self, mentor_client_factory):
        client = mentor_client_factory(lambda request: httpx.Response(200, json={"ok": True}))
        assert await client.invoke("anything", {"a": 1}) == {"ok": True}

    @pytest.mark.asyncio
    async def test_generate_quiz(self, mentor_client_factory):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=self.QUIZ)

        client = mentor_client_factory(handler)
        quiz = await client.generate_quiz(Interest.WEB_DEVELOPMENT, Level.ADVANCED)

        assert isinstance(quiz, QuizPayload)
        assert quiz.questions[0].correct == 1
        assert seen == {"path": "/functions/v1/quiz", "body": {"interest": "Web Development", "level": "Advanced"}}

    @pytest.mark.asyncio
    async def test_error_status(self, mentor_client_factory):
        client = mentor_client_factory(lambda request: httpx.Response(402, json={"error": "AI usage limit reached."}))

        with pytest.raises(RequestFailedError) as exc_info:
            await client.generate_roadmap("Data Science", "Beginner")

        assert exc_info.value.message == "AI usage limit reached."
        assert exc_info.value.status_code == 402

    @pytest.mark.asyncio
    async def test_non_json_success_body(self, mentor_client_factory):
        client = mentor_client_factory(lambda request: httpx.Response(200, content=b"not json"))

        with pytest.raises(RequestFailedError) as exc_info:
            await client.invoke("quiz", {})

        assert exc_info.value.message == GENERIC_ERROR

    @pytest.mark.asyncio
    async def test_unexpected_shape(self, mentor_client_factory):
        client = mentor_client_factory(lambda request: httpx.Response(200, json={"roadmap": "nope"}))

        with pytest.raises(RequestFailedError):
            await client.generate_roadmap("Data Science", "Beginner")
