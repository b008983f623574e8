"""
Incremental decoder for the chat event stream.

The stream is a sequence of newline-terminated lines. Only lines prefixed with
``data: `` matter; each carries either one JSON chunk in the chat-completion
delta shape or the ``[DONE]`` sentinel. Bytes arrive in arbitrary chunks, so a
read may end inside a UTF-8 sequence or in the middle of a line.
"""

from __future__ import annotations

import codecs
import json
from dataclasses import dataclass
from typing import Any, Literal, Optional, Union

DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"


@dataclass(frozen=True)
class DeltaFrame:
    """One fragment of assistant text, emitted as soon as its line is decoded."""

    content: str


@dataclass(frozen=True)
class StreamDone:
    """Terminal marker. ``reason`` is "sentinel" for [DONE], "closed" for end of stream."""

    reason: Literal["sentinel", "closed"] = "sentinel"


StreamEvent = Union[DeltaFrame, StreamDone]


def extract_delta_content(payload: Any) -> Optional[str]:
    """Read choices[0].delta.content; anything missing or empty yields None."""
    if not isinstance(payload, dict):
        return None
    choices = payload.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    delta = first.get("delta")
    if not isinstance(delta, dict):
        return None
    content = delta.get("content")
    if isinstance(content, str) and content:
        return content
    return None


class SSEDecoder:
    """
    Stateful line splitter for one response. Not reusable across responses.

        decoder = SSEDecoder()
        for chunk in chunks:
            for event in decoder.feed(chunk):
                ...
        events = decoder.close()
    """

    def __init__(self) -> None:
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""
        self._done = False

    @property
    def done(self) -> bool:
        return self._done

    @property
    def pending(self) -> str:
        """Text received but not yet consumed as a complete line."""
        return self._buffer

    def feed(self, chunk: bytes) -> list[StreamEvent]:
        if self._done:
            return []
        self._buffer += self._decoder.decode(chunk)

        events: list[StreamEvent] = []
        while True:
            idx = self._buffer.find("\n")
            if idx == -1:
                break
            line = self._buffer[:idx]
            self._buffer = self._buffer[idx + 1:]
            if line.endswith("\r"):
                line = line[:-1]
            if not line.startswith(DATA_PREFIX):
                continue

            payload = line[len(DATA_PREFIX):].strip()
            if payload == DONE_SENTINEL:
                self._done = True
                events.append(StreamDone("sentinel"))
                return events

            try:
                parsed = json.loads(payload)
            except ValueError:
                # Incomplete JSON: put the line back and wait for the next read.
                self._buffer = line + "\n" + self._buffer
                break

            content = extract_delta_content(parsed)
            if content:
                events.append(DeltaFrame(content))
        return events

    def close(self) -> list[StreamEvent]:
        """Signal end of input. Completion is reported once, whatever ended the stream."""
        if self._done:
            return []
        self._done = True
        return [StreamDone("closed")]
