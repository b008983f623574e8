"""Mentor client: event-stream chat consumer and structured request client."""

from mentor.client.client import MentorClient, extract_error_message
from mentor.client.sse import DeltaFrame, SSEDecoder, StreamDone, StreamEvent, extract_delta_content
from mentor.client.stream import CancelToken, consume_stream, iter_stream_events

__all__ = [
    "MentorClient",
    "extract_error_message",
    "DeltaFrame",
    "SSEDecoder",
    "StreamDone",
    "StreamEvent",
    "extract_delta_content",
    "CancelToken",
    "consume_stream",
    "iter_stream_events",
]
