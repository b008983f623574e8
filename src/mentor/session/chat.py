"""
Chat turn driver: sends one learner message and folds the streamed reply into
the session, fragment by fragment.
"""

from __future__ import annotations

import logging
from typing import Optional

from mentor.client.client import MentorClient
from mentor.client.sse import DeltaFrame, StreamDone
from mentor.client.stream import CancelToken
from mentor.models import ChatMessage
from mentor.session.state import MentorSession

logger = logging.getLogger(__name__)

CHAT_ENDPOINT = "chat"
TOPIC_CHARS = 50
TEMPERATURE_RANGE = (0.0, 1.0)
MAX_TOKENS_RANGE = (256, 4096)


class ChatTurn:
    def __init__(
        self,
        session: MentorSession,
        client: MentorClient,
        *,
        temperature: float = 0.7,
        max_tokens: int = 1024,
    ):
        self.session = session
        self.client = client
        self.is_loading = False
        self.temperature = temperature
        self.max_tokens = max_tokens

    @property
    def temperature(self) -> float:
        return self._temperature

    @temperature.setter
    def temperature(self, value: float) -> None:
        low, high = TEMPERATURE_RANGE
        if not low <= value <= high:
            raise ValueError(f"temperature must be between {low} and {high}")
        self._temperature = float(value)

    @property
    def max_tokens(self) -> int:
        return self._max_tokens

    @max_tokens.setter
    def max_tokens(self, value: int) -> None:
        low, high = MAX_TOKENS_RANGE
        if not low <= value <= high:
            raise ValueError(f"max_tokens must be between {low} and {high}")
        self._max_tokens = int(value)

    async def send(self, text: str, *, cancel_token: Optional[CancelToken] = None) -> Optional[str]:
        """
        Send ``text`` and stream the reply into the session.

        Returns the full reply, or None when nothing was sent (blank input or a turn
        already in flight). On failure the partial reply stays in the history and the
        MentorClientError propagates.
        """
        text = text.strip()
        if not text or self.is_loading:
            return None
        interest, level = self.session.require_subject()

        # The reply belongs to the subject it was asked in, even if the learner switches mid-stream.
        domain = self.session.domain_key
        history = self.session.chat_messages
        user_msg = ChatMessage(role="user", content=text)
        self.session.append_message(user_msg, domain=domain)
        self.session.add_topic(text[:TOPIC_CHARS])

        self.is_loading = True
        reply: list[str] = []
        try:
            stream = self.client.stream_chat(
                CHAT_ENDPOINT,
                messages=[*history, user_msg],
                extra={
                    "interest": interest.value,
                    "level": level.value,
                    "temperature": self.temperature,
                    "max_tokens": self.max_tokens,
                },
                cancel_token=cancel_token,
            )
            async for event in stream:
                if isinstance(event, DeltaFrame):
                    reply.append(event.content)
                    self.session.append_assistant_delta(event.content, domain=domain)
                elif isinstance(event, StreamDone):
                    logger.debug("chat turn done reason=%s chars=%s", event.reason, sum(map(len, reply)))
        finally:
            self.is_loading = False
        return "".join(reply)
