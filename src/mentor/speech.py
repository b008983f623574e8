"""
Optional voice input. The host may or may not provide a recognizer; running
without one is a normal condition and only disables the feature.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol

logger = logging.getLogger(__name__)


class SpeechRecognizer(Protocol):
    """Host speech capability. The host calls the on_* hooks; VoiceInput installs them."""

    on_transcript: Optional[Callable[[str], None]]
    on_error: Optional[Callable[[Exception], None]]
    on_end: Optional[Callable[[], None]]

    def start(self) -> None: ...

    def stop(self) -> None: ...


class VoiceInput:
    def __init__(
        self,
        recognizer: Optional[SpeechRecognizer] = None,
        on_text: Optional[Callable[[str], None]] = None,
    ):
        self._recognizer = recognizer
        self._on_text = on_text
        self.listening = False
        self.pending_text = ""
        if recognizer is not None:
            recognizer.on_transcript = self._handle_transcript
            recognizer.on_error = self._handle_error
            recognizer.on_end = self._handle_end

    @property
    def supported(self) -> bool:
        return self._recognizer is not None

    def toggle(self) -> bool:
        """Start or stop listening. Returns whether voice input is now listening."""
        if self._recognizer is None:
            logger.info("voice input not supported on this host")
            return False
        if self.listening:
            self._recognizer.stop()
            self.listening = False
            return False
        self._recognizer.start()
        self.listening = True
        return True

    def take_text(self) -> str:
        text, self.pending_text = self.pending_text, ""
        return text

    def _handle_transcript(self, transcript: str) -> None:
        self.pending_text += transcript
        self.listening = False
        if self._on_text is not None:
            self._on_text(transcript)

    def _handle_error(self, exc: Exception) -> None:
        logger.warning("speech recognition error: %s", exc)
        self.listening = False

    def _handle_end(self) -> None:
        self.listening = False
