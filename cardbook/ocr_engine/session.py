"""
Text-Recognition Adapter Interfaces.

A RecognitionBackend opens RecognitionSessions. One session is reused for
every image of a batch and closed once the batch is over.

Progress is reported through a callback receiving a fraction in [0, 1].
A session may call it any number of times before recognize() returns.
"""

from abc import ABC, abstractmethod
from typing import Callable

from cardbook.input_handler.image_payload import ImagePayload

ProgressCallback = Callable[[float], None]


class RecognitionSession(ABC):
    """An open recognition engine, ready to read images."""

    @abstractmethod
    def recognize(self, image: ImagePayload, on_progress: ProgressCallback) -> str:
        """
        Recognize the text on one image.

        Args:
            image: Image to read.
            on_progress: Called with the fraction of this image done.

        Returns:
            Recognized plain text.
        """
        raise NotImplementedError

    @abstractmethod
    def close(self) -> None:
        """Release the engine. Safe to call once per opened session."""
        raise NotImplementedError


class RecognitionBackend(ABC):
    """Factory for recognition sessions."""

    name = "unknown"

    @abstractmethod
    def open(self, language: str) -> RecognitionSession:
        """
        Start a recognition session.

        Args:
            language: Engine language code, e.g. "eng".
        """
        raise NotImplementedError
