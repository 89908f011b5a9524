"""Upstream model client interface."""
from abc import ABC, abstractmethod
from typing import AsyncIterator


class TopicModelClient(ABC):
    @abstractmethod
    def stream_generate(self, prompt: str) -> AsyncIterator[str]:
        """Stream text fragments for prompt, in provider order.

        Implementations are async generators. A fragment may be empty when the
        provider sent an event without text.
        """
        ...
