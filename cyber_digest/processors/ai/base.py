from __future__ import annotations

from abc import ABC, abstractmethod


class AIClient(ABC):
    """Abstract generative-text client."""

    @abstractmethod
    def generate(self, prompt: str) -> str:
        """Return the plain-text response for ``prompt``.

        Implementations raise ``UpstreamServiceError`` on transport failures
        or unusable responses.
        """
