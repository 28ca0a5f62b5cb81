"""Error taxonomy for the digest pipeline.

Only ``SourceFetchError`` is recovered below the orchestrator; everything else
propagates to :class:`cyber_digest.orchestrator.Pipeline` unchanged.
"""

from __future__ import annotations


class DigestPipelineError(Exception):
    """Base class for all pipeline errors."""


class SourceFetchError(DigestPipelineError):
    """Raised when a feed cannot be fetched or parsed."""

    def __init__(self, source_name: str, message: str) -> None:
        super().__init__(f"{source_name}: {message}")
        self.source_name = source_name
        self.message = message


class ConfigurationError(DigestPipelineError):
    """Raised when a required credential, endpoint or config value is missing or invalid."""


class UpstreamServiceError(DigestPipelineError):
    """Raised when the generative-text service fails or returns an unusable response."""


class DeliveryError(DigestPipelineError):
    """Raised when the webhook sink rejects or cannot receive the payload."""
