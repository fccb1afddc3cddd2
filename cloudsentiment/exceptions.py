"""
Exceptions raised while collecting sentiment results.

A missing credential is not an error: the provider is simply skipped.
Anything below halts the run before an output file is written.
"""

from typing import Optional


class SentimentError(Exception):
    """Base exception for all run-halting errors."""

    pass


class InputValidationError(SentimentError):
    """The input document is missing, unreadable or incomplete."""

    pass


class ProviderRequestError(SentimentError):
    """
    A request to a sentiment provider failed.

    Wraps transport errors, non-2xx responses and malformed bodies so the
    runner has a single error type to stop on.
    """

    def __init__(self, provider: str, message: str, status_code: Optional[int] = None):
        super().__init__(f"{provider}: {message}")
        self.provider = provider
        self.message = message
        self.status_code = status_code


class ConfigurationError(SentimentError):
    """An environment or .env value cannot be parsed."""

    pass
