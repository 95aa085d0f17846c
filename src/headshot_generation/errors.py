"""Exceptions raised by the headshot generation client."""

from __future__ import annotations


class HeadshotError(RuntimeError):
    pass


class ConfigurationError(HeadshotError):
    """No API key could be resolved."""


class TransportError(HeadshotError):
    """A single generate_content call failed before returning a response."""

    def __init__(self, message: str, *, variation: int | None = None) -> None:
        super().__init__(message)
        self.variation = variation


class GenerationFailure(HeadshotError):
    """Every variation completed but none produced an image."""


class ImagePayloadError(HeadshotError, ValueError):
    """The source image string does not carry a decodable payload."""


class UnknownStyleError(KeyError):
    def __init__(self, style: str) -> None:
        super().__init__(style)
        self.style = style

    def __str__(self) -> str:
        return f"Unknown headshot style: {self.style!r}"
