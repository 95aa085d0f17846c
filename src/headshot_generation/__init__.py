"""Package for headshot generation components."""

from .errors import (
    ConfigurationError,
    GenerationFailure,
    HeadshotError,
    ImagePayloadError,
    TransportError,
    UnknownStyleError,
)
from .gemini_client import DEFAULT_MODEL, generate_headshots, generate_headshots_async
from .styles import DEFAULT_STYLE, HEADSHOT_PROMPTS, HEADSHOT_STYLES, get_style
from .variations import VARIATIONS

__all__ = [
    "generate_headshots",
    "generate_headshots_async",
    "DEFAULT_MODEL",
    "DEFAULT_STYLE",
    "HEADSHOT_PROMPTS",
    "HEADSHOT_STYLES",
    "VARIATIONS",
    "get_style",
    "HeadshotError",
    "ConfigurationError",
    "GenerationFailure",
    "ImagePayloadError",
    "TransportError",
    "UnknownStyleError",
]
