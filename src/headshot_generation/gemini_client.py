"""Helpers for calling Gemini's image model to create headshot variations."""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Any, List, Optional

import httpx

try:
    from google import genai
    from google.genai import errors as genai_errors
    from google.genai import types
except ImportError as exc:  # pragma: no cover - handled at runtime
    raise ImportError(
        "google-genai is required for headshot generation. Install with `pip install google-genai`."
    ) from exc

from .credentials import CredentialProvider, StaticCredentialProvider, resolve_api_key
from .errors import GenerationFailure, TransportError
from .image_strings import OUTPUT_MIME_TYPE, SourceImage, encode_image_string, parse_image_string
from .variations import VARIATION_COUNT, build_variation_prompt

logger = logging.getLogger(__name__)

DEFAULT_MODEL = os.environ.get("HEADSHOTS_MODEL", "gemini-2.5-flash-image")
ASPECT_RATIO = "1:1"


def _build_config() -> types.GenerateContentConfig:
    return types.GenerateContentConfig(
        response_modalities=["IMAGE"],
        image_config=types.ImageConfig(aspect_ratio=ASPECT_RATIO),
    )


def _build_contents(image_bytes: bytes, mime_type: str, prompt: str) -> List[types.Content]:
    return [
        types.Content(
            role="user",
            parts=[
                types.Part.from_bytes(data=image_bytes, mime_type=mime_type),
                types.Part.from_text(text=prompt),
            ],
        )
    ]


def _extract_image(response: Any) -> Optional[bytes]:
    """Return the first inline image payload of the first candidate, if any."""

    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return None
    content = getattr(candidates[0], "content", None)
    for part in getattr(content, "parts", None) or []:
        inline = getattr(part, "inline_data", None)
        if inline is not None and getattr(inline, "data", None):
            return inline.data
    return None


def _describe_miss(response: Any) -> str:
    feedback = getattr(response, "prompt_feedback", None)
    reason = getattr(feedback, "block_reason", None) if feedback else None
    candidates = getattr(response, "candidates", None) or []
    finish = getattr(candidates[0], "finish_reason", None) if candidates else None
    return f"block_reason={reason} finish_reason={finish} candidates={len(candidates)}"


async def _generate_variation(
    client: Any,
    *,
    index: int,
    model: str,
    image_bytes: bytes,
    mime_type: str,
    prompt: str,
    config: types.GenerateContentConfig,
) -> Optional[str]:
    variation_prompt = build_variation_prompt(prompt, index)
    logger.debug("Requesting variation %s from %s", index + 1, model)
    try:
        response = await client.aio.models.generate_content(
            model=model,
            contents=_build_contents(image_bytes, mime_type, variation_prompt),
            config=config,
        )
    except (genai_errors.APIError, httpx.HTTPError, OSError, asyncio.TimeoutError) as exc:
        logger.error("Variation %s request failed: %s", index + 1, exc)
        raise TransportError(
            f"Headshot request for variation {index + 1} failed: {exc}", variation=index
        ) from exc

    data = _extract_image(response)
    if data is None:
        logger.warning("Variation %s returned no image (%s)", index + 1, _describe_miss(response))
        return None
    return encode_image_string(data, OUTPUT_MIME_TYPE)


async def _run_concurrently(coros: List[Any]) -> List[Optional[str]]:
    tasks = [asyncio.ensure_future(coro) for coro in coros]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


async def generate_headshots_async(
    source_image: str,
    style: str,
    prompt: str,
    *,
    credentials: CredentialProvider | None = None,
    api_key: str | None = None,
    model: str | None = None,
    client: Any | None = None,
    concurrent: bool = True,
) -> List[str]:
    """Generate the three headshot variations for one source image.

    Args:
        source_image: Image string, optionally prefixed with
            ``data:<mime>;base64,``. Without a prefix the payload is sent as
            ``image/jpeg``.
        style: Style identifier, only used for logging.
        prompt: Base prompt already resolved for ``style``.
        credentials: Provider for the API key; defaults to environment then
            the local key file. ``api_key`` takes precedence when given.
        model: Model name override (defaults to ``gemini-2.5-flash-image``).
        client: Pre-built ``genai.Client``; created from the API key otherwise.
        concurrent: Issue the three calls at once instead of one by one.

    Returns:
        Between one and three ``data:image/png;base64,...`` strings in
        variation order. Variations without an image are left out.

    Raises:
        ConfigurationError: no API key was found; nothing is sent.
        ImagePayloadError: the source payload is not valid base64.
        TransportError: a request failed; remaining requests are abandoned
            and no partial results are returned.
        GenerationFailure: no variation produced an image.
    """

    if api_key:
        credentials = StaticCredentialProvider(api_key)
    resolved_key = resolve_api_key(credentials)

    source: SourceImage = parse_image_string(source_image)
    image_bytes = source.decode()

    if client is None:
        client = genai.Client(api_key=resolved_key)

    model = model or DEFAULT_MODEL
    config = _build_config()
    logger.info(
        "Generating %s %s headshot variations with %s (%s)",
        VARIATION_COUNT,
        style,
        model,
        "concurrent" if concurrent else "sequential",
    )

    def _variation(index: int):
        return _generate_variation(
            client,
            index=index,
            model=model,
            image_bytes=image_bytes,
            mime_type=source.mime_type,
            prompt=prompt,
            config=config,
        )

    if concurrent:
        outcomes = await _run_concurrently([_variation(i) for i in range(VARIATION_COUNT)])
    else:
        outcomes = []
        for i in range(VARIATION_COUNT):
            outcomes.append(await _variation(i))

    images = [image for image in outcomes if image is not None]
    if not images:
        raise GenerationFailure("Failed to generate any images.")

    logger.info("Generated %s of %s %s headshots", len(images), VARIATION_COUNT, style)
    return images


def generate_headshots(
    source_image: str,
    style: str,
    prompt: str,
    **kwargs: Any,
) -> List[str]:
    """Blocking wrapper around :func:`generate_headshots_async`."""

    return asyncio.run(generate_headshots_async(source_image, style, prompt, **kwargs))


__all__ = ["generate_headshots", "generate_headshots_async", "DEFAULT_MODEL"]
