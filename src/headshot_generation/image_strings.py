"""Parsing and building of ``data:<mime>;base64,<payload>`` image strings."""

from __future__ import annotations

import base64
import binascii
import re
from dataclasses import dataclass

from .errors import ImagePayloadError

DEFAULT_MIME_TYPE = "image/jpeg"
OUTPUT_MIME_TYPE = "image/png"

_MIME_PREFIX = re.compile(r"^data:(image/[a-zA-Z0-9.+-]+);base64,")
_ANY_PREFIX = re.compile(r"^data:[^;,]*;base64,")


@dataclass(frozen=True)
class SourceImage:
    mime_type: str
    payload: str

    def decode(self) -> bytes:
        """Return the raw image bytes carried by ``payload``."""

        try:
            return base64.b64decode("".join(self.payload.split()), validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ImagePayloadError(f"Source image is not valid base64: {exc}") from exc


def parse_image_string(image: str) -> SourceImage:
    """Split an image string into MIME type and base64 payload.

    Without a recognisable ``data:image/...`` header the MIME type falls back
    to ``image/jpeg`` and the string is used unchanged as the payload.
    """

    match = _MIME_PREFIX.match(image)
    mime_type = match.group(1) if match else DEFAULT_MIME_TYPE
    payload = _ANY_PREFIX.sub("", image, count=1)
    return SourceImage(mime_type=mime_type, payload=payload)


def encode_image_string(data: bytes | str, mime_type: str = OUTPUT_MIME_TYPE) -> str:
    if isinstance(data, bytes):
        data = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{data}"


def decode_image_string(image: str) -> bytes:
    return parse_image_string(image).decode()
