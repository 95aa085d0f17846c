"""Pipeline helpers for loading a photo, generating headshots and saving them."""

from __future__ import annotations

import io
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from PIL import Image, UnidentifiedImageError

from headshot_generation import generate_headshots, get_style
from headshot_generation.credentials import CredentialProvider
from headshot_generation.image_strings import decode_image_string, encode_image_string
from .compare import build_comparison

MAX_UPLOAD_BYTES = 5 * 1024 * 1024
DEFAULT_OUTPUT_DIR = Path(os.environ.get("HEADSHOTS_OUTPUT_DIR", "artifacts/headshots"))


# Pillow format -> MIME type Gemini accepts as inline image data.
# MPO is the multi-picture JPEG many phones write as .jpg.
API_MIME_TYPES = {
    "JPEG": "image/jpeg",
    "MPO": "image/jpeg",
    "PNG": "image/png",
    "WEBP": "image/webp",
    "HEIF": "image/heif",
    "HEIC": "image/heic",
}


class UploadError(ValueError):
    pass


def _to_png(data: bytes) -> bytes:
    buf = io.BytesIO()
    with Image.open(io.BytesIO(data)) as img:
        if img.mode not in ("RGB", "RGBA"):
            img = img.convert("RGBA" if "A" in img.getbands() or "transparency" in img.info else "RGB")
        img.save(buf, format="PNG")
    return buf.getvalue()


def load_source_image(path: Path) -> str:
    """Validate an uploaded photo and return it as a data URL.

    Formats the model cannot take directly (GIF, BMP, TIFF...) are re-encoded
    as PNG.
    """

    path = Path(path)
    if not path.is_file():
        raise UploadError(f"Image file not found: {path}")
    if path.stat().st_size > MAX_UPLOAD_BYTES:
        raise UploadError("Image size should be less than 5MB")

    data = path.read_bytes()
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.verify()
            image_format = img.format or ""
    except (UnidentifiedImageError, OSError) as exc:
        raise UploadError("Please upload an image file") from exc

    mime_type = API_MIME_TYPES.get(image_format)
    if mime_type is None:
        try:
            data = _to_png(data)
        except OSError as exc:
            raise UploadError("Please upload an image file") from exc
        mime_type = "image/png"

    return encode_image_string(data, mime_type)


def headshot_filename(style: str, index: int) -> str:
    return f"headshot-{style}-{index}.png"


def create_headshots(
    image_path: Path,
    style: str,
    *,
    prompt: str | None = None,
    model: str | None = None,
    api_key: str | None = None,
    credentials: CredentialProvider | None = None,
    concurrent: bool = True,
    client: Any | None = None,
) -> List[str]:
    """Send the photo to Gemini and return the generated image strings."""

    base_prompt = prompt or get_style(style).prompt
    return generate_headshots(
        load_source_image(image_path),
        style,
        base_prompt,
        model=model,
        api_key=api_key,
        credentials=credentials,
        concurrent=concurrent,
        client=client,
    )


def save_headshots(
    images: Sequence[str],
    style: str,
    output_dir: Path | str,
    *,
    select: Optional[int] = None,
) -> List[Path]:
    """Save all variations, or only variation ``select`` (1-based), as PNG."""

    if select is not None:
        if not 1 <= select <= len(images):
            raise IndexError(f"Variation {select} does not exist; got {len(images)} image(s)")
        chosen = [(select, images[select - 1])]
    else:
        chosen = list(enumerate(images, start=1))

    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    paths: List[Path] = []
    for idx, image in chosen:
        out_path = out_dir / headshot_filename(style, idx)
        # Payloads are labelled PNG but may hold another format; re-encode.
        with Image.open(io.BytesIO(decode_image_string(image))) as img:
            img.save(out_path, format="PNG")
        paths.append(out_path)
    return paths


def run_generation(
    *,
    image_path: Path,
    style: str,
    output_dir: Path | None = None,
    prompt: str | None = None,
    model: str | None = None,
    api_key: str | None = None,
    credentials: CredentialProvider | None = None,
    select: Optional[int] = None,
    compare: bool = True,
    concurrent: bool = True,
    client: Any | None = None,
) -> Dict[str, Any]:
    """Run load -> generate -> save (-> compare). Returns summary dict."""

    out_dir = Path(output_dir) if output_dir else DEFAULT_OUTPUT_DIR
    style_info = get_style(style)
    summary: Dict[str, Any] = {"style": style, "steps": []}

    print(f"[generate] {style_info.name}: 3 variations from {image_path}")
    images = create_headshots(
        image_path,
        style,
        prompt=prompt,
        model=model,
        api_key=api_key,
        credentials=credentials,
        concurrent=concurrent,
        client=client,
    )
    print(f"[generate] received {len(images)} image(s)")
    summary["generated"] = len(images)
    summary["steps"].append("generate")

    if select is not None and select > len(images):
        print(f"[save] variation {select} was not generated; saving all {len(images)} image(s)")
        summary["warning"] = f"variation {select} missing"
        select = None

    paths = save_headshots(images, style, out_dir, select=select)
    for path in paths:
        print(f"[save] {path}")
    summary["headshots"] = [str(p) for p in paths]
    summary["steps"].append("save")

    if compare:
        sheet = build_comparison(image_path, images, out_dir / f"compare-{style}.png")
        print(f"[compare] {sheet}")
        summary["comparison"] = str(sheet)
        summary["steps"].append("compare")

    return summary
