"""Side-by-side comparison of the original photo and generated headshots."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Iterable, List

from PIL import Image

from headshot_generation.image_strings import decode_image_string

TILE_SIZE = 512
GUTTER = 16
BACKGROUND = (255, 255, 255)


def _square_center_crop(image: Image.Image, *, side: int = TILE_SIZE) -> Image.Image:
    """Center-crop to a square and resize to ``side`` pixels."""

    width, height = image.size
    short = min(width, height)
    left = (width - short) // 2
    top = (height - short) // 2
    cropped = image.crop((left, top, left + short, top + short))
    return cropped.resize((side, side), Image.Resampling.LANCZOS)


def _load_tile(image: Image.Image) -> Image.Image:
    if image.mode != "RGB":
        image = image.convert("RGB")
    return _square_center_crop(image)


def build_comparison(
    original_path: Path,
    images: Iterable[str],
    output_path: Path | str,
) -> Path:
    """Write a single row: original first, then each generated variation."""

    with Image.open(original_path) as original:
        tiles: List[Image.Image] = [_load_tile(original)]
    for image in images:
        with Image.open(io.BytesIO(decode_image_string(image))) as generated:
            tiles.append(_load_tile(generated))

    width = len(tiles) * TILE_SIZE + (len(tiles) + 1) * GUTTER
    height = TILE_SIZE + 2 * GUTTER
    sheet = Image.new("RGB", (width, height), BACKGROUND)
    for idx, tile in enumerate(tiles):
        sheet.paste(tile, (GUTTER + idx * (TILE_SIZE + GUTTER), GUTTER))

    out_path = Path(output_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    sheet.save(out_path, format="PNG")
    return out_path
