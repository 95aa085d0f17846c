"""Catalogue of the six headshot styles and their base prompts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from .errors import UnknownStyleError


@dataclass(frozen=True)
class HeadshotStyle:
    id: str
    name: str
    description: str
    prompt: str


_SHARED_RULES = (
    " Use the person in the attached photo as the only subject and keep their identity exact:"
    " same face shape, eyes, nose, mouth, skin tone, hairline and hair color."
    " Shoulders-up square portrait, sharp focus on the eyes, natural skin texture with no plastic smoothing."
    " No text, no logos, no watermarks, no extra people."
)

HEADSHOT_STYLES: Dict[str, HeadshotStyle] = {
    "corporate": HeadshotStyle(
        id="corporate",
        name="Corporate Classic",
        description="Standard LinkedIn-style headshot with neutral background",
        prompt=(
            "Professional corporate headshot in the style of a LinkedIn profile photo."
            " Subject wears business attire (dark blazer or suit jacket, crisp collared shirt)."
            " Plain neutral light-gray studio background with a subtle gradient."
            " Soft, even three-point studio lighting with gentle fill, no harsh shadows."
            + _SHARED_RULES
        ),
    ),
    "creative": HeadshotStyle(
        id="creative",
        name="Creative Professional",
        description="Close-up with soft bokeh background and natural lighting",
        prompt=(
            "Creative professional headshot, close-up framing with a relaxed, approachable feel."
            " Smart-casual clothing in warm, muted tones."
            " Softly blurred outdoor or studio-loft background with creamy bokeh."
            " Natural window-style daylight from one side, warm color grade."
            + _SHARED_RULES
        ),
    ),
    "editorial": HeadshotStyle(
        id="editorial",
        name="Editorial Portrait",
        description="Dramatic black and white portrait with artistic lighting",
        prompt=(
            "Editorial black and white portrait as seen in a print magazine feature."
            " Fully monochrome with rich blacks, clean whites and fine film-like grain."
            " Dark seamless backdrop. Dramatic Rembrandt or split lighting that sculpts the face."
            " Simple dark clothing so the face carries the image."
            + _SHARED_RULES
        ),
    ),
    "techvisionary": HeadshotStyle(
        id="techvisionary",
        name="Tech Visionary",
        description="Silicon Valley innovator with modern tech-forward aesthetic",
        prompt=(
            "Modern tech founder headshot with a Silicon Valley keynote aesthetic."
            " Minimal premium clothing such as a plain crew-neck or merino sweater in charcoal or black."
            " Clean modern office or softly lit dark background with cool blue accent light."
            " Crisp contrast, contemporary color grade, confident forward-looking presence."
            + _SHARED_RULES
        ),
    ),
    "celebrity": HeadshotStyle(
        id="celebrity",
        name="Celebrity Glamour",
        description="High-end magazine quality with star power and luxury",
        prompt=(
            "High-end celebrity glamour headshot with cover-of-magazine polish."
            " Elegant, luxurious styling and wardrobe. Flawless beauty-dish key light with soft rim light"
            " separating the subject from a rich, softly lit backdrop."
            " Polished but realistic retouching, luminous skin, star-quality presence."
            + _SHARED_RULES
        ),
    ),
    "artistic": HeadshotStyle(
        id="artistic",
        name="Artistic Rebel",
        description="Bold creative edge with authentic individuality",
        prompt=(
            "Bold artistic headshot with an edgy, individual character."
            " Expressive wardrobe that reflects personality. Moody colored gel lighting"
            " (magenta and teal) against a textured or painted backdrop."
            " Strong contrast and a cinematic color grade while keeping skin tones believable."
            + _SHARED_RULES
        ),
    ),
}

HEADSHOT_PROMPTS: Dict[str, str] = {key: style.prompt for key, style in HEADSHOT_STYLES.items()}

DEFAULT_STYLE = "corporate"


def get_style(style_id: str) -> HeadshotStyle:
    try:
        return HEADSHOT_STYLES[style_id]
    except KeyError:
        raise UnknownStyleError(style_id) from None
