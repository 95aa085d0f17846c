import pytest

from headshot_generation.errors import UnknownStyleError
from headshot_generation.styles import HEADSHOT_PROMPTS, HEADSHOT_STYLES, get_style
from headshot_generation.variations import VARIATIONS


def test_six_styles_with_prompts():
    assert set(HEADSHOT_STYLES) == {
        "corporate",
        "creative",
        "editorial",
        "techvisionary",
        "celebrity",
        "artistic",
    }
    assert all(HEADSHOT_PROMPTS[key] == style.prompt for key, style in HEADSHOT_STYLES.items())
    assert len(set(HEADSHOT_PROMPTS.values())) == 6


def test_unknown_style():
    with pytest.raises(UnknownStyleError):
        get_style("vaporwave")
    with pytest.raises(KeyError):
        get_style("")


def test_variation_blocks_are_distinct_and_ordered():
    assert len(VARIATIONS) == 3
    assert all(block.strip() for block in VARIATIONS)
    assert len(set(VARIATIONS)) == 3
    for n, block in enumerate(VARIATIONS, start=1):
        assert f"=== VARIATION {n} SPECIFIC INSTRUCTIONS ===" in block
