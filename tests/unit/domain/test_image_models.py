import pytest

from shopgen.domain.errors import ExhaustedRetries, ProductNotFound, TransientCallError
from shopgen.domain.models.image import (
    CACHE_KEY_SLUG_LENGTH, ImageOptions, create_cache_key, normalize_prompt
)

def test_normalize_prompt_lowercases_and_replaces_symbols():
    assert normalize_prompt("A Red Mug, 350ml!") == "a_red_mug__350ml_"

def test_cache_key_is_deterministic():
    options = ImageOptions()
    assert create_cache_key("Blue mug", options) == create_cache_key("Blue mug", options)

def test_cache_key_layout():
    key = create_cache_key("Blue Mug", ImageOptions())
    assert key.startswith("image_dall-e-3_1024x1024_standard_vivid_blue_mug_")
    # 16 hex characters of digest at the end
    assert len(key.rsplit("_", 1)[1]) == 16

def test_cache_key_ignores_case_and_punctuation():
    options = ImageOptions()
    assert create_cache_key("Blue Mug!", options) == create_cache_key("blue mug?", options)

@pytest.mark.parametrize("field, value", [
    ("model", "dall-e-2"),
    ("size", "1792x1024"),
    ("quality", "hd"),
    ("style", "natural"),
])
def test_cache_key_changes_with_image_options(field, value):
    base = ImageOptions()
    changed = ImageOptions(**{field: value})
    assert create_cache_key("Blue mug", base) != create_cache_key("Blue mug", changed)

def test_cache_key_ignores_retry_and_cache_flags():
    base = ImageOptions()
    other = ImageOptions(max_retries=5, use_cache=False)
    assert create_cache_key("Blue mug", base) == create_cache_key("Blue mug", other)

def test_long_prompts_with_shared_prefix_do_not_collide():
    prefix = "x" * CACHE_KEY_SLUG_LENGTH
    options = ImageOptions()
    assert create_cache_key(prefix + " red", options) != create_cache_key(prefix + " blue", options)

def test_only_dalle3_supports_quality_and_style():
    assert ImageOptions(model="dall-e-3").supports_quality_and_style
    assert not ImageOptions(model="dall-e-2").supports_quality_and_style

def test_error_status_codes():
    transient = TransientCallError("upstream 503")
    exhausted = ExhaustedRetries(transient, 3)
    assert ProductNotFound("mug-001").status_code == 404
    assert exhausted.status_code == 500
    assert exhausted.message == "Failed to generate image after 3 attempts: upstream 503"
    assert exhausted.last_error is transient
