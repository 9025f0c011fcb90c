"""Domain models related to image generation.

Includes the request options accepted by the image API, the raw image
returned by a provider and the result handed back to callers.
"""

import re
import hashlib
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .common import CacheKey, PromptText

# --- Option Enumerations ---

class ImageModelName(str, Enum):
    DALL_E_3 = "dall-e-3"
    DALL_E_2 = "dall-e-2"


class ImageSize(str, Enum):
    SMALL = "256x256"
    MEDIUM = "512x512"
    SQUARE = "1024x1024"
    LANDSCAPE = "1792x1024"
    PORTRAIT = "1024x1792"


class ImageQuality(str, Enum):
    STANDARD = "standard"
    HD = "hd"


class ImageStyle(str, Enum):
    VIVID = "vivid"
    NATURAL = "natural"


CACHE_KEY_SLUG_LENGTH = 50

_NON_ALNUM = re.compile(r"[^a-z0-9]")


@dataclass(frozen=True)
class ImageOptions:
    """Options for a single image generation call."""
    model: str = ImageModelName.DALL_E_3.value
    size: str = ImageSize.SQUARE.value
    quality: str = ImageQuality.STANDARD.value
    style: str = ImageStyle.VIVID.value
    max_retries: Optional[int] = None # None: the retry service default
    use_cache: bool = True

    @property
    def supports_quality_and_style(self) -> bool:
        # Only DALL-E 3 accepts quality/style parameters
        return self.model == ImageModelName.DALL_E_3.value


@dataclass(frozen=True)
class ImageRequest:
    """Payload for one outbound image API call."""
    prompt: PromptText
    options: ImageOptions


@dataclass(frozen=True)
class GeneratedImage:
    """Raw image returned by an image model provider."""
    url: str
    revised_prompt: Optional[str] = None


@dataclass(frozen=True)
class ImageGenerationResult:
    """Result of a generation call, including how it was served."""
    image_url: str
    revised_prompt: Optional[str] = None
    from_cache: bool = False
    attempts: int = 0


def normalize_prompt(prompt: str) -> str:
    """Lowercases the prompt and replaces anything outside [a-z0-9] with '_'."""
    return _NON_ALNUM.sub("_", prompt.lower())


def create_cache_key(prompt: str, options: ImageOptions) -> CacheKey:
    """Derives the cache key for a prompt and its options.

    The key keeps a readable prefix of the normalized prompt and appends a
    digest of the full normalized prompt so long prompts sharing a prefix
    never collide. Retry and cache flags do not take part in the key.
    """
    slug = normalize_prompt(prompt)
    digest = hashlib.sha256(slug.encode("utf-8")).hexdigest()[:16]
    return CacheKey(
        f"image_{options.model}_{options.size}_{options.quality}_{options.style}_"
        f"{slug[:CACHE_KEY_SLUG_LENGTH]}_{digest}"
    )
