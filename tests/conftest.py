import pytest
from typing import Any, List, Sequence, Tuple, Union

from shopgen.domain.events.api_events import DomainEvent
from shopgen.domain.interfaces.clock import Clock
from shopgen.domain.interfaces.image_model import ImageModel
from shopgen.domain.models.common import ApiKey
from shopgen.domain.models.image import GeneratedImage, ImageRequest
from shopgen.core.services.image_generation_service import ImageGenerationService
from shopgen.infrastructure.cache.caching_service import TTLCacheService
from shopgen.infrastructure.config.settings import clear_test_config
from shopgen.infrastructure.resilience.api_retry import ApiRetryService
from shopgen.infrastructure.resilience.rate_limiter import RateLimiter

TEST_API_KEY = "sk-test-key-123456"

class FakeClock(Clock):
    """Clock that only moves when told to, recording every sleep."""

    def __init__(self, start: float = 1000.0):
        self.current = start
        self.sleeps: List[float] = []

    def now(self) -> float:
        return self.current

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.current += seconds

    def advance(self, seconds: float) -> None:
        self.current += seconds

Outcome = Union[GeneratedImage, Exception]

class ScriptedImageModel(ImageModel):
    """Image model returning a scripted sequence of images or errors.

    The last outcome repeats once the script runs out.
    """

    provider_name = "fake"

    def __init__(self, outcomes: Sequence[Outcome] = ()):
        self.outcomes: List[Outcome] = list(outcomes) or [GeneratedImage(url="https://images.example.com/1.png")]
        self.calls: List[Tuple[ImageRequest, ApiKey]] = []

    def generate_image(self, request: ImageRequest, api_key: ApiKey) -> GeneratedImage:
        self.calls.append((request, api_key))
        index = min(len(self.calls) - 1, len(self.outcomes) - 1)
        outcome = self.outcomes[index]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

@pytest.fixture(autouse=True)
def reset_test_config():
    """Drops any configuration overrides a test installed."""
    yield
    clear_test_config()

@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()

@pytest.fixture
def events() -> List[DomainEvent]:
    return []

@pytest.fixture
def rate_limiter(clock: FakeClock) -> RateLimiter:
    return RateLimiter(min_delay=1.0, clock=clock)

@pytest.fixture
def cache_service(clock: FakeClock) -> TTLCacheService:
    return TTLCacheService(default_ttl=3600, clock=clock)

@pytest.fixture
def api_retry_service(rate_limiter: RateLimiter, clock: FakeClock, events: List[DomainEvent]) -> ApiRetryService:
    return ApiRetryService(rate_limiter=rate_limiter, clock=clock, provider_name="fake", event_listener=events.append)

@pytest.fixture
def image_model() -> ScriptedImageModel:
    return ScriptedImageModel([
        GeneratedImage(url="https://images.example.com/1.png", revised_prompt="A revised prompt"),
    ])

@pytest.fixture
def image_service(image_model: ScriptedImageModel, cache_service: TTLCacheService, api_retry_service: ApiRetryService) -> ImageGenerationService:
    """Fresh wrapper per test: its cache and rate-limit gate are not shared."""
    return ImageGenerationService(
        image_model=image_model,
        cache_service=cache_service,
        api_retry_service=api_retry_service,
        credential_provider=lambda: TEST_API_KEY,
    )

@pytest.fixture
def catalog_file(tmp_path):
    """Writes a small YAML product catalog and returns its path."""
    path = tmp_path / "products.yaml"
    path.write_text(
        "products:\n"
        "  - id: mug-001\n"
        "    name: Ceramic Mug\n"
        "    description: Hand-glazed 350ml mug in ocean blue\n"
        "    price: 12.5\n"
        "    category: Kitchen\n"
        "  - id: lamp-002\n"
        "    name: Desk Lamp\n"
        "    description: Brass desk lamp with linen shade\n"
        "    price: 49\n",
        encoding="utf-8",
    )
    return path

@pytest.fixture
def make_image_model():
    """Factory for scripted image models: make_image_model([error, image, ...])."""
    return ScriptedImageModel
