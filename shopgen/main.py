"""Main entry point for the shopgen application.

Sets up the Typer CLI application, performs dependency injection (Composition Root),
defines CLI commands, and delegates execution to the CommandHandler.
"""

import logging
from typing import Any, Dict, Optional

import typer
from typing_extensions import Annotated

# --- Core Layer ---
from shopgen.core.command_handler import CommandHandler, STATUS_OK
from shopgen.core.interactive_session import InteractiveSession
from shopgen.core.services.image_generation_service import ImageGenerationService
from shopgen.core.services.product_image_service import ProductImageService

# --- Domain Layer ---
from shopgen.domain.models.image import (
    ImageModelName, ImageOptions, ImageQuality, ImageSize, ImageStyle
)

# --- Infrastructure Layer ---
# Config
from shopgen.infrastructure.config.settings import (
    load_configuration, get_config, get_openai_api_key, get_access_token,
    get_cache_ttl_seconds, get_min_delay_seconds, get_request_timeout_seconds,
    get_default_max_retries, get_catalog_path
)
# UI
from shopgen.infrastructure.cli.display import ConsoleDisplay
# AI Clients
from shopgen.infrastructure.ai.openai.dalle_client import DalleClient
# Catalog
from shopgen.infrastructure.catalog.yaml_catalog import YamlProductCatalog
# Cache
from shopgen.infrastructure.cache.caching_service import TTLCacheService
# Resilience
from shopgen.infrastructure.resilience.clock import SystemClock
from shopgen.infrastructure.resilience.rate_limiter import RateLimiter
from shopgen.infrastructure.resilience.api_retry import ApiRetryService
# Monitoring
from shopgen.infrastructure.monitoring.logger_setup import DEFAULT_LOG_LEVEL, setup_logging

logger = logging.getLogger(__name__)

# --- Dependency Injection Container (Manual) ---

def create_dependencies() -> Dict[str, Any]:
    """Creates and wires up all dependencies for the application.

    This acts as the Composition Root.
    """
    # 1. Load Configuration First
    load_configuration()
    setup_logging(
        level=get_config('logging.level', DEFAULT_LOG_LEVEL),
        log_format=get_config('logging.format'),
        log_file=get_config('logging.file'),
    )
    logger.info("Configuration and logging initialized.")

    dependencies: Dict[str, Any] = {}

    # 2. Instantiate Infrastructure Adapters & Services
    dependencies['ui'] = ConsoleDisplay()
    dependencies['clock'] = SystemClock()
    dependencies['cache_service'] = TTLCacheService(
        default_ttl=get_cache_ttl_seconds(),
        clock=dependencies['clock'],
    )
    dependencies['rate_limiter'] = RateLimiter(
        min_delay=get_min_delay_seconds(),
        clock=dependencies['clock'],
    )
    dependencies['image_model'] = DalleClient(timeout=get_request_timeout_seconds())
    dependencies['catalog'] = YamlProductCatalog(get_catalog_path())

    # 3. Instantiate Resilience Services
    dependencies['api_retry_service'] = ApiRetryService(
        rate_limiter=dependencies['rate_limiter'],
        clock=dependencies['clock'],
        provider_name=dependencies['image_model'].provider_name,
        max_retries=get_default_max_retries(),
    )

    # 4. Instantiate Core Services (injecting dependencies)
    dependencies['image_service'] = ImageGenerationService(
        image_model=dependencies['image_model'],
        cache_service=dependencies['cache_service'],
        api_retry_service=dependencies['api_retry_service'],
        credential_provider=get_openai_api_key,
    )
    dependencies['product_image_service'] = ProductImageService(
        image_service=dependencies['image_service'],
        catalog=dependencies['catalog'],
        credential_provider=get_openai_api_key,
        cache_ttl_seconds=dependencies['cache_service'].default_ttl,
    )

    # 5. Instantiate Command Handler
    dependencies['command_handler'] = CommandHandler(
        product_image_service=dependencies['product_image_service'],
        ui=dependencies['ui'],
        access_token_provider=get_access_token,
    )
    logger.info("All dependencies initialized successfully.")
    return dependencies

# Holds the single instances of our services, created on first command
_dependencies: Optional[Dict[str, Any]] = None

def get_dependencies() -> Dict[str, Any]:
    global _dependencies
    if _dependencies is None:
        _dependencies = create_dependencies()
    return _dependencies

def get_command_handler() -> CommandHandler:
    return get_dependencies()["command_handler"]

def _exit_with(status_code: int) -> None:
    if status_code != STATUS_OK:
        raise typer.Exit(code=1)

# --- Typer App Definition ---
app = typer.Typer(
    name="shopgen",
    help="shopgen: AI product photography for your store catalog, with retries, rate limiting and caching.",
    add_completion=False,
)

# --- CLI Commands ---

# Shared access token option
TokenOption = Annotated[
    Optional[str],
    typer.Option("--token", "-t", envvar="SHOPGEN_TOKEN", help="Access token for gated commands.")
]

@app.command()
def generate(
    product_id: Annotated[str, typer.Argument(help="Catalog identifier of the product.")],
    prompt: Annotated[Optional[str], typer.Option("--prompt", help="Custom prompt. Built from the product when omitted.")] = None,
    model: Annotated[ImageModelName, typer.Option("--model", "-m", help="Image model.")] = ImageModelName.DALL_E_3,
    size: Annotated[ImageSize, typer.Option("--size", "-s", help="Image size.")] = ImageSize.SQUARE,
    quality: Annotated[ImageQuality, typer.Option("--quality", "-q", help="Image quality (dall-e-3 only).")] = ImageQuality.STANDARD,
    style: Annotated[ImageStyle, typer.Option("--style", help="Image style (dall-e-3 only).")] = ImageStyle.VIVID,
    max_retries: Annotated[Optional[int], typer.Option("--max-retries", "-r", min=1, help="Maximum attempts (default from config, 3).")] = None,
    use_cache: Annotated[bool, typer.Option("--cache/--no-cache", help="Serve and store results in the cache.")] = True,
    token: TokenOption = None,
):
    """Generate an AI image for a catalog product."""
    handler = get_command_handler()
    options = ImageOptions(
        model=model.value,
        size=size.value,
        quality=quality.value,
        style=style.value,
        max_retries=max_retries,
        use_cache=use_cache,
    )
    _exit_with(handler.handle_generate(product_id, prompt, options, token=token))

@app.command(name="cache-stats")
def cache_stats_command(token: TokenOption = None):
    """Show image cache statistics."""
    _exit_with(get_command_handler().handle_cache_stats(token=token))

@app.command(name="clear-cache")
def clear_cache_command(token: TokenOption = None):
    """Clear the image cache."""
    _exit_with(get_command_handler().handle_clear_cache(token=token))

@app.command()
def status():
    """Check the image service configuration and cache."""
    _exit_with(get_command_handler().handle_status())

@app.command(name="list-products")
def list_products_command():
    """List the products in the catalog."""
    _exit_with(get_command_handler().handle_list_products())

@app.callback(invoke_without_command=True)
def main_callback(ctx: typer.Context, token: TokenOption = None):
    """Starts an interactive session if no command is given."""
    if ctx.invoked_subcommand is None:
        logger.info("No command invoked, starting interactive session.")
        dependencies = get_dependencies()
        InteractiveSession(dependencies['command_handler'], dependencies['ui'], token=token).start()

# --- Main Execution Guard ---

def cli_entry_point():
    """Function to be called by the script entry point in pyproject.toml."""
    app() # Typer takes over

if __name__ == "__main__":
    cli_entry_point()
