import pytest
from unittest.mock import MagicMock

from shopgen.core.command_handler import MISSING_KEY_WARNING, CommandHandler
from shopgen.core.services.product_image_service import ProductImageService
from shopgen.domain.errors import (
    ConfigurationError, ExhaustedRetries, InvalidInput, ProductNotFound, TransientCallError
)
from shopgen.domain.interfaces.user_interface import UserInterface
from shopgen.domain.models.image import ImageOptions

@pytest.fixture
def mock_product_service():
    return MagicMock(spec=ProductImageService)

@pytest.fixture
def mock_ui():
    return MagicMock(spec=UserInterface)

@pytest.fixture
def command_handler(mock_product_service, mock_ui):
    """CommandHandler with mocked services and no access token configured."""
    return CommandHandler(product_image_service=mock_product_service, ui=mock_ui)

@pytest.fixture
def gated_handler(mock_product_service, mock_ui):
    return CommandHandler(
        product_image_service=mock_product_service,
        ui=mock_ui,
        access_token_provider=lambda: "secret",
    )

def test_generate_success(command_handler, mock_product_service, mock_ui):
    payload = {"image_url": "https://images.example.com/mug.png"}
    mock_product_service.generate_for_product.return_value = payload
    options = ImageOptions(quality="hd")

    status = command_handler.handle_generate("mug-001", "A mug", options)

    assert status == 200
    mock_product_service.generate_for_product.assert_called_once_with("mug-001", "A mug", options)
    mock_ui.display_image_result.assert_called_once_with(payload)
    mock_ui.display_error.assert_not_called()

@pytest.mark.parametrize("error, expected_status", [
    (InvalidInput("Prompt is required"), 400),
    (ProductNotFound("nope"), 404),
    (ConfigurationError("OpenAI API key not configured"), 500),
    (ExhaustedRetries(TransientCallError("503"), 3), 500),
])
def test_generate_errors_map_to_status(command_handler, mock_product_service, mock_ui, error, expected_status):
    mock_product_service.generate_for_product.side_effect = error
    status = command_handler.handle_generate("mug-001")
    assert status == expected_status
    mock_ui.display_error.assert_called_once_with(
        f"Image generation failed: {error.message}", status_code=expected_status
    )
    mock_ui.display_image_result.assert_not_called()

def test_unexpected_error_is_500(command_handler, mock_product_service, mock_ui):
    mock_product_service.generate_for_product.side_effect = RuntimeError("kaboom")
    assert command_handler.handle_generate("mug-001") == 500
    mock_ui.display_error.assert_called_once_with("Image generation failed: kaboom", status_code=500)

@pytest.mark.parametrize("token", [None, "", "wrong"])
def test_gated_commands_reject_bad_token(gated_handler, mock_product_service, mock_ui, token):
    assert gated_handler.handle_generate("mug-001", token=token) == 401
    assert gated_handler.handle_cache_stats(token=token) == 401
    assert gated_handler.handle_clear_cache(token=token) == 401
    mock_product_service.generate_for_product.assert_not_called()
    mock_product_service.cache_stats.assert_not_called()
    mock_product_service.clear_cache.assert_not_called()
    assert mock_ui.display_error.call_count == 3

def test_gated_commands_accept_matching_token(gated_handler, mock_product_service):
    mock_product_service.generate_for_product.return_value = {}
    mock_product_service.cache_stats.return_value = {}
    assert gated_handler.handle_generate("mug-001", token="secret") == 200
    assert gated_handler.handle_cache_stats(token="secret") == 200
    assert gated_handler.handle_clear_cache(token="secret") == 200

def test_status_is_not_gated(gated_handler, mock_product_service, mock_ui):
    status = {"has_api_key": True, "is_working": True}
    mock_product_service.service_status.return_value = status
    assert gated_handler.handle_status() == 200
    mock_ui.display_service_status.assert_called_once_with(status)
    mock_ui.display_warning.assert_not_called()

def test_cache_stats(command_handler, mock_product_service, mock_ui):
    mock_product_service.cache_stats.return_value = {"keys": 1}
    assert command_handler.handle_cache_stats() == 200
    mock_ui.display_cache_stats.assert_called_once_with({"keys": 1})

def test_clear_cache(command_handler, mock_product_service, mock_ui):
    assert command_handler.handle_clear_cache() == 200
    mock_product_service.clear_cache.assert_called_once()
    mock_ui.display_info.assert_called_once_with("Image cache cleared successfully")

def test_list_products(command_handler, mock_product_service, mock_ui):
    mock_product_service.list_products.return_value = []
    assert command_handler.handle_list_products() == 200
    mock_ui.display_products.assert_called_once_with([])

def test_list_products_with_broken_catalog(command_handler, mock_product_service, mock_ui):
    mock_product_service.list_products.side_effect = ConfigurationError("Product catalog not found: x")
    assert command_handler.handle_list_products() == 500
    mock_ui.display_products.assert_not_called()

@pytest.mark.parametrize("token", ["café", "sécret", "秘密"])
def test_non_ascii_token_is_denied_not_crashed(gated_handler, mock_product_service, mock_ui, token):
    assert gated_handler.handle_cache_stats(token=token) == 401
    mock_product_service.cache_stats.assert_not_called()
    mock_ui.display_error.assert_called_once_with(
        "Cache statistics failed: Access denied. Invalid or missing token.", status_code=401
    )

def test_non_ascii_configured_token_accepts_exact_match(mock_product_service, mock_ui):
    handler = CommandHandler(
        product_image_service=mock_product_service,
        ui=mock_ui,
        access_token_provider=lambda: "clé-secrète",
    )
    mock_product_service.cache_stats.return_value = {}
    assert handler.handle_cache_stats(token="clé-secrète") == 200
    assert handler.handle_cache_stats(token="cle-secrete") == 401

def test_status_warns_when_api_key_missing(command_handler, mock_product_service, mock_ui):
    mock_product_service.service_status.return_value = {"has_api_key": False, "is_working": False}
    assert command_handler.handle_status() == 200
    mock_ui.display_service_status.assert_called_once()
    mock_ui.display_warning.assert_called_once_with(MISSING_KEY_WARNING)
