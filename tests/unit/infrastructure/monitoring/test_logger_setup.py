import logging

import pytest

from shopgen.infrastructure.monitoring.logger_setup import NOISY_LOGGERS, resolve_level, setup_logging

@pytest.fixture(autouse=True)
def restore_logging():
    """Puts back the root handlers pytest installed."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    noisy_levels = {name: logging.getLogger(name).level for name in NOISY_LOGGERS}
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
    for name, noisy_level in noisy_levels.items():
        logging.getLogger(name).setLevel(noisy_level)

@pytest.mark.parametrize("level, expected", [
    ("info", logging.INFO),
    ("DEBUG", logging.DEBUG),
    (logging.ERROR, logging.ERROR),
    (None, logging.WARNING),
    ("loud", logging.WARNING),
])
def test_resolve_level(level, expected):
    assert resolve_level(level) == expected

def test_setup_logging_replaces_root_handlers():
    setup_logging("info")
    root = logging.getLogger()
    assert root.level == logging.INFO
    assert len(root.handlers) == 1
    assert logging.getLogger("httpx").level == logging.WARNING

def test_setup_logging_writes_to_file(tmp_path):
    log_file = tmp_path / "shopgen.log"
    setup_logging("info", log_format="%(levelname)s %(message)s", log_file=str(log_file))
    logging.getLogger("shopgen.test").info("generated image")
    for handler in logging.getLogger().handlers:
        handler.flush()
    assert "INFO generated image" in log_file.read_text(encoding="utf-8")

def test_debug_level_opens_up_http_loggers():
    setup_logging("debug")
    assert logging.getLogger("openai").level == logging.DEBUG
