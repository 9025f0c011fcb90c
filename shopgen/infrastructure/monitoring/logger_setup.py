"""Logging configuration for the shopgen CLI.

Log records go to stderr (and optionally a file) so that command output on
stdout stays clean. The HTTP stack under the OpenAI SDK logs every request
at INFO; it is held at WARNING unless shopgen itself runs at DEBUG.
"""

import logging
import sys
from typing import Optional, Union

DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
NOISY_LOGGERS = ("httpx", "httpcore", "openai")

def resolve_level(level: Union[int, str, None]) -> int:
    """Turns a level name ('info', 'DEBUG') or number into a logging level.

    Unknown names fall back to WARNING.
    """
    if isinstance(level, int):
        return level
    if not level:
        return logging.WARNING
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else logging.WARNING

def setup_logging(
    level: Union[int, str, None] = DEFAULT_LOG_LEVEL,
    log_format: Optional[str] = None,
    log_file: Optional[str] = None
) -> None:
    """Configures the root logger, replacing any handlers already attached.

    Args:
        level: Minimum level, as a name or a logging constant.
        log_format: Format string for records (DEFAULT_LOG_FORMAT if None).
        log_file: Optional path of a file that receives the same records.
    """
    log_level = resolve_level(level)
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(log_format or DEFAULT_LOG_FORMAT)
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        try:
            handlers.append(logging.FileHandler(log_file, encoding='utf-8'))
        except OSError as e:
            logging.getLogger(__name__).error(f"Cannot open log file {log_file}: {e}")
    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    third_party_level = logging.DEBUG if log_level <= logging.DEBUG else max(log_level, logging.WARNING)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(third_party_level)

    logging.getLogger(__name__).debug(f"Logging configured. Level={logging.getLevelName(log_level)}")
