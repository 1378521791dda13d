import logging
import sys
from typing import Any, Optional

from lessonhub.core.config import settings

# Configure logging format
logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=settings.LOG_LEVEL.upper(),
    handlers=[logging.StreamHandler(sys.stdout)],
)

# Package logger; module loggers (lessonhub.services.*) propagate here
logger = logging.getLogger("lessonhub")
logger.setLevel(settings.LOG_LEVEL.upper())


def _with_context(message: str, context: dict) -> str:
    if not context:
        return message
    pairs = ", ".join(f"{key}={value!r}" for key, value in sorted(context.items()))
    return f"{message} - Context: {pairs}"


def log_info(message: str, **kwargs: Any) -> None:
    """Log info message with additional context"""
    logger.info(_with_context(message, kwargs))


def log_error(message: str, error: Optional[Exception] = None, **kwargs: Any) -> None:
    """Log error message with exception details and additional context"""
    if error is not None:
        message = f"{message} - Error: {type(error).__name__}: {error}"
    logger.error(_with_context(message, kwargs))


def log_warning(message: str, **kwargs: Any) -> None:
    """Log warning message with additional context"""
    logger.warning(_with_context(message, kwargs))


# Add these methods to the logger object
logger.structured_info = log_info
logger.structured_error = log_error
logger.structured_warning = log_warning
