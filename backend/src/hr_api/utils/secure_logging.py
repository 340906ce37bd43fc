"""Logging helpers that keep personal and infrastructure data out of logs.

Employee records carry names, emails and phone numbers, and database errors
can echo connection strings. Outside debug mode exception text is scrubbed
before it reaches a log line.
"""

import logging
import re
from functools import lru_cache

from hr_api.config import get_settings

# Order matters: URLs before paths, so a DSN is replaced as a whole
_SCRUB_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"(postgresql|postgres|sqlite|redis|https?|wss?)(\+\w+)?://\S+"), "[URL]"),
    (re.compile(r"['\"]?(/[\w./\-]+|[A-Z]:\\[^\s'\"]+)['\"]?"), "[PATH]"),
    (re.compile(r"[\w.+-]+@[\w-]+\.[\w.-]+"), "[EMAIL]"),
    (re.compile(r"\+?\d[\d\s().-]{7,}\d"), "[PHONE]"),
    (re.compile(r"[\w\-]{32,}"), "[TOKEN]"),
)

MAX_MESSAGE_LENGTH = 200


@lru_cache(maxsize=1)
def is_debug_mode() -> bool:
    """Check if application is running in debug mode."""
    return get_settings().debug


def sanitize_exception_message(error: BaseException) -> str:
    """Scrub an exception message for production logs.

    Removes URLs and connection strings, file system paths, email addresses,
    phone numbers and long token-like strings, then truncates.

    Args:
        error: The exception to sanitize

    Returns:
        Sanitized error message
    """
    message = str(error)
    for pattern, replacement in _SCRUB_PATTERNS:
        message = pattern.sub(replacement, message)

    if len(message) > MAX_MESSAGE_LENGTH:
        message = message[: MAX_MESSAGE_LENGTH - 3] + "..."
    return message


def log_error(
    logger: logging.Logger,
    message: str,
    error: BaseException | None = None,
) -> None:
    """Log an error with a detail level that depends on the environment.

    Debug mode logs the raw exception with its traceback. Otherwise only the
    exception type and a sanitized message are logged.

    Args:
        logger: The logger instance to use
        message: Generic log message without personal data
        error: Optional exception to include
    """
    if error is None:
        logger.error(message)
    elif is_debug_mode():
        logger.error(f"{message}: {error}", exc_info=error)
    else:
        logger.error(f"{message}: {type(error).__name__}: {sanitize_exception_message(error)}")
