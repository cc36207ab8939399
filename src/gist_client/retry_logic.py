"""Backoff for gist API rate limits.

GitHub answers 429 when a token exceeds its (secondary) rate limit, usually
with a Retry-After header. Requests that hit the limit are retried up to
MAX_RETRIES times, waiting Retry-After seconds when the server names a delay
and 1s, 2s, 4s otherwise. Every other error propagates on the first attempt.
"""

import time
import logging
from typing import Callable, Optional, TypeVar

from .errors import APIAccessError

logger = logging.getLogger(__name__)

T = TypeVar('T')

MAX_RETRIES = 3
MAX_RETRY_AFTER = 60

_RATE_LIMIT_PHRASES = ('too many requests', 'rate limit exceeded')


def retry_on_rate_limit(func: Callable[..., T], *args, **kwargs) -> T:
    """Call func, retrying while it fails with a rate limit error.

    Raises:
        APIAccessError: If the limit is still hit after MAX_RETRIES retries

    Example:
        >>> response = retry_on_rate_limit(session.get, url, timeout=30)
    """
    attempt = 0
    while True:
        try:
            return func(*args, **kwargs)
        except Exception as e:
            if not _is_rate_limit_error(e):
                raise
            if attempt >= MAX_RETRIES:
                logger.error(f"Rate limit persisted after {MAX_RETRIES} retries, giving up")
                raise APIAccessError(f"Gist API failure (after {MAX_RETRIES} retries)") from e

            delay = _retry_after(e)
            if delay is None:
                delay = 2 ** attempt
            attempt += 1
            logger.info(f"Rate limit hit, retrying in {delay}s ({attempt}/{MAX_RETRIES})")
            time.sleep(delay)


def _is_rate_limit_error(exception: Exception) -> bool:
    """Return True for 429 errors, by status attribute or message."""
    if getattr(exception, 'status_code', None) == 429:
        return True

    response = getattr(exception, 'response', None)
    if response is not None and getattr(response, 'status_code', None) == 429:
        return True

    message = str(exception).lower()
    return any(phrase in message for phrase in _RATE_LIMIT_PHRASES)


def _retry_after(exception: Exception) -> Optional[int]:
    """Seconds named by the response's Retry-After header, capped at MAX_RETRY_AFTER."""
    response = getattr(exception, 'response', None)
    headers = getattr(response, 'headers', None)
    if headers is None:
        return None
    try:
        seconds = int(str(headers.get('Retry-After')).strip())
    except (AttributeError, TypeError, ValueError):
        return None
    return max(0, min(seconds, MAX_RETRY_AFTER))
