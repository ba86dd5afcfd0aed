"""
Retry decorator with exponential backoff for remote calls.
"""
import time
import random
import logging
from functools import wraps
from typing import TypeVar, Callable, Any, Optional, Tuple, Type

from ..config import MAX_RETRIES, RETRY_BACKOFF_FACTOR

# Type variable for generic function
T = TypeVar('T')

logger = logging.getLogger(__name__)


def _retry_delay(error: BaseException, attempt: int, backoff_factor: float) -> float:
    """Delay before the next attempt; a server supplied Retry-After wins."""
    retry_after: Optional[float] = getattr(error, "retry_after", None)
    if retry_after is not None:
        return float(retry_after)
    return backoff_factor ** attempt + random.uniform(0, 1)


def with_retry(
    max_retries: int = MAX_RETRIES,
    backoff_factor: float = RETRY_BACKOFF_FACTOR,
    exceptions: Tuple[Type[BaseException], ...] = (Exception,)
) -> Callable:
    """
    Decorator for retrying remote calls with exponential backoff.

    Args:
        max_retries: Maximum number of retry attempts after the first call
        backoff_factor: Base of the exponential delay
        exceptions: Exception types that trigger a retry; anything else
            propagates immediately

    Returns:
        Decorated function with retry logic
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        func_name = getattr(func, '__name__', 'function')

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            attempt = 0
            while True:
                try:
                    return func(*args, **kwargs)
                except exceptions as e:
                    attempt += 1
                    if attempt > max_retries:
                        logger.error(f"Max retries ({max_retries}) exceeded for {func_name}")
                        raise

                    delay = _retry_delay(e, attempt, backoff_factor)
                    logger.warning(
                        f"Attempt {attempt}/{max_retries} failed for {func_name}: "
                        f"{e.__class__.__name__}: {e}. Retrying in {delay:.2f}s"
                    )
                    time.sleep(delay)

        return wrapper
    return decorator
