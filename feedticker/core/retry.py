"""Retry logic wrapper with exponential backoff."""

import time
from functools import wraps
from typing import Any, Callable, Tuple, Type, TypeVar, cast

from feedticker.core.logger import logger

F = TypeVar('F', bound=Callable[..., Any])

def with_retries(
    max_retries: int = 2,
    initial_delay: float = 1.0,
    exceptions: Tuple[Type[BaseException], ...] = (Exception,),
) -> Callable[[F], F]:
    """
    A decorator that retries a function upon failure using exponential backoff.

    Only exceptions listed in ``exceptions`` trigger a retry; anything else
    propagates immediately.

    Args:
        max_retries (int): Maximum number of retry attempts.
        initial_delay (float): Delay in seconds before the first retry.
                               Subsequent delays double with each attempt.
        exceptions (tuple): Exception types considered transient.

    Returns:
        Callable: The decorated function.
    """
    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            delay = initial_delay
            attempt = 0
            while True:
                try:
                    return func(*args, **kwargs)
                except exceptions as e:
                    if attempt >= max_retries:
                        logger.error(f"'{func.__name__}' failed after {max_retries} retries: {e}")
                        raise

                    attempt += 1
                    logger.warning(
                        f"'{func.__name__}' failed (attempt {attempt}/{max_retries}): {e}. "
                        f"Retrying in {delay} seconds..."
                    )
                    time.sleep(delay)
                    delay *= 2
        return cast(F, wrapper)
    return decorator
