"""Retry mechanism for transient line capability failures."""

import time
import functools
import random
from typing import Type, Tuple, Callable, Any, Union
from gpio_conformance.logging_config import get_logger

logger = get_logger("retry")


def exponential_backoff(
    max_attempts: int = 3,
    base_delay: float = 0.05,
    max_delay: float = 2.0,
    backoff_factor: float = 2.0,
    jitter: bool = True,
    retry_on: Union[Type[Exception], Tuple[Type[Exception], ...]] = (
        BlockingIOError,
        InterruptedError,
    ),
    should_retry: Callable[[Exception], bool] = None,
):
    """
    Decorator for exponential backoff retry with configurable parameters.

    Args:
        max_attempts: Maximum number of attempts
        base_delay: Initial delay in seconds
        max_delay: Maximum delay between retries
        backoff_factor: Multiplier for delay on each retry
        jitter: Add randomization to delay
        retry_on: Exception types to retry on
        should_retry: Optional predicate narrowing which caught exceptions
            are retried (e.g. only OSError with errno EBUSY)

    Example:
        @exponential_backoff(max_attempts=5, base_delay=0.01)
        def write_attribute(path, token):
            path.write_text(token)
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            for attempt in range(max_attempts):
                try:
                    result = func(*args, **kwargs)
                    if attempt > 0:
                        logger.info(
                            f"Function {func.__name__} succeeded after "
                            f"{attempt + 1} attempts"
                        )
                    return result

                except retry_on as e:
                    if should_retry is not None and not should_retry(e):
                        raise

                    if attempt == max_attempts - 1:
                        logger.error(
                            f"Function {func.__name__} failed after "
                            f"{max_attempts} attempts: {str(e)}",
                            extra={"attempts": max_attempts, "final_error": str(e)},
                        )
                        raise

                    delay = min(base_delay * (backoff_factor**attempt), max_delay)
                    if jitter:
                        delay += random.uniform(0, delay * 0.1)

                    logger.warning(
                        f"Function {func.__name__} failed (attempt "
                        f"{attempt + 1}/{max_attempts}), retrying in "
                        f"{delay:.2f}s: {str(e)}",
                        extra={
                            "attempt": attempt + 1,
                            "max_attempts": max_attempts,
                            "delay": delay,
                            "error": str(e),
                        },
                    )

                    time.sleep(delay)

        return wrapper

    return decorator
