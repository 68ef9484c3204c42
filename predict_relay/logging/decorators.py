import functools
import inspect
import time

from .logger import logger


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


def log_timing(func):
    """
    Log how long a call took.

    Success is logged at DEBUG, failure at ERROR; the exception is re-raised.
    Works for plain functions and coroutines.
    """
    name = func.__qualname__

    @functools.wraps(func)
    async def async_wrapper(*args, **kwargs):
        start = time.perf_counter()
        try:
            result = await func(*args, **kwargs)
        except Exception as e:
            logger.error(f"{name} failed", duration_ms=_elapsed_ms(start), error=str(e))
            raise
        logger.debug(f"{name} completed", duration_ms=_elapsed_ms(start))
        return result

    @functools.wraps(func)
    def sync_wrapper(*args, **kwargs):
        start = time.perf_counter()
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            logger.error(f"{name} failed", duration_ms=_elapsed_ms(start), error=str(e))
            raise
        logger.debug(f"{name} completed", duration_ms=_elapsed_ms(start))
        return result

    if inspect.iscoroutinefunction(func):
        return async_wrapper
    return sync_wrapper
