"""Retry decorator for GitHub API calls that hit rate limits.

The decorator honors the retry hints GitHub sends back (the retry_after value
of githubkit's rate limit exceptions, or the retry-after and x-ratelimit-reset
headers) and falls back to exponential backoff when none is available.
"""

import asyncio
import functools
import inspect
import time
from typing import Any, Awaitable, Callable, Mapping, TypeVar

import structlog
from githubkit.exception import PrimaryRateLimitExceeded, RequestFailed, SecondaryRateLimitExceeded

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])

RATE_LIMIT_STATUS_CODES = (403, 429)


def wait_time_from_headers(headers: Mapping[str, str], default: float) -> float:
    """Work out how long to wait from GitHub's rate limit response headers."""
    retry_after = headers.get("retry-after")
    if retry_after:
        try:
            return float(retry_after)
        except ValueError:
            logger.warning("Invalid retry-after header value", retry_after=retry_after)

    rate_limit_reset = headers.get("x-ratelimit-reset")
    if rate_limit_reset:
        try:
            seconds_until_reset = int(rate_limit_reset) - int(time.time())
        except ValueError:
            logger.warning("Invalid x-ratelimit-reset header value", rate_limit_reset=rate_limit_reset)
        else:
            if seconds_until_reset > 0:
                return float(seconds_until_reset + 1)

    return default


def _is_rate_limit_failure(exc: RequestFailed) -> bool:
    return exc.response.status_code in RATE_LIMIT_STATUS_CODES or "rate limit" in str(exc).lower()


def retry_on_rate_limit(
    max_retries: int = 10,
    initial_delay: float = 10.0,
    max_delay: float = 300.0,
    exponential_base: float = 2.0,
) -> Callable[[F], F]:
    """Decorator for retrying async GitHub calls when they encounter rate limits.

    Args:
        max_retries: Maximum number of retry attempts.
        initial_delay: Delay in seconds before the first retry when GitHub gives no hint.
        max_delay: Upper bound for any single wait.
        exponential_base: Growth factor of the backoff delay between attempts.

    Returns:
        Decorated function with retry logic.
    """

    def decorator(func: F) -> F:
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"Function {func.__name__} decorated with @retry_on_rate_limit must be async.")

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            delay = initial_delay
            for attempt in range(max_retries + 1):
                try:
                    return await func(*args, **kwargs)
                except (PrimaryRateLimitExceeded, SecondaryRateLimitExceeded) as exc:
                    if attempt == max_retries:
                        logger.error("Max retries reached for GitHub rate limit error", function=func.__name__, attempt=attempt + 1)
                        raise
                    retry_after = getattr(exc, "retry_after", None)
                    wait_time = retry_after.total_seconds() if retry_after else delay
                    rate_limit_type = "primary" if isinstance(exc, PrimaryRateLimitExceeded) else "secondary"
                except RequestFailed as exc:
                    if not _is_rate_limit_failure(exc):
                        raise
                    if attempt == max_retries:
                        logger.error(
                            "Max retries reached for rate limit error",
                            function=func.__name__,
                            attempt=attempt + 1,
                            status_code=exc.response.status_code,
                        )
                        raise
                    wait_time = wait_time_from_headers(exc.response.headers, delay)
                    rate_limit_type = "response"

                wait_time = min(wait_time, max_delay)
                logger.warning(
                    "GitHub rate limit exceeded, retrying",
                    function=func.__name__,
                    rate_limit_type=rate_limit_type,
                    attempt=attempt + 1,
                    max_retries=max_retries,
                    wait_time=wait_time,
                )
                await asyncio.sleep(wait_time)
                delay = min(delay * exponential_base, max_delay)

        return wrapper  # type: ignore

    return decorator
