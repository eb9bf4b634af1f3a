"""HTTP client utilities and helpers."""

from asyncio import sleep
from collections.abc import Awaitable, Callable
from functools import wraps

from typing import Any, ParamSpec, TypeAlias, TypeVar

import httpx

from slot_rewards.errors import DecodeError, NotFound, UpstreamUnavailable
from slot_rewards.helpers.constants import (
    DEFAULT_TIMEOUT,
    MAX_ATTEMPTS,
    MAX_CONNECTIONS,
    MAX_KEEPALIVE_CONNECTIONS,
    RETRY_BASE_DELAY,
    RETRY_MAX_DELAY,
)
from slot_rewards.helpers.logging import get_logger


logger = get_logger(__name__)

P = ParamSpec("P")
T = TypeVar("T")

# JSON responses can be an object or an array
JsonResponse: TypeAlias = dict[str, Any] | list[Any]


def retry_with_backoff(
    max_attempts: int = MAX_ATTEMPTS,
    base_delay: float = RETRY_BASE_DELAY,
    max_delay: float = RETRY_MAX_DELAY,
    *,
    retry_on: tuple[type[Exception], ...] = (httpx.TransportError,),
    log_errors: bool = True,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """Decorator to retry async functions with exponential backoff.

    Only exceptions listed in retry_on are retried; anything else propagates
    on the first occurrence. With max_attempts=1 the call is single-shot.

    Args:
        max_attempts: Total number of attempts (default: 1)
        base_delay: Initial delay in seconds (default: 0.5)
        max_delay: Maximum delay between retries (default: 5.0)
        retry_on: Exception types that trigger another attempt
        log_errors: Whether to log retry attempts (default: True)

    Returns:
        Decorated function that retries on the given exception types

    Raises:
        ValueError: If max_attempts is lower than 1

    Example:
        ```python
        from slot_rewards.helpers.http import retry_with_backoff

        @retry_with_backoff(max_attempts=3, base_delay=2.0)
        async def fetch_head(client: httpx.AsyncClient, url: str) -> httpx.Response:
            return await client.get(url)

        # Transport errors are retried after 2s, then 4s
        ```
    """
    if max_attempts < 1:
        msg = f"max_attempts must be at least 1, got {max_attempts}"
        raise ValueError(msg)

    def decorator(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            for attempt in range(max_attempts):
                try:
                    return await func(*args, **kwargs)
                except retry_on as e:
                    if attempt == max_attempts - 1:
                        if log_errors and max_attempts > 1:
                            logger.error(
                                "%s failed after %d attempts",
                                func.__name__,
                                max_attempts,
                            )
                        raise
                    if log_errors:
                        logger.warning(
                            "%s error (attempt %d/%d): %s",
                            func.__name__,
                            attempt + 1,
                            max_attempts,
                            e,
                        )
                    delay = min(base_delay * (2**attempt), max_delay)
                    await sleep(delay)

            # Unreachable: the loop either returns or raises
            msg = f"{func.__name__} failed without exception"
            raise RuntimeError(msg)

        return wrapper

    return decorator


def create_http_client(
    timeout: float = DEFAULT_TIMEOUT, **kwargs: Any
) -> httpx.AsyncClient:
    """Create a configured httpx AsyncClient with pooled connections.

    Args:
        timeout: Default timeout in seconds (default: DEFAULT_TIMEOUT)
        **kwargs: Additional httpx.AsyncClient kwargs

    Returns:
        Configured AsyncClient instance

    Example:
        ```python
        from slot_rewards.helpers.http import create_http_client

        async with create_http_client(timeout=10.0) as client:
            response = await client.get("https://example.com")
        ```
    """
    kwargs.setdefault(
        "limits",
        httpx.Limits(
            max_connections=MAX_CONNECTIONS,
            max_keepalive_connections=MAX_KEEPALIVE_CONNECTIONS,
        ),
    )
    return httpx.AsyncClient(timeout=timeout, **kwargs)


async def request_json(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    json: Any = None,
    timeout: float | None = None,
    max_attempts: int = MAX_ATTEMPTS,
) -> JsonResponse:
    """Send a request and decode its JSON body, mapping failures to API errors.

    Error messages mention only the URL path, so credentials embedded in
    provider URLs never reach API callers.

    Args:
        client: HTTP client instance
        method: HTTP method
        url: URL to request
        json: Optional JSON body
        timeout: Optional timeout override
        max_attempts: Attempts for transport-level failures

    Returns:
        Parsed JSON body

    Raises:
        UpstreamUnavailable: On transport failure or a non-404 error status
            or an unparsable upstream URL
        NotFound: If the upstream answers 404
        DecodeError: If the body is not valid JSON or nests too deeply to decode
    """
    try:
        path = httpx.URL(url).path
    except httpx.InvalidURL as e:
        msg = f"{method}: invalid upstream URL"
        raise UpstreamUnavailable(msg) from e

    request_kwargs: dict[str, Any] = {}
    if json is not None:
        request_kwargs["json"] = json
    if timeout is not None:
        request_kwargs["timeout"] = timeout

    @retry_with_backoff(max_attempts=max_attempts)
    async def send() -> httpx.Response:
        return await client.request(method, url, **request_kwargs)

    logger.debug("%s %s", method, path)
    try:
        response = await send()
    except httpx.TimeoutException as e:
        msg = f"{method} {path} timed out"
        raise UpstreamUnavailable(msg) from e
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        msg = f"{method} {path} failed: {type(e).__name__}"
        raise UpstreamUnavailable(msg) from e

    if response.status_code == httpx.codes.NOT_FOUND:
        msg = f"{method} {path} returned 404"
        raise NotFound(msg)
    if response.is_error:
        msg = f"{method} {path} returned HTTP {response.status_code}"
        raise UpstreamUnavailable(msg)

    try:
        return response.json()
    except (ValueError, RecursionError) as e:
        msg = f"{method} {path} returned a non-JSON body"
        raise DecodeError(msg) from e


async def get_json(
    client: httpx.AsyncClient,
    url: str,
    *,
    timeout: float | None = None,
    max_attempts: int = MAX_ATTEMPTS,
) -> JsonResponse:
    """Fetch JSON data from a URL.

    Example:
        ```python
        async with create_http_client() as client:
            data = await get_json(client, "https://beacon.example/eth/v2/beacon/blocks/head")
        ```
    """
    return await request_json(
        client, "GET", url, timeout=timeout, max_attempts=max_attempts
    )


async def post_json(
    client: httpx.AsyncClient,
    url: str,
    data: Any,
    *,
    timeout: float | None = None,
    max_attempts: int = MAX_ATTEMPTS,
) -> JsonResponse:
    """Post JSON data to a URL and return the JSON response.

    Example:
        ```python
        async with create_http_client() as client:
            duties = await post_json(
                client,
                "https://beacon.example/eth/v1/validator/duties/sync/3",
                ["1", "2"],
            )
        ```
    """
    return await request_json(
        client, "POST", url, json=data, timeout=timeout, max_attempts=max_attempts
    )


__all__ = [
    "JsonResponse",
    "create_http_client",
    "get_json",
    "post_json",
    "request_json",
    "retry_with_backoff",
]
