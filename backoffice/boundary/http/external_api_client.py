"""
External API HTTP client.

Thin httpx wrapper used by the data fetcher and connection tests.
Transport errors and 5xx responses are retried with exponential
jitter backoff via tenacity.

Dependencies: httpx, tenacity
System role: Outbound REST calls to configured external data sources
"""

import logging
from typing import Any

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

logger = logging.getLogger(__name__)


def is_retryable_error(error: BaseException) -> bool:
    """
    Decide whether a failed request should be retried.

    Args:
        error: Exception raised by the request

    Returns:
        bool: True for network/transport failures and 5xx responses
    """
    if isinstance(error, httpx.TransportError):
        return True
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code >= 500
    return False


class ExternalApiClient:
    """
    Async client for external REST APIs.

    Attributes:
        timeout: Per-request timeout in seconds
        retry_attempts: Total attempts per request
        retry_max_wait: Upper bound for backoff between attempts
    """

    def __init__(
        self,
        timeout: float = 30.0,
        retry_attempts: int = 3,
        retry_max_wait: float = 5.0,
        retry_initial_wait: float = 0.5,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize client settings.

        Args:
            timeout: Request timeout in seconds
            retry_attempts: Total attempts per request (1 disables retry)
            retry_max_wait: Maximum backoff between attempts in seconds
            retry_initial_wait: First backoff interval in seconds
            transport: Optional httpx transport (tests pass httpx.MockTransport)
        """
        self.timeout = timeout
        self.retry_attempts = retry_attempts
        self.retry_max_wait = retry_max_wait
        self.retry_initial_wait = retry_initial_wait
        self._transport = transport

    def _log_retry(self, retry_state) -> None:
        logger.warning(
            "Retrying external API request",
            extra={
                "attempt": retry_state.attempt_number,
                "max_attempts": self.retry_attempts,
                "error": str(retry_state.outcome.exception()),
            },
        )

    async def request(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
        json_body: Any = None,
        retry: bool = True,
    ) -> httpx.Response:
        """
        Send a request and return the successful response.

        Args:
            method: HTTP method
            url: Absolute URL
            headers: Request headers
            params: Query string parameters
            json_body: JSON body (POST)
            retry: Retry transient failures; False sends exactly once

        Returns:
            httpx.Response: Response with a 2xx/3xx status

        Raises:
            httpx.HTTPStatusError: Final response had a 4xx/5xx status
            httpx.TransportError: Network failure after all attempts
        """
        attempts = self.retry_attempts if retry else 1

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(attempts),
                wait=wait_exponential_jitter(initial=self.retry_initial_wait, max=self.retry_max_wait),
                retry=retry_if_exception(is_retryable_error),
                before_sleep=self._log_retry,
                reraise=True,
            ):
                with attempt:
                    response = await client.request(
                        method,
                        url,
                        headers=headers,
                        params=params,
                        json=json_body,
                    )
                    response.raise_for_status()
        return response

    async def request_json(self, method: str, url: str, **kwargs: Any) -> Any:
        """
        Send a request and decode the JSON response body.

        Returns:
            Decoded JSON value
        """
        response = await self.request(method, url, **kwargs)
        return response.json()
