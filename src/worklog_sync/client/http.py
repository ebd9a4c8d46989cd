"""Thin JSON-over-HTTP client shared by the providers."""

import logging
from typing import Any

import httpx

from worklog_sync.client.options import DEFAULT_REQUEST_TIMEOUT

logger = logging.getLogger(__name__)


def token_headers(token: str, token_name: str = "Bearer", header: str = "Authorization") -> dict[str, str]:
    """Build a token authentication header.

    Args:
        token: API token.
        token_name: Scheme written in front of the token, empty for none.
        header: Header carrying the token.

    Returns:
        Header dictionary.
    """
    value = f"{token_name} {token}" if token_name else token
    return {header: value}


class HTTPClient:
    """JSON client bound to one base URL and one set of credentials.

    The underlying httpx.Client is thread safe, so one instance is shared
    by every upload worker.
    """

    def __init__(
        self,
        base_url: str,
        auth: httpx.Auth | tuple[str, str] | None = None,
        headers: dict[str, str] | None = None,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize HTTP client.

        Args:
            base_url: Base URL every request path is joined to.
            auth: httpx auth, e.g. a (username, password) tuple for basic auth.
            headers: Extra default headers, e.g. from token_headers().
            timeout: Seconds before a single request gives up.
            transport: Custom httpx transport.
        """
        self.client = httpx.Client(
            base_url=base_url,
            auth=auth,
            headers={
                "Accept": "application/json",
                "Content-Type": "application/json",
                **(headers or {}),
            },
            timeout=timeout,
            transport=transport,
        )

    def call(
        self,
        method: str,
        url: str,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and decode the JSON response.

        Args:
            method: HTTP method.
            url: Path relative to the base URL, or an absolute URL.
            json: Request payload.
            params: Query parameters.

        Returns:
            Decoded response body, None if the body is empty.

        Raises:
            httpx.HTTPError: If the request failed or returned an error status.
            ValueError: If the body is not valid JSON.
        """
        logger.debug(f"{method} {url}")
        response = self.client.request(method, url, json=json, params=params)
        response.raise_for_status()

        if not response.content:
            return None
        return response.json()

    def close(self) -> None:
        """Close the HTTP client."""
        self.client.close()

    def __enter__(self) -> "HTTPClient":
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()
