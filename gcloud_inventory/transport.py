"""HTTPS transport shared by the token exchange and the paginator."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urlsplit

import httpx

from .errors import ApiError, TransportError, ValidationError
from .settings import DEFAULT_HTTP_TIMEOUT

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "accept": "application/json",
    "user-agent": "gcloud-inventory/0.1",
}


def _provider_message(body: Any) -> str | None:
    if not isinstance(body, dict):
        return None
    error = body.get("error")
    if isinstance(error, dict):
        message = error.get("message")
        return str(message) if message else None
    return None


class HttpTransport:
    """Issues HTTPS requests and normalizes responses into parsed JSON.

    Example:
        with HttpTransport(timeout=10.0) as transport:
            body = transport.send("GET", url, headers={"Authorization": auth})
    """

    def __init__(self, timeout: float = DEFAULT_HTTP_TIMEOUT, client: httpx.Client | None = None):
        self.timeout = timeout
        self._owns_client = client is None
        self._client = client or httpx.Client(
            timeout=timeout, verify=True, headers=DEFAULT_HEADERS
        )

    def send(
        self,
        method: str,
        uri: str,
        data: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Send a request and return the parsed JSON body.

        Raises:
            ValidationError: The URI is not HTTPS
            TransportError: The endpoint could not be reached
            ApiError: The endpoint answered with a non-success status or non-JSON body
        """
        if urlsplit(uri).scheme != "https":
            raise ValidationError(f"Refusing to send request to non-HTTPS endpoint {uri}")

        try:
            response = self._client.request(method, uri, data=data, headers=headers)
        except httpx.HTTPError as exc:
            raise TransportError(f"Failed to connect to {uri}: {exc}", uri) from exc

        try:
            body = response.json()
        except ValueError:
            body = None

        if not response.is_success:
            message = f"{response.status_code} {response.reason_phrase}"
            provider = _provider_message(body)
            if provider:
                message += f": {provider}"
            logger.debug("%s %s failed: %s", method, uri, message)
            raise ApiError(message, uri, response.status_code)

        if body is None:
            raise ApiError(
                f"Unable to parse response from {uri} as JSON", uri, response.status_code
            )
        return body

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> HttpTransport:
        return self

    def __exit__(self, *args) -> None:
        self.close()
