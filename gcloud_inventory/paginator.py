"""Cursor pagination over Compute API list endpoints."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from .errors import ApiError
from .models import AccessToken, PageResponse
from .transport import HttpTransport

logger = logging.getLogger(__name__)


def _next_url(page: PageResponse, url: str) -> str | None:
    if not page.next_page_token:
        return None
    if not page.self_link:
        raise ApiError(f"List response from {url} has nextPageToken but no selfLink", url)
    return f"{page.self_link}?pageToken={page.next_page_token}"


def fetch_all(transport: HttpTransport, start_url: str, token: AccessToken) -> list[Any]:
    """Fetch every item of a list endpoint, following nextPageToken.

    Items are returned in request order, then page order. Any failure aborts
    the whole fetch; pages already fetched are discarded.
    """
    headers = {"Authorization": token.authorization}
    items: list[Any] = []
    url: str | None = start_url
    pages = 0

    while url:
        logger.debug("Making request to %s", url)
        payload = transport.send("GET", url, headers=headers)
        try:
            page = PageResponse.model_validate(payload)
        except PydanticValidationError as exc:
            raise ApiError(f"Unexpected list response from {url}", url) from exc

        items.extend(page.items)
        pages += 1
        url = _next_url(page, url)

    logger.debug("Fetched %d items in %d pages from %s", len(items), pages, start_url)
    return items
