"""Offset/limit pagination over the index endpoint.

This module turns a paged index endpoint into one continuous async stream
of entries.

Architecture:
    `paginate` is a forward-only state machine driven by a `Cursor`:
    - build the page URL for the cursor offset and fetch it
    - on a decoded page, record `total` (first page only), yield its entries
      in order and advance the offset by the chunk size
    - stop once `offset >= total` or a page comes back empty

    Pages are requested only when the consumer asks for the next entry, and
    only the current page is held in memory.

Failure handling:
    A 404 ends the stream normally. Any other failure (non-2xx status,
    transport error, malformed envelope) also ends the stream, after it is
    logged and passed to the context's error hooks. Entries already yielded
    stay valid and nothing is raised to the consumer, so a failing page shows
    up as a shorter stream, not as an exception.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import AsyncGenerator
from dataclasses import dataclass
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from pydantic import ValidationError

from ..core.constants import DEFAULT_CHUNK_SIZE, LIMIT_PARAM, OFFSET_PARAM, SHEET_PARAM
from ..core.exceptions import DecodingError, FFetchError, InvalidResponseError, NetworkError
from ..core.types import Entry
from ..models import PageResponse
from .context import FFetchContext
from .telemetry import log_page_fetched, log_pagination_stopped

logger = logging.getLogger(__name__)


@dataclass
class Cursor:
    """Position of the paginator within the index.

    Attributes:
        offset: Offset of the next page to request (only grows)
        chunk_size: Entries requested per page
        total: Server-reported total, unknown until the first page arrives
        sheet_name: Sheet selector sent with every page request
    """

    offset: int = 0
    chunk_size: int = DEFAULT_CHUNK_SIZE
    total: int | None = None
    sheet_name: str | None = None

    @property
    def exhausted(self) -> bool:
        return self.total is not None and self.offset >= self.total

    def record_total(self, total: int) -> None:
        if self.total is None:
            self.total = total

    def advance(self) -> None:
        self.offset += self.chunk_size


def build_page_url(
    base_url: str,
    offset: int,
    limit: int,
    sheet_name: str | None = None,
) -> str:
    """Append pagination parameters to the index URL.

    Existing query parameters on `base_url` are kept in place.

    Args:
        base_url: Index endpoint URL
        offset: First entry to return
        limit: Number of entries to return
        sheet_name: Optional sheet selector

    Returns:
        URL for the requested page
    """
    parts = urlsplit(base_url)
    query = parse_qsl(parts.query, keep_blank_values=True)
    query.append((OFFSET_PARAM, str(offset)))
    query.append((LIMIT_PARAM, str(limit)))
    if sheet_name is not None:
        query.append((SHEET_PARAM, sheet_name))
    return urlunsplit(parts._replace(query=urlencode(query)))


async def fetch_page(url: str, context: FFetchContext) -> PageResponse | None:
    """Fetch and decode one index page.

    Args:
        url: Page URL (pagination parameters included)
        context: Pipeline context providing the HTTP client and cache hint

    Returns:
        Decoded page, or None if the endpoint answered 404

    Raises:
        NetworkError: If the transport failed
        InvalidResponseError: On a non-2xx status other than 404, or if the
            client returned something without a status and body
        DecodingError: If the body is not a valid page envelope
    """
    try:
        response = await context.http_client.fetch(url, context.cache)
    except FFetchError:
        raise
    except Exception as e:
        raise NetworkError(f"Network error: {e}", url=url, cause=e) from e

    status = getattr(response, "status", None)
    if not isinstance(status, int):
        raise InvalidResponseError()
    if status == 404:
        return None
    if not 200 <= status < 300:
        raise InvalidResponseError(f"HTTP {status} for {url}", status_code=status)

    body = getattr(response, "body", None)
    if not isinstance(body, (bytes, str)):
        raise InvalidResponseError()

    try:
        return PageResponse.model_validate_json(body)
    except ValidationError as e:
        raise DecodingError(f"Decoding error: {e}", cause=e) from e


async def notify_error_hooks(context: FFetchContext, error: FFetchError) -> None:
    """Pass a pagination error to every registered hook.

    Hooks may be sync or async. A failing hook is logged and skipped.
    """
    for hook in context.error_hooks:
        try:
            result = hook(error)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            logger.warning(f"Error hook {hook!r} failed: {e}")


async def paginate(base_url: str, context: FFetchContext) -> AsyncGenerator[Entry, None]:
    """Yield every entry of the index, page by page.

    Each call starts a fresh cursor at offset 0.

    Args:
        base_url: Index endpoint URL
        context: Pipeline context

    Yields:
        Entries in index order
    """
    cursor = Cursor(chunk_size=context.chunk_size, sheet_name=context.sheet_name)

    while not cursor.exhausted:
        url = build_page_url(base_url, cursor.offset, cursor.chunk_size, cursor.sheet_name)
        try:
            page = await fetch_page(url, context)
        except FFetchError as e:
            log_pagination_stopped(url=url, offset=cursor.offset, reason="error", error=e)
            await notify_error_hooks(context, e)
            return

        if page is None:
            log_pagination_stopped(url=url, offset=cursor.offset, reason="not_found")
            return

        cursor.record_total(page.total)
        log_page_fetched(
            url=url, offset=cursor.offset, entries=len(page.data), total=cursor.total
        )

        for entry in page.data:
            yield entry

        if not page.data:
            return
        cursor.advance()
