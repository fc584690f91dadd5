"""Document following: fetch and parse the page each entry links to.

Architecture:
    For every entry the follower runs a fixed sequence of checks and stops
    at the first failure:
    1. read the reference field (must be a non-blank string)
    2. resolve it to an absolute URL against the index URL
    3. check the URL's host against the context allowlist
    4. fetch it through the context HTTP client with the cache hint
    5. parse the body through the context HTML parser

    The result is a `FollowSuccess` or `FollowFailure` value. It is only
    flattened into entry fields when attached: the parsed document under the
    target field, or a diagnostic string under `<target>_error`, never both.

Concurrency:
    Entries are pulled from upstream in batches of `context.batch_size`.
    A batch is followed concurrently with `asyncio.gather` and re-emitted in
    upstream order before the next batch is pulled, so at most
    `batch_size` documents are in flight and output order equals input order.

    Per-entry failures never escape the follower. Cancelling the consuming
    task cancels the in-flight batch and propagates as usual.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import aclosing
from dataclasses import dataclass
from typing import Any
from urllib.parse import urljoin, urlsplit

from ..core.constants import ERROR_FIELD_SUFFIX, WILDCARD_HOST
from ..core.exceptions import (
    DocumentNotFoundError,
    FFetchError,
    HostNotAllowedError,
    InvalidResponseError,
    InvalidURLError,
    NetworkError,
    OperationFailedError,
)
from ..core.types import Entry
from .context import FFetchContext
from .telemetry import log_document_follow_failed


@dataclass(frozen=True)
class FollowSuccess:
    """Parsed document for one entry."""

    url: str
    document: Any


@dataclass(frozen=True)
class FollowFailure:
    """Reason a document could not be attached to an entry."""

    error: FFetchError
    url: str | None = None

    @property
    def message(self) -> str:
        return str(self.error)


FollowOutcome = FollowSuccess | FollowFailure


def resolve_document_url(base_url: str, reference: str) -> str | None:
    """Resolve a reference against the index URL.

    Absolute URLs are returned unchanged; relative ones are joined to
    `base_url`.

    Returns:
        Absolute URL, or None if the reference cannot be resolved
    """
    try:
        resolved = urljoin(base_url, reference)
        parts = urlsplit(resolved)
    except ValueError:
        return None
    if not parts.scheme:
        return None
    return resolved


def document_host(url: str) -> str | None:
    """Lower-cased hostname of `url`, or None if it has none."""
    try:
        return urlsplit(url).hostname or None
    except ValueError:
        return None


def is_host_allowed(host: str | None, allowed_hosts: frozenset[str]) -> bool:
    """Check a hostname against an allowlist (exact match or "*")."""
    if WILDCARD_HOST in allowed_hosts:
        return True
    if not host:
        return False
    return host.lower() in allowed_hosts


def error_field(field_name: str) -> str:
    """Name of the diagnostic field paired with `field_name`."""
    return f"{field_name}{ERROR_FIELD_SUFFIX}"


def attach_outcome(entry: Entry, field_name: str, outcome: FollowOutcome) -> Entry:
    """Return a copy of `entry` carrying the follow outcome.

    Success sets `field_name` and drops `<field_name>_error`; failure drops
    `field_name` and sets `<field_name>_error`.
    """
    result = dict(entry)
    if isinstance(outcome, FollowSuccess):
        result[field_name] = outcome.document
        result.pop(error_field(field_name), None)
    else:
        result.pop(field_name, None)
        result[error_field(field_name)] = outcome.message
    return result


def _describe(error: BaseException) -> str:
    if isinstance(error, NetworkError) and error.cause is not None:
        return str(error.cause) or type(error.cause).__name__
    return str(error) or type(error).__name__


class DocumentFollower:
    """Resolve, fetch and parse the document referenced by each entry.

    Args:
        base_url: Index URL that relative references are resolved against
        context: Pipeline context (HTTP client, parser, allowlist, cache, concurrency)
        field_name: Entry field holding the document reference
        new_field_name: Field receiving the document (defaults to `field_name`)
    """

    def __init__(
        self,
        base_url: str,
        context: FFetchContext,
        field_name: str,
        new_field_name: str | None = None,
    ) -> None:
        self._base_url = base_url
        self._context = context
        self.field_name = field_name
        self.target_field = new_field_name or field_name

    async def resolve(self, entry: Entry) -> FollowOutcome:
        """Run the follow steps for one entry. Never raises for per-entry failures."""
        reference = entry.get(self.field_name)
        if not isinstance(reference, str) or not reference.strip():
            return FollowFailure(
                InvalidURLError(
                    str(reference),
                    f"Missing or invalid URL string in field '{self.field_name}'",
                )
            )

        url = resolve_document_url(self._base_url, reference.strip())
        if url is None:
            return FollowFailure(
                InvalidURLError(
                    reference,
                    f"Could not resolve URL from field '{self.field_name}': {reference}",
                )
            )

        host = document_host(url)
        if not is_host_allowed(host, self._context.allowed_hosts):
            return FollowFailure(HostNotAllowedError(url, host), url=url)

        try:
            response = await self._context.http_client.fetch(url, self._context.cache)
        except asyncio.CancelledError:
            task = asyncio.current_task()
            if task is not None and task.cancelling():
                raise
            return FollowFailure(
                NetworkError(f"Network error for {url}: request cancelled", url=url), url=url
            )
        except Exception as e:
            return FollowFailure(
                NetworkError(f"Network error for {url}: {_describe(e)}", url=url, cause=e),
                url=url,
            )

        status = getattr(response, "status", None)
        if not isinstance(status, int):
            return FollowFailure(InvalidResponseError(f"No HTTP response for {url}"), url=url)
        if status == 404:
            return FollowFailure(DocumentNotFoundError(f"HTTP error 404 for {url}"), url=url)
        if not 200 <= status < 300:
            return FollowFailure(
                InvalidResponseError(f"HTTP error {status} for {url}", status_code=status),
                url=url,
            )

        html = getattr(response, "text", None)
        if not isinstance(html, str):
            return FollowFailure(InvalidResponseError(f"No HTTP response for {url}"), url=url)

        try:
            document = self._context.html_parser.parse(html)
        except Exception as e:
            return FollowFailure(
                OperationFailedError(f"HTML parsing error for {url}: {_describe(e)}"), url=url
            )
        return FollowSuccess(url=url, document=document)

    async def follow(self, entry: Entry) -> Entry:
        """Follow one entry and return the annotated copy."""
        outcome = await self.resolve(entry)
        if isinstance(outcome, FollowFailure):
            log_document_follow_failed(
                field_name=self.field_name, url=outcome.url, error=outcome.error
            )
        return attach_outcome(entry, self.target_field, outcome)

    async def _follow_batch(self, batch: list[Entry]) -> list[Entry]:
        return list(await asyncio.gather(*(self.follow(entry) for entry in batch)))

    async def run(self, source: AsyncIterator[Entry]) -> AsyncGenerator[Entry, None]:
        """Follow every upstream entry, preserving order.

        Args:
            source: Upstream entries

        Yields:
            Entries annotated with a document or a `<target>_error` diagnostic
        """
        batch_size = self._context.batch_size
        async with aclosing(source):
            batch: list[Entry] = []
            async for entry in source:
                batch.append(entry)
                if len(batch) < batch_size:
                    continue
                for result in await self._follow_batch(batch):
                    yield result
                batch = []
            if batch:
                for result in await self._follow_batch(batch):
                    yield result
