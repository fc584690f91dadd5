"""Structured logging for pagination and document following.

Events are logged with a short snake_case message and the details in
`extra`, so log handlers can route or index them without parsing text.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def log_page_fetched(
    *,
    url: str,
    offset: int,
    entries: int,
    total: int | None,
) -> None:
    """Log a successfully decoded index page.

    Args:
        url: Page URL including pagination parameters
        offset: Offset requested
        entries: Number of entries on the page
        total: Server-reported total (as recorded from the first page)
    """
    logger.debug(
        "page_fetched",
        extra={
            "url": url,
            "offset": offset,
            "entries": entries,
            "total": total,
        },
    )


def log_pagination_stopped(
    *,
    url: str,
    offset: int,
    reason: str,
    error: BaseException | None = None,
) -> None:
    """Log the end of a paginated stream that did not reach `total`.

    A 404 is the normal end-of-stream signal and logs at DEBUG; any other
    reason means entries may be missing and logs at WARNING.

    Args:
        url: Page URL that ended pagination
        offset: Offset of that page
        reason: Short reason ("not_found", "error")
        error: Error that ended pagination, if any
    """
    level = logging.DEBUG if error is None else logging.WARNING
    logger.log(
        level,
        "pagination_stopped",
        extra={
            "url": url,
            "offset": offset,
            "reason": reason,
            "error_type": type(error).__name__ if error else None,
            "error_message": str(error) if error else None,
        },
    )


def log_document_follow_failed(
    *,
    field_name: str,
    url: str | None,
    error: BaseException,
) -> None:
    """Log a per-entry document follow failure.

    Args:
        field_name: Field holding the document reference
        url: Resolved document URL (None if resolution failed)
        error: Error annotated on the entry
    """
    logger.debug(
        "document_follow_failed",
        extra={
            "field_name": field_name,
            "url": url,
            "error_type": type(error).__name__,
            "error_message": str(error),
        },
    )


def log_stage_failed(*, stage: str, error: BaseException) -> None:
    """Log a user callback failure that ended a map/filter stage.

    Args:
        stage: Stage name ("map", "filter")
        error: Exception raised by the callback
    """
    logger.warning(
        "stage_failed",
        extra={
            "stage": stage,
            "error_type": type(error).__name__,
            "error_message": str(error),
        },
    )
