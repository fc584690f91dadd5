"""Pipeline runtime: context, pagination, operators and document following.

Architecture:
    - context.py: FFetchContext, the immutable configuration of a pipeline
    - pagination.py: offset/limit paginator producing the entry stream
    - operators.py: lazy map/filter/limit/skip/slice stages
    - follow.py: bounded-concurrency document follower
    - telemetry.py: structured logging
"""

from __future__ import annotations

from .context import ErrorHook, FFetchContext
from .follow import (
    DocumentFollower,
    FollowFailure,
    FollowOutcome,
    FollowSuccess,
    attach_outcome,
    is_host_allowed,
    resolve_document_url,
)
from .operators import filter_items, limit_items, map_items, skip_items, slice_items
from .pagination import Cursor, build_page_url, fetch_page, paginate

__all__ = [
    "FFetchContext",
    "ErrorHook",
    "Cursor",
    "build_page_url",
    "fetch_page",
    "paginate",
    "map_items",
    "filter_items",
    "limit_items",
    "skip_items",
    "slice_items",
    "DocumentFollower",
    "FollowSuccess",
    "FollowFailure",
    "FollowOutcome",
    "attach_outcome",
    "is_host_allowed",
    "resolve_document_url",
]
