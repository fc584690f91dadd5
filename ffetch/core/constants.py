"""Shared defaults for index pagination and document following."""

from __future__ import annotations

# Page size requested from the index endpoint
DEFAULT_CHUNK_SIZE = 255

# Documents followed concurrently per batch
DEFAULT_MAX_CONCURRENCY = 5

DEFAULT_TIMEOUT_SECONDS = 30.0

# Allowlist entry that matches every hostname
WILDCARD_HOST = "*"

# Query parameter names understood by the index endpoint
OFFSET_PARAM = "offset"
LIMIT_PARAM = "limit"
SHEET_PARAM = "sheet"

# Suffix of the sibling field that carries a document follow diagnostic
ERROR_FIELD_SUFFIX = "_error"
