"""Index page envelope model."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PageResponse(BaseModel):
    """One offset/limit page returned by the index endpoint.

    `total` is the server-reported size of the whole index; only the value
    seen on the first page is used for pagination.
    """

    total: int = Field(..., ge=0)
    offset: int = Field(..., ge=0)
    limit: int = Field(..., ge=0)
    data: list[dict[str, Any]] = Field(...)

    model_config = ConfigDict(frozen=True, extra="ignore")
