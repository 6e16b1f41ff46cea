"""Shared schemas used across all entity schemas."""

from __future__ import annotations

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class UpstreamModel(BaseModel):
    """Base for payloads exchanged with the platform API.

    The platform speaks camelCase JSON; fields are declared in snake_case and
    accept either spelling. Unknown keys are ignored and numeric ids are
    coerced to strings.
    """

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "extra": "ignore",
        "coerce_numbers_to_str": True,
    }


class PaginationMeta(BaseModel):
    """Pagination metadata in list responses."""

    page: int
    limit: int
    total_items: int
    total_pages: int
    has_previous: bool = False
    has_next: bool = False

