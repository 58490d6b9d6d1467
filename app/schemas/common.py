"""
Shared Schema Building Blocks

- CamelModel: Base model that speaks camelCase on the wire
- Page: Generic paginated response
- MAX_DB_INT: Upper bound for values stored in INTEGER columns
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")

# Largest value an INTEGER column holds on every supported backend
# (PostgreSQL int4). Ids and prices above it are rejected as invalid.
MAX_DB_INT = 2_147_483_647


class CamelModel(BaseModel):
    """
    Base for all API schemas.

    Python code uses snake_case attribute names, JSON uses camelCase:
        BookView.title_kana  <->  {"titleKana": ...}

    populate_by_name lets internal code build models with snake_case
    keyword arguments as well.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Page(CamelModel, Generic[T]):
    """
    One page of results plus pagination metadata.

    current_page is the page actually served. It is lower than the
    requested page when the request went past the last page, and 0
    (together with total_pages = 0) when nothing matched at all.
    """

    page_size: int = Field(..., ge=1, description="Number of items per page")
    current_page: int = Field(..., ge=0, description="Page actually served")
    total_count: int = Field(..., ge=0, description="Total matching items")
    total_pages: int = Field(..., ge=0, description="Total number of pages")
    content: list[T] = Field(default_factory=list, description="Items on this page")
