"""Shared pydantic base classes for the camelCase JSON contract."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base schema: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PageResponse(CamelModel, Generic[T]):
    """One page of results: ``{items, total, page, pageSize}``."""

    items: list[T]
    total: int
    page: int
    page_size: int
