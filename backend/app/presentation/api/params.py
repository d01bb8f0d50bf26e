"""Reusable query-string dependencies for list endpoints."""

from collections.abc import Callable
from typing import TypeVar

from fastapi import Query

from app.application.schemas.common import PageResponse
from app.domain.entities import Page, PageRequest

T = TypeVar("T")


def page_request(
    page: int = Query(1, description="1-based page number"),
    page_size: int = Query(50, alias="pageSize", description="Clamped to [1, 500]"),
) -> PageRequest:
    return PageRequest(page=page, page_size=page_size)


def to_page_response(page: Page, convert: Callable[[object], T]) -> PageResponse[T]:
    return PageResponse(
        items=[convert(item) for item in page.items],
        total=page.total,
        page=page.page,
        page_size=page.page_size,
    )
