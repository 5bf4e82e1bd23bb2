"""
Shared Pydantic schemas.

API payloads use camelCase field names; Python code uses snake_case.
"""

from typing import Annotated, Callable, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, StringConstraints
from pydantic.alias_generators import to_camel

from gymdir.domain.pagination import Page

T = TypeVar("T")
S = TypeVar("S")

NonBlankStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class ApiModel(BaseModel):
    """Base schema: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class PageResponse(ApiModel, Generic[T]):
    """One page of results plus the totals clients need for paging."""
    content: list[T]
    total_pages: int
    total_elements: int
    size: int
    number: int
    number_of_elements: int
    first: bool
    last: bool

    @classmethod
    def from_page(cls, page: Page[S], convert: Callable[[S], T]) -> "PageResponse[T]":
        return cls(
            content=[convert(item) for item in page.content],
            total_pages=page.total_pages,
            total_elements=page.total_elements,
            size=page.size,
            number=page.number,
            number_of_elements=page.number_of_elements,
            first=page.first,
            last=page.last,
        )


class ErrorResponse(BaseModel):
    """Body returned for every handled error."""
    status: int
    message: str


# Documented on every router; bodies come from gymdir.error_handlers
ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid input or rejected review"},
    401: {"model": ErrorResponse, "description": "Missing or invalid bearer token"},
    404: {"model": ErrorResponse, "description": "Gym, review or photo not found"},
    409: {"model": ErrorResponse, "description": "Gym changed by a concurrent request"},
    500: {"model": ErrorResponse, "description": "Unexpected server error"},
}
