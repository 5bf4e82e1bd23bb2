"""
Pagination and sorting primitives.

Page numbers are zero-based inside the application. Routers that expose
one-based page numbers convert before building a PageRequest.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, Iterable, Optional, Sequence, TypeVar

T = TypeVar("T")
U = TypeVar("U")


class Direction(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class SortOrder:
    property: str
    direction: Direction = Direction.ASC

    @property
    def is_ascending(self) -> bool:
        return self.direction == Direction.ASC


@dataclass(frozen=True)
class PageRequest:
    page: int = 0
    size: int = 20
    sort: tuple[SortOrder, ...] = ()

    def __post_init__(self):
        if self.page < 0:
            raise ValueError("page index must not be negative")
        if self.size < 1:
            raise ValueError("page size must be at least 1")

    @property
    def offset(self) -> int:
        return self.page * self.size

    @property
    def first_order(self) -> Optional[SortOrder]:
        """Only the first requested order is ever applied."""
        return self.sort[0] if self.sort else None


@dataclass
class Page(Generic[T]):
    content: list[T]
    number: int
    size: int
    total_elements: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_elements / self.size) if self.size else 0

    @property
    def number_of_elements(self) -> int:
        return len(self.content)

    @property
    def first(self) -> bool:
        return self.number == 0

    @property
    def last(self) -> bool:
        return self.number + 1 >= self.total_pages

    def map(self, fn: Callable[[T], U]) -> "Page[U]":
        return Page(
            content=[fn(item) for item in self.content],
            number=self.number,
            size=self.size,
            total_elements=self.total_elements,
        )


def parse_sort(values: Optional[Iterable[str]]) -> tuple[SortOrder, ...]:
    """
    Parse ``sort`` query values such as ``rating,asc`` or ``datePosted``.

    A value without a recognised direction sorts ascending. Empty values
    are skipped.
    """
    orders = []
    for value in values or ():
        parts = [p.strip() for p in value.split(",") if p.strip()]
        if not parts:
            continue
        direction = Direction.ASC
        if len(parts) > 1 and parts[-1].lower() in (Direction.ASC.value, Direction.DESC.value):
            direction = Direction(parts.pop().lower())
        orders.extend(SortOrder(prop, direction) for prop in parts)
    return tuple(orders)


def sort_items(
    items: Sequence[T],
    order: Optional[SortOrder],
    key_map: dict[str, Callable[[T], Any]],
    default: SortOrder,
) -> list[T]:
    """
    Return a new list ordered by ``order``.

    Unknown properties use ``default``'s key with the requested direction.
    Without an order, ``default`` is applied as-is. Items with equal keys
    keep their input order in both directions.
    """
    if order is None:
        order = default
    key = key_map.get(order.property, key_map[default.property])
    return sorted(items, key=key, reverse=not order.is_ascending)


def paginate(items: Sequence[T], page_request: PageRequest) -> Page[T]:
    """Slice an already ordered sequence, keeping the full total."""
    total = len(items)
    start = page_request.offset
    if start >= total:
        content: list[T] = []
    else:
        content = list(items[start:min(start + page_request.size, total)])
    return Page(
        content=content,
        number=page_request.page,
        size=page_request.size,
        total_elements=total,
    )
