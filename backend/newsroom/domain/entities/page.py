"""Offset pagination result shared by public and admin listings."""

import math
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


def page_offset(page: int, per_page: int) -> int:
    return (max(1, page) - 1) * per_page


@dataclass
class Page(Generic[T]):
    items: list[T]
    total: int
    page: int
    per_page: int

    @property
    def total_pages(self) -> int:
        return max(1, math.ceil(self.total / self.per_page)) if self.per_page else 1

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages
