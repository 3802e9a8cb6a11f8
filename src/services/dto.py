"""Data Transfer Objects for service layer.

Pagination containers used by the list operations of the ingredient and
recipe services (query + offset/limit, as in the ingredient and recipe
tables).
"""

from dataclasses import dataclass
from typing import Generic, List, TypeVar

from src.utils.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

T = TypeVar("T")


@dataclass
class PaginationParams:
    """Pagination parameters for list operations.

    Pass None instead of a PaginationParams to get every item.

    Attributes:
        page: Page number (1-indexed, default 1)
        per_page: Items per page (default 50, max 1000)

    Raises:
        ValueError: If page < 1, per_page < 1, or per_page > MAX_PAGE_SIZE
    """

    page: int = 1
    per_page: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError("page must be >= 1")
        if self.per_page < 1:
            raise ValueError("per_page must be >= 1")
        if self.per_page > MAX_PAGE_SIZE:
            raise ValueError(f"per_page must be <= {MAX_PAGE_SIZE}")

    def offset(self) -> int:
        """
        SQL OFFSET value.

        Examples:
            >>> PaginationParams(page=3, per_page=25).offset()
            50
        """
        return (self.page - 1) * self.per_page


@dataclass
class PaginatedResult(Generic[T]):
    """Generic paginated result container.

    Attributes:
        items: Items on this page
        total: Total number of matching items
        page: Current page number (1-indexed)
        per_page: Items per page
    """

    items: List[T]
    total: int
    page: int
    per_page: int

    @property
    def pages(self) -> int:
        """Total number of pages (minimum 1, even for empty results)."""
        if self.total == 0:
            return 1
        return (self.total + self.per_page - 1) // self.per_page

    @property
    def has_next(self) -> bool:
        return self.page < self.pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1
