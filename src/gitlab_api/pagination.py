"""Page selection for listing queries."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Pagination:
    """A 1-based page number and a page size (``per_page``).

    Sizes above GitLab's maximum are sent as-is; the server clamps them.
    """

    page_number: int = 1
    page_size: int = 20

    def __post_init__(self) -> None:
        if not isinstance(self.page_number, int) or self.page_number < 1:
            msg = f"page_number must be a positive integer, got {self.page_number!r}"
            raise ValueError(msg)
        if not isinstance(self.page_size, int) or self.page_size < 1:
            msg = f"page_size must be a positive integer, got {self.page_size!r}"
            raise ValueError(msg)

    @classmethod
    def of(cls, page_number: int, page_size: int) -> Pagination:
        return cls(page_number=page_number, page_size=page_size)
