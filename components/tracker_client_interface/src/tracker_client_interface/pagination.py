"""Paging metadata derived from the counters a tracker reports on a search page."""

from __future__ import annotations

import math
from dataclasses import dataclass, field


@dataclass
class Pagination:
    """Derived paging metadata.

    The tracker only reports ``total``, ``start_at`` and ``max_results``.
    ``page``, ``page_count`` and ``pages`` stay at their zero values until
    ``compute()`` is called.
    """

    total: int
    start_at: int
    max_results: int
    page: int = 0
    page_count: int = 0
    pages: list[int] = field(default_factory=list)

    def compute(self) -> None:
        """Fill page, page_count and pages in place.

        Raises:
            ValueError: If max_results is not positive.
        """
        if self.max_results <= 0:
            raise ValueError(f"max_results must be positive, got {self.max_results}")

        self.page_count = math.ceil(self.total / self.max_results)
        self.page = math.ceil(self.start_at / self.max_results)
        #zero-based page indices
        self.pages = list(range(self.page_count))
