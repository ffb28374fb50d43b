"""Pagination plan of an export.

Pages are requested from the highest offset down to 0 and grouped into
blocks aligned to ``block_size`` boundaries; each block becomes one batch.
"""

import math
from typing import Iterator

PAGE_SIZE = 100
BLOCK_SIZE = 1000


class OffsetPlanner:
    """Derives the descending page offsets of an export, one block at a time."""

    def __init__(self, page_size: int = PAGE_SIZE, block_size: int = BLOCK_SIZE, exact_pages: bool = False) -> None:
        if page_size <= 0 or block_size <= 0:
            raise ValueError(f"Page and block size must be positive, got {page_size} and {block_size}.")
        self.page_size = page_size
        self.block_size = block_size
        self.exact_pages = exact_pages

    def get_start_offset(self, total: int) -> int:
        """Return the first (highest) page offset for ``total`` items.

        ``ceil(total / page_size) * page_size`` lies at or past the last item,
        so its page comes back empty. With ``exact_pages`` the plan starts one
        page lower instead, never below 0.

        Args:
            total (int): Item count reported by the store.

        Returns:
            int: A non-negative multiple of the page size.

        Raises:
            ValueError: If ``total`` is negative.
        """
        if total < 0:
            raise ValueError(f"Total item count must not be negative: {total}")
        start = math.ceil(total / self.page_size) * self.page_size
        if self.exact_pages:
            start = max(0, start - self.page_size)
        return start

    def get_thousand_floor(self, offset: int) -> int:
        """Return the lowest offset that still belongs to the block starting at ``offset``.

        This is the largest block boundary strictly below ``offset``, clamped
        to 0. A block starting exactly on a boundary therefore reaches down to
        the previous boundary, e.g. 1000 → 0, 1100 → 1000.
        """
        return max(0, (math.ceil(offset / self.block_size) - 1) * self.block_size)

    def iter_blocks(self, start_offset: int) -> Iterator[list[int]]:
        """Yield the page offsets of each block, highest block first.

        Offsets inside a block descend by the page size down to the block's
        floor inclusive. The plan ends once the offset drops below 0, so
        offset 0 is always emitted exactly once, in the last block.

        Args:
            start_offset (int): Highest page offset, see get_start_offset().

        Yields:
            list[int]: The offsets of one block.
        """
        offset = start_offset
        while offset >= 0:
            floor = self.get_thousand_floor(offset)
            block: list[int] = []
            while offset >= floor:
                block.append(offset)
                offset -= self.page_size
            yield block

    def plan(self, total: int) -> list[list[int]]:
        """Return the full block plan for ``total`` items."""
        return list(self.iter_blocks(self.get_start_offset(total)))
