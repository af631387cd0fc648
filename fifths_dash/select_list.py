"""Cyclic single-selection list with per-item scroll offsets."""

import logging
import sys
from typing import Sequence

from .exceptions import PreconditionError

logger = logging.getLogger(__name__)

# Upper bound for a detail view's scroll offset; scroll_down saturates here.
MAX_SCROLL_OFFSET = sys.maxsize


class SelectListState:
    """Menu items, their detail texts, the selection and scroll positions.

    ``items``, ``infos`` and ``scroll_offsets`` are index-aligned and always
    the same length. ``selected`` is None only before the first
    ``set_items`` call; after that it always indexes a live item.
    """

    def __init__(self) -> None:
        self.items: list[str] = []
        self.infos: list[str] = []
        self.selected: int | None = None
        self.scroll_offsets: list[int] = []

    def __len__(self) -> int:
        return len(self.items)

    def set_items(self, items: Sequence[str], infos: Sequence[str]) -> None:
        """Replace the dataset, select the first item and zero all offsets.

        Raises:
            PreconditionError: If ``items`` and ``infos`` differ in length.
                Existing state is left untouched.
        """
        if len(items) != len(infos):
            raise PreconditionError(
                f"items and infos must be the same length "
                f"(got {len(items)} items, {len(infos)} infos)"
            )
        self.items = list(items)
        self.infos = list(infos)
        self.scroll_offsets = [0] * len(self.items)
        # An empty dataset has nothing to select.
        self.selected = 0 if self.items else None
        logger.debug("loaded %d menu items", len(self.items))

    def select_next(self) -> None:
        if not self.items:
            return
        if self.selected is None:
            self.selected = 0
            return
        self.selected = (self.selected + 1) % len(self.items)

    def select_previous(self) -> None:
        if not self.items:
            return
        # None only happens before set_items; start at the top like select_next.
        if self.selected is None:
            self.selected = 0
            return
        self.selected = (self.selected - 1) % len(self.items)

    def scroll_up(self, index: int) -> None:
        self._check_index(index)
        self.scroll_offsets[index] = max(0, self.scroll_offsets[index] - 1)

    def scroll_down(self, index: int) -> None:
        self._check_index(index)
        self.scroll_offsets[index] = min(
            MAX_SCROLL_OFFSET, self.scroll_offsets[index] + 1)

    def selected_item(self) -> str | None:
        if self.selected is None:
            return None
        return self.items[self.selected]

    def selected_info(self) -> str | None:
        if self.selected is None:
            return None
        return self.infos[self.selected]

    def selected_offset(self) -> int:
        if self.selected is None:
            return 0
        return self.scroll_offsets[self.selected]

    def _check_index(self, index: int) -> None:
        # Negative indices are rejected too; list indexing would accept them.
        if not 0 <= index < len(self.scroll_offsets):
            raise PreconditionError(
                f"scroll index {index} out of range for {len(self.items)} items"
            )
