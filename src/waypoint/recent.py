"""Most-recently-used stack of project labels.

Only a ranking hint: the persisted form is an opaque string kept in session
state, and anything unreadable simply starts a fresh history.
"""

from __future__ import annotations

import json
import logging
from collections import OrderedDict

logger = logging.getLogger(__name__)

DEFAULT_RECENT_LIMIT = 10


class RecentStack:
    """Bounded ordered set of labels; the last key is the most recent."""

    def __init__(self, limit: int = DEFAULT_RECENT_LIMIT) -> None:
        if limit < 1:
            raise ValueError(f"limit must be positive, got {limit}")
        self.limit = limit
        self._items: OrderedDict[str, None] = OrderedDict()

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, label: object) -> bool:
        return label in self._items

    def push(self, label: str) -> None:
        """Move ``label`` to the most recent position, evicting the oldest past the limit."""
        if label in self._items:
            self._items.move_to_end(label)
        else:
            self._items[label] = None
        while len(self._items) > self.limit:
            evicted, _ = self._items.popitem(last=False)
            logger.debug("Evicted %r from recent stack", evicted)

    def labels(self) -> list[str]:
        """Labels ordered most recent first."""
        return list(reversed(self._items))

    def order_of(self, label: str) -> int | None:
        """Recency rank of ``label`` (0 = most recent), or None when absent."""
        if label not in self._items:
            return None
        for index, item in enumerate(reversed(self._items)):
            if item == label:
                return index
        return None

    # ── Serialization ─────────────────────────────────────────

    def to_string(self) -> str:
        if not self._items:
            return ""
        return json.dumps(list(self._items), ensure_ascii=False)

    def from_string(self, text: str | None) -> None:
        """Replace the history with the serialized ``text``.

        Malformed input leaves an empty history instead of raising.
        """
        self._items.clear()
        if not text:
            return
        try:
            data = json.loads(text)
        except (json.JSONDecodeError, TypeError) as e:
            logger.warning("Ignoring unreadable recent history: %s", e)
            return
        if not isinstance(data, list):
            logger.warning("Ignoring recent history of type %s", type(data).__name__)
            return
        for label in data:
            if isinstance(label, str):
                self.push(label)

    @classmethod
    def parse(cls, text: str | None, limit: int = DEFAULT_RECENT_LIMIT) -> RecentStack:
        stack = cls(limit)
        stack.from_string(text)
        return stack
