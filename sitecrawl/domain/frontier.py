from collections import deque
from typing import NamedTuple, Optional

from sitecrawl.domain.crawl_result import START_SENTINEL


class FrontierEntry(NamedTuple):
    """A discovered URL waiting to be crawled."""
    url: str
    depth: int
    found_on: str = START_SENTINEL


class Frontier:
    """FIFO queue of discovered-but-unprocessed URLs.

    Dequeuing in insertion order gives breadth-first traversal: every entry at
    depth d is enqueued before any entry at depth d + 1. A URL is held at most
    once while it waits in the queue.
    """

    def __init__(self):
        self._queue: "deque[FrontierEntry]" = deque()
        self._queued: set[str] = set()

    def push(self, entry: FrontierEntry) -> bool:
        """Enqueue `entry`; returns False if its URL is already waiting."""
        if entry.url in self._queued:
            return False
        self._queue.append(entry)
        self._queued.add(entry.url)
        return True

    def pop(self) -> Optional[FrontierEntry]:
        if not self._queue:
            return None
        entry = self._queue.popleft()
        self._queued.discard(entry.url)
        return entry

    def is_queued(self, url: str) -> bool:
        return url in self._queued

    def __len__(self) -> int:
        return len(self._queue)

    def __bool__(self) -> bool:
        return bool(self._queue)
