class VisitedTracker:
    """
    Tracks which normalized URLs have been processed during a crawl.

    The set only grows: a URL is marked once, either after a successful fetch
    or after its retries are exhausted, and is never evicted. Eviction would
    let a page be fetched twice.
    """

    def __init__(self):
        self._visited: set[str] = set()

    def mark(self, url: str) -> None:
        """Mark a URL as visited."""
        self._visited.add(url)

    def is_visited(self, url: str) -> bool:
        """Check if a URL has been visited."""
        return url in self._visited

    def __contains__(self, url: str) -> bool:
        return url in self._visited

    def __len__(self) -> int:
        return len(self._visited)
