"""Protocol (interface) for the page driver the crawler navigates with."""
from __future__ import annotations

from typing import Optional, Protocol

from sitecrawl.domain.navigation import NavigationResponse, WaitStrategy


class PageDriver(Protocol):
    """Navigate to URLs and inspect the currently loaded page.

    Implementations must surface failures as raised errors, never as None:
    navigation failures as `NavigationError`, an unusable driver as
    `DriverUnavailableError`.
    """

    def navigate(self, url: str, wait_strategy: WaitStrategy, timeout_ms: float) -> NavigationResponse: ...

    def get_title(self) -> str: ...

    def query_anchors(self, timeout_ms: Optional[float] = None) -> list[str]: ...
