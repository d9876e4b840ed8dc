"""Crawl result data models."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional

START_SENTINEL = "start"


@dataclass(frozen=True)
class CrawlResult:
    """Outcome of processing one dequeued URL.

    A failed URL is still recorded, with `status=0` and `crawl_error` set.
    """

    url: str
    title: str
    status: int
    depth: int
    found_on: str = START_SENTINEL
    retry_count: int = 0
    load_time: Optional[int] = None
    """Navigation wall-clock time in milliseconds, when the fetch succeeded"""
    crawl_error: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return self.status == 200

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ErrorRecord:
    """A URL whose navigation attempts were all exhausted."""

    url: str
    error: str
    retry_count: int

    def to_dict(self) -> dict:
        return asdict(self)
