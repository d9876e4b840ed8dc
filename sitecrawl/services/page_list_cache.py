"""JSON cache of a finished crawl, reused by later analysis passes."""
from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from typing import Callable, Iterable, Optional

from sitecrawl.domain.crawl_options import CrawlOptions
from sitecrawl.domain.crawl_result import CrawlResult
from sitecrawl.utils.datetime_utils import age_minutes, utc_now_naive

logger = logging.getLogger(__name__)

CACHE_FILE_NAME = "page-list.json"


@dataclass(frozen=True)
class CachedPage:
    url: str
    title: str
    status: int
    depth: int
    found_on: str


@dataclass(frozen=True)
class CachedPageList:
    site_url: str
    timestamp: str
    crawl_options: dict
    pages: list[CachedPage] = field(default_factory=list)
    summary: dict = field(default_factory=dict)

    @classmethod
    def from_crawl(
        cls,
        site_url: str,
        pages: Iterable[CrawlResult],
        options: CrawlOptions,
        crawl_duration_ms: int,
        timestamp: Optional[str] = None,
    ) -> "CachedPageList":
        cached_pages = [
            CachedPage(url=p.url, title=p.title, status=p.status, depth=p.depth, found_on=p.found_on)
            for p in pages
        ]
        pages_by_depth: dict[int, int] = {}
        for p in cached_pages:
            pages_by_depth[p.depth] = pages_by_depth.get(p.depth, 0) + 1
        return cls(
            site_url=site_url,
            timestamp=timestamp or utc_now_naive().isoformat() + "Z",
            crawl_options={
                "max_pages": options.max_pages,
                "max_depth": options.max_depth,
                "delay_between_requests": options.delay_between_requests,
            },
            pages=cached_pages,
            summary={
                "total_pages": len(cached_pages),
                "pages_by_depth": pages_by_depth,
                "crawl_duration": int(crawl_duration_ms),
            },
        )

    @classmethod
    def from_dict(cls, data: dict) -> "CachedPageList":
        summary = dict(data.get("summary") or {})
        # JSON object keys are strings
        summary["pages_by_depth"] = {int(k): v for k, v in (summary.get("pages_by_depth") or {}).items()}
        return cls(
            site_url=data["site_url"],
            timestamp=data["timestamp"],
            crawl_options=dict(data.get("crawl_options") or {}),
            pages=[CachedPage(**p) for p in data.get("pages") or []],
            summary=summary,
        )

    def to_dict(self) -> dict:
        return asdict(self)


class PageListCache:
    """Filesystem IO for the cached page list.

    Responsibility: read, write, age-check and clear one JSON file. It does NOT
    crawl; a missing or corrupt file simply reads as "no cache".
    """

    def __init__(self, cache_dir: str, now: Callable = utc_now_naive):
        self.cache_dir = cache_dir
        self.cache_file = os.path.join(cache_dir, CACHE_FILE_NAME)
        self._now = now

    def save(self, page_list: CachedPageList) -> None:
        os.makedirs(self.cache_dir, exist_ok=True)
        with open(self.cache_file, "w", encoding="utf-8") as f:
            json.dump(page_list.to_dict(), f, indent=2)
        logger.info("Page list cached: %s pages saved to %s", len(page_list.pages), self.cache_file)

    def load(self) -> Optional[CachedPageList]:
        if not os.path.isfile(self.cache_file):
            logger.info("No cached page list found")
            return None
        try:
            with open(self.cache_file, "r", encoding="utf-8") as f:
                cached = CachedPageList.from_dict(json.load(f))
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning("Failed to load cached page list: %s", e)
            return None
        logger.info("Loaded cached page list: %s pages (created %s)", len(cached.pages), cached.timestamp)
        return cached

    def _age_minutes(self, cached: CachedPageList) -> Optional[float]:
        return age_minutes(cached.timestamp, now=self._now())

    def is_valid(self, max_age_minutes: int = 60, site_url: Optional[str] = None) -> bool:
        """True if a cached list exists, is younger than `max_age_minutes` and,
        when `site_url` is given, was crawled from that URL."""
        cached = self.load()
        if cached is None:
            return False
        if site_url is not None and cached.site_url != site_url:
            logger.info("Cached page list is for %s, not %s", cached.site_url, site_url)
            return False
        age = self._age_minutes(cached)
        if age is None:
            logger.warning("Cached page list has an unreadable timestamp: %r", cached.timestamp)
            return False
        if age >= max_age_minutes:
            logger.info("Cache expired (%s minutes old, max %s minutes)", round(age), max_age_minutes)
            return False
        return True

    def clear(self) -> None:
        if os.path.isfile(self.cache_file):
            os.remove(self.cache_file)
            logger.info("Page list cache cleared")

    def info(self) -> str:
        if not os.path.isfile(self.cache_file):
            return "No cache found"
        cached = self.load()
        if cached is None:
            return "Cache corrupted"
        age = self._age_minutes(cached)
        age_text = f"{round(age)} minutes old" if age is not None else "unknown age"
        return f"{len(cached.pages)} pages, {age_text}"
