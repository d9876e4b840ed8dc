import logging
import time
from typing import Callable

from sitecrawl.services.crawl_policy import CrawlPolicy
from sitecrawl.services.page_driver import PageDriver
from sitecrawl.services.url_normalizer import normalize_url

logger = logging.getLogger(__name__)

LINK_EXTRACTION_TIMEOUT_MS = 10_000


class LinkExtractor:
    """Turns the anchors of the currently loaded page into frontier candidates.

    Extraction failure is never fatal: a timeout or DOM query error is logged
    as a warning and yields no links.
    """

    def __init__(
        self,
        policy: CrawlPolicy,
        timeout_ms: float = LINK_EXTRACTION_TIMEOUT_MS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.policy = policy
        self.timeout_ms = timeout_ms
        self._clock = clock

    def _query_anchors(self, driver: PageDriver, page_url: str) -> list[str]:
        started = self._clock()
        try:
            hrefs = driver.query_anchors(timeout_ms=self.timeout_ms)
        except Exception as e:
            logger.warning("Failed to extract links from %s: %s", page_url, e)
            return []
        elapsed_ms = (self._clock() - started) * 1000
        if elapsed_ms > self.timeout_ms:
            logger.warning("Link extraction timeout for %s (%.0fms > %sms)", page_url, elapsed_ms, self.timeout_ms)
            return []
        return list(hrefs or [])

    def extract(self, driver: PageDriver, page_url: str) -> list[str]:
        """Return normalized, policy-eligible, deduplicated URLs linked from `page_url`."""
        candidates: list[str] = []
        seen: set[str] = set()
        for href in self._query_anchors(driver, page_url):
            url = normalize_url(href, page_url)
            if url is None or url in seen:
                continue
            seen.add(url)
            if not self.policy.is_allowed(url):
                continue
            candidates.append(url)
        logger.debug("Extracted %s candidate links from %s", len(candidates), page_url)
        return candidates
