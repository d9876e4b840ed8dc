import logging
import time
from typing import Callable, Optional
from urllib.parse import urlsplit

from sitecrawl.domain.crawl_options import CrawlOptions
from sitecrawl.domain.crawl_result import CrawlResult, ErrorRecord
from sitecrawl.domain.crawl_state import CrawlState
from sitecrawl.domain.frontier import FrontierEntry
from sitecrawl.domain.result_aggregator import CrawlSummary
from sitecrawl.exceptions import InvalidBaseUrlError, RetriesExhaustedError
from sitecrawl.services.crawl_policy import CrawlPolicy
from sitecrawl.services.link_extractor import LINK_EXTRACTION_TIMEOUT_MS, LinkExtractor
from sitecrawl.services.page_driver import PageDriver
from sitecrawl.services.retry_controller import RetryController
from sitecrawl.services.url_normalizer import normalize_url

logger = logging.getLogger(__name__)


class SiteCrawler:
    """Breadth-first, depth- and page-capped crawl of one site through a page driver.

    This class owns the crawl control-flow (dequeue, policy check, fetch with
    retry, record, extract links, enqueue, politeness delay). Traversal state
    lives in a fresh `CrawlState` per `crawl_site` call; the accessors report
    on the most recent crawl.

        crawler = SiteCrawler(driver, "https://example.com")
        pages = crawler.crawl_site(CrawlOptions(max_pages=20))
        summary = crawler.get_summary()
    """

    def __init__(
        self,
        driver: PageDriver,
        base_url: str,
        *,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
        link_timeout_ms: float = LINK_EXTRACTION_TIMEOUT_MS,
    ):
        normalized = normalize_url(base_url, base_url)
        if normalized is None:
            raise InvalidBaseUrlError(base_url)
        self.driver = driver
        self.base_url = normalized
        self.base_domain = urlsplit(normalized).hostname
        self._sleep = sleep
        self._clock = clock
        self.link_timeout_ms = link_timeout_ms
        self.state = CrawlState()

    def _politeness_delay(self, delay_ms: float) -> None:
        if delay_ms > 0:
            self._sleep(delay_ms / 1000)

    def _should_process(self, entry: FrontierEntry, options: CrawlOptions, policy: CrawlPolicy) -> bool:
        if self.state.is_visited(entry.url):
            logger.debug("Skipping (visited) %s", entry.url)
            return False
        if entry.depth > options.max_depth:
            logger.debug("Skipping (max depth reached) %s at depth %s", entry.url, entry.depth)
            return False
        return policy.is_allowed(entry.url)

    def _enqueue_links(self, entry: FrontierEntry, extractor: LinkExtractor) -> int:
        queued = 0
        for link_url in extractor.extract(self.driver, entry.url):
            if self.state.is_visited(link_url):
                continue
            if self.state.frontier.push(FrontierEntry(url=link_url, depth=entry.depth + 1, found_on=entry.url)):
                queued += 1
        return queued

    def _record_failure(self, entry: FrontierEntry, error: RetriesExhaustedError, options: CrawlOptions) -> None:
        cause = getattr(error.last_error, "original", error.last_error)
        self.state.aggregator.record(
            CrawlResult(
                url=entry.url,
                title="",
                status=0,
                depth=entry.depth,
                found_on=entry.found_on,
                retry_count=options.max_retries,
                crawl_error=str(cause) or type(cause).__name__,
            )
        )
        self.state.mark_visited(entry.url)

    def crawl_site(self, options: Optional[CrawlOptions] = None) -> list[CrawlResult]:
        """Crawl from the base URL and return the pages that answered 200.

        Returns results sorted by (depth, url). Failures stay available through
        `results` and `get_errors()`.
        """
        options = options or CrawlOptions()
        self.state = CrawlState()
        policy = CrawlPolicy.from_options(options, self.base_domain)
        retry_controller = RetryController.from_options(self.driver, options, sleep=self._sleep, clock=self._clock)
        extractor = LinkExtractor(policy, timeout_ms=self.link_timeout_ms, clock=self._clock)

        logger.info("Starting site crawl from %s", self.base_url)
        logger.info("Max pages: %s, max depth: %s, timeout: %sms", options.max_pages, options.max_depth, options.timeout_ms)

        self.state.seed(self.base_url)
        processed = 0
        while self.state.frontier and self.state.pages_recorded < options.max_pages:
            entry = self.state.frontier.pop()
            if not self._should_process(entry, options, policy):
                continue

            processed += 1
            logger.info("Crawling (%s/%s) depth %s: %s", processed, options.max_pages, entry.depth, entry.url)
            try:
                result = retry_controller.fetch(entry, self.state.aggregator)
            except RetriesExhaustedError as e:
                logger.error("Error crawling %s after retries: %s", entry.url, e)
                self._record_failure(entry, e, options)
            else:
                self.state.aggregator.record(result)
                self.state.mark_visited(entry.url)
                if not result.is_success:
                    logger.warning("Non-success status for %s: %s", entry.url, result.status)
                elif entry.depth < options.max_depth:
                    queued = self._enqueue_links(entry, extractor)
                    logger.debug("Queued %s new links from %s", queued, entry.url)

            self._politeness_delay(options.delay_between_requests)

        self.state.aggregator.sort()
        self._log_summary(options)
        return self.get_accessible_pages()

    def _log_summary(self, options: CrawlOptions) -> None:
        summary = self.get_summary()
        logger.info("Crawl complete: %s pages recorded", summary.total)
        logger.info(
            "Success rate: %.1f%%, average load time: %.0fms, total retries: %s",
            summary.performance.success_rate,
            summary.performance.average_load_time,
            summary.performance.total_retries,
        )
        errors = self.get_errors()
        if errors:
            logger.info("Errors encountered: %s", len(errors))
            for err in errors:
                logger.info("  - %s: %s (%s retries)", err.url, err.error, err.retry_count)
        for depth in range(options.max_depth + 1):
            count = summary.by_depth.get(depth, 0)
            if count:
                logger.info("Depth %s: %s pages", depth, count)

    @property
    def results(self) -> list[CrawlResult]:
        """Every recorded result of the last crawl, failures included."""
        return self.state.aggregator.results

    def get_accessible_pages(self) -> list[CrawlResult]:
        return self.state.aggregator.accessible_pages()

    def get_errors(self) -> list[ErrorRecord]:
        return self.state.aggregator.errors

    def get_summary(self) -> CrawlSummary:
        return self.state.aggregator.summary()
