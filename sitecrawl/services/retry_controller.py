import logging
import time
from typing import Callable, Optional

from sitecrawl.domain.crawl_options import CrawlOptions
from sitecrawl.domain.crawl_result import CrawlResult, ErrorRecord
from sitecrawl.domain.frontier import FrontierEntry
from sitecrawl.domain.navigation import WaitStrategy
from sitecrawl.domain.result_aggregator import ResultAggregator
from sitecrawl.exceptions import NavigationError, RetriesExhaustedError
from sitecrawl.services.page_driver import PageDriver

logger = logging.getLogger(__name__)

TIMEOUT_STEP = 0.3
TIMEOUT_CAP = 2.5

# Indexed by attempt number. Attempts past the end wrap back to the first
# strategy instead of holding the last one; callers rely on this ordering.
WAIT_STRATEGIES = (
    WaitStrategy.DOM_CONTENT_LOADED,
    WaitStrategy.LOAD,
    WaitStrategy.NETWORK_IDLE,
)


def adaptive_timeout(base_timeout_ms: float, attempt: int) -> float:
    """Timeout for `attempt`: grows 30% per retry, capped at 2.5x the base."""
    return min(base_timeout_ms * (1 + TIMEOUT_STEP * attempt), base_timeout_ms * TIMEOUT_CAP)


def wait_strategy_for(attempt: int) -> WaitStrategy:
    if 0 <= attempt < len(WAIT_STRATEGIES):
        return WAIT_STRATEGIES[attempt]
    return WaitStrategy.DOM_CONTENT_LOADED


class RetryController:
    """Navigates to one URL with escalating wait strategy and adaptive timeout.

    Only `NavigationError` is retried. A non-2xx status is a successful fetch
    at this level. Any other exception propagates untouched.
    """

    def __init__(
        self,
        driver: PageDriver,
        *,
        max_retries: int = 2,
        retry_delay_ms: float = 2000,
        timeout_ms: float = 20000,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.driver = driver
        if max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        self.max_retries = int(max_retries)
        self.retry_delay_ms = retry_delay_ms
        self.timeout_ms = timeout_ms
        self._sleep = sleep
        self._clock = clock

    @classmethod
    def from_options(cls, driver: PageDriver, options: CrawlOptions, **kwargs) -> "RetryController":
        return cls(
            driver,
            max_retries=options.max_retries,
            retry_delay_ms=options.retry_delay,
            timeout_ms=options.timeout_ms,
            **kwargs,
        )

    def _read_title(self, url: str) -> str:
        try:
            return self.driver.get_title() or ""
        except Exception as e:
            logger.debug("Could not read title for %s: %s", url, e)
            return ""

    def fetch(self, entry: FrontierEntry, aggregator: Optional[ResultAggregator] = None) -> CrawlResult:
        """Fetch `entry.url`, returning a `CrawlResult` on the first successful attempt.

        After the final failed attempt an `ErrorRecord` is appended to
        `aggregator` and `RetriesExhaustedError` is raised.
        """
        url = entry.url

        for attempt in range(self.max_retries + 1):
            if attempt > 0:
                logger.info("Retry %s/%s for %s", attempt, self.max_retries, url)
            started = self._clock()
            try:
                response = self.driver.navigate(
                    url,
                    wait_strategy_for(attempt),
                    adaptive_timeout(self.timeout_ms, attempt),
                )
            except NavigationError as e:
                if attempt < self.max_retries:
                    logger.warning("Attempt %s failed for %s: %s", attempt + 1, url, e)
                    if self.retry_delay_ms > 0:
                        self._sleep(self.retry_delay_ms / 1000)
                    continue
                logger.error("All attempts failed for %s: %s", url, e)
                if aggregator is not None:
                    aggregator.record_error(ErrorRecord(url=url, error=str(e.original), retry_count=attempt))
                raise RetriesExhaustedError(url, attempt + 1, e) from e

            load_time = int(round((self._clock() - started) * 1000))
            title = self._read_title(url)
            if attempt > 0:
                logger.info("Success after %s retries (%sms) for %s", attempt, load_time, url)
            return CrawlResult(
                url=url,
                title=title,
                status=response.status,
                depth=entry.depth,
                found_on=entry.found_on,
                retry_count=attempt,
                load_time=load_time,
            )
