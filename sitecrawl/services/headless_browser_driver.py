from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from sitecrawl.domain.navigation import NavigationResponse, WaitStrategy
from sitecrawl.exceptions import DriverUnavailableError, NavigationError

logger = logging.getLogger(__name__)

_ANCHOR_HREFS_JS = """
anchors => anchors
    .map(anchor => anchor.getAttribute('href'))
    .filter(href => href !== null && href.trim() !== '')
"""


@dataclass(frozen=True)
class PlaywrightDriverOptions:
    headless: bool = True
    browser_type: str = "chromium"  # chromium | firefox | webkit


class PlaywrightPageDriver:
    """Page driver backed by a single Playwright browser page.

    The browser is launched once when the driver is entered and the same page
    is reused for every navigation:

        with PlaywrightPageDriver(user_agent="SiteCrawl/0.1") as driver:
            SiteCrawler(driver, "https://example.com").crawl_site()

    Notes:
    - Uses the sync API, so it must be entered and used from one thread.
    - Playwright is imported lazily so http-only installs still work.
    """

    def __init__(self, *, user_agent: str, options: Optional[PlaywrightDriverOptions] = None):
        self._user_agent = user_agent
        self._options = options or PlaywrightDriverOptions()
        self._playwright = None
        self._browser = None
        self._page = None
        self._error_types: tuple[type[BaseException], ...] = ()

    def start(self) -> "PlaywrightPageDriver":
        if self._page is not None:
            return self
        try:
            from playwright.sync_api import Error as PlaywrightError  # type: ignore
            from playwright.sync_api import sync_playwright  # type: ignore
        except Exception as e:
            raise DriverUnavailableError(
                "Headless crawl requested but Playwright is not installed. "
                "Install 'playwright' and run 'python -m playwright install chromium'."
            ) from e

        self._error_types = (PlaywrightError,)
        logger.info("Launching %s browser (headless=%s)", self._options.browser_type, self._options.headless)
        self._playwright = sync_playwright().start()
        try:
            launcher = getattr(self._playwright, self._options.browser_type)
            self._browser = launcher.launch(headless=self._options.headless)
            context = self._browser.new_context(user_agent=self._user_agent)
            self._page = context.new_page()
        except Exception as e:
            self.close()
            raise DriverUnavailableError(f"Could not launch {self._options.browser_type}: {e}") from e
        return self

    def close(self) -> None:
        self._page = None
        if self._browser is not None:
            try:
                self._browser.close()
            except Exception:
                logger.debug("Error closing browser", exc_info=True)
            self._browser = None
        if self._playwright is not None:
            try:
                self._playwright.stop()
            except Exception:
                logger.debug("Error stopping Playwright", exc_info=True)
            self._playwright = None

    def __enter__(self) -> "PlaywrightPageDriver":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _require_page(self):
        if self._page is None:
            raise DriverUnavailableError("Playwright driver used before start()")
        return self._page

    def navigate(self, url: str, wait_strategy: WaitStrategy, timeout_ms: float) -> NavigationResponse:
        page = self._require_page()
        try:
            resp = page.goto(url, wait_until=WaitStrategy(wait_strategy).value, timeout=timeout_ms)
        except self._error_types as e:
            raise NavigationError(url, e) from e
        status = 0
        if resp is not None:
            status = int(resp.status)
        return NavigationResponse(status=status, final_url=page.url)

    def get_title(self) -> str:
        return self._require_page().title()

    def query_anchors(self, timeout_ms: Optional[float] = None) -> list[str]:
        page = self._require_page()
        if timeout_ms is not None:
            page.wait_for_load_state("domcontentloaded", timeout=timeout_ms)
        # timeout_ms bounds only the load-state wait; the DOM query itself runs to completion.
        return list(page.eval_on_selector_all("a[href]", _ANCHOR_HREFS_JS))
