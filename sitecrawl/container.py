"""Dependency injection container for the application."""
from dependency_injector import containers, providers
import requests

from sitecrawl.domain.crawl_options import CrawlOptions, UNIVERSAL_EXCLUDE_PATTERNS
from sitecrawl.services.crawl_options_parser import CrawlOptionsParser
from sitecrawl.services.driver_factory import DriverFactory
from sitecrawl.services.headless_browser_driver import PlaywrightDriverOptions, PlaywrightPageDriver
from sitecrawl.services.http_page_driver import HttpPageDriver
from sitecrawl.services.page_list_cache import PageListCache
from sitecrawl.services.site_crawler import SiteCrawler
from sitecrawl import config as env


# Environment variables used by the container (read via `sitecrawl.config` helpers).
#
# TARGET_SITE_URL (str, default: "https://example.com")
#   Seed URL of the crawl; its hostname is the default allowed domain.
#
# USER_AGENT (str, default: "SiteCrawl/0.1")
#   User-Agent for both the HTTP and the headless browser driver.
#
# FETCH_MODE (str, default: "headless_chromium")
#   "headless_chromium" renders pages with Playwright; "http" fetches raw HTML.
#
# HEADLESS (bool, default: true)
#   Launch the browser without a window.
#
# MAX_PAGES, MAX_DEPTH (int, defaults: 50, 4)
#   Page-count and link-depth ceilings.
#
# DELAY_BETWEEN_REQUESTS, RETRY_DELAY, PAGE_TIMEOUT (int ms, defaults: 300, 1500, 20000)
#   Politeness delay, fixed retry backoff and base navigation timeout.
#
# MAX_RETRIES (int, default: 3)
#   Retries after the first attempt; total attempts are MAX_RETRIES + 1.
#
# PAGE_CACHE_DIR (str, default: "./page-cache")
# PAGE_CACHE_MAX_AGE_MINUTES (int, default: 60)
#   Location and validity window of the cached page list.
ENV = {
    "TARGET_SITE_URL": env.TARGET_SITE_URL,
    "USER_AGENT": env.USER_AGENT,
    "FETCH_MODE": env.FETCH_MODE,
    "HEADLESS": env.get_bool_env("HEADLESS", True),
    "MAX_PAGES": env.get_int_env("MAX_PAGES", 50),
    "MAX_DEPTH": env.get_int_env("MAX_DEPTH", 4),
    "DELAY_BETWEEN_REQUESTS": env.get_float_env("DELAY_BETWEEN_REQUESTS", 300),
    "MAX_RETRIES": env.get_int_env("MAX_RETRIES", 3),
    "RETRY_DELAY": env.get_float_env("RETRY_DELAY", 1500),
    "PAGE_TIMEOUT": env.get_float_env("PAGE_TIMEOUT", 20000),
    "PAGE_CACHE_DIR": env.page_cache_dir(),
    "PAGE_CACHE_MAX_AGE_MINUTES": env.page_cache_max_age_minutes(),
}


class Container(containers.DeclarativeContainer):
    """Dependency injection container for SiteCrawl."""

    # Configuration
    config = providers.Configuration(default=ENV)

    # Page drivers - Factory so each crawl gets its own browser/page
    http_driver = providers.Factory(
        HttpPageDriver,
        user_agent=config.USER_AGENT.as_(str),
        http_client=providers.Object(requests.get),
    )

    headless_driver = providers.Factory(
        PlaywrightPageDriver,
        user_agent=config.USER_AGENT.as_(str),
        options=providers.Factory(
            PlaywrightDriverOptions,
            headless=config.HEADLESS.as_(bool),
        ),
    )

    driver_factory = providers.Factory(
        DriverFactory,
        http_driver=http_driver,
        headless_driver=headless_driver,
    )

    crawl_options = providers.Factory(
        CrawlOptions,
        max_pages=config.MAX_PAGES.as_int(),
        max_depth=config.MAX_DEPTH.as_int(),
        delay_between_requests=config.DELAY_BETWEEN_REQUESTS.as_float(),
        max_retries=config.MAX_RETRIES.as_int(),
        retry_delay=config.RETRY_DELAY.as_float(),
        timeout_ms=config.PAGE_TIMEOUT.as_float(),
        exclude_patterns=providers.Object(UNIVERSAL_EXCLUDE_PATTERNS),
    )

    crawl_options_parser = providers.Singleton(
        CrawlOptionsParser
    )

    page_list_cache = providers.Singleton(
        PageListCache,
        cache_dir=config.PAGE_CACHE_DIR.as_(str),
    )

    # Driver and base URL are supplied per crawl: site_crawler(driver=..., base_url=...)
    site_crawler = providers.Factory(
        SiteCrawler
    )
