import argparse
import dataclasses
import logging
import time
from typing import Optional

from sitecrawl import config
from sitecrawl.container import Container
from sitecrawl.services.driver_factory import FETCH_MODES
from sitecrawl.services.page_list_cache import CachedPageList
from sitecrawl.services.url_normalizer import normalize_url

logger = logging.getLogger("sitecrawl.run")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Discover the pages of a site and cache the page list.")
    parser.add_argument("--url", help="Seed URL (default: TARGET_SITE_URL)")
    parser.add_argument("--config", help="YAML file with crawl options")
    parser.add_argument("--max-pages", type=int, help="Page-count ceiling (default: MAX_PAGES)")
    parser.add_argument("--max-depth", type=int, help="Link-depth ceiling (default: MAX_DEPTH)")
    parser.add_argument("--fetch-mode", choices=FETCH_MODES, help="Page driver (default: FETCH_MODE)")
    parser.add_argument("--force", action="store_true", help="Crawl even when a valid cached page list exists")
    return parser.parse_args(argv)


def _build_options(container: Container, args: argparse.Namespace):
    if args.config:
        parser = container.crawl_options_parser()
        data = parser.load_yaml_dict(args.config)
        if data is None:
            raise ValueError(f"Crawl options file not found or invalid: {args.config}")
        options = parser.parse(data)
    else:
        options = container.crawl_options()

    overrides = {}
    if args.max_pages is not None:
        overrides["max_pages"] = args.max_pages
    if args.max_depth is not None:
        overrides["max_depth"] = args.max_depth
    return dataclasses.replace(options, **overrides) if overrides else options


def main(container: Optional[Container] = None, argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=config.log_level(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    container = container or Container()
    cache = container.page_list_cache()

    target_url = args.url or container.config.TARGET_SITE_URL()
    site_url = normalize_url(target_url, target_url) or target_url
    if not args.force and cache.is_valid(container.config.PAGE_CACHE_MAX_AGE_MINUTES(), site_url=site_url):
        logger.info("Valid page cache found for %s, skipping crawl (%s)", site_url, cache.info())
        return 0

    fetch_mode = args.fetch_mode or container.config.FETCH_MODE()
    options = _build_options(container, args)
    driver = container.driver_factory().get(fetch_mode)

    started = time.monotonic()
    with driver:
        crawler = container.site_crawler(driver=driver, base_url=target_url)
        pages = crawler.crawl_site(options)
    duration_ms = int((time.monotonic() - started) * 1000)

    summary = crawler.get_summary()
    logger.info("Found %s pages on %s in %ss", len(pages), crawler.base_url, round(duration_ms / 1000))
    for depth, count in sorted(summary.by_depth.items()):
        logger.info("  Depth %s: %s pages", depth, count)
    errors = crawler.get_errors()
    for index, err in enumerate(errors, start=1):
        logger.warning("  %s. %s: %s (%s retries)", index, err.url, err.error, err.retry_count)

    if not pages:
        logger.error("No pages discovered from %s", crawler.base_url)
        return 1

    cache.save(CachedPageList.from_crawl(crawler.base_url, pages, options, duration_ms))
    logger.info("Cache location: %s (%s)", cache.cache_file, cache.info())
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
