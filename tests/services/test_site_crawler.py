import pytest

from sitecrawl.domain.crawl_options import CrawlOptions
from sitecrawl.exceptions import DriverUnavailableError, InvalidBaseUrlError
from sitecrawl.services.site_crawler import SiteCrawler

ROOT = "https://example.com/"


def _options(**kwargs):
    defaults = dict(exclude_patterns=[], delay_between_requests=0, retry_delay=0)
    defaults.update(kwargs)
    return CrawlOptions(**defaults)


def _site(n_children=5):
    pages = {ROOT: {"title": "Home", "links": [f"/p{i}" for i in range(n_children)]}}
    for i in range(n_children):
        pages[f"https://example.com/p{i}"] = {"title": f"P{i}", "links": ["/", f"/p{i}/deep"]}
        pages[f"https://example.com/p{i}/deep"] = {"title": f"Deep {i}", "links": []}
    return pages


def test_scenario_exclude_and_domain_filtering(make_driver, no_sleep):
    driver = make_driver(pages={
        ROOT: {"title": "Home", "links": ["/a", "/b.pdf", "https://other.com/c"]},
        "https://example.com/a": {"title": "A", "links": ["/should-not-be-followed"]},
    })
    crawler = SiteCrawler(driver, "https://example.com", sleep=no_sleep)

    pages = crawler.crawl_site(_options(
        max_depth=1,
        exclude_patterns=[r"\.pdf$"],
        allowed_domains=["example.com"],
    ))

    assert [(p.url, p.depth, p.found_on) for p in pages] == [
        (ROOT, 0, "start"),
        ("https://example.com/a", 1, ROOT),
    ]
    assert driver.navigated_urls() == [ROOT, "https://example.com/a"]


def test_scenario_retry_exhaustion(make_driver, no_sleep):
    driver = make_driver(failures={ROOT: 99})
    crawler = SiteCrawler(driver, ROOT, sleep=no_sleep)

    pages = crawler.crawl_site(_options(max_retries=2))

    assert pages == []
    assert len(crawler.results) == 1
    failed = crawler.results[0]
    assert failed.status == 0
    assert failed.retry_count == 2
    assert failed.crawl_error
    errors = crawler.get_errors()
    assert len(errors) == 1
    assert errors[0].url == ROOT
    assert errors[0].retry_count == 2
    assert len(driver.navigations) == 3


def test_scenario_tracking_variants_create_one_entry(make_driver, no_sleep):
    driver = make_driver(pages={
        ROOT: {"links": ["https://example.com/page?utm_source=x", "https://example.com/page"]},
        "https://example.com/page": {"title": "Page"},
    })
    crawler = SiteCrawler(driver, ROOT, sleep=no_sleep)

    pages = crawler.crawl_site(_options(max_depth=1))

    assert [p.url for p in pages] == [ROOT, "https://example.com/page"]
    assert driver.navigated_urls().count("https://example.com/page") == 1


def test_page_cap_is_never_exceeded(make_driver, no_sleep):
    driver = make_driver(pages=_site(10))
    crawler = SiteCrawler(driver, ROOT, sleep=no_sleep)

    pages = crawler.crawl_site(_options(max_pages=4, max_depth=5))

    assert len(crawler.results) == 4
    assert len(pages) <= 4
    assert len(driver.navigations) == 4


def test_depth_cap_is_respected(make_driver, no_sleep):
    driver = make_driver(pages=_site(3))
    crawler = SiteCrawler(driver, ROOT, sleep=no_sleep)

    pages = crawler.crawl_site(_options(max_depth=1))

    assert all(p.depth <= 1 for p in crawler.results)
    assert not any(url.endswith("/deep") for url in driver.navigated_urls())
    assert len(pages) == 4


def test_max_depth_zero_crawls_only_seed(make_driver, no_sleep):
    driver = make_driver(pages=_site(3))
    crawler = SiteCrawler(driver, ROOT, sleep=no_sleep)

    pages = crawler.crawl_site(_options(max_depth=0))

    assert [p.url for p in pages] == [ROOT]


def test_no_url_is_fetched_twice(make_driver, no_sleep):
    driver = make_driver(pages=_site(5))
    crawler = SiteCrawler(driver, ROOT, sleep=no_sleep)

    crawler.crawl_site(_options(max_depth=3, max_pages=100))

    urls = driver.navigated_urls()
    assert len(urls) == len(set(urls))
    assert len(urls) == 11


def test_breadth_first_order_and_sorted_output(make_driver, no_sleep):
    driver = make_driver(pages={
        ROOT: {"links": ["/z", "/m"]},
        "https://example.com/z": {"links": ["/a-deep"]},
        "https://example.com/m": {"links": []},
        "https://example.com/a-deep": {"links": []},
    })
    crawler = SiteCrawler(driver, ROOT, sleep=no_sleep)

    pages = crawler.crawl_site(_options(max_depth=2))

    # visited breadth-first in discovery order
    assert driver.navigated_urls() == [
        ROOT,
        "https://example.com/z",
        "https://example.com/m",
        "https://example.com/a-deep",
    ]
    # returned sorted by (depth, url)
    assert [(p.depth, p.url) for p in pages] == [
        (0, ROOT),
        (1, "https://example.com/m"),
        (1, "https://example.com/z"),
        (2, "https://example.com/a-deep"),
    ]


def test_excluded_urls_never_appear_in_results(make_driver, no_sleep):
    driver = make_driver(pages={
        ROOT: {"links": ["/admin/panel", "/ok"]},
        "https://example.com/ok": {},
        "https://example.com/admin/panel": {},
    })
    crawler = SiteCrawler(driver, ROOT, sleep=no_sleep)

    crawler.crawl_site(_options(exclude_patterns=[r"/admin/"]))

    assert all("/admin/" not in r.url for r in crawler.results)
    assert crawler.get_errors() == []


def test_non_200_pages_are_recorded_but_not_expanded(make_driver, no_sleep):
    driver = make_driver(pages={
        ROOT: {"links": ["/missing", "/redirect"]},
        "https://example.com/redirect": {"status": 301, "links": ["/hidden"]},
        "https://example.com/hidden": {},
    })
    crawler = SiteCrawler(driver, ROOT, sleep=no_sleep)

    pages = crawler.crawl_site(_options())

    assert [p.url for p in pages] == [ROOT]
    statuses = {r.url: r.status for r in crawler.results}
    assert statuses == {
        ROOT: 200,
        "https://example.com/missing": 404,
        "https://example.com/redirect": 301,
    }
    assert crawler.get_errors() == []


def test_failed_page_does_not_abort_crawl(make_driver, no_sleep):
    driver = make_driver(
        pages={ROOT: {"links": ["/flaky", "/broken", "/fine"]}, "https://example.com/flaky": {}, "https://example.com/fine": {}},
        failures={"https://example.com/flaky": 1, "https://example.com/broken": 99},
    )
    crawler = SiteCrawler(driver, ROOT, sleep=no_sleep)

    pages = crawler.crawl_site(_options(max_retries=1))

    assert [p.url for p in pages] == [ROOT, "https://example.com/fine", "https://example.com/flaky"]
    flaky = next(p for p in pages if p.url.endswith("/flaky"))
    assert flaky.retry_count == 1
    summary = crawler.get_summary()
    assert summary.total == 4
    assert summary.successful == 3
    assert summary.errors == 1
    assert summary.performance.total_retries == 2
    assert summary.by_depth == {0: 1, 1: 2}


def test_link_extraction_failure_is_non_fatal(make_driver, no_sleep):
    driver = make_driver(pages={ROOT: {"links": ["/a"]}}, anchor_error=RuntimeError("DOM gone"))
    crawler = SiteCrawler(driver, ROOT, sleep=no_sleep)

    pages = crawler.crawl_site(_options())

    assert [p.url for p in pages] == [ROOT]
    assert crawler.get_errors() == []


def test_politeness_delay_between_fetches(make_driver, no_sleep):
    driver = make_driver(pages={ROOT: {"links": ["/a"]}, "https://example.com/a": {}})
    crawler = SiteCrawler(driver, ROOT, sleep=no_sleep)

    crawler.crawl_site(_options(delay_between_requests=300))

    assert no_sleep.calls == [0.3, 0.3]


def test_zero_delay_never_sleeps(make_driver, no_sleep):
    driver = make_driver(pages={ROOT: {"links": ["/a"]}, "https://example.com/a": {}})
    crawler = SiteCrawler(driver, ROOT, sleep=no_sleep)

    crawler.crawl_site(_options(delay_between_requests=0))

    assert no_sleep.calls == []


def test_seed_rejected_by_policy_yields_empty_crawl(make_driver, no_sleep):
    driver = make_driver(pages={ROOT: {}})
    crawler = SiteCrawler(driver, ROOT, sleep=no_sleep)

    pages = crawler.crawl_site(_options(include_patterns=[r"/blog/"]))

    assert pages == []
    assert driver.navigations == []
    assert crawler.get_summary().performance.success_rate == 100


def test_each_crawl_starts_from_fresh_state(make_driver, no_sleep):
    driver = make_driver(pages={ROOT: {}})
    crawler = SiteCrawler(driver, ROOT, sleep=no_sleep)

    crawler.crawl_site(_options())
    crawler.crawl_site(_options())

    assert len(crawler.results) == 1
    assert driver.navigated_urls() == [ROOT, ROOT]


def test_driver_failure_outside_retry_boundary_propagates(no_sleep):
    class _DeadDriver:
        def navigate(self, url, wait_strategy, timeout_ms):
            raise DriverUnavailableError("browser crashed")

    crawler = SiteCrawler(_DeadDriver(), ROOT, sleep=no_sleep)
    with pytest.raises(DriverUnavailableError):
        crawler.crawl_site(_options())


def test_invalid_base_url_rejected(make_driver):
    with pytest.raises(InvalidBaseUrlError):
        SiteCrawler(make_driver(), "mailto:someone@example.com")
    with pytest.raises(ValueError):
        SiteCrawler(make_driver(), "not a url")


def test_encoded_query_and_tracking_variant_fetched_once(make_driver, no_sleep):
    driver = make_driver(pages={
        ROOT: {"links": ["/s?q=a%20b", "/s?q=a%20b&utm_campaign=y"]},
        "https://example.com/s?q=a%20b": {"title": "Search"},
    })
    crawler = SiteCrawler(driver, ROOT, sleep=no_sleep)

    crawler.crawl_site(_options(max_depth=1))

    assert driver.navigated_urls() == [ROOT, "https://example.com/s?q=a%20b"]
