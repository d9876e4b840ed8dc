from unittest.mock import MagicMock

from sitecrawl.services.crawl_policy import CrawlPolicy
from sitecrawl.services.link_extractor import LinkExtractor

PAGE = "https://example.com/"


def _policy():
    return CrawlPolicy(["example.com"], exclude_patterns=[r"\.pdf$"])


def test_extract_normalizes_filters_and_dedupes():
    driver = MagicMock()
    driver.query_anchors.return_value = [
        "/a",
        "/a#section",
        "/a?utm_source=newsletter",
        "/b.pdf",
        "https://other.com/c",
        "mailto:team@example.com",
        "https://sub.example.com/d",
    ]
    extractor = LinkExtractor(_policy())

    links = extractor.extract(driver, PAGE)

    assert links == ["https://example.com/a", "https://sub.example.com/d"]
    driver.query_anchors.assert_called_once_with(timeout_ms=10_000)


def test_extract_returns_empty_list_on_dom_failure(caplog):
    driver = MagicMock()
    driver.query_anchors.side_effect = RuntimeError("Execution context was destroyed")
    extractor = LinkExtractor(_policy())

    assert extractor.extract(driver, PAGE) == []
    assert "Failed to extract links" in caplog.text


def test_extract_discards_links_when_query_exceeds_timeout(caplog):
    readings = iter([0.0, 12.0])
    driver = MagicMock()
    driver.query_anchors.return_value = ["/a"]
    extractor = LinkExtractor(_policy(), timeout_ms=10_000, clock=lambda: next(readings))

    assert extractor.extract(driver, PAGE) == []
    assert "Link extraction timeout" in caplog.text


def test_extract_handles_no_anchors():
    driver = MagicMock()
    driver.query_anchors.return_value = []
    assert LinkExtractor(_policy()).extract(driver, PAGE) == []
