import pytest

from sitecrawl.domain.navigation import NavigationResponse
from sitecrawl.exceptions import NavigationError


class FakePageDriver:
    """Deterministic page driver serving a scripted site.

    `pages` maps URL -> {"status": int, "title": str, "links": [href, ...]}.
    `failures` maps URL -> number of leading navigation attempts that fail
    (use a large number for "always fails"). Unknown URLs answer 404.
    """

    def __init__(self, pages=None, failures=None, anchor_error=None):
        self.pages = pages or {}
        self.failures = dict(failures or {})
        self.anchor_error = anchor_error
        self.navigations = []
        self.current_url = None

    def navigate(self, url, wait_strategy, timeout_ms):
        self.navigations.append((url, wait_strategy, timeout_ms))
        remaining = self.failures.get(url, 0)
        if remaining > 0:
            self.failures[url] = remaining - 1
            raise NavigationError(url, TimeoutError(f"Timeout {timeout_ms}ms exceeded"))
        self.current_url = url
        page = self.pages.get(url)
        status = page.get("status", 200) if page is not None else 404
        return NavigationResponse(status=status, final_url=url)

    def get_title(self):
        page = self.pages.get(self.current_url) or {}
        return page.get("title", "")

    def query_anchors(self, timeout_ms=None):
        if self.anchor_error is not None:
            raise self.anchor_error
        page = self.pages.get(self.current_url) or {}
        return list(page.get("links", []))

    def navigated_urls(self):
        return [url for url, _, _ in self.navigations]


@pytest.fixture
def make_driver():
    def _make(pages=None, failures=None, anchor_error=None):
        return FakePageDriver(pages=pages, failures=failures, anchor_error=anchor_error)
    return _make


@pytest.fixture
def no_sleep():
    """Records requested sleeps instead of waiting."""
    calls = []
    def _sleep(seconds):
        calls.append(seconds)
    _sleep.calls = calls
    return _sleep
