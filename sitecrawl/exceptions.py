"""Custom exceptions for SiteCrawl services."""


class NavigationError(Exception):
    """Raised by a page driver when navigating to a URL fails.

    Covers timeouts, DNS errors and aborted connections. This is the only
    error the retry controller retries.
    """

    def __init__(self, url: str, original: Exception):
        self.url = url
        self.original = original
        super().__init__(f"Navigation failed for {url}: {original}")


class RetriesExhaustedError(Exception):
    """Raised when every navigation attempt for a URL has failed."""

    def __init__(self, url: str, attempts: int, last_error: Exception):
        self.url = url
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"All {attempts} attempts failed for {url}: {last_error}")


class DriverUnavailableError(RuntimeError):
    """Raised when the page driver itself cannot be used (not installed, not started)."""


class InvalidBaseUrlError(ValueError):
    """Raised when the crawl seed URL cannot be normalized to an http(s) URL."""

    def __init__(self, base_url: str):
        self.base_url = base_url
        super().__init__(f"Invalid base URL: {base_url!r}")
