import logging
from typing import Callable, Optional

import requests
from bs4 import BeautifulSoup

from sitecrawl.domain.navigation import NavigationResponse, WaitStrategy
from sitecrawl.exceptions import NavigationError

logger = logging.getLogger(__name__)


class HttpPageDriver:
    """
    Page driver that fetches raw HTML over HTTP instead of rendering it.

    Requires http_client callable for dependency injection, so tests can pass a
    stub instead of patching `requests`. JavaScript is not executed, so wait
    strategies have no meaning here and are ignored.
    """

    def __init__(self, user_agent: str, http_client: Callable = requests.get):
        self.user_agent = user_agent
        self.http_client = http_client
        self._html: Optional[str] = None
        self._soup: Optional[BeautifulSoup] = None

    def __enter__(self) -> "HttpPageDriver":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._html = None
        self._soup = None

    def navigate(self, url: str, wait_strategy: WaitStrategy, timeout_ms: float) -> NavigationResponse:
        headers = {"User-Agent": self.user_agent}
        try:
            resp = self.http_client(url, headers=headers, timeout=timeout_ms / 1000)
        except requests.exceptions.RequestException as e:
            raise NavigationError(url, e) from e

        content_type = ""
        if hasattr(resp, "headers") and resp.headers is not None:
            content_type = resp.headers.get("Content-Type") or ""
        # Non-HTML bodies (PDFs, images) carry no title or anchors.
        if content_type and "html" not in content_type.lower():
            logger.debug("Non-HTML content at %s: %s", url, content_type)
            self._html = ""
        else:
            self._html = resp.text
        self._soup = None

        return NavigationResponse(status=int(resp.status_code), final_url=getattr(resp, "url", None) or url)

    def _parsed(self) -> Optional[BeautifulSoup]:
        if self._html is None:
            return None
        if self._soup is None:
            self._soup = BeautifulSoup(self._html, "html.parser")
        return self._soup

    def get_title(self) -> str:
        soup = self._parsed()
        if soup is None or soup.title is None:
            return ""
        return soup.title.get_text(strip=True)

    def query_anchors(self, timeout_ms: Optional[float] = None) -> list[str]:
        soup = self._parsed()
        if soup is None:
            return []
        hrefs = []
        for a in soup.find_all("a", href=True):
            href = a.get("href")
            if href and href.strip():
                hrefs.append(href)
        return hrefs
