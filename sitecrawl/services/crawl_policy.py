import logging
from typing import Iterable, Pattern
from urllib.parse import urlsplit

from sitecrawl.domain.crawl_options import CrawlOptions, compile_patterns

logger = logging.getLogger(__name__)


class CrawlPolicy:
    """Encapsulates crawl eligibility rules: domain allow-list, exclude and include patterns.

    Rules are applied in order and the first failing rule wins. A rejected URL
    is not an error; the caller simply never enqueues or fetches it.
    """

    def __init__(
        self,
        allowed_domains: Iterable[str],
        exclude_patterns: Iterable[Pattern[str]] = (),
        include_patterns: Iterable[Pattern[str]] = (),
    ):
        self.allowed_domains = tuple(d.lower() for d in allowed_domains)
        self.exclude_patterns = compile_patterns(exclude_patterns)
        self.include_patterns = compile_patterns(include_patterns)

    @classmethod
    def from_options(cls, options: CrawlOptions, base_hostname: str) -> "CrawlPolicy":
        return cls(
            allowed_domains=options.resolve_allowed_domains(base_hostname),
            exclude_patterns=options.exclude_patterns,
            include_patterns=options.include_patterns,
        )

    def should_skip_due_to_domain(self, url: str) -> bool:
        """Check if the URL's host is neither an allowed domain nor a subdomain of one."""
        try:
            host = (urlsplit(url).hostname or "").lower()
        except ValueError:
            logger.debug("Skipping (unparseable) %s", url)
            return True
        for domain in self.allowed_domains:
            if host == domain or host.endswith("." + domain):
                return False
        logger.debug("Skipping (external) %s", url)
        return True

    def should_skip_due_to_exclude(self, url: str) -> bool:
        """Check if the URL matches any exclude pattern."""
        for pattern in self.exclude_patterns:
            if pattern.search(url):
                logger.debug("Skipping (excluded by %s) %s", pattern.pattern, url)
                return True
        return False

    def should_skip_due_to_include(self, url: str) -> bool:
        """Check if include patterns are configured and none match the URL."""
        if not self.include_patterns:
            return False
        if any(pattern.search(url) for pattern in self.include_patterns):
            return False
        logger.debug("Skipping (no include pattern matched) %s", url)
        return True

    def is_allowed(self, url: str) -> bool:
        if self.should_skip_due_to_domain(url):
            return False
        if self.should_skip_due_to_exclude(url):
            return False
        if self.should_skip_due_to_include(url):
            return False
        return True
