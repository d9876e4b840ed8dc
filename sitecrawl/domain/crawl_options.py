from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Optional, Pattern, Union

PatternLike = Union[str, Pattern[str]]


def compile_patterns(patterns: Optional[Iterable[PatternLike]]) -> tuple[Pattern[str], ...]:
    """Compile strings to regexes, keeping already compiled patterns as-is."""
    if patterns is None:
        return ()
    if isinstance(patterns, (str, re.Pattern)):
        patterns = [patterns]
    compiled = []
    for p in patterns:
        compiled.append(p if isinstance(p, re.Pattern) else re.compile(p))
    return tuple(compiled)


DEFAULT_EXCLUDE_PATTERNS = compile_patterns([
    re.compile(r"\.(pdf|doc|docx|xls|xlsx|ppt|pptx|zip|rar|tar|gz)$", re.IGNORECASE),
    r"/wp-admin/",
    r"/admin/",
    r"/login",
    r"/logout",
    r"/search\?",
    r"/cart",
    r"/checkout",
    r"\?.*utm_",
    r"#",
])

# Broader set used by the command-line pre-crawl; safe for any website.
UNIVERSAL_EXCLUDE_PATTERNS = compile_patterns([
    re.compile(p, re.IGNORECASE)
    for p in (
        # documents, images, media, static resources
        r"\.(pdf|doc|docx|xls|xlsx|ppt|pptx|zip|rar|tar|gz|7z)$",
        r"\.(jpg|jpeg|png|gif|svg|webp|ico|bmp|tiff)$",
        r"\.(mp4|avi|mov|wmv|flv|webm|mkv|mp3|wav|ogg)$",
        r"\.(css|js|json|xml|txt|csv)$",
        r"/wp-admin/",
        r"/admin/",
        r"/login/",
        r"/logout/",
        r"/signin/",
        r"/signup/",
        r"/register/",
        r"/search\?",
        r"/cart/",
        r"/checkout/",
        r"/payment/",
        r"/api/",
        r"/feed/",
        r"/feeds/",
        r"/rss/",
        r"/sitemap",
        r"/robots\.txt$",
        r"\?.*utm_",
        r"\?.*fbclid",
        r"\?.*gclid",
        r"#",
        r"mailto:",
        r"tel:",
        r"ftp:",
        r"javascript:",
        # date-based archives and pagination
        r"/\d{4}/\d{2}/\d{2}/",
        r"/page/\d+",
        r"/p/\d+",
        r"\?page=",
        r"\?p=",
    )
])


@dataclass(frozen=True)
class CrawlOptions:
    """Settings for a single crawl; immutable for the crawl's lifetime.

    Durations are milliseconds. `allowed_domains=None` means "the base URL's
    hostname" and is resolved by the crawler.
    """

    max_pages: int = 50
    max_depth: int = 3
    allowed_domains: Optional[tuple[str, ...]] = None
    exclude_patterns: tuple[Pattern[str], ...] = DEFAULT_EXCLUDE_PATTERNS
    include_patterns: tuple[Pattern[str], ...] = field(default_factory=tuple)
    delay_between_requests: float = 500
    max_retries: int = 2
    retry_delay: float = 2000
    timeout_ms: float = 20000

    def __post_init__(self):
        if self.max_pages < 0:
            raise ValueError("max_pages must be >= 0")
        if self.max_depth < 0:
            raise ValueError("max_depth must be >= 0")
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if self.timeout_ms <= 0:
            raise ValueError("timeout_ms must be > 0")
        if self.delay_between_requests < 0 or self.retry_delay < 0:
            raise ValueError("delays must be >= 0")
        # frozen: normalize collection fields in place
        if self.allowed_domains is not None:
            domains = [self.allowed_domains] if isinstance(self.allowed_domains, str) else self.allowed_domains
            object.__setattr__(self, "allowed_domains", tuple(d.strip().lower() for d in domains if d and d.strip()))
        object.__setattr__(self, "exclude_patterns", compile_patterns(self.exclude_patterns))
        object.__setattr__(self, "include_patterns", compile_patterns(self.include_patterns))

    def resolve_allowed_domains(self, base_hostname: str) -> tuple[str, ...]:
        if self.allowed_domains is None:
            return (base_hostname.lower(),)
        return self.allowed_domains
