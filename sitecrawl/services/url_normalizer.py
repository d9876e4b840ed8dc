import logging
from typing import Optional
from urllib.parse import unquote_plus, urljoin, urlsplit, urlunsplit

logger = logging.getLogger(__name__)

TRACKING_PARAMS = frozenset({
    "utm_source",
    "utm_medium",
    "utm_campaign",
    "utm_term",
    "utm_content",
    "fbclid",
    "gclid",
})

_REJECTED_PREFIXES = ("mailto:", "tel:", "javascript:")
_DEFAULT_PORTS = {"http": 80, "https": 443}


def _strip_tracking_params(query: str) -> str:
    # Surviving pairs are kept byte-for-byte, whether or not anything was removed.
    kept = []
    for segment in query.split("&"):
        if not segment:
            continue
        name = unquote_plus(segment.split("=", 1)[0])
        if name not in TRACKING_PARAMS:
            kept.append(segment)
    return "&".join(kept)


def normalize_url(href: Optional[str], base_url: str) -> Optional[str]:
    """Resolve `href` against `base_url` into the crawl's deduplication key.

    Returns None when the href is empty, uses a mailto/tel/javascript scheme,
    cannot be parsed, or does not resolve to an http(s) URL. The fragment is
    dropped, tracking parameters are removed, scheme and host are lower-cased,
    default ports are dropped and an empty path becomes "/".
    """
    if href is None:
        return None
    href = href.strip()
    if not href or href.lower().startswith(_REJECTED_PREFIXES):
        return None

    try:
        if href.startswith("//"):
            href = f"{urlsplit(base_url).scheme}:{href}"
        parts = urlsplit(urljoin(base_url, href))
        port = parts.port
    except ValueError:
        logger.debug("Discarding unparseable href %r on %s", href, base_url)
        return None

    scheme = parts.scheme.lower()
    if scheme not in _DEFAULT_PORTS:
        return None
    hostname = parts.hostname
    if not hostname:
        return None

    netloc = f"[{hostname}]" if ":" in hostname else hostname
    if port is not None and port != _DEFAULT_PORTS[scheme]:
        netloc = f"{netloc}:{port}"
    if parts.username is not None:
        userinfo = parts.username
        if parts.password is not None:
            userinfo = f"{userinfo}:{parts.password}"
        netloc = f"{userinfo}@{netloc}"

    return urlunsplit((scheme, netloc, parts.path or "/", _strip_tracking_params(parts.query), ""))
