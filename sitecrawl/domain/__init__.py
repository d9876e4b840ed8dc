"""Domain objects for SiteCrawl - explicit re-exports to satisfy linters."""
from .crawl_result import CrawlResult as CrawlResult
from .crawl_result import ErrorRecord as ErrorRecord
from .crawl_options import CrawlOptions as CrawlOptions
from .frontier import Frontier as Frontier
from .frontier import FrontierEntry as FrontierEntry
from .navigation import NavigationResponse as NavigationResponse
from .navigation import WaitStrategy as WaitStrategy
from .crawl_state import CrawlState as CrawlState

__all__ = [
    "CrawlResult",
    "ErrorRecord",
    "CrawlOptions",
    "Frontier",
    "FrontierEntry",
    "NavigationResponse",
    "WaitStrategy",
    "CrawlState",
]
