from typing import Optional

from sitecrawl.domain.frontier import Frontier, FrontierEntry
from sitecrawl.domain.visited_tracker import VisitedTracker
from sitecrawl.domain.result_aggregator import ResultAggregator


class CrawlState:
    """
    Mutable traversal state for a single crawl run.

    One instance is created per `SiteCrawler.crawl_site` call, so separate
    crawls (and separate tests) never share a queue, visited set or results.
    """

    def __init__(
        self,
        frontier: Optional[Frontier] = None,
        visited_tracker: Optional[VisitedTracker] = None,
        aggregator: Optional[ResultAggregator] = None,
    ):
        self.frontier = frontier if frontier is not None else Frontier()
        self.visited_tracker = visited_tracker if visited_tracker is not None else VisitedTracker()
        self.aggregator = aggregator if aggregator is not None else ResultAggregator()

    def seed(self, url: str) -> None:
        self.frontier.push(FrontierEntry(url=url, depth=0))

    def mark_visited(self, url: str) -> None:
        self.visited_tracker.mark(url)

    def is_visited(self, url: str) -> bool:
        return self.visited_tracker.is_visited(url)

    @property
    def pages_recorded(self) -> int:
        return len(self.aggregator.results)
