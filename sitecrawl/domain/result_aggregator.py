"""Accumulates crawl outcomes and computes summary statistics."""
from __future__ import annotations

from dataclasses import asdict, dataclass

from sitecrawl.domain.crawl_result import CrawlResult, ErrorRecord


@dataclass(frozen=True)
class PerformanceSummary:
    average_load_time: float
    total_retries: int
    success_rate: float


@dataclass(frozen=True)
class CrawlSummary:
    total: int
    successful: int
    errors: int
    by_depth: dict[int, int]
    """Successful pages per depth"""
    performance: PerformanceSummary

    def as_dict(self) -> dict:
        return asdict(self)


class ResultAggregator:
    """Owns the `CrawlResult` records and error log of one crawl."""

    def __init__(self):
        self._results: list[CrawlResult] = []
        self._errors: list[ErrorRecord] = []

    @property
    def results(self) -> list[CrawlResult]:
        return list(self._results)

    @property
    def errors(self) -> list[ErrorRecord]:
        return list(self._errors)

    def record(self, result: CrawlResult) -> None:
        self._results.append(result)

    def record_error(self, error: ErrorRecord) -> None:
        self._errors.append(error)

    def __len__(self) -> int:
        return len(self._results)

    def sort(self) -> None:
        """Order results by depth, then URL."""
        self._results.sort(key=lambda r: (r.depth, r.url))

    def accessible_pages(self) -> list[CrawlResult]:
        return [r for r in self._results if r.is_success]

    def summary(self) -> CrawlSummary:
        total = len(self._results)
        successful = 0
        total_retries = 0
        load_time_sum = 0
        load_time_count = 0
        by_depth: dict[int, int] = {}
        for r in self._results:
            total_retries += r.retry_count or 0
            if r.load_time is not None:
                load_time_sum += r.load_time
                load_time_count += 1
            if r.is_success:
                successful += 1
                by_depth[r.depth] = by_depth.get(r.depth, 0) + 1

        return CrawlSummary(
            total=total,
            successful=successful,
            errors=total - successful,
            by_depth=by_depth,
            performance=PerformanceSummary(
                average_load_time=load_time_sum / load_time_count if load_time_count else 0,
                total_retries=total_retries,
                success_rate=(successful / total * 100) if total else 100,
            ),
        )
