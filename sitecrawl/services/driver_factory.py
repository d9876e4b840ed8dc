from __future__ import annotations

from dataclasses import dataclass

from sitecrawl.services.page_driver import PageDriver

FETCH_MODES = ("http", "headless_chromium")


@dataclass(frozen=True)
class DriverFactory:
    http_driver: PageDriver
    headless_driver: PageDriver

    def get(self, fetch_mode: str) -> PageDriver:
        if fetch_mode is None or (isinstance(fetch_mode, str) and fetch_mode.strip() == ""):
            raise ValueError("fetch_mode is required")
        mode = fetch_mode.strip().lower()
        if mode == "http":
            return self.http_driver
        if mode == "headless_chromium":
            return self.headless_driver
        raise ValueError(f"Unknown fetch_mode: {fetch_mode!r}")
