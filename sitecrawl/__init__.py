"""SiteCrawl: depth-bounded, policy-driven site page discovery."""

__version__ = "0.1.0"
