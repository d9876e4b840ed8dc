import logging
import os
from typing import Optional

import yaml

from sitecrawl.domain.crawl_options import CrawlOptions

logger = logging.getLogger(__name__)

_INT_FIELDS = ("max_pages", "max_depth", "max_retries")
_FLOAT_FIELDS = ("delay_between_requests", "retry_delay", "timeout_ms")
_PATTERN_FIELDS = ("exclude_patterns", "include_patterns")


class CrawlOptionsParser:
    """Parse a YAML dict into CrawlOptions.

    Responsibility: schema/validation for crawl option files. Unknown keys are
    ignored and missing keys keep the CrawlOptions defaults. Patterns are
    regular expression strings.
    """

    def parse(self, data: Optional[dict]) -> CrawlOptions:
        data = dict(data or {})

        kwargs = {}
        for name in _INT_FIELDS:
            if data.get(name) is not None:
                kwargs[name] = int(data[name])
        for name in _FLOAT_FIELDS:
            if data.get(name) is not None:
                kwargs[name] = float(data[name])
        for name in _PATTERN_FIELDS:
            value = data.get(name)
            if value is not None:
                kwargs[name] = [value] if isinstance(value, str) else list(value)

        domains = data.get("allowed_domains")
        if domains:
            kwargs["allowed_domains"] = [domains] if isinstance(domains, str) else list(domains)

        return CrawlOptions(**kwargs)

    def load_yaml_dict(self, config_path: str) -> Optional[dict]:
        """Return parsed YAML dict for `config_path`, or None if missing/invalid."""
        if not os.path.isfile(config_path):
            return None
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError):
            logger.warning("Could not read crawl options from %s", config_path, exc_info=True)
            return None
        return data if isinstance(data, dict) else None
