from enum import Enum
from typing import NamedTuple, Optional


class WaitStrategy(str, Enum):
    """Condition under which a navigation counts as complete."""
    DOM_CONTENT_LOADED = "domcontentloaded"
    LOAD = "load"
    NETWORK_IDLE = "networkidle"


class NavigationResponse(NamedTuple):
    """Response from a page driver navigation."""
    status: int
    final_url: Optional[str] = None
