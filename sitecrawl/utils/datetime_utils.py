import logging
from datetime import datetime, timezone
from typing import Optional, Union


def utc_now_naive() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_to_utc_naive(value: Union[str, datetime, None]) -> Optional[datetime]:
    """Parse an ISO datetime string or datetime object and return a UTC-naive datetime.

    Naive inputs are assumed to already be UTC. Returns None if parsing fails
    or value is None.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        # trailing "Z" is not accepted by fromisoformat before 3.11
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(text)
        except ValueError:
            logging.debug("Could not parse datetime string: %s", value)
            return None
    if dt.tzinfo is not None:
        return dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def age_minutes(value: Union[str, datetime, None], now: Optional[datetime] = None) -> Optional[float]:
    """Minutes elapsed since `value`, or None if it cannot be parsed."""
    then = parse_to_utc_naive(value)
    if then is None:
        return None
    now = now if now is not None else utc_now_naive()
    return (now - then).total_seconds() / 60
