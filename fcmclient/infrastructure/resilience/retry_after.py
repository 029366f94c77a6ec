"""Tracks the gateway's Retry-After hint.

The header is either a whole number of seconds or an HTTP-date. The raw
header string is kept as received and only interpreted when read, so a date
hint counts down as time passes.
"""

import logging
import re
import threading
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Optional

logger = logging.getLogger(__name__)

_DELTA_SECONDS = re.compile(r"[+-]?[0-9]+")

# Delta-seconds must fit a signed 64-bit integer
_MAX_DELTA_SECONDS = 2**63 - 1
_MAX_DELTA_DIGITS = len(str(_MAX_DELTA_SECONDS))


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_retry_after(value: Optional[str], now: Optional[datetime] = None) -> int:
    """Converts a Retry-After header value to seconds.

    Args:
        value: The raw header value, ``None`` or ``""`` when absent.
        now: Reference time for HTTP-date values. Defaults to the current UTC time.

    Returns:
        Seconds to wait. 0 when the value is absent, unparseable, negative
        or a date in the past. Never raises.
    """
    if not value:
        return 0

    if _DELTA_SECONDS.fullmatch(value):
        # Length check first: int() refuses very long digit strings on newer interpreters
        digits = value.lstrip("+-").lstrip("0")
        if len(digits) > _MAX_DELTA_DIGITS or int(digits or "0") > _MAX_DELTA_SECONDS:
            logger.debug(f"Ignoring out-of-range Retry-After value ({len(value)} characters)")
            return 0
        if value.startswith("-"):
            return 0
        return int(digits or "0")

    try:
        # Handles RFC 1123, RFC 850 and asctime formats
        retry_at = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        logger.debug(f"Ignoring unparseable Retry-After value: {value!r}")
        return 0
    if retry_at is None:
        return 0
    if retry_at.tzinfo is None:
        # HTTP-dates are always GMT
        retry_at = retry_at.replace(tzinfo=timezone.utc)

    reference = now or _utc_now()
    seconds = (retry_at - reference).total_seconds()
    if seconds < 0:
        return 0
    return int(seconds)


class RetryAfterTracker:
    """A single shared slot holding the most recent Retry-After header.

    Every completed send overwrites the slot, so with concurrent senders the
    value reflects whichever response finished last. The lock only keeps
    reads and writes whole.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._value: Optional[str] = None

    def update(self, value: Optional[str]) -> None:
        """Replaces the stored header value. ``None`` or ``""`` clears it."""
        with self._lock:
            self._value = value or None

    @property
    def value(self) -> Optional[str]:
        with self._lock:
            return self._value

    def seconds(self, now: Optional[datetime] = None) -> int:
        return parse_retry_after(self.value, now=now)
