"""Domain models for outbound FCM messages.

Includes the HTTP message envelope (targeting and delivery options) and the
optional display notification block. Absent optional fields are left out of
the wire representation entirely so the gateway applies its own defaults.
"""

import json
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, List, Mapping, Optional, Union

from .common import CollapseKey, ConditionExpression, RegistrationToken, WireDict


class Priority(str, Enum):
    """Delivery priority understood by the gateway."""
    HIGH = "high"
    NORMAL = "normal"


PRIORITY_HIGH = Priority.HIGH.value
PRIORITY_NORMAL = Priority.NORMAL.value

LocArgs = Union[str, List[str]]


def _is_absent(value: Any) -> bool:
    """True for values that are omitted from the wire form."""
    return value is None or value == "" or value == []


@dataclass
class Notification:
    """Display fields of a notification message.

    Every field is optional. ``icon``, ``tag`` and ``color`` only affect
    Android devices, ``badge`` only iOS devices.
    """
    title: Optional[str] = None
    body: Optional[str] = None
    sound: Optional[str] = None
    click_action: Optional[str] = None
    body_loc_key: Optional[str] = None
    body_loc_args: Optional[LocArgs] = None
    title_loc_key: Optional[str] = None
    title_loc_args: Optional[LocArgs] = None

    # Android only
    icon: Optional[str] = None
    tag: Optional[str] = None
    color: Optional[str] = None

    # iOS only
    badge: Optional[str] = None

    def to_dict(self) -> WireDict:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if not _is_absent(getattr(self, f.name))
        }


@dataclass
class HttpMessage:
    """An FCM legacy HTTP request message.

    Exactly one of ``to``, ``registration_ids`` or ``condition`` is normally
    set. Exclusivity is not enforced here; the gateway rejects bad
    combinations.
    """
    to: Optional[RegistrationToken] = None
    registration_ids: Optional[List[RegistrationToken]] = None
    condition: Optional[ConditionExpression] = None
    collapse_key: Optional[CollapseKey] = None
    priority: Optional[Priority] = None
    content_available: bool = False
    time_to_live: Optional[int] = None  # seconds
    restricted_package_name: Optional[str] = None
    dry_run: bool = False
    data: Optional[Mapping[str, Any]] = None
    notification: Optional[Notification] = None

    def to_dict(self) -> WireDict:
        """Builds the JSON-compatible request body.

        Raises:
            TypeError: If ``time_to_live`` is not an integer.
            ValueError: If ``time_to_live`` is negative or ``priority`` is
                not a known priority.
        """
        payload: WireDict = {}

        for key in ("to", "condition", "collapse_key", "restricted_package_name"):
            value = getattr(self, key)
            if not _is_absent(value):
                payload[key] = value

        if self.registration_ids:
            payload["registration_ids"] = list(self.registration_ids)

        if not _is_absent(self.priority):
            payload["priority"] = Priority(self.priority).value

        if self.content_available:
            payload["content_available"] = True

        # An explicit zero is meaningful ("now or never"), only None is omitted.
        if self.time_to_live is not None:
            if isinstance(self.time_to_live, bool) or not isinstance(self.time_to_live, int):
                raise TypeError(f"time_to_live must be an integer, got {type(self.time_to_live).__name__}")
            if self.time_to_live < 0:
                raise ValueError(f"time_to_live must not be negative, got {self.time_to_live}")
            payload["time_to_live"] = self.time_to_live

        if self.dry_run:
            payload["dry_run"] = True

        if self.data is not None:
            payload["data"] = dict(self.data)

        if self.notification is not None:
            payload["notification"] = self.notification.to_dict()

        return payload

    def to_json(self) -> str:
        """Encodes the message body.

        Raises:
            TypeError, ValueError: If the message cannot be represented as
                strict JSON (unsupported data values, NaN, invalid options).
        """
        return json.dumps(self.to_dict(), allow_nan=False, separators=(",", ":"))

    def target_summary(self) -> str:
        """Short description of the addressing mode, safe to log."""
        if self.to:
            return "to=1"
        if self.registration_ids:
            return f"registration_ids={len(self.registration_ids)}"
        if self.condition:
            return "condition"
        return "no target"
