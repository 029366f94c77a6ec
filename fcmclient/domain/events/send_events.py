"""Domain Events emitted while sending a message.

A client calls its event handler once before the request is issued and
once more when the call succeeds or fails.
"""

from dataclasses import dataclass, field
import time
from typing import Callable, Optional


@dataclass
class DomainEvent:
    """Base class for domain events."""
    pass


@dataclass
class SendInitiated(DomainEvent):
    """Event triggered when a message is about to be posted."""
    endpoint: str
    target: str  # addressing summary, e.g. 'registration_ids=3'
    dry_run: bool = False
    timestamp: float = field(default_factory=time.time)


@dataclass
class SendSucceeded(DomainEvent):
    """Event triggered when the gateway accepted the request and the response decoded."""
    endpoint: str
    latency_ms: float
    success: int
    failure: int
    canonical_ids: int
    multicast_id: int = 0
    retry_after: Optional[str] = None
    timestamp: float = field(default_factory=time.time)


@dataclass
class SendFailed(DomainEvent):
    """Event triggered when a send raised an error."""
    endpoint: str
    error_type: str
    error_message: str
    status_code: Optional[int] = None
    timestamp: float = field(default_factory=time.time)


EventHandler = Callable[[DomainEvent], None]
