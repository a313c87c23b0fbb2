"""Domain Events related to dashboard API calls and rate-limit retries.

Examples include events for when calls are initiated, retried, fail, or succeed.
"""

from dataclasses import dataclass, field
import time
from typing import Optional


@dataclass
class DomainEvent:
    """Base class for domain events."""
    pass


# --- Specific API Events ---

@dataclass
class ApiCallInitiated(DomainEvent):
    """Event triggered when an API call is about to be made."""
    method: str  # e.g., 'GET', 'POST'
    endpoint: str
    attempt_number: int = 1
    timestamp: float = field(default_factory=time.time)


@dataclass
class ApiCallSucceeded(DomainEvent):
    """Event triggered when an API call succeeds."""
    method: str
    endpoint: str
    latency_ms: float
    attempt_number: int = 1
    timestamp: float = field(default_factory=time.time)


@dataclass
class ApiCallFailed(DomainEvent):
    """Event triggered when an API call fails definitively (after retries)."""
    method: str
    endpoint: str
    error_type: str
    error_message: str
    status_code: Optional[int] = None
    timestamp: float = field(default_factory=time.time)


@dataclass
class RetryScheduled(DomainEvent):
    """Event triggered when a rate-limited call is scheduled for another attempt."""
    method: str
    endpoint: str
    attempt_number: int
    delay_seconds: float
    timestamp: float = field(default_factory=time.time)
