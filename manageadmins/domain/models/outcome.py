"""Result type returned by every dashboard API operation.

An operation either succeeds with a payload or fails with a reason. Callers
must check which one they received; a ``Success`` may still carry a ``None``
payload when the API answers with an empty body (e.g. 204 on delete).
"""

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union


class FailureReason(enum.Enum):
    """Why a request produced no payload."""
    TRANSPORT = "transport"              # Network error, timeout or undecodable body
    HTTP_STATUS = "http_status"          # Non-2xx response other than rate limiting
    RATE_LIMITED = "rate_limited"        # Still rate limited after the last retry
    BAD_RETRY_AFTER = "bad_retry_after"  # 429 without a usable Retry-After value


@dataclass(frozen=True)
class Success:
    """A request that completed with a 2xx status."""
    payload: Any = None

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """A request that was abandoned."""
    reason: FailureReason
    message: str
    status_code: Optional[int] = None
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return False

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


RequestOutcome = Union[Success, Failure]
