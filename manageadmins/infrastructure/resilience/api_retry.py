"""Service for executing dashboard API calls with rate-limit retries.

Only rate limiting (HTTP 429) is retried, after waiting the number of
seconds the server sends in its Retry-After header. Every other failure is
reported once and converted into a Failure outcome; this layer never raises
for transport problems.
"""

import asyncio
import logging
import math
import time
from typing import Any, Awaitable, Callable, Mapping, Optional

from manageadmins.domain.events.api_events import (
    ApiCallFailed,
    ApiCallInitiated,
    ApiCallSucceeded,
    DomainEvent,
    RetryScheduled,
)
from manageadmins.domain.models.errors import TransportError
from manageadmins.domain.models.outcome import Failure, FailureReason, RequestOutcome, Success
from manageadmins.infrastructure.config.settings import (
    API_MAX_RETRIES,
    API_MAX_RETRY_AFTER_S,
    API_STATUS_RATE_LIMIT,
)
from manageadmins.infrastructure.http.transport import TransportClient

logger = logging.getLogger(__name__)

RETRY_AFTER_HEADER = "retry-after"

SleepFunc = Callable[[float], Awaitable[None]]
EventListener = Callable[[DomainEvent], None]


def parse_retry_after(headers: Mapping[str, str], ceiling_s: float) -> Optional[float]:
    """Returns the Retry-After delay in seconds, or None if it is unusable.

    Missing, non-numeric, negative, non-finite, and above-ceiling values are
    all unusable; HTTP-date values are not accepted.
    """
    raw = None
    for key, value in headers.items():
        if key.lower() == RETRY_AFTER_HEADER:
            raw = value
            break
    if raw is None:
        return None
    try:
        delay = float(str(raw).strip())
    except ValueError:
        return None
    if not math.isfinite(delay) or delay < 0 or delay > ceiling_s:
        return None
    return delay


class RetryingRequestExecutor:
    """Issues requests through the transport, waiting out rate limits."""

    def __init__(
        self,
        transport: TransportClient,
        max_retries: int = API_MAX_RETRIES,
        rate_limit_status: int = API_STATUS_RATE_LIMIT,
        max_retry_after_s: float = API_MAX_RETRY_AFTER_S,
        sleep: SleepFunc = asyncio.sleep,
        event_listener: Optional[EventListener] = None,
    ):
        """Initializes the RetryingRequestExecutor.

        Args:
            transport: Performs the individual HTTP calls.
            max_retries: Retries allowed after the first attempt.
            rate_limit_status: Status code that signals rate limiting.
            max_retry_after_s: Largest Retry-After value that will be honoured.
            sleep: Awaitable used for the backoff wait; asyncio.sleep by default,
                so the wait can be cancelled with the surrounding task.
            event_listener: Optional callback receiving API domain events.
        """
        if max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        self.transport = transport
        self.max_retries = max_retries
        self.rate_limit_status = rate_limit_status
        self.max_retry_after_s = max_retry_after_s
        self._sleep = sleep
        self._event_listener = event_listener

        logger.debug(
            f"RetryingRequestExecutor initialized: max_retries={max_retries}, "
            f"rate_limit_status={rate_limit_status}, max_retry_after={max_retry_after_s}s"
        )

    def _dispatch_event(self, event: DomainEvent) -> None:
        logger.debug(f"EVENT: {event}")
        if self._event_listener:
            self._event_listener(event)

    def _fail(self, method: str, path: str, reason: FailureReason, error: TransportError, message: str) -> Failure:
        logger.error(message)
        self._dispatch_event(ApiCallFailed(
            method=method, endpoint=path, error_type=reason.value,
            error_message=str(error), status_code=error.status_code,
        ))
        return Failure(reason=reason, message=message, status_code=error.status_code, headers=error.headers)

    async def execute(self, method: str, path: str, json_body: Optional[Any] = None) -> RequestOutcome:
        """Executes one logical request, retrying while rate limited.

        Args:
            method: HTTP verb.
            path: Path relative to the API base URL.
            json_body: Optional JSON request body.

        Returns:
            Success with the decoded payload, or Failure describing why no
            payload is available. At most max_retries + 1 calls are made.
        """
        method = method.upper()
        retries = 0
        while True:
            attempt = retries + 1
            self._dispatch_event(ApiCallInitiated(method=method, endpoint=path, attempt_number=attempt))
            start_time = time.perf_counter()
            try:
                payload = await self.transport.request(method, path, json_body)
            except TransportError as e:
                if e.status_code is None:
                    return self._fail(method, path, FailureReason.TRANSPORT, e, str(e))
                if e.status_code != self.rate_limit_status:
                    return self._fail(method, path, FailureReason.HTTP_STATUS, e, str(e))

                if retries >= self.max_retries:
                    return self._fail(
                        method, path, FailureReason.RATE_LIMITED, e,
                        f"Reached max retries ({self.max_retries}) for {method} {path}",
                    )

                delay = parse_retry_after(e.headers, self.max_retry_after_s)
                if delay is None:
                    return self._fail(
                        method, path, FailureReason.BAD_RETRY_AFTER, e,
                        f"Rate limited on {method} {path} without a usable Retry-After "
                        f"header ({e.headers.get(RETRY_AFTER_HEADER)!r})",
                    )

                retries += 1
                logger.info(f"Hit max request rate. Retrying {retries} after {delay:g} seconds")
                self._dispatch_event(RetryScheduled(
                    method=method, endpoint=path, attempt_number=attempt, delay_seconds=delay,
                ))
                await self._sleep(delay)
                continue

            latency_ms = (time.perf_counter() - start_time) * 1000
            self._dispatch_event(ApiCallSucceeded(
                method=method, endpoint=path, latency_ms=latency_ms, attempt_number=attempt,
            ))
            return Success(payload)
