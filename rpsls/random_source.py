"""
Client for the external random-number endpoint.

Every acquisition makes up to ``max_retries + 1`` attempts. An attempt fails
when the transport raises (connection error, timeout), when the status is not
2xx, when the body is not a JSON object carrying an integer
``random_number``, or when that integer is not positive. No attempt starts
after ``deadline_seconds``. Once the attempts are exhausted a local value in
``[1, fallback_max]`` is returned instead, so callers always receive a usable
number.
"""
from __future__ import annotations

import logging
import random
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

import requests

from rpsls.config import RandomSourceSettings, get_random_source_settings
from rpsls.metrics import (
    observe_acquisition_latency,
    record_attempt,
    record_fallback,
    record_retry,
)

logger = logging.getLogger(__name__)

RANDOM_NUMBER_FIELD = "random_number"
_MIN_ATTEMPT_TIMEOUT = 0.001


class RandomSourceError(Exception):
    """Base class for a single failed attempt."""

    reason = "transport"


class RandomSourceTransportError(RandomSourceError):
    reason = "transport"


class RandomSourcePayloadError(RandomSourceError):
    reason = "payload"


class RandomSourceValueError(RandomSourceError):
    reason = "value"


@dataclass(frozen=True)
class AcquisitionResult:
    """Outcome of one attempt: either ``value`` or ``error`` is set."""

    value: Optional[int] = None
    error: Optional[RandomSourceError] = None

    @property
    def is_success(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: int) -> "AcquisitionResult":
        return cls(value=value)

    @classmethod
    def failure(cls, error: RandomSourceError) -> "AcquisitionResult":
        return cls(error=error)


@dataclass(frozen=True)
class RandomDraw:
    """What one call to :meth:`RandomSource.draw` produced and how."""

    value: int
    attempts: int
    fallback_reason: Optional[str] = None

    @property
    def retries(self) -> int:
        return max(0, self.attempts - 1)

    @property
    def used_fallback(self) -> bool:
        return self.fallback_reason is not None


class RandomSource:
    def __init__(
        self,
        settings: Optional[RandomSourceSettings] = None,
        session: Optional[Any] = None,
        rng: Optional[random.Random] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.settings = settings or get_random_source_settings()
        self._injected_session = session
        # requests.Session is not documented as thread-safe; one per worker thread
        self._local = threading.local()
        self._sessions: List[requests.Session] = []
        self._sessions_lock = threading.Lock()
        self._rng = rng or random.Random()
        self._sleep = sleep
        self._clock = clock

    def _session(self) -> Any:
        if self._injected_session is not None:
            return self._injected_session
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            with self._sessions_lock:
                self._sessions.append(session)
            self._local.session = session
        return session

    def close(self) -> None:
        if self._injected_session is not None:
            close = getattr(self._injected_session, "close", None)
            if callable(close):
                close()
        with self._sessions_lock:
            sessions, self._sessions = self._sessions, []
        for session in sessions:
            session.close()

    def _request_number(self, timeout: Optional[float] = None) -> int:
        if timeout is None:
            timeout = self.settings.timeout_seconds
        try:
            response = self._session().get(self.settings.api_url, timeout=timeout)
        except requests.RequestException as exc:
            raise RandomSourceTransportError(f"{type(exc).__name__}: {exc}") from exc

        logger.info("Received HTTP response with status code: %s", response.status_code)
        # raise_for_status() lets unfollowed 1xx/3xx responses through
        if not 200 <= response.status_code < 300:
            raise RandomSourceTransportError(
                f"Response status code does not indicate success: {response.status_code}"
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise RandomSourcePayloadError(f"response body is not valid JSON: {exc}") from exc

        if not isinstance(payload, dict) or RANDOM_NUMBER_FIELD not in payload:
            raise RandomSourcePayloadError(f"expected a JSON object with '{RANDOM_NUMBER_FIELD}'")

        value = payload[RANDOM_NUMBER_FIELD]
        # bool is an int subclass; JSON true must not pass as 1
        if isinstance(value, bool) or not isinstance(value, int):
            raise RandomSourcePayloadError(f"'{RANDOM_NUMBER_FIELD}' is not an integer: {value!r}")
        if value <= 0:
            raise RandomSourceValueError(f"Invalid random number received: {value}")
        return value

    def fetch_once(self, timeout: Optional[float] = None) -> AcquisitionResult:
        """Make exactly one attempt and classify it."""
        try:
            value = self._request_number(timeout)
        except RandomSourceError as exc:
            return AcquisitionResult.failure(exc)
        logger.info("Successfully retrieved random number: %s", value)
        return AcquisitionResult.success(value)

    def _fallback_value(self) -> int:
        return self._rng.randint(1, self.settings.fallback_max)

    def draw(self) -> RandomDraw:
        """Acquire a positive integer and report how it was obtained.

        No retry starts once ``deadline_seconds`` have passed, and each
        attempt's timeout is cut down to the time that remains.
        """
        started = time.perf_counter()
        deadline = self._clock() + self.settings.deadline_seconds
        max_attempts = self.settings.max_retries + 1
        last_error: Optional[RandomSourceError] = None
        attempts = 0

        try:
            while attempts < max_attempts:
                if last_error is not None:
                    if self.settings.retry_delay_seconds > 0:
                        self._sleep(self.settings.retry_delay_seconds)
                    if self._clock() >= deadline:
                        logger.warning(
                            "Deadline of %.1fs reached after %d attempts; not retrying",
                            self.settings.deadline_seconds,
                            attempts,
                        )
                        break
                    record_retry()
                    logger.warning("Retry %d due to error: %s", attempts, last_error)

                remaining = deadline - self._clock()
                timeout = min(self.settings.timeout_seconds, max(remaining, _MIN_ATTEMPT_TIMEOUT))
                attempts += 1
                result = self.fetch_once(timeout)
                record_attempt(result.is_success)
                if result.is_success:
                    return RandomDraw(value=result.value, attempts=attempts)
                last_error = result.error

            value = self._fallback_value()
            logger.error(
                "Unexpected error while fetching random number after %d attempts: %s",
                attempts,
                last_error,
            )
            logger.warning(
                "All retries failed. Returning a random number between 1 and %d as fallback due to: %s",
                self.settings.fallback_max,
                last_error,
            )
            record_fallback(last_error.reason)
            return RandomDraw(value=value, attempts=attempts, fallback_reason=last_error.reason)
        finally:
            observe_acquisition_latency(time.perf_counter() - started)

    def acquire(self) -> int:
        """Return a positive integer; never raises for endpoint failures."""
        return self.draw().value


_random_source: Optional[RandomSource] = None
_random_source_lock = threading.Lock()


def get_random_source() -> RandomSource:
    """Get the process-wide random source, creating it on first use."""
    global _random_source
    with _random_source_lock:
        if _random_source is None:
            _random_source = RandomSource()
        return _random_source


def reset_random_source() -> None:
    """Close and forget the process-wide random source."""
    global _random_source
    with _random_source_lock:
        source, _random_source = _random_source, None
    if source is not None:
        source.close()
