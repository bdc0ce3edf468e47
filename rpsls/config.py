"""Centralized configuration helpers for the RPSLS game service.

This module provides a single place to resolve environment-dependent values,
so that the API, the random-number client, and the tests all interpret
configuration flags consistently.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

_DEFAULT_RANDOM_NUMBER_API_URL = "http://localhost:5000/random"
_DEFAULT_TIMEOUT_SECONDS = 3.0
_DEFAULT_MAX_RETRIES = 3  # 4 attempts in total
_DEFAULT_RETRY_DELAY_SECONDS = 0.0  # fail fast; raise to back off between attempts
_DEFAULT_FALLBACK_MAX = 100
_DEFAULT_DEADLINE_SECONDS = 10.0  # no retry starts after this much time per acquisition
_DEFAULT_LOG_LEVEL = "INFO"
_DEFAULT_PORT = 5081


@dataclass(frozen=True)
class RandomSourceSettings:
    """Snapshot of everything the random-number client needs."""

    api_url: str
    timeout_seconds: float = _DEFAULT_TIMEOUT_SECONDS
    max_retries: int = _DEFAULT_MAX_RETRIES
    retry_delay_seconds: float = _DEFAULT_RETRY_DELAY_SECONDS
    fallback_max: int = _DEFAULT_FALLBACK_MAX
    deadline_seconds: float = _DEFAULT_DEADLINE_SECONDS


@lru_cache(maxsize=1)
def get_random_number_api_url() -> str:
    """Return the URL of the external random-number endpoint."""
    return os.getenv("RANDOM_NUMBER_API_URL", _DEFAULT_RANDOM_NUMBER_API_URL)


@lru_cache(maxsize=1)
def get_random_number_timeout() -> float:
    """Return the timeout applied to each individual attempt, in seconds.

    An attempt never waits past the acquisition deadline, so the worst-case
    latency is ``min((max_retries + 1) * timeout, deadline + timeout)``.
    """
    return float(os.getenv("RANDOM_NUMBER_TIMEOUT_SECONDS", str(_DEFAULT_TIMEOUT_SECONDS)))


@lru_cache(maxsize=1)
def get_random_number_max_retries() -> int:
    """Return how many times a failed attempt is retried."""
    return max(0, int(os.getenv("RANDOM_NUMBER_MAX_RETRIES", str(_DEFAULT_MAX_RETRIES))))


@lru_cache(maxsize=1)
def get_random_number_retry_delay() -> float:
    """Return the pause between attempts in seconds (0 disables it)."""
    return max(0.0, float(os.getenv("RANDOM_NUMBER_RETRY_DELAY_SECONDS", str(_DEFAULT_RETRY_DELAY_SECONDS))))


@lru_cache(maxsize=1)
def get_fallback_max() -> int:
    """Return the inclusive upper bound of locally generated fallback values."""
    return max(1, int(os.getenv("RANDOM_NUMBER_FALLBACK_MAX", str(_DEFAULT_FALLBACK_MAX))))


@lru_cache(maxsize=1)
def get_random_number_deadline() -> float:
    """Return the time budget of one acquisition; no retry starts after it."""
    return max(0.0, float(os.getenv("RANDOM_NUMBER_DEADLINE_SECONDS", str(_DEFAULT_DEADLINE_SECONDS))))


@lru_cache(maxsize=1)
def get_log_level() -> str:
    return os.getenv("RPSLS_LOG_LEVEL", _DEFAULT_LOG_LEVEL).upper()


@lru_cache(maxsize=1)
def get_port() -> int:
    return int(os.getenv("PORT", str(_DEFAULT_PORT)))


def get_random_source_settings() -> RandomSourceSettings:
    """Build a settings snapshot from the environment."""
    return RandomSourceSettings(
        api_url=get_random_number_api_url(),
        timeout_seconds=get_random_number_timeout(),
        max_retries=get_random_number_max_retries(),
        retry_delay_seconds=get_random_number_retry_delay(),
        fallback_max=get_fallback_max(),
        deadline_seconds=get_random_number_deadline(),
    )


def clear_config_cache() -> None:
    """Forget cached values so environment changes are picked up (tests)."""
    for getter in (
        get_random_number_api_url,
        get_random_number_timeout,
        get_random_number_max_retries,
        get_random_number_retry_delay,
        get_fallback_max,
        get_random_number_deadline,
        get_log_level,
        get_port,
    ):
        getter.cache_clear()
