"""Shared Prometheus metric helpers for the RPSLS service.

This module centralises metric registration so repeated imports (the app,
the tests, reloads under uvicorn) reuse the same collectors without raising
"Collector already registered" errors.
"""
from __future__ import annotations

from typing import Optional, Sequence
import logging

from prometheus_client import Counter, Histogram, REGISTRY

_logger = logging.getLogger(__name__)

FAILURE_REASONS = ("transport", "payload", "value")
ROUND_OUTCOMES = ("win", "lose", "tie")


def _get_or_create_metric(metric_cls, name: str, documentation: str, *, labelnames: Optional[Sequence[str]] = None, buckets: Optional[Sequence[float]] = None):
    """Register (or retrieve) a metric by name."""
    try:
        if metric_cls is Histogram and buckets is not None:
            return metric_cls(name, documentation, labelnames=labelnames or (), buckets=buckets)
        return metric_cls(name, documentation, labelnames=labelnames or ())
    except ValueError:
        # prometheus_client registers counters under their base name
        base_name = name[:-len("_total")] if name.endswith("_total") else name
        existing = getattr(REGISTRY, "_names_to_collectors", {}).get(base_name)
        if existing is None:
            existing = getattr(REGISTRY, "_names_to_collectors", {}).get(name)
        if existing is None:
            raise
        return existing


def get_counter(name: str, documentation: str, labelnames: Optional[Sequence[str]] = None):
    return _get_or_create_metric(Counter, name, documentation, labelnames=labelnames)


def get_histogram(
    name: str,
    documentation: str,
    labelnames: Optional[Sequence[str]] = None,
    *,
    buckets: Optional[Sequence[float]] = None,
):
    return _get_or_create_metric(Histogram, name, documentation, labelnames=labelnames, buckets=buckets)


# Random source -------------------------------------------------------------------

_RANDOM_ATTEMPTS_COUNTER = get_counter(
    "rpsls_random_source_attempts_total",
    "Attempts made against the external random-number endpoint",
    ["status"],
)

_RANDOM_RETRIES_COUNTER = get_counter(
    "rpsls_random_source_retries_total",
    "Attempts that were retried after a failure",
)

_RANDOM_FALLBACKS_COUNTER = get_counter(
    "rpsls_random_source_fallbacks_total",
    "Acquisitions that exhausted their retries and used a local fallback value",
    ["reason"],
)

_RANDOM_LATENCY_HISTOGRAM = get_histogram(
    "rpsls_random_source_latency_seconds",
    "Wall time of one acquisition including retries",
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 20.0),
)

# Gameplay ------------------------------------------------------------------------

_ROUNDS_COUNTER = get_counter(
    "rpsls_rounds_total",
    "Rounds played, by outcome from the player's perspective",
    ["outcome"],
)


def record_attempt(success: bool) -> None:
    _RANDOM_ATTEMPTS_COUNTER.labels(status="success" if success else "failure").inc()


def record_retry() -> None:
    _RANDOM_RETRIES_COUNTER.inc()


def record_fallback(reason: str) -> None:
    if reason not in FAILURE_REASONS:
        _logger.warning("Unknown fallback reason '%s'; recording as 'transport'", reason)
        reason = "transport"
    _RANDOM_FALLBACKS_COUNTER.labels(reason=reason).inc()


def observe_acquisition_latency(seconds: float) -> None:
    _RANDOM_LATENCY_HISTOGRAM.observe(seconds)


def record_round(outcome: str) -> None:
    _ROUNDS_COUNTER.labels(outcome=outcome).inc()


def initialize_all_metrics() -> None:
    """Touch every label combination so they export before first use.

    Prometheus only exports labelled series that have been touched at least
    once; ``inc(0)`` keeps dashboards drawing flat lines instead of "No data".
    """
    for status in ("success", "failure"):
        _RANDOM_ATTEMPTS_COUNTER.labels(status=status).inc(0)
    for reason in FAILURE_REASONS:
        _RANDOM_FALLBACKS_COUNTER.labels(reason=reason).inc(0)
    for outcome in ROUND_OUTCOMES:
        _ROUNDS_COUNTER.labels(outcome=outcome).inc(0)
