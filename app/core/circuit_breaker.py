"""
Circuit breaker for calls to third-party HTTP services.

State lives in the Django cache so every web worker and Celery worker sees
the same circuit. When the upstream keeps failing, callers fail fast with
CircuitOpenError instead of waiting on timeouts.

States:
    - CLOSED: Normal operation, calls pass through
    - OPEN: Upstream is failing, calls are rejected until recovery_timeout
    - HALF_OPEN: Recovery probe, up to half_open_max_calls calls pass

Usage:
    from core.circuit_breaker import CircuitBreaker, CircuitOpenError

    external_posts_circuit = CircuitBreaker(
        "external-posts",
        failure_threshold=5,
        recovery_timeout=60,
        failure_exceptions=(ExternalServiceError,),
    )

    with external_posts_circuit.call():
        response = session.get(url, timeout=5)

Note:
    - Only exceptions matching failure_exceptions count as failures. A 404
      from an otherwise healthy upstream should not open the circuit.
    - Cache errors never block calls; the circuit fails open.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from django.core.cache import cache

if TYPE_CHECKING:
    from collections.abc import Generator

logger = logging.getLogger(__name__)


class CircuitState(str, Enum):
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


class CircuitOpenError(Exception):
    """
    Raised when attempting to call through an open circuit.

    Signals that the upstream is considered unavailable, not that a call
    actually failed. The API layer maps it to 503.
    """


@dataclass
class CircuitBreakerConfig:
    failure_threshold: int = 5
    recovery_timeout: int = 60
    half_open_max_calls: int = 1
    # Must outlive recovery_timeout
    cache_ttl: int = 3600


class CircuitBreaker:
    """
    Cache-backed circuit breaker.

    Example:
        cb = CircuitBreaker("external-posts", failure_threshold=3)

        if cb.is_available():
            try:
                data = fetch()
                cb.record_success()
            except requests.RequestException:
                cb.record_failure()
                raise
    """

    def __init__(
        self,
        name: str,
        failure_threshold: int = 5,
        recovery_timeout: int = 60,
        half_open_max_calls: int = 1,
        failure_exceptions: tuple[type[BaseException], ...] = (Exception,),
    ):
        self.name = name
        self.config = CircuitBreakerConfig(
            failure_threshold=failure_threshold,
            recovery_timeout=recovery_timeout,
            half_open_max_calls=half_open_max_calls,
        )
        self.failure_exceptions = failure_exceptions

        prefix = f"circuit:{name}"
        self._state_key = f"{prefix}:state"
        self._failures_key = f"{prefix}:failures"
        self._opened_at_key = f"{prefix}:opened_at"
        self._half_open_calls_key = f"{prefix}:half_open_calls"

    def is_available(self) -> bool:
        """
        Return True when a call may go through.

        An open circuit whose recovery timeout has elapsed moves to half-open
        and lets this call through as the first probe.
        """
        try:
            state = self._get_state()

            if state == CircuitState.OPEN:
                opened_at = cache.get(self._opened_at_key)
                if (
                    opened_at is None
                    or time.time() - opened_at < self.config.recovery_timeout
                ):
                    return False
                self._set_state(CircuitState.HALF_OPEN)
                cache.set(self._half_open_calls_key, 0, timeout=self.config.cache_ttl)
                logger.info(
                    "Circuit breaker transitioning to half-open",
                    extra={"circuit": self.name},
                )
                state = CircuitState.HALF_OPEN

            if state == CircuitState.HALF_OPEN:
                calls = self._incr(self._half_open_calls_key)
                return calls <= self.config.half_open_max_calls

            return True

        except Exception as e:
            logger.warning(
                f"Circuit breaker cache error, failing open: {e}",
                extra={"circuit": self.name},
            )
            return True

    def record_success(self) -> None:
        """Reset the failure count and close a half-open circuit."""
        try:
            if self._get_state() == CircuitState.HALF_OPEN:
                self._set_state(CircuitState.CLOSED)
                logger.info(
                    "Circuit breaker closed after successful recovery",
                    extra={"circuit": self.name},
                )
            cache.set(self._failures_key, 0, timeout=self.config.cache_ttl)
        except Exception as e:
            logger.warning(
                f"Circuit breaker failed to record success: {e}",
                extra={"circuit": self.name},
            )

    def record_failure(self) -> None:
        """Count a failure and open the circuit at the threshold."""
        try:
            if self._get_state() == CircuitState.HALF_OPEN:
                self._open()
                logger.warning(
                    "Circuit breaker reopened after failed recovery attempt",
                    extra={"circuit": self.name},
                )
                return

            failures = self._incr(self._failures_key)
            if failures >= self.config.failure_threshold:
                self._open()
                logger.warning(
                    f"Circuit breaker opened after {failures} failures",
                    extra={
                        "circuit": self.name,
                        "failure_count": failures,
                        "threshold": self.config.failure_threshold,
                    },
                )
        except Exception as e:
            logger.warning(
                f"Circuit breaker failed to record failure: {e}",
                extra={"circuit": self.name},
            )

    @contextmanager
    def call(self) -> Generator[None, None, None]:
        """
        Wrap a call, recording success or failure automatically.

        Raises:
            CircuitOpenError: If the circuit rejects the call
        """
        if not self.is_available():
            raise CircuitOpenError(f"Circuit '{self.name}' is open")

        try:
            yield
        except self.failure_exceptions:
            self.record_failure()
            raise
        self.record_success()

    def reset(self) -> None:
        """Force the circuit closed and clear counters."""
        cache.delete_many(
            [
                self._state_key,
                self._failures_key,
                self._opened_at_key,
                self._half_open_calls_key,
            ]
        )
        logger.info("Circuit breaker manually reset", extra={"circuit": self.name})

    def get_status(self) -> dict:
        """Snapshot of the circuit for health checks and admin tooling."""
        state = self._get_state()
        status = {
            "name": self.name,
            "state": state.value,
            "failure_count": cache.get(self._failures_key, 0),
            "failure_threshold": self.config.failure_threshold,
        }

        opened_at = cache.get(self._opened_at_key)
        if state != CircuitState.CLOSED and opened_at:
            elapsed = time.time() - opened_at
            status["opened_seconds_ago"] = int(elapsed)
            status["recovery_in_seconds"] = max(
                0, int(self.config.recovery_timeout - elapsed)
            )
        return status

    # =========================================================================
    # Cache operations
    # =========================================================================

    def _get_state(self) -> CircuitState:
        try:
            return CircuitState(cache.get(self._state_key, CircuitState.CLOSED.value))
        except ValueError:
            return CircuitState.CLOSED

    def _set_state(self, state: CircuitState) -> None:
        cache.set(self._state_key, state.value, timeout=self.config.cache_ttl)

    def _open(self) -> None:
        self._set_state(CircuitState.OPEN)
        cache.set(self._opened_at_key, time.time(), timeout=self.config.cache_ttl)

    def _incr(self, key: str) -> int:
        if cache.add(key, 1, timeout=self.config.cache_ttl):
            return 1
        try:
            return cache.incr(key)
        except ValueError:
            cache.set(key, 1, timeout=self.config.cache_ttl)
            return 1

    def __repr__(self) -> str:
        return f"CircuitBreaker(name={self.name!r}, state={self._get_state().value})"
