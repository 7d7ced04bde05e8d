"""
Tests for the cache-backed CircuitBreaker.

Covers:
- State transitions (closed -> open -> half-open -> closed)
- Failure counting and the threshold
- The call() context manager and failure_exceptions filtering
- Shared state between instances with the same name
- Failing open when the cache errors
"""

from __future__ import annotations

from unittest.mock import patch

import pytest
from django.core.cache import cache

from core.circuit_breaker import CircuitBreaker, CircuitOpenError
from core.exceptions import ExternalServiceError, NotFoundError


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def circuit():
    """Circuit breaker with test-friendly settings."""
    return CircuitBreaker(
        name="test-service",
        failure_threshold=3,
        recovery_timeout=5,
        half_open_max_calls=1,
    )


def trip(circuit: CircuitBreaker) -> float:
    """Open the circuit and return the recorded opened_at timestamp."""
    for _ in range(circuit.config.failure_threshold):
        circuit.record_failure()
    return cache.get(circuit._opened_at_key)


class TestCircuitBreakerClosed:
    """Closed circuit behaviour."""

    def test_starts_closed_and_available(self, circuit):
        status = circuit.get_status()

        assert status["state"] == "closed"
        assert status["failure_count"] == 0
        assert circuit.is_available() is True

    def test_failures_below_threshold_keep_circuit_closed(self, circuit):
        circuit.record_failure()
        circuit.record_failure()

        assert circuit.is_available() is True
        assert circuit.get_status()["failure_count"] == 2

    def test_reaching_threshold_opens_circuit(self, circuit):
        trip(circuit)

        assert circuit.is_available() is False
        assert circuit.get_status()["state"] == "open"

    def test_success_resets_failure_count(self, circuit):
        circuit.record_failure()
        circuit.record_failure()

        circuit.record_success()

        assert circuit.get_status()["failure_count"] == 0


class TestCircuitBreakerRecovery:
    """Recovery through the half-open state."""

    def test_transitions_to_half_open_after_timeout(self, circuit):
        opened_at = trip(circuit)

        with patch("core.circuit_breaker.time.time", return_value=opened_at + 6):
            assert circuit.is_available() is True
            assert circuit.get_status()["state"] == "half_open"

    def test_stays_open_before_timeout(self, circuit):
        opened_at = trip(circuit)

        with patch("core.circuit_breaker.time.time", return_value=opened_at + 2):
            assert circuit.is_available() is False

    def test_successful_probe_closes_circuit(self, circuit):
        opened_at = trip(circuit)

        with patch("core.circuit_breaker.time.time", return_value=opened_at + 6):
            circuit.is_available()
            circuit.record_success()

        assert circuit.get_status()["state"] == "closed"
        assert circuit.is_available() is True

    def test_failed_probe_reopens_circuit(self, circuit):
        opened_at = trip(circuit)

        with patch("core.circuit_breaker.time.time", return_value=opened_at + 6):
            circuit.is_available()
            circuit.record_failure()
            assert circuit.get_status()["state"] == "open"
            assert circuit.is_available() is False

    def test_half_open_limits_probe_calls(self):
        circuit = CircuitBreaker(
            "limited-service",
            failure_threshold=3,
            recovery_timeout=1,
            half_open_max_calls=2,
        )
        opened_at = trip(circuit)

        with patch("core.circuit_breaker.time.time", return_value=opened_at + 2):
            assert circuit.is_available() is True
            assert circuit.is_available() is True
            assert circuit.is_available() is False


class TestCircuitBreakerContextManager:
    """call() context manager."""

    def test_records_success(self, circuit):
        circuit.record_failure()

        with circuit.call():
            pass

        assert circuit.get_status()["failure_count"] == 0

    def test_records_failure_and_reraises(self, circuit):
        with pytest.raises(ValueError):
            with circuit.call():
                raise ValueError("boom")

        assert circuit.get_status()["failure_count"] == 1

    def test_raises_circuit_open_error_when_open(self, circuit):
        trip(circuit)

        with pytest.raises(CircuitOpenError, match="test-service"):
            with circuit.call():
                pass

    def test_ignores_exceptions_outside_failure_exceptions(self):
        circuit = CircuitBreaker(
            "external-posts",
            failure_threshold=1,
            failure_exceptions=(ExternalServiceError,),
        )

        with pytest.raises(NotFoundError):
            with circuit.call():
                raise NotFoundError("missing")

        assert circuit.get_status()["failure_count"] == 0
        assert circuit.is_available() is True

    def test_counts_matching_failure_exceptions(self):
        circuit = CircuitBreaker(
            "external-posts",
            failure_threshold=1,
            failure_exceptions=(ExternalServiceError,),
        )

        with pytest.raises(ExternalServiceError):
            with circuit.call():
                raise ExternalServiceError("upstream down")

        assert circuit.get_status()["state"] == "open"


class TestCircuitBreakerSharedState:
    """State lives in the cache, keyed by name."""

    def test_state_shared_across_instances(self):
        first = CircuitBreaker("shared-service", failure_threshold=3)
        second = CircuitBreaker("shared-service", failure_threshold=3)

        trip(first)

        assert second.is_available() is False

    def test_different_names_are_independent(self):
        circuit_a = CircuitBreaker("service-a", failure_threshold=3)
        circuit_b = CircuitBreaker("service-b", failure_threshold=3)

        trip(circuit_a)

        assert circuit_b.is_available() is True

    def test_reset_closes_circuit(self, circuit):
        trip(circuit)

        circuit.reset()

        status = circuit.get_status()
        assert status["state"] == "closed"
        assert status["failure_count"] == 0


class TestCircuitBreakerCacheFailure:
    """Cache errors never block callers."""

    def test_is_available_fails_open(self, circuit):
        with patch.object(cache, "get", side_effect=Exception("Cache error")):
            assert circuit.is_available() is True

    def test_record_methods_swallow_cache_errors(self, circuit):
        with patch.object(cache, "get", side_effect=Exception("Cache error")):
            circuit.record_success()
            circuit.record_failure()


class TestCircuitBreakerStatus:
    def test_status_includes_timing_when_open(self, circuit):
        trip(circuit)

        status = circuit.get_status()

        assert "opened_seconds_ago" in status
        assert "recovery_in_seconds" in status

    def test_repr_includes_name_and_state(self, circuit):
        assert repr(circuit) == "CircuitBreaker(name='test-service', state=closed)"
