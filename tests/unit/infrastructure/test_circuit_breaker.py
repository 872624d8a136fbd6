import logging

import pytest
from pybreaker import CircuitBreakerError, CircuitBreakerState

from hotel_booking.infrastructure.circuit_breaker import build_gateway_breaker


def failing():
    raise ConnectionError("portal down")


def test_breaker_opens_after_fail_max(caplog):
    breaker = build_gateway_breaker(fail_max=2, reset_timeout=60)
    assert breaker.name == "payment_gateway_circuit_breaker"

    with pytest.raises(ConnectionError):
        breaker.call(failing)
    with caplog.at_level(logging.WARNING, logger="hotel_booking.infrastructure.circuit_breaker"):
        with pytest.raises(CircuitBreakerError):
            breaker.call(failing)

    assert breaker.current_state == CircuitBreakerState.OPEN
    change = next(r for r in caplog.records if r.getMessage() == "Circuit breaker state changed")
    assert change.breaker_name == "payment_gateway"
    assert "open" in str(change.new_state).lower()

    with pytest.raises(CircuitBreakerError):
        breaker.call(lambda: "never called")


def test_successes_keep_breaker_closed():
    breaker = build_gateway_breaker(fail_max=2)
    assert breaker.call(lambda: "ok") == "ok"
    assert breaker.current_state == CircuitBreakerState.CLOSED
