"""
Circuit Breaker configuration for external payment calls.

The online gateway talks to a remote bank portal; a run of failures opens the
circuit so later bookings fail fast (and are treated as declined payments)
instead of piling up on a dead dependency.

Circuit Breaker Pattern:
- CLOSED: Normal operation, requests pass through
- OPEN: Too many failures, requests fail immediately
- HALF_OPEN: Testing if service recovered, limited requests allowed
"""

import logging

from pybreaker import CircuitBreaker, CircuitBreakerError, CircuitBreakerListener

logger = logging.getLogger(__name__)


def log_circuit_state_change(breaker_name: str, old_state: str, new_state: str):
    """Log circuit breaker state changes for monitoring and alerting."""
    logger.warning(
        "Circuit breaker state changed",
        extra={
            "breaker_name": breaker_name,
            "old_state": old_state,
            "new_state": new_state,
        },
    )


class StateChangeLogger(CircuitBreakerListener):
    """Listener for circuit breaker state changes."""

    def __init__(self, label: str):
        self.label = label

    def state_change(self, cb, old_state, new_state):
        old_name = old_state.name if old_state is not None else "none"
        log_circuit_state_change(self.label, old_name, new_state.name)


def build_gateway_breaker(fail_max: int = 5, reset_timeout: int = 60) -> CircuitBreaker:
    """Breaker guarding the online payment gateway."""
    return CircuitBreaker(
        fail_max=fail_max,
        reset_timeout=reset_timeout,
        name="payment_gateway_circuit_breaker",
        listeners=[StateChangeLogger("payment_gateway")],
    )


__all__ = [
    "build_gateway_breaker",
    "CircuitBreakerError",
]
