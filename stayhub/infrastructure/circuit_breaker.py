"""
Circuit Breaker configuration for notification delivery.

Notification sinks (database table, e-mail relay) are called from background
tasks. When a sink keeps failing, the breaker opens and deliveries fail fast
instead of piling up retries against a dead dependency.

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

    def __init__(self, name: str):
        self.name = name

    def state_change(self, cb, old_state, new_state):
        old_name = old_state.name if old_state is not None else "none"
        log_circuit_state_change(self.name, old_name, new_state.name)


def build_notification_breaker(fail_max: int = 5, reset_timeout: int = 60) -> CircuitBreaker:
    return CircuitBreaker(
        fail_max=fail_max,  # Open circuit after fail_max consecutive failures
        reset_timeout=reset_timeout,  # Seconds before attempting recovery
        name="notification_circuit_breaker",
        listeners=[StateChangeLogger("notification")],
    )


notification_breaker = build_notification_breaker()


__all__ = [
    "notification_breaker",
    "build_notification_breaker",
    "CircuitBreakerError",
]
