"""Performance and energy measures of a stationary distribution."""

from __future__ import annotations

from collections.abc import Sequence

from .model import ENERGY_ACTIVE, ENERGY_IDLE, SERVERS, _band


def _customers(state) -> int:
    return state if isinstance(state, int) else state[0]


def _pairs(states, pi):
    return ((_customers(state), p) for state, p in zip(states, pi, strict=True))


def mean_customers(states: Sequence, pi: Sequence[float]) -> float:
    """Mean number of customers in the system."""
    return sum(customers * p for customers, p in _pairs(states, pi))


def loss_probability(states: Sequence, pi: Sequence[float], buffer_size: int) -> float:
    """Probability that the buffer is full."""
    return sum(p for customers, p in _pairs(states, pi) if customers == buffer_size)


def response_time(
    arrival_rate: float, states: Sequence, pi: Sequence[float], buffer_size: int
) -> float:
    """Mean response time of accepted customers, by Little's law."""
    n = mean_customers(states, pi)
    losses = loss_probability(states, pi, buffer_size)
    return n / (arrival_rate * (1.0 - losses))


def mean_energy(
    states: Sequence,
    pi: Sequence[float],
    thresholds: Sequence[int],
    servers: int = SERVERS,
) -> float:
    """Mean power drawn by busy and idle servers at the active speed level."""
    thresholds = tuple(thresholds)
    total = 0.0
    for customers, p in _pairs(states, pi):
        busy = min(customers, servers)
        level = _band(customers, thresholds)
        total += (busy * ENERGY_ACTIVE[level] + (servers - busy) * ENERGY_IDLE[level]) * p
    return total