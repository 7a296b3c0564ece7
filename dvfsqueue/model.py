"""Single M/M/C/B queue whose servers switch between six speed levels by queue length."""

from __future__ import annotations

import enum
from dataclasses import dataclass

BUFFER_SIZE = 90
SERVERS = 10
LEVELS = 6

SERVICE_RATES = (1.0, 1.8, 2.0, 2.2, 2.4, 2.6)
ENERGY_ACTIVE = (32.0, 55.0, 65.0, 76.0, 90.0, 95.0)
ENERGY_IDLE = (8.0, 13.75, 16.25, 19.0, 22.5, 23.75)
MIGRATION_ENERGY = 1.0

State = tuple[int, ...]


class Event(enum.IntEnum):
    """Events of the uniformised chain."""

    ARRIVAL = 1
    SERVICE = 2
    LOOP = 3


def _band(customers: int, thresholds: tuple[int, ...]) -> int:
    """Index of the speed level used with ``customers`` in the system."""
    if len(thresholds) != LEVELS - 1:
        raise ValueError(f"expected {LEVELS - 1} thresholds, got {len(thresholds)}")
    edges = (float("-inf"), *thresholds, float("inf"))
    matching = [
        index
        for index, (low, high) in enumerate(zip(edges, edges[1:]))
        if low < customers <= high
    ]
    # With unordered thresholds several bands can match; the last one wins.
    return matching[-1]


@dataclass(frozen=True)
class PalierModel:
    """Queue with ``servers`` servers, a buffer and level thresholds on its length."""

    arrival_rate: float
    thresholds: tuple[int, ...]
    servers: int = SERVERS
    buffer_size: int = BUFFER_SIZE
    service_rates: tuple[float, ...] = SERVICE_RATES

    def __post_init__(self) -> None:
        object.__setattr__(self, "thresholds", tuple(self.thresholds))
        object.__setattr__(self, "service_rates", tuple(self.service_rates))
        if len(self.thresholds) != LEVELS - 1:
            raise ValueError(f"expected {LEVELS - 1} thresholds, got {len(self.thresholds)}")
        if len(self.service_rates) != LEVELS:
            raise ValueError(f"expected {LEVELS} service rates, got {len(self.service_rates)}")

    @property
    def uniformization(self) -> float:
        """Total event rate used to uniformise the chain."""
        return self.arrival_rate + self.servers * sum(self.service_rates)

    def level(self, customers: int) -> int:
        """Speed level (0 to 5) active with ``customers`` in the system."""
        return _band(customers, self.thresholds)

    def bounds(self) -> tuple[tuple[int, int], ...]:
        """Range of each state component."""
        return ((0, self.buffer_size),)

    def initial_state(self) -> State:
        return (0,)

    def probability(self, event: Event | int, state: State) -> float:
        """Probability that ``event`` fires in ``state``."""
        event = Event(event)
        customers = state[0]
        delta = self.uniformization
        if event is Event.ARRIVAL:
            return self.arrival_rate / delta
        in_service = min(customers, self.servers)
        rate = self.service_rates[self.level(customers)]
        if event is Event.SERVICE:
            return in_service * rate / delta
        others = sum(self.service_rates) - rate
        return ((self.servers - in_service) * rate + self.servers * others) / delta

    def transition(self, state: State, event: Event | int) -> State:
        """State reached from ``state`` when ``event`` fires."""
        event = Event(event)
        (low, high), = self.bounds()
        customers = state[0]
        if event is Event.ARRIVAL and customers < high:
            customers += 1
        elif event is Event.SERVICE and customers > low:
            customers -= 1
        return (customers, *state[1:])