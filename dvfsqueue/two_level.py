"""Analytic birth-death queue that switches between two speed levels at a threshold."""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass

from .mmc import MAX_CUSTOMERS, mean_customers
from .model import ENERGY_ACTIVE, LEVELS, SERVICE_RATES

SERVERS = 20
ALPHA = 0.25


@dataclass(frozen=True)
class Metrics:
    """Performance and energy measures of one configuration."""

    mean_customers: float
    response_time: float
    power: float
    energy_per_job: float

    @property
    def performance_per_watt(self) -> float:
        return 1.0 / (self.response_time * self.power)


@dataclass(frozen=True)
class LevelChoice:
    """Chosen threshold for a pair of levels; ``metrics`` is None if the pair is unstable."""

    low: int
    high: int
    threshold: int | None
    metrics: Metrics | None

    @property
    def stable(self) -> bool:
        return self.metrics is not None


def _capacity(level: int, servers: int = SERVERS) -> float:
    return servers * SERVICE_RATES[level]


@dataclass(frozen=True)
class TwoLevelQueue:
    """Servers run at level ``low`` up to ``threshold`` customers, at ``high`` above."""

    low: int
    high: int
    arrival_rate: float
    threshold: int
    servers: int = SERVERS
    alpha: float = ALPHA

    def __post_init__(self) -> None:
        for name, level in (("low", self.low), ("high", self.high)):
            if not 0 <= level < LEVELS:
                raise ValueError(f"{name} level {level} outside 0..{LEVELS - 1}")

    def _level(self, customers: int) -> int:
        return self.low if customers <= self.threshold else self.high

    def service_rate(self, customers: int) -> float:
        """Total service rate with ``customers`` in the system."""
        return min(customers, self.servers) * SERVICE_RATES[self._level(customers)]

    def _weights(self, size: int) -> list[float]:
        """Normalised probabilities up to ``size``, stopping once they underflow to zero."""
        capacity = _capacity(self.high, self.servers)
        if self.arrival_rate >= capacity:
            raise ValueError(
                f"unstable queue: arrival rate {self.arrival_rate} is not below {capacity}"
            )
        bound = max(self.servers, self.threshold)
        if bound > size:
            raise ValueError(f"size {size} is below the stability bound {bound}")
        weights = [1.0]
        for i in range(1, size + 1):
            value = (self.arrival_rate / self.service_rate(i)) * weights[-1]
            if value == 0.0 and i > bound:
                break
            weights.append(value)
        head = sum(weights[1 : bound + 1])
        tail = (self.arrival_rate / (capacity - self.arrival_rate)) * weights[bound]
        pi0 = 1.0 / (1.0 + head + tail)
        return [w * pi0 for w in weights]

    def distribution(self, size: int = MAX_CUSTOMERS) -> list[float]:
        """Stationary probabilities of 0 to ``size`` customers."""
        weights = self._weights(size)
        return weights + [0.0] * (size + 1 - len(weights))

    def mean_power(self, pi: Sequence[float]) -> float:
        """Mean power; an idle server draws ``alpha`` times the active power."""
        total = 0.0
        for customers, p in enumerate(pi):
            busy = min(customers, self.servers)
            energy = ENERGY_ACTIVE[self._level(customers)]
            total += p * (busy * energy + (self.servers - busy) * energy * self.alpha)
        return total

    def metrics(self, size: int = MAX_CUSTOMERS) -> Metrics:
        """Mean customers, response time, power and energy per job."""
        pi = self._weights(size)
        n = mean_customers(pi)
        power = self.mean_power(pi)
        if self.arrival_rate == 0:
            return Metrics(n, -1.0, power, -1.0)
        return Metrics(n, n / self.arrival_rate, power, power / self.arrival_rate)


def sweep_arrival_rates(
    low: int = 2, high: int = 4, threshold: int = 10, size: int = MAX_CUSTOMERS
) -> list[tuple[int, Metrics]]:
    """Metrics for odd arrival rates from 1 up to the capacity of level ``high``."""
    results = []
    rate = 1
    while rate < _capacity(high):
        queue = TwoLevelQueue(low, high, rate, threshold)
        results.append((rate, queue.metrics(size)))
        rate += 2
    return results


def _pairs(include_equal: bool) -> Iterator[tuple[int, int]]:
    for high in range(LEVELS):
        for low in range(high + 1 if include_equal else high):
            yield low, high


def _best_under_limit(
    arrival_rate: float,
    limit: float,
    max_threshold: int,
    size: int,
    key: Callable[[Metrics], float],
) -> list[LevelChoice]:
    choices = []
    for low, high in _pairs(include_equal=False):
        if arrival_rate >= _capacity(high):
            choices.append(LevelChoice(low, high, None, None))
            continue
        best: tuple[int, Metrics] | None = None
        for threshold in range(1, max_threshold + 1):
            metrics = TwoLevelQueue(low, high, arrival_rate, threshold).metrics(size)
            value = key(metrics)
            if value <= limit and (best is None or value < key(best[1])):
                best = (threshold, metrics)
        if best is not None:
            choices.append(LevelChoice(low, high, *best))
    return choices


def best_energy(
    arrival_rate: float = 20,
    energy_limit: float = 50,
    max_threshold: int = 100,
    size: int = MAX_CUSTOMERS,
) -> list[LevelChoice]:
    """For each pair of distinct levels, the threshold with the least energy per job."""
    return _best_under_limit(
        arrival_rate, energy_limit, max_threshold, size, lambda m: m.energy_per_job
    )


def best_delay(
    arrival_rate: float = 20,
    delay_limit: float = 0.5,
    max_threshold: int = 100,
    size: int = MAX_CUSTOMERS,
) -> list[LevelChoice]:
    """For each pair of distinct levels, the threshold with the least response time."""
    return _best_under_limit(
        arrival_rate, delay_limit, max_threshold, size, lambda m: m.response_time
    )


def best_performance_per_watt(
    arrival_rate: float = 40, max_threshold: int = 100, size: int = MAX_CUSTOMERS
) -> list[LevelChoice]:
    """For each pair of levels, the threshold that maximises performance per watt."""
    choices = []
    for low, high in _pairs(include_equal=True):
        if arrival_rate >= _capacity(high):
            choices.append(LevelChoice(low, high, None, None))
            continue
        if low == high:
            metrics = TwoLevelQueue(low, high, arrival_rate, 0).metrics(size)
            choices.append(LevelChoice(low, high, None, metrics))
            continue
        best: tuple[int, Metrics] | None = None
        for threshold in range(1, max_threshold + 1):
            metrics = TwoLevelQueue(low, high, arrival_rate, threshold).metrics(size)
            if best is None or metrics.performance_per_watt > best[1].performance_per_watt:
                best = (threshold, metrics)
        if best is not None:
            choices.append(LevelChoice(low, high, *best))
    return choices


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if args:
        print("usage : two_level ")
        return 1
    low, high, threshold = 2, 4, 10
    with open("File_Infini.resultats", "w") as handle:
        handle.write(f"Seuil = {{{threshold}}} \n ")
        for rate, metrics in sweep_arrival_rates(low, high, threshold, MAX_CUSTOMERS):
            print(f"Pstate i= {low} et Pstate j= {high} et Seuil = {{{threshold}}} ")
            handle.write(f"{rate:5d}     \t")
            handle.write(f"{metrics.mean_customers:.10f}       ")
            handle.write(f"{metrics.response_time:.10f}       ")
            handle.write(f"{metrics.power:.10f}       ")
            handle.write(f"{metrics.energy_per_job:.10f}      \n")
    return 0


if __name__ == "__main__":
    sys.exit(main())