"""Analytic finite-buffer birth-death queue whose servers use six speed levels."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from dataclasses import dataclass

from .mmc import mean_customers
from .model import ENERGY_ACTIVE, ENERGY_IDLE, LEVELS, SERVICE_RATES, _band

SERVERS = 20
BUFFER_SIZE = 80


@dataclass(frozen=True)
class FiniteLevelQueue:
    """M/M/C/B queue whose speed level is chosen by thresholds on the queue length."""

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
        if self.servers <= 0:
            raise ValueError(f"need at least one server, got {self.servers}")
        if self._bound > self.buffer_size:
            raise ValueError(
                f"buffer size {self.buffer_size} is below the split bound {self._bound}"
            )

    @property
    def _bound(self) -> int:
        return max(self.servers, self.thresholds[-1])

    def _level(self, customers: int) -> int:
        return _band(customers, self.thresholds)

    def service_rate(self, customers: int) -> float:
        """Total service rate with ``customers`` in the system."""
        return min(customers, self.servers) * self.service_rates[self._level(customers)]

    def omega(self, customers: int) -> float:
        """Product of the service rates from 1 to ``customers``."""
        if customers <= 0:
            raise ValueError("Omega(0): no service with an empty system")
        product = 1.0
        for i in range(1, customers + 1):
            product *= self.service_rate(i)
        return product

    def distribution(self) -> list[float]:
        """Stationary probabilities of 0 to ``buffer_size`` customers."""
        bound = self._bound
        capacity = self.servers * self.service_rates[-1]
        weights = [1.0]
        for i in range(1, self.buffer_size + 1):
            rate = self.service_rate(i) if i <= bound else capacity
            weights.append(weights[-1] * self.arrival_rate / rate)
        norm = sum(weights)
        return [w / norm for w in weights]

    def mean_power(self, pi: Sequence[float]) -> float:
        """Mean power drawn by busy and idle servers at the active level."""
        total = 0.0
        for customers, p in enumerate(pi):
            busy = min(customers, self.servers)
            level = self._level(customers)
            total += p * (busy * ENERGY_ACTIVE[level] + (self.servers - busy) * ENERGY_IDLE[level])
        return total

    def response_time(self, pi: Sequence[float]) -> float:
        """Mean response time of accepted customers, by Little's law."""
        if self.arrival_rate == 0:
            raise ValueError("response time is undefined without arrivals")
        return mean_customers(pi) / (self.arrival_rate * (1.0 - pi[-1]))

    def level_probabilities(self, pi: Sequence[float]) -> list[float]:
        """Probability that each of the six speed levels is active."""
        result = [0.0] * LEVELS
        for customers, p in enumerate(pi):
            result[self._level(customers)] += p
        return result


def _usage() -> int:
    print("usage : finite_levels seuil1 seuil2 seuil3 seuil4 seuil5")
    return 1


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != LEVELS - 1:
        return _usage()
    try:
        thresholds = tuple(int(value) for value in args)
    except ValueError:
        return _usage()

    capacity = SERVERS * SERVICE_RATES[-1]
    with open("File_Infini.resultats", "w") as handle:
        handle.write("seuils = {" + ", ".join(str(t) for t in thresholds) + "} \n \n")
        rate = 1
        while rate <= capacity:
            try:
                queue = FiniteLevelQueue(arrival_rate=rate, thresholds=thresholds)
            except ValueError as error:
                print(error)
                return 1
            pi = queue.distribution()
            print(f"pi0 = {pi[0]:.10e} ")
            print(f"piB = {pi[-1]:.10e} ")
            print(f"Lambda = {rate}, La somme des probas = {sum(pi):.20e} ")
            with open("Dist_stat", "w") as dist:
                dist.writelines(f"{p:.10e} \n" for p in pi)
            n = mean_customers(pi)
            handle.write(f"{rate:5d}     \t")
            handle.write(f"{n:.10f}       ")
            handle.write(f"{queue.response_time(pi):.10f}       ")
            handle.write(f"{pi[-1]:.10f}       ")
            handle.write(f"{queue.mean_power(pi):.10f}       \n")
            rate += 2
    return 0


if __name__ == "__main__":
    sys.exit(main())