"""Analytic M/M/c queue whose servers all run at a single speed level."""

from __future__ import annotations

import math
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from .model import ENERGY_ACTIVE, ENERGY_IDLE, SERVICE_RATES

MAX_CUSTOMERS = 100_000
SERVERS = 20
LEVEL = 2


@dataclass(frozen=True)
class MMcQueue:
    """Infinite-buffer queue with ``servers`` identical servers at one speed level."""

    arrival_rate: float
    servers: int = SERVERS
    service_rate: float = SERVICE_RATES[LEVEL]
    energy_active: float = ENERGY_ACTIVE[LEVEL]
    energy_idle: float = ENERGY_IDLE[LEVEL]

    @property
    def load(self) -> float:
        """Utilisation of each server."""
        return self.arrival_rate / (self.servers * self.service_rate)

    def idle_probability(self) -> float:
        """Probability that the system is empty; the queue must be stable."""
        rho = self.load
        if rho >= 1.0:
            raise ValueError(f"unstable queue: load {rho} is not below 1")
        c = self.servers
        offered = c * rho
        tail = offered**c / (math.factorial(c) * (1.0 - rho))
        head = sum(offered**i / math.factorial(i) for i in range(1, c))
        return 1.0 / (1.0 + tail + head)

    def distribution(self, size: int = MAX_CUSTOMERS) -> list[float]:
        """Stationary probabilities of 0 to ``size`` customers."""
        pi0 = self.idle_probability()
        c = self.servers
        rho = self.load
        offered = c * rho
        head = [pi0 * (offered**i / math.factorial(i)) for i in range(min(c, size + 1))]
        scale = pi0 * c**c / math.factorial(c)
        tail = [scale * rho**i for i in range(c, size + 1)]
        return head + tail

    def mean_power(self) -> float:
        """Mean power drawn, from the closed form."""
        return (
            self.energy_idle * self.servers
            + (self.energy_active - self.energy_idle) * self.arrival_rate / self.service_rate
        )

    def idle_power(self) -> float:
        """Mean power drawn by the idle servers."""
        return (self.servers - self.arrival_rate / self.service_rate) * self.energy_idle

    def energy_per_job(self) -> float:
        """Mean energy spent per job, or -1 when nothing arrives."""
        if self.arrival_rate == 0:
            return -1.0
        return (
            self.energy_idle * self.servers / self.arrival_rate
            + (self.energy_active - self.energy_idle) / self.service_rate
        )

    def response_time(self, mean_customers: float) -> float:
        """Mean response time by Little's law, or -1 when nothing arrives."""
        if self.arrival_rate == 0:
            return -1.0
        return mean_customers / self.arrival_rate


def mean_customers(pi: Sequence[float]) -> float:
    """Mean number of customers of a distribution indexed by customer count."""
    return sum(count * p for count, p in enumerate(pi))


def _usage(program: str) -> int:
    print(f"usage : {program} Lambda ")
    return 1


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    program = Path(sys.argv[0]).name if sys.argv and sys.argv[0] else "mmc"
    if len(args) != 1:
        return _usage(program)
    try:
        arrival = int(args[0])
    except ValueError:
        return _usage(program)

    queue = MMcQueue(arrival_rate=arrival)
    try:
        print(f"PI0 = {queue.idle_probability():.10e} ")
        pi = queue.distribution(MAX_CUSTOMERS)
    except ValueError as error:
        print(error)
        return 1
    print(f"La somme des probas : {sum(pi):.15e} ")
    with open("Dist_Stat.PI", "w") as handle:
        handle.writelines(f"{i:3d}\t\t{p:.10e} \n" for i, p in enumerate(pi))

    n = mean_customers(pi)
    response = queue.response_time(n)
    power = queue.mean_power()
    with open("File_Infini.resultats", "a") as handle:
        handle.write(f"{arrival:5d}     \t")
        handle.write(f"{n:.10f}       ")
        handle.write(f"{response:.10f}       ")
        handle.write(f"{power:.10f}       \n")
    return 0


if __name__ == "__main__":
    sys.exit(main())