"""Optimal migration of jobs between two six-level server pools."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from dataclasses import dataclass
from functools import lru_cache

from .model import ENERGY_ACTIVE, ENERGY_IDLE, _band

THRESHOLDS = (15, 30, 45, 60, 75)
BUFFER_SIZE = 90
SERVERS = 20
MIGRATION_COST = 1.0


@dataclass(frozen=True)
class Migration:
    """Best rebalancing of a pair of queue lengths; ``target`` is None if none helps."""

    initial: tuple[int, int]
    energy: float
    target: tuple[int, int] | None = None
    migrations: int = 0
    optimal_energy: float | None = None


def level(customers: int) -> int:
    """Speed level, from 1 to 6, used by a pool with ``customers`` jobs."""
    return _band(customers, THRESHOLDS) + 1


@lru_cache(maxsize=None)
def _pool_energy(customers: int) -> float:
    busy = min(customers, SERVERS)
    index = level(customers) - 1
    return busy * ENERGY_ACTIVE[index] + (SERVERS - busy) * ENERGY_IDLE[index]


def pair_energy(first: int, second: int, migrations: int, migration_cost: float) -> float:
    """Power of both pools plus the cost of the migrations."""
    return _pool_energy(first) + _pool_energy(second) + migrations * migration_cost


def optimal_migrations(
    buffer_size: int = BUFFER_SIZE, migration_cost: float = MIGRATION_COST
) -> list[Migration]:
    """For every pair of queue lengths, the cheapest split of their jobs."""
    result = []
    for a in range(buffer_size + 1):
        for b in range(buffer_size + 1):
            energy = pair_energy(a, b, 0, migration_cost)
            best = Migration(initial=(a, b), energy=energy)
            if level(a) != level(b):
                lowest = energy
                total = a + b
                for first in range(max(0, total - buffer_size), min(total, buffer_size) + 1):
                    second = total - first
                    moved = abs(a - first)
                    candidate = pair_energy(first, second, moved, migration_cost)
                    if candidate < lowest:
                        lowest = candidate
                        best = Migration(
                            initial=(a, b),
                            energy=energy,
                            target=(first, second),
                            migrations=moved,
                            optimal_energy=candidate,
                        )
            result.append(best)
    return result


def check_property(migrations: Iterable[Migration]) -> None:
    """Raise ValueError if a migration leads to a state that would migrate again."""
    moving = [m for m in migrations if m.migrations != 0]
    sources = {m.initial for m in moving}
    for m in moving:
        if m.target in sources:
            raise ValueError(f"Erreur etat : ({m.target[0]},{m.target[1]})")


def format_heatmap(buffer_size: int, migrations: Iterable[Migration]) -> str:
    """One line per pair of queue lengths: migrations and target, or NaN."""
    by_state = {m.initial: m for m in migrations}
    lines = []
    for a in range(buffer_size + 1):
        for b in range(buffer_size + 1):
            m = by_state.get((a, b))
            if m is not None and m.migrations != 0:
                lines.append(f"{a:5d} {b:5d} {m.migrations:5d} {m.target[0]:5d} {m.target[1]:5d}\n")
            else:
                lines.append(f"{a:5d} {b:5d} NaN   NaN   NaN \n")
    return "".join(lines)


def main(argv: list[str] | None = None) -> int:
    migrations = optimal_migrations(BUFFER_SIZE, MIGRATION_COST)
    for m in migrations:
        if m.migrations != 0:
            print(
                f"({m.initial[0]} , {m.initial[1]}) : {m.energy:.0f}  ---> "
                f"({m.target[0]}  , {m.target[1]}) : {m.optimal_energy:.0f} "
                f"et {m.migrations} Migrations "
            )
    with open("HeatMap.data", "w") as handle:
        handle.write(format_heatmap(BUFFER_SIZE, migrations))
    try:
        check_property(migrations)
    except ValueError as error:
        print(error)
        return 0
    print("Proprieté Verifiée ! ")
    return 0


if __name__ == "__main__":
    sys.exit(main())