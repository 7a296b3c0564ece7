"""Discrete-time simulation of stations sending packets on a slotted ring."""

from __future__ import annotations

import random
import sys
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from itertools import accumulate
from pathlib import Path

TIME_MAX = 10000
RING_SIZE = 150
STATIONS = 18
DEADLINE = 30
BUFFER = 1000
PERIOD = 10
WARMUP = 200
DISTRIBUTION_FILE = "test-ngreen-25-DAG.Conv.H.G.pi"


def cumulative_distribution(probabilities: Iterable[float]) -> list[float]:
    """Running sums of ``probabilities``."""
    return list(accumulate(probabilities))


def _draw(cdf: Sequence[float], rng) -> tuple[int, float]:
    if not cdf:
        raise ValueError("empty distribution")
    r = rng.random()
    for index, value in enumerate(cdf):
        if r <= value:
            return index, r
    # The cumulative sum may fall just short of one.
    return len(cdf) - 1, r


def sample_duration(cdf: Sequence[float], rng) -> int:
    """Draw a duration by inverting the cumulative distribution ``cdf``."""
    return _draw(cdf, rng)[0]


def _is_special(index: int) -> bool:
    number = index + 1
    return number % 2 == 1 and number % 3 != 0


@dataclass
class Station:
    """A station attached to one slot of the ring."""

    place: int
    next_arrival: int
    special: bool
    delta: int = 0
    waiting: int = 0
    arrivals: list[int] = field(default_factory=list)
    delays: list[int] = field(default_factory=list)

    @property
    def pending(self) -> bool:
        return len(self.delays) < len(self.arrivals)


class RingSimulation:
    """Stations emit one packet per free slot, then wait ``period`` ticks.

    A slot holds -1 when empty or the place of the station that filled it; the
    ring turns by one slot at the end of every tick.
    """

    def __init__(
        self,
        cdf: Sequence[float],
        rng=None,
        ring_size: int = RING_SIZE,
        stations: int = STATIONS,
        period: int = PERIOD,
        warmup: int = WARMUP,
    ) -> None:
        if stations <= 0 or ring_size < stations:
            raise ValueError("need at least one station and one slot per station")
        self.cdf = list(cdf)
        self.rng = rng if rng is not None else random.Random()
        self.period = period
        self.warmup = warmup
        self.ring = [-1] * ring_size
        self.time = 0
        self.samples: list[tuple[int, float, float]] = []
        self.filled_history: list[tuple[int, int]] = []
        self.waiting_history: list[tuple[int, list[int]]] = []
        self.filled_sum = 0
        spacing = ring_size // stations
        self.stations = [
            Station(place=spacing * i, next_arrival=self._sample(), special=_is_special(i))
            for i in range(stations)
        ]

    def _sample(self) -> int:
        index, r = _draw(self.cdf, self.rng)
        self.samples.append((index, self.cdf[index], r))
        return index

    def filled_slots(self) -> int:
        """Number of slots that carry a packet."""
        return sum(1 for slot in self.ring if slot != -1)

    def _emit(self, station: Station, t: int, emitted: list[tuple[int, int]], index: int) -> None:
        position = len(station.delays)
        self.ring[station.place] = station.place
        station.delta = self.period
        station.delays.append(t - station.arrivals[position])
        station.waiting -= 1
        emitted.append((index, station.arrivals[position]))

    def step(self) -> list[tuple[int, int]]:
        """Advance one tick; return (station, arrival date) for each packet sent."""
        t = self.time
        filled = self.filled_slots()
        self.filled_history.append((t, filled))
        if t >= self.warmup:
            self.filled_sum += filled
        self.waiting_history.append((t, [s.waiting for s in self.stations]))

        emitted: list[tuple[int, int]] = []
        for index, station in enumerate(self.stations):
            if t == station.next_arrival:
                station.arrivals.append(t)
                station.next_arrival += self._sample()
                station.waiting += 1
            place = station.place
            cleaned = self.ring[place] == place
            if cleaned:
                self.ring[place] = -1
            if station.special or not cleaned:
                if self.ring[place] == -1 and station.delta == 0 and station.pending:
                    self._emit(station, t, emitted, index)

        for station in self.stations:
            if station.delta > 0:
                station.delta -= 1
        self.ring = self.ring[-1:] + self.ring[:-1]
        self.time += 1
        return emitted

    def run(self, steps: int) -> list[tuple[int, int]]:
        """Advance ``steps`` ticks; return every packet sent."""
        emitted: list[tuple[int, int]] = []
        for _ in range(steps):
            emitted.extend(self.step())
        return emitted


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    source = Path(args[0] if args else DISTRIBUTION_FILE)
    if not source.exists():
        print("Erreur de lecture du fichier ")
        return 0
    tokens = source.read_text().split()
    try:
        probabilities = [float(tokens[2 * i + 1]) for i in range(DEADLINE + 1)]
    except (IndexError, ValueError):
        print("Erreur de lecture du fichier ")
        return 0
    mean = sum(i * p for i, p in enumerate(probabilities))
    cdf = cumulative_distribution(probabilities)
    with open("FctRepart2.data", "w") as handle:
        handle.writelines(f"{i:5d} {v:f} \n" for i, v in enumerate(cdf))

    simulation = RingSimulation(cdf)
    print("ANNEAU INITIALE ! ")
    for i, slot in enumerate(simulation.ring):
        print(f"Anneau[{i}] = {slot} ")
    print()

    for _ in range(TIME_MAX + 1):
        t = simulation.time
        for _, date in simulation.step():
            print(f"Omettre la date {date} de l'echeancier ")
        print(f"\nAprès {t} clock ")

    stations = simulation.stations
    print(
        "Les files speciales : "
        + "".join(f"{i} - " for i, s in enumerate(stations) if s.special)
    )
    with open("NbreMoyen.res", "w") as handle:
        for t, counts in simulation.waiting_history:
            handle.write(f"{t:5d}" + "".join(f"{c:10d}" for c in counts) + "\n")
    with open("Remplissage.data", "w") as handle:
        handle.writelines(f"{t:10d}{n:5d} \n" for t, n in simulation.filled_history)
    with open("FctRepart1.data", "w") as handle:
        handle.writelines(f"{i:5d} {v:f} {r:f} \n" for i, v, r in simulation.samples)
    with open("MeanFilling.data", "a") as handle:
        handle.write(f"{len(stations):5d}\t\t{simulation.filled_sum / (TIME_MAX - WARMUP + 1):f}\n")
    with open("Delai.res", "w") as handle:
        for k in range(BUFFER):
            cells = []
            for s in stations:
                date = s.arrivals[k] if k < len(s.arrivals) else -1
                delay = s.delays[k] if k < len(s.delays) else -1
                cells.append(f"{date:10d}{delay:10d}")
            handle.write("".join(cells) + "\n")
    print("Proprieté d'une file special : Priorité ")
    print(f"Duree moyenne de remplissage d'un PDU en file speciale : {mean:f} ")
    print(f"Duree moyenne de remplissage d'un PDU en file normal   : {mean:f} ")
    return 0


if __name__ == "__main__":
    sys.exit(main())