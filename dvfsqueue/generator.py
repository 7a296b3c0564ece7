"""Generation of the reachable Markov chain of a model and its text files."""

from __future__ import annotations

import enum
import sys
from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from .model import Event, PalierModel, State

TOLERANCE = 1.0e-9


class Scheme(enum.Enum):
    """Which polynomial of the one-step matrix P is generated."""

    P = 0
    HALF_IDENTITY_PLUS_P = 1
    HALF_IDENTITY_PLUS_P_SQUARED = 2
    P_SQUARED = 3


@dataclass
class MarkovChain:
    """Reachable states, numbered from 0, and their sorted successor rows."""

    states: list[State]
    rows: list[list[tuple[float, int]]]

    @property
    def size(self) -> int:
        return len(self.states)

    @property
    def arc_count(self) -> int:
        return sum(len(row) for row in self.rows)

    @property
    def components(self) -> int:
        return len(self.states[0]) if self.states else 0


def _successors(model: PalierModel, state: State, scheme: Scheme) -> Iterator[tuple[float, State]]:
    if scheme in (Scheme.HALF_IDENTITY_PLUS_P, Scheme.HALF_IDENTITY_PLUS_P_SQUARED):
        yield 0.5, state
    weight = 0.5 if scheme is not Scheme.P and scheme is not Scheme.P_SQUARED else 1.0
    two_steps = scheme in (Scheme.HALF_IDENTITY_PLUS_P_SQUARED, Scheme.P_SQUARED)
    for first in Event:
        middle = model.transition(state, first)
        p1 = model.probability(first, state)
        if not two_steps:
            yield weight * p1, middle
            continue
        for second in Event:
            p2 = model.probability(second, middle)
            yield weight * p1 * p2, model.transition(middle, second)


def generate_chain(model: PalierModel, scheme: Scheme = Scheme.P) -> MarkovChain:
    """Explore the states reachable from the initial state, breadth first."""
    initial = model.initial_state()
    numbers: dict[State, int] = {initial: 0}
    states: list[State] = [initial]
    rows: list[list[tuple[float, int]]] = []
    queued = {0}
    queue: deque[State] = deque([initial])

    while queue:
        state = queue.popleft()
        merged: dict[int, float] = {}
        for prob, target in _successors(model, state, scheme):
            if prob <= 0:
                continue
            number = numbers.get(target)
            if number is None:
                number = numbers[target] = len(states)
                states.append(target)
            merged[number] = merged.get(number, 0.0) + prob
        row = [(prob, number) for number, prob in sorted(merged.items())]
        total = sum(prob for prob, _ in row)
        if abs(total - 1.0) > TOLERANCE:
            raise ValueError(f"row of state {numbers[state]} sums to {total:.10E}")
        for _, number in row:
            if number not in queued:
                queued.add(number)
                queue.append(states[number])
        rows.append(row)
    return MarkovChain(states=states, rows=rows)


def write_chain(chain: MarkovChain, basename: str | Path) -> None:
    """Write ``basename``.cd, ``basename``.Rii and ``basename``.sz."""
    base = str(basename)
    with open(base + ".cd", "w") as cd, open(base + ".Rii", "w") as rii:
        for number, (state, row) in enumerate(zip(chain.states, chain.rows)):
            cd.write(f"{number:12d}" + "".join(f"{v:12d}" for v in state) + "\n")
            rii.write(f"{number:12d}{len(row):12d}")
            rii.write("".join(f"{prob: .15E}{dest:12d}" for prob, dest in row))
            rii.write("\n")
    with open(base + ".sz", "w") as sz:
        sz.write(f"{chain.arc_count:12d}\n{chain.size:12d}\n{chain.components:12d}\n")


def _usage() -> int:
    print("usage : GenerMatrix -f filename Lambda1 seuil1 seuil2 seuil3 seuil4 seuil5")
    print("to create filename.Rii, filename.cd and filename.sz ")
    print("to store the description of the states and the matrix of your model ")
    print("The files must not exist before")
    return 1


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 8 or len(args[0]) < 2 or args[0][0] != "-" or args[0][1] != "f":
        return _usage()
    base = args[1]
    if any(Path(base + suffix).exists() for suffix in (".cd", ".Rii", ".sz")):
        return _usage()
    try:
        arrival, *thresholds = (int(value) for value in args[2:])
    except ValueError:
        return _usage()
    print(f"Lambda1: {arrival} ")
    for index, threshold in enumerate(thresholds, start=1):
        print(f"Seuil{index} : {threshold} ")
    model = PalierModel(arrival_rate=arrival, thresholds=tuple(thresholds))
    try:
        chain = generate_chain(model)
    except ValueError as error:
        print(f"attention : {error}")
        return 1
    write_chain(chain, base)
    return 0


if __name__ == "__main__":
    sys.exit(main())