"""Marginal distributions of each state component."""

from __future__ import annotations

import sys
from collections.abc import Mapping, Sequence
from pathlib import Path

from .formats import read_distribution, read_encoding, read_sizes
from .model import BUFFER_SIZE

MODEL_BOUNDS = ((0, BUFFER_SIZE),)


def marginals(
    encoding: Mapping[int, Sequence[int]],
    pi: Sequence[float],
    bounds: Sequence[tuple[int, int]],
) -> list[list[float]]:
    """For each component, the probability of each value from its lower bound up."""
    result = [[0.0] * (high - low + 1) for low, high in bounds]
    for number, state in encoding.items():
        probability = pi[number]
        for component, ((low, high), value) in enumerate(zip(bounds, state, strict=True)):
            if not low <= value <= high:
                raise ValueError(f"component {component} of state {number} is outside {low}..{high}")
            result[component][value - low] += probability
    return result


def _usage() -> int:
    print("usage : Marginale -f filename ")
    print("filename.pi, filename.sz and filename.cd must exist before ")
    return 1


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 2 or not args[0].startswith("-f"):
        return _usage()
    base = args[1]
    size_path, pi_path, code_path = (Path(base + s) for s in (".sz", ".pi", ".cd"))
    if not all(path.exists() for path in (size_path, pi_path, code_path)):
        return _usage()

    sizes = read_sizes(size_path)
    print(f"{sizes.arcs:12d}")
    print(f"{sizes.states:12d}")

    print("debut lecture code ")
    encoding = read_encoding(code_path, sizes.states, len(MODEL_BOUNDS))
    print("fin lecture du codage des etats ")
    pi = read_distribution(pi_path, sizes.states)
    print("fin lecture pi ")

    for component, ((low, _), values) in enumerate(
        zip(MODEL_BOUNDS, marginals(encoding, pi, MODEL_BOUNDS))
    ):
        with open(f"{base}.marginale.{component}.pi", "w") as handle:
            handle.writelines(
                f"{offset + low}  {value:.15E} \n" for offset, value in enumerate(values)
            )
    print("Done Marginale ")
    return 0


if __name__ == "__main__":
    sys.exit(main())