"""Stationary distribution by the power method on a column-stored matrix."""

from __future__ import annotations

import sys
from collections.abc import Mapping, Sequence
from pathlib import Path

from .formats import read_matrix, read_sizes

MAX_ITERATIONS = 100000
TOLERANCE = 1.0e-15


def power_solve(
    columns: Mapping[int, Sequence[tuple[float, int]]],
    size: int,
    tolerance: float = TOLERANCE,
    max_iterations: int | None = None,
) -> list[float]:
    """Iterate pi <- pi P from the uniform vector until the relative change is small.

    ``columns[i]`` lists the pairs (P[origin][i], origin). Without ``max_iterations``
    the iteration runs until it converges; otherwise RuntimeError is raised when the
    limit is reached first.
    """
    if size <= 0:
        return []
    previous = [1.0 / size] * size
    iteration = 0
    while True:
        iteration += 1
        current = [
            sum(previous[origin] * prob for prob, origin in columns.get(i, ()))
            for i in range(size)
        ]
        diff = sum(
            abs(new - old) / old if old > 0 else abs(new)
            for new, old in zip(current, previous)
        )
        previous = current
        if diff < tolerance:
            return current
        if max_iterations is not None and iteration >= max_iterations:
            raise RuntimeError(f"no convergence after {iteration} iterations (diff {diff:e})")


def _usage() -> int:
    print("usage : Power -f filename Suffix ")
    print("filename.Suffix and filename.sz must exist before. And the suffix must be Cuu ")
    print("Computes stationnary distribution by the Power algorithm")
    return 1


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 3 or not args[0].startswith("-f"):
        return _usage()
    base, suffix = args[1], args[2]
    size_path = Path(base + ".sz")
    matrix_path = Path(f"{base}.{suffix}")
    if not size_path.exists() or not suffix.startswith("C") or not matrix_path.exists():
        return _usage()

    sizes = read_sizes(size_path)
    print(f"Nb arcs = {sizes.arcs:12d}")
    print(f"Nb som. = {sizes.states:12d}")
    print(f"Iteration accuracy = {TOLERANCE:.0e}")
    print(f"Max number of iterations = {MAX_ITERATIONS}")

    columns = read_matrix(matrix_path, sizes.states)
    pi = power_solve(columns, sizes.states)
    with open(base + ".pi", "w") as handle:
        handle.writelines(f" {p:.20E}\n" for p in pi)
    print("Done Power ")
    return 0


if __name__ == "__main__":
    sys.exit(main())