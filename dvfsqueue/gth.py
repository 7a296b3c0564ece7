"""Stationary distribution by the GTH algorithm on a dense matrix."""

from __future__ import annotations

import sys
import time
from collections.abc import Mapping, Sequence
from pathlib import Path

from .formats import read_matrix, read_sizes, write_distribution


def _dense(rows: Mapping[int, Sequence[tuple[float, int]]], size: int) -> list[list[float]]:
    matrix = [[0.0] * size for _ in range(size)]
    for row, entries in rows.items():
        if not 0 <= row < size:
            raise ValueError(f"row {row} outside 0..{size - 1}")
        for prob, column in entries:
            if not 0 <= column < size:
                raise ValueError(f"column {column} outside 0..{size - 1}")
            matrix[row][column] = prob
    return matrix


def gth_solve(rows: Mapping[int, Sequence[tuple[float, int]]], size: int) -> list[float]:
    """Stationary distribution of the chain whose sparse rows are ``rows``."""
    p = _dense(rows, size)
    for n in range(size - 1, 0, -1):
        last = p[n]
        total = sum(last[:n])
        if total == 0.0:
            raise ValueError(f"Probleme en {n} {total:f}")
        for i in range(n):
            p[i][n] /= total
        for i in range(n):
            factor = p[i][n]
            if factor:
                current = p[i]
                current[:n] = [a + factor * b for a, b in zip(current[:n], last[:n])]
    if size == 0:
        return []
    pi = [1.0]
    for j in range(1, size):
        pi.append(p[0][j] + sum(pi[k] * p[k][j] for k in range(1, j)))
    norm = sum(pi)
    return [value / norm for value in pi]


def _usage() -> int:
    print("usage : Gth -f filename Suffix ")
    print("filename.Suffix and filename.sz must exist before. And the suffix must be Rxx ")
    return 1


def main(argv: list[str] | None = None) -> int:
    start = time.perf_counter()
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 3 or not args[0].startswith("-f"):
        return _usage()
    base, suffix = args[1], args[2]
    size_path = Path(base + ".sz")
    matrix_path = Path(f"{base}.{suffix}")
    if not size_path.exists() or not suffix.startswith("R") or not matrix_path.exists():
        return _usage()

    sizes = read_sizes(size_path)
    rows = read_matrix(matrix_path, sizes.states)
    try:
        pi = gth_solve(rows, sizes.states)
    except ValueError as error:
        print(error)
        return 1
    write_distribution(base + ".pi", pi)

    elapsed = time.perf_counter() - start
    with open("GTH.time", "a") as handle:
        handle.write(f"{elapsed:.2f}\n")
    print(f"ALGO GTH DONE, temps: {elapsed:.2f} secondes")
    return 0


if __name__ == "__main__":
    sys.exit(main())