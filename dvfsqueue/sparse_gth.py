"""Stationary distribution by the GTH algorithm on a sparse matrix."""

from __future__ import annotations

import sys
import time
from collections.abc import Mapping, Sequence
from pathlib import Path

from .formats import read_matrix, read_sizes


class SparseGthMatrix:
    """Transition matrix kept as strict lower rows and upper columns.

    Entries left of the diagonal are stored by row, the others (diagonal
    included) by column, which is what the GTH elimination needs.
    """

    def __init__(self, size: int) -> None:
        if size < 0:
            raise ValueError(f"negative size {size}")
        self.size = size
        self._lower: list[dict[int, float]] = [{} for _ in range(size)]
        self._upper: list[dict[int, float]] = [{} for _ in range(size)]

    def add(self, row: int, column: int, value: float) -> None:
        """Add ``value`` to the entry (row, column)."""
        for name, index in (("row", row), ("column", column)):
            if not 0 <= index < self.size:
                raise ValueError(f"{name} {index} outside 0..{self.size - 1}")
        if column < row:
            entries, key = self._lower[row], column
        else:
            entries, key = self._upper[column], row
        entries[key] = entries.get(key, 0.0) + value

    def solve(self) -> list[float]:
        """Stationary distribution; the matrix itself is left unchanged."""
        size = self.size
        if size == 0:
            return []
        lower = [dict(entries) for entries in self._lower]
        upper = [dict(entries) for entries in self._upper]

        for j in range(size - 1, 0, -1):
            row = lower[j]
            total = sum(row[k] for k in sorted(row))
            for i in sorted(k for k in upper[j] if k < j):
                if total == 0:
                    raise ValueError(f"PROBLEME dans la chaine en {j}")
                factor = upper[j][i] / total
                upper[j][i] = factor
                for k, value in row.items():
                    if k < i:
                        lower[i][k] = lower[i].get(k, 0.0) + value * factor
                    elif k > i:
                        upper[k][i] = upper[k].get(i, 0.0) + value * factor

        pi = [1.0]
        for j in range(1, size):
            column = upper[j]
            pi.append(sum(pi[i] * column[i] for i in sorted(column) if i < j))
        norm = sum(pi)
        return [value / norm for value in pi]


def sparse_gth_solve(rows: Mapping[int, Sequence[tuple[float, int]]], size: int) -> list[float]:
    """Stationary distribution of the chain whose sparse rows are ``rows``."""
    matrix = SparseGthMatrix(size)
    for row, entries in rows.items():
        for prob, column in entries:
            matrix.add(row, column, prob)
    return matrix.solve()


def main(argv: list[str] | None = None) -> int:
    start = time.perf_counter()
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 2:
        print("bad args: ./GTH-SPARSE -f ModelName")
        return 1
    base = args[1]
    size_path = Path(base + ".sz")
    matrix_path = Path(base + ".Rii")
    if not size_path.exists():
        print("Le fichier   .sz n'existe pas ")
        print(size_path)
        return 1
    if not matrix_path.exists():
        print("Le fichier .Rii  n'existe pas ")
        return 1

    sizes = read_sizes(size_path)
    print(f"nbnozero = {sizes.arcs}")
    print(f"N = {sizes.states}")
    rows = read_matrix(matrix_path, sizes.states)
    print("           RUN...")
    try:
        pi = sparse_gth_solve(rows, sizes.states)
    except ValueError:
        print(" PROBLEME dans la chaine.")
        print("           ARRET DU TRAITEMENT...")
        return 1

    result_path = base + ".pi"
    with open(result_path, "w") as handle:
        handle.writelines(f" {p:.14e}\n" for p in pi)
    print(f"   {sizes.states} states  and the sum of probas is  {sum(pi):E}")

    elapsed = time.perf_counter() - start
    with open("SPARSE-GTH.time", "a") as handle:
        handle.write(f"{elapsed:.2f}\n")
    print(f"ALGO GTH-SPARSE DONE, temps: {elapsed:.2f} secondes")
    print(f"La Distribution Stationnaire est dans le fichier {result_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())