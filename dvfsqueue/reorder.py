"""Reordering of the states of a two-component chain and block splitting of its matrix."""

from __future__ import annotations

import sys
from collections.abc import Mapping, Sequence
from pathlib import Path

from .formats import read_encoding, read_matrix, read_sizes

Row = list[tuple[float, int]]


def sort_states(states: Sequence[tuple[int, int, int]]) -> list[tuple[int, int, int]]:
    """Sort (number, x1, x2) states by decreasing |x1 - x2|, keeping ties in order."""
    return sorted(states, key=lambda state: -abs(state[1] - state[2]))


def reorder_matrix(
    rows: Mapping[int, Sequence[tuple[float, int]]], order: Sequence[int]
) -> dict[int, Row]:
    """Renumber the chain so that old state ``order[k]`` becomes state ``k``."""
    position: dict[int, int] = {}
    for new, old in enumerate(order):
        position.setdefault(old, new)

    def locate(old: int) -> int:
        try:
            return position[old]
        except KeyError:
            raise ValueError(f"state {old} is not in the new order") from None

    result: dict[int, Row] = {}
    for new, old in enumerate(order):
        if old not in rows:
            raise ValueError(f"state {old} has no row in the matrix")
        result[new] = [(prob, locate(dest)) for prob, dest in rows[old]]
    return result


def split_blocks(
    rows: Mapping[int, Sequence[tuple[float, int]]], boundary: int
) -> tuple[dict[int, Row], dict[int, Row], dict[int, Row], dict[int, Row]]:
    """Split a matrix into its north-west, north-east, south-west and south-east blocks.

    Rows and columns below ``boundary`` form the north and west parts. The
    south-east block is renumbered from 0 in both directions; the other blocks
    keep the original indices.
    """
    north_west: dict[int, Row] = {}
    north_east: dict[int, Row] = {}
    south_west: dict[int, Row] = {}
    south_east: dict[int, Row] = {}
    for row, entries in rows.items():
        west = [(prob, dest) for prob, dest in entries if dest < boundary]
        east = [(prob, dest) for prob, dest in entries if dest >= boundary]
        if row < boundary:
            north_west[row] = west
            north_east[row] = east
        else:
            south_west[row] = west
            south_east[row - boundary] = [(prob, dest - boundary) for prob, dest in east]
    return north_west, north_east, south_west, south_east


def _usage() -> int:
    print(" Erreur passez en parametre le nom du model ")
    print(" <Exemple d'usage > ./reordonner model50 ")
    return 1


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        return _usage()
    base = args[0]
    size_path, code_path, matrix_path = (Path(base + s) for s in (".sz", ".cd", ".Rii"))
    if not all(path.exists() for path in (size_path, code_path, matrix_path)):
        return 2

    sizes = read_sizes(size_path)
    if sizes.components is None:
        return 2
    count = sizes.states
    print(f"n = {count} ")
    Path(base + "-reordre.sz").write_text(
        f"{sizes.arcs:12d} \n{count:12d} \n{sizes.components:12d} \n"
    )

    encoding = read_encoding(code_path, count, 2)
    states = sort_states([(number, *values) for number, values in encoding.items()])
    Path(base + "-reordre.cd").write_text(
        "".join(f"{i:12d} {x1:12d} {x2:12d} \n" for i, (_, x1, x2) in enumerate(states))
    )

    rows = read_matrix(matrix_path, count)
    reordered = reorder_matrix(rows, [number for number, _, _ in states])
    Path(base + "-reordre.Rii").write_text(
        "".join(
            f"{line:12d} {len(entries):12d} "
            + "".join(f"{prob: .15E}{dest:12d}" for prob, dest in entries)
            + "\n"
            for line, entries in reordered.items()
        )
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())