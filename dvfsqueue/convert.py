"""Conversion of a sparse matrix between row and column storage and orderings."""

from __future__ import annotations

import sys
import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from .formats import read_matrix, read_sizes

_STORAGES = "RC"
_ORDERS = "idu"


@dataclass(frozen=True)
class MatrixFormat:
    """A matrix file format such as ``Rii`` or ``Cdi``.

    ``storage`` is ``R`` (one line per row) or ``C`` (one line per column);
    ``first`` orders the lines and ``second`` the entries of a line, each
    ``i`` (increasing), ``d`` (decreasing) or ``u`` (unordered, written increasing).
    """

    storage: str
    first: str
    second: str

    @classmethod
    def parse(cls, text: str) -> MatrixFormat:
        """Parse a three-letter format code, raising ValueError if it is invalid."""
        if len(text) != 3:
            raise ValueError(f"format {text!r} must have three letters")
        storage, first, second = text
        if storage not in _STORAGES:
            raise ValueError(f"format {text!r} must start with R or C")
        if first not in _ORDERS or second not in _ORDERS:
            raise ValueError(f"orderings of format {text!r} must be i, d or u")
        return cls(storage, first, second)

    @property
    def by_rows(self) -> bool:
        return self.storage == "R"

    def __str__(self) -> str:
        return f"{self.storage}{self.first}{self.second}"


def _as_format(value: MatrixFormat | str) -> MatrixFormat:
    return value if isinstance(value, MatrixFormat) else MatrixFormat.parse(value)


def convert_matrix(
    rows: Mapping[int, Sequence[tuple[float, int]]],
    source: MatrixFormat | str,
    target: MatrixFormat | str,
    size: int,
) -> dict[int, list[tuple[float, int]]]:
    """Rewrite the lines of a square matrix of ``size`` from ``source`` to ``target``.

    The input lines must be numbered 0 to size-1 in increasing order. The result
    maps each output line, in output order, to its (value, index) entries.
    """
    source = _as_format(source)
    target = _as_format(target)
    for expected, (found, _) in enumerate(zip(rows, range(size))):
        if found != expected:
            raise ValueError(
                f"Input matrix error, index of line {expected + 1} in the file is "
                f"{found}, should be {expected}"
            )
    if len(rows) != size:
        raise ValueError(f"expected {size} lines, got {len(rows)}")

    same = source.storage == target.storage
    triples = []
    for first, entries in rows.items():
        for value, second in entries:
            if not 0 <= second < size:
                raise ValueError(f"index {second} of line {first} outside 0..{size - 1}")
            triples.append((first, second, value) if same else (second, first, value))

    sign1 = -1 if target.first == "d" else 1
    sign2 = -1 if target.second == "d" else 1
    triples.sort(key=lambda t: (sign1 * t[0], sign2 * t[1]))

    order = range(size - 1, -1, -1) if target.first == "d" else range(size)
    result: dict[int, list[tuple[float, int]]] = {line: [] for line in order}
    for first, second, value in triples:
        result[first].append((value, second))
    return result


def _format_lines(lines: Mapping[int, Sequence[tuple[float, int]]]) -> str:
    return "".join(
        f"{line} {len(entries)}     "
        + "".join(f" {value:e} {index}" for value, index in entries)
        + "\n"
        for line, entries in lines.items()
    )


def _usage() -> int:
    print("usage: convert file.extin extout", file=sys.stderr)
    print("\t extin and extout must be {R|C}{i|d|u}{i|d|u}", file=sys.stderr)
    print("\t output is written to file.extout", file=sys.stderr)
    print("\t example: convert modele.Rii Cdi produces modele.Cdi", file=sys.stderr)
    return 1


def main(argv: list[str] | None = None) -> int:
    start = time.perf_counter()
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 2:
        return _usage()
    name, extension = args
    if len(name) < 4 or name[-4] != ".":
        return _usage()
    try:
        source = MatrixFormat.parse(name[-3:])
        target = MatrixFormat.parse(extension)
    except ValueError:
        return _usage()
    base = name[:-4]
    if source == target:
        print(
            f"Nothing to do same input '{source}' and output '{target}' format",
            file=sys.stderr,
        )
        return 0

    size_path = Path(base + ".sz")
    if not size_path.exists():
        print(f"Cannot open {size_path}", file=sys.stderr)
        return 3
    if not Path(name).exists():
        print(f"Cannot open file {name}", file=sys.stderr)
        return 2

    output = f"{base}.{target}"
    print(f"1. READ AND SPLIT: {name}")
    sizes = read_sizes(size_path)
    rows = read_matrix(name, sizes.states)
    print(f"\tRows  : {sizes.states}  [0..{sizes.states - 1}]")
    print(f"\tCols  : {sizes.states}  [0..{sizes.states - 1}]")
    print(f"\tVals  : {sizes.arcs} non-zero values")
    print(f"\tAutom : {sizes.components} automaton(s)")

    print("2. SORT")
    try:
        lines = convert_matrix(rows, source, target, sizes.states)
    except ValueError as error:
        print(error, file=sys.stderr)
        return 51

    print(f"3. READ AND WRITE: {output}")
    Path(output).write_text(_format_lines(lines))
    print(f"   {time.perf_counter() - start:.3f} secondes")
    return 0


if __name__ == "__main__":
    sys.exit(main())