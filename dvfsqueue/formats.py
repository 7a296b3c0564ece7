"""Readers and writers for the text files that describe a generated chain."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import TypeVar

T = TypeVar("T")

Row = list[tuple[float, int]]


@dataclass(frozen=True)
class Sizes:
    """Contents of a ``.sz`` file: arc count, state count and state components."""

    arcs: int
    states: int
    components: int | None = None


class _Tokens:
    """Whitespace-separated values of a text file, read one at a time."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._values = iter(self._path.read_text().split())

    def take(self, convert: Callable[[str], T]) -> T:
        try:
            token = next(self._values)
        except StopIteration:
            raise ValueError(f"{self._path}: unexpected end of file") from None
        try:
            return convert(token)
        except ValueError:
            raise ValueError(f"{self._path}: bad value {token!r}") from None


def read_sizes(path: str | Path) -> Sizes:
    """Read the arc count, the state count and, if present, the component count."""
    tokens = Path(path).read_text().split()
    if len(tokens) < 2:
        raise ValueError(f"{path}: expected at least two sizes")
    try:
        values = [int(token) for token in tokens[:3]]
    except ValueError:
        raise ValueError(f"{path}: sizes must be integers") from None
    components = values[2] if len(values) > 2 else None
    return Sizes(arcs=values[0], states=values[1], components=components)


def read_matrix(path: str | Path, count: int) -> dict[int, Row]:
    """Read ``count`` sparse rows: number, degree, then (probability, index) pairs."""
    tokens = _Tokens(path)
    rows: dict[int, Row] = {}
    for _ in range(count):
        number = tokens.take(int)
        degree = tokens.take(int)
        if degree < 0:
            raise ValueError(f"{path}: negative degree for row {number}")
        rows[number] = [(tokens.take(float), tokens.take(int)) for _ in range(degree)]
    return rows


def read_encoding(path: str | Path, count: int, components: int) -> dict[int, tuple[int, ...]]:
    """Read ``count`` state encodings: a state number then its components."""
    tokens = _Tokens(path)
    encoding: dict[int, tuple[int, ...]] = {}
    for _ in range(count):
        number = tokens.take(int)
        encoding[number] = tuple(tokens.take(int) for _ in range(components))
    return encoding


def read_distribution(path: str | Path, count: int) -> list[float]:
    """Read ``count`` probabilities."""
    tokens = _Tokens(path)
    return [tokens.take(float) for _ in range(count)]


def write_distribution(path: str | Path, pi: Iterable[float]) -> None:
    """Write one probability per line."""
    with open(path, "w") as handle:
        handle.writelines(f" {p:.18e}\n" for p in pi)