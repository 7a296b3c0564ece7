"""Export of a generated chain as a Trivial Graph Format file."""

from __future__ import annotations

import sys
from collections.abc import Mapping, Sequence
from pathlib import Path

from .formats import read_encoding, read_matrix, read_sizes


def to_tgf(
    encoding: Mapping[int, Sequence[int]],
    rows: Mapping[int, Sequence[tuple[float, int]]],
) -> str:
    """Nodes labelled by their state, then one edge per transition."""
    parts = [f"{number}  ({','.join(str(v) for v in state)})\n" for number, state in encoding.items()]
    parts.append("# \n ")
    parts.extend(f"{source} {dest} \n" for source, row in rows.items() for _, dest in row)
    return "".join(parts)


def _usage() -> int:
    print("usage : Lam2TGF -f filename ")
    print("filename.Rii, filename.sz and filename.cd must exist before ")
    return 1


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 2 or not args[0].startswith("-f"):
        return _usage()
    base = args[1]
    size_path, matrix_path, code_path = (Path(base + s) for s in (".sz", ".Rii", ".cd"))
    if not all(path.exists() for path in (size_path, matrix_path, code_path)):
        return _usage()

    sizes = read_sizes(size_path)
    if sizes.components is None:
        return _usage()
    print(f"{sizes.arcs:12d}")
    print(f"{sizes.states:12d}")
    print(f"{sizes.components:12d}")

    print("debut lecture code ")
    encoding = read_encoding(code_path, sizes.states, sizes.components)
    print("fin lecture code ")
    rows = read_matrix(matrix_path, sizes.states)
    print("fin lecture Rii ")
    Path(base + ".tgf").write_text(to_tgf(encoding, rows))
    print("Done Lam2TGF")
    return 0


if __name__ == "__main__":
    sys.exit(main())