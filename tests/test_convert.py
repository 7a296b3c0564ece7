import pytest

from dvfsqueue.convert import MatrixFormat, convert_matrix, main
from dvfsqueue.formats import read_matrix

ROWS = {
    0: [(0.5, 0), (0.5, 1)],
    1: [(1.0, 0)],
}

CHAIN = {
    0: [(0.25, 0), (0.75, 2)],
    1: [(0.5, 0), (0.5, 1)],
    2: [(0.1, 0), (0.2, 1), (0.7, 2)],
}


def test_parse_reads_letters():
    fmt = MatrixFormat.parse("Cdi")
    assert fmt == MatrixFormat("C", "d", "i")
    assert fmt.by_rows is False
    assert str(fmt) == "Cdi"


@pytest.mark.parametrize("text", ["Xii", "Rxi", "Rix", "Ri", "Riii", ""])
def test_parse_rejects_invalid(text):
    with pytest.raises(ValueError):
        MatrixFormat.parse(text)


def test_transpose_small_matrix():
    result = convert_matrix(ROWS, "Rii", "Cii", 2)
    assert result == {0: [(0.5, 0), (1.0, 1)], 1: [(0.5, 0)]}


def test_round_trip_rows_columns_rows():
    columns = convert_matrix(CHAIN, "Rii", "Cii", 3)
    back = convert_matrix(columns, "Cii", "Rii", 3)
    assert back == CHAIN


def test_entry_count_is_preserved():
    columns = convert_matrix(CHAIN, "Rii", "Cuu", 3)
    assert sum(len(v) for v in columns.values()) == sum(len(v) for v in CHAIN.values())


def test_decreasing_lines():
    result = convert_matrix(CHAIN, "Rii", "Rdi", 3)
    assert list(result) == [2, 1, 0]
    for entries in result.values():
        indices = [index for _, index in entries]
        assert indices == sorted(indices)


def test_decreasing_entries():
    result = convert_matrix(CHAIN, "Rii", "Rid", 3)
    assert list(result) == [0, 1, 2]
    for line, entries in result.items():
        indices = [index for _, index in entries]
        assert indices == sorted(indices, reverse=True)
        assert sorted(entries, key=lambda e: e[1]) == CHAIN[line]


def test_lines_out_of_order_rejected():
    rows = {1: [(1.0, 0)], 0: [(1.0, 1)]}
    with pytest.raises(ValueError, match="Input matrix error"):
        convert_matrix(rows, "Rii", "Cii", 2)


def test_index_out_of_range_rejected():
    rows = {0: [(1.0, 5)], 1: [(1.0, 0)]}
    with pytest.raises(ValueError):
        convert_matrix(rows, "Rii", "Cii", 2)


def _write_model(tmp_path):
    base = tmp_path / "model"
    (tmp_path / "model.sz").write_text("7\n3\n1\n")
    lines = [
        f"{line} {len(entries)} " + " ".join(f"{p:.15E} {i}" for p, i in entries)
        for line, entries in CHAIN.items()
    ]
    (tmp_path / "model.Rii").write_text("\n".join(lines) + "\n")
    return base


def test_main_writes_converted_file(tmp_path):
    base = _write_model(tmp_path)
    assert main([f"{base}.Rii", "Cii"]) == 0
    written = read_matrix(f"{base}.Cii", 3)
    expected = convert_matrix(CHAIN, "Rii", "Cii", 3)
    assert {k: [(pytest.approx(p), i) for p, i in v] for k, v in expected.items()} == written
    first_line = (tmp_path / "model.Cii").read_text().splitlines()[0]
    assert first_line.startswith("0 3     ")


def test_main_same_format_does_nothing(tmp_path):
    base = _write_model(tmp_path)
    assert main([f"{base}.Rii", "Rii"]) == 0
    assert sorted(p.name for p in tmp_path.iterdir()) == ["model.Rii", "model.sz"]


def test_main_bad_extension(tmp_path):
    base = _write_model(tmp_path)
    assert main([f"{base}.Rii", "Xyz"]) == 1
    assert main([f"{base}.Rii"]) == 1


def test_main_missing_sizes(tmp_path):
    assert main([str(tmp_path / "absent.Rii"), "Cii"]) == 3