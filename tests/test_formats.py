import pytest

from dvfsqueue.formats import (
    Sizes,
    read_distribution,
    read_encoding,
    read_matrix,
    read_sizes,
    write_distribution,
)
from dvfsqueue.generator import generate_chain, write_chain
from dvfsqueue.model import PalierModel


@pytest.fixture
def chain_files(tmp_path):
    model = PalierModel(arrival_rate=30, thresholds=(15, 30, 45, 60, 75))
    chain = generate_chain(model)
    base = tmp_path / "model"
    write_chain(chain, base)
    return chain, str(base)


def test_sizes_round_trip(chain_files):
    chain, base = chain_files
    assert read_sizes(base + ".sz") == Sizes(chain.arc_count, chain.size, chain.components)


def test_sizes_without_components(tmp_path):
    path = tmp_path / "m.sz"
    path.write_text("12\n5\n")
    sizes = read_sizes(path)
    assert (sizes.arcs, sizes.states, sizes.components) == (12, 5, None)


def test_sizes_too_short(tmp_path):
    path = tmp_path / "m.sz"
    path.write_text("12\n")
    with pytest.raises(ValueError):
        read_sizes(path)


def test_matrix_round_trip(chain_files):
    chain, base = chain_files
    rows = read_matrix(base + ".Rii", chain.size)
    assert list(rows) == list(range(chain.size))
    for number, row in enumerate(chain.rows):
        assert [dest for _, dest in rows[number]] == [dest for _, dest in row]
        for (read_prob, _), (prob, _) in zip(rows[number], row):
            assert read_prob == pytest.approx(prob, rel=1e-14)


def test_encoding_round_trip(chain_files):
    chain, base = chain_files
    encoding = read_encoding(base + ".cd", chain.size, chain.components)
    assert [encoding[n] for n in range(chain.size)] == chain.states


def test_truncated_matrix(tmp_path):
    path = tmp_path / "m.Rii"
    path.write_text("0 2 0.5 0\n")
    with pytest.raises(ValueError):
        read_matrix(path, 1)


def test_bad_value_in_encoding(tmp_path):
    path = tmp_path / "m.cd"
    path.write_text("0 x\n")
    with pytest.raises(ValueError):
        read_encoding(path, 1, 1)


def test_distribution_round_trip(tmp_path):
    pi = [0.125, 0.375, 0.5, 1e-300]
    path = tmp_path / "m.pi"
    write_distribution(path, pi)
    assert read_distribution(path, len(pi)) == pi
    assert len(path.read_text().splitlines()) == len(pi)