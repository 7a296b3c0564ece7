import pytest

from dvfsqueue.ring import (
    RingSimulation,
    cumulative_distribution,
    main,
    sample_duration,
)


class FixedRng:
    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value


def test_cumulative_distribution():
    assert cumulative_distribution([0.25, 0.25, 0.5]) == [0.25, 0.5, 1.0]
    assert cumulative_distribution([]) == []


@pytest.mark.parametrize("r, expected", [(0.0, 0), (0.25, 0), (0.3, 1), (0.99, 2)])
def test_sample_duration(r, expected):
    assert sample_duration([0.25, 0.5, 1.0], FixedRng(r)) == expected


def test_sample_duration_falls_back_to_last():
    assert sample_duration([0.2, 0.9], FixedRng(0.95)) == 1


def test_sample_duration_empty():
    with pytest.raises(ValueError):
        sample_duration([], FixedRng(0.5))


def make():
    return RingSimulation([0.0, 1.0], rng=FixedRng(0.5))


def test_initial_ring_is_empty():
    sim = make()
    assert sim.filled_slots() == 0
    assert [s.place for s in sim.stations[:3]] == [0, 8, 16]


def test_special_stations():
    sim = make()
    special = [i for i, s in enumerate(sim.stations) if s.special]
    assert special == [0, 4, 6, 10, 12, 16]


def test_all_stations_emit_on_first_arrival():
    sim = make()
    assert sim.step() == []
    emitted = sim.step()
    assert len(emitted) == len(sim.stations)
    assert all(date == 1 for _, date in emitted)
    assert all(s.delays == [0] for s in sim.stations)
    assert sim.filled_slots() == len(sim.stations)


def test_main_missing_file(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main([str(tmp_path / "absent.pi")]) == 0
    assert "Erreur de lecture du fichier" in capsys.readouterr().out