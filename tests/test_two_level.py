import pytest

from dvfsqueue.mmc import MMcQueue
from dvfsqueue.model import ENERGY_ACTIVE, SERVICE_RATES
from dvfsqueue.two_level import (
    TwoLevelQueue,
    best_delay,
    best_energy,
    best_performance_per_watt,
    main,
    sweep_arrival_rates,
)


def test_service_rate_switches_at_threshold():
    queue = TwoLevelQueue(low=0, high=2, arrival_rate=20, threshold=10)
    assert queue.service_rate(5) == pytest.approx(5 * SERVICE_RATES[0])
    assert queue.service_rate(10) == pytest.approx(10 * SERVICE_RATES[0])
    assert queue.service_rate(11) == pytest.approx(11 * SERVICE_RATES[2])
    assert queue.service_rate(30) == pytest.approx(queue.servers * SERVICE_RATES[2])


def test_distribution_sums_to_one():
    pi = TwoLevelQueue(0, 2, 20, 10).distribution(3000)
    assert len(pi) == 3001
    assert sum(pi) == pytest.approx(1.0, rel=1e-9)


def test_balance_equations_hold():
    queue = TwoLevelQueue(1, 3, 30, 25)
    pi = queue.distribution(500)
    for i in range(300):
        assert pi[i + 1] * queue.service_rate(i + 1) == pytest.approx(
            pi[i] * queue.arrival_rate, rel=1e-9
        )


def test_same_levels_match_single_level_queue():
    pi = TwoLevelQueue(2, 2, 20, 0).distribution(400)
    expected = MMcQueue(arrival_rate=20).distribution(400)
    for got, want in zip(pi[:200], expected[:200]):
        assert got == pytest.approx(want, rel=1e-9)


def test_unstable_queue_raises():
    with pytest.raises(ValueError):
        TwoLevelQueue(0, 1, 36, 10).distribution(100)


def test_invalid_level_raises():
    with pytest.raises(ValueError):
        TwoLevelQueue(0, 6, 10, 10)


def test_power_without_arrivals():
    queue = TwoLevelQueue(1, 4, 0, 10)
    pi = queue.distribution(100)
    assert pi[0] == pytest.approx(1.0)
    expected = queue.servers * ENERGY_ACTIVE[1] * queue.alpha
    assert queue.mean_power(pi) == pytest.approx(expected)


def test_metrics_without_arrivals_use_sentinels():
    metrics = TwoLevelQueue(1, 4, 0, 10).metrics(100)
    assert metrics.response_time == -1.0
    assert metrics.energy_per_job == -1.0
    assert metrics.mean_customers == pytest.approx(0.0)


def test_metrics_are_consistent():
    queue = TwoLevelQueue(0, 3, 25, 12)
    metrics = queue.metrics(3000)
    assert metrics.response_time == pytest.approx(metrics.mean_customers / 25)
    assert metrics.energy_per_job == pytest.approx(metrics.power / 25)
    assert metrics.power == pytest.approx(queue.mean_power(queue.distribution(3000)))


def test_sweep_arrival_rates_covers_stable_odd_rates():
    results = sweep_arrival_rates(2, 4, 10, size=2000)
    assert [rate for rate, _ in results] == list(range(1, 48, 2))
    means = [m.mean_customers for _, m in results]
    assert means == sorted(means)


def test_best_energy_respects_limit_and_is_minimal():
    choices = best_energy(arrival_rate=20, energy_limit=50, max_threshold=5, size=1500)
    assert choices
    for choice in choices:
        assert choice.low < choice.high
        assert choice.metrics.energy_per_job <= 50
        for threshold in range(1, 6):
            other = TwoLevelQueue(choice.low, choice.high, 20, threshold).metrics(1500)
            if other.energy_per_job <= 50:
                assert choice.metrics.energy_per_job <= other.energy_per_job


def test_best_delay_reports_unstable_pairs():
    choices = best_delay(arrival_rate=38, delay_limit=10.0, max_threshold=3, size=1500)
    unstable = [c for c in choices if not c.stable]
    assert [(c.low, c.high) for c in unstable] == [(0, 1)]
    for choice in choices:
        if choice.stable:
            assert choice.metrics.response_time <= 10.0


def test_best_performance_per_watt_includes_equal_levels():
    choices = best_performance_per_watt(arrival_rate=21, max_threshold=3, size=1500)
    assert len(choices) == 21
    by_pair = {(c.low, c.high): c for c in choices}
    assert not by_pair[(0, 0)].stable
    assert by_pair[(3, 3)].threshold is None
    stable = [c for c in choices if c.stable]
    assert len(stable) == 20
    for choice in stable:
        if choice.low != choice.high:
            for threshold in range(1, 4):
                other = TwoLevelQueue(choice.low, choice.high, 21, threshold).metrics(1500)
                assert choice.metrics.performance_per_watt >= other.performance_per_watt


def test_main_rejects_arguments(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert main(["x"]) == 1
    assert not (tmp_path / "File_Infini.resultats").exists()


def test_main_writes_sweep(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert main([]) == 0
    text = (tmp_path / "File_Infini.resultats").read_text()
    assert text.startswith("Seuil = {10}")
    rows = [line.split() for line in text.splitlines()[1:]]
    assert [int(row[0]) for row in rows] == list(range(1, 48, 2))
    assert all(len(row) == 5 for row in rows)