import pytest

from dvfsqueue.mmc import MMcQueue, main, mean_customers


def test_empty_system_when_nothing_arrives():
    assert MMcQueue(arrival_rate=0).idle_probability() == pytest.approx(1.0)


def test_single_server_matches_geometric_queue():
    queue = MMcQueue(arrival_rate=1, servers=1, service_rate=2.0)
    assert queue.idle_probability() == pytest.approx(0.5)
    pi = queue.distribution(2000)
    assert mean_customers(pi) == pytest.approx(1.0)


def test_distribution_length_and_sum():
    pi = MMcQueue(arrival_rate=20).distribution(2000)
    assert len(pi) == 2001
    assert sum(pi) == pytest.approx(1.0, rel=1e-9)


def test_distribution_heavy_load_sums_to_one():
    pi = MMcQueue(arrival_rate=39).distribution(5000)
    assert sum(pi) == pytest.approx(1.0, rel=1e-9)


def test_distribution_first_value_is_idle_probability():
    queue = MMcQueue(arrival_rate=25)
    assert queue.distribution(100)[0] == pytest.approx(queue.idle_probability())


def test_balance_equations_hold():
    queue = MMcQueue(arrival_rate=30)
    pi = queue.distribution(300)
    for i in range(200):
        served = min(i + 1, queue.servers) * queue.service_rate
        assert pi[i + 1] * served == pytest.approx(pi[i] * queue.arrival_rate, rel=1e-9)


def test_mean_customers_exceeds_offered_load():
    queue = MMcQueue(arrival_rate=30)
    n = mean_customers(queue.distribution(3000))
    assert n > queue.arrival_rate / queue.service_rate


def test_unstable_queue_raises():
    with pytest.raises(ValueError):
        MMcQueue(arrival_rate=40).idle_probability()
    with pytest.raises(ValueError):
        MMcQueue(arrival_rate=50).distribution(10)


def test_mean_customers_of_simple_vectors():
    assert mean_customers([0.5, 0.5]) == pytest.approx(0.5)
    assert mean_customers([0.0, 0.0, 1.0]) == pytest.approx(2.0)


def test_power_without_arrivals_is_all_idle():
    queue = MMcQueue(arrival_rate=0)
    assert queue.mean_power() == pytest.approx(queue.servers * queue.energy_idle)
    assert queue.idle_power() == pytest.approx(queue.mean_power())


def test_energy_per_job_times_rate_is_power():
    queue = MMcQueue(arrival_rate=15)
    assert queue.energy_per_job() * 15 == pytest.approx(queue.mean_power())


def test_power_splits_into_idle_and_busy_parts():
    queue = MMcQueue(arrival_rate=15)
    busy = queue.arrival_rate / queue.service_rate * queue.energy_active
    assert queue.idle_power() + busy == pytest.approx(queue.mean_power())


def test_no_arrivals_gives_sentinel_values():
    queue = MMcQueue(arrival_rate=0)
    assert queue.energy_per_job() == -1.0
    assert queue.response_time(3.0) == -1.0


def test_response_time_is_littles_law():
    assert MMcQueue(arrival_rate=10).response_time(5.0) == pytest.approx(0.5)


def test_main_rejects_wrong_arguments(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert main([]) == 1
    assert main(["a", "b"]) == 1
    assert not (tmp_path / "File_Infini.resultats").exists()


def test_main_writes_results(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert main(["20"]) == 0
    lines = (tmp_path / "Dist_Stat.PI").read_text().splitlines()
    assert len(lines) == 100001
    fields = (tmp_path / "File_Infini.resultats").read_text().split()
    assert fields[0] == "20"
    assert float(fields[2]) == pytest.approx(float(fields[1]) / 20, rel=1e-8)
    assert float(fields[3]) == pytest.approx(MMcQueue(arrival_rate=20).mean_power())