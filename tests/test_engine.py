import numpy as np

from linkmon.config import NetworkConfig
from linkmon.parallel import compute_batch
from linkmon.simulator.channel import ChannelModel
from linkmon.simulator.engine import NetworkMonitor, run_trajectory
from linkmon.simulator.metrics import MetricKind
from linkmon.simulator.scenario import random_walk_trajectory
from linkmon.simulator.visualize import RecordingSink


def test_step_computes_then_records():
    cfg = NetworkConfig()
    sink = RecordingSink()
    monitor = NetworkMonitor.from_config(cfg, sinks=[sink], refresh_every=10)
    snapshot = random_walk_trajectory(n_agents=3, steps=1, seed=2)[0]

    metrics = monitor.step(snapshot)

    assert monitor.recorder.step == 1
    history = monitor.recorder.history(MetricKind.ATTENUATION)
    assert history[(1, 2)][0] == metrics.attenuation_db[0, 1]
    assert history[(2, 3)][0] == metrics.attenuation_db[1, 2]
    assert not sink.events


def test_run_trajectory_with_agent_leaving():
    cfg = NetworkConfig()
    sink = RecordingSink()
    monitor = NetworkMonitor.from_config(cfg, sinks=[sink])
    first = random_walk_trajectory(n_agents=4, steps=60, seed=0)
    second = random_walk_trajectory(n_agents=3, steps=60, seed=1)

    result = run_trajectory(monitor, list(first) + list(second))

    assert result.steps == 120
    assert result.final_metrics.n_agents == 3
    assert result.recorder.step == 120
    assert list(result.recorder.time_index) == list(range(61, 121))
    # refreshes at 50 (4 agents, 6 pairs) and 100 (3 agents, 3 pairs)
    assert [len(e.series) for e in sink.events] == [6, 6, 6, 3, 3, 3]


def test_compute_batch_matches_sequential():
    cfg = NetworkConfig()
    snapshots = list(random_walk_trajectory(n_agents=4, steps=3, seed=9))
    batch = compute_batch(cfg, snapshots, los="never_visible", processes=2)

    from linkmon.visibility.placeholder import never_visible
    model = ChannelModel(cfg, has_line_of_sight=never_visible)
    for snapshot, metrics in zip(snapshots, batch):
        expected = model.compute_metrics(snapshot)
        for a, b in zip(metrics, expected):
            assert np.array_equal(a, b)
