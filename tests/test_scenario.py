import numpy as np
import pytest

from linkmon.simulator.scenario import (
    AgentPose,
    as_poses,
    generate_trajectory,
    load_trajectory,
    poses_to_array,
    random_walk_trajectory,
)


def test_as_poses_from_array():
    arr = np.array([[0.0, 10.0], [1.0, 11.0], [0.5, -0.5]])
    poses = as_poses(arr)
    assert poses == [AgentPose(0.0, 1.0, 0.5), AgentPose(10.0, 11.0, -0.5)]
    assert np.array_equal(poses_to_array(poses), arr)


def test_as_poses_rejects_wrong_layout():
    with pytest.raises(ValueError):
        as_poses(np.zeros((2, 4)))


def test_empty_snapshot():
    assert as_poses([]) == []
    assert poses_to_array([]).shape == (3, 0)


def test_random_walk_shape_and_bounds():
    traj = random_walk_trajectory(n_agents=4, steps=200, area_size=100.0, speed=7.0, seed=1)
    assert traj.shape == (200, 3, 4)
    assert np.all(traj[:, :2] >= 0.0)
    assert np.all(traj[:, :2] <= 100.0)
    assert np.all(np.abs(traj[:, 2]) <= np.pi)


def test_random_walk_is_seeded():
    a = random_walk_trajectory(n_agents=3, steps=20, seed=5)
    b = random_walk_trajectory(n_agents=3, steps=20, seed=5)
    c = random_walk_trajectory(n_agents=3, steps=20, seed=6)
    assert np.array_equal(a, b)
    assert not np.array_equal(a, c)


def test_generate_and_load(tmp_path):
    path = str(tmp_path / "traj.npy")
    traj = generate_trajectory(n_agents=2, steps=5, out_path=path, seed=0)
    assert np.array_equal(load_trajectory(path), traj)


def test_load_rejects_bad_shape(tmp_path):
    path = str(tmp_path / "bad.npy")
    np.save(path, np.zeros((5, 2, 3)))
    with pytest.raises(ValueError):
        load_trajectory(path)
