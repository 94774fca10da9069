"""Agent pose snapshots and synthetic trajectories."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Union

import numpy as np

__all__ = [
    "AgentPose",
    "as_poses",
    "poses_to_array",
    "random_walk_trajectory",
    "generate_trajectory",
    "load_trajectory",
]


@dataclass(frozen=True)
class AgentPose:
    """Position and heading of one agent at one step.

    The agent's identity is its 1-based position in the snapshot.
    """

    x: float
    y: float
    theta: float = 0.0


Snapshot = Union[np.ndarray, Sequence[AgentPose], Sequence[Sequence[float]]]


def as_poses(agents: Snapshot) -> List[AgentPose]:
    """Normalise a snapshot into a list of poses.

    NumPy arrays are read in the host simulator's layout, shape ``(3, N)``:
    rows are x, y, theta and each column is one agent.  Any other iterable is
    read per agent, either `AgentPose` instances or ``(x, y[, theta])`` tuples.
    """
    if isinstance(agents, np.ndarray):
        if agents.ndim != 2 or agents.shape[0] != 3:
            raise ValueError(f"Pose array must have shape (3, N), got {agents.shape}")
        return [AgentPose(float(x), float(y), float(t)) for x, y, t in agents.T]

    poses = []
    for agent in agents:
        if isinstance(agent, AgentPose):
            poses.append(agent)
        else:
            poses.append(AgentPose(*(float(v) for v in agent)))
    return poses


def poses_to_array(poses: Iterable[AgentPose]) -> np.ndarray:
    """Inverse of `as_poses` for the array layout, shape ``(3, N)``."""
    cols = [(p.x, p.y, p.theta) for p in poses]
    if not cols:
        return np.zeros((3, 0))
    return np.array(cols, dtype=float).T


# ------------------------------------------------------------------
# Synthetic trajectories
# ------------------------------------------------------------------

def random_walk_trajectory(
    n_agents: int,
    steps: int,
    area_size: float = 1000.0,
    speed: float = 5.0,
    turn_std: float = 0.3,
    seed: int = 0,
) -> np.ndarray:
    """Unicycle random walk inside a square of side `area_size`.

    Returns an array of shape ``(steps, 3, n_agents)``.  Each step an agent
    perturbs its heading by a Gaussian turn and advances `speed` world units;
    agents that would leave the area are reflected back inside.
    """
    if n_agents < 0 or steps < 0:
        raise ValueError("n_agents and steps must be non-negative")

    rng = np.random.default_rng(seed)
    xy = rng.uniform(0, area_size, size=(2, n_agents))
    theta = rng.uniform(-np.pi, np.pi, size=n_agents)

    trajectory = np.zeros((steps, 3, n_agents))
    for t in range(steps):
        theta = theta + rng.normal(0, turn_std, size=n_agents)
        xy = xy + speed * np.vstack([np.cos(theta), np.sin(theta)])

        # Reflect off the walls
        low = xy < 0
        high = xy > area_size
        xy = np.where(low, -xy, xy)
        xy = np.where(high, 2 * area_size - xy, xy)
        theta = np.where(low[0] | high[0], np.pi - theta, theta)
        theta = np.where(low[1] | high[1], -theta, theta)
        theta = np.arctan2(np.sin(theta), np.cos(theta))

        trajectory[t, :2] = xy
        trajectory[t, 2] = theta
    return trajectory


def generate_trajectory(
    n_agents: int,
    steps: int,
    out_path: str,
    area_size: float = 1000.0,
    speed: float = 5.0,
    seed: int = 0,
) -> np.ndarray:
    """Generate a random-walk trajectory and save it as ``.npy``."""
    trajectory = random_walk_trajectory(
        n_agents=n_agents,
        steps=steps,
        area_size=area_size,
        speed=speed,
        seed=seed,
    )
    np.save(out_path, trajectory)
    print(f"Saved trajectory to {out_path} (shape: {trajectory.shape})")
    return trajectory


def load_trajectory(path: str) -> np.ndarray:
    """Load a stored trajectory, shape ``(steps, 3, N)``."""
    trajectory = np.load(path)
    if trajectory.ndim != 3 or trajectory.shape[1] != 3:
        raise ValueError(
            f"Trajectory must have shape (steps, 3, n_agents), got {trajectory.shape}"
        )
    return trajectory
