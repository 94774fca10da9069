"""Channel model: agent poses -> attenuation, received power and BER matrices."""
from __future__ import annotations

from typing import Any, Callable, NamedTuple

import numpy as np

from ..config import NetworkConfig
from ..visibility import LineOfSightFn
from ..visibility.placeholder import always_visible
from .environment import walfish_ikegami_los, walfish_ikegami_nlos
from .metrics import bit_error_rate, received_power_dbm, snr_db
from .scenario import AgentPose, Snapshot, as_poses

__all__ = ["DISTANCE_DIVISOR", "LinkMetrics", "ChannelModel", "pair_distance"]

# Raw world units are divided by this to get the propagation-model distance
DISTANCE_DIVISOR = 100.0


class LinkMetrics(NamedTuple):
    """Three N x N matrices; only the strict upper triangle (i < j) is filled."""

    attenuation_db: np.ndarray
    received_power_dbm: np.ndarray
    ber: np.ndarray

    @property
    def n_agents(self) -> int:
        return self.attenuation_db.shape[0]


def pair_distance(agent_a: AgentPose, agent_b: AgentPose) -> float:
    """Scaled Euclidean distance between two agents."""
    dx = agent_a.x - agent_b.x
    dy = agent_a.y - agent_b.y
    return float(np.sqrt(dx ** 2 + dy ** 2)) / DISTANCE_DIVISOR


class ChannelModel:
    """Pure pairwise link evaluation.

    Holds only immutable configuration and the injected collaborators, so a
    single instance may evaluate independent snapshots concurrently.

    Parameters
    ----------
    cfg
        Radio configuration.
    has_line_of_sight
        ``(agent_a, agent_b, environment) -> bool``.  Defaults to the
        `always_visible` placeholder.
    los_loss
        ``(distance, frequency) -> dB``.
    nlos_loss
        ``(street_width, frequency, building_height, rx_height, angle,
        tx_height, distance, building_spacing) -> dB``.
    """

    def __init__(
        self,
        cfg: NetworkConfig,
        has_line_of_sight: LineOfSightFn = always_visible,
        los_loss: Callable[..., float] = walfish_ikegami_los,
        nlos_loss: Callable[..., float] = walfish_ikegami_nlos,
    ):
        self.cfg = cfg
        self.has_line_of_sight = has_line_of_sight
        self.los_loss = los_loss
        self.nlos_loss = nlos_loss

    def path_loss_db(self, distance: float, line_of_sight: bool) -> float:
        """Dispatch to the LOS or NLOS propagation model."""
        cfg = self.cfg
        if line_of_sight:
            return self.los_loss(distance, cfg.frequency_mhz)
        return self.nlos_loss(
            cfg.street_width_m,
            cfg.frequency_mhz,
            cfg.building_height_m,
            cfg.rx_height_m,
            cfg.angle_deg,
            cfg.tx_height_m,
            distance,
            cfg.building_spacing_m,
        )

    def compute_metrics(self, agents: Snapshot, environment: Any = None) -> LinkMetrics:
        """Evaluate every unordered pair of the snapshot.

        Fewer than two agents give empty (all-zero) matrices.  Degenerate
        geometry is not guarded: NaN or infinite losses flow through to the
        received power and BER.
        """
        poses = as_poses(agents)
        n_agents = len(poses)
        attenuation = np.zeros((n_agents, n_agents))
        rx_power = np.zeros((n_agents, n_agents))
        ber = np.zeros((n_agents, n_agents))

        cfg = self.cfg
        for i in range(n_agents):
            for j in range(i + 1, n_agents):
                distance = pair_distance(poses[i], poses[j])
                los = self.has_line_of_sight(poses[i], poses[j], environment)

                attenuation[i, j] = self.path_loss_db(distance, los)
                rx_power[i, j] = received_power_dbm(cfg.tx_power_dbm, attenuation[i, j])
                ber[i, j] = bit_error_rate(snr_db(rx_power[i, j], cfg.noise_floor_dbm))

        return LinkMetrics(attenuation, rx_power, ber)
