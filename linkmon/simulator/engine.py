"""Per-step driver: channel model followed by the recorder."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

import numpy as np

from ..config import NetworkConfig
from .channel import ChannelModel, LinkMetrics
from .recorder import MetricsRecorder
from .scenario import Snapshot

__all__ = ["NetworkMonitor", "RunResult", "run_trajectory"]


class NetworkMonitor:
    """Compute-then-record for one simulation run.

    Construct once per run and call `step` once per simulation step.
    """

    def __init__(self, channel: ChannelModel, recorder: MetricsRecorder):
        self.channel = channel
        self.recorder = recorder

    @classmethod
    def from_config(cls, cfg: NetworkConfig, sinks=(), **recorder_kwargs) -> "NetworkMonitor":
        return cls(ChannelModel(cfg), MetricsRecorder(sinks, **recorder_kwargs))

    def step(self, agents: Snapshot, environment: Any = None) -> LinkMetrics:
        metrics = self.channel.compute_metrics(agents, environment)
        self.recorder.record_metrics(metrics)
        return metrics


@dataclass
class RunResult:
    """Container returned by `run_trajectory`."""

    config: NetworkConfig
    steps: int
    final_metrics: LinkMetrics | None
    recorder: MetricsRecorder


def run_trajectory(
    monitor: NetworkMonitor,
    trajectory: Iterable[np.ndarray],
    environment: Any = None,
) -> RunResult:
    """Feed every snapshot of `trajectory` (each shape ``(3, N)``) through `monitor`."""
    metrics = None
    n_steps = 0
    for snapshot in trajectory:
        metrics = monitor.step(snapshot, environment)
        n_steps += 1
    return RunResult(
        config=monitor.channel.cfg,
        steps=n_steps,
        final_metrics=metrics,
        recorder=monitor.recorder,
    )
