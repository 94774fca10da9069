"""Per-pair metric history and periodic plot refresh."""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from .channel import LinkMetrics
from .metrics import MetricKind
from .visualize import PairSeries, PlotSink, RedrawEvent, pair_label

__all__ = ["REFRESH_EVERY", "MetricsRecorder"]

logger = logging.getLogger(__name__)

REFRESH_EVERY = 50

Pair = Tuple[int, int]


class MetricsRecorder:
    """Accumulates link metrics step by step and drives the plot sinks.

    One recorder covers one simulation run; `record` calls must arrive in step
    order.  Buffers grow without bound for the length of the run.  When the
    number of agents changes, every buffer (including the step index) is
    dropped and history restarts from the current step; the step counter
    itself keeps counting.

    Pairs are keyed by 1-based agent identities ``(i, j)`` with ``i < j``.
    """

    def __init__(self, sinks: Iterable[PlotSink] = (), refresh_every: int = REFRESH_EVERY):
        if refresh_every < 1:
            raise ValueError(f"refresh_every must be >= 1, got {refresh_every}")
        self.sinks: List[PlotSink] = list(sinks)
        self.refresh_every = refresh_every
        self.reset()

    def reset(self) -> None:
        """Start a new run: step counter back to 0 and no history."""
        self.step = 0
        self.refresh_count = 0
        self.n_agents: Optional[int] = None
        self._time: List[int] = []
        self._buffers: Dict[MetricKind, Dict[Pair, List[float]]] = {kind: {} for kind in MetricKind}

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------
    def record(self, attenuation, received_power, ber) -> None:
        """Append one step of metrics; refresh the sinks on the cadence."""
        matrices = {
            MetricKind.ATTENUATION: np.asarray(attenuation),
            MetricKind.RECEIVED_POWER: np.asarray(received_power),
            MetricKind.BER: np.asarray(ber),
        }
        shape = matrices[MetricKind.ATTENUATION].shape
        if len(shape) != 2 or shape[0] != shape[1]:
            raise ValueError(f"Metric matrices must be square, got shape {shape}")
        if any(m.shape != shape for m in matrices.values()):
            raise ValueError(
                f"Metric matrices must share one shape, got {[m.shape for m in matrices.values()]}"
            )

        self.step += 1

        n_agents = shape[0]
        if n_agents != self.n_agents:
            if self.n_agents is not None:
                logger.info(
                    "Agent count changed %d -> %d at step %d; history reset",
                    self.n_agents, n_agents, self.step,
                )
            self._resize(n_agents)

        self._time.append(self.step)
        for i in range(n_agents):
            for j in range(i + 1, n_agents):
                pair = (i + 1, j + 1)
                for kind, matrix in matrices.items():
                    self._buffers[kind].setdefault(pair, []).append(float(matrix[i, j]))

        if self.step % self.refresh_every == 0:
            self.refresh()

    def record_metrics(self, metrics: LinkMetrics) -> None:
        self.record(*metrics)

    def _resize(self, n_agents: int) -> None:
        self.n_agents = n_agents
        self._time = []
        self._buffers = {kind: {} for kind in MetricKind}

    # ------------------------------------------------------------------
    # Refresh
    # ------------------------------------------------------------------
    def redraw_events(self) -> List[RedrawEvent]:
        """Snapshot the current history as one event per metric kind."""
        x = np.array(self._time)
        events = []
        for kind in MetricKind:
            series = [
                PairSeries(pair=pair, label=pair_label(pair), values=np.array(values))
                for pair, values in sorted(self._buffers[kind].items())
                if values
            ]
            events.append(RedrawEvent(kind=kind, step=self.step, x=x, series=series))
        return events

    def refresh(self) -> None:
        """Redraw every sink from the full buffered history."""
        events = self.redraw_events()
        logger.debug("Refreshing %d sink(s) at step %d", len(self.sinks), self.step)
        for sink in self.sinks:
            for event in events:
                sink.redraw(event)
        self.refresh_count += 1

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def time_index(self) -> np.ndarray:
        return np.array(self._time)

    def history(self, kind: MetricKind) -> Dict[Pair, np.ndarray]:
        """Buffered values of one metric, per pair."""
        return {pair: np.array(values) for pair, values in sorted(self._buffers[kind].items())}

    def summary(self) -> dict:
        """Plain-Python digest of the buffered history (YAML friendly)."""
        out = {
            "step": self.step,
            "n_agents": self.n_agents,
            "n_samples": len(self._time),
            "pairs": {},
        }
        for kind in MetricKind:
            for pair, values in sorted(self._buffers[kind].items()):
                arr = np.array(values)
                entry = out["pairs"].setdefault(pair_label(pair), {})
                entry[kind.value] = {
                    "last": float(arr[-1]),
                    "mean": float(arr.mean()),
                    "min": float(arr.min()),
                    "max": float(arr.max()),
                }
        return out
