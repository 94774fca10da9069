"""Plot sinks for the recorder's periodic redraws (Matplotlib)."""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Tuple

import matplotlib.pyplot as plt
import numpy as np

from .metrics import MetricKind

__all__ = [
    "PairSeries",
    "RedrawEvent",
    "PlotSink",
    "MatplotlibSink",
    "RecordingSink",
    "pair_label",
]


def pair_label(pair: Tuple[int, int]) -> str:
    return f"Agent {pair[0]} to Agent {pair[1]}"


@dataclass
class PairSeries:
    """History of one metric for one agent pair."""

    pair: Tuple[int, int]
    label: str
    values: np.ndarray


@dataclass
class RedrawEvent:
    """Everything a sink needs to redraw one metric surface from scratch."""

    kind: MetricKind
    step: int
    x: np.ndarray
    series: List[PairSeries] = field(default_factory=list)


class PlotSink(ABC):
    """A surface per metric kind, redrawn wholesale on every refresh."""

    def redraw(self, event: RedrawEvent) -> None:
        self.clear(event.kind)
        for s in event.series:
            self.draw_series(event.kind, s.label, event.x, s.values)
        self.finish(event.kind)

    @abstractmethod
    def clear(self, kind: MetricKind) -> None:
        """Drop whatever the surface currently shows."""

    @abstractmethod
    def draw_series(self, kind: MetricKind, label: str, x, y) -> None:
        """Add one labeled line."""

    def finish(self, kind: MetricKind) -> None:
        """Hook called once all series of a redraw are drawn."""


class MatplotlibSink(PlotSink):
    """Three Matplotlib figures, one per metric.

    With `save_dir` set, every redraw is written to ``<save_dir>/<kind>.png``
    (and ``.svg``); otherwise the figures are updated interactively.
    """

    def __init__(self, save_dir: Path | str | None = None, show: bool = True):
        self.save_dir = Path(save_dir) if save_dir is not None else None
        self.show = show
        self.figures: Dict[MetricKind, plt.Figure] = {}
        self.axes: Dict[MetricKind, plt.Axes] = {}
        self._n_series: Dict[MetricKind, int] = {}
        for kind in MetricKind:
            fig, ax = plt.subplots(figsize=(8, 4.5))
            if fig.canvas.manager is not None:
                fig.canvas.manager.set_window_title(kind.figure_name)
            self.figures[kind] = fig
            self.axes[kind] = ax
            self._n_series[kind] = 0
            self._decorate(kind)

    def _decorate(self, kind: MetricKind) -> None:
        ax = self.axes[kind]
        ax.set_xlabel("Time Steps")
        ax.set_ylabel(kind.ylabel)
        ax.set_title(kind.title)
        ax.grid(True)

    def clear(self, kind: MetricKind) -> None:
        self.axes[kind].cla()
        self._n_series[kind] = 0

    def draw_series(self, kind: MetricKind, label: str, x, y) -> None:
        self.axes[kind].plot(x, y, "-", label=label, linewidth=2)
        self._n_series[kind] += 1

    def finish(self, kind: MetricKind) -> None:
        ax = self.axes[kind]
        fig = self.figures[kind]
        self._decorate(kind)
        if self._n_series[kind]:
            ax.legend()

        if self.save_dir is not None:
            self.save_dir.mkdir(parents=True, exist_ok=True)
            save_path = self.save_dir / kind.value
            fig.savefig(save_path.with_suffix(".png"), dpi=150, bbox_inches="tight")
            fig.savefig(save_path.with_suffix(".svg"), bbox_inches="tight")
        elif self.show:
            fig.canvas.draw_idle()
            plt.pause(0.001)

    def block(self) -> None:
        """Keep interactive windows open until the user closes them."""
        if self.save_dir is None and self.show:
            plt.show()

    def close(self) -> None:
        for fig in self.figures.values():
            plt.close(fig)


class RecordingSink(PlotSink):
    """Keeps every call in memory; used in tests and headless runs."""

    def __init__(self):
        self.calls: List[tuple] = []
        self.events: List[RedrawEvent] = []

    def redraw(self, event: RedrawEvent) -> None:
        self.events.append(event)
        super().redraw(event)

    def clear(self, kind: MetricKind) -> None:
        self.calls.append(("clear", kind))

    def draw_series(self, kind: MetricKind, label: str, x, y) -> None:
        self.calls.append(("draw_series", kind, label, np.array(x), np.array(y)))

    def finish(self, kind: MetricKind) -> None:
        self.calls.append(("finish", kind))
