"""Parallel evaluation of independent snapshots using a process pool."""
from __future__ import annotations

import multiprocessing as mp
from typing import Any, Iterable, List

from .config import NetworkConfig
from .simulator.channel import ChannelModel, LinkMetrics
from .visibility import get_los

__all__ = ["compute_batch"]


def _worker(args):  # type: ignore
    cfg, los_name, snapshot, environment = args
    model = ChannelModel(cfg, has_line_of_sight=get_los(los_name))
    return model.compute_metrics(snapshot, environment)


def compute_batch(
    cfg: NetworkConfig,
    snapshots: Iterable[Any],
    environment: Any = None,
    los: str = "always_visible",
    processes: int | None = None,
) -> List[LinkMetrics]:
    """Evaluate many independent snapshots in parallel, preserving order.

    The line-of-sight predicate is passed by registry name so that workers
    resolve it on their side.
    """
    get_los(los)  # fail fast on unknown names
    jobs = [(cfg, los, snapshot, environment) for snapshot in snapshots]
    with mp.Pool(processes=processes) as pool:
        results = pool.map(_worker, jobs)
    return results
