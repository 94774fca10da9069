"""Command-line interface entry-point.

Usage examples
--------------
Generate a trajectory for 5 agents:
    python -m linkmon.cli generate-trajectory --n_agents 5 --steps 500 --out_path traj.npy

Replay it through the monitor, saving figures every 50 steps:
    python -m linkmon.cli run --config cfgs/default.yaml --trajectory traj.npy --figs_dir figs

Link budget for a single distance (raw world units):
    python -m linkmon.cli link --config cfgs/default.yaml --distance 1000
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List

import yaml

from .config import NetworkConfig
from .visibility import available_los, get_los
from .simulator.channel import DISTANCE_DIVISOR, ChannelModel
from .simulator.engine import NetworkMonitor, run_trajectory
from .simulator.metrics import bit_error_rate, received_power_dbm, snr_db
from .simulator.recorder import REFRESH_EVERY, MetricsRecorder
from .simulator.scenario import generate_trajectory, load_trajectory
from .simulator.visualize import MatplotlibSink


def _parse_args(argv: List[str] | None = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="linkmon", description="Pairwise link-quality monitor")
    parser.add_argument("--log_level", type=str, default="WARNING", help="Logging level (DEBUG, INFO, ...)")

    subparsers = parser.add_subparsers(dest="cmd", required=True)

    # ------------------------------------------------------------------
    # run
    # ------------------------------------------------------------------
    p_run = subparsers.add_parser("run", help="Replay a stored trajectory through the monitor")
    p_run.add_argument("--config", required=True, type=Path, help="YAML config file")
    p_run.add_argument("--trajectory", required=True, type=Path, help=".npy trajectory, shape (steps, 3, n_agents)")
    p_run.add_argument("--los", type=str, default="always_visible", choices=available_los(), help="Line-of-sight predicate")
    p_run.add_argument("--refresh_every", type=int, default=REFRESH_EVERY, help="Plot refresh cadence in steps")
    p_run.add_argument("--figs_dir", type=str, default=None, help="Directory to save figures (default: interactive)")
    p_run.add_argument("--summary_path", type=str, default=None, help="Path to save a YAML summary of the run")
    p_run.add_argument("--no_show", action="store_true", help="Do not open plot windows")

    # ------------------------------------------------------------------
    # generate-trajectory
    # ------------------------------------------------------------------
    p_gen = subparsers.add_parser("generate-trajectory", help="Generate a random-walk trajectory")
    p_gen.add_argument("--n_agents", type=int, required=True, help="Number of agents")
    p_gen.add_argument("--steps", type=int, required=True, help="Number of simulation steps")
    p_gen.add_argument("--area_size", type=float, default=1000.0, help="Side of the square area (world units)")
    p_gen.add_argument("--speed", type=float, default=5.0, help="Distance travelled per step (world units)")
    p_gen.add_argument("--seed", type=int, default=0, help="Random seed")
    p_gen.add_argument("--out_path", type=str, required=True, help="Output .npy file path")

    # ------------------------------------------------------------------
    # link
    # ------------------------------------------------------------------
    p_link = subparsers.add_parser("link", help="Print the link budget for one distance")
    p_link.add_argument("--config", required=True, type=Path, help="YAML config file")
    p_link.add_argument("--distance", required=True, type=float, help="Distance in raw world units")
    p_link.add_argument("--nlos", action="store_true", help="Use the non-line-of-sight model")
    return parser


def main(argv: List[str] | None = None) -> None:  # noqa: D401
    """Main entry point for the command-line interface."""
    parser = _parse_args(argv)
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    if args.cmd == "run":
        cfg = NetworkConfig.from_yaml(args.config)
        trajectory = load_trajectory(str(args.trajectory))
        sink = MatplotlibSink(save_dir=args.figs_dir, show=not args.no_show)
        monitor = NetworkMonitor(
            ChannelModel(cfg, has_line_of_sight=get_los(args.los)),
            MetricsRecorder([sink], refresh_every=args.refresh_every),
        )
        print(f"[INFO] Running {trajectory.shape[0]} steps for {trajectory.shape[2]} agents ({cfg})")
        result = run_trajectory(monitor, trajectory)
        if result.steps % args.refresh_every:
            # Show the tail of the run that fell between two refreshes
            result.recorder.refresh()

        summary = result.recorder.summary()
        for label, entry in summary["pairs"].items():
            print(
                f"{label:<22}"
                f"{entry['attenuation']['last']:>10.2f} dB"
                f"{entry['received_power']['last']:>10.2f} dBm"
                f"{entry['ber']['last']:>12.3e}"
            )
        if args.summary_path:
            with open(args.summary_path, "w", encoding="utf-8") as f:
                yaml.safe_dump({"config": str(args.config), **summary}, f)
            print(f"[INFO] Summary saved to {args.summary_path}")
        if args.figs_dir:
            print(f"[INFO] Figures saved to {args.figs_dir}")
        sink.block()
        sink.close()

    elif args.cmd == "generate-trajectory":
        generate_trajectory(
            n_agents=args.n_agents,
            steps=args.steps,
            out_path=args.out_path,
            area_size=args.area_size,
            speed=args.speed,
            seed=args.seed,
        )

    elif args.cmd == "link":
        cfg = NetworkConfig.from_yaml(args.config)
        model = ChannelModel(cfg)
        distance = args.distance / DISTANCE_DIVISOR
        attenuation = model.path_loss_db(distance, line_of_sight=not args.nlos)
        rx = received_power_dbm(cfg.tx_power_dbm, attenuation)
        snr = snr_db(rx, cfg.noise_floor_dbm)
        print(f"Distance       = {distance:.4g} (scaled)")
        print(f"Attenuation    = {attenuation:.2f} dB ({'NLOS' if args.nlos else 'LOS'})")
        print(f"Received power = {rx:.2f} dBm")
        print(f"SNR            = {snr:.2f} dB")
        print(f"BER            = {float(bit_error_rate(snr)):.3e}")

    else:
        raise ValueError(f"Unknown command: {args.cmd}")


if __name__ == "__main__":
    main(sys.argv[1:])
