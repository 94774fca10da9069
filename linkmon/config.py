"""Radio configuration record.

Every physical and radio parameter the channel model needs lives here so that
the rest of the package can access them in a single import.  Configs are
immutable once built; they can be created programmatically or loaded from YAML
files to facilitate batch experiments.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, asdict, fields

import yaml

__all__ = [
    "NetworkConfig",
]

DEFAULT_YAML_INDENT = 2


@dataclass(frozen=True)
class NetworkConfig:
    """Container for the radio parameters of one simulation run.

    Attributes
    ----------
    street_width_m
        Width of the streets between building rows (metres).
    frequency_mhz
        Carrier frequency in MHz.
    building_height_m
        Mean rooftop height (metres).
    rx_height_m
        Receiver antenna height (metres).
    tx_height_m
        Transmitter antenna height (metres).
    angle_deg
        Incidence angle of the direct path relative to the street (degrees).
    building_spacing_m
        Centre-to-centre distance between buildings (metres).
    tx_power_dbm
        Transmit power in dBm.
    noise_floor_dbm
        Receiver noise floor in dBm.
    """

    street_width_m: float = 20.0
    frequency_mhz: float = 1710.0
    building_height_m: float = 20.0
    rx_height_m: float = 2.0
    tx_height_m: float = 2.0
    angle_deg: float = 0.0
    building_spacing_m: float = 10.0
    tx_power_dbm: float = -15.0
    noise_floor_dbm: float = -90.0

    # Free-form field to store arbitrary user metadata (e.g., experiment name).
    tag: str = field(default="", metadata={"yaml_field": True})

    def __post_init__(self):
        # YAML hands back ints for values like "1710"; keep every radio field a float
        for f in fields(self):
            if f.name == "tag":
                continue
            value = getattr(self, f.name)
            if not isinstance(value, float):
                object.__setattr__(self, f.name, float(value))

    # ---------------------------------------------------------------------
    # YAML helpers
    # ---------------------------------------------------------------------
    @classmethod
    def from_yaml(cls, path: os.PathLike | str) -> "NetworkConfig":
        """Load a configuration from a YAML file."""
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        return cls(**data)

    def to_yaml(self, path: os.PathLike | str) -> None:
        """Save the config to YAML."""
        with open(path, "w", encoding="utf-8") as fh:
            yaml.safe_dump(asdict(self), fh, indent=DEFAULT_YAML_INDENT)

    # Convenience str representation for logging
    def __str__(self) -> str:  # noqa: DunderStr
        return (
            f"NetworkConfig(f={self.frequency_mhz} MHz, "
            f"tx={self.tx_power_dbm} dBm, noise={self.noise_floor_dbm} dBm)"
        )
