"""Per-link metrics derived from attenuation."""
from __future__ import annotations

from enum import Enum

import numpy as np

from .environment import db_to_linear

__all__ = [
    "MetricKind",
    "received_power_dbm",
    "snr_db",
    "bit_error_rate",
]


class MetricKind(Enum):
    """The three recorded metrics, with their fixed plot labels."""

    ATTENUATION = "attenuation"
    RECEIVED_POWER = "received_power"
    BER = "ber"

    @property
    def figure_name(self) -> str:
        return _LABELS[self][0]

    @property
    def ylabel(self) -> str:
        return _LABELS[self][1]

    @property
    def title(self) -> str:
        return _LABELS[self][2]


_LABELS = {
    MetricKind.ATTENUATION: ("Attenuations", "Attenuation (dB)", "Attenuations Between Agents"),
    MetricKind.RECEIVED_POWER: ("Received Powers", "Received Power (dBm)", "Received Powers Between Agents"),
    MetricKind.BER: ("Bit Error Rates", "Bit Error Rate", "Bit Error Rates Between Agents"),
}


def received_power_dbm(tx_power_dbm: float, attenuation_db):
    """Received power: transmit power minus path attenuation."""
    return tx_power_dbm - attenuation_db


def snr_db(rx_power_dbm, noise_floor_dbm: float):
    """Signal-to-noise ratio in dB against a fixed noise floor."""
    return rx_power_dbm - noise_floor_dbm


def bit_error_rate(snr_db_value):
    """Closed-form BER approximation from the SNR in dB.

    BER = 0.5 * (1 - sqrt(snr / (1 + snr))) with *snr* linear.  Lies in
    [0, 0.5] for finite input and never increases with the SNR.
    """
    snr_lin = db_to_linear(snr_db_value)
    return 0.5 * (1.0 - np.sqrt(snr_lin / (1.0 + snr_lin)))
