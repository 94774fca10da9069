"""Physical-layer utilities: dB conversions and COST-231 Walfish-Ikegami path loss.

The channel model only dispatches to the two path-loss functions below; any
callable with the same signature can be injected in their place (see
`linkmon.simulator.channel.ChannelModel`).

Units follow the model: distance in km, frequency in MHz, heights and widths
in metres, street orientation angle in degrees.  No clipping is applied to the
validity range (20 m - 5 km, 800 - 2000 MHz); out-of-range inputs simply run
through the formulas, and a zero distance yields -inf from the logarithm.
"""

from __future__ import annotations

import numpy as np

__all__ = [
    "db_to_linear",
    "linear_to_db",
    "walfish_ikegami_los",
    "walfish_ikegami_nlos",
]


def db_to_linear(db):
    """Convert dB to a linear scale (power ratio)."""
    db = np.asarray(db, dtype=float)
    return 10 ** (db / 10.0)


def linear_to_db(lin):
    """Convert linear power ratio to dB."""
    lin = np.asarray(lin, dtype=float)
    return 10.0 * np.log10(lin)


def walfish_ikegami_los(distance_km, frequency_mhz):
    """Street-canyon line-of-sight loss in dB.

    L = 42.6 + 26 log10(d) + 20 log10(f)
    """
    return 42.6 + 26.0 * np.log10(distance_km) + 20.0 * np.log10(frequency_mhz)


def _street_orientation_loss(angle_deg: float) -> float:
    if angle_deg < 35.0:
        return -10.0 + 0.354 * angle_deg
    if angle_deg < 55.0:
        return 2.5 + 0.075 * (angle_deg - 35.0)
    return 4.0 - 0.114 * (angle_deg - 55.0)


def walfish_ikegami_nlos(
    street_width_m,
    frequency_mhz,
    building_height_m,
    rx_height_m,
    angle_deg,
    tx_height_m,
    distance_km,
    building_spacing_m,
    metropolitan: bool = False,
):
    """Non-line-of-sight loss in dB.

    Sum of free-space loss, rooftop-to-street diffraction and multi-screen
    diffraction; the two diffraction terms only count when their sum is
    positive.

    Parameters
    ----------
    street_width_m
        Street width *w*.
    frequency_mhz
        Carrier frequency *f*.
    building_height_m
        Rooftop height *h_roof*.
    rx_height_m
        Mobile (receiver) antenna height.
    angle_deg
        Street orientation angle (0-90 degrees).
    tx_height_m
        Base (transmitter) antenna height.
    distance_km
        Link distance *d*.
    building_spacing_m
        Building separation *b*.
    metropolitan
        Use the metropolitan-centre frequency factor instead of the
        medium-city one.
    """
    free_space = 32.45 + 20.0 * np.log10(distance_km) + 20.0 * np.log10(frequency_mhz)

    rooftop_to_street = (
        -16.9
        - 10.0 * np.log10(street_width_m)
        + 10.0 * np.log10(frequency_mhz)
        + 20.0 * np.log10(building_height_m - rx_height_m)
        + _street_orientation_loss(angle_deg)
    )

    delta_h = tx_height_m - building_height_m
    if delta_h > 0:
        l_bsh = -18.0 * np.log10(1.0 + delta_h)
        k_a = 54.0
        k_d = 18.0
    else:
        l_bsh = 0.0
        if distance_km >= 0.5:
            k_a = 54.0 - 0.8 * delta_h
        else:
            k_a = 54.0 - 0.8 * delta_h * distance_km / 0.5
        k_d = 18.0 - 15.0 * delta_h / building_height_m

    if metropolitan:
        k_f = -4.0 + 1.5 * (frequency_mhz / 925.0 - 1.0)
    else:
        k_f = -4.0 + 0.7 * (frequency_mhz / 925.0 - 1.0)

    multi_screen = (
        l_bsh
        + k_a
        + k_d * np.log10(distance_km)
        + k_f * np.log10(frequency_mhz)
        - 9.0 * np.log10(building_spacing_m)
    )

    if rooftop_to_street + multi_screen > 0:
        return free_space + rooftop_to_street + multi_screen
    return free_space
