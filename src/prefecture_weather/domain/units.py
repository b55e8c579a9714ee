from __future__ import annotations

import math


def celsius_to_fahrenheit(celsius: float) -> float:
    return celsius * 9 / 5 + 32


def mps_to_kmh(mps: float) -> float:
    return mps * 3.6


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (22.5 -> 23, -0.5 -> 0)."""
    return int(math.floor(value + 0.5))
