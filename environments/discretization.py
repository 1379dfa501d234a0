"""Lux thresholds that turn continuous readings into discrete levels.

The lab simulator and the policy query both go through these functions, so
training-time and inference-time levels always agree.
"""

import math
from typing import Optional

from .types import LabReading, StateDescriptor

LIGHT_LEVEL_BOUNDS = (50.0, 100.0, 300.0)
SUNSHINE_BOUNDS = (50.0, 200.0, 700.0)


def _bucket(value: Optional[float], bounds) -> int:
    if value is None or math.isnan(value):
        return 0
    for level, bound in enumerate(bounds):
        if value < bound:
            return level
    return len(bounds)


def discretize_light_level(value: Optional[float]) -> int:
    """Map zone lux to a light level in 0..3."""
    return _bucket(value, LIGHT_LEVEL_BOUNDS)


def discretize_sunshine(value: Optional[float]) -> int:
    """Map outdoor lux to a sunshine level in 0..3."""
    return _bucket(value, SUNSHINE_BOUNDS)


def discretize_reading(reading: LabReading) -> StateDescriptor:
    """Discretize the levels of a raw reading, keeping the fixtures verbatim."""
    return StateDescriptor(
        z1_level=discretize_light_level(reading.z1_level),
        z2_level=discretize_light_level(reading.z2_level),
        z1_light=reading.z1_light,
        z2_light=reading.z2_light,
        z1_blinds=reading.z1_blinds,
        z2_blinds=reading.z2_blinds,
        sunshine=discretize_sunshine(reading.sunshine),
    )
