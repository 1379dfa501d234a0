"""Simulated two-zone lab with lights, blinds and changing sunshine."""

import logging
from typing import Any, List, Sequence, Tuple

from .base_env import LearningEnvironment
from .discretization import discretize_reading
from .types import (ActionDescriptor, LabReading, StateDescriptor, WAS,
                    TAG_Z1_LIGHT, TAG_Z2_LIGHT, TAG_Z1_BLINDS, TAG_Z2_BLINDS)

logger = logging.getLogger(__name__)

# z1Level, z2Level, z1Light, z2Light, z1Blinds, z2Blinds, sunshine
DIMENSIONS = (4, 4, 2, 2, 2, 2, 4)

# (fixture, action id, payload tag, payload value)
ACTIONS: Tuple[Tuple[str, str, str, bool], ...] = (
    ('z1_light', WAS + 'SetZ1Light', TAG_Z1_LIGHT, True),
    ('z1_light', WAS + 'SetZ1Light', TAG_Z1_LIGHT, False),
    ('z2_light', WAS + 'SetZ2Light', TAG_Z2_LIGHT, True),
    ('z2_light', WAS + 'SetZ2Light', TAG_Z2_LIGHT, False),
    ('z1_blinds', WAS + 'SetZ1Blinds', TAG_Z1_BLINDS, True),
    ('z1_blinds', WAS + 'SetZ1Blinds', TAG_Z1_BLINDS, False),
    ('z2_blinds', WAS + 'SetZ2Blinds', TAG_Z2_BLINDS, True),
    ('z2_blinds', WAS + 'SetZ2Blinds', TAG_Z2_BLINDS, False),
)

# Representative outdoor lux for each sunshine level
SUNSHINE_LUX = (20.0, 120.0, 450.0, 900.0)


def encode_state(descriptor: Sequence[Any]) -> int:
    """Mixed-radix index of a full descriptor, z1Level most significant."""
    index = 0
    for value, size in zip(descriptor, DIMENSIONS):
        index = index * size + int(value)
    return index


def decode_state(index: int) -> StateDescriptor:
    """Inverse of ``encode_state``."""
    values = []
    for size in reversed(DIMENSIONS):
        index, value = divmod(index, size)
        values.append(value)
    values.reverse()
    return StateDescriptor(values[0], values[1], bool(values[2]), bool(values[3]),
                           bool(values[4]), bool(values[5]), values[6])


class LabEnvironment(LearningEnvironment):
    """Lab simulator.

    Zone lux is ambient light, plus the lamp when it is on, plus a share of
    the outdoor sunshine when the blinds are open. Every performed action
    advances time by one tick, during which sunshine may drift one level up
    or down.
    """

    def __init__(self,
                 seed: int = 42,
                 ambient_lux: float = 20.0,
                 lamp_lux: float = 150.0,
                 window_share: Tuple[float, float] = (0.5, 0.3),
                 sunshine_drift: float = 0.1,
                 sunshine: int = 1):
        """Initialize the lab with all lights off and blinds closed.

        Args:
            seed: Random seed for the sunshine drift
            ambient_lux: Lux present in both zones at all times
            lamp_lux: Lux added by a zone's lamp
            window_share: Fraction of outdoor lux reaching each zone through open blinds
            sunshine_drift: Probability per tick that sunshine changes level
            sunshine: Initial sunshine level
        """
        super().__init__(seed)
        self.ambient_lux = ambient_lux
        self.lamp_lux = lamp_lux
        self.window_share = tuple(window_share)
        self.sunshine_drift = sunshine_drift
        self.sun_level = int(sunshine)

        self.z1_light = False
        self.z2_light = False
        self.z1_blinds = False
        self.z2_blinds = False
        self.time = 0

        self._states = [decode_state(i) for i in range(self.state_count)]

    @property
    def state_count(self) -> int:
        count = 1
        for size in DIMENSIONS:
            count *= size
        return count

    @property
    def action_count(self) -> int:
        return len(ACTIONS)

    def _zone_lux(self, light: bool, blinds: bool, share: float) -> float:
        lux = self.ambient_lux
        if light:
            lux += self.lamp_lux
        if blinds:
            lux += share * SUNSHINE_LUX[self.sun_level]
        return lux

    def reading(self) -> LabReading:
        """Current raw readings, as a sensor would report them."""
        return LabReading(
            z1_level=self._zone_lux(self.z1_light, self.z1_blinds, self.window_share[0]),
            z2_level=self._zone_lux(self.z2_light, self.z2_blinds, self.window_share[1]),
            z1_light=self.z1_light,
            z2_light=self.z2_light,
            z1_blinds=self.z1_blinds,
            z2_blinds=self.z2_blinds,
            sunshine=SUNSHINE_LUX[self.sun_level],
        )

    def current_descriptor(self) -> StateDescriptor:
        return discretize_reading(self.reading())

    def current_state(self) -> int:
        return encode_state(self.current_descriptor())

    def applicable_actions(self, state: int) -> List[int]:
        descriptor = self._states[state]
        return [a for a, (fixture, _, _, value) in enumerate(ACTIONS)
                if getattr(descriptor, fixture) != value]

    def perform_action(self, action: int) -> None:
        if not 0 <= action < self.action_count:
            raise ValueError(f"Unknown action index: {action}")
        fixture, _, _, value = ACTIONS[action]
        setattr(self, fixture, value)
        self._tick()

    def _tick(self):
        self.time += 1
        if self.np_random.random_sample() < self.sunshine_drift:
            step = 1 if self.np_random.random_sample() < 0.5 else -1
            self.sun_level = min(len(SUNSHINE_LUX) - 1, max(0, self.sun_level + step))
            logger.debug(f"Sunshine moved to level {self.sun_level} at t={self.time}")

    def compatible_states(self, partial: Sequence[Any]) -> List[int]:
        if len(partial) > len(DIMENSIONS):
            return []
        constraints = [(i, int(v)) for i, v in enumerate(partial) if v is not None]
        return [i for i, descriptor in enumerate(self._states)
                if all(int(descriptor[d]) == v for d, v in constraints)]

    def resolve_action(self, action: int) -> ActionDescriptor:
        _, action_id, tag, value = ACTIONS[action]
        return ActionDescriptor(action_id, [tag], [value])

    def set_fixtures(self, z1_light: bool = False, z2_light: bool = False,
                     z1_blinds: bool = False, z2_blinds: bool = False,
                     sunshine: int = None):
        """Put the lab into a known configuration without advancing time."""
        self.z1_light = z1_light
        self.z2_light = z2_light
        self.z1_blinds = z1_blinds
        self.z2_blinds = z2_blinds
        if sunshine is not None:
            self.sun_level = int(sunshine)
