"""Value types shared by the lab environment and the learner."""

import numbers
from dataclasses import dataclass
from typing import Any, List, NamedTuple, Sequence, Tuple, Union

WAS = 'http://example.org/was#'

TAG_Z1_LEVEL = WAS + 'Z1Level'
TAG_Z2_LEVEL = WAS + 'Z2Level'
TAG_Z1_LIGHT = WAS + 'Z1Light'
TAG_Z2_LIGHT = WAS + 'Z2Light'
TAG_Z1_BLINDS = WAS + 'Z1Blinds'
TAG_Z2_BLINDS = WAS + 'Z2Blinds'
TAG_SUNSHINE = WAS + 'Sunshine'


class ReadingError(ValueError):
    """Raised when a tag/value reading cannot be turned into a LabReading."""


class MissingReadingError(ReadingError):
    """A required tag is absent from the reading."""


class ReadingTypeError(ReadingError):
    """A tag is present but its value has the wrong type."""


class ZoneLevels(NamedTuple):
    """Raw lux of both zones, all the goal check needs."""
    z1_level: float
    z2_level: float

    @classmethod
    def from_tags(cls, tags: Sequence[str], values: Sequence[Any]) -> 'ZoneLevels':
        """Read only the two zone levels from parallel tag/value arrays.

        Raises:
            MissingReadingError: if a zone level tag is absent
            ReadingTypeError: if a zone level is not a number
        """
        if len(tags) != len(values):
            raise ReadingError(f"Got {len(tags)} tags but {len(values)} values")
        tv = {str(t): v for t, v in zip(tags, values)}
        return cls(_number(tv, TAG_Z1_LEVEL), _number(tv, TAG_Z2_LEVEL))


class StateDescriptor(NamedTuple):
    """The seven discrete dimensions of a lab state."""
    z1_level: int
    z2_level: int
    z1_light: bool
    z2_light: bool
    z1_blinds: bool
    z2_blinds: bool
    sunshine: int


class ActionDescriptor(NamedTuple):
    """Portable description of an action: id, payload tags and payload values."""
    action_id: str
    payload_tags: List[str]
    payload: List[Any]


@dataclass(frozen=True)
class Goal:
    """Target light levels, a partial state descriptor.

    Equality and hashing are structural, so ``Goal.parse([2, 3])`` and
    ``Goal.parse(['2', '3'])`` name the same goal.
    """
    levels: Tuple[int, ...]

    @classmethod
    def parse(cls, description: Union['Goal', Sequence[Any]]) -> 'Goal':
        if isinstance(description, Goal):
            return description
        levels = tuple(int(v) if isinstance(v, numbers.Number) else int(str(v).strip())
                       for v in description)
        if len(levels) < 2:
            raise ValueError(f"Goal needs at least two target levels, got {list(description)}")
        return cls(levels)

    @property
    def z1_level(self) -> int:
        return self.levels[0]

    @property
    def z2_level(self) -> int:
        return self.levels[1]

    @property
    def key(self) -> str:
        """Canonical rendering, e.g. ``[2, 3]``."""
        return '[' + ', '.join(str(v) for v in self.levels) + ']'

    @property
    def slug(self) -> str:
        """File-name safe rendering, e.g. ``2_3``."""
        return '_'.join(str(v) for v in self.levels)

    def __str__(self) -> str:
        return self.key


def _number(tags: dict, tag: str) -> float:
    if tag not in tags:
        raise MissingReadingError(f"Missing reading for {tag}")
    value = tags[tag]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ReadingTypeError(f"Expected a number for {tag}, got {value!r}")
    return float(value)


def _flag(tags: dict, tag: str) -> bool:
    if tag not in tags:
        raise MissingReadingError(f"Missing reading for {tag}")
    value = tags[tag]
    if not isinstance(value, bool):
        raise ReadingTypeError(f"Expected a boolean for {tag}, got {value!r}")
    return value


@dataclass(frozen=True)
class LabReading:
    """A raw, continuous reading of the lab."""
    z1_level: float
    z2_level: float
    z1_light: bool
    z2_light: bool
    z1_blinds: bool
    z2_blinds: bool
    sunshine: float

    @classmethod
    def from_tags(cls, tags: Sequence[str], values: Sequence[Any]) -> 'LabReading':
        """Build a reading from parallel tag/value arrays.

        Args:
            tags: Semantic field identifiers
            values: Raw values, one per tag

        Raises:
            MissingReadingError: if a required tag is absent
            ReadingTypeError: if a value has the wrong type
        """
        if len(tags) != len(values):
            raise ReadingError(f"Got {len(tags)} tags but {len(values)} values")
        tv = {str(t): v for t, v in zip(tags, values)}
        return cls(
            z1_level=_number(tv, TAG_Z1_LEVEL),
            z2_level=_number(tv, TAG_Z2_LEVEL),
            z1_light=_flag(tv, TAG_Z1_LIGHT),
            z2_light=_flag(tv, TAG_Z2_LIGHT),
            z1_blinds=_flag(tv, TAG_Z1_BLINDS),
            z2_blinds=_flag(tv, TAG_Z2_BLINDS),
            sunshine=_number(tv, TAG_SUNSHINE),
        )

    def to_tags(self) -> Tuple[List[str], List[Any]]:
        """Inverse of ``from_tags``."""
        tags = [TAG_Z1_LEVEL, TAG_Z2_LEVEL, TAG_Z1_LIGHT, TAG_Z2_LIGHT,
                TAG_Z1_BLINDS, TAG_Z2_BLINDS, TAG_SUNSHINE]
        values = [self.z1_level, self.z2_level, self.z1_light, self.z2_light,
                  self.z1_blinds, self.z2_blinds, self.sunshine]
        return tags, values
