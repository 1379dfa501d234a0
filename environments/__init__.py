"""Learning environments and the discrete lab state space."""

from .base_env import LearningEnvironment
from .lab_env import LabEnvironment
from .discretization import discretize_light_level, discretize_sunshine, discretize_reading
from .types import (Goal, LabReading, ZoneLevels, StateDescriptor, ActionDescriptor,
                    ReadingError, MissingReadingError, ReadingTypeError)

__all__ = ['LearningEnvironment', 'LabEnvironment',
           'discretize_light_level', 'discretize_sunshine', 'discretize_reading',
           'Goal', 'LabReading', 'ZoneLevels', 'StateDescriptor', 'ActionDescriptor',
           'ReadingError', 'MissingReadingError', 'ReadingTypeError']
