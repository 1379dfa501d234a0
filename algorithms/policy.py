"""Greedy action lookup against a learnt Q-table."""

import logging
import numpy as np
from typing import Optional, Sequence, Union

from environments.base_env import LearningEnvironment
from environments.discretization import discretize_light_level, discretize_reading
from environments.types import ActionDescriptor, Goal, LabReading, ZoneLevels

logger = logging.getLogger(__name__)


def best_action(q_values: np.ndarray, actions: Sequence[int]) -> int:
    """Applicable action with the highest Q-value; the earliest wins ties."""
    best = actions[0]
    best_q = q_values[best]
    for action in actions[1:]:
        if q_values[action] > best_q:
            best_q = q_values[action]
            best = action
    return best


def get_action_from_state(goal: Goal, reading: LabReading, store,
                          env: LearningEnvironment) -> Optional[ActionDescriptor]:
    """Next best action for ``goal`` from a live reading.

    Args:
        goal: Target light levels
        reading: Raw reading of the lab
        store: Q-table store holding the goal's table
        env: Environment that owns the state and action indices

    Returns:
        Descriptor of the best action, or None if the goal is untrained, the
        reading matches no state, or the matched state has no applicable action
    """
    descriptor = discretize_reading(reading)
    logger.info(f"Discrete state = {list(descriptor)}")

    q_table = store.get(goal)
    if q_table is None:
        logger.warning(f"No Q-table for goal {goal.key}")
        return None

    matches = env.compatible_states(list(descriptor))
    if not matches:
        logger.warning(f"No matching discrete state for {list(descriptor)}")
        return None
    state = matches[0]

    actions = env.applicable_actions(state)
    if not actions:
        logger.warning(f"No applicable actions at state {state}")
        return None

    action = best_action(q_table[state], actions)
    logger.debug(f"Best action {action} at state {state} (Q={q_table[state, action]:.4f})")
    return env.resolve_action(action)


def target_reached(goal: Goal, reading: Union[LabReading, ZoneLevels]) -> bool:
    """Whether both zone light levels of ``reading`` match the goal."""
    z1_level = discretize_light_level(reading.z1_level)
    z2_level = discretize_light_level(reading.z2_level)
    reached = z1_level == goal.z1_level and z2_level == goal.z2_level
    logger.info(f"Levels z1={z1_level}/{goal.z1_level}, z2={z2_level}/{goal.z2_level}, reached={reached}")
    return reached
