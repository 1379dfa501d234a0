"""Reward function for reaching target light levels cheaply and without glare."""

import logging

from environments.types import Goal, StateDescriptor

logger = logging.getLogger(__name__)

LIGHT_COST = 50.0
BLINDS_COST = 1.0
GLARE_PENALTY = 100.0
GLARE_SUNSHINE_LEVEL = 3


def calculate_reward(goal: Goal, state: StateDescriptor, goal_reward: float) -> float:
    """Reward of being in ``state`` while pursuing ``goal``.

    Matching both target levels yields ``goal_reward`` outright. Otherwise each
    lit lamp costs 50 and each open blind costs 1, and an open blind under
    full sunshine adds a 100 glare penalty for its zone.

    Args:
        goal: Target light levels
        state: Current discrete state of the lab
        goal_reward: Reward for reaching the goal

    Returns:
        Scalar reward, non-positive unless the goal is met
    """
    if state.z1_level == goal.z1_level and state.z2_level == goal.z2_level:
        return float(goal_reward)

    reward = 0.0
    if state.z1_light:
        reward -= LIGHT_COST
    if state.z2_light:
        reward -= LIGHT_COST
    if state.z1_blinds:
        reward -= BLINDS_COST
    if state.z2_blinds:
        reward -= BLINDS_COST

    if state.sunshine == GLARE_SUNSHINE_LEVEL:
        if state.z1_blinds:
            reward -= GLARE_PENALTY
            logger.debug("Glare penalty applied for zone 1")
        if state.z2_blinds:
            reward -= GLARE_PENALTY
            logger.debug("Glare penalty applied for zone 2")

    return reward
