"""
Tests for the reward structure.
"""
import itertools

from algorithms.reward import calculate_reward
from environments.types import Goal, StateDescriptor

GOAL = Goal.parse([2, 3])


class TestGoalReward:
    """Test the terminal bonus."""

    def test_goal_match_returns_goal_reward(self):
        """Test that matching levels return the goal reward whatever the fixtures."""
        for flags in itertools.product([False, True], repeat=4):
            for sunshine in range(4):
                state = StateDescriptor(2, 3, *flags, sunshine)
                assert calculate_reward(GOAL, state, 100) == 100

    def test_goal_reward_is_float(self):
        assert isinstance(calculate_reward(GOAL, StateDescriptor(2, 3, True, True, True, True, 3), 7), float)

    def test_partial_match_is_not_goal(self):
        state = StateDescriptor(2, 2, False, False, False, False, 0)
        assert calculate_reward(GOAL, state, 100) == 0.0


class TestPenalties:
    """Test energy costs and glare penalties."""

    def test_both_lights_on(self):
        state = StateDescriptor(0, 0, True, True, False, False, 0)
        assert calculate_reward(GOAL, state, 100) == -100.0

    def test_one_light_one_blind(self):
        state = StateDescriptor(0, 0, True, False, False, True, 2)
        assert calculate_reward(GOAL, state, 100) == -51.0

    def test_open_blinds_without_glare(self):
        state = StateDescriptor(1, 1, False, False, True, True, 2)
        assert calculate_reward(GOAL, state, 100) == -2.0

    def test_glare_on_both_zones(self):
        """Test that full sunshine with open blinds adds 100 per zone."""
        state = StateDescriptor(1, 1, False, False, True, True, 3)
        assert calculate_reward(GOAL, state, 100) == -202.0

    def test_glare_stacks_with_light_costs(self):
        state = StateDescriptor(1, 1, True, True, True, True, 3)
        assert calculate_reward(GOAL, state, 100) == -302.0

    def test_glare_only_where_blinds_open(self):
        state = StateDescriptor(1, 1, False, False, True, False, 3)
        assert calculate_reward(GOAL, state, 100) == -101.0

    def test_non_goal_reward_never_positive(self):
        for flags in itertools.product([False, True], repeat=4):
            for sunshine in range(4):
                state = StateDescriptor(0, 0, *flags, sunshine)
                assert calculate_reward(GOAL, state, 100) <= 0.0
