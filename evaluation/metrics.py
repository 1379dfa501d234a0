"""Evaluation of learnt policies against the live environment."""

import numpy as np
from typing import List, Dict, Any, Optional, Sequence
from collections import deque

from algorithms.policy import best_action
from algorithms.reward import calculate_reward
from environments.base_env import LearningEnvironment
from environments.types import Goal, StateDescriptor


def _at_goal(goal: Goal, state: StateDescriptor) -> bool:
    return state.z1_level == goal.z1_level and state.z2_level == goal.z2_level


class Metrics:
    """Track windowed episode metrics."""

    def __init__(self, window_size: int = 100):
        """Initialize metrics tracker.

        Args:
            window_size: Moving average window size
        """
        self.window_size = window_size
        self.episode_rewards = deque(maxlen=window_size)
        self.episode_lengths = deque(maxlen=window_size)
        self.episode_successes = deque(maxlen=window_size)
        self.episode = 0

    def record_episode(self, reward: float, length: int, success: bool = False):
        """Record episode metrics."""
        self.episode_rewards.append(reward)
        self.episode_lengths.append(length)
        self.episode_successes.append(bool(success))
        self.episode += 1

    @property
    def mean_reward(self) -> Optional[float]:
        """Mean episode reward."""
        return float(np.mean(self.episode_rewards)) if self.episode_rewards else None

    @property
    def mean_length(self) -> Optional[float]:
        """Mean episode length."""
        return float(np.mean(self.episode_lengths)) if self.episode_lengths else None

    @property
    def success_rate(self) -> Optional[float]:
        """Fraction of episodes that ended at the goal."""
        return float(np.mean(self.episode_successes)) if self.episode_successes else None

    def get_summary(self) -> Dict[str, Any]:
        """Get metrics summary."""
        return {
            'episode': self.episode,
            'mean_reward': self.mean_reward,
            'mean_length': self.mean_length,
            'success_rate': self.success_rate,
            'num_episodes': len(self.episode_rewards)
        }

    def to_dict(self) -> Dict[str, List[float]]:
        """Convert metrics to dictionary."""
        return {
            'episode_rewards': list(self.episode_rewards),
            'episode_lengths': list(self.episode_lengths),
            'episode_successes': list(self.episode_successes)
        }


class Evaluator:
    """Roll out the greedy policy of a learnt table.

    Rollouts act on the environment but never write the Q-table store.
    """

    def __init__(self, env: LearningEnvironment, metrics: Optional[Metrics] = None,
                 seed: Optional[int] = None):
        """Initialize evaluator.

        Args:
            env: Environment the table was learnt against
            metrics: Metrics tracker; a fresh one when None
            seed: Random seed for start-state perturbation
        """
        self.env = env
        self.metrics = metrics if metrics is not None else Metrics()
        self.rng = np.random.RandomState(seed)

    def _perturb(self, start_actions: int):
        for _ in range(self.rng.randint(start_actions + 1)):
            actions = self.env.applicable_actions(self.env.current_state())
            if not actions:
                return
            self.env.perform_action(actions[self.rng.randint(len(actions))])

    def evaluate(self, learner: Any, goal_description: Sequence[Any],
                 num_episodes: int = 10, max_steps: int = 50,
                 start_actions: int = 5, goal_reward: float = 100.0) -> Dict[str, float]:
        """Evaluate the greedy policy for a goal over several episodes.

        Args:
            learner: QLearner holding the goal's table
            goal_description: Target levels
            num_episodes: Number of evaluation episodes
            max_steps: Step cap per episode
            start_actions: Upper bound on random actions before each episode
            goal_reward: Reward for reaching the goal, as used in training

        Returns:
            Evaluation metrics

        Raises:
            KeyError: if the goal has not been trained
            ValueError: if num_episodes < 1
        """
        if num_episodes < 1:
            raise ValueError(f"num_episodes must be >= 1, got {num_episodes}")
        goal = Goal.parse(goal_description)
        q_table = learner.store.get(goal)
        if q_table is None:
            raise KeyError(f"No Q-table for goal {goal.key}")

        episode_rewards = []
        episode_lengths = []
        successes = []

        for _ in range(num_episodes):
            self._perturb(start_actions)
            episode_reward = 0.0
            steps = 0
            reached = _at_goal(goal, self.env.current_descriptor())

            while not reached and steps < max_steps:
                state = self.env.current_state()
                actions = self.env.applicable_actions(state)
                if not actions:
                    break
                self.env.perform_action(best_action(q_table[state], actions))
                state_after = self.env.current_descriptor()
                episode_reward += calculate_reward(goal, state_after, goal_reward)
                steps += 1
                reached = _at_goal(goal, state_after)

            self.metrics.record_episode(episode_reward, steps, reached)
            episode_rewards.append(episode_reward)
            episode_lengths.append(steps)
            successes.append(reached)

        return {
            'mean_reward': float(np.mean(episode_rewards)),
            'std_reward': float(np.std(episode_rewards)),
            'mean_length': float(np.mean(episode_lengths)),
            'success_rate': float(np.mean(successes)),
        }
