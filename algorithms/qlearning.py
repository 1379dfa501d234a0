"""Q-Learning over a live learning environment, one table per goal."""

import logging
import numpy as np
from typing import Any, Collection, Optional, Sequence

from environments.base_env import LearningEnvironment
from environments.types import Goal
from .policy import best_action
from .reward import calculate_reward

logger = logging.getLogger(__name__)


class QLearning:
    """Tabular Q-Learning algorithm."""

    def __init__(self,
                 env: LearningEnvironment,
                 learning_rate: float = 0.1,
                 gamma: float = 0.9,
                 epsilon: float = 0.1,
                 goal_reward: float = 100.0,
                 max_steps: int = 200,
                 max_restart_actions: int = 10,
                 progress_interval: int = 10,
                 seed: Optional[int] = None,
                 monitor: Any = None):
        """Initialize Q-Learning agent.

        Args:
            env: Environment to learn from; mutated while training
            learning_rate: Learning rate for Q-updates, in [0, 1]
            gamma: Discount factor, in [0, 1]
            epsilon: Probability of a random exploratory action, in [0, 1]
            goal_reward: Reward for reaching the goal
            max_steps: Step cap per episode
            max_restart_actions: Upper bound (exclusive) on random actions before each episode;
                below 1 disables the restart
            progress_interval: Episodes between progress notices
            seed: Random seed; None draws from OS entropy
            monitor: Optional object with a ``log_episode(dict)`` method
        """
        self.env = env
        self.learning_rate = learning_rate
        self.gamma = gamma
        self.epsilon = epsilon
        self.goal_reward = goal_reward
        self.max_steps = max_steps
        self.max_restart_actions = max_restart_actions
        self.progress_interval = progress_interval
        self.monitor = monitor
        self.rng = np.random.RandomState(seed)

    def new_table(self) -> np.ndarray:
        """Zero table of shape (state_count, action_count)."""
        return np.zeros((self.env.state_count, self.env.action_count), dtype=float)

    def select_action(self, q_table: np.ndarray, state: int,
                      actions: Sequence[int], training: bool = True) -> int:
        """Select action using epsilon-greedy policy.

        Args:
            q_table: Table being learnt
            state: Current state
            actions: Applicable actions, non-empty
            training: Whether in training mode

        Returns:
            Selected action
        """
        if training and self.rng.random_sample() < self.epsilon:
            return actions[self.rng.randint(len(actions))]
        return best_action(q_table[state], actions)

    def max_next_q(self, q_table: np.ndarray, next_state: int, done: bool) -> float:
        """Bootstrap value of ``next_state``; 0.0 at goal states and dead ends."""
        if done:
            return 0.0
        actions = self.env.applicable_actions(next_state)
        if not actions:
            return 0.0
        return float(np.max(q_table[next_state, actions]))

    def update(self, q_table: np.ndarray, state: int, action: int,
               reward: float, next_state: int, done: bool):
        """Update Q-value using Q-Learning update rule.

        Args:
            q_table: Table being learnt, updated in place
            state: Current state
            action: Action taken
            reward: Reward received
            next_state: Next state
            done: Whether next_state is a goal state
        """
        target_q = reward + self.gamma * self.max_next_q(q_table, next_state, done)
        current_q = q_table[state, action]
        q_table[state, action] = current_q + self.learning_rate * (target_q - current_q)

    def randomize_start(self) -> int:
        """Perform a random number of random applicable actions.

        Returns:
            Number of actions actually performed
        """
        performed = 0
        if self.max_restart_actions < 1:
            return performed
        for _ in range(self.rng.randint(self.max_restart_actions)):
            actions = self.env.applicable_actions(self.env.current_state())
            if not actions:
                break
            self.env.perform_action(actions[self.rng.randint(len(actions))])
            performed += 1
        return performed

    def run_episode(self, q_table: np.ndarray, goal: Goal,
                    goal_states: Collection[int]) -> dict:
        """Run one episode from a randomized start, updating ``q_table``.

        Returns:
            Episode statistics
        """
        restart_actions = self.randomize_start()
        state = self.env.current_state()
        episode_return = 0.0
        steps = 0

        while state not in goal_states and steps < self.max_steps:
            actions = self.env.applicable_actions(state)
            if not actions:
                break
            steps += 1

            action = self.select_action(q_table, state, actions)
            self.env.perform_action(action)
            next_state = self.env.current_state()
            reward = calculate_reward(goal, self.env.current_descriptor(), self.goal_reward)

            self.update(q_table, state, action, reward, next_state, next_state in goal_states)
            episode_return += reward
            state = next_state

        return {
            'reward': episode_return,
            'steps': steps,
            'reached_goal': state in goal_states,
            'restart_actions': restart_actions,
        }

    def train(self, goal: Goal, goal_states: Collection[int], episodes: int) -> np.ndarray:
        """Learn a fresh table for ``goal``.

        The table is private to this call; nothing outside sees it until it is
        returned.

        Args:
            goal: Target light levels
            goal_states: Indices of the states that satisfy the goal
            episodes: Number of episodes

        Returns:
            Learnt table of shape (state_count, action_count)
        """
        goal_states = frozenset(goal_states)
        q_table = self.new_table()

        for episode in range(episodes):
            stats = self.run_episode(q_table, goal, goal_states)
            stats['episode'] = episode + 1

            if self.monitor is not None:
                self.monitor.log_episode(stats)

            if (episode + 1) % self.progress_interval == 0:
                logger.info(f"Episode {episode + 1}/{episodes} done")

        return q_table
