"""Goal-conditioned Q-learner bound to one learning environment."""

import logging
import numpy as np
from typing import Any, Optional, Sequence, Union

from algorithms.qlearning import QLearning
from algorithms import policy
from environments.base_env import LearningEnvironment
from environments.types import ActionDescriptor, Goal, LabReading, ZoneLevels
from qlab.config import config
from qlab.persistence import QTableStore, export_q_table

logger = logging.getLogger(__name__)


def _probability(name: str, raw: Any) -> float:
    value = float(str(raw))
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be in [0, 1], got {value}")
    return value


class QLearner:
    """Learns one Q-table per goal and answers next-best-action queries.

    The learner owns its store; a new learner (and a new store) is created for
    every environment it is bound to. Training and queries against the same
    environment must not run concurrently.
    """

    def __init__(self,
                 env: LearningEnvironment,
                 store: Optional[QTableStore] = None,
                 export_dir: Optional[str] = None,
                 export: Optional[bool] = None,
                 seed: Optional[int] = None,
                 monitor: Any = None):
        """Bind the learner to an environment.

        Args:
            env: Environment to train against and to resolve states with
            store: Q-table store; a fresh one when None
            export_dir: Directory for table exports (default: config export.directory)
            export: Whether to export tables after training (default: config export.enabled)
            seed: Random seed for exploration (default: config training.seed)
            monitor: Optional episode monitor, see ``qlab.monitoring.TrainingMonitor``
        """
        self.env = env
        self.store = store if store is not None else QTableStore()
        self.export_dir = export_dir if export_dir is not None else config.get('export.directory', '.')
        self.export = export if export is not None else config.get('export.enabled', True)
        self.seed = seed if seed is not None else config.get('training.seed')
        self.monitor = monitor

        self.state_count = env.state_count
        self.action_count = env.action_count
        logger.info(f"Initialized with a state space of n={self.state_count}")
        logger.info(f"Initialized with an action space of m={self.action_count}")

    def calculate_q(self,
                    goal_description: Sequence[Any],
                    episodes: Any = None,
                    alpha: Any = None,
                    gamma: Any = None,
                    epsilon: Any = None,
                    reward: Any = None) -> Optional[np.ndarray]:
        """Learn the Q-table for a goal and publish it to the store.

        Parameters may be numbers or their string renderings; missing ones
        come from the ``training`` config section. Beyond parsing, alpha, gamma
        and epsilon are checked to lie in [0, 1] and episodes to be >= 0, so an
        out-of-range value fails before the environment is touched.

        Args:
            goal_description: Target levels, e.g. [2, 3]
            episodes: Number of episodes, >= 0
            alpha: Learning rate in [0, 1]
            gamma: Discount factor in [0, 1]
            epsilon: Exploration probability in [0, 1]
            reward: Reward for reaching the goal

        Returns:
            The published table, or None if no state satisfies the goal

        Raises:
            ValueError: if a parameter does not parse or is out of range
        """
        goal = Goal.parse(goal_description)
        episodes = int(str(episodes if episodes is not None else config.get('training.episodes', 500)))
        if episodes < 0:
            raise ValueError(f"episodes must be >= 0, got {episodes}")
        alpha = _probability('alpha', alpha if alpha is not None else config.get('training.alpha', 0.1))
        gamma = _probability('gamma', gamma if gamma is not None else config.get('training.gamma', 0.9))
        epsilon = _probability('epsilon', epsilon if epsilon is not None else config.get('training.epsilon', 0.2))
        goal_reward = float(str(reward if reward is not None else config.get('training.goal_reward', 100)))

        logger.info(f"Starting Q-Learning for goal: {goal.key}")
        goal_states = self.env.compatible_states(list(goal.levels))
        logger.info(f"Compatible goal states: {len(goal_states)}")
        if not goal_states:
            logger.warning(f"No compatible states found for goal {goal.key}")
            return None

        if self.monitor is not None:
            self.monitor.start_run(goal.key)

        agent = QLearning(
            self.env,
            learning_rate=alpha,
            gamma=gamma,
            epsilon=epsilon,
            goal_reward=goal_reward,
            max_steps=config.get('training.max_steps', 200),
            max_restart_actions=config.get('training.max_restart_actions', 10),
            progress_interval=config.get('training.progress_interval', 10),
            seed=self.seed,
            monitor=self.monitor,
        )
        q_table = agent.train(goal, goal_states, episodes)

        self.store.put(goal, q_table)
        logger.info(f"Stored Q-table for goal {goal.key}")

        if self.export:
            export_q_table(goal, q_table, self.export_dir)
        return self.store.get(goal)

    def q_table(self, goal_description: Sequence[Any]) -> Optional[np.ndarray]:
        return self.store.get(Goal.parse(goal_description))

    def get_action_from_state(self, goal_description: Sequence[Any],
                              reading: LabReading) -> Optional[ActionDescriptor]:
        """Next best action for a goal given a live reading; None if there is none."""
        return policy.get_action_from_state(Goal.parse(goal_description), reading,
                                            self.store, self.env)

    def get_action_from_tags(self, goal_description: Sequence[Any],
                             tags: Sequence[str],
                             values: Sequence[Any]) -> Optional[ActionDescriptor]:
        """Same as ``get_action_from_state`` for parallel tag/value arrays.

        Raises:
            ReadingError: if a required tag is missing or mistyped
        """
        return self.get_action_from_state(goal_description, LabReading.from_tags(tags, values))

    def target_reached(self, goal_description: Sequence[Any],
                       reading: Union[LabReading, ZoneLevels]) -> bool:
        goal = Goal.parse(goal_description)
        logger.info(f"Checking if target is reached for goal: {goal.key}")
        return policy.target_reached(goal, reading)

    def target_reached_tags(self, goal_description: Sequence[Any],
                            tags: Sequence[str], values: Sequence[Any]) -> bool:
        """Goal check on parallel tag/value arrays; only the two zone levels are required.

        Raises:
            ReadingError: if a zone level tag is missing or mistyped
        """
        return self.target_reached(goal_description, ZoneLevels.from_tags(tags, values))
