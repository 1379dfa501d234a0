"""Tabular Q-learning, reward and greedy policy lookup."""

from .qlearning import QLearning
from .reward import calculate_reward
from .policy import best_action, get_action_from_state, target_reached

__all__ = ['QLearning', 'calculate_reward', 'best_action',
           'get_action_from_state', 'target_reached']
