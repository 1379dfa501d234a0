"""Goal-conditioned tabular Q-learning for a two-zone lighting lab."""

from .config import Config, config
from .learner import QLearner
from .monitoring import TrainingMonitor, setup_logging
from .persistence import QTableStore, export_q_table

__all__ = ['Config', 'config', 'QLearner', 'TrainingMonitor', 'setup_logging',
           'QTableStore', 'export_q_table']
