"""In-memory Q-table store and the tab-separated debug export."""

import os
import logging
import threading
import numpy as np
from typing import Dict, List, Optional

from environments.types import Goal

logger = logging.getLogger(__name__)


class QTableStore:
    """Goal-keyed Q-tables for the lifetime of one environment binding.

    Tables are replaced whole and published read-only, so a reader sees
    either the previous table or the new one.
    """

    def __init__(self):
        self._tables: Dict[Goal, np.ndarray] = {}
        self._lock = threading.Lock()

    def get(self, goal: Goal) -> Optional[np.ndarray]:
        with self._lock:
            return self._tables.get(goal)

    def put(self, goal: Goal, table: np.ndarray):
        table = np.array(table, dtype=float, copy=True)
        table.setflags(write=False)
        with self._lock:
            self._tables[goal] = table

    def goals(self) -> List[Goal]:
        with self._lock:
            return list(self._tables)

    def clear(self):
        with self._lock:
            self._tables.clear()

    def __contains__(self, goal: Goal) -> bool:
        return self.get(goal) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._tables)


def export_filename(goal: Goal) -> str:
    return f"qTable_{goal.slug}.log"


def export_q_table(goal: Goal, q_table: np.ndarray, directory: str = '.') -> Optional[str]:
    """Write the full table to ``qTable_<goal>.log`` for inspection.

    One row per state, one tab-separated column per action, 4 decimals.

    Returns:
        Path of the written file, or None if it could not be written
    """
    filepath = os.path.join(directory, export_filename(goal))
    try:
        os.makedirs(directory, exist_ok=True)
        with open(filepath, 'w') as f:
            f.write('State' + ''.join(f"\tA{a}" for a in range(q_table.shape[1])) + '\n')
            for state, row in enumerate(q_table):
                f.write(str(state) + ''.join(f"\t{q:.4f}" for q in row) + '\n')
    except OSError as e:
        logger.error(f"Failed to write Q-table file '{filepath}': {e}")
        return None

    logger.info(f"Full Q-table written to {filepath}")
    return filepath
