import logging
import json
from pathlib import Path
from datetime import datetime
from logging.handlers import RotatingFileHandler
from typing import Dict, Any, List, Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(level: str = 'INFO', log_dir: Optional[str] = None) -> logging.Logger:
    """Configure the root logger for console and, optionally, rotating file output.

    Args:
        level: Logging level name
        log_dir: Directory for ``training.log``; no file output when None

    Returns:
        The root logger
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    # Remove existing handlers to avoid duplicates
    root.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    root.addHandler(console)

    if log_dir:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        # 10 MB max, keep 5 backups
        file_handler = RotatingFileHandler(
            path / 'training.log',
            maxBytes=10 * 1024 * 1024,
            backupCount=5
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    return root


class TrainingMonitor:
    """Per-episode metrics for Q-table training runs."""

    def __init__(self, log_dir: Optional[str] = None, max_history: int = 1000):
        """Initialize the monitor.

        Args:
            log_dir: Directory for ``metrics.jsonl``; in-memory only when None
            max_history: Number of recent episodes kept in memory
        """
        self.logger = logging.getLogger('qlab.training')
        self.jsonl_file = None
        if log_dir:
            path = Path(log_dir)
            path.mkdir(parents=True, exist_ok=True)
            self.jsonl_file = path / 'metrics.jsonl'

        self.episode_metrics: List[Dict[str, Any]] = []
        self.max_history = max_history
        self.goal: Optional[str] = None
        self.startup_time = datetime.now()

    def start_run(self, goal_key: str) -> None:
        """Begin a new training run, discarding the previous run's history."""
        self.goal = goal_key
        self.episode_metrics = []
        self.logger.info(f"Monitoring training for goal {goal_key}")

    def log_episode(self, episode_data: Dict[str, Any]) -> None:
        """Log metrics for a completed episode.

        Args:
            episode_data: Expected keys: episode, reward, steps, reached_goal,
                restart_actions
        """
        episode_data = dict(episode_data)
        episode_data['goal'] = self.goal
        episode_data['timestamp'] = datetime.now().isoformat()

        self.episode_metrics.append(episode_data)
        if len(self.episode_metrics) > self.max_history:
            self.episode_metrics.pop(0)

        self.logger.debug(
            f"Episode {episode_data.get('episode', 'N/A')}: "
            f"Reward={episode_data.get('reward', 0.0):.2f}, "
            f"Steps={episode_data.get('steps', 0)}, "
            f"Reached={episode_data.get('reached_goal', False)}"
        )

        if self.jsonl_file is not None:
            self._write_jsonl(episode_data)

    def _write_jsonl(self, data: Dict[str, Any]) -> None:
        try:
            with open(self.jsonl_file, 'a') as f:
                json.dump(data, f)
                f.write('\n')
        except IOError as e:
            self.logger.error(f"Failed to write JSONL: {e}")

    def get_metrics_history(self) -> List[Dict[str, Any]]:
        return [m.copy() for m in self.episode_metrics]

    def get_aggregated_stats(self) -> Dict[str, Any]:
        """Aggregate statistics over the recorded episodes.

        Returns:
            Dictionary of aggregated metrics, empty if nothing was recorded
        """
        if not self.episode_metrics:
            return {}

        total = len(self.episode_metrics)
        rewards = [m.get('reward', 0.0) for m in self.episode_metrics]
        steps = [m.get('steps', 0) for m in self.episode_metrics]
        reached = sum(1 for m in self.episode_metrics if m.get('reached_goal'))

        return {
            'goal': self.goal,
            'total_episodes': total,
            'goal_rate': reached / total,
            'avg_reward': sum(rewards) / total,
            'max_reward': max(rewards),
            'min_reward': min(rewards),
            'avg_steps': sum(steps) / total,
            'total_steps': sum(steps),
            'uptime_seconds': (datetime.now() - self.startup_time).total_seconds(),
        }
