"""Base environment class for learning environments."""

from abc import ABC, abstractmethod
import numpy as np
from typing import List, Sequence, Any

from .types import ActionDescriptor, StateDescriptor


class LearningEnvironment(ABC):
    """Abstract interface the learner consumes.

    States and actions are opaque integer indices. The environment owns the
    mapping between indices and their meaning. ``perform_action`` must block
    until the environment has settled into its next observable state.
    """

    def __init__(self, seed: int = 42):
        """Initialize environment.

        Args:
            seed: Random seed for reproducibility
        """
        self.seed_value = seed
        self.np_random = np.random.RandomState(seed)

    @property
    @abstractmethod
    def state_count(self) -> int:
        """Number of discrete states."""
        pass

    @property
    @abstractmethod
    def action_count(self) -> int:
        """Number of discrete actions."""
        pass

    @abstractmethod
    def current_state(self) -> int:
        """Index of the current state."""
        pass

    @abstractmethod
    def current_descriptor(self) -> StateDescriptor:
        """Discrete descriptor of the current state."""
        pass

    @abstractmethod
    def applicable_actions(self, state: int) -> List[int]:
        """Actions valid in ``state``, in a stable order."""
        pass

    @abstractmethod
    def perform_action(self, action: int) -> None:
        """Execute ``action`` and advance environment time."""
        pass

    @abstractmethod
    def compatible_states(self, partial: Sequence[Any]) -> List[int]:
        """States whose descriptor starts with ``partial``.

        Args:
            partial: Leading descriptor values; ``None`` matches anything

        Returns:
            Matching state indices in ascending order
        """
        pass

    @abstractmethod
    def resolve_action(self, action: int) -> ActionDescriptor:
        """Portable descriptor of ``action``."""
        pass

    def set_seed(self, seed: int):
        """Set random seed."""
        self.seed_value = seed
        self.np_random = np.random.RandomState(seed)
