"""Deterministic environments for exact-value tests."""

from typing import Any, List, Sequence

from environments.base_env import LearningEnvironment
from environments.types import ActionDescriptor, StateDescriptor

LEFT, RIGHT = 0, 1


class ChainEnvironment(LearningEnvironment):
    """States 0..n-1 on a line; state i has z1 level i and z2 level 0.

    Action 0 steps left and action 1 steps right. States listed in
    ``dead_ends`` have no applicable actions.
    """

    def __init__(self, length: int = 4, start: int = 0, dead_ends: Sequence[int] = (),
                 lights_on: bool = False):
        super().__init__(seed=0)
        self.length = length
        self.position = start
        self.dead_ends = set(dead_ends)
        self.lights_on = lights_on
        self.performed: List[int] = []

    @property
    def state_count(self) -> int:
        return self.length

    @property
    def action_count(self) -> int:
        return 2

    def current_state(self) -> int:
        return self.position

    def descriptor(self, state: int) -> StateDescriptor:
        return StateDescriptor(state, 0, self.lights_on, False, False, False, 0)

    def current_descriptor(self) -> StateDescriptor:
        return self.descriptor(self.position)

    def applicable_actions(self, state: int) -> List[int]:
        if state in self.dead_ends:
            return []
        actions = []
        if state > 0:
            actions.append(LEFT)
        if state < self.length - 1:
            actions.append(RIGHT)
        return actions

    def perform_action(self, action: int) -> None:
        self.performed.append(action)
        self.position += 1 if action == RIGHT else -1
        self.position = min(self.length - 1, max(0, self.position))

    def compatible_states(self, partial: Sequence[Any]) -> List[int]:
        return [s for s in range(self.length)
                if all(v is None or int(self.descriptor(s)[d]) == int(v)
                       for d, v in enumerate(partial))]

    def resolve_action(self, action: int) -> ActionDescriptor:
        if action == RIGHT:
            return ActionDescriptor('right', ['step'], [1])
        return ActionDescriptor('left', ['step'], [-1])
