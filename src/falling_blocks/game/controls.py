from __future__ import annotations

from enum import IntEnum
from typing import Dict, List, Mapping, Optional


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    DOWN = 2
    ROTATE = 3
    HARD_DROP = 4


class RepeatTimers:
    """Per-action repeat timers.

    Each action accumulates elapsed milliseconds and fires once the total
    reaches its delay, after which the accumulator starts again from zero.
    """

    def __init__(self, delays: Mapping[Action, float]) -> None:
        self.delays: Dict[Action, float] = dict(delays)
        self.elapsed: Dict[Action, float] = {action: 0.0 for action in self.delays}

    def tick(self, action: Action, dt: float) -> bool:
        self.elapsed[action] += dt
        if self.elapsed[action] >= self.delays[action]:
            self.elapsed[action] = 0.0
            return True
        return False

    def prime(self, action: Action) -> None:
        """Make the next tick for ``action`` fire."""
        self.elapsed[action] = self.delays[action]

    def reset(self) -> None:
        for action in self.elapsed:
            self.elapsed[action] = 0.0


class HeldActions:
    """Ordered set of held actions; the most recently pressed one wins."""

    def __init__(self) -> None:
        self._held: List[Action] = []

    def press(self, action: Action) -> bool:
        if action in self._held:
            return False
        self._held.append(action)
        return True

    def release(self, action: Action) -> None:
        if action in self._held:
            self._held.remove(action)

    def active(self) -> Optional[Action]:
        return self._held[-1] if self._held else None

    def clear(self) -> None:
        self._held.clear()

    def __contains__(self, action: object) -> bool:
        return action in self._held

    def __len__(self) -> int:
        return len(self._held)
