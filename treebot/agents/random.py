"""RandomAgent: picks a random legal action each turn. Baseline opponent for benchmarks."""

from __future__ import annotations

import random
import uuid

from treebot.agent import BattleAgent
from treebot.schema import ActionOption, BattleSnapshot
from treebot.search import legal_actions


class RandomAgent(BattleAgent):
    """Chooses uniformly at random between all legal attacks and switches."""

    def __init__(self, seed: int | None = None) -> None:
        self._name = f"random-{uuid.uuid4().hex[:6]}"
        self._rng = random.Random(seed)

    @property
    def name(self) -> str:
        return self._name

    def choose_action(self, snapshot: BattleSnapshot) -> ActionOption | None:
        options = legal_actions(snapshot, self.side)
        if not options:
            return None
        return self._rng.choice(options)
