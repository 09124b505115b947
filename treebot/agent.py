"""
Extension point: implement BattleAgent to plug in any decision policy.

The AgentPlayer bridge and BattleRunner only ever talk to this interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from treebot.schema import ActionOption, BattleSnapshot, SideSnapshot


class BattleAgent(ABC):
    """Abstract decision engine.

    Receives a read-only BattleSnapshot, returns an ActionOption or None.
    Knows nothing about poke-env internals — pure game logic.
    """

    side: int = 0

    @abstractmethod
    def choose_action(self, snapshot: BattleSnapshot) -> ActionOption | None:
        """Choose the next action given the current battle snapshot."""
        ...

    def choose_switch_target(self, team: SideSnapshot | None) -> int | None:
        """Index of the bench creature to send in: the first one still standing."""
        if team is None:
            return None
        for i, creature in enumerate(team.creatures):
            if i != team.active_index and not creature.fainted:
                return i
        return None

    @property
    def name(self) -> str:
        """Human-readable identifier used in logs and reports."""
        return self.__class__.__name__
