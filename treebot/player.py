"""
AgentPlayer: poke-env bridge.

Wires together StateExtractor → BattleAgent → ActionParser.
To use a different policy, pass a different BattleAgent — that's all.

The snapshot is taken on poke-env's loop; the agent itself runs on a worker
thread so a long search never stalls the shared POKE_LOOP.
"""

from __future__ import annotations

import asyncio
import logging

from poke_env.battle.abstract_battle import AbstractBattle
from poke_env.player.battle_order import BattleOrder
from poke_env.player.player import Player

from treebot.agent import BattleAgent
from treebot.extractor import StateExtractor
from treebot.parser import ActionParser
from treebot.schema import ActionOption, BattleSnapshot, SwitchAction

logger = logging.getLogger(__name__)


class AgentPlayer(Player):
    def __init__(self, agent: BattleAgent, **kwargs) -> None:
        super().__init__(**kwargs)
        self._agent = agent
        self._extractor = StateExtractor()
        self._parser = ActionParser()

    @property
    def agent(self) -> BattleAgent:
        return self._agent

    async def choose_move(self, battle: AbstractBattle) -> BattleOrder:
        snapshot = self._extractor.extract(battle)
        action = await asyncio.to_thread(self._decide, snapshot, _forced_switch(battle))

        active = snapshot.side(0).active
        opp_active = snapshot.side(1).active
        logger.debug(
            "[%s] Turn %d · %s (%.0f%% HP) vs %s (%.0f%% HP) → %s",
            self._agent.name,
            battle.turn,
            active.name if active else "none",
            active.hp_ratio * 100 if active else 0,
            opp_active.name if opp_active else "none",
            opp_active.hp_ratio * 100 if opp_active else 0,
            action.label() if action else None,
        )

        return self._parser.parse(action, battle, self)

    def _decide(self, snapshot: BattleSnapshot, forced_switch: bool) -> ActionOption | None:
        if forced_switch:
            index = self._agent.choose_switch_target(snapshot.side(0))
            return SwitchAction(bench_index=index) if index is not None else None
        return self._agent.choose_action(snapshot)


def _forced_switch(battle: AbstractBattle) -> bool:
    force = battle.force_switch
    if isinstance(force, list):
        return any(force)
    return bool(force)
