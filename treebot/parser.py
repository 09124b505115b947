"""
ActionParser: converts an ActionOption into a poke-env BattleOrder.

Falls back to a random legal order if the action is missing or no longer
legal. Logs every fallback so we can track search reliability.
"""

from __future__ import annotations

import logging

from poke_env.battle.abstract_battle import AbstractBattle
from poke_env.player.battle_order import BattleOrder
from poke_env.player.player import Player

from treebot.extractor import move_name
from treebot.schema import ActionOption, AttackAction, SwitchAction

logger = logging.getLogger(__name__)


class ActionParser:
    """Translates ActionOption → poke-env BattleOrder.

    Switch indices refer to the order of battle.team, which is the order
    StateExtractor uses for side 0.
    """

    def parse(
        self,
        action: ActionOption | None,
        battle: AbstractBattle,
        player: Player,
    ) -> BattleOrder:
        if isinstance(action, AttackAction):
            return self._parse_attack(action, battle, player)
        elif isinstance(action, SwitchAction):
            return self._parse_switch(action, battle, player)
        else:
            logger.warning("No action (%r) — falling back to random.", action)
            return player.choose_random_move(battle)

    def _parse_attack(
        self, action: AttackAction, battle: AbstractBattle, player: Player
    ) -> BattleOrder:
        move = next(
            (m for m in battle.available_moves if move_name(m) == action.move.name),
            None,
        )
        if move is None:
            logger.warning(
                "Move '%s' not in available moves %s — falling back to random.",
                action.move.name,
                [move_name(m) for m in battle.available_moves],
            )
            return player.choose_random_move(battle)

        logger.debug("Parsed move: %s", move.id)
        return player.create_order(move)

    def _parse_switch(
        self, action: SwitchAction, battle: AbstractBattle, player: Player
    ) -> BattleOrder:
        team = list(battle.team.values())
        wanted = team[action.bench_index] if 0 <= action.bench_index < len(team) else None
        target = next(
            (p for p in battle.available_switches if wanted is not None and p is wanted),
            None,
        )
        if target is None:
            logger.warning(
                "Switch target #%d not in available switches %s — falling back to random.",
                action.bench_index,
                [p.species for p in battle.available_switches],
            )
            return player.choose_random_move(battle)

        logger.debug("Parsed switch: → %s", target.species)
        return player.create_order(target)
