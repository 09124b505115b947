"""
StateExtractor: converts a poke-env Battle into a BattleSnapshot.

Side 0 is always the local player's team, side 1 the opponent's revealed
team. The player's active creature exposes only the moves usable this turn;
every other creature exposes its known moves.
"""

from __future__ import annotations

from poke_env.battle.abstract_battle import AbstractBattle
from poke_env.battle.move import Move
from poke_env.battle.move_category import MoveCategory
from poke_env.battle.pokemon import Pokemon
from poke_env.battle.status import Status

from treebot.schema import (
    BattleSnapshot,
    CreatureSnapshot,
    MoveInfo,
    SideSnapshot,
    Stat,
    StatusEffect,
)

_SCREEN_CONDITIONS = {"reflect", "lightscreen", "auroraveil"}
_NO_OP_MOVES = {"splash", "celebrate", "holdhands"}

# Gen 7+ critical-hit chance by crit stage.
_CRIT_CHANCE: dict[int, float] = {1: 1 / 24, 2: 1 / 8, 3: 1 / 2}

_STAT_KEYS: dict[str, Stat] = {
    "atk": Stat.ATK,
    "def": Stat.DEF,
    "spa": Stat.SPA,
    "spd": Stat.SPD,
    "spe": Stat.SPE,
}


def move_name(move: Move) -> str:
    """Display name of a poke-env move (falls back to its Showdown id)."""
    return move.entry.get("name", move.id)


def status_effect(move: Move) -> StatusEffect:
    if move.id in _NO_OP_MOVES:
        return StatusEffect.NO_OP
    boosts = move.self_boost or (move.boosts if move.target == "self" else None)
    if boosts and any(v > 0 for v in boosts.values()):
        return StatusEffect.BOOST
    if move.status == Status.SLP:
        return StatusEffect.SLEEP
    if (move.side_condition or "").lower() in _SCREEN_CONDITIONS:
        return StatusEffect.SCREEN
    return StatusEffect.OTHER


def _crit_chance(stage: int) -> float:
    if stage >= 4:
        return 1.0
    return _CRIT_CHANCE.get(stage, _CRIT_CHANCE[1])


class StateExtractor:
    """Converts a poke-env Battle into a BattleSnapshot."""

    def extract(self, battle: AbstractBattle) -> BattleSnapshot:
        mine = self._extract_side(
            battle.team.values(),
            battle.active_pokemon,
            usable_moves=battle.available_moves,
        )
        theirs = self._extract_side(
            battle.opponent_team.values(),
            battle.opponent_active_pokemon,
        )
        return BattleSnapshot(
            sides=(mine, theirs),
            turn=battle.turn,
            battle_tag=battle.battle_tag,
        )

    def extract_move(self, move: Move) -> MoveInfo:
        is_status = move.category == MoveCategory.STATUS or not move.base_power
        return MoveInfo(
            name=move_name(move),
            type=move.type.name.lower(),
            power=None if is_status else int(move.base_power),
            accuracy=round(move.accuracy * 100),
            crit_ratio=_crit_chance(move.crit_ratio),
            effect=status_effect(move) if is_status else StatusEffect.OTHER,
        )

    def _extract_side(
        self,
        mons,
        active: Pokemon | None,
        usable_moves: list[Move] | None = None,
    ) -> SideSnapshot:
        creatures = []
        active_index = None
        for i, mon in enumerate(mons):
            is_active = active is not None and mon is active
            if is_active:
                active_index = i
            moves = usable_moves if is_active and usable_moves is not None else mon.moves.values()
            creatures.append(self._extract_creature(mon, moves))
        return SideSnapshot(creatures=tuple(creatures), active_index=active_index)

    def _extract_creature(self, mon: Pokemon, moves) -> CreatureSnapshot:
        current = {Stat.HP: mon.current_hp or 0}
        initial = {Stat.HP: mon.max_hp or 0}
        for key, value in (mon.stats or {}).items():
            stat = _STAT_KEYS.get(key)
            if stat is not None and value is not None:
                current[stat] = value
                initial[stat] = value
        return CreatureSnapshot(
            name=mon.species,
            types=tuple(t.name.lower() for t in mon.types if t is not None),
            current_stats=current,
            initial_stats=initial,
            status=mon.status.name.lower() if mon.status else None,
            fainted=mon.fainted,
            moves=tuple(self.extract_move(m) for m in moves),
        )
