"""Hand-built snapshots for tests."""

from __future__ import annotations

from treebot.schema import (
    BattleSnapshot,
    CreatureSnapshot,
    MoveInfo,
    SideSnapshot,
    Stat,
    StatusEffect,
)


def move(
    name: str = "Tackle",
    type: str = "normal",
    power: int | None = 40,
    accuracy: int = 100,
    crit_ratio: float = 0.0,
    effect: StatusEffect = StatusEffect.OTHER,
) -> MoveInfo:
    return MoveInfo(
        name=name,
        type=type,
        power=power,
        accuracy=accuracy,
        crit_ratio=crit_ratio,
        effect=effect,
    )


def creature(
    name: str = "Mon",
    types: tuple[str, ...] = ("normal",),
    hp: int = 100,
    max_hp: int = 100,
    status: str | None = None,
    fainted: bool = False,
    moves: tuple[MoveInfo, ...] = (),
) -> CreatureSnapshot:
    return CreatureSnapshot(
        name=name,
        types=types,
        current_stats={Stat.HP: hp},
        initial_stats={Stat.HP: max_hp},
        status=status,
        fainted=fainted,
        moves=moves,
    )


def side(*creatures: CreatureSnapshot, active: int | None = 0) -> SideSnapshot:
    return SideSnapshot(creatures=tuple(creatures), active_index=active)


def battle(mine: SideSnapshot, theirs: SideSnapshot, turn: int = 1) -> BattleSnapshot:
    return BattleSnapshot(sides=(mine, theirs), turn=turn, battle_tag="test-battle")
