"""
Read-only battle snapshots consumed by the search core.

Every component treats these as values: nothing in treebot mutates a
snapshot. The poke-env StateExtractor builds them from live battles;
tests build them by hand.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Stat(Enum):
    HP = "hp"
    ATK = "atk"
    DEF = "def"
    SPA = "spa"
    SPD = "spd"
    SPE = "spe"


class StatusEffect(Enum):
    """Strategic category of a non-damaging move."""

    BOOST = "boost"  # self stat raises (swords dance, dragon dance)
    SLEEP = "sleep"  # hypnosis, sleep powder
    SCREEN = "screen"  # reflect, light screen
    NO_OP = "no_op"  # splash
    OTHER = "other"


@dataclass(frozen=True)
class MoveInfo:
    name: str
    type: str  # lower-case type name, e.g. "fire"
    power: int | None  # None for status moves
    accuracy: int = 100  # percent
    crit_ratio: float = 0.0  # probability of a critical hit, 0..1
    effect: StatusEffect = StatusEffect.OTHER

    @property
    def is_status(self) -> bool:
        return self.power is None


@dataclass(frozen=True)
class CreatureSnapshot:
    name: str
    types: tuple[str, ...]  # one or two lower-case type names
    current_stats: dict[Stat, int] = field(default_factory=dict, hash=False)
    initial_stats: dict[Stat, int] = field(default_factory=dict, hash=False)
    status: str | None = None  # "brn" | "par" | "slp" | "frz" | "psn" | "tox" | None
    fainted: bool = False
    moves: tuple[MoveInfo, ...] = ()

    @property
    def primary_type(self) -> str | None:
        return self.types[0] if self.types else None

    @property
    def secondary_type(self) -> str | None:
        return self.types[1] if len(self.types) > 1 else None

    def current(self, stat: Stat) -> int:
        return self.current_stats.get(stat, 0)

    def initial(self, stat: Stat) -> int:
        return self.initial_stats.get(stat, 0)

    @property
    def hp_ratio(self) -> float:
        initial = self.initial(Stat.HP)
        if initial <= 0:
            return 0.0
        return self.current(Stat.HP) / initial


@dataclass(frozen=True)
class SideSnapshot:
    creatures: tuple[CreatureSnapshot, ...]
    active_index: int | None = 0

    @property
    def size(self) -> int:
        return len(self.creatures)

    def creature(self, index: int) -> CreatureSnapshot | None:
        if 0 <= index < len(self.creatures):
            return self.creatures[index]
        return None

    @property
    def active(self) -> CreatureSnapshot | None:
        if self.active_index is None:
            return None
        return self.creature(self.active_index)

    @property
    def alive_count(self) -> int:
        return sum(1 for c in self.creatures if not c.fainted)


@dataclass(frozen=True)
class BattleSnapshot:
    sides: tuple[SideSnapshot, SideSnapshot]
    turn: int = 0
    battle_tag: str = ""

    def side(self, index: int) -> SideSnapshot:
        return self.sides[index]


@dataclass(frozen=True)
class AttackAction:
    move: MoveInfo

    def label(self) -> str:
        return self.move.name


@dataclass(frozen=True)
class SwitchAction:
    bench_index: int

    def label(self) -> str:
        return f"switch:{self.bench_index}"


ActionOption = AttackAction | SwitchAction
