from treebot.agent import BattleAgent
from treebot.agents.tree import TreeSearchAgent
from treebot.config import OpponentModel, SearchConfig
from treebot.schema import (
    ActionOption,
    AttackAction,
    BattleSnapshot,
    CreatureSnapshot,
    MoveInfo,
    SideSnapshot,
    Stat,
    StatusEffect,
    SwitchAction,
)

__all__ = [
    "BattleAgent",
    "TreeSearchAgent",
    "OpponentModel",
    "SearchConfig",
    "ActionOption",
    "AttackAction",
    "BattleSnapshot",
    "CreatureSnapshot",
    "MoveInfo",
    "SideSnapshot",
    "Stat",
    "StatusEffect",
    "SwitchAction",
]
