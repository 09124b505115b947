"""
StateEvaluator: static heuristic score of a battle snapshot.

Positive values favour the perspective side. The four terms and their
weights are fixed; there is nothing to tune at runtime.
"""

from __future__ import annotations

from treebot import typechart
from treebot.schema import BattleSnapshot

HP_WEIGHT = 300.0
TYPE_ADVANTAGE_BONUS = 100.0
STATUS_WEIGHT = 50.0
ALIVE_WEIGHT = 200.0


class StateEvaluator:
    def evaluate(self, snapshot: BattleSnapshot | None, side: int) -> float:
        if snapshot is None:
            return 0.0

        mine = snapshot.side(side)
        theirs = snapshot.side(1 - side)
        my_active = mine.active
        opp_active = theirs.active
        if my_active is None or opp_active is None:
            return 0.0

        utility = (my_active.hp_ratio - opp_active.hp_ratio) * HP_WEIGHT

        # Primary types only, attacker's side of the matchup only.
        if typechart.is_super_effective(my_active.primary_type, opp_active.primary_type):
            utility += TYPE_ADVANTAGE_BONUS

        if opp_active.status is not None:
            utility += STATUS_WEIGHT
        if my_active.status is not None:
            utility -= STATUS_WEIGHT

        utility += (mine.alive_count - theirs.alive_count) * ALIVE_WEIGHT
        return utility
