"""
ActionScorer: cheap, one-step value of a candidate action.

Used by the search to decide which candidates deserve a full lookahead.
Switches are not scored here (always 0).
"""

from __future__ import annotations

import logging

from treebot import typechart
from treebot.schema import (
    ActionOption,
    AttackAction,
    CreatureSnapshot,
    MoveInfo,
    StatusEffect,
)

logger = logging.getLogger(__name__)

STATUS_MOVE_VALUES: dict[StatusEffect, float] = {
    StatusEffect.BOOST: 80.0,
    StatusEffect.SLEEP: 70.0,
    StatusEffect.SCREEN: 60.0,
    StatusEffect.NO_OP: 5.0,
    StatusEffect.OTHER: 30.0,
}

INACCURATE_PENALTY = 0.7
CRIT_WEIGHT = 0.5


class ActionScorer:
    def score(self, action: ActionOption | None, target: CreatureSnapshot | None) -> float:
        if not isinstance(action, AttackAction) or target is None:
            return 0.0

        move = action.move
        if move.is_status:
            return STATUS_MOVE_VALUES.get(move.effect, STATUS_MOVE_VALUES[StatusEffect.OTHER])

        value = self._damage_value(move, target)
        logger.debug(
            "Scored %-15s -> %6.1f (power=%d acc=%d crit=%.1f%%)",
            move.name,
            value,
            move.power,
            move.accuracy,
            move.crit_ratio * 100,
        )
        return value

    def _damage_value(self, move: MoveInfo, target: CreatureSnapshot) -> float:
        effectiveness = typechart.multiplier(move.type, target.primary_type)
        if target.secondary_type is not None:
            effectiveness *= typechart.multiplier(move.type, target.secondary_type)

        accuracy_penalty = INACCURATE_PENALTY if move.accuracy < 100 else 1.0
        crit_bonus = 1.0 + move.crit_ratio * CRIT_WEIGHT
        return effectiveness * (move.power / 100.0) * accuracy_penalty * crit_bonus * 100.0
