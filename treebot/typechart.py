"""Type-effectiveness lookups backed by poke-env's bundled generation data."""

from __future__ import annotations

import logging

from poke_env.battle.pokemon_type import PokemonType
from poke_env.data.gen_data import GenData

logger = logging.getLogger(__name__)

_GEN = 9
_TYPE_CHART: dict | None = None


def _get_type_chart() -> dict:
    global _TYPE_CHART
    if _TYPE_CHART is None:
        _TYPE_CHART = GenData.from_gen(_GEN).type_chart
    return _TYPE_CHART


def _to_type(name: str | None) -> PokemonType | None:
    if not name:
        return None
    try:
        return PokemonType[name.strip().upper().replace(" ", "_")]
    except KeyError:
        return None


def multiplier(attacking: str | None, defending: str | None) -> float:
    """Damage modifier of an `attacking`-type hit on a single `defending` type.

    Unknown or missing types are neutral (1.0).
    """
    attack_type = _to_type(attacking)
    defend_type = _to_type(defending)
    if attack_type is None or defend_type is None:
        return 1.0
    try:
        return float(attack_type.damage_multiplier(defend_type, type_chart=_get_type_chart()))
    except KeyError:
        logger.debug("No chart entry for %s -> %s, treating as neutral.", attacking, defending)
        return 1.0


def is_super_effective(attacking: str | None, defending: str | None) -> bool:
    return multiplier(attacking, defending) > 1.0
