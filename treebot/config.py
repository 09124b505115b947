"""
Construction-time search configuration.

Values are fixed per agent instance. SearchConfig.from_env() reads the
TREEBOT_* variables, which main.py loads from .env via load_dotenv().
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum

DEFAULT_MAX_DEPTH = 4
DEFAULT_THINKING_TIME_S = 360.0  # 6 minutes per decision


class OpponentModel(Enum):
    """How the search aggregates over the opponent's replies."""

    COLLAPSED = "collapsed"  # score the snapshot without enumerating replies
    MINIMAX = "minimax"  # worst case over replies
    EXPECTIMAX = "expectimax"  # probability-weighted over replies


def _env_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class SearchConfig:
    max_depth: int = DEFAULT_MAX_DEPTH
    max_thinking_time_s: float = DEFAULT_THINKING_TIME_S
    opponent_model: OpponentModel = OpponentModel.EXPECTIMAX
    score_switches: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
            raise ValueError(f"max_depth must be an int, got {self.max_depth!r}")
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be positive, got {self.max_depth}")
        if self.max_thinking_time_s <= 0:
            raise ValueError(
                f"max_thinking_time_s must be positive, got {self.max_thinking_time_s}"
            )
        if not isinstance(self.opponent_model, OpponentModel):
            raise ValueError(f"Unknown opponent model {self.opponent_model!r}")

    @classmethod
    def from_env(cls) -> SearchConfig:
        return cls(
            max_depth=int(os.getenv("TREEBOT_MAX_DEPTH", DEFAULT_MAX_DEPTH)),
            max_thinking_time_s=float(
                os.getenv("TREEBOT_THINKING_TIME", DEFAULT_THINKING_TIME_S)
            ),
            opponent_model=OpponentModel(
                os.getenv("TREEBOT_OPPONENT_MODEL", OpponentModel.EXPECTIMAX.value).lower()
            ),
            score_switches=_env_bool(os.getenv("TREEBOT_SCORE_SWITCHES", "false")),
        )
