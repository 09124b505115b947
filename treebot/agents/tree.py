"""
TreeSearchAgent: the controller the host turn loop calls once per turn.

Each call builds a fresh SearchEngine and cancel event, runs the decision
through the DeadlineExecutor and records a DecisionStat. The call never
raises; on timeout or fault it answers with the first legal action.
"""

from __future__ import annotations

import logging
import threading
import uuid

from benchmark.types import DecisionStat
from treebot.agent import BattleAgent
from treebot.config import OpponentModel, SearchConfig
from treebot.evaluator import StateEvaluator
from treebot.executor import DeadlineExecutor
from treebot.schema import ActionOption, BattleSnapshot
from treebot.scorer import ActionScorer
from treebot.search import SearchEngine, Transition, identity_transition, legal_actions

logger = logging.getLogger(__name__)


class TreeSearchAgent(BattleAgent):
    def __init__(
        self,
        max_depth: int = 4,
        max_thinking_time_s: float = 360.0,
        side: int = 0,
        opponent_model: OpponentModel = OpponentModel.EXPECTIMAX,
        score_switches: bool = False,
        transition: Transition = identity_transition,
        config: SearchConfig | None = None,
    ) -> None:
        if side not in (0, 1):
            raise ValueError(f"side must be 0 or 1, got {side}")
        self._config = config or SearchConfig(
            max_depth=max_depth,
            max_thinking_time_s=max_thinking_time_s,
            opponent_model=opponent_model,
            score_switches=score_switches,
        )
        self.side = side
        self._transition = transition
        self._evaluator = StateEvaluator()
        self._scorer = ActionScorer()
        self._executor = DeadlineExecutor(self._config.max_thinking_time_s)
        self._name = f"tree-d{self._config.max_depth}-{uuid.uuid4().hex[:6]}"
        self._decision_stats: list[DecisionStat] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def config(self) -> SearchConfig:
        return self._config

    @property
    def decision_stats(self) -> list[DecisionStat]:
        return self._decision_stats

    def choose_action(self, snapshot: BattleSnapshot | None) -> ActionOption | None:
        if snapshot is None:
            return None

        cancel_event = threading.Event()
        engine = SearchEngine(
            self._config,
            side=self.side,
            evaluator=self._evaluator,
            scorer=self._scorer,
            transition=self._transition,
            cancel_event=cancel_event,
        )

        def decide() -> tuple[ActionOption | None, int]:
            result = engine.decide(snapshot)
            return result.action, result.nodes

        outcome = self._executor.run(
            decide,
            fallback=lambda: self.fallback_action(snapshot),
            cancel_event=cancel_event,
        )

        action_label = outcome.action.label() if outcome.action is not None else ""
        self._decision_stats.append(
            DecisionStat(
                battle_tag=snapshot.battle_tag,
                turn=snapshot.turn,
                agent=self._name,
                decision_ms=outcome.elapsed_ms,
                used_fallback=outcome.used_fallback,
                fallback_reason=outcome.reason,
                nodes=outcome.nodes,
                action=action_label,
            )
        )
        logger.debug(
            "[%s] Turn %d · %s in %.0fms (%d nodes%s)",
            self._name,
            snapshot.turn,
            action_label or "no action",
            outcome.elapsed_ms,
            outcome.nodes,
            f", fallback={outcome.reason}" if outcome.used_fallback else "",
        )
        return outcome.action

    get_next_action = choose_action

    def fallback_action(self, snapshot: BattleSnapshot | None) -> ActionOption | None:
        """First legal action (usable moves come before switches), or None."""
        actions = legal_actions(snapshot, self.side)
        return actions[0] if actions else None
