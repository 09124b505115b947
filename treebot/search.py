"""
SearchEngine: bounded-depth expectimax over battle snapshots.

The agent's plies maximize over its legal actions; the opponent's plies
aggregate over the opponent's legal actions according to the configured
OpponentModel. Successor snapshots come from an injected Transition; the
default identity transition scores every ply on the root snapshot.

One engine instance serves one decision. It is not thread-safe and does
not need to be: the controller builds a fresh engine per call.
"""

from __future__ import annotations

import logging
import math
import threading
from dataclasses import dataclass
from typing import Protocol

from treebot.config import OpponentModel, SearchConfig
from treebot.errors import SearchCancelled
from treebot.evaluator import StateEvaluator
from treebot.schema import (
    ActionOption,
    AttackAction,
    BattleSnapshot,
    SwitchAction,
)
from treebot.scorer import ActionScorer

logger = logging.getLogger(__name__)

PRUNE_FACTOR = 0.8
IMMEDIATE_WEIGHT = 0.4
LOOKAHEAD_WEIGHT = 0.6


class Transition(Protocol):
    def __call__(
        self, snapshot: BattleSnapshot, side: int, action: ActionOption
    ) -> BattleSnapshot: ...


def identity_transition(
    snapshot: BattleSnapshot, side: int, action: ActionOption
) -> BattleSnapshot:
    """No simulator available: the successor is the snapshot itself."""
    return snapshot


def legal_actions(snapshot: BattleSnapshot | None, side: int) -> list[ActionOption]:
    """Usable attacks in listed order, then switches in bench order."""
    if snapshot is None:
        return []
    team = snapshot.side(side)
    active = team.active
    if active is None:
        return []

    actions: list[ActionOption] = [AttackAction(move=m) for m in active.moves]
    actions += [
        SwitchAction(bench_index=i)
        for i, creature in enumerate(team.creatures)
        if i != team.active_index and not creature.fainted
    ]
    return actions


@dataclass(frozen=True)
class SearchNode:
    snapshot: BattleSnapshot
    depth: int
    maximizing: bool
    action: ActionOption | None
    probability: float = 1.0  # chance of reaching this node from its parent


@dataclass
class SearchResult:
    action: ActionOption | None
    value: float = -math.inf
    nodes: int = 0
    max_depth_seen: int = 0
    candidates: int = 0


class SearchEngine:
    def __init__(
        self,
        config: SearchConfig,
        side: int,
        evaluator: StateEvaluator | None = None,
        scorer: ActionScorer | None = None,
        transition: Transition = identity_transition,
        cancel_event: threading.Event | None = None,
    ) -> None:
        self._config = config
        self._side = side
        self._evaluator = evaluator or StateEvaluator()
        self._scorer = scorer or ActionScorer()
        self._transition = transition
        self._cancel_event = cancel_event or threading.Event()
        self._nodes = 0
        self._max_depth_seen = 0

    @property
    def side(self) -> int:
        return self._side

    @property
    def nodes(self) -> int:
        return self._nodes

    @property
    def max_depth_seen(self) -> int:
        return self._max_depth_seen

    # ── Top-level decision ──────────────────────────────────────────────────

    def decide(self, root: BattleSnapshot) -> SearchResult:
        actions = legal_actions(root, self._side)
        if not actions:
            return SearchResult(action=None)

        if self._config.score_switches:
            candidates = actions
        else:
            candidates = [a for a in actions if isinstance(a, AttackAction)]
            if not candidates:
                # Only switches are legal and they are not scored: take the first.
                return self._result(actions[0], -math.inf, 0)

        opp_active = root.side(1 - self._side).active
        best_action = candidates[0]
        best_value = -math.inf
        evaluated = 0

        for action in candidates:
            self._check_cancelled()
            try:
                if opp_active is None:
                    continue
                value = self._scorer.score(action, opp_active)
                if value > best_value * PRUNE_FACTOR:
                    lookahead = self.search(
                        SearchNode(
                            snapshot=self._transition(root, self._side, action),
                            depth=1,
                            maximizing=False,
                            action=action,
                        )
                    )
                    value = IMMEDIATE_WEIGHT * value + LOOKAHEAD_WEIGHT * lookahead
                evaluated += 1
            except SearchCancelled:
                raise
            except Exception:
                logger.warning("Skipping candidate %s after evaluation error.", action.label(), exc_info=True)
                continue

            logger.debug("Candidate %s -> %.1f", action.label(), value)
            if value > best_value:
                best_value = value
                best_action = action

        return self._result(best_action, best_value, evaluated)

    def _result(self, action: ActionOption, value: float, evaluated: int) -> SearchResult:
        return SearchResult(
            action=action,
            value=value,
            nodes=self._nodes,
            max_depth_seen=self._max_depth_seen,
            candidates=evaluated,
        )

    # ── Recursive lookahead ─────────────────────────────────────────────────

    def search(self, node: SearchNode) -> float:
        self._check_cancelled()
        self._nodes += 1
        self._max_depth_seen = max(self._max_depth_seen, node.depth)

        if node.depth >= self._config.max_depth:
            return self._evaluator.evaluate(node.snapshot, self._side)

        if node.maximizing:
            return self._max_value(node)
        return self._opponent_value(node)

    def _max_value(self, node: SearchNode) -> float:
        actions = legal_actions(node.snapshot, self._side)
        if not actions:
            return self._evaluator.evaluate(node.snapshot, self._side)

        return max(
            self.search(
                SearchNode(
                    snapshot=self._transition(node.snapshot, self._side, action),
                    depth=node.depth + 1,
                    maximizing=False,
                    action=action,
                )
            )
            for action in actions
        )

    def _opponent_value(self, node: SearchNode) -> float:
        model = self._config.opponent_model
        if model is OpponentModel.COLLAPSED:
            return self._evaluator.evaluate(node.snapshot, self._side)

        opponent = 1 - self._side
        replies = legal_actions(node.snapshot, opponent)
        if not replies:
            return self._evaluator.evaluate(node.snapshot, self._side)

        probability = 1.0 / len(replies)
        children = [
            SearchNode(
                snapshot=self._transition(node.snapshot, opponent, reply),
                depth=node.depth + 1,
                maximizing=True,
                action=reply,
                probability=probability,
            )
            for reply in replies
        ]

        if model is OpponentModel.MINIMAX:
            return min(self.search(child) for child in children)
        return sum(child.probability * self.search(child) for child in children)

    def _check_cancelled(self) -> None:
        if self._cancel_event.is_set():
            raise SearchCancelled("search abandoned")
