"""Typed result containers for benchmark runs."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class BattleResult:
    game_id: str
    p1_agent: str  # agent.name
    p2_agent: str
    winner: str  # "p1" | "p2" | "draw"
    n_turns: int
    timestamp: float


@dataclass
class DecisionStat:
    battle_tag: str
    turn: int
    agent: str
    decision_ms: float
    used_fallback: bool
    fallback_reason: str | None  # None | "timeout" | "fault"
    nodes: int  # search nodes expanded; 0 when the search did not finish
    action: str  # chosen action label, "" when no action


@dataclass
class BenchmarkReport:
    p1_agent: str
    p2_agent: str
    n_games: int
    p1_wins: int
    p2_wins: int
    draws: int
    results: list[BattleResult] = field(default_factory=list)
    total_duration_s: float = 0.0
    decision_stats: list[DecisionStat] = field(default_factory=list)

    @property
    def p1_win_rate(self) -> float:
        if self.n_games == 0:
            return 0.0
        return self.p1_wins / self.n_games

    @property
    def avg_game_length(self) -> float:
        if not self.results:
            return 0.0
        return sum(r.n_turns for r in self.results) / len(self.results)

    def _rows(self, agent: str) -> list[DecisionStat]:
        return [d for d in self.decision_stats if d.agent == agent]

    def avg_decision_ms(self, agent: str) -> float | None:
        rows = self._rows(agent)
        if not rows:
            return None
        return sum(d.decision_ms for d in rows) / len(rows)

    def fallback_rate(self, agent: str) -> float | None:
        rows = self._rows(agent)
        if not rows:
            return None
        return sum(1 for d in rows if d.used_fallback) / len(rows)

    def timeout_rate(self, agent: str) -> float | None:
        rows = self._rows(agent)
        if not rows:
            return None
        return sum(1 for d in rows if d.fallback_reason == "timeout") / len(rows)
