"""
BattleRunner: orchestrates N battles between two AgentPlayers.

Knows nothing about which agents are inside the players —
works identically for Random vs Random or Tree vs Tree.
"""

from __future__ import annotations

import asyncio
import logging
import re
import time
import uuid

from poke_env import ServerConfiguration
from poke_env.concurrency import POKE_LOOP
from poke_env.ps_client import AccountConfiguration

from benchmark.types import BattleResult, BenchmarkReport
from treebot.agent import BattleAgent
from treebot.player import AgentPlayer

logger = logging.getLogger(__name__)

_MAX_USERNAME = 18


def showdown_username(agent_name: str) -> str:
    """Showdown-safe username: ≤18 chars, alphanumeric/hyphens, keeps the trailing hash."""
    safe = re.sub(r"[^a-zA-Z0-9-]", "-", agent_name).strip("-")
    if len(safe) <= _MAX_USERNAME:
        return safe

    m = re.match(r"^(.*)-([0-9a-f]{6})$", safe)
    if m:
        prefix = m.group(1)[: _MAX_USERNAME - 7].rstrip("-")
        return f"{prefix}-{m.group(2)}"
    return safe[:_MAX_USERNAME].strip("-")


class BattleRunner:
    def __init__(
        self,
        server_configuration: ServerConfiguration,
        battle_format: str = "gen9randombattle",
    ) -> None:
        self._server_configuration = server_configuration
        self._battle_format = battle_format

    def run(self, agent1: BattleAgent, agent2: BattleAgent, n_battles: int) -> BenchmarkReport:
        # battle_against must be awaited from within poke-env's own loop thread.
        future = asyncio.run_coroutine_threadsafe(
            self._run_async(agent1, agent2, n_battles), POKE_LOOP
        )
        return future.result()

    def _player(self, agent: BattleAgent) -> AgentPlayer:
        return AgentPlayer(
            agent=agent,
            account_configuration=AccountConfiguration(showdown_username(agent.name), None),
            battle_format=self._battle_format,
            server_configuration=self._server_configuration,
        )

    async def _run_async(
        self, agent1: BattleAgent, agent2: BattleAgent, n_battles: int
    ) -> BenchmarkReport:
        p1 = self._player(agent1)
        p2 = self._player(agent2)

        logger.info(
            "Battle session: %s (%s) vs %s (%s) · %d battle(s) · format=%s",
            agent1.name,
            p1.username,
            agent2.name,
            p2.username,
            n_battles,
            self._battle_format,
        )

        start = time.time()
        await p1.battle_against(p2, n_battles=n_battles)
        elapsed = time.time() - start

        report = BenchmarkReport(
            p1_agent=agent1.name,
            p2_agent=agent2.name,
            n_games=n_battles,
            p1_wins=p1.n_won_battles,
            p2_wins=p2.n_won_battles,
            draws=n_battles - p1.n_won_battles - p2.n_won_battles,
            results=self._collect_results(p1, agent1.name, agent2.name),
            total_duration_s=elapsed,
            decision_stats=getattr(agent1, "decision_stats", [])
            + getattr(agent2, "decision_stats", []),
        )

        logger.info(
            "Done: %d battles in %.1fs · %s %dW/%dL · avg %.1f turns · fallback rate %s",
            n_battles,
            elapsed,
            agent1.name,
            p1.n_won_battles,
            p2.n_won_battles,
            report.avg_game_length,
            report.fallback_rate(agent1.name),
        )
        return report

    def _collect_results(self, p1: AgentPlayer, name1: str, name2: str) -> list[BattleResult]:
        results = []
        for battle in p1.battles.values():
            winner = "p1" if battle.won else "p2" if battle.lost else "draw"
            results.append(
                BattleResult(
                    game_id=str(uuid.uuid4()),
                    p1_agent=name1,
                    p2_agent=name2,
                    winner=winner,
                    n_turns=battle.turn,
                    timestamp=time.time(),
                )
            )
        return results
