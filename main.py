"""
TreeBot — entry point.

    uv run python main.py --p1 tree --p2 random --n 1
    uv run python main.py --p1 tree --p2 tree --depth 3 --thinking-time 5 --n 10

Start a local server with:
    node pokemon-showdown start --no-security

Search settings default to the TREEBOT_* environment variables (a .env file
is loaded first); flags override them:
    TREEBOT_MAX_DEPTH=3 TREEBOT_THINKING_TIME=10 uv run python main.py ...

Each decision runs off poke-env's event loop, so a long --thinking-time does
not stall the websocket. Keep it below the Showdown turn timer, though: the
server does not wait for the search.

Log level (default INFO, set via env or flag):
    LOG_LEVEL=DEBUG uv run python main.py ...
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import os
import re
import uuid
from pathlib import Path

from dotenv import load_dotenv
from poke_env import LocalhostServerConfiguration

from benchmark.export import write_report
from benchmark.runner import BattleRunner
from treebot.agent import BattleAgent
from treebot.agents.random import RandomAgent
from treebot.agents.tree import TreeSearchAgent
from treebot.config import OpponentModel, SearchConfig

logger = logging.getLogger(__name__)


def _setup_logging(level_name: str) -> None:
    level = getattr(logging, level_name)
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s [%(levelname)-8s] %(name)s — %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)  # silence third-party noise by default

    # Our packages follow the user-specified level.
    for name in ("__main__", "benchmark", "treebot"):
        logging.getLogger(name).setLevel(level)

    if level == logging.DEBUG:
        # Also surface poke-env authentication and connection events.
        logging.getLogger("poke_env.ps_client.ps_client").setLevel(logging.DEBUG)


def _safe(name: str) -> str:
    """Sanitize an agent name for use in a filename."""
    return re.sub(r"[^a-zA-Z0-9_-]", "-", name)


def _default_output(p1: str, p2: str, n: int) -> str:
    tag = uuid.uuid4().hex[:6]
    filename = f"{_safe(p1)}_vs_{_safe(p2)}_n{n}_{tag}.json"
    return str(Path("runs") / filename)


def build_agent(name: str, config: SearchConfig) -> BattleAgent:
    """Agent registry. Add new agents here — nothing else needs to change.

    Available agents:
      tree     expectimax tree search (settings from `config`)
      random   uniform over legal actions
    """
    if name == "tree":
        return TreeSearchAgent(config=config)
    if name == "random":
        return RandomAgent()
    raise ValueError(f"Unknown agent '{name}'. Available: tree, random")


def _search_config(args: argparse.Namespace) -> SearchConfig:
    config = SearchConfig.from_env()
    overrides = {}
    if args.depth is not None:
        overrides["max_depth"] = args.depth
    if args.thinking_time is not None:
        overrides["max_thinking_time_s"] = args.thinking_time
    if args.opponent_model is not None:
        overrides["opponent_model"] = OpponentModel(args.opponent_model)
    if args.score_switches:
        overrides["score_switches"] = True
    return dataclasses.replace(config, **overrides)


def main() -> None:
    load_dotenv()
    parser = argparse.ArgumentParser(description="TreeBot battle runner")
    parser.add_argument("--p1", default="tree", help="Agent for player 1")
    parser.add_argument("--p2", default="random", help="Agent for player 2")
    parser.add_argument("--n", type=int, default=1, help="Number of battles")
    parser.add_argument("--format", default="gen9randombattle", help="Battle format")
    parser.add_argument("--depth", type=int, default=None, help="Maximum search depth.")
    parser.add_argument(
        "--thinking-time",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Wall-clock budget per decision before the fallback action is used.",
    )
    parser.add_argument(
        "--opponent-model",
        default=None,
        choices=[m.value for m in OpponentModel],
        help="How opponent replies are aggregated during the search.",
    )
    parser.add_argument(
        "--score-switches",
        action="store_true",
        help="Let switches compete with attacks in the top-level candidate scoring.",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("LOG_LEVEL", "INFO").upper(),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log verbosity (also reads LOG_LEVEL env var). Default: INFO.",
    )
    parser.add_argument(
        "--output",
        default=None,
        metavar="PATH",
        help="Write JSON report to this path (default: runs/<p1>_vs_<p2>_n<n>_<hash>.json).",
    )
    args = parser.parse_args()

    _setup_logging(args.log_level)

    config = _search_config(args)
    agent1 = build_agent(args.p1, config)
    agent2 = build_agent(args.p2, config)

    logger.info(
        "Starting: %s vs %s · %d battle(s) · %s · depth=%d budget=%.1fs opponent=%s",
        args.p1,
        args.p2,
        args.n,
        args.format,
        config.max_depth,
        config.max_thinking_time_s,
        config.opponent_model.value,
    )

    runner = BattleRunner(
        server_configuration=LocalhostServerConfiguration,
        battle_format=args.format,
    )
    report = runner.run(agent1, agent2, n_battles=args.n)

    out = args.output or _default_output(args.p1, args.p2, args.n)
    Path(out).parent.mkdir(parents=True, exist_ok=True)
    write_report(report, out)
    print(f"  Report saved to {out}")


if __name__ == "__main__":
    main()
