"""Export a BenchmarkReport to a structured JSON file."""

from __future__ import annotations

import dataclasses
import json

from benchmark.types import BenchmarkReport


def report_summary(report: BenchmarkReport) -> dict:
    summary = {
        "p1_agent": report.p1_agent,
        "p2_agent": report.p2_agent,
        "n_games": report.n_games,
        "p1_wins": report.p1_wins,
        "p2_wins": report.p2_wins,
        "draws": report.draws,
        "p1_win_rate": report.p1_win_rate,
        "avg_game_length": report.avg_game_length,
        "total_duration_s": report.total_duration_s,
    }
    for slot, agent in (("p1", report.p1_agent), ("p2", report.p2_agent)):
        summary[f"{slot}_avg_decision_ms"] = report.avg_decision_ms(agent)
        summary[f"{slot}_fallback_rate"] = report.fallback_rate(agent)
        summary[f"{slot}_timeout_rate"] = report.timeout_rate(agent)
    return summary


def write_report(report: BenchmarkReport, path: str) -> None:
    data = {
        "summary": report_summary(report),
        "battles": [dataclasses.asdict(r) for r in report.results],
        "decision_stats": [dataclasses.asdict(d) for d in report.decision_stats],
    }
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
