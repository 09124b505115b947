"""
DeadlineExecutor: runs one decision on a worker thread under a wall-clock budget.

The caller waits on the worker's future with a timeout. On timeout the
cancel event is set so the search stops at its next recursive call, and the
caller returns the fallback without waiting any further. Faults raised by
the decision are logged and replaced by the same fallback. run() never
raises.
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout
from dataclasses import dataclass
from typing import Callable

from treebot.errors import SearchTimeout
from treebot.schema import ActionOption

logger = logging.getLogger(__name__)


@dataclass
class Outcome:
    action: ActionOption | None
    used_fallback: bool = False
    reason: str | None = None  # None | "timeout" | "fault"
    elapsed_ms: float = 0.0
    nodes: int = 0


class DeadlineExecutor:
    def __init__(self, time_budget_s: float) -> None:
        self._time_budget_s = time_budget_s

    @property
    def time_budget_s(self) -> float:
        return self._time_budget_s

    def run(
        self,
        decide: Callable[[], tuple[ActionOption | None, int]],
        fallback: Callable[[], ActionOption | None],
        cancel_event: threading.Event,
    ) -> Outcome:
        """Run `decide` (returning the action and nodes expanded) within the budget."""
        t0 = time.perf_counter()
        worker = ThreadPoolExecutor(max_workers=1, thread_name_prefix="treebot-search")
        try:
            future = worker.submit(decide)
            action, nodes = future.result(timeout=self._time_budget_s)
            return Outcome(action=action, elapsed_ms=_since(t0), nodes=nodes)
        except FutureTimeout:
            cancel_event.set()
            logger.warning("%s — using fallback action.", SearchTimeout(self._time_budget_s))
            return Outcome(
                action=self._safe_fallback(fallback),
                used_fallback=True,
                reason="timeout",
                elapsed_ms=_since(t0),
            )
        except Exception:
            cancel_event.set()
            logger.error("Search failed — using fallback action.", exc_info=True)
            return Outcome(
                action=self._safe_fallback(fallback),
                used_fallback=True,
                reason="fault",
                elapsed_ms=_since(t0),
            )
        finally:
            worker.shutdown(wait=False, cancel_futures=True)

    def _safe_fallback(self, fallback: Callable[[], ActionOption | None]) -> ActionOption | None:
        try:
            return fallback()
        except Exception:
            logger.error("Fallback action lookup failed.", exc_info=True)
            return None


def _since(t0: float) -> float:
    return (time.perf_counter() - t0) * 1000
