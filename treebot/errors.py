"""Exceptions raised inside the search core.

None of these reach the host: the controller absorbs them and answers with
the fallback action.
"""

from __future__ import annotations


class SearchError(Exception):
    """Base class for search failures."""


class SearchCancelled(SearchError):
    """Raised inside the worker once the decision has been abandoned."""


class SearchTimeout(SearchError):
    """The decision did not finish within its wall-clock budget."""

    def __init__(self, budget_s: float) -> None:
        super().__init__(f"decision exceeded {budget_s:.3f}s budget")
        self.budget_s = budget_s
