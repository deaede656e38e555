"""Auto-merger loop admitting release PRs into the automerge set."""

from .config import AutomergeConfig
from .gh_client import GhClient
from .models import (
    AutomergeError,
    Label,
    MutationError,
    PullRequest,
    QueryError,
)
from .policy import filter_eligible, promotion_budget, select_promotions
from .queue_manager import CycleResult, LoopOutcome, QueueManager

__all__ = [
    "AutomergeConfig",
    "AutomergeError",
    "CycleResult",
    "GhClient",
    "Label",
    "LoopOutcome",
    "MutationError",
    "PullRequest",
    "QueryError",
    "QueueManager",
    "filter_eligible",
    "promotion_budget",
    "select_promotions",
]
