"""Release Automerge - rate-limited promotion of release PRs into automerge."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("release-automerge")
except PackageNotFoundError:
    # Package not installed, use fallback
    __version__ = "0.1.0.dev"

from .auto_merger import (
    AutomergeConfig,
    AutomergeError,
    GhClient,
    Label,
    MutationError,
    PullRequest,
    QueryError,
    QueueManager,
)

__all__ = [
    "AutomergeConfig",
    "AutomergeError",
    "GhClient",
    "Label",
    "MutationError",
    "PullRequest",
    "QueryError",
    "QueueManager",
    "__version__",
]
