"""Runtime configuration for the release automerge loop."""

import re
from dataclasses import dataclass

PENDING_LABEL = "autorelease: pending"
AUTOMERGE_LABEL = "automerge"
RELEASE_TITLE_PREFIX = "chore(main): Release plugins-"
EXCLUDED_LABELS = ("wip", AUTOMERGE_LABEL, "no automerge")

DEFAULT_MAX_AUTOMERGE = 5
DEFAULT_POLL_INTERVAL_SECONDS = 300.0
QUERY_LIMIT = 100

_REPO_PATTERN = re.compile(r"^(?:[^/\s]+/)?[^/\s]+/[^/\s]+$")


@dataclass(frozen=True)
class AutomergeConfig:
    """Settings for one automerge loop process.

    Parameters
    ----------
    repo : str
        Target repository ([HOST/]OWNER/NAME format).
    max_automerge : int, optional
        Ceiling on PRs carrying the automerge label at once (default=5).
    poll_interval : float, optional
        Seconds to wait between cycles (default=300).
    title_prefix : str, optional
        Title prefix identifying release PRs this loop manages.
    pending_label : str, optional
        Label marking release candidates (default="autorelease: pending").
    automerge_label : str, optional
        Label that queues a PR for merge (default="automerge").
    excluded_labels : tuple[str, ...], optional
        Labels that keep a PR from being promoted.
    query_limit : int, optional
        Maximum PRs returned by a single list query (default=100).

    Raises
    ------
    ValueError
        If any value is out of range or the repository name is malformed.

    """

    repo: str
    max_automerge: int = DEFAULT_MAX_AUTOMERGE
    poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS
    title_prefix: str = RELEASE_TITLE_PREFIX
    pending_label: str = PENDING_LABEL
    automerge_label: str = AUTOMERGE_LABEL
    excluded_labels: tuple[str, ...] = EXCLUDED_LABELS
    query_limit: int = QUERY_LIMIT

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not _REPO_PATTERN.match(self.repo):
            raise ValueError(
                f"repository must be in [HOST/]OWNER/NAME format: {self.repo!r}"
            )
        if self.max_automerge < 0:
            raise ValueError("max_automerge must be >= 0")
        if self.poll_interval < 0:
            raise ValueError("poll_interval must be >= 0")
        if self.query_limit <= 0:
            raise ValueError("query_limit must be > 0")
