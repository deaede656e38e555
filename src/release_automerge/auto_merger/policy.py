"""Admission policy deciding which release PRs enter the automerge set.

All functions here are pure: they only look at their arguments and never
touch GitHub.
"""

from collections.abc import Iterable, Sequence

from .config import EXCLUDED_LABELS, RELEASE_TITLE_PREFIX
from .models import PullRequest


def filter_eligible(
    prs: Iterable[PullRequest],
    title_prefix: str = RELEASE_TITLE_PREFIX,
    excluded_labels: Iterable[str] = EXCLUDED_LABELS,
) -> list[PullRequest]:
    """Keep pending release PRs that may be promoted.

    Only PRs whose title starts with ``title_prefix`` are managed; other
    release PRs are ignored. PRs carrying any excluded label are dropped.

    Parameters
    ----------
    prs : Iterable[PullRequest]
        PRs labelled as pending release, in query order.
    title_prefix : str, optional
        Required title prefix.
    excluded_labels : Iterable[str], optional
        Labels that disqualify a PR.

    Returns
    -------
    list[PullRequest]
        Eligible PRs in their original order.

    """
    excluded = frozenset(excluded_labels)
    return [
        pr
        for pr in prs
        if pr.title.startswith(title_prefix)
        and not any(pr.has_label(name) for name in excluded)
    ]


def promotion_budget(already_queued: int, ceiling: int) -> int:
    """Return how many more PRs may be promoted without exceeding ``ceiling``."""
    return max(0, ceiling - already_queued)


def select_promotions(
    eligible: Sequence[PullRequest],
    already_queued: int,
    ceiling: int,
) -> list[PullRequest]:
    """Pick the PRs to label with automerge this cycle.

    Greedy and order preserving: the first PRs in ``eligible`` are promoted
    first, up to the remaining capacity.

    Parameters
    ----------
    eligible : Sequence[PullRequest]
        Output of :func:`filter_eligible`.
    already_queued : int
        Number of pending release PRs already carrying automerge.
    ceiling : int
        Maximum size of the automerge set.

    Returns
    -------
    list[PullRequest]
        At most ``max(0, ceiling - already_queued)`` PRs.

    """
    budget = promotion_budget(already_queued, ceiling)
    if budget == 0:
        return []
    return list(eligible[:budget])
