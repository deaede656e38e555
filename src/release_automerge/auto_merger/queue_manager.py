"""Queue manager driving the release automerge loop."""

import threading
from dataclasses import dataclass
from enum import Enum

import click
from rich.markup import escape

from ..utils.logging import log_info, log_success
from .config import AutomergeConfig
from .gh_client import GhClient
from .models import PullRequest
from .policy import filter_eligible, select_promotions


class LoopOutcome(str, Enum):
    """How a call to :meth:`QueueManager.run` ended."""

    DRAINED = "drained"
    STOPPED = "stopped"


@dataclass(frozen=True)
class CycleResult:
    """Snapshot of a single polling cycle.

    Attributes
    ----------
    pending : list[PullRequest]
        Eligible pending release PRs.
    queued : list[PullRequest]
        Pending release PRs already carrying the automerge label.
    promoted : list[PullRequest]
        PRs labelled with automerge during this cycle.

    """

    pending: list[PullRequest]
    queued: list[PullRequest]
    promoted: list[PullRequest]

    @property
    def drained(self) -> bool:
        """True when no eligible pending PRs remain."""
        return not self.pending


class QueueManager:
    """Keep a bounded number of release PRs in the automerge set.

    Each cycle re-derives all state from live label queries, so the loop is
    safe to restart at any point.

    Parameters
    ----------
    config : AutomergeConfig
        Loop settings, including the target repository.
    client : GhClient, optional
        gh client to use. Built from ``config`` when omitted.

    Attributes
    ----------
    config : AutomergeConfig
        Loop settings.
    client : GhClient
        Client used for queries and label edits.

    """

    def __init__(self, config: AutomergeConfig, client: GhClient | None = None):
        """Initialize queue manager.

        Parameters
        ----------
        config : AutomergeConfig
            Loop settings, including the target repository.
        client : GhClient, optional
            gh client to use. Built from ``config`` when omitted.

        """
        self.config = config
        self.client = client or GhClient(
            repo=config.repo, query_limit=config.query_limit
        )

    def fetch_pending(self) -> list[PullRequest]:
        """Return eligible pending release PRs in query order."""
        prs = self.client.fetch_by_labels([self.config.pending_label])
        return filter_eligible(
            prs,
            title_prefix=self.config.title_prefix,
            excluded_labels=self.config.excluded_labels,
        )

    def fetch_queued(self) -> list[PullRequest]:
        """Return pending release PRs already carrying the automerge label."""
        return self.client.fetch_by_labels(
            [self.config.pending_label, self.config.automerge_label]
        )

    def promote(self, prs: list[PullRequest]) -> list[PullRequest]:
        """Add the automerge label to each PR in order.

        Stops at the first failure, leaving earlier labels in place.

        Raises
        ------
        MutationError
            If labelling a PR fails.

        """
        promoted = []
        for pr in prs:
            log_info(f"Labeling PR #{pr.number}: {escape(pr.title)} with automerge")
            self.client.add_label(pr.number, self.config.automerge_label)
            click.echo(
                f"Labeled PR #{pr.number}: {pr.title} "
                f"with {self.config.automerge_label}."
            )
            promoted.append(pr)
        return promoted

    def run_cycle(self) -> CycleResult:
        """Run one polling cycle.

        Returns
        -------
        CycleResult
            What was found and promoted. When ``drained`` is True no
            automerge query or label edit was made.

        Raises
        ------
        QueryError
            If a PR list query fails.
        MutationError
            If labelling a PR fails.

        """
        pending = self.fetch_pending()
        if not pending:
            return CycleResult(pending=[], queued=[], promoted=[])

        self._report(f"Found {len(pending)} pending PRs:", pending)

        queued = self.fetch_queued()
        self._report(
            f"Found {len(queued)} PRs in {self.config.automerge_label}:",
            queued,
        )

        selected = select_promotions(
            pending,
            already_queued=len(queued),
            ceiling=self.config.max_automerge,
        )
        promoted = self.promote(selected)
        return CycleResult(pending=pending, queued=queued, promoted=promoted)

    def run(self, stop_event: threading.Event | None = None) -> LoopOutcome:
        """Poll until no pending PRs remain or ``stop_event`` is set.

        Parameters
        ----------
        stop_event : threading.Event, optional
            Setting this event interrupts the wait between cycles.

        Returns
        -------
        LoopOutcome
            DRAINED once the pending queue is empty, STOPPED if interrupted.

        Raises
        ------
        QueryError
            If a PR list query fails.
        MutationError
            If labelling a PR fails.

        """
        if stop_event is None:
            stop_event = threading.Event()
        log_info(
            f"Starting automerge loop for {escape(self.config.repo)} "
            f"(max {self.config.max_automerge} in "
            f"{escape(self.config.automerge_label)}, "
            f"polling every {self.config.poll_interval:g}s)"
        )

        while not stop_event.is_set():
            result = self.run_cycle()
            if result.drained:
                click.echo("No more pending PRs.")
                log_success(f"Release queue drained for {escape(self.config.repo)}")
                return LoopOutcome.DRAINED

            click.echo("Waiting for merges.")
            if stop_event.wait(self.config.poll_interval):
                break

        return LoopOutcome.STOPPED

    def _report(self, header: str, prs: list[PullRequest]) -> None:
        click.echo(header)
        for pr in prs:
            click.echo(f"\t - #{pr.number}: {pr.title}")
        click.echo()
