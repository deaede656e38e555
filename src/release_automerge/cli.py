"""CLI entry point for release-automerge."""

import signal
import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from importlib.metadata import PackageNotFoundError, version

import click
from rich.markup import escape

from .auto_merger import (
    AutomergeConfig,
    LoopOutcome,
    MutationError,
    QueryError,
    QueueManager,
)
from .auto_merger.config import (
    DEFAULT_MAX_AUTOMERGE,
    DEFAULT_POLL_INTERVAL_SECONDS,
    RELEASE_TITLE_PREFIX,
)
from .utils.logging import log_error, log_warning


def get_version() -> str:
    """Get the installed version of the package.

    Returns
    -------
    str
        Version string from package metadata.

    """
    try:
        return version("release-automerge")
    except PackageNotFoundError:
        return "unknown"


def version_callback(ctx: click.Context, param: click.Parameter, value: bool) -> None:
    """Show version and exit.

    Args:
        ctx: Click context
        param: Click parameter (unused)
        value: Whether --version flag was provided

    """
    if not value or ctx.resilient_parsing:
        return
    click.echo(f"release-automerge {get_version()}")
    ctx.exit()


@contextmanager
def graceful_shutdown(stop_event: threading.Event) -> Iterator[None]:
    """Set ``stop_event`` on SIGINT/SIGTERM for the duration of the block."""

    def _handler(signum: int, frame: object) -> None:
        log_warning(
            f"Received {signal.Signals(signum).name}, stopping after current cycle"
        )
        stop_event.set()

    previous = {
        sig: signal.signal(sig, _handler) for sig in (signal.SIGINT, signal.SIGTERM)
    }
    try:
        yield
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)


@click.command(
    help="Promote pending release PRs into the automerge queue without exceeding a concurrency ceiling",
)
@click.argument("repo")
@click.option(
    "--version",
    is_flag=True,
    callback=version_callback,
    expose_value=False,
    is_eager=True,
    help="Show version and exit",
)
@click.option(
    "--max-automerge",
    type=click.IntRange(min=0),
    default=DEFAULT_MAX_AUTOMERGE,
    show_default=True,
    help="Maximum number of release PRs carrying the automerge label at once",
)
@click.option(
    "--poll-interval",
    type=click.FloatRange(min=0),
    default=DEFAULT_POLL_INTERVAL_SECONDS,
    show_default=True,
    help="Seconds to wait for merges between cycles",
)
@click.option(
    "--title-prefix",
    default=RELEASE_TITLE_PREFIX,
    show_default=True,
    help="Only release PRs whose title starts with this prefix are managed",
)
def release_automerge(
    repo: str,
    max_automerge: int,
    poll_interval: float,
    title_prefix: str,
) -> None:
    r"""Run the release automerge loop against REPO until no pending PRs remain.

    Examples:
      \b
      # Keep up to 5 plugin release PRs in automerge
      release-automerge my-org/my-plugins

      \b
      # Tighter ceiling, poll every minute
      release-automerge my-org/my-plugins --max-automerge 2 --poll-interval 60

    """
    try:
        config = AutomergeConfig(
            repo=repo,
            max_automerge=max_automerge,
            poll_interval=poll_interval,
            title_prefix=title_prefix,
        )
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="REPO") from e

    manager = QueueManager(config)
    stop_event = threading.Event()

    try:
        with graceful_shutdown(stop_event):
            outcome = manager.run(stop_event)
    except QueryError as e:
        log_error(f"Failed to get PRs: {e}")
        sys.exit(1)
    except MutationError as e:
        log_error(f"Failed to label PR: {e}")
        sys.exit(1)

    if outcome is LoopOutcome.STOPPED:
        log_warning(f"Stopped before the release queue for {escape(repo)} drained")


def main() -> None:
    """Console script entry point.

    Usage errors exit with status 1 rather than click's default of 2.
    """
    try:
        code = release_automerge.main(standalone_mode=False)
    except click.exceptions.Abort:
        log_error("Aborted")
        sys.exit(1)
    except click.ClickException as e:
        e.show()
        sys.exit(1)
    sys.exit(code if isinstance(code, int) else 0)


if __name__ == "__main__":
    main()
