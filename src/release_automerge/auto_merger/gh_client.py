"""Pull request queries and label edits via gh CLI."""

import json
import os
import subprocess

from .config import QUERY_LIMIT
from .models import MutationError, PullRequest, QueryError

PR_FIELDS = "id,number,title,labels"


class GhClient:
    """Query and relabel pull requests of a single repository via gh CLI.

    Authentication is left to gh itself (``gh auth login`` or ``GH_TOKEN``
    in the inherited environment).

    Parameters
    ----------
    repo : str
        Repository name (owner/repo format).
    query_limit : int, optional
        Maximum PRs returned per list query (default=100). Results beyond
        the limit are silently truncated.

    Attributes
    ----------
    repo : str
        Repository name.
    query_limit : int
        Maximum PRs returned per list query.

    """

    def __init__(self, repo: str, query_limit: int = QUERY_LIMIT):
        """Initialize gh client.

        Parameters
        ----------
        repo : str
            Repository name (owner/repo format).
        query_limit : int, optional
            Maximum PRs returned per list query (default=100).

        """
        self.repo = repo
        self.query_limit = query_limit

    def _run_gh_command(self, cmd: list[str]) -> str:
        """Execute gh CLI command.

        Parameters
        ----------
        cmd : list[str]
            Command and arguments to execute.

        Returns
        -------
        str
            Stripped stdout from command.

        Raises
        ------
        subprocess.CalledProcessError
            If command fails.
        OSError
            If the gh executable cannot be started.

        """
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            check=True,
            env=os.environ.copy(),
            # Own session: terminal SIGINT reaches only this process, not gh
            start_new_session=True,
        )
        return result.stdout.strip()

    def fetch_by_labels(self, labels: list[str]) -> list[PullRequest]:
        """List open PRs carrying every label in ``labels``.

        Parameters
        ----------
        labels : list[str]
            Label names; a PR must carry all of them to be returned.

        Returns
        -------
        list[PullRequest]
            PR snapshots in the order gh returned them.

        Raises
        ------
        QueryError
            If gh fails or its output is not a list of PR objects.

        """
        cmd = [
            "gh",
            "pr",
            "list",
            "--repo",
            self.repo,
            "--limit",
            str(self.query_limit),
        ]
        for label in labels:
            cmd.extend(["--label", label])
        cmd.extend(["--json", PR_FIELDS])

        try:
            output = self._run_gh_command(cmd)
        except subprocess.CalledProcessError as e:
            raise QueryError(
                f"gh pr list failed for {self.repo} "
                f"(labels={labels}): {_describe(e)}"
            ) from e
        except OSError as e:
            raise QueryError(f"Unable to run gh: {e}") from e

        try:
            data = json.loads(output)
        except json.JSONDecodeError as e:
            raise QueryError(f"gh pr list returned invalid JSON: {e}") from e

        if not isinstance(data, list):
            raise QueryError(
                f"gh pr list returned {type(data).__name__}, expected a list"
            )

        try:
            return [PullRequest.from_dict(item) for item in data]
        except (KeyError, TypeError, ValueError) as e:
            raise QueryError(f"Unexpected PR payload from gh pr list: {e}") from e

    def add_label(self, pr_number: int, label: str) -> None:
        """Add ``label`` to PR ``pr_number``.

        Raises
        ------
        MutationError
            If the gh call fails.

        """
        self._edit_labels(pr_number, "--add-label", label)

    def remove_label(self, pr_number: int, label: str) -> None:
        """Remove ``label`` from PR ``pr_number``.

        Raises
        ------
        MutationError
            If the gh call fails.

        """
        self._edit_labels(pr_number, "--remove-label", label)

    def _edit_labels(self, pr_number: int, flag: str, label: str) -> None:
        try:
            self._run_gh_command(
                [
                    "gh",
                    "pr",
                    "edit",
                    str(pr_number),
                    "--repo",
                    self.repo,
                    flag,
                    label,
                ]
            )
        except subprocess.CalledProcessError as e:
            raise MutationError(
                f"gh pr edit {flag} {label!r} failed for "
                f"{self.repo}#{pr_number}: {_describe(e)}"
            ) from e
        except OSError as e:
            raise MutationError(f"Unable to run gh: {e}") from e


def _describe(error: subprocess.CalledProcessError) -> str:
    stderr = (error.stderr or "").strip()
    return stderr or f"exit status {error.returncode}"
