"""Data models and errors for the release automerge loop."""

from dataclasses import dataclass, field
from typing import Any


class AutomergeError(Exception):
    """Base class for fatal automerge loop errors."""


class QueryError(AutomergeError):
    """Raised when a PR list query fails or returns unparsable output."""


class MutationError(AutomergeError):
    """Raised when adding or removing a label on a PR fails."""


@dataclass(frozen=True)
class Label:
    """A label attached to a pull request.

    Parameters
    ----------
    id : str
        Opaque label node ID.
    name : str
        Label name, the only field the admission policy inspects.

    """

    id: str
    name: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Label":
        """Build a label from a ``gh --json labels`` element."""
        return cls(id=_require(data, "id", str), name=_require(data, "name", str))


@dataclass(frozen=True)
class PullRequest:
    """Snapshot of a pull request as returned by ``gh pr list``.

    Snapshots are fetched fresh every cycle and never cached.

    Parameters
    ----------
    id : str
        Opaque PR node ID.
    number : int
        PR number, used for every label mutation.
    title : str
        PR title.
    labels : tuple[Label, ...], optional
        Labels in the order GitHub returned them.

    """

    id: str
    number: int
    title: str
    labels: tuple[Label, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PullRequest":
        """Build a PR snapshot from one element of the ``gh pr list`` output.

        Parameters
        ----------
        data : dict[str, Any]
            Decoded JSON object with ``id``, ``number``, ``title`` and ``labels``.

        Returns
        -------
        PullRequest
            Immutable snapshot.

        Raises
        ------
        TypeError
            If the payload or one of its fields has the wrong type.
        KeyError
            If a required field is missing.

        """
        if not isinstance(data, dict):
            raise TypeError(f"expected object, got {type(data).__name__}")
        # bool is an int subclass; reject it explicitly
        number = _require(data, "number", int)
        if isinstance(number, bool):
            raise TypeError("field 'number' must be int, got bool")

        raw_labels = data.get("labels") or []
        if not isinstance(raw_labels, list):
            raise TypeError("field 'labels' must be a list")
        labels = []
        for raw in raw_labels:
            if not isinstance(raw, dict):
                raise TypeError("label entries must be objects")
            labels.append(Label.from_dict(raw))

        return cls(
            id=_require(data, "id", str),
            number=number,
            title=_require(data, "title", str),
            labels=tuple(labels),
        )

    def has_label(self, name: str) -> bool:
        """Return True if the PR carries a label called ``name``."""
        return any(label.name == name for label in self.labels)


def _require(data: dict[str, Any], key: str, kind: type) -> Any:
    value = data[key]
    if not isinstance(value, kind):
        raise TypeError(
            f"field '{key}' must be {kind.__name__}, got {type(value).__name__}"
        )
    return value
