"""Tests for the admission policy."""

import pytest

from release_automerge.auto_merger import (
    Label,
    PullRequest,
    filter_eligible,
    promotion_budget,
    select_promotions,
)

PREFIX = "chore(main): Release plugins-"


def make_pr(number, title=None, labels=("autorelease: pending",)):
    """Build a PR snapshot with the given label names."""
    return PullRequest(
        id=f"PR_{number}",
        number=number,
        title=title if title is not None else f"{PREFIX}pkg-{number}",
        labels=tuple(Label(id=f"L_{name}", name=name) for name in labels),
    )


class TestFilterEligible:
    """Test the eligibility filter."""

    def test_mixed_release_prs(self):
        """Test prefix and wip filtering on a mixed pending list."""
        foo = make_pr(1, "chore(main): Release plugins-foo")
        core = make_pr(2, "chore(main): Release core-foo")
        wip = make_pr(
            3, "chore(main): Release plugins-bar", ("autorelease: pending", "wip")
        )

        assert filter_eligible([foo, core, wip]) == [foo]

    @pytest.mark.parametrize("label", ["wip", "automerge", "no automerge"])
    def test_excluded_labels(self, label):
        """Test that each exclusion label disqualifies a PR."""
        pr = make_pr(1, labels=("autorelease: pending", label))
        assert filter_eligible([pr]) == []

    def test_exclusion_label_position_does_not_matter(self):
        """Test exclusion regardless of where the label appears."""
        first = make_pr(1, labels=("no automerge", "autorelease: pending"))
        last = make_pr(2, labels=("autorelease: pending", "docs", "wip"))
        assert filter_eligible([first, last]) == []

    def test_wrong_prefix_excluded_even_without_labels(self):
        """Test that non-matching titles are ignored."""
        prs = [
            make_pr(1, "Release plugins-foo"),
            make_pr(2, "chore(main): release plugins-foo"),
            make_pr(3, " chore(main): Release plugins-foo"),
        ]
        assert filter_eligible(prs) == []

    def test_preserves_query_order(self):
        """Test that output keeps the input order."""
        prs = [make_pr(n) for n in (42, 7, 13, 1)]
        assert [pr.number for pr in filter_eligible(prs)] == [42, 7, 13, 1]

    def test_idempotent(self):
        """Test that filtering twice yields the same result."""
        prs = [
            make_pr(1),
            make_pr(2, labels=("wip",)),
            make_pr(3, "chore(main): Release core-x"),
            make_pr(4),
        ]
        once = filter_eligible(prs)
        assert filter_eligible(prs) == once
        assert filter_eligible(once) == once

    def test_unrelated_labels_are_ignored(self):
        """Test that labels outside the exclusion set do not matter."""
        pr = make_pr(1, labels=("autorelease: pending", "release", "automerge-later"))
        assert filter_eligible([pr]) == [pr]

    def test_custom_prefix_and_exclusions(self):
        """Test overriding the prefix and exclusion set."""
        core = make_pr(1, "chore(main): Release core-foo", ("hold",))
        plugin = make_pr(2, "chore(main): Release core-bar")

        result = filter_eligible(
            [core, plugin],
            title_prefix="chore(main): Release core-",
            excluded_labels=["hold"],
        )
        assert result == [plugin]

    def test_empty_input(self):
        """Test that an empty pending list yields no candidates."""
        assert filter_eligible([]) == []


class TestPromotionBudget:
    """Test remaining capacity computation."""

    @pytest.mark.parametrize(
        ("queued", "ceiling", "expected"),
        [(0, 5, 5), (4, 5, 1), (5, 5, 0), (7, 5, 0), (0, 0, 0)],
    )
    def test_budget(self, queued, ceiling, expected):
        """Test budget is ceiling minus queued, floored at zero."""
        assert promotion_budget(queued, ceiling) == expected


class TestSelectPromotions:
    """Test promotion selection."""

    def test_fills_empty_queue_up_to_ceiling(self):
        """Test 7 eligible with nothing queued promotes the first 5."""
        eligible = [make_pr(n) for n in range(1, 8)]
        result = select_promotions(eligible, already_queued=0, ceiling=5)
        assert result == eligible[:5]

    def test_promotes_remaining_capacity(self):
        """Test 3 eligible with 4 queued promotes exactly the first one."""
        eligible = [make_pr(n) for n in range(1, 4)]
        result = select_promotions(eligible, already_queued=4, ceiling=5)
        assert result == [eligible[0]]

    def test_full_queue_promotes_nothing(self):
        """Test 3 eligible with 5 queued promotes nothing."""
        eligible = [make_pr(n) for n in range(1, 4)]
        assert select_promotions(eligible, already_queued=5, ceiling=5) == []

    def test_over_full_queue_promotes_nothing(self):
        """Test externally over-filled queue promotes nothing."""
        eligible = [make_pr(n) for n in range(1, 4)]
        assert select_promotions(eligible, already_queued=9, ceiling=5) == []

    def test_fewer_eligible_than_budget(self):
        """Test that all eligible PRs are promoted when capacity allows."""
        eligible = [make_pr(n) for n in range(1, 3)]
        assert select_promotions(eligible, already_queued=1, ceiling=5) == eligible

    def test_no_eligible(self):
        """Test that nothing is promoted from an empty candidate list."""
        assert select_promotions([], already_queued=0, ceiling=5) == []

    @pytest.mark.parametrize("count", range(0, 9))
    @pytest.mark.parametrize("queued", range(0, 8))
    def test_bounds_and_order(self, count, queued):
        """Test count bounds and order preservation across inputs."""
        ceiling = 5
        eligible = [make_pr(n) for n in range(100, 100 + count)]

        result = select_promotions(eligible, already_queued=queued, ceiling=ceiling)

        assert len(result) <= max(0, ceiling - queued)
        assert len(result) <= len(eligible)
        assert result == eligible[: len(result)]

    def test_does_not_mutate_input(self):
        """Test that selection leaves the candidate list untouched."""
        eligible = [make_pr(n) for n in range(1, 8)]
        snapshot = list(eligible)
        select_promotions(eligible, already_queued=2, ceiling=5)
        assert eligible == snapshot
