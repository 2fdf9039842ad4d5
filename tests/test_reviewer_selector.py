from typing import List

import pytest

from lib.data_types import Config, Group, RuleType
from lib.random_picker import RandomPicker, SeededRandomSource
from lib.reviewer_selector import ReviewerSelector
from tests.utils import make_config


class TestBasicSelection:
    """Single backend team, rule: 2 reviewers from backend-team"""

    def test_excludes_author(self, backend_config: Config) -> None:
        result = ReviewerSelector(backend_config).select_reviewers("alice", [])

        assert len(result.selected_reviewers) == 2
        assert "alice" not in result.selected_reviewers
        assert set(result.selected_reviewers) <= {"bob", "charlie", "diana"}
        assert result.applied_rule.type is RuleType.BY_AUTHOR_GROUP
        assert result.applied_rule.index == 0

    def test_existing_reviewers_net_out_quota(
        self, backend_config: Config
    ) -> None:
        result = ReviewerSelector(backend_config).select_reviewers(
            "alice", ["bob"]
        )

        assert len(result.selected_reviewers) == 1
        assert result.selected_reviewers[0] in {"charlie", "diana"}

    def test_quota_already_met(self, backend_config: Config) -> None:
        result = ReviewerSelector(backend_config).select_reviewers(
            "alice", ["bob", "charlie"]
        )

        assert result.selected_reviewers == []
        assert len(result.process) == 1
        assert result.process[0].required == 0

    def test_process_records_steps(self, backend_config: Config) -> None:
        result = ReviewerSelector(backend_config).select_reviewers(
            "alice", ["bob"]
        )

        step = result.process[0]
        assert step.step == 1
        assert step.group_key == "backend-team"
        assert step.candidates == ["alice", "bob", "charlie", "diana"]
        assert step.required == 1
        assert step.selected == result.selected_reviewers
        assert step.description == "Select 1 from backend-team (1 selected)"

    def test_only_author_available(self) -> None:
        config = make_config(
            {"available-team": ["bob"], "author-only-team": ["alice"]},
            by_author_group={
                "author-only-team": {"available-team": 1, "author-only-team": 1}
            },
        )

        result = ReviewerSelector(config).select_reviewers("alice")

        assert result.selected_reviewers == ["bob"]
        assert [step.selected for step in result.process] == [["bob"], []]


class TestGroupKeys:
    def test_wildcard_with_existing_reviewers(
        self, three_groups: List[Group]
    ) -> None:
        config = make_config(
            {group.name: group.usernames for group in three_groups},
            by_author_group={"backend": {"*": 4}},
        )

        result = ReviewerSelector(config).select_reviewers(
            "alice", ["diana", "frank"]
        )

        assert len(result.selected_reviewers) == 2
        assert set(result.selected_reviewers) <= {
            "bob",
            "charlie",
            "eve",
            "george",
        }

    def test_exclusion_key(self, three_groups: List[Group]) -> None:
        config = make_config(
            {group.name: group.usernames for group in three_groups},
            by_author_group={"backend": {"!backend": 10}},
        )

        result = ReviewerSelector(config).select_reviewers("alice")

        assert sorted(result.selected_reviewers) == [
            "diana",
            "eve",
            "frank",
            "george",
        ]

    def test_unknown_group_key_selects_nobody(self) -> None:
        config = make_config(
            {"backend": ["alice", "bob"]},
            default={"does-not-exist": 2},
        )

        result = ReviewerSelector(config).select_reviewers("alice")

        assert result.selected_reviewers == []
        assert result.process[0].candidates == []

    def test_overlapping_keys_never_duplicate(self) -> None:
        config = make_config(
            {
                "frontend-team": ["alice", "bob", "eve"],
                "backend-team": ["charlie", "diana", "eve"],
            },
            by_author_group={
                "frontend-team": {"frontend-team": 2, "backend-team": 2, "*": 5}
            },
        )

        for seed in range(25):
            selector = ReviewerSelector(
                config, RandomPicker(SeededRandomSource(seed))
            )
            selected = selector.select_reviewers_with_rules("eve", [])
            assert len(selected) == len(set(selected))
            assert sorted(selected) == ["alice", "bob", "charlie", "diana"]


class TestQuota:
    @pytest.mark.parametrize("count", [0, -3])
    def test_non_positive_quota_is_skipped(self, count: int) -> None:
        config = make_config(
            {"backend": ["alice", "bob", "charlie"], "frontend": ["diana"]},
            default={"backend": count, "frontend": 1},
        )

        result = ReviewerSelector(config).select_reviewers("alice")

        assert result.selected_reviewers == ["diana"]
        assert [step.group_key for step in result.process] == ["frontend"]

    def test_existing_reviewers_netted_per_pool(self) -> None:
        config = make_config(
            {"backend-team": ["alice", "bob", "charlie"],
             "frontend-team": ["diana", "eve", "frank"]},
            by_author_group={
                "backend-team": {"backend-team": 2, "frontend-team": 2}
            },
        )

        result = ReviewerSelector(config).select_reviewers(
            "alice", ["bob", "diana"]
        )

        backend_step, frontend_step = result.process
        assert backend_step.selected == ["charlie"]
        assert frontend_step.required == 1
        assert frontend_step.selected[0] in {"eve", "frank"}
        assert len(result.selected_reviewers) == 2

    def test_existing_reviewer_counts_and_is_not_picked_again(self) -> None:
        config = make_config(
            {"backend": ["bob", "charlie"], "everyone": ["bob", "diana"]},
            default={"everyone": 2},
        )

        result = ReviewerSelector(config).select_reviewers("alice", ["bob"])

        assert result.selected_reviewers == ["diana"]
        assert result.process[0].required == 1


class TestRuleSelection:
    def test_default_fallback(self) -> None:
        config = make_config(
            {"backend": ["alice", "bob"], "frontend": ["charlie", "diana"]},
            by_author_group={"frontend": {"backend": 1}},
            default={"frontend": 1},
        )

        result = ReviewerSelector(config).select_reviewers("alice")

        assert result.applied_rule.type is RuleType.DEFAULT
        assert result.applied_rule.rule == {"frontend": 1}
        assert result.selected_reviewers[0] in {"charlie", "diana"}

    def test_non_group_member(self) -> None:
        config = make_config(
            {"backend-team": ["alice", "bob", "charlie"],
             "frontend-team": ["diana", "eve"]},
            non_group_members={"backend-team": 2, "frontend-team": 1},
        )

        result = ReviewerSelector(config).select_reviewers(
            "external-contributor", ["alice", "diana"]
        )

        assert result.applied_rule.type is RuleType.NON_GROUP_MEMBERS
        assert len(result.selected_reviewers) == 1
        assert result.selected_reviewers[0] in {"bob", "charlie"}

    def test_unknown_author_uses_non_member_branch(self) -> None:
        config = make_config(
            {"backend": ["alice", "bob"]}, non_group_members={"backend": 1}
        )

        result = ReviewerSelector(config).select_reviewers(None)

        assert result.applied_rule.type is RuleType.NON_GROUP_MEMBERS
        assert len(result.selected_reviewers) == 1

    def test_multi_group_author_uses_first_group_only(self) -> None:
        config = make_config(
            {"frontend": ["alice", "bob", "eve"],
             "backend": ["charlie", "diana", "eve"]},
            by_author_group={
                "frontend": {"frontend": 1},
                "backend": {"backend": 2},
            },
        )

        result = ReviewerSelector(config).select_reviewers("eve")

        assert result.applied_rule.index == 0
        assert len(result.selected_reviewers) == 1
        assert result.selected_reviewers[0] in {"alice", "bob"}

    @pytest.mark.parametrize(
        "config",
        [
            Config(groups=[Group(name="backend", usernames=["alice", "bob"])]),
            make_config({"backend": ["alice", "bob"]}),
            make_config({"backend": ["alice", "bob"]}, default={}),
        ],
        ids=[
            "Missing selection rules",
            "No matching clause",
            "Empty clause",
        ],
    )
    def test_no_rule_selects_nobody(self, config: Config) -> None:
        result = ReviewerSelector(config).select_reviewers("alice", ["bob"])

        assert result.selected_reviewers == []
        assert result.applied_rule is None
        assert result.process == []


def test_select_from_multiple_groups(three_groups: List[Group]) -> None:
    selector = ReviewerSelector(Config(groups=three_groups))

    selected = selector.select_from_multiple_groups(
        {"frontend": 1, "ops": 2}, "diana", ["frank"]
    )

    assert selected[0] == "eve"
    assert selected[1:] == ["george"]


@pytest.mark.parametrize("seed", range(30))
def test_selection_invariants(seed: int, three_groups: List[Group]) -> None:
    config = make_config(
        {group.name: group.usernames for group in three_groups},
        by_author_group={"backend": {"backend": 2, "*": 3, "!ops": 2}},
    )
    existing = ["eve"]
    picker = RandomPicker(SeededRandomSource(seed))

    result = ReviewerSelector(config, picker).select_reviewers("alice", existing)

    selected = result.selected_reviewers
    pools = set(
        name for step in result.process for name in step.candidates
    )
    assert "alice" not in selected
    assert not set(selected) & set(existing)
    assert len(selected) == len(set(selected))
    assert set(selected) <= pools


def test_selector_is_stateless_between_calls(backend_config: Config) -> None:
    selector = ReviewerSelector(backend_config)

    first = selector.select_reviewers("alice", [])
    second = selector.select_reviewers("alice", [])

    assert len(first.selected_reviewers) == len(second.selected_reviewers) == 2
    assert len(second.process) == 1
