"""
Reviewer Selector

Computes which additional reviewers to request for a pull request.

SELECTION PROCESS:
1. Find the author's group (first configured group containing them)
2. Resolve the applicable "from" clause (see lib/rule_resolver.py)
3. For every (group key, count) entry of the clause, in order:
   a) Skip the entry if count <= 0 (no rollover to other entries)
   b) Expand the group key into its candidate pool
   c) Net out existing reviewers that are in THIS pool:
      remaining = max(0, count - existing reviewers in the pool)
   d) Pick `remaining` reviewers at random, ignoring:
      - the author
      - everyone already picked in this run
      - EVERY existing reviewer, whatever pool they came from

Quota accounting is local to each pool, exclusion is global. No reviewer is
ever proposed twice and existing reviewers are never proposed again.

EXAMPLE:
Groups: backend [alice, bob, charlie], frontend [diana, eve]
Clause: {"backend": 2, "frontend": 1}
Author: alice, existing reviewers: [bob]

1. backend: 2 wanted, bob already requested → pick 1 from [charlie]
2. frontend: 1 wanted, none requested → pick 1 from [diana, eve]
Result: charlie + diana or eve

The selector holds no state between calls apart from its configuration.
"""
from typing import Iterable, List, Optional, Tuple

from lib.data_types import (
    Config,
    FromClause,
    ReviewerSelectionResult,
    SelectionStep,
)
from lib.group_registry import GroupRegistry
from lib.random_picker import RandomPicker
from lib.rule_resolver import resolve_rule


class SelectionExecutor:
    def __init__(self, registry: GroupRegistry, picker: RandomPicker) -> None:
        self._registry = registry
        self._picker = picker

    def execute(
        self,
        from_clause: FromClause,
        author: Optional[str],
        existing_reviewers: List[str],
    ) -> Tuple[List[str], List[SelectionStep]]:
        selected: List[str] = []
        process: List[SelectionStep] = []

        for group_key, count in from_clause.items():
            if count <= 0:
                continue

            candidates = self._registry.candidates_for(group_key)
            existing_from_group = [
                reviewer
                for reviewer in existing_reviewers
                if reviewer in candidates
            ]
            remaining_needed = max(0, count - len(existing_from_group))

            ignore = set(selected)
            ignore.update(existing_reviewers)
            if author is not None:
                ignore.add(author)

            picks = self._picker.pick(candidates, remaining_needed, ignore)

            process.append(
                SelectionStep(
                    step=len(process) + 1,
                    description=(
                        f"Select {remaining_needed} from {group_key} "
                        f"({len(picks)} selected)"
                    ),
                    group_key=group_key,
                    candidates=candidates,
                    required=remaining_needed,
                    selected=picks,
                )
            )
            selected.extend(picks)

        return selected, process


class ReviewerSelector:
    """
    Entry point of the selection engine.

    Usage:
        selector = ReviewerSelector(config)
        result = selector.select_reviewers("alice", ["bob"])
        result.selected_reviewers  # e.g. ["charlie"]
    """

    def __init__(
        self, config: Config, picker: Optional[RandomPicker] = None
    ) -> None:
        self._config = config
        self._registry = GroupRegistry(config.groups)
        self._executor = SelectionExecutor(
            self._registry, picker or RandomPicker()
        )

    def author_group(self, author: Optional[str]) -> Optional[str]:
        return self._registry.author_group(author)

    def select_reviewers(
        self,
        author: Optional[str],
        existing_reviewers: Optional[Iterable[str]] = None,
    ) -> ReviewerSelectionResult:
        existing = list(existing_reviewers or [])
        applied_rule = resolve_rule(
            self._config.selection_rules, self.author_group(author)
        )

        if applied_rule.is_none:
            return ReviewerSelectionResult()

        selected, process = self._executor.execute(
            applied_rule.rule, author, existing
        )
        return ReviewerSelectionResult(
            selected_reviewers=selected,
            applied_rule=applied_rule,
            process=process,
        )

    def select_reviewers_with_rules(
        self, author: Optional[str], existing_reviewers: Iterable[str] = ()
    ) -> List[str]:
        return self.select_reviewers(
            author, existing_reviewers
        ).selected_reviewers

    def select_from_multiple_groups(
        self,
        from_clause: FromClause,
        author: Optional[str],
        existing_reviewers: Iterable[str] = (),
    ) -> List[str]:
        """Run a clause directly, bypassing rule resolution."""
        selected, _ = self._executor.execute(
            from_clause, author, list(existing_reviewers)
        )
        return selected
