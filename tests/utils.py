"""Test utilities for building lottery configurations in tests."""

from typing import Dict, List, Optional

from lib.data_types import (
    AuthorGroupRule,
    Config,
    FromClause,
    Group,
    SelectionRules,
)


def make_config(
    groups: Dict[str, List[str]],
    by_author_group: Optional[Dict[str, FromClause]] = None,
    default: Optional[FromClause] = None,
    non_group_members: Optional[FromClause] = None,
) -> Config:
    """
    Build a Config from plain dicts.

    Args:
        groups: Group name → usernames, in configuration order
        by_author_group: Group name → clause, in configuration order
        default: Default clause
        non_group_members: Clause for authors outside every group
    """
    return Config(
        groups=[
            Group(name=name, usernames=list(usernames))
            for name, usernames in groups.items()
        ],
        selection_rules=SelectionRules(
            default=default,
            by_author_group=[
                AuthorGroupRule(group=group, from_clause=clause)
                for group, clause in (by_author_group or {}).items()
            ],
            non_group_members=non_group_members,
        ),
    )
