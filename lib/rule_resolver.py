"""
Rule Resolver

Picks the single "from" clause that applies to a pull request author.

PRECEDENCE:
1. Author not in any group:
   → non_group_members if configured, otherwise default
2. Author in a group (the FIRST configured group they belong to):
   → the first by_author_group entry for that group, otherwise default
3. Nothing configured for that branch, or the clause is empty:
   → no rule, nobody is selected

Only one group is ever considered per author. Rules attached to other groups
the author is also a member of are ignored.
"""
from typing import Optional

from lib.data_types import AppliedRule, RuleType, SelectionRules


def resolve_rule(
    selection_rules: Optional[SelectionRules], author_group: Optional[str]
) -> AppliedRule:
    if selection_rules is None:
        return AppliedRule.no_rule()

    if author_group is None:
        if selection_rules.non_group_members is not None:
            applied = AppliedRule(
                type=RuleType.NON_GROUP_MEMBERS,
                rule=selection_rules.non_group_members,
            )
        else:
            applied = _default_rule(selection_rules)
    else:
        applied = next(
            (
                AppliedRule(
                    type=RuleType.BY_AUTHOR_GROUP,
                    rule=rule.from_clause,
                    index=index,
                )
                for index, rule in enumerate(selection_rules.by_author_group)
                if rule.group == author_group
            ),
            None,
        ) or _default_rule(selection_rules)

    if not applied.rule:
        return AppliedRule.no_rule()
    return applied


def _default_rule(selection_rules: SelectionRules) -> AppliedRule:
    if selection_rules.default is None:
        return AppliedRule.no_rule()
    return AppliedRule(type=RuleType.DEFAULT, rule=selection_rules.default)
