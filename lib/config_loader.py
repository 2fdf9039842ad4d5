"""
Configuration Loader

Loads the lottery configuration from a YAML file
(.github/reviewer-lottery.yml by default, CONFIG_PATH to override).

Expected format:

    groups:
      - name: backend-team
        usernames: [alice, bob, charlie]
    selection_rules:
      default:
        from: {"*": 1}
      by_author_group:
        - group: backend-team
          from: {backend-team: 2}
      non_group_members:
        from: {backend-team: 1}

Sections that are missing are left empty. A config that cannot be read
falls back to an empty configuration, which selects nobody.
"""
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from lib.data_types import (
    AuthorGroupRule,
    Config,
    ConfigError,
    FromClause,
    Group,
    SelectionRules,
)


def load_config_from_file(path: str | Path) -> Config:
    """
    Load and map the YAML configuration at `path`.

    Returns:
        Config with groups and selection rules.
        Falls back to an empty Config if the file is missing or invalid
    """
    try:
        config_path = Path(path)
        if not config_path.is_file():
            raise ConfigError(f"Config file not found: {config_path}")

        with config_path.open("r", encoding="utf-8") as handle:
            try:
                data = yaml.safe_load(handle)
            except yaml.YAMLError as exc:
                raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc

        config = parse_config(data)
        print(
            f"Config loaded: groups={len(config.groups)}, "
            f"rules={'yes' if config.selection_rules else 'no'}"
        )
        return config

    except (ConfigError, ValueError, TypeError) as e:
        print(
            f"Warning: Could not load config: {e}\n"
            "Using an empty configuration: no reviewers will be selected"
        )
        return Config()


def parse_config(data: Any) -> Config:
    """Map already parsed YAML data to a Config."""
    if data is None:
        return Config()
    if not isinstance(data, dict):
        raise ConfigError(
            f"Config root must be a mapping, got {type(data).__name__}"
        )

    return Config(
        groups=_parse_groups(data.get("groups") or []),
        selection_rules=_parse_selection_rules(data.get("selection_rules")),
    )


def _parse_groups(raw_groups: List[Dict[str, Any]]) -> List[Group]:
    return [
        Group(
            name=str(raw_group["name"]),
            usernames=_parse_usernames(raw_group.get("usernames")),
        )
        for raw_group in raw_groups
        if isinstance(raw_group, dict) and raw_group.get("name")
    ]


def _parse_usernames(raw_usernames: Any) -> List[str]:
    """`usernames: alice` is a single user, not a list of characters"""
    if not raw_usernames:
        return []
    if isinstance(raw_usernames, (str, int)):
        return [str(raw_usernames)]
    return [str(name) for name in raw_usernames]


def _parse_selection_rules(raw_rules: Any) -> Optional[SelectionRules]:
    if not isinstance(raw_rules, dict):
        return None

    by_author_group = []
    for raw_rule in raw_rules.get("by_author_group") or []:
        from_clause = _parse_from_clause(raw_rule)
        if isinstance(raw_rule, dict) and from_clause is not None:
            by_author_group.append(
                AuthorGroupRule(
                    group=str(raw_rule.get("group", "")),
                    from_clause=from_clause,
                )
            )

    return SelectionRules(
        default=_parse_from_clause(raw_rules.get("default")),
        by_author_group=by_author_group,
        non_group_members=_parse_from_clause(
            raw_rules.get("non_group_members")
        ),
    )


def _parse_from_clause(raw_rule: Any) -> Optional[FromClause]:
    """{"from": {"backend": 2}} → {"backend": 2}"""
    if not isinstance(raw_rule, dict):
        return None
    raw_clause = raw_rule.get("from")
    if not isinstance(raw_clause, dict):
        return None
    return {str(key): int(count) for key, count in raw_clause.items()}
