"""
Group Registry

Read-only view over the configured reviewer groups.

Group keys used by selection rules:
- "backend-team"       → members of that group
- "*"                  → members of every group
- "!frontend,ops"      → members of every group except the listed ones

Unknown group names resolve to an empty pool, never an error.
"""
from typing import Iterable, List, Optional

from lib.data_types import Group
from lib.env_constants import ALL_GROUPS_KEY, EXCLUDE_GROUPS_PREFIX


class GroupRegistry:
    def __init__(self, groups: Iterable[Group]) -> None:
        self._groups = list(groups)

    @property
    def group_names(self) -> List[str]:
        return [group.name for group in self._groups]

    def author_group(self, author: Optional[str]) -> Optional[str]:
        """
        Return the first configured group the author belongs to.

        Configuration order matters: an author listed in several groups is
        only ever matched to the first one.
        """
        if author is None:
            return None
        for group in self._groups:
            if author in group.usernames:
                return group.name
        return None

    def resolve_group_key(self, group_key: str) -> List[str]:
        """Translate a group key into the names of the groups it targets"""
        if group_key == ALL_GROUPS_KEY:
            return self.group_names

        if group_key.startswith(EXCLUDE_GROUPS_PREFIX):
            excluded = set(
                name.strip()
                for name in group_key[len(EXCLUDE_GROUPS_PREFIX):].split(",")
            )
            return [name for name in self.group_names if name not in excluded]

        return [group_key]

    def candidates_for_keys(self, group_names: Iterable[str]) -> List[str]:
        """Flatten the usernames of the named groups, keeping duplicates."""
        candidates: List[str] = []
        for group_name in group_names:
            group = next(
                (group for group in self._groups if group.name == group_name),
                None,
            )
            if group is not None:
                candidates.extend(group.usernames)
        return candidates

    def candidates_for(self, group_key: str) -> List[str]:
        return self.candidates_for_keys(self.resolve_group_key(group_key))
