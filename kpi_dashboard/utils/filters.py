"""Team filter state: which cached teams are still available and which are selected."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from kpi_dashboard.utils.constants import ALL_TEAMS_OPTION, TEAM_NAME_SEPARATOR

logger = logging.getLogger("kpi_dashboard")


@dataclass
class TeamFilter:
    """Moves teams between ``available`` and ``selected``.

    ``query_value`` is what gets sent as the service's team filter: the selected
    names joined by ", ", or "" (no filter) after "Choose All" or when nothing is
    selected.

    Usage:
        if 'team_filter' not in st.session_state:
            st.session_state.team_filter = TeamFilter.from_cache(load_team_names(store))
    """

    available: List[str] = field(default_factory=list)
    selected: List[str] = field(default_factory=list)
    all_chosen: bool = False

    @classmethod
    def from_cache(cls, team_names: Optional[List[str]]) -> "TeamFilter":
        return cls(available=list(team_names or []))

    def select(self, team: str) -> bool:
        """Select one team, or every available team for the "all" sentinel.

        Returns:
            True if anything moved, False for unknown or already-selected teams.
        """
        if team == ALL_TEAMS_OPTION:
            if not self.available:
                return False
            self.selected = self.selected + self.available
            self.available = []
            self.all_chosen = True
            return True

        if team not in self.available:
            logger.debug(f"Ignoring selection of unavailable team '{team}'")
            return False
        self.available = [t for t in self.available if t != team]
        self.selected = self.selected + [team]
        self.all_chosen = False
        return True

    def remove(self, team: str) -> bool:
        """Move a selected team back to the end of the available list."""
        if team not in self.selected:
            return False
        self.selected = [t for t in self.selected if t != team]
        self.available = self.available + [team]
        self.all_chosen = False
        return True

    def reset(self, team_names: Optional[List[str]]) -> None:
        self.available = list(team_names or [])
        self.selected = []
        self.all_chosen = False

    @property
    def query_value(self) -> str:
        if self.all_chosen:
            return ""
        return TEAM_NAME_SEPARATOR.join(self.selected)

    @property
    def has_options(self) -> bool:
        return bool(self.available or self.selected)
