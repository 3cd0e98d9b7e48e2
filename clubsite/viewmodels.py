# clubsite/viewmodels.py
"""Read-and-render state for the practices, committee, players and home pages."""
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional

from .exceptions import StoreError
from .models import COMMITTEE_POSITIONS

logger = logging.getLogger(__name__)

POSITION_DESCRIPTIONS = {
    "President": "Serves as the figurehead and leads the club's official functions.",
    "Chairman":  "Chairs committee meetings and oversees the club's direction.",
    "Secretary": "Manages correspondence, keeps records and handles administrative duties.",
    "Treasurer": "Manages the club's finances, budget, and financial reporting.",
    "Manager":   "Oversees team selection, training and cricket operations.",
}
DEFAULT_POSITION_DESCRIPTION = "Serves on the committee for the club."


@dataclass
class ListSection:
    """Fetched rows for one page section, or the reason there are none."""
    items: List[Any] = field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def load(cls, fetch: Callable[[], Iterable], what: str) -> "ListSection":
        try:
            return cls(items=list(fetch() or []))
        except StoreError as e:
            logger.error(f"Error loading {what}: {e}")
            return cls(error=f"Failed to load {what}. Please try again later.")

    @property
    def is_empty(self) -> bool:
        return not self.items


# ----- committee -----
def position_rank(position: str) -> int:
    if position in COMMITTEE_POSITIONS:
        return COMMITTEE_POSITIONS.index(position)
    return len(COMMITTEE_POSITIONS)

def position_description(position: str) -> str:
    return POSITION_DESCRIPTIONS.get(position, DEFAULT_POSITION_DESCRIPTION)

@dataclass
class CommitteeTree:
    president: Optional[Any] = None
    chairman: Optional[Any] = None
    others: List[Any] = field(default_factory=list)

def committee_tree(members: Iterable) -> CommitteeTree:
    """Arrange members as President -> Chairman -> everyone else.

    The rest are ordered Secretary, Treasurer, Manager, then free-text
    positions in fetched order. A second President or Chairman falls into
    the rest.
    """
    tree = CommitteeTree()
    rest = []
    for m in members:
        if m.position == "President" and tree.president is None:
            tree.president = m
        elif m.position == "Chairman" and tree.chairman is None:
            tree.chairman = m
        else:
            rest.append(m)
    tree.others = sorted(rest, key=lambda m: position_rank(m.position))
    return tree


# ----- players -----
@dataclass
class TeamRoster:
    team: str
    captains: List[Any] = field(default_factory=list)
    vice_captains: List[Any] = field(default_factory=list)
    players: List[Any] = field(default_factory=list)

def group_players(players: Iterable) -> List[TeamRoster]:
    """Group players by team-group, then by role; teams sorted by name.

    Multiple captains or vice-captains in one team are all kept.
    """
    rosters: Dict[str, TeamRoster] = {}
    for p in players:
        roster = rosters.setdefault(p.team or "", TeamRoster(team=p.team or ""))
        if p.role == "captain":
            roster.captains.append(p)
        elif p.role == "vice-captain":
            roster.vice_captains.append(p)
        else:
            roster.players.append(p)
    return [rosters[k] for k in sorted(rosters)]
