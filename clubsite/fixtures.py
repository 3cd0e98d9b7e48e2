# clubsite/fixtures.py
"""Fixtures listing: filtering and pagination over fetched match records.

`FixturesViewModel` holds the last fetched list plus the filter and page
state of the fixtures page and derives what the page renders: the visible
slice, the page count and the team names offered by the team filter.

A failed fetch leaves the model in an error state with no records; the
previous list is dropped and nothing is substituted for it.
"""
import logging
import math
from typing import Callable, Iterable, List, Optional, Sequence

from .exceptions import StoreError

logger = logging.getLogger(__name__)

ALL = "all"
UPCOMING = "upcoming"
RESULT_FILTERS = (ALL, "win", "loss", "draw", UPCOMING)
UPCOMING_RESULT = "will be played"
DEFAULT_PAGE_SIZE = 12

NO_MATCHES_MESSAGE = "No matches found."
NO_FILTERED_MATCHES_MESSAGE = "No matches found for the selected filters."


def matches_result(match, result_filter: str) -> bool:
    if result_filter == UPCOMING:
        return match.result == UPCOMING_RESULT
    if result_filter == ALL:
        return True
    return match.result == result_filter

def matches_team(match, team_filter: str) -> bool:
    if team_filter == ALL:
        return True
    return match.team1 == team_filter or match.team2 == team_filter

def team_roster(matches: Iterable) -> List[str]:
    """Sorted distinct team names across both team columns."""
    names = set()
    for m in matches:
        names.add(m.team1)
        names.add(m.team2)
    return sorted(names)


class Paginator:
    """Fixed-size pages over a sequence, 1-based."""

    def __init__(self, page_size: int = DEFAULT_PAGE_SIZE):
        if page_size < 1:
            raise ValueError("page_size must be at least 1")
        self.page_size = page_size
        self.current_page = 1

    def total_pages(self, count: int) -> int:
        return math.ceil(count / self.page_size)

    def page(self, items: Sequence) -> list:
        start = (self.current_page - 1) * self.page_size
        return list(items[start:start + self.page_size])

    def reset(self) -> None:
        self.current_page = 1


class FixturesViewModel:
    def __init__(self, page_size: int = DEFAULT_PAGE_SIZE):
        self.paginator = Paginator(page_size)
        self.all_matches: list = []
        self.teams: List[str] = []
        self.result_filter = ALL
        self.team_filter = ALL
        self.error: Optional[str] = None
        self.loaded = False
        self.filtered_matches: list = []

    # ----- fetch -----
    def load(self, fetch: Callable[[], Iterable]) -> "FixturesViewModel":
        """Replace the records with the result of `fetch`, or enter the error state."""
        try:
            matches = fetch()
        except StoreError as e:
            logger.error(f"Error loading matches: {e}")
            self.fail("Failed to load matches. Please try again later.")
            return self
        self.set_matches(matches)
        return self

    def set_matches(self, matches: Iterable) -> None:
        self.all_matches = list(matches or [])
        self.teams = team_roster(self.all_matches)
        self.error = None
        self.loaded = True
        self.paginator.reset()
        self._refilter()

    def fail(self, message: str) -> None:
        self.all_matches = []
        self.teams = []
        self.error = message
        self.loaded = True
        self.paginator.reset()
        self._refilter()

    # ----- filters -----
    def set_result_filter(self, value: str) -> None:
        if value not in RESULT_FILTERS:
            raise ValueError(f"Unknown result filter {value!r}")
        if value != self.result_filter:
            self.result_filter = value
            self.paginator.reset()
            self._refilter()

    def set_team_filter(self, value: str) -> None:
        if value != self.team_filter:
            self.team_filter = value
            self.paginator.reset()
            self._refilter()

    def _refilter(self) -> None:
        self.filtered_matches = [
            m for m in self.all_matches
            if matches_result(m, self.result_filter) and matches_team(m, self.team_filter)
        ]

    # ----- pagination -----
    @property
    def page_size(self) -> int:
        return self.paginator.page_size

    @property
    def current_page(self) -> int:
        return self.paginator.current_page

    @property
    def total_pages(self) -> int:
        return self.paginator.total_pages(len(self.filtered_matches))

    @property
    def visible_page(self) -> list:
        return self.paginator.page(self.filtered_matches)

    def paginate(self, page_number: int) -> None:
        # Callers pass in-range values (page buttons, prev/next).
        self.paginator.current_page = page_number

    def prev_page(self) -> None:
        if self.has_prev:
            self.paginate(self.current_page - 1)

    def next_page(self) -> None:
        if self.has_next:
            self.paginate(self.current_page + 1)

    @property
    def has_prev(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def page_numbers(self) -> List[int]:
        return list(range(1, self.total_pages + 1))

    # ----- display state -----
    @property
    def is_filtered(self) -> bool:
        return self.result_filter != ALL or self.team_filter != ALL

    @property
    def empty_message(self) -> Optional[str]:
        if self.error or self.filtered_matches:
            return None
        if self.is_filtered:
            return NO_FILTERED_MATCHES_MESSAGE
        return NO_MATCHES_MESSAGE
