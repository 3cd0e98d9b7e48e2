"""Tests for the fixtures listing view model"""
import math
from datetime import date
from types import SimpleNamespace

import pytest

from clubsite.exceptions import StoreReadError
from clubsite.fixtures import (
    NO_FILTERED_MATCHES_MESSAGE, NO_MATCHES_MESSAGE, FixturesViewModel, Paginator, team_roster,
)


def make_match(i, team1="Prague Spartans", team2="Brno CC", result="will be played"):
    return SimpleNamespace(id=i, team1=team1, team2=team2, result=result, date=date(2025, 5, 1))


@pytest.fixture
def mixed_matches():
    """Eight matches across four opponents and all result categories"""
    return [
        make_match(1, "Prague Spartans", "Brno CC", "win"),
        make_match(2, "Vienna CC", "Prague Spartans", "loss"),
        make_match(3, "Prague Spartans", "Dresden CC", "draw"),
        make_match(4, "Brno CC", "Vienna CC", "win"),
        make_match(5, "Prague Spartans", "Vinohrady CC", "will be played"),
        make_match(6, "Dresden CC", "Brno CC", "will be played"),
        make_match(7, "Prague Spartans", "Vienna CC", "win"),
        make_match(8, "Vinohrady CC", "Dresden CC", "loss"),
    ]


def loaded(matches, page_size=12):
    vm = FixturesViewModel(page_size=page_size)
    vm.set_matches(matches)
    return vm


class TestFilters:
    """Result and team predicates"""

    def test_defaults_keep_everything_in_order(self, mixed_matches):
        vm = loaded(mixed_matches)
        assert vm.result_filter == "all"
        assert vm.team_filter == "all"
        assert vm.current_page == 1
        assert vm.filtered_matches == mixed_matches

    @pytest.mark.parametrize("result_filter", ["all", "win", "loss", "draw", "upcoming"])
    def test_filtered_is_ordered_subset(self, mixed_matches, result_filter):
        vm = loaded(mixed_matches)
        vm.set_result_filter(result_filter)
        ids = [m.id for m in vm.filtered_matches]
        assert ids == sorted(ids)
        assert set(ids) <= {m.id for m in mixed_matches}

    def test_upcoming_means_will_be_played(self, mixed_matches):
        vm = loaded(mixed_matches)
        vm.set_result_filter("upcoming")
        assert [m.id for m in vm.filtered_matches] == [5, 6]

    def test_literal_result_category(self, mixed_matches):
        vm = loaded(mixed_matches)
        vm.set_result_filter("win")
        assert [m.id for m in vm.filtered_matches] == [1, 4, 7]
        vm.set_result_filter("draw")
        assert [m.id for m in vm.filtered_matches] == [3]

    def test_team_filter_matches_either_column(self, mixed_matches):
        vm = loaded(mixed_matches)
        vm.set_team_filter("Vienna CC")
        assert [m.id for m in vm.filtered_matches] == [2, 4, 7]

    def test_team_filter_is_case_sensitive(self, mixed_matches):
        vm = loaded(mixed_matches)
        vm.set_team_filter("vienna cc")
        assert vm.filtered_matches == []

    def test_combined_filters_intersect(self, mixed_matches):
        vm = loaded(mixed_matches)
        vm.set_result_filter("win")
        vm.set_team_filter("Prague Spartans")
        assert [m.id for m in vm.filtered_matches] == [1, 7]

    def test_unknown_result_filter_rejected(self, mixed_matches):
        vm = loaded(mixed_matches)
        with pytest.raises(ValueError):
            vm.set_result_filter("abandoned")

    def test_unknown_team_gives_empty_result(self, mixed_matches):
        vm = loaded(mixed_matches)
        vm.set_team_filter("Vanguards")
        assert vm.filtered_matches == []
        assert vm.total_pages == 0
        assert vm.visible_page == []
        assert vm.empty_message == NO_FILTERED_MATCHES_MESSAGE


class TestPagination:
    """Page slicing and navigation"""

    def test_fourteen_records_five_wins(self):
        matches = [make_match(i, result="win" if i < 5 else "loss") for i in range(14)]
        vm = loaded(matches)
        vm.set_result_filter("win")
        assert vm.total_pages == 1
        assert len(vm.visible_page) == 5

    def test_twenty_five_records(self):
        vm = loaded([make_match(i) for i in range(25)])
        assert vm.total_pages == 3
        sizes = []
        for n in vm.page_numbers:
            vm.paginate(n)
            sizes.append(len(vm.visible_page))
        assert sizes == [12, 12, 1]

    @pytest.mark.parametrize("count,page_size", [(0, 12), (1, 12), (12, 12), (13, 12), (30, 7)])
    def test_pages_rebuild_filtered_list(self, count, page_size):
        vm = loaded([make_match(i) for i in range(count)], page_size=page_size)
        assert vm.total_pages == math.ceil(count / page_size)
        rebuilt = []
        for n in vm.page_numbers:
            vm.paginate(n)
            assert len(vm.visible_page) <= page_size
            rebuilt.extend(vm.visible_page)
        assert rebuilt == vm.filtered_matches

    def test_filter_change_resets_page(self, mixed_matches):
        vm = loaded(mixed_matches * 3, page_size=5)
        vm.paginate(3)
        vm.set_result_filter("win")
        assert vm.current_page == 1
        vm.paginate(2)
        vm.set_team_filter("Brno CC")
        assert vm.current_page == 1

    def test_fresh_fetch_resets_page(self, mixed_matches):
        vm = loaded(mixed_matches * 3, page_size=5)
        vm.paginate(4)
        vm.set_matches(mixed_matches)
        assert vm.current_page == 1

    def test_prev_and_next_stop_at_the_ends(self):
        vm = loaded([make_match(i) for i in range(25)])
        vm.prev_page()
        assert vm.current_page == 1
        assert not vm.has_prev
        vm.next_page()
        vm.next_page()
        assert vm.current_page == 3
        assert not vm.has_next
        vm.next_page()
        assert vm.current_page == 3

    def test_paginator_rejects_zero_page_size(self):
        with pytest.raises(ValueError):
            Paginator(0)


class TestRoster:
    """Team names offered by the team filter"""

    def test_sorted_distinct_names_from_both_columns(self, mixed_matches):
        assert team_roster(mixed_matches) == [
            "Brno CC", "Dresden CC", "Prague Spartans", "Vienna CC", "Vinohrady CC",
        ]

    def test_roster_ignores_filters(self, mixed_matches):
        vm = loaded(mixed_matches)
        before = list(vm.teams)
        vm.set_team_filter("Dresden CC")
        vm.set_result_filter("loss")
        assert vm.teams == before


class TestFetch:
    """Fetch outcomes"""

    def test_empty_table(self):
        vm = FixturesViewModel().load(lambda: [])
        assert vm.error is None
        assert vm.total_pages == 0
        assert vm.empty_message == NO_MATCHES_MESSAGE

    def test_failed_fetch_drops_previous_records(self, mixed_matches):
        vm = loaded(mixed_matches)

        def failing():
            raise StoreReadError("Failed to load matches")

        vm.load(failing)
        assert vm.error
        assert vm.all_matches == []
        assert vm.visible_page == []
        assert vm.teams == []
        assert vm.empty_message is None

    def test_successful_fetch_clears_error(self, mixed_matches):
        vm = FixturesViewModel()
        vm.fail("boom")
        vm.load(lambda: mixed_matches)
        assert vm.error is None
        assert len(vm.filtered_matches) == len(mixed_matches)
