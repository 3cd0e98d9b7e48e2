"""Tests for table access"""
from datetime import date, timedelta

import pytest

from clubsite import store
from clubsite.exceptions import RecordNotFoundError, StoreReadError, StoreWriteError
from clubsite.models import db, Match, Practice, TeamApplication


def add_match(d, team1="Prague Spartans", team2="Brno CC", result="will be played"):
    return store.insert(Match, {
        "team1": team1, "team2": team2, "date": d, "time": "14:00",
        "venue": "Prague Cricket Ground", "type": "league", "result": result, "division": "Division 1",
    })


class TestReads:

    def test_order_by_date_ascending(self, app):
        add_match(date(2025, 6, 1), team2="C")
        add_match(date(2025, 5, 1), team2="A")
        add_match(date(2025, 5, 15), team2="B")
        assert [m.team2 for m in store.get_all_matches()] == ["A", "B", "C"]

    def test_eq_filter(self, app):
        add_match(date(2025, 5, 1), result="win")
        add_match(date(2025, 5, 2), result="loss")
        rows = store.select(Match, eq={"result": "win"})
        assert [m.result for m in rows] == ["win"]

    def test_upcoming_matches_from_today_with_limit(self, app):
        today = date(2025, 5, 10)
        add_match(today - timedelta(days=1), team2="past")
        for i in range(8):
            add_match(today + timedelta(days=i), team2=f"future-{i}")
        rows = store.get_upcoming_matches(today)
        assert len(rows) == store.UPCOMING_MATCHES_LIMIT
        assert rows[0].team2 == "future-0"
        assert all(m.date >= today for m in rows)

    def test_upcoming_practices_limit(self, app):
        today = date(2025, 5, 10)
        for i in range(5):
            store.insert(Practice, {"date": today + timedelta(days=i), "time": "18:00",
                                    "venue": "Ground", "type": "Nets"})
        assert len(store.get_upcoming_practices(today)) == store.UPCOMING_PRACTICES_LIMIT

    def test_unknown_column_rejected(self, app):
        with pytest.raises(ValueError):
            store.select(Match, eq={"colour": "red"})

    def test_read_failure_raises_store_error(self, app):
        db.drop_all()
        with pytest.raises(StoreReadError):
            store.get_all_matches()


class TestWrites:

    def test_default_result_is_will_be_played(self, app):
        m = store.insert(Match, {"team1": "A", "team2": "B", "date": date(2025, 5, 1), "time": "10:00"})
        assert m.result == "will be played"

    def test_invalid_result_rejected_by_store(self, app):
        with pytest.raises(StoreWriteError):
            add_match(date(2025, 5, 1), result="abandoned")
        # Session is usable again after the rollback
        assert store.get_all_matches() == []

    def test_update_replaces_fields(self, app):
        m = add_match(date(2025, 5, 1))
        store.update(Match, m.id, {"result": "win", "venue": "Away"})
        fresh = store.get(Match, m.id)
        assert (fresh.result, fresh.venue) == ("win", "Away")

    def test_update_missing_row(self, app):
        with pytest.raises(RecordNotFoundError):
            store.update(Match, 999, {"result": "win"})

    def test_delete(self, app):
        m = add_match(date(2025, 5, 1))
        store.delete(Match, m.id)
        assert store.get(Match, m.id) is None
        with pytest.raises(RecordNotFoundError):
            store.delete(Match, m.id)

    def test_application_status_defaults_to_pending(self, app):
        a = store.insert(TeamApplication, {
            "name": "Jan", "email": "jan@example.com", "age": 25, "location": "Prague",
            "specification": "bowler", "experience": "Club cricket",
        })
        assert a.status == "pending"
        assert a.created_at is not None
