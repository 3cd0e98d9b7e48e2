"""Tests for the public pages"""
from datetime import date, timedelta

import pytest

from clubsite import store
from clubsite.models import db, CommitteeMember, Match, Player, Sponsor, TeamApplication
from clubsite.seed import seed_sample_data


def add_matches(count, result="will be played", team1="Prague Spartans", team2="Brno CC", start=None):
    start = start or date(2025, 5, 1)
    for i in range(count):
        db.session.add(Match(team1=team1, team2=team2,
                             date=start + timedelta(days=i), time="14:00",
                             venue="Prague Cricket Ground", type="league", result=result))
    db.session.commit()


@pytest.mark.parametrize("path", ["/", "/about", "/fixtures", "/practices", "/players", "/committee", "/contact"])
def test_public_pages_render_on_seeded_data(app, client, path):
    seed_sample_data()
    resp = client.get(path)
    assert resp.status_code == 200
    assert b"Prague Spartans Cricket Club" in resp.data


class TestFixturesPage:

    def test_empty_table(self, client):
        resp = client.get("/fixtures")
        assert resp.status_code == 200
        assert b"No matches found." in resp.data

    def test_pages_of_twelve(self, app, client):
        add_matches(25)
        page3 = client.get("/fixtures?page=3").get_data(as_text=True)
        assert page3.count('class="match"') == 1
        page1 = client.get("/fixtures").get_data(as_text=True)
        assert page1.count('class="match"') == 12
        assert 'href="/fixtures?page=2' in page1

    def test_result_filter(self, app, client):
        add_matches(9, result="loss")
        add_matches(5, result="win", start=date(2025, 7, 1))
        body = client.get("/fixtures?result=win").get_data(as_text=True)
        assert body.count('class="match"') == 5

    def test_unknown_team(self, app, client):
        add_matches(3)
        body = client.get("/fixtures?team=Vanguards").get_data(as_text=True)
        assert 'class="match"' not in body
        assert "No matches found for the selected filters." in body

    def test_team_dropdown_lists_all_teams_while_filtered(self, app, client):
        add_matches(2, team2="Brno CC")
        add_matches(2, team2="Vienna CC", start=date(2025, 8, 1))
        body = client.get("/fixtures?team=Vienna+CC").get_data(as_text=True)
        assert body.count('class="match"') == 2
        assert '<option value="Brno CC"' in body
        assert '<option value="Vienna CC" selected' in body

    def test_out_of_range_page_is_clamped(self, app, client):
        add_matches(13)
        body = client.get("/fixtures?page=99").get_data(as_text=True)
        assert body.count('class="match"') == 1

    def test_fetch_failure_shows_error_not_data(self, app, client):
        add_matches(3)
        db.drop_all()
        body = client.get("/fixtures").get_data(as_text=True)
        assert "Failed to load matches" in body
        assert "Try Again" in body
        assert 'class="match"' not in body


def test_home_shows_only_upcoming(app, client):
    today = date.today()
    db.session.add(Match(team1="Prague Spartans", team2="Old Rivals", date=today - timedelta(days=3),
                         time="14:00", venue="Ground", result="win"))
    db.session.add(Match(team1="Prague Spartans", team2="New Rivals", date=today + timedelta(days=3),
                         time="14:00", venue="Ground"))
    db.session.commit()
    body = client.get("/").get_data(as_text=True)
    assert "New Rivals" in body
    assert "Old Rivals" not in body

def test_committee_hierarchy_order(app, client):
    for name, position in (("Treasurer T", "Treasurer"), ("Chair C", "Chairman"), ("Pres P", "President")):
        db.session.add(CommitteeMember(name=name, position=position))
    db.session.commit()
    body = client.get("/committee").get_data(as_text=True)
    assert body.index("Pres P") < body.index("Chair C") < body.index("Treasurer T")

def test_players_page_groups_roles(app, client):
    db.session.add(Player(name="Cap", email="c@example.com", age=30, player_type="batsman",
                          role="captain", team="Spartans A"))
    db.session.add(Player(name="Member", email="m@example.com", age=20, player_type="bowler",
                          role="player", team="Spartans A"))
    db.session.commit()
    body = client.get("/players").get_data(as_text=True)
    assert body.index("Captain") < body.index(">Cap<") < body.index("Team Members") < body.index(">Member<")

def test_home_sponsor_failure_is_inline(app, client):
    Sponsor.__table__.drop(db.engine)
    resp = client.get("/")
    assert resp.status_code == 200
    assert b"Failed to load sponsors" in resp.data


class TestContact:

    FORM = {
        "name": "Jan", "email": "jan@example.com", "age": "27", "location": "Prague",
        "specification": "bowler", "experience": "Club cricket",
    }

    def test_submit(self, app, client):
        resp = client.post("/contact", data=self.FORM, follow_redirects=True)
        assert resp.status_code == 200
        assert b"Your application has been received" in resp.data
        assert [a.status for a in store.get_applications()] == ["pending"]

    def test_invalid_age_sends_nothing(self, app, client):
        resp = client.post("/contact", data=dict(self.FORM, age="old"))
        assert resp.status_code == 400
        assert b"Must be a whole number." in resp.data
        assert b'value="Jan"' in resp.data
        assert TeamApplication.query.count() == 0


def test_sitemap(client):
    resp = client.get("/sitemap.xml")
    assert resp.mimetype == "application/xml"
    assert b"<loc>http://localhost:5000/fixtures</loc>" in resp.data

def test_unknown_page(client):
    assert client.get("/nowhere").status_code == 404
