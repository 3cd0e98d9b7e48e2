# clubsite/seed.py
import logging
import os
from datetime import date, timedelta

from .app import create_app
from .auth import hash_password
from .models import db, CommitteeMember, Match, Player, Practice, Sponsor, User

logger = logging.getLogger(__name__)


def seed_admin(email: str, password: str, full_name: str = "Club Admin") -> User:
    """Create the first admin, or promote an existing user with that email."""
    email = email.strip().lower()
    u = User.query.filter_by(email=email).first()
    if not u:
        u = User(email=email, password_hash=hash_password(password), full_name=full_name, is_admin=True)
        db.session.add(u)
    else:
        u.is_admin = True
    db.session.commit()
    return u

def seed_sample_data(today: date = None) -> None:
    today = today or date.today()

    # --- Committee ---
    committee = [
        ("Sarah Johnson", "President"),
        ("John Smith", "Chairman"),
        ("Mike Davis", "Secretary"),
        ("Emma Wilson", "Treasurer"),
        ("Robert Lee", "Manager"),
    ]
    for name, position in committee:
        if not CommitteeMember.query.filter_by(name=name, position=position).first():
            db.session.add(CommitteeMember(name=name, position=position))

    # --- Players ---
    players = [
        ("Arjun Mehta", "arjun@example.com", 29, "batsman", "captain", "Spartans A"),
        ("Tomas Novak", "tomas@example.com", 31, "allrounder", "vice-captain", "Spartans A"),
        ("Imran Qureshi", "imran@example.com", 24, "bowler", "player", "Spartans A"),
        ("Daniel Cerny", "daniel@example.com", 27, "wicketkeeper", "player", "Spartans A"),
        ("Ravi Patel", "ravi@example.com", 35, "batsman", "captain", "Spartans B"),
        ("Ondrej Svoboda", "ondrej@example.com", 22, "bowler", "player", "Spartans B"),
    ]
    for name, email, age, ptype, role, team in players:
        if not Player.query.filter_by(name=name, team=team).first():
            db.session.add(Player(name=name, email=email, age=age, player_type=ptype, role=role, team=team))

    # --- Matches (two played, three to come) ---
    mdata = [
        ("Prague Spartans", "Prague Eagles", today - timedelta(days=14), "14:00", "Prague Cricket Ground", "league", "win", "Division 1"),
        ("Vienna CC", "Prague Spartans", today - timedelta(days=7), "13:30", "Seebarn Cricket Ground", "friendly", "loss", "Friendly"),
        ("Prague Spartans", "Brno CC", today + timedelta(days=7), "14:30", "Prague Cricket Ground", "league", "will be played", "Division 1"),
        ("Dresden CC", "Prague Spartans", today + timedelta(days=14), "13:00", "Dresden Cricket Field", "friendly", "will be played", "Friendly"),
        ("Prague Spartans", "Vinohrady CC", today + timedelta(days=21), "15:00", "Prague Cricket Ground", "league", "will be played", "Division 1"),
    ]
    for team1, team2, d, t, venue, mtype, result, division in mdata:
        if not Match.query.filter_by(team1=team1, team2=team2, date=d).first():
            db.session.add(Match(team1=team1, team2=team2, date=d, time=t, venue=venue,
                                 type=mtype, result=result, division=division))

    # --- Practices ---
    for offset, t, ptype in ((2, "18:00", "Nets"), (4, "18:00", "Fielding drills"), (9, "10:00", "Match simulation")):
        d = today + timedelta(days=offset)
        if not Practice.query.filter_by(date=d, time=t).first():
            db.session.add(Practice(date=d, time=t, venue="Prague Cricket Ground", type=ptype,
                                    first_team="Spartans A", second_team="Spartans B"))

    # --- Sponsors ---
    if not Sponsor.query.filter_by(name="Vltava Brewing").first():
        db.session.add(Sponsor(name="Vltava Brewing", website_url="https://example.com",
                               logo_url="https://example.com/logo.png",
                               description="Official drinks partner"))

    db.session.commit()


if __name__ == "__main__":
    app = create_app()
    with app.app_context():
        seed_sample_data()
        admin_email = os.getenv("CLUB_ADMIN_EMAIL")
        admin_password = os.getenv("CLUB_ADMIN_PASSWORD")
        if admin_email and admin_password:
            seed_admin(admin_email, admin_password)
            logger.info(f"Admin account ready for {admin_email}")
    logger.info("Seeded committee, players, matches, practices, and sponsors.")
