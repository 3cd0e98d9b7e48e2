# clubsite/models.py
from datetime import datetime
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import CheckConstraint, Index

db = SQLAlchemy()

# Enumerations (mirrored by the check constraints below)
MATCH_RESULTS    = ("will be played", "win", "loss", "draw")
PLAYER_TYPES     = ("batsman", "bowler", "allrounder", "wicketkeeper")
PLAYER_ROLES     = ("player", "captain", "vice-captain")
APPLICATION_STATUSES = ("pending", "accepted", "rejected")
COMMITTEE_POSITIONS  = ("President", "Chairman", "Secretary", "Treasurer", "Manager")


def _in_clause(column, values):
    quoted = ",".join("'" + v + "'" for v in values)
    return f"{column} IN ({quoted})"

# Tables

class Match(db.Model):
    __tablename__ = "matches"
    id = db.Column(db.Integer, primary_key=True)

    team1    = db.Column(db.String(120), nullable=False)
    team2    = db.Column(db.String(120), nullable=False)
    date     = db.Column(db.Date, nullable=False, index=True)
    time     = db.Column(db.String(5), nullable=False)   # HH:MM
    venue    = db.Column(db.String(160), nullable=False, default="")
    type     = db.Column(db.String(120), nullable=False, default="")  # e.g., league
    result   = db.Column(db.String(16), nullable=False, default="will be played")
    division = db.Column(db.String(80), nullable=False, default="")
    url       = db.Column(db.String(500), nullable=True)
    image_url = db.Column(db.String(500), nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    __table_args__ = (
        CheckConstraint(_in_clause("result", MATCH_RESULTS), name="ck_match_result"),
        CheckConstraint("team1 <> ''", name="ck_match_team1"),
        CheckConstraint("team2 <> ''", name="ck_match_team2"),
    )

    def __repr__(self):
        return f"<Match id={self.id} {self.team1!r} v {self.team2!r} date={self.date} result={self.result!r}>"

class Practice(db.Model):
    __tablename__ = "practices"
    id = db.Column(db.Integer, primary_key=True)

    date        = db.Column(db.Date, nullable=False, index=True)
    time        = db.Column(db.String(5), nullable=False)
    venue       = db.Column(db.String(160), nullable=False, default="")
    type        = db.Column(db.String(120), nullable=False, default="")  # e.g., nets
    first_team  = db.Column(db.String(120), nullable=False, default="")
    second_team = db.Column(db.String(120), nullable=False, default="")
    notes       = db.Column(db.Text, nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self):
        return f"<Practice id={self.id} date={self.date} time={self.time} venue={self.venue!r}>"

class Player(db.Model):
    __tablename__ = "players"
    id = db.Column(db.Integer, primary_key=True)

    name        = db.Column(db.String(120), nullable=False)
    email       = db.Column(db.String(200), nullable=False, default="")
    age         = db.Column(db.Integer, nullable=True)
    player_type = db.Column(db.String(16), nullable=False, default="batsman")
    role        = db.Column(db.String(16), nullable=False, default="player")
    team        = db.Column(db.String(120), nullable=False, default="", index=True)  # team-group

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    # No uniqueness on (team, role): a team may briefly carry two captains during a handover.
    __table_args__ = (
        CheckConstraint(_in_clause("player_type", PLAYER_TYPES), name="ck_player_type"),
        CheckConstraint(_in_clause("role", PLAYER_ROLES), name="ck_player_role"),
    )

    def __repr__(self):
        return f"<Player id={self.id} name={self.name!r} role={self.role!r} team={self.team!r}>"

class Sponsor(db.Model):
    __tablename__ = "sponsors"
    id = db.Column(db.Integer, primary_key=True)

    name        = db.Column(db.String(160), nullable=False)
    website_url = db.Column(db.String(500), nullable=False, default="")
    logo_url    = db.Column(db.String(500), nullable=False)
    description = db.Column(db.Text, nullable=False, default="")

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self):
        return f"<Sponsor id={self.id} name={self.name!r}>"

class CommitteeMember(db.Model):
    __tablename__ = "committee"
    id = db.Column(db.Integer, primary_key=True)

    name     = db.Column(db.String(120), nullable=False)
    position = db.Column(db.String(80), nullable=False)  # free text outside COMMITTEE_POSITIONS

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self):
        return f"<CommitteeMember id={self.id} name={self.name!r} position={self.position!r}>"

class TeamApplication(db.Model):
    __tablename__ = "team_applications"
    id = db.Column(db.Integer, primary_key=True)

    name          = db.Column(db.String(120), nullable=False)
    email         = db.Column(db.String(200), nullable=False)
    age           = db.Column(db.Integer, nullable=False)
    location      = db.Column(db.String(160), nullable=False)
    specification = db.Column(db.String(120), nullable=False)  # e.g., batsman
    experience    = db.Column(db.Text, nullable=False)
    status        = db.Column(db.String(16), nullable=False, default="pending", index=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    __table_args__ = (
        CheckConstraint(_in_clause("status", APPLICATION_STATUSES), name="ck_application_status"),
    )

    def __repr__(self):
        return f"<TeamApplication id={self.id} name={self.name!r} status={self.status!r}>"

class User(db.Model):
    __tablename__ = "users"
    id = db.Column(db.Integer, primary_key=True)

    email         = db.Column(db.String(200), nullable=False, unique=True)
    password_hash = db.Column(db.String(255), nullable=False)
    full_name     = db.Column(db.String(120), nullable=False, default="")
    is_admin      = db.Column(db.Boolean, nullable=False, default=False)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self):
        return f"<User id={self.id} email={self.email!r} admin={self.is_admin}>"

# Indexes
Index("ix_match_team1_date", Match.team1, Match.date)
Index("ix_match_team2_date", Match.team2, Match.date)

# Serializers
def sponsor_to_dict(s: Sponsor):
    return {
        "id": s.id,
        "name": s.name,
        "website_url": s.website_url,
        "logo_url": s.logo_url,
        "description": s.description,
        "created_at": s.created_at.isoformat() if s.created_at else None,
    }

