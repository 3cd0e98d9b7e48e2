# clubsite/forms.py
"""Form parsing for the public application form and the admin screens.

Each `parse_*` function takes a request form mapping and returns the column
values to write, or raises `ValidationError` with one message per bad
field. Nothing here touches the store.
"""
from datetime import datetime, date, time
from typing import Dict, Mapping, Optional

from .exceptions import ValidationError
from .models import MATCH_RESULTS, PLAYER_ROLES, PLAYER_TYPES

MIN_APPLICANT_AGE = 10
MAX_APPLICANT_AGE = 80

# Helpers
def parse_date(s: Optional[str]) -> Optional[date]:
    if not s:
        return None
    return datetime.strptime(s, "%Y-%m-%d").date()

def parse_time(s: Optional[str]) -> Optional[time]:
    if not s:
        return None
    return datetime.strptime(s, "%H:%M").time()


class _Reader:
    """Collects field errors while values are read off a form."""

    def __init__(self, form: Mapping[str, str]):
        self.form = form
        self.errors: Dict[str, str] = {}

    def text(self, name: str, required: bool = True, label: Optional[str] = None) -> str:
        value = (self.form.get(name) or "").strip()
        if required and not value:
            self.errors[name] = f"{label or name.replace('_', ' ').capitalize()} is required."
        return value

    def optional(self, name: str) -> Optional[str]:
        value = (self.form.get(name) or "").strip()
        return value or None

    def date(self, name: str) -> Optional[date]:
        raw = self.text(name)
        if not raw:
            return None
        try:
            return parse_date(raw)
        except ValueError:
            self.errors[name] = "Use the format YYYY-MM-DD."
            return None

    def time(self, name: str) -> str:
        raw = self.text(name)
        if not raw:
            return ""
        try:
            return parse_time(raw).strftime("%H:%M")
        except ValueError:
            self.errors[name] = "Use the format HH:MM."
            return raw

    def integer(self, name: str, low: Optional[int] = None, high: Optional[int] = None,
                required: bool = True) -> Optional[int]:
        raw = self.text(name, required=required)
        if not raw:
            return None
        try:
            value = int(raw)
        except ValueError:
            self.errors[name] = "Must be a whole number."
            return None
        if (low is not None and value < low) or (high is not None and value > high):
            self.errors[name] = f"Must be between {low} and {high}."
        return value

    def choice(self, name: str, choices, default: Optional[str] = None) -> str:
        value = (self.form.get(name) or "").strip() or default
        if value not in choices:
            self.errors[name] = "Choose one of: " + ", ".join(choices) + "."
        return value

    def email(self, name: str) -> str:
        value = self.text(name)
        if value and ("@" not in value or value.startswith("@") or value.endswith("@")):
            self.errors[name] = "Enter a valid email address."
        return value

    def done(self, values: dict) -> dict:
        if self.errors:
            raise ValidationError(self.errors)
        return values


def parse_match_form(form: Mapping[str, str]) -> dict:
    r = _Reader(form)
    return r.done({
        "team1": r.text("team1", label="Team 1"),
        "team2": r.text("team2", label="Team 2"),
        "date": r.date("date"),
        "time": r.time("time"),
        "venue": r.text("venue"),
        "type": r.text("type", required=False),
        "result": r.choice("result", MATCH_RESULTS, default="will be played"),
        "division": r.text("division", required=False),
        "url": r.optional("url"),
        "image_url": r.optional("image_url"),
    })

def parse_practice_form(form: Mapping[str, str]) -> dict:
    r = _Reader(form)
    return r.done({
        "date": r.date("date"),
        "time": r.time("time"),
        "venue": r.text("venue"),
        "type": r.text("type", label="Session type"),
        "first_team": r.text("first_team", required=False),
        "second_team": r.text("second_team", required=False),
        "notes": r.optional("notes"),
    })

def parse_player_form(form: Mapping[str, str]) -> dict:
    r = _Reader(form)
    return r.done({
        "name": r.text("name"),
        "email": r.email("email"),
        "age": r.integer("age", low=MIN_APPLICANT_AGE, high=MAX_APPLICANT_AGE),
        "player_type": r.choice("player_type", PLAYER_TYPES, default="batsman"),
        "role": r.choice("role", PLAYER_ROLES, default="player"),
        "team": r.text("team", label="Team"),
    })

def parse_sponsor_form(form: Mapping[str, str]) -> dict:
    r = _Reader(form)
    return r.done({
        "name": r.text("name"),
        "website_url": r.text("website_url", required=False),
        "description": r.text("description", required=False),
    })

def parse_committee_form(form: Mapping[str, str]) -> dict:
    r = _Reader(form)
    return r.done({
        "name": r.text("name"),
        "position": r.text("position"),
    })

def parse_application_form(form: Mapping[str, str]) -> dict:
    r = _Reader(form)
    return r.done({
        "name": r.text("name"),
        "email": r.email("email"),
        "age": r.integer("age", low=MIN_APPLICANT_AGE, high=MAX_APPLICANT_AGE),
        "location": r.text("location"),
        "specification": r.text("specification"),
        "experience": r.text("experience"),
    })
