# clubsite/admin.py
"""Back office routes.

Every section is the same list / create / edit / delete cycle over one
table. A write is reported as done only after the store commit returns;
when it fails the submitted values are shown again and nothing changes.
"""
import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional, Tuple

from flask import Flask, abort, flash, jsonify, redirect, render_template, request, url_for

from . import store
from .applications import (
    STATUS_FILTERS, InFlightGuard, delete_application, filter_by_status, set_status, status_counts,
)
from .auth import admin_required, admin_required_json, current_session, refresh_session
from .exceptions import (
    InvalidTransitionError, NotAuthenticatedError, RecordBusyError, RecordNotFoundError,
    StoreError, ValidationError,
)
from .forms import (
    parse_committee_form, parse_match_form, parse_player_form, parse_practice_form, parse_sponsor_form,
)
from .models import (
    MATCH_RESULTS, PLAYER_ROLES, PLAYER_TYPES,
    CommitteeMember, Match, Player, Practice, Sponsor, TeamApplication, sponsor_to_dict,
)
from .storage import delete_logo, save_logo
from .viewmodels import ListSection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Field:
    name: str
    label: str
    kind: str = "text"  # text | date | time | number | email | url | textarea | select
    choices: Tuple[str, ...] = ()
    required: bool = True


@dataclass(frozen=True)
class Section:
    name: str
    title: str
    model: type
    parse: Callable
    fetch: Callable
    fields: Tuple[Field, ...]
    columns: Tuple[str, ...]


SECTIONS = {
    s.name: s for s in (
        Section(
            name="matches", title="Matches", model=Match, parse=parse_match_form,
            fetch=store.get_all_matches,
            fields=(
                Field("team1", "Team 1"),
                Field("team2", "Team 2"),
                Field("date", "Date", "date"),
                Field("time", "Time", "time"),
                Field("venue", "Venue"),
                Field("type", "Competition type", required=False),
                Field("result", "Result", "select", MATCH_RESULTS),
                Field("division", "Division", required=False),
                Field("url", "Match URL", "url", required=False),
                Field("image_url", "Image URL", "url", required=False),
            ),
            columns=("date", "time", "team1", "team2", "venue", "division", "result"),
        ),
        Section(
            name="practices", title="Practices", model=Practice, parse=parse_practice_form,
            fetch=store.get_all_practices,
            fields=(
                Field("date", "Date", "date"),
                Field("time", "Time", "time"),
                Field("venue", "Venue"),
                Field("type", "Session type"),
                Field("first_team", "First team", required=False),
                Field("second_team", "Second team", required=False),
                Field("notes", "Notes", "textarea", required=False),
            ),
            columns=("date", "time", "venue", "type", "first_team", "second_team"),
        ),
        Section(
            name="team", title="Team", model=Player, parse=parse_player_form,
            fetch=store.get_players,
            fields=(
                Field("name", "Name"),
                Field("email", "Email", "email"),
                Field("age", "Age", "number"),
                Field("player_type", "Player type", "select", PLAYER_TYPES),
                Field("role", "Role", "select", PLAYER_ROLES),
                Field("team", "Team"),
            ),
            columns=("name", "team", "role", "player_type", "age", "email"),
        ),
        Section(
            name="sponsors", title="Sponsors", model=Sponsor, parse=parse_sponsor_form,
            fetch=store.get_sponsors,
            fields=(
                Field("name", "Name"),
                Field("website_url", "Website", "url", required=False),
                Field("description", "Description", "textarea", required=False),
            ),
            columns=("name", "website_url", "description"),
        ),
        Section(
            name="committee", title="Committee", model=CommitteeMember, parse=parse_committee_form,
            fetch=store.get_committee,
            fields=(
                Field("name", "Name"),
                Field("position", "Position"),
            ),
            columns=("name", "position"),
        ),
    )
}


def _section_or_404(name: str) -> Section:
    section = SECTIONS.get(name)
    if section is None:
        abort(404)
    return section

def _row_to_form(section: Section, row) -> dict:
    values = {}
    for f in section.fields:
        v = getattr(row, f.name)
        if isinstance(v, date):
            v = v.isoformat()
        values[f.name] = "" if v is None else str(v)
    return values

def _render_section(section: Section, form: Optional[dict] = None, errors: Optional[dict] = None,
                    editing=None, status: int = 200):
    rows = ListSection.load(section.fetch, section.title.lower())
    return render_template(
        "admin/section.html", section=section, sections=SECTIONS, rows=rows,
        form=form or {}, errors=errors or {}, editing=editing,
    ), status


def register_admin_routes(app: Flask) -> None:
    guard = InFlightGuard()
    app.extensions["club_application_guard"] = guard

    @app.get("/admin")
    @admin_required
    def admin_dashboard():
        pending = ListSection.load(lambda: store.select(TeamApplication, eq={"status": "pending"}),
                                   "applications")
        return render_template("admin/dashboard.html", sections=SECTIONS, pending=pending)

    @app.post("/admin/refresh-session")
    @admin_required
    def admin_refresh_session():
        try:
            refresh_session(current_session())
        except NotAuthenticatedError:
            flash("Your session has expired. Please log in again.", "error")
            return redirect(url_for("login"))
        flash("Session refreshed.", "success")
        return redirect(request.referrer or url_for("admin_dashboard"))

    # ----- applications -----
    def render_applications(status: str = "all", code: int = 200):
        if status not in STATUS_FILTERS:
            status = "all"
        section = ListSection.load(store.get_applications, "applications")
        return render_template(
            "admin/applications.html", sections=SECTIONS, section=section,
            applications=filter_by_status(section.items, status),
            counts=status_counts(section.items), status=status, status_filters=STATUS_FILTERS,
            busy=guard.is_busy,
        ), code

    @app.get("/admin/applications")
    @admin_required
    def admin_applications():
        return render_applications(request.args.get("status", "all"))

    @app.post("/admin/applications/<int:aid>/status")
    @admin_required
    def admin_application_status(aid: int):
        new_status = request.form.get("status", "")
        try:
            set_status(guard, aid, new_status)
        except RecordNotFoundError:
            abort(404)
        except (RecordBusyError, InvalidTransitionError) as e:
            flash(e.message, "error")
            return render_applications(code=409)
        except StoreError:
            flash("Failed to update application status.", "error")
            return render_applications(code=500)
        flash(f"Application {new_status} successfully.", "success")
        return redirect(url_for("admin_applications"))

    @app.post("/admin/applications/<int:aid>/delete")
    @admin_required
    def admin_application_delete(aid: int):
        try:
            delete_application(guard, aid)
        except RecordNotFoundError:
            abort(404)
        except RecordBusyError as e:
            flash(e.message, "error")
            return render_applications(code=409)
        except StoreError:
            flash("Failed to delete application.", "error")
            return render_applications(code=500)
        flash("Application deleted successfully.", "success")
        return redirect(url_for("admin_applications"))

    # ----- generic sections -----
    @app.get("/admin/<name>")
    @admin_required
    def admin_section(name: str):
        return _render_section(_section_or_404(name))

    @app.post("/admin/<name>")
    @admin_required
    def admin_create(name: str):
        section = _section_or_404(name)
        form = request.form.to_dict()
        try:
            values = section.parse(request.form)
        except ValidationError as e:
            return _render_section(section, form=form, errors=e.errors, status=400)

        logo_url = None
        try:
            if section.model is Sponsor:
                logo_url = save_logo(request.files.get("logo"))
                values["logo_url"] = logo_url
            store.insert(section.model, values)
        except ValidationError as e:
            return _render_section(section, form=form, errors=e.errors, status=400)
        except StoreError:
            if logo_url:
                delete_logo(logo_url)
            flash(f"Failed to save {section.title.lower()} entry.", "error")
            return _render_section(section, form=form, status=500)
        flash(f"{section.title} entry added.", "success")
        return redirect(url_for("admin_section", name=name))

    @app.get("/admin/<name>/<int:rid>/edit")
    @admin_required
    def admin_edit(name: str, rid: int):
        section = _section_or_404(name)
        row = store.get(section.model, rid)
        if row is None:
            abort(404)
        return _render_section(section, form=_row_to_form(section, row), editing=row)

    @app.post("/admin/<name>/<int:rid>")
    @admin_required
    def admin_update(name: str, rid: int):
        section = _section_or_404(name)
        row = store.get(section.model, rid)
        if row is None:
            abort(404)
        form = request.form.to_dict()
        try:
            values = section.parse(request.form)
        except ValidationError as e:
            return _render_section(section, form=form, errors=e.errors, editing=row, status=400)

        old_logo, new_logo = None, None
        try:
            upload = request.files.get("logo")
            if section.model is Sponsor and upload is not None and upload.filename:
                old_logo = row.logo_url
                new_logo = save_logo(upload)
                values["logo_url"] = new_logo
            store.update(section.model, rid, values)
        except ValidationError as e:
            return _render_section(section, form=form, errors=e.errors, editing=row, status=400)
        except StoreError:
            if new_logo:
                delete_logo(new_logo)
            flash(f"Failed to update {section.title.lower()} entry.", "error")
            return _render_section(section, form=form, editing=row, status=500)
        if old_logo:
            delete_logo(old_logo)
        flash(f"{section.title} entry updated.", "success")
        return redirect(url_for("admin_section", name=name))

    @app.post("/admin/<name>/<int:rid>/delete")
    @admin_required
    def admin_delete(name: str, rid: int):
        section = _section_or_404(name)
        try:
            row = store.delete(section.model, rid)
        except RecordNotFoundError:
            abort(404)
        except StoreError:
            flash(f"Failed to delete {section.title.lower()} entry.", "error")
            return redirect(url_for("admin_section", name=name))
        if section.model is Sponsor:
            delete_logo(row.logo_url)
        flash(f"{section.title} entry deleted.", "success")
        return redirect(url_for("admin_section", name=name))

    # ----- JSON -----
    @app.post("/api/admin/sponsors")
    @admin_required_json
    def api_create_sponsor():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            data = {}
        if not data.get("name") or not data.get("logo_url"):
            return jsonify({"error": "Bad Request - Name and logo URL are required"}), 400
        try:
            s = store.insert(Sponsor, {
                "name": data["name"],
                "website_url": data.get("website_url") or "",
                "logo_url": data["logo_url"],
                "description": data.get("description") or "",
            })
        except StoreError as e:
            return jsonify({"error": f"Database error: {e.message}"}), 500
        return jsonify({"success": True, "sponsor": sponsor_to_dict(s)}), 201
