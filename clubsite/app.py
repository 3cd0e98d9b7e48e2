# clubsite/app.py
import logging
import os
from datetime import date
from typing import Mapping, Optional

from flask import (
    Flask, Response, flash, redirect, render_template, request,
    send_from_directory, url_for,
)
from flask_cors import CORS

from . import store
from .admin import register_admin_routes
from .applications import submit_application
from .auth import current_session, load_session, sign_in, sign_out
from .config import Config
from .exceptions import NotAuthenticatedError, StoreError, ValidationError
from .fixtures import ALL, RESULT_FILTERS, FixturesViewModel
from .logging_utils import setup_logging
from .models import db
from .viewmodels import ListSection, committee_tree, group_players, position_description

logger = logging.getLogger(__name__)

SITEMAP_PAGES = (
    ("index", "weekly", "1.0"),
    ("about", "monthly", "0.8"),
    ("fixtures", "weekly", "0.9"),
    ("practices", "weekly", "0.9"),
    ("players", "monthly", "0.8"),
    ("committee", "monthly", "0.7"),
    ("contact", "monthly", "0.7"),
)


def create_app(overrides: Optional[Mapping] = None) -> Flask:
    # App + DB setup
    app = Flask(__name__)
    app.config.from_mapping(Config().as_dict())
    if overrides:
        app.config.from_mapping(overrides)

    # Default to instance/club.db and instance/uploads
    os.makedirs(app.instance_path, exist_ok=True)
    if not app.config.get("SQLALCHEMY_DATABASE_URI"):
        app.config["SQLALCHEMY_DATABASE_URI"] = "sqlite:///" + os.path.join(app.instance_path, "club.db")
    if not app.config.get("UPLOAD_FOLDER"):
        app.config["UPLOAD_FOLDER"] = os.path.join(app.instance_path, "uploads")
    os.makedirs(app.config["UPLOAD_FOLDER"], exist_ok=True)

    setup_logging("clubsite", log_level=app.config["LOG_LEVEL"], log_dir=app.config.get("LOG_DIR"))

    CORS(app, resources={r"/api/*": {"origins": "*"}})
    db.init_app(app)
    with app.app_context():
        db.create_all()

    app.before_request(load_session)

    @app.context_processor
    def inject_globals():
        return {
            "club_name": app.config["CLUB_NAME"],
            "club_session": current_session(),
        }

    _register_public_routes(app)
    register_admin_routes(app)

    @app.errorhandler(404)
    def not_found(e):
        return render_template("error.html", title="Page not found",
                               message="The page you were looking for does not exist."), 404

    @app.errorhandler(413)
    def too_large(e):
        return render_template("error.html", title="Upload too large",
                               message="The uploaded file is larger than the site accepts."), 413

    @app.errorhandler(StoreError)
    def store_unavailable(e):
        logger.error(f"Unhandled store error on {request.path}: {e}")
        return render_template("error.html", title="Something went wrong",
                               message="We could not reach the club database. Please try again."), 503

    logger.info(f"App created db={app.config['SQLALCHEMY_DATABASE_URI']}")
    return app


def _register_public_routes(app: Flask) -> None:

    @app.get("/")
    def index():
        today = date.today()
        return render_template(
            "index.html",
            matches=ListSection.load(lambda: store.get_upcoming_matches(today), "matches"),
            practices=ListSection.load(lambda: store.get_upcoming_practices(today), "practices"),
            sponsors=ListSection.load(store.get_sponsors, "sponsors"),
        )

    @app.get("/about")
    def about():
        return render_template("about.html")

    @app.get("/fixtures")
    def fixtures():
        vm = FixturesViewModel(page_size=app.config["FIXTURES_PAGE_SIZE"])
        vm.load(store.get_all_matches)

        result = request.args.get("result", ALL)
        vm.set_result_filter(result if result in RESULT_FILTERS else ALL)
        vm.set_team_filter(request.args.get("team") or ALL)

        # Page links only offer in-range values; clamp hand-typed ones.
        page = request.args.get("page", 1, type=int)
        if vm.total_pages:
            vm.paginate(min(max(page, 1), vm.total_pages))

        return render_template("fixtures.html", vm=vm, result_filters=RESULT_FILTERS)

    @app.get("/practices")
    def practices():
        return render_template("practices.html",
                               practices=ListSection.load(store.get_all_practices, "practices"))

    @app.get("/players")
    def players():
        section = ListSection.load(store.get_players, "players")
        return render_template("players.html", section=section, rosters=group_players(section.items))

    @app.get("/committee")
    def committee():
        section = ListSection.load(store.get_committee, "committee members")
        return render_template("committee.html", section=section,
                               tree=committee_tree(section.items),
                               describe=position_description)

    @app.route("/contact", methods=["GET", "POST"])
    def contact():
        form, errors = {}, {}
        if request.method == "POST":
            form = request.form.to_dict()
            try:
                submit_application(request.form)
            except ValidationError as e:
                errors = e.errors
                return render_template("contact.html", form=form, errors=errors), 400
            except StoreError:
                flash("Something went wrong. Please try again later.", "error")
                return render_template("contact.html", form=form, errors=errors), 500
            flash("Thank you for your interest! Your application has been received.", "success")
            return redirect(url_for("contact"))
        return render_template("contact.html", form=form, errors=errors)

    @app.route("/login", methods=["GET", "POST"])
    def login():
        if current_session().is_authenticated:
            return redirect(url_for("admin_dashboard"))
        error = None
        if request.method == "POST":
            try:
                sign_in(request.form.get("email", ""), request.form.get("password", ""))
            except NotAuthenticatedError as e:
                error = e.message
                return render_template("login.html", error=error, email=request.form.get("email", "")), 401
            return redirect(_safe_next(request.args.get("next")))
        return render_template("login.html", error=error, email="")

    @app.post("/logout")
    def logout():
        sign_out()
        flash("You have been signed out.", "success")
        return redirect(url_for("index"))

    @app.get("/not-admin")
    def not_admin():
        return render_template("not_admin.html"), 403

    @app.get("/uploads/<name>")
    def uploaded_file(name: str):
        return send_from_directory(app.config["UPLOAD_FOLDER"], name)

    @app.get("/sitemap.xml")
    def sitemap():
        base = app.config["SITE_URL"].rstrip("/")
        today = date.today().isoformat()
        xml = render_template("sitemap.xml", base=base, today=today,
                              pages=[(url_for(ep), freq, prio) for ep, freq, prio in SITEMAP_PAGES])
        return Response(xml, mimetype="application/xml")


def _safe_next(target: Optional[str]) -> str:
    # Local paths only.
    if target and target.startswith("/") and not target.startswith("//"):
        return target
    return url_for("admin_dashboard")


# Run
if __name__ == "__main__":
    create_app().run(debug=True, host="127.0.0.1", port=5000)
