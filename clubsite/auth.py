# clubsite/auth.py
"""
Session handling for the back office.

A `SessionContext` is built from the signed cookie session at the start of
every request (`load_session`) and stored on `flask.g`. Views and helpers
receive it explicitly instead of poking at `flask.session` themselves.

Sign-in, sign-out and refresh publish on the `session_changed` blinker
signal; anything that needs to react registers with
`session_changed.connect(callback)`.

The admin check here only decides which page to render. Writes to the
store go through the same check again on the JSON endpoint.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import wraps
from typing import Optional

from blinker import Namespace
from flask import g, jsonify, redirect, request, session, url_for
from werkzeug.security import check_password_hash, generate_password_hash

from . import store
from .exceptions import NotAuthenticatedError, NotAuthorizedError
from .models import User

logger = logging.getLogger(__name__)

_signals = Namespace()
session_changed = _signals.signal("session-changed")

SESSION_KEYS = ("user_id", "email", "is_admin")


@dataclass(frozen=True)
class SessionContext:
    user_id: Optional[int] = None
    email: Optional[str] = None
    is_admin: bool = False

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    def require_admin(self) -> None:
        if not self.is_authenticated:
            raise NotAuthenticatedError("Unauthorized - Not logged in")
        if not self.is_admin:
            raise NotAuthorizedError("Forbidden - Admin access required", details={"user_id": self.user_id})


ANONYMOUS = SessionContext()


def _from_user(user: User) -> SessionContext:
    return SessionContext(user_id=user.id, email=user.email, is_admin=bool(user.is_admin))

def _store_in_cookie(ctx: SessionContext) -> None:
    session["user_id"] = ctx.user_id
    session["email"] = ctx.email
    session["is_admin"] = ctx.is_admin

def load_session() -> None:
    """`before_request` hook: expose the caller's session as `g.club_session`.

    Returns None; Flask would send any other return value as the response.
    """
    if session.get("user_id") is None:
        ctx = ANONYMOUS
    else:
        ctx = SessionContext(
            user_id=session["user_id"],
            email=session.get("email"),
            is_admin=bool(session.get("is_admin", False)),
        )
    g.club_session = ctx

def current_session() -> SessionContext:
    return getattr(g, "club_session", ANONYMOUS)

def hash_password(password: str) -> str:
    return generate_password_hash(password)

def sign_in(email: str, password: str) -> SessionContext:
    email = (email or "").strip().lower()
    users = store.select(User, eq={"email": email}, limit=1)
    user = users[0] if users else None
    if user is None or not check_password_hash(user.password_hash, password or ""):
        logger.warning(f"Failed sign-in for {email!r}")
        raise NotAuthenticatedError("Invalid email or password.")

    ctx = _from_user(user)
    session.clear()
    _store_in_cookie(ctx)
    g.club_session = ctx
    logger.info(f"Signed in user_id={ctx.user_id} admin={ctx.is_admin}")
    session_changed.send("sign_in", session=ctx)
    return ctx

def sign_out() -> None:
    previous = current_session()
    for k in SESSION_KEYS:
        session.pop(k, None)
    g.club_session = ANONYMOUS
    logger.info(f"Signed out user_id={previous.user_id}")
    session_changed.send("sign_out", session=ANONYMOUS)

def refresh_session(ctx: SessionContext) -> SessionContext:
    """Re-read the user row so a changed admin flag takes effect."""
    if not ctx.is_authenticated:
        raise NotAuthenticatedError("Auth session missing")
    user = store.get(User, ctx.user_id)
    if user is None:
        sign_out()
        raise NotAuthenticatedError("Auth session missing")
    fresh = _from_user(user)
    _store_in_cookie(fresh)
    g.club_session = fresh
    session_changed.send("refresh", session=fresh)
    return fresh

# Decorators
def admin_required(view):
    """Page guard: no session -> /login, non-admin -> /not-admin."""
    @wraps(view)
    def wrapped(*args, **kwargs):
        ctx = current_session()
        try:
            ctx.require_admin()
        except NotAuthorizedError:
            return redirect(url_for("not_admin"))
        except NotAuthenticatedError:
            return redirect(url_for("login", next=request.full_path.rstrip("?")))
        return view(*args, **kwargs)
    return wrapped

def admin_required_json(view):
    """JSON guard: 401 without a session, 403 without the admin flag."""
    @wraps(view)
    def wrapped(*args, **kwargs):
        ctx = current_session()
        try:
            ctx.require_admin()
        except NotAuthorizedError as e:
            return jsonify({"error": e.message}), 403
        except NotAuthenticatedError as e:
            return jsonify({"error": e.message}), 401
        return view(*args, **kwargs)
    return wrapped
