# clubsite/store.py
"""Table access for the club site.

Every page reads through `select` and every admin form writes through
`insert` / `update` / `delete`. SQLAlchemy failures are translated into
`StoreReadError` / `StoreWriteError` here so callers never see a driver
exception, and a failed write leaves the session rolled back.
"""
import logging
from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from .exceptions import RecordNotFoundError, StoreReadError, StoreWriteError
from .models import (
    db, CommitteeMember, Match, Player, Practice, Sponsor, TeamApplication,
)

logger = logging.getLogger(__name__)

UPCOMING_MATCHES_LIMIT   = 6
UPCOMING_PRACTICES_LIMIT = 3


def _column(model, name: str):
    col = getattr(model, name, None)
    if col is None:
        raise ValueError(f"{model.__tablename__} has no column {name!r}")
    return col

# Reads
def select(
    model,
    eq: Optional[Dict[str, Any]] = None,
    gte: Optional[Dict[str, Any]] = None,
    lte: Optional[Dict[str, Any]] = None,
    order_by: Optional[str] = None,
    descending: bool = False,
    limit: Optional[int] = None,
) -> List[Any]:
    """Run a read query against one table and return the rows as a list."""
    q = model.query
    for name, value in (eq or {}).items():
        q = q.filter(_column(model, name) == value)
    for name, value in (gte or {}).items():
        q = q.filter(_column(model, name) >= value)
    for name, value in (lte or {}).items():
        q = q.filter(_column(model, name) <= value)
    if order_by:
        col = _column(model, order_by)
        q = q.order_by(col.desc() if descending else col.asc(), model.id.asc())
    if limit:
        q = q.limit(limit)

    try:
        return q.all()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Error reading {model.__tablename__}: {e}")
        raise StoreReadError(f"Failed to load {model.__tablename__}", details={"table": model.__tablename__}) from e

def get(model, record_id: int):
    try:
        return db.session.get(model, record_id)
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Error reading {model.__tablename__} id={record_id}: {e}")
        raise StoreReadError(f"Failed to load {model.__tablename__}", details={"id": record_id}) from e

# Writes (committed before the caller reports success)
def insert(model, values: Dict[str, Any]):
    row = model(**values)
    try:
        db.session.add(row)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Error inserting into {model.__tablename__}: {e}")
        raise StoreWriteError(f"Failed to save {model.__tablename__}", details={"table": model.__tablename__}) from e
    logger.info(f"Inserted {row!r}")
    return row

def update(model, record_id: int, values: Dict[str, Any]):
    row = get(model, record_id)
    if row is None:
        raise RecordNotFoundError(f"{model.__tablename__} row not found", details={"id": record_id})
    try:
        for name, value in values.items():
            _column(model, name)
            setattr(row, name, value)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Error updating {model.__tablename__} id={record_id}: {e}")
        raise StoreWriteError(f"Failed to update {model.__tablename__}", details={"id": record_id}) from e
    logger.info(f"Updated {row!r}")
    return row

def delete(model, record_id: int):
    row = get(model, record_id)
    if row is None:
        raise RecordNotFoundError(f"{model.__tablename__} row not found", details={"id": record_id})
    try:
        db.session.delete(row)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Error deleting {model.__tablename__} id={record_id}: {e}")
        raise StoreWriteError(f"Failed to delete {model.__tablename__}", details={"id": record_id}) from e
    logger.info(f"Deleted {model.__tablename__} id={record_id}")
    return row

# Page queries
def get_all_matches() -> List[Match]:
    return select(Match, order_by="date")

def get_upcoming_matches(today: Optional[date] = None) -> List[Match]:
    return select(Match, gte={"date": today or date.today()}, order_by="date", limit=UPCOMING_MATCHES_LIMIT)

def get_all_practices() -> List[Practice]:
    return select(Practice, order_by="date")

def get_upcoming_practices(today: Optional[date] = None) -> List[Practice]:
    return select(Practice, gte={"date": today or date.today()}, order_by="date", limit=UPCOMING_PRACTICES_LIMIT)

def get_players() -> List[Player]:
    return select(Player, order_by="name")

def get_committee() -> List[CommitteeMember]:
    return select(CommitteeMember, order_by="id")

def get_sponsors() -> List[Sponsor]:
    return select(Sponsor, order_by="name")

def get_applications() -> List[TeamApplication]:
    return select(TeamApplication, order_by="created_at", descending=True)
