# clubsite/applications.py
"""Membership applications: public submission and admin moderation."""
import logging
import threading
from contextlib import contextmanager
from typing import Dict, Mapping

from . import store
from .exceptions import InvalidTransitionError, RecordBusyError, RecordNotFoundError
from .forms import parse_application_form
from .models import APPLICATION_STATUSES, TeamApplication

logger = logging.getLogger(__name__)

STATUS_FILTERS = ("all",) + APPLICATION_STATUSES

# Accepted and rejected are final.
TRANSITIONS = {
    "pending": ("accepted", "rejected"),
    "accepted": (),
    "rejected": (),
}


class InFlightGuard:
    """Refuses a second action on a record while the first is still running.

    Actions on different record ids do not block each other.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._busy = set()

    @contextmanager
    def hold(self, record_id: int):
        with self._lock:
            if record_id in self._busy:
                raise RecordBusyError("This application is already being processed.", details={"id": record_id})
            self._busy.add(record_id)
        try:
            yield
        finally:
            with self._lock:
                self._busy.discard(record_id)

    def is_busy(self, record_id: int) -> bool:
        with self._lock:
            return record_id in self._busy


def submit_application(form: Mapping[str, str]) -> TeamApplication:
    """Validate and insert a public application; status starts as pending."""
    values = parse_application_form(form)
    values["status"] = "pending"
    application = store.insert(TeamApplication, values)
    logger.info(f"Application received id={application.id}")
    return application

def can_transition(current: str, new: str) -> bool:
    return new in TRANSITIONS.get(current, ())

def set_status(guard: InFlightGuard, application_id: int, new_status: str) -> TeamApplication:
    with guard.hold(application_id):
        application = store.get(TeamApplication, application_id)
        if application is None:
            raise RecordNotFoundError("Application not found", details={"id": application_id})
        if not can_transition(application.status, new_status):
            raise InvalidTransitionError(
                f"Cannot move an application from {application.status} to {new_status}",
                details={"id": application_id},
            )
        return store.update(TeamApplication, application_id, {"status": new_status})

def delete_application(guard: InFlightGuard, application_id: int) -> None:
    with guard.hold(application_id):
        store.delete(TeamApplication, application_id)

def filter_by_status(applications, status: str):
    if status == "all":
        return list(applications)
    return [a for a in applications if a.status == status]

def status_counts(applications) -> Dict[str, int]:
    counts = {s: 0 for s in APPLICATION_STATUSES}
    for a in applications:
        counts[a.status or "pending"] += 1
    return counts
