from contextlib import contextmanager
from typing import Callable, Iterator

from sqlalchemy.orm import Session

from dashboard.utils.log import get_logger

log = get_logger("session")


@contextmanager
def checkout_session(session_factory: Callable[[], Session]) -> Iterator[Session]:
    """
    Acquire a session from `session_factory` and release it on every exit path,
    including validation early-returns and database errors.
    Usage:
        with checkout_session(SessionLocal) as db:
            ... DB work ...
    """
    db = session_factory()
    log.debug("session acquired")
    try:
        yield db
    finally:
        db.close()
        log.debug("session released")


@contextmanager
def smart_transaction(session: Session) -> Iterator:
    """
    Context manager that begins a transaction on the given Session.
    If a transaction is already active, start a nested SAVEPOINT (begin_nested).
    Otherwise start a normal transaction (begin).
    Commits on success, rolls back and re-raises on error.
    """
    if session.in_transaction():
        cm = session.begin_nested()
    else:
        cm = session.begin()
    with cm:
        yield
