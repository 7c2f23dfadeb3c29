from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session


@contextmanager
def write_transaction(session: Session) -> Iterator:
    """
    Context manager that commits the session's pending changes when the block
    exits cleanly and rolls them back if it raises, so a failed write never
    leaves a partially applied row behind.
    Usage:
        with write_transaction(db):
            db.add(obj)
    """
    try:
        yield
        session.commit()
    except Exception:
        session.rollback()
        raise
