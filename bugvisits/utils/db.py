# bugvisits/utils/db.py
from contextlib import contextmanager
from datetime import datetime

from sqlalchemy import func, select

from bugvisits.utils.wire import to_utc_naive


@contextmanager
def transaction(session):
    """Commit everything staged inside the block, or roll all of it back."""
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise


def db_now(session) -> datetime:
    """The database's NOW(), as naive UTC."""
    value = session.execute(select(func.now())).scalar()
    if isinstance(value, str):
        # SQLite hands CURRENT_TIMESTAMP back as text on some drivers
        value = datetime.fromisoformat(value)
    return to_utc_naive(value)
