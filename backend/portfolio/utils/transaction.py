from contextlib import contextmanager
from portfolio.extensions import db

@contextmanager
def transactional():
    """Commit on success, roll back and re-raise on any failure."""
    try:
        yield
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
