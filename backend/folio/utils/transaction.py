from contextlib import contextmanager
from flask import current_app
from folio.extensions import db

@contextmanager
def transactional(label="transaction"):
    """
    One unit of work on the scoped session: commit when the block exits,
    roll back and re-raise on any error. Row locks taken inside are held
    until then.
    """
    try:
        yield db.session
        db.session.commit()
    except Exception as exc:
        db.session.rollback()
        current_app.logger.warning("Rolled back %s: %s", label, exc)
        raise
