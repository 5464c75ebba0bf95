import logging
from contextlib import contextmanager
from docfolio.extensions import db

logger = logging.getLogger(__name__)

@contextmanager
def transactional(session=None):
    """
    Commit the enclosed writes as one unit.

    Any error rolls the unit back and propagates. Row change events for
    the unit are only published once the commit succeeds.
    """
    session = session or db.session
    try:
        yield session
        session.commit()
    except Exception:
        logger.debug("Rolling back content store transaction")
        session.rollback()
        raise
