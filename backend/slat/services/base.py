"""
Shared plumbing for service classes.

Every service is constructed with the request's database session and
returns Outcome values. Commits go through Service.commit(), which turns
store failures into an Outcome instead of letting them escape:

- IntegrityError (a unique constraint lost a race against a concurrent
  request) becomes the caller's conflict Outcome when one is given
- any other SQLAlchemyError becomes a 500 carrying the driver message
"""

import re
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from slat.logging_config import get_logger, log_with_context
from slat.responses import Outcome

db_logger = get_logger("db")


def is_blank(value) -> bool:
    """True for None, empty or whitespace-only strings."""
    return value is None or (isinstance(value, str) and not value.strip())


def normalize_email(email: str) -> Optional[str]:
    """
    Normalize an email address for identity matching.

    Lowercases and strips surrounding whitespace, so that A@X.com and
    a@x.com are treated as the same person.
    """
    if not email:
        return None
    return email.strip().lower()


def normalize_matric(matric_no: str) -> Optional[str]:
    """
    Normalize a matric number: trim, collapse inner whitespace, uppercase.

    Examples:
        " f/hd/20/3210001 " → "F/HD/20/3210001"
    """
    if not matric_no:
        return None
    return re.sub(r"\s+", "", matric_no).upper()


class Service:
    """Base class for request-scoped services."""

    channel = "app"

    def __init__(self, db: Session):
        self.db = db
        self.logger = get_logger(self.channel)

    def commit(self, action: str, conflict: Optional[Outcome] = None) -> Optional[Outcome]:
        """
        Commit the unit of work.

        Returns None on success, otherwise the Outcome to hand back to the
        caller. The session is rolled back on failure.
        """
        try:
            self.db.commit()
            return None
        except IntegrityError as e:
            self.db.rollback()
            log_with_context(db_logger, "WARNING",
                "Constraint violation while trying to {}: {}".format(action, str(e.orig)))
            if conflict is not None:
                return conflict
            return Outcome.fail(500, str(e.orig))
        except SQLAlchemyError as e:
            self.db.rollback()
            log_with_context(db_logger, "ERROR",
                "Failed to commit while trying to {}: {}".format(action, str(e)),
                exc_info=True)
            return Outcome.fail(500, str(e))
