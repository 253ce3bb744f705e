"""Error kinds shared by the stores and use cases.

Stores raise these instead of leaking driver exceptions; use cases pass them
through untouched and ``main.py`` turns them into HTTP status codes.
"""
import logging
from contextlib import contextmanager
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class DomainError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(DomainError):
    status_code = 404


class ConstraintViolation(DomainError):
    """A foreign-key, unique or check rule of the schema was broken."""
    status_code = 400


class Forbidden(DomainError):
    status_code = 403


class InvalidInput(DomainError):
    status_code = 400


@contextmanager
def integrity_errors(message: Optional[str] = None):
    """Re-raise IntegrityError from the enclosed statements as ConstraintViolation.

    The session is left as-is; rolling back is the job of the enclosing
    ``transaction()`` scope.
    """
    try:
        yield
    except IntegrityError as e:
        detail = str(getattr(e, "orig", e))
        logger.debug("integrity error: %s", detail)
        raise ConstraintViolation(message or f"Constraint violation: {detail}") from e


def flush(db: Session, message: Optional[str] = None) -> None:
    with integrity_errors(message):
        db.flush()
