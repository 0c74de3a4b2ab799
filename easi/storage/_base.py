"""Shared plumbing for the Store mixins: injected session/clock and error translation."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from easi.core.exceptions import ConstraintError, QueryError, QueryOperation
from easi.models import utcnow

logger = logging.getLogger(__name__)


class BaseStore:
    """Holds the database session and clock every accessor works against.

    Args:
        session: SQLAlchemy session (``db.session`` inside the app).
        clock:   Zero-argument callable returning an aware datetime.
                 Defaults to UTC now; tests pass a fixed clock.
    """

    def __init__(self, session, clock: Callable[[], datetime] | None = None) -> None:
        self.session = session
        self.clock = clock or utcnow

    def _now(self) -> datetime:
        return self.clock()

    def _fail_read(self, exc: SQLAlchemyError, resource: str, resource_id=None):
        """Roll back a failed SELECT and raise it as a QueryError."""
        self.session.rollback()
        logger.error(
            "Failed to fetch %s: %s", resource, exc,
            extra={"operation": QueryOperation.FETCH, "resource_id": resource_id},
        )
        raise QueryError(QueryOperation.FETCH, resource, resource_id, cause=exc) from exc

    def _fail_write(self, exc: SQLAlchemyError, operation: str, resource: str, resource_id=None):
        """Roll back a failed write transaction and raise the matching error kind.

        IntegrityError → ConstraintError carrying the engine's message.
        Anything else  → QueryError.
        """
        self.session.rollback()
        if isinstance(exc, IntegrityError):
            logger.error(
                "Constraint violation on %s %s: %s", operation.lower(), resource, exc.orig,
                extra={"operation": operation, "resource_id": resource_id},
            )
            raise ConstraintError(str(exc.orig), cause=exc) from exc
        logger.error(
            "Failed to %s %s: %s", operation.lower(), resource, exc,
            extra={"operation": operation, "resource_id": resource_id},
        )
        raise QueryError(operation, resource, resource_id, cause=exc) from exc
