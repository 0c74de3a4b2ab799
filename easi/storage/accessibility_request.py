"""Accessibility request accessors."""

from __future__ import annotations

import logging

from sqlalchemy import insert, select
from sqlalchemy.exc import SQLAlchemyError

from easi.core.exceptions import NotFoundError, QueryOperation, ValidationError
from easi.models import new_uuid
from easi.models.accessibility_request import AccessibilityRequest

logger = logging.getLogger(__name__)

_RESOURCE = "AccessibilityRequest"


class AccessibilityRequestStore:
    """Mixin providing accessibility request operations on a BaseStore."""

    def create_accessibility_request(self, request: AccessibilityRequest) -> AccessibilityRequest:
        """Insert a new accessibility request and return the stored row.

        Fills in a fresh id when none is supplied, and both timestamps from a
        single clock reading when they are missing. The row is re-read after
        commit so the caller sees exactly what the database holds.

        Raises:
            ConstraintError: intake_id missing or unknown, name missing.
            QueryError:      Any other database failure.
        """
        if not request.id:
            request.id = new_uuid()
        created_at = self._now()
        if request.created_at is None:
            request.created_at = created_at
        if request.updated_at is None:
            request.updated_at = created_at

        stmt = insert(AccessibilityRequest).values(
            id=request.id,
            name=request.name,
            intake_id=request.intake_id,
            created_at=request.created_at,
            updated_at=request.updated_at,
        )
        try:
            self.session.execute(stmt)
            self.session.commit()
        except SQLAlchemyError as exc:
            self._fail_write(exc, QueryOperation.CREATE, _RESOURCE, request.id)

        logger.info("Created accessibility request %s", request.id, extra={"resource_id": request.id})
        return self.fetch_accessibility_request_by_id(request.id)

    def fetch_accessibility_request_by_id(self, request_id: str) -> AccessibilityRequest:
        """Return the accessibility request with the given id.

        Raises:
            NotFoundError: No row matches.
            QueryError:    Any other database failure.
        """
        stmt = select(AccessibilityRequest).where(AccessibilityRequest.id == request_id)
        try:
            request = self.session.execute(stmt).scalar_one_or_none()
        except SQLAlchemyError as exc:
            self._fail_read(exc, _RESOURCE, request_id)

        if request is None:
            logger.info(
                "Accessibility request %s not found", request_id,
                extra={"operation": QueryOperation.FETCH, "resource_id": request_id},
            )
            raise NotFoundError(resource=_RESOURCE, resource_id=request_id)
        return request

    def fetch_accessibility_requests(self, first: int | None = None) -> list[AccessibilityRequest]:
        """Return all accessibility requests, oldest first.

        ``first`` caps the number of rows returned; 0 yields an empty list, as
        does an empty table.

        Raises:
            ValidationError: ``first`` is negative.
            QueryError:      Any database failure.
        """
        if first is not None and first < 0:
            raise ValidationError("first must not be negative", details={"first": first})
        stmt = select(AccessibilityRequest).order_by(
            AccessibilityRequest.created_at, AccessibilityRequest.id,
        )
        if first is not None:
            stmt = stmt.limit(first)
        try:
            return list(self.session.execute(stmt).scalars())
        except SQLAlchemyError as exc:
            self._fail_read(exc, _RESOURCE)
