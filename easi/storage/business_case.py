"""Business case accessors.

Writes are explicit transactional scripts on the injected session:

    create:  INSERT case → bulk INSERT cost lines → COMMIT
    update:  UPDATE case → DELETE its cost lines → bulk INSERT new lines → COMMIT

Any failing step rolls back everything before it, so a reader never sees
a case with a half-replaced set of cost lines.
"""

from __future__ import annotations

import logging
from collections import namedtuple
from datetime import datetime

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from easi.core.exceptions import BusinessCaseNotFoundError, NotFoundError, QueryOperation
from easi.models import new_uuid
from easi.models.business_case import (
    BUSINESS_CASE_STATUS_OPEN,
    BusinessCase,
    EstimatedLifecycleCost,
)

logger = logging.getLogger(__name__)

_RESOURCE = "BusinessCase"

# Plain values read off a cost line before its ORM state is dropped
_CostLine = namedtuple("_CostLine", "solution phase year cost")


def _select_with_lines():
    return (
        select(BusinessCase)
        .options(selectinload(BusinessCase.lifecycle_cost_lines))
        .execution_options(populate_existing=True)
    )


class BusinessCaseStore:
    """Mixin providing business case operations on a BaseStore."""

    def _insert_lifecycle_costs(self, business_case_id: str, lines, now: datetime) -> None:
        rows = [
            {
                "id": new_uuid(),
                "business_case_id": business_case_id,
                "solution": line.solution,
                "phase": line.phase,
                "year": line.year,
                "cost": line.cost,
                "created_at": now,
                "updated_at": now,
            }
            for line in lines
        ]
        if rows:
            self.session.execute(insert(EstimatedLifecycleCost), rows)

    def create_business_case(self, business_case: BusinessCase) -> BusinessCase:
        """Insert a business case together with its cost lines.

        Both the case row and all of its lines are written in one
        transaction. A missing or unknown system_intake_id, or a missing or
        empty eua_user_id, aborts the whole thing.

        Returns:
            The stored case, re-read with its cost lines.

        Raises:
            ConstraintError: FK / NOT NULL / CHECK violation (engine message).
            QueryError:      Any other database failure.
        """
        if not business_case.id:
            business_case.id = new_uuid()
        now = self._now()
        if business_case.created_at is None:
            business_case.created_at = now
        business_case.updated_at = now

        values = {field: getattr(business_case, field) for field in BusinessCase.UPDATABLE_FIELDS}
        if values["status"] is None:
            values["status"] = BUSINESS_CASE_STATUS_OPEN
        values.update(
            id=business_case.id,
            system_intake_id=business_case.system_intake_id,
            eua_user_id=business_case.eua_user_id,
            created_at=business_case.created_at,
            updated_at=business_case.updated_at,
        )

        try:
            self.session.execute(insert(BusinessCase).values(**values))
            self._insert_lifecycle_costs(business_case.id, business_case.lifecycle_cost_lines, now)
            self.session.commit()
        except SQLAlchemyError as exc:
            self._fail_write(exc, QueryOperation.CREATE, _RESOURCE, business_case.id)

        logger.info(
            "Created business case %s with %d cost lines",
            business_case.id, len(business_case.lifecycle_cost_lines),
            extra={"resource_id": business_case.id, "eua_user_id": business_case.eua_user_id},
        )
        return self.fetch_business_case_by_id(business_case.id)

    def fetch_business_case_by_id(self, business_case_id: str) -> BusinessCase:
        """Return the business case with its cost lines.

        Raises:
            NotFoundError: No row matches.
            QueryError:    Any other database failure.
        """
        stmt = _select_with_lines().where(BusinessCase.id == business_case_id)
        try:
            business_case = self.session.execute(stmt).scalar_one_or_none()
        except SQLAlchemyError as exc:
            self._fail_read(exc, _RESOURCE, business_case_id)

        if business_case is None:
            logger.info(
                "Business case %s not found", business_case_id,
                extra={"operation": QueryOperation.FETCH, "resource_id": business_case_id},
            )
            raise NotFoundError(resource=_RESOURCE, resource_id=business_case_id)
        return business_case

    def fetch_business_cases_by_eua_id(self, eua_user_id: str) -> list[BusinessCase]:
        """Return every business case owned by the user, each with its cost lines."""
        stmt = (
            _select_with_lines()
            .where(BusinessCase.eua_user_id == eua_user_id)
            .order_by(BusinessCase.created_at, BusinessCase.id)
        )
        try:
            return list(self.session.execute(stmt).scalars())
        except SQLAlchemyError as exc:
            self._fail_read(exc, _RESOURCE)

    def _detach_for_update(self, business_case: BusinessCase) -> None:
        """Drop the ORM state an attached case carries into the session.

        A case that was fetched and then edited is still tracked: its dirty
        columns, its new cost lines (pending via cascade) and the old lines
        orphaned by a replaced collection would otherwise be flushed by the
        ORM on top of the update script.
        """
        if business_case in self.session:
            self.session.expunge(business_case)
        for obj in list(self.session.new):
            if isinstance(obj, EstimatedLifecycleCost):
                self.session.expunge(obj)
        for obj in list(self.session.dirty):
            if isinstance(obj, EstimatedLifecycleCost):
                self.session.expire(obj)

    def update_business_case(self, business_case: BusinessCase) -> BusinessCase:
        """Overwrite a business case and replace its cost lines.

        Every column in BusinessCase.UPDATABLE_FIELDS is written from the
        supplied value, NULLs included; status is kept when none is given.
        system_intake_id and eua_user_id on the input are ignored, also when
        the input is a fetched case edited in place.

        The existing cost lines are all deleted and the supplied ones
        inserted, so N supplied lines means N stored lines.

        Raises:
            BusinessCaseNotFoundError: No row has the given id.
            ConstraintError:           A new cost line violates a constraint.
            QueryError:                Any other database failure.
        """
        with self.session.no_autoflush:
            business_case_id = business_case.id
            values = {field: getattr(business_case, field) for field in BusinessCase.UPDATABLE_FIELDS}
            lines = [
                _CostLine(line.solution, line.phase, line.year, line.cost)
                for line in business_case.lifecycle_cost_lines
            ]
        self._detach_for_update(business_case)

        now = self._now()
        if values["status"] is None:
            del values["status"]
        values["updated_at"] = now

        stmt = (
            update(BusinessCase)
            .where(BusinessCase.id == business_case_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        try:
            result = self.session.execute(stmt)
            if result.rowcount == 0:
                self.session.rollback()
                logger.warning(
                    "Business case %s not found for update", business_case_id,
                    extra={"operation": QueryOperation.UPDATE, "resource_id": business_case_id},
                )
                raise BusinessCaseNotFoundError(business_case_id)

            self.session.execute(
                delete(EstimatedLifecycleCost).where(
                    EstimatedLifecycleCost.business_case_id == business_case_id
                ).execution_options(synchronize_session=False)
            )
            self._insert_lifecycle_costs(business_case_id, lines, now)
            self.session.commit()
        except SQLAlchemyError as exc:
            self._fail_write(exc, QueryOperation.UPDATE, _RESOURCE, business_case_id)

        logger.info(
            "Updated business case %s with %d cost lines",
            business_case_id, len(lines),
            extra={"resource_id": business_case_id},
        )
        return self.fetch_business_case_by_id(business_case_id)
