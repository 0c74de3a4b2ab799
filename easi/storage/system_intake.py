"""System intake accessors. Intakes are the parent records cases and requests hang off."""

from __future__ import annotations

import logging

from sqlalchemy import insert, select
from sqlalchemy.exc import SQLAlchemyError

from easi.core.exceptions import NotFoundError, QueryOperation
from easi.models import new_uuid
from easi.models.system_intake import SYSTEM_INTAKE_STATUS_DRAFT, SystemIntake

logger = logging.getLogger(__name__)

_RESOURCE = "SystemIntake"
_COLUMNS = (
    "eua_user_id",
    "status",
    "requester",
    "component",
    "project_name",
    "business_owner",
    "business_need",
    "submitted_at",
)


class SystemIntakeStore:
    """Mixin providing system intake operations on a BaseStore."""

    def create_system_intake(self, intake: SystemIntake) -> SystemIntake:
        """Insert a new intake (id and timestamps defaulted) and return the stored row."""
        if not intake.id:
            intake.id = new_uuid()
        created_at = self._now()
        if intake.created_at is None:
            intake.created_at = created_at
        if intake.updated_at is None:
            intake.updated_at = created_at
        if intake.status is None:
            intake.status = SYSTEM_INTAKE_STATUS_DRAFT

        values = {column: getattr(intake, column) for column in _COLUMNS}
        values.update(id=intake.id, created_at=intake.created_at, updated_at=intake.updated_at)
        try:
            self.session.execute(insert(SystemIntake).values(**values))
            self.session.commit()
        except SQLAlchemyError as exc:
            self._fail_write(exc, QueryOperation.CREATE, _RESOURCE, intake.id)

        logger.info("Created system intake %s", intake.id, extra={"resource_id": intake.id})
        return self.fetch_system_intake_by_id(intake.id)

    def fetch_system_intake_by_id(self, intake_id: str) -> SystemIntake:
        stmt = select(SystemIntake).where(SystemIntake.id == intake_id)
        try:
            intake = self.session.execute(stmt).scalar_one_or_none()
        except SQLAlchemyError as exc:
            self._fail_read(exc, _RESOURCE, intake_id)

        if intake is None:
            logger.info(
                "System intake %s not found", intake_id,
                extra={"operation": QueryOperation.FETCH, "resource_id": intake_id},
            )
            raise NotFoundError(resource=_RESOURCE, resource_id=intake_id)
        return intake

    def fetch_system_intakes_by_eua_id(self, eua_user_id: str) -> list[SystemIntake]:
        stmt = (
            select(SystemIntake)
            .where(SystemIntake.eua_user_id == eua_user_id)
            .order_by(SystemIntake.created_at, SystemIntake.id)
        )
        try:
            return list(self.session.execute(stmt).scalars())
        except SQLAlchemyError as exc:
            self._fail_read(exc, _RESOURCE)
