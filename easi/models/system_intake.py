"""
System Intake model.

The intake is the parent record every accessibility request and business
case hangs off. Only the columns the rest of the layer reads are mapped.
"""

from easi.models import db, isoformat

# ── Constants ─────────────────────────────────────────────────────────────────

SYSTEM_INTAKE_STATUS_DRAFT = "DRAFT"
SYSTEM_INTAKE_STATUS_SUBMITTED = "SUBMITTED"
SYSTEM_INTAKE_STATUS_ACCEPTED = "ACCEPTED"
SYSTEM_INTAKE_STATUS_APPROVED = "APPROVED"
SYSTEM_INTAKE_STATUS_CLOSED = "CLOSED"

VALID_STATUSES = frozenset({
    SYSTEM_INTAKE_STATUS_DRAFT,
    SYSTEM_INTAKE_STATUS_SUBMITTED,
    SYSTEM_INTAKE_STATUS_ACCEPTED,
    SYSTEM_INTAKE_STATUS_APPROVED,
    SYSTEM_INTAKE_STATUS_CLOSED,
})


class SystemIntake(db.Model):
    """Intake request submitted by an EUA user."""

    __tablename__ = "system_intake"
    __table_args__ = (
        db.Index("ix_system_intake_eua_user_id", "eua_user_id"),
    )

    id = db.Column(db.String(36), primary_key=True)
    eua_user_id = db.Column(db.String(10), nullable=False)
    status = db.Column(
        db.String(20),
        nullable=False,
        default=SYSTEM_INTAKE_STATUS_DRAFT,
        comment="DRAFT | SUBMITTED | ACCEPTED | APPROVED | CLOSED",
    )
    requester = db.Column(db.String(200))
    component = db.Column(db.String(200))
    project_name = db.Column(db.String(200))
    business_owner = db.Column(db.String(200))
    business_need = db.Column(db.Text)

    created_at = db.Column(db.DateTime(timezone=True))
    updated_at = db.Column(db.DateTime(timezone=True))
    submitted_at = db.Column(db.DateTime(timezone=True))

    def to_dict(self):
        return {
            "id": self.id,
            "eua_user_id": self.eua_user_id,
            "status": self.status,
            "requester": self.requester,
            "component": self.component,
            "project_name": self.project_name,
            "business_owner": self.business_owner,
            "business_need": self.business_need,
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
            "submitted_at": isoformat(self.submitted_at),
        }

    def __repr__(self):
        return f"<SystemIntake {self.id} {self.status}>"
