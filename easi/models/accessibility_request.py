"""
Accessibility Request model.

Requests are append-only from the store's point of view: created once,
fetched by id or listed, never updated.
"""

from easi.models import db, isoformat


class AccessibilityRequest(db.Model):
    """Accessibility (508) review request for a system intake."""

    __tablename__ = "accessibility_request"

    id = db.Column(db.String(36), primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    intake_id = db.Column(
        db.String(36),
        db.ForeignKey("system_intake.id"),
        nullable=False,
        index=True,
    )
    created_at = db.Column(db.DateTime(timezone=True), nullable=False)
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "intake_id": self.intake_id,
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }

    def __repr__(self):
        return f"<AccessibilityRequest {self.id} {self.name!r}>"
