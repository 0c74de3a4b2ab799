"""
Business Case models: BusinessCase and its EstimatedLifecycleCost lines.

A business case belongs to one system intake and one EUA user; both links
are fixed at creation. The cost lines are owned outright by the case: the
store replaces the whole collection on every update, so lines carry no
identity callers are expected to track.

Cost lines are not unique on (solution, year): two lines with
the same tags are two separate estimates.
"""

from easi.models import db, isoformat

# ── Constants ─────────────────────────────────────────────────────────────────

BUSINESS_CASE_STATUS_OPEN = "OPEN"
BUSINESS_CASE_STATUS_CLOSED = "CLOSED"

LIFECYCLE_COST_SOLUTION_AS_IS = "As Is"
LIFECYCLE_COST_SOLUTION_PREFERRED = "Preferred"
LIFECYCLE_COST_SOLUTION_A = "A"
LIFECYCLE_COST_SOLUTION_B = "B"

LIFECYCLE_COST_PHASE_DEVELOPMENT = "Development"
LIFECYCLE_COST_PHASE_OPERATIONS_AND_MAINTENANCE = "Operations and Maintenance"

LIFECYCLE_COST_YEAR_1 = "1"
LIFECYCLE_COST_YEAR_2 = "2"
LIFECYCLE_COST_YEAR_3 = "3"
LIFECYCLE_COST_YEAR_4 = "4"
LIFECYCLE_COST_YEAR_5 = "5"

VALID_STATUSES = (BUSINESS_CASE_STATUS_OPEN, BUSINESS_CASE_STATUS_CLOSED)
VALID_SOLUTIONS = (
    LIFECYCLE_COST_SOLUTION_AS_IS,
    LIFECYCLE_COST_SOLUTION_PREFERRED,
    LIFECYCLE_COST_SOLUTION_A,
    LIFECYCLE_COST_SOLUTION_B,
)
VALID_PHASES = (
    LIFECYCLE_COST_PHASE_DEVELOPMENT,
    LIFECYCLE_COST_PHASE_OPERATIONS_AND_MAINTENANCE,
)
VALID_YEARS = (
    LIFECYCLE_COST_YEAR_1,
    LIFECYCLE_COST_YEAR_2,
    LIFECYCLE_COST_YEAR_3,
    LIFECYCLE_COST_YEAR_4,
    LIFECYCLE_COST_YEAR_5,
)


def _in_check(column, values):
    quoted = ", ".join(f"'{v}'" for v in values)
    return f"{column} IN ({quoted})"


class BusinessCase(db.Model):
    """
    Financial justification form for a system intake.

    Business rules:
    - system_intake_id and eua_user_id are set on insert and never rewritten.
    - eua_user_id must be non-empty (CHECK constraint, not just NOT NULL).
    - Every other column in UPDATABLE_FIELDS is overwritten on update,
      including with NULL.
    """

    __tablename__ = "business_case"
    __table_args__ = (
        db.CheckConstraint("eua_user_id <> ''", name="ck_business_case_eua_user_id"),
        db.CheckConstraint(_in_check("status", VALID_STATUSES), name="ck_business_case_status"),
        db.Index("ix_business_case_eua_user_id", "eua_user_id"),
    )

    # Scalar columns the update path may rewrite; never id, system_intake_id,
    # eua_user_id or created_at.
    UPDATABLE_FIELDS = (
        "project_name",
        "requester",
        "requester_phone_number",
        "business_owner",
        "business_need",
        "cms_benefit",
        "priority_alignment",
        "success_indicators",
        "as_is_title",
        "as_is_summary",
        "as_is_pros",
        "as_is_cons",
        "as_is_cost_savings",
        "preferred_title",
        "preferred_summary",
        "preferred_acquisition_approach",
        "preferred_pros",
        "preferred_cons",
        "preferred_cost_savings",
        "alternative_a_title",
        "alternative_a_summary",
        "alternative_a_acquisition_approach",
        "alternative_a_pros",
        "alternative_a_cons",
        "alternative_a_cost_savings",
        "status",
        "submitted_at",
        "archived_at",
    )

    id = db.Column(db.String(36), primary_key=True)
    system_intake_id = db.Column(
        db.String(36),
        db.ForeignKey("system_intake.id"),
        nullable=False,
        index=True,
    )
    eua_user_id = db.Column(db.String(10), nullable=False)

    # Requester / business owner
    project_name = db.Column(db.String(200))
    requester = db.Column(db.String(200))
    requester_phone_number = db.Column(db.String(20))
    business_owner = db.Column(db.String(200))

    # Alignment
    business_need = db.Column(db.Text)
    cms_benefit = db.Column(db.Text)
    priority_alignment = db.Column(db.Text)
    success_indicators = db.Column(db.Text)

    # As-is solution
    as_is_title = db.Column(db.String(200))
    as_is_summary = db.Column(db.Text)
    as_is_pros = db.Column(db.Text)
    as_is_cons = db.Column(db.Text)
    as_is_cost_savings = db.Column(db.Text)

    # Preferred solution
    preferred_title = db.Column(db.String(200))
    preferred_summary = db.Column(db.Text)
    preferred_acquisition_approach = db.Column(db.Text)
    preferred_pros = db.Column(db.Text)
    preferred_cons = db.Column(db.Text)
    preferred_cost_savings = db.Column(db.Text)

    # Alternative A
    alternative_a_title = db.Column(db.String(200))
    alternative_a_summary = db.Column(db.Text)
    alternative_a_acquisition_approach = db.Column(db.Text)
    alternative_a_pros = db.Column(db.Text)
    alternative_a_cons = db.Column(db.Text)
    alternative_a_cost_savings = db.Column(db.Text)

    status = db.Column(
        db.String(20),
        nullable=False,
        default=BUSINESS_CASE_STATUS_OPEN,
        comment="OPEN | CLOSED",
    )
    created_at = db.Column(db.DateTime(timezone=True))
    updated_at = db.Column(db.DateTime(timezone=True))
    submitted_at = db.Column(db.DateTime(timezone=True))
    archived_at = db.Column(db.DateTime(timezone=True))

    # Relationships
    lifecycle_cost_lines = db.relationship(
        "EstimatedLifecycleCost",
        back_populates="business_case",
        passive_deletes=True,
    )

    def to_dict(self, include_lines=True):
        result = {"id": self.id, "system_intake_id": self.system_intake_id, "eua_user_id": self.eua_user_id}
        for field in self.UPDATABLE_FIELDS:
            value = getattr(self, field)
            result[field] = isoformat(value) if field.endswith("_at") else value
        result["created_at"] = isoformat(self.created_at)
        result["updated_at"] = isoformat(self.updated_at)
        if include_lines:
            result["lifecycle_cost_lines"] = [line.to_dict() for line in self.lifecycle_cost_lines]
        return result

    def __repr__(self):
        return f"<BusinessCase {self.id} intake={self.system_intake_id} eua={self.eua_user_id}>"


class EstimatedLifecycleCost(db.Model):
    """One (solution, phase, year, cost) estimate owned by a business case."""

    __tablename__ = "lifecycle_cost_line"
    __table_args__ = (
        db.CheckConstraint(_in_check("solution", VALID_SOLUTIONS), name="ck_lifecycle_cost_line_solution"),
        db.CheckConstraint(_in_check("year", VALID_YEARS), name="ck_lifecycle_cost_line_year"),
        db.CheckConstraint(_in_check("phase", VALID_PHASES), name="ck_lifecycle_cost_line_phase"),
    )

    id = db.Column(db.String(36), primary_key=True)
    business_case_id = db.Column(
        db.String(36),
        db.ForeignKey("business_case.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    solution = db.Column(db.String(20), nullable=False, comment="As Is | Preferred | A | B")
    phase = db.Column(db.String(30), comment="Development | Operations and Maintenance")
    year = db.Column(db.String(1), nullable=False, comment="1..5")
    cost = db.Column(db.Integer)
    created_at = db.Column(db.DateTime(timezone=True))
    updated_at = db.Column(db.DateTime(timezone=True))

    business_case = db.relationship("BusinessCase", back_populates="lifecycle_cost_lines")

    def to_dict(self):
        return {
            "id": self.id,
            "business_case_id": self.business_case_id,
            "solution": self.solution,
            "phase": self.phase,
            "year": self.year,
            "cost": self.cost,
        }

    def __repr__(self):
        return f"<EstimatedLifecycleCost {self.solution}/{self.year} {self.cost}>"
