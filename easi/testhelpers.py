"""
Factories for building unsaved EASi entities in tests.

Every factory returns a transient model instance with plausible values;
tests override the fields they care about before handing it to the Store.
"""

import random
import string

from easi.models.business_case import (
    LIFECYCLE_COST_PHASE_DEVELOPMENT,
    LIFECYCLE_COST_SOLUTION_AS_IS,
    LIFECYCLE_COST_SOLUTION_PREFERRED,
    LIFECYCLE_COST_YEAR_1,
    BusinessCase,
    EstimatedLifecycleCost,
)
from easi.models.system_intake import SYSTEM_INTAKE_STATUS_DRAFT, SystemIntake


def random_eua_id():
    """Return a random 4-character EUA user id (e.g. "X7QA")."""
    return "".join(random.choices(string.ascii_uppercase + string.digits, k=4))


def new_system_intake(**overrides):
    fields = {
        "eua_user_id": random_eua_id(),
        "status": SYSTEM_INTAKE_STATUS_DRAFT,
        "requester": "Test Requester",
        "component": "OIT",
        "project_name": "Test Project",
        "business_owner": "Test Owner",
        "business_need": "A business need",
    }
    fields.update(overrides)
    return SystemIntake(**fields)


def new_estimated_lifecycle_cost(solution=None, phase=None, year=None, cost=None):
    """Build one cost line; unspecified tags default to As Is / Development / year 1 / 100."""
    return EstimatedLifecycleCost(
        solution=solution or LIFECYCLE_COST_SOLUTION_AS_IS,
        phase=phase or LIFECYCLE_COST_PHASE_DEVELOPMENT,
        year=year or LIFECYCLE_COST_YEAR_1,
        cost=100 if cost is None else cost,
    )


def new_business_case(**overrides):
    """Build a business case with two cost lines (As Is and Preferred, year 1)."""
    fields = {
        "eua_user_id": random_eua_id(),
        "project_name": "Test Project",
        "requester": "Test Requester",
        "requester_phone_number": "5555555555",
        "business_owner": "Test Owner",
        "business_need": "A business need",
        "cms_benefit": "CMS benefit",
        "priority_alignment": "Priority alignment",
        "success_indicators": "Success indicators",
        "as_is_title": "As is title",
        "as_is_summary": "As is summary",
        "preferred_title": "Preferred title",
        "preferred_summary": "Preferred summary",
        "lifecycle_cost_lines": [
            new_estimated_lifecycle_cost(),
            new_estimated_lifecycle_cost(solution=LIFECYCLE_COST_SOLUTION_PREFERRED),
        ],
    }
    fields.update(overrides)
    return BusinessCase(**fields)
