"""
Store: typed accessors over the EASi schema.

Usage:
    from easi.storage import Store

    store = Store(db.session)
    case = store.fetch_business_case_by_id(case_id)
"""

from easi.storage._base import BaseStore
from easi.storage.accessibility_request import AccessibilityRequestStore
from easi.storage.business_case import BusinessCaseStore
from easi.storage.system_intake import SystemIntakeStore


class Store(SystemIntakeStore, AccessibilityRequestStore, BusinessCaseStore, BaseStore):
    """All entity accessors bound to one session and one clock."""
