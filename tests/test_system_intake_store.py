"""Tests for the system intake accessors on Store."""

import uuid

import pytest

from easi.core.exceptions import ConstraintError, NotFoundError
from easi.models.system_intake import SYSTEM_INTAKE_STATUS_DRAFT, SystemIntake
from easi.testhelpers import new_system_intake, random_eua_id


def test_create_defaults_id_status_and_timestamps(store, fixed_now):
    created = store.create_system_intake(SystemIntake(eua_user_id="ABCD"))

    assert str(uuid.UUID(created.id)) == created.id
    assert created.status == SYSTEM_INTAKE_STATUS_DRAFT
    assert created.created_at == created.updated_at
    assert created.created_at.replace(tzinfo=None) == fixed_now.replace(tzinfo=None)


def test_create_requires_eua_user_id(store):
    with pytest.raises(ConstraintError):
        store.create_system_intake(SystemIntake(project_name="No owner"))


def test_fetch_by_id_round_trip(store):
    created = store.create_system_intake(new_system_intake(project_name="Intake A"))

    fetched = store.fetch_system_intake_by_id(created.id)

    assert fetched.project_name == "Intake A"
    assert fetched.eua_user_id == created.eua_user_id


def test_fetch_unknown_id_raises_not_found(store):
    with pytest.raises(NotFoundError, match="SystemIntake"):
        store.fetch_system_intake_by_id(str(uuid.uuid4()))


def test_fetch_by_eua_id(store):
    eua_id = random_eua_id()
    store.create_system_intake(new_system_intake(eua_user_id=eua_id))
    store.create_system_intake(new_system_intake(eua_user_id=eua_id))
    store.create_system_intake(new_system_intake(eua_user_id=eua_id + "X"))

    assert len(store.fetch_system_intakes_by_eua_id(eua_id)) == 2
    assert store.fetch_system_intakes_by_eua_id("NONE") == []
