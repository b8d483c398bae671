"""Controller-level tests for the shared CRUD pattern."""
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from dealership_platform.common.crud import CrudController
from dealership_platform.common.results import ErrorKind, Failure, Ok
from dealership_platform.vehicle_service import db as vehicle_db
from dealership_platform.vehicle_service.controller import vehicle_controller
from dealership_platform.vehicle_service.models import Vehicle
from dealership_platform.vehicle_service.schemas import VehicleCreate, VehicleUpdate

PAYLOAD = {
    "brand": "Fiat",
    "model": "Uno",
    "year": 2010,
    "color": "White",
    "plate": "FIA1T10",
    "price": 20000,
}


@pytest.fixture
def db():
    session = vehicle_db.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def partial_controller():
    return CrudController(
        Vehicle,
        resource="vehicle",
        collection="vehicles",
        create_schema=VehicleCreate,
        update_schema=VehicleUpdate,
        unique_field="plate",
        serialize=Vehicle.to_dict,
        partial_update=True,
    )


def broken_session(exc):
    session = MagicMock()
    session.query.side_effect = exc
    return session


def test_create_returns_created_result(db):
    result = vehicle_controller.create(db, PAYLOAD, created_by=3)
    assert isinstance(result, Ok)
    assert result.status_code == 201
    assert result.body["vehicle"]["plate"] == "FIA1T10"
    assert result.body["vehicle"]["created_by"] == 3


def test_non_object_payload_is_a_validation_failure(db):
    result = vehicle_controller.create(db, ["not", "an", "object"], created_by=3)
    assert isinstance(result, Failure)
    assert result.kind is ErrorKind.VALIDATION


def test_full_update_resets_omitted_defaults(db):
    created = vehicle_controller.create(db, {**PAYLOAD, "status": "sold"}, created_by=3).body["vehicle"]
    assert vehicle_controller.update(db, created["id"], PAYLOAD).status_code == 200
    assert vehicle_controller.get(db, created["id"]).body["vehicle"]["status"] == "available"


def test_partial_update_when_enabled(db, partial_controller):
    created = partial_controller.create(db, PAYLOAD, created_by=3).body["vehicle"]

    result = partial_controller.update(db, created["id"], {"status": "maintenance"})
    assert isinstance(result, Ok)

    fetched = partial_controller.get(db, created["id"]).body["vehicle"]
    assert fetched["status"] == "maintenance"
    assert fetched["color"] == "White"


def test_partial_update_still_validates_supplied_fields(db, partial_controller):
    created = partial_controller.create(db, PAYLOAD, created_by=3).body["vehicle"]
    result = partial_controller.update(db, created["id"], {"plate": "bad"})
    assert result.kind is ErrorKind.VALIDATION


def test_storage_unique_constraint_maps_to_conflict(db, monkeypatch):
    # Simulate a concurrent insert slipping past the pre-check
    vehicle_controller.create(db, PAYLOAD, created_by=3)
    monkeypatch.setattr(vehicle_controller, "_is_duplicate", lambda *args, **kwargs: False)

    result = vehicle_controller.create(db, PAYLOAD, created_by=4)
    assert isinstance(result, Failure)
    assert result.kind is ErrorKind.CONFLICT
    assert vehicle_controller.list(db).body["pagination"]["total"] == 1


def test_commit_integrity_error_is_conflict():
    session = MagicMock()
    session.query.return_value.filter.return_value.first.return_value = None
    session.commit.side_effect = IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))

    result = vehicle_controller.create(session, PAYLOAD, created_by=1)
    assert result.kind is ErrorKind.CONFLICT
    session.rollback.assert_called_once()


@pytest.mark.parametrize("operation", [
    lambda c, s: c.create(s, PAYLOAD, created_by=1),
    lambda c, s: c.list(s),
    lambda c, s: c.get(s, 1),
    lambda c, s: c.update(s, 1, PAYLOAD),
    lambda c, s: c.delete(s, 1),
])
def test_store_errors_become_generic_internal_failures(operation):
    session = broken_session(OperationalError("SELECT", {}, Exception("database is locked at /var/lib/db")))
    result = operation(vehicle_controller, session)
    assert isinstance(result, Failure)
    assert result.kind is ErrorKind.INTERNAL
    assert result.message == "Internal server error"


def test_authorizer_can_deny_update_and_delete(db):
    created = vehicle_controller.create(db, PAYLOAD, created_by=3).body["vehicle"]
    deny = lambda record: Failure(ErrorKind.FORBIDDEN, "nope")

    assert vehicle_controller.update(db, created["id"], PAYLOAD, authorize=deny).status_code == 403
    assert vehicle_controller.delete(db, created["id"], authorize=deny).status_code == 403
    assert vehicle_controller.get(db, created["id"]).status_code == 200


def test_unbounded_limit_when_no_maximum(db, partial_controller):
    result = partial_controller.list(db, page=1, limit=10_000)
    assert isinstance(result, Ok)
    assert result.body["pagination"]["totalPages"] == 0


@pytest.mark.parametrize("page,limit", [
    (10 ** 18, 100),
    (2 ** 31, 2),
    (1, 2 ** 40),
])
def test_out_of_range_paging_is_rejected_before_querying(partial_controller, page, limit):
    session = MagicMock()
    result = partial_controller.list(session, page=page, limit=limit)
    assert isinstance(result, Failure)
    assert result.kind == ErrorKind.VALIDATION
    assert result.status_code == 400
    session.query.assert_not_called()


def test_last_addressable_page_still_lists(db, partial_controller):
    result = partial_controller.list(db, page=2 ** 30, limit=2)
    assert isinstance(result, Ok)
    assert result.body["vehicles"] == []


def test_partial_update_rejects_sub_cent_price(db, partial_controller):
    created = partial_controller.create(db, PAYLOAD).body["vehicle"]
    result = partial_controller.update(db, created["id"], {"price": 20000.125})
    assert isinstance(result, Failure)
    assert result.kind == ErrorKind.VALIDATION
    assert partial_controller.get(db, created["id"]).body["vehicle"]["price"] == 20000
