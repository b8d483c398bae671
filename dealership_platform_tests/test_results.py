import json

from dealership_platform.common.errors import first_error_message
from dealership_platform.common.results import STATUS_BY_KIND, ErrorKind, Failure, Ok, status_for, to_response


def test_every_error_kind_has_a_status():
    assert set(STATUS_BY_KIND) == set(ErrorKind)
    assert status_for(ErrorKind.VALIDATION) == 400
    assert status_for(ErrorKind.AUTH) == 401
    assert status_for(ErrorKind.FORBIDDEN) == 403
    assert status_for(ErrorKind.NOT_FOUND) == 404
    assert status_for(ErrorKind.CONFLICT) == 409
    assert status_for(ErrorKind.INTERNAL) == 500


def test_failure_response():
    response = to_response(Failure(ErrorKind.CONFLICT, "Vehicle with this plate already exists"))
    assert response.status_code == 409
    assert json.loads(response.body) == {"error": "Vehicle with this plate already exists"}


def test_ok_response():
    response = to_response(Ok({"message": "done"}, 201))
    assert response.status_code == 201
    assert json.loads(response.body) == {"message": "done"}


def test_first_error_message_strips_location_prefix():
    errors = [
        {"loc": ("body", "plate"), "msg": "String should match pattern"},
        {"loc": ("body", "year"), "msg": "Input should be less than or equal to 2030"},
    ]
    assert first_error_message(errors) == "plate: String should match pattern"
    assert first_error_message([]) == "Invalid request"
